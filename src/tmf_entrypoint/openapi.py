"""OpenAPI specification loader."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import httpx
import yaml


logger = logging.getLogger(__name__)


class SpecificationError(Exception):
    pass


class _JsonCompatibleLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as their source text, as JSON would."""


_JsonCompatibleLoader.add_constructor(
    "tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_scalar
)


class SpecificationLoader:
    """Loads an OpenAPI document from a file or URL and caches the parsed result.

    ``get_specification`` is the zero-argument accessor handed to the
    entrypoint responder. Loader failures propagate to the caller.
    """

    def __init__(self, source: str, cache_seconds: int = 3600) -> None:
        self.source = source
        self.cache_seconds = cache_seconds
        self._cache: Optional[Tuple[float, Dict[str, Any]]] = None

    def get_specification(self) -> Optional[Dict[str, Any]]:
        cached = self._cache
        if cached and time.time() - cached[0] < self.cache_seconds:
            return cached[1]

        spec = self.load()
        if spec is not None:
            self._cache = (time.time(), spec)
        return spec

    def invalidate(self) -> None:
        self._cache = None

    def load(self) -> Optional[Dict[str, Any]]:
        if self.source.startswith(("http://", "https://")):
            return self._load_url(self.source)
        return self._load_file(Path(self.source))

    def _load_url(self, url: str) -> Optional[Dict[str, Any]]:
        try:
            with httpx.Client(timeout=30) as client:
                response = client.get(url)
        except httpx.HTTPError as exc:
            raise SpecificationError(f"Failed to fetch OpenAPI spec {url}: {exc}") from exc

        if response.status_code != 200:
            logger.warning("Failed to fetch OpenAPI spec: %s (%s)", url, response.status_code)
            return None
        return self._parse(response.text, _is_yaml(url, response.headers.get("content-type")))

    def _load_file(self, path: Path) -> Optional[Dict[str, Any]]:
        if not path.is_file():
            raise SpecificationError(f"OpenAPI spec not found: {path}")
        text = path.read_text(encoding="utf-8")
        logger.debug("Loaded OpenAPI spec from %s (%s bytes)", path, len(text))
        return self._parse(text, _is_yaml(str(path)))

    def _parse(self, text: str, as_yaml: bool) -> Optional[Dict[str, Any]]:
        try:
            data = yaml.load(text, Loader=_JsonCompatibleLoader) if as_yaml else json.loads(text)
        except (yaml.YAMLError, ValueError) as exc:
            raise SpecificationError(f"Invalid OpenAPI spec {self.source}: {exc}") from exc
        if data is None:
            return None
        if not isinstance(data, dict):
            raise SpecificationError(f"OpenAPI spec {self.source} is not a mapping")
        return data


class StaticSpecificationLoader:
    def __init__(self, document: Optional[Dict[str, Any]]) -> None:
        self.document = document

    def get_specification(self) -> Optional[Dict[str, Any]]:
        return self.document


def _is_yaml(location: str, content_type: Optional[str] = None) -> bool:
    if content_type and "yaml" in content_type.lower():
        return True
    return location.lower().split("?", 1)[0].endswith((".yaml", ".yml"))
