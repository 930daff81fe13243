"""TMF630 entrypoint: hypermedia links for every operation in an OpenAPI document.

The responder is a pure function of ``(specification, identity)``. The
specification is assumed to be a JSON-compatible structure; only the absence
of optional fields is tolerated, not arbitrary type mismatches.
"""

from __future__ import annotations

import json
import logging
import re
import traceback
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple

from .models import ComponentIdentity, DiscoveredOperation, LinksDocument


logger = logging.getLogger(__name__)

DEFAULT_BASE_PATH = "/tmf-api/geographicAddressManagement/v4"
DEFAULT_VERSION = "4.0.1"
DEFAULT_TITLE = "Geographic Address Management API"
STATUS_RUNNING = "running"

ERROR_STATUS = 500
ERROR_BODY: Dict[str, str] = {
    "error": "Internal Server Error",
    "message": "Unable to generate entrypoint response",
}

# "scheme://host" or protocol-relative "//host"; kept verbatim.
_AUTHORITY = re.compile(r"^(?:[A-Za-z][A-Za-z0-9+.\-]*:)?//[^/]+")
_REPEATED_SLASHES = re.compile(r"/{2,}")


def clean_path(path: str) -> str:
    return join_path(path, "")


def join_path(base_path: str, suffix: str) -> str:
    """Append ``suffix`` and collapse repeated separators outside the authority."""
    match = _AUTHORITY.match(base_path)
    prefix = match.group(0) if match else ""
    return prefix + _REPEATED_SLASHES.sub("/", base_path[len(prefix):] + suffix)


def strip_trailing_slash(path: str) -> str:
    return path[:-1] if path.endswith("/") else path


def merge_ordered(primary: Mapping[str, Any], secondary: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge two ordered mappings; keys already in ``primary`` always win."""
    merged = dict(primary)
    for key, value in secondary.items():
        if key not in merged:
            merged[key] = value
    return merged


def resolve_base_path(
    specification: Optional[Mapping[str, Any]], default: str = DEFAULT_BASE_PATH
) -> str:
    spec = specification or {}
    servers = spec.get("servers") or []
    if servers and isinstance(servers[0], Mapping) and servers[0].get("url"):
        return servers[0]["url"]
    if spec.get("basePath"):
        return spec["basePath"]
    return default


def build_self_link(
    specification: Optional[Mapping[str, Any]],
    identity: ComponentIdentity,
    base_path: str,
) -> Dict[str, Any]:
    info = (specification or {}).get("info")
    if not isinstance(info, Mapping):
        info = {}

    explicit = {
        "href": base_path,
        "id": identity.release_name,
        "name": identity.component_name,
        "status": STATUS_RUNNING,
        "version": info.get("version") or DEFAULT_VERSION,
        "title": info.get("title") or DEFAULT_TITLE,
        "description": info.get("description") or "",
        "swagger-ui": join_path(base_path, "/api-docs"),
        "openapi": join_path(base_path, "/openapi"),
    }
    return merge_ordered(explicit, info)


def iter_operations(specification: Optional[Mapping[str, Any]]) -> Iterator[DiscoveredOperation]:
    paths = (specification or {}).get("paths") or {}
    for path, methods in paths.items():
        if not isinstance(methods, Mapping):
            continue
        for method, operation in methods.items():
            # Path-level "parameters", "summary" and the like are not operations.
            if not isinstance(operation, Mapping):
                continue
            operation_id = operation.get("operationId")
            if not operation_id:
                continue
            yield DiscoveredOperation(
                operation_id=operation_id,
                method=str(method).upper(),
                path=path,
                description=operation.get("description") or operation.get("summary") or "",
                tags=tuple(operation.get("tags") or ()),
            )


def build_operation_link(operation: DiscoveredOperation, base_path: str) -> Dict[str, Any]:
    link: Dict[str, Any] = {
        "href": strip_trailing_slash(base_path) + operation.path,
        "method": operation.method,
        "description": operation.description,
        "operationId": operation.operation_id,
    }
    if operation.tags:
        link["tags"] = list(operation.tags)
    return link


def respond(
    specification: Optional[Mapping[str, Any]],
    identity: ComponentIdentity,
    default_base_path: str = DEFAULT_BASE_PATH,
) -> LinksDocument:
    base_path = resolve_base_path(specification, default_base_path)
    links: Dict[str, Dict[str, Any]] = {
        "self": build_self_link(specification, identity, base_path),
    }
    # Duplicate operationIds: the last one walked replaces the earlier link.
    for operation in iter_operations(specification):
        links[operation.operation_id] = build_operation_link(operation, base_path)
    return {"_links": links}


def render_document(document: Mapping[str, Any], pretty: bool = True) -> bytes:
    if pretty:
        text = json.dumps(document, ensure_ascii=False, allow_nan=False, indent=2)
    else:
        text = json.dumps(document, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    return text.encode("utf-8")


class EntrypointResponder:
    """Builds and serializes the links document; never raises."""

    def __init__(
        self,
        loader: Callable[[], Optional[Mapping[str, Any]]],
        identity: ComponentIdentity,
        default_base_path: str = DEFAULT_BASE_PATH,
    ) -> None:
        self.loader = loader
        self.identity = identity
        self.default_base_path = default_base_path

    def __call__(self) -> Tuple[int, bytes]:
        try:
            specification = self.loader()
            document = respond(specification, self.identity, self.default_base_path)
            return 200, render_document(document)
        except Exception as exc:
            logger.error(
                "Entrypoint error: %s",
                exc,
                exc_info=exc,
                extra={"error": str(exc), "stack": traceback.format_exc()},
            )
            return ERROR_STATUS, render_document(ERROR_BODY, pretty=False)
