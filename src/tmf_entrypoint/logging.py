"""Logging helpers with component context and redaction."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Mapping


_SENSITIVE_KEYS = re.compile(
    r"(token|secret|api[_-]?key|password|authorization|cookie)", re.IGNORECASE
)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(component)s/%(release)s] %(message)s"


class ComponentContextFilter(logging.Filter):
    def __init__(self, component: str, release: str) -> None:
        super().__init__()
        self.component = component
        self.release = release

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = self.component
        if not hasattr(record, "release"):
            record.release = self.release
        return True


def configure_logging(level: str, component: str = "-", release: str = "-") -> None:
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT)
    context = ComponentContextFilter(component, release)
    for handler in logging.getLogger().handlers:
        handler.addFilter(context)


def redact_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    redacted: Dict[str, Any] = {}
    for key, value in payload.items():
        if _SENSITIVE_KEYS.search(key):
            redacted[key] = "***REDACTED***"
        elif isinstance(value, Mapping):
            redacted[key] = redact_payload(value)
        else:
            redacted[key] = value
    return redacted


def log_request(
    logger: logging.Logger, method: str, path: str, headers: Mapping[str, str]
) -> None:
    logger.info("HTTP request %s %s headers=%s", method, path, redact_payload(dict(headers)))


def log_response(logger: logging.Logger, status_code: int, path: str) -> None:
    logger.info("HTTP response %s %s", status_code, path)
