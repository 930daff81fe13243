"""Internal models for discovery documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


LinksDocument = Dict[str, Dict[str, Dict[str, Any]]]


@dataclass(frozen=True)
class ComponentIdentity:
    component_name: str = "geographicaddress"
    release_name: str = "tmf673"


@dataclass(frozen=True)
class DiscoveredOperation:
    operation_id: str
    method: str
    path: str
    description: str
    tags: Tuple[Any, ...] = ()
