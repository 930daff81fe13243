"""Render the TMF630 entrypoint document for an OpenAPI spec file."""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from tmf_entrypoint.links import DEFAULT_BASE_PATH, render_document, respond
from tmf_entrypoint.models import ComponentIdentity
from tmf_entrypoint.openapi import SpecificationLoader


def main() -> None:
    parser = argparse.ArgumentParser(description="Print the entrypoint links for an OpenAPI spec")
    parser.add_argument(
        "--spec",
        default=os.getenv("OPENAPI_SOURCE", ""),
        help="Path or URL of the OpenAPI document (.json, .yaml, .yml)",
    )
    parser.add_argument(
        "--component-name",
        default=os.getenv("COMPONENT_NAME", ""),
        help="Component name reported in the self link",
    )
    parser.add_argument(
        "--release-name",
        default=os.getenv("RELEASE_NAME", ""),
        help="Release name reported as the self link id",
    )
    parser.add_argument(
        "--default-base-path",
        default=os.getenv("DEFAULT_BASE_PATH") or DEFAULT_BASE_PATH,
        help="Base path used when the spec declares neither servers nor basePath",
    )

    args = parser.parse_args()
    if not args.spec:
        raise SystemExit("Spec missing. Set --spec or OPENAPI_SOURCE.")

    source = args.spec
    if not source.startswith(("http://", "https://")):
        spec_path = Path(source).expanduser().resolve()
        if not spec_path.exists():
            raise SystemExit(f"Spec file not found: {spec_path}")
        source = str(spec_path)

    spec = SpecificationLoader(source, cache_seconds=0).load()
    defaults = ComponentIdentity()
    identity = ComponentIdentity(
        component_name=args.component_name or defaults.component_name,
        release_name=args.release_name or defaults.release_name,
    )
    document = respond(spec, identity, args.default_base_path or DEFAULT_BASE_PATH)
    print(render_document(document).decode("utf-8"))


if __name__ == "__main__":
    main()
