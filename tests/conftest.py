from __future__ import annotations

from typing import Any, Dict

import pytest

from tmf_entrypoint.models import ComponentIdentity


@pytest.fixture()
def identity() -> ComponentIdentity:
    return ComponentIdentity()


@pytest.fixture()
def address_spec() -> Dict[str, Any]:
    return {
        "openapi": "3.0.1",
        "info": {
            "title": "Geographic Address Management",
            "description": "TMF673 reference",
            "version": "4.0.1",
            "x-api-id": "TMF673",
        },
        "servers": [{"url": "/tmf-api/geographicAddressManagement/v4/"}],
        "paths": {
            "/geographicAddress": {
                "get": {
                    "operationId": "listGeographicAddress",
                    "summary": "List or find GeographicAddress objects",
                    "tags": ["geographicAddress"],
                },
            },
            "/geographicAddress/{id}": {
                "parameters": [{"name": "id", "in": "path", "required": True}],
                "get": {
                    "operationId": "retrieveGeographicAddress",
                    "description": "Retrieves a GeographicAddress by ID",
                    "summary": "ignored when a description exists",
                },
            },
            "/geographicAddressValidation": {
                "post": {
                    "operationId": "createGeographicAddressValidation",
                    "tags": [],
                },
                "options": {"summary": "no operationId, not linked"},
            },
        },
    }
