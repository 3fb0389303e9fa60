"""OpenAPI contract export.

The contract is part of the deployable artifact: downstream tooling generates
the dashboard's TypeScript types from it, so export failures are fatal.
"""

import copy
import json
import logging
import os
from pathlib import Path

from fastapi import FastAPI

from domain.model.errors import ContractExportError

logger = logging.getLogger(__name__)

DEFAULT_OPENAPI_PATH = "packages/api/src/contracts/v1.json"

_FASTAPI_VALIDATION_SCHEMAS = ("HTTPValidationError", "ValidationError")


def get_openapi_path() -> Path:
    """Contract output path, overridable with OPENAPI_PATH."""
    return Path(os.getenv("OPENAPI_PATH") or DEFAULT_OPENAPI_PATH)


def build_contract(app: FastAPI) -> dict:
    """Return the OpenAPI document derived from the app's routes and models.

    FastAPI documents a 422 response on every route with parameters, but the
    app answers validation failures with 400, so those entries and the
    validation error schemas are dropped.
    """
    contract = copy.deepcopy(app.openapi())
    for operations in contract.get("paths", {}).values():
        for operation in operations.values():
            operation.get("responses", {}).pop("422", None)
    schemas = contract.get("components", {}).get("schemas", {})
    for name in _FASTAPI_VALIDATION_SCHEMAS:
        schemas.pop(name, None)
    return contract


def render_contract(app: FastAPI) -> bytes:
    """Serialize the contract deterministically (sorted keys, fixed indent)."""
    try:
        text = json.dumps(build_contract(app), indent=2, sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise ContractExportError("<memory>", f"serialization failed: {e}") from e
    return (text + "\n").encode("utf-8")


def export_contract(app: FastAPI, path: str | os.PathLike | None = None) -> Path:
    """Write the contract to path (default: get_openapi_path()), overwriting it.

    Returns:
        The path written

    Raises:
        ContractExportError: if the contract cannot be serialized or written
    """
    target = Path(path) if path is not None else get_openapi_path()
    try:
        payload = render_contract(app)
    except ContractExportError as e:
        raise ContractExportError(str(target), e.reason) from e

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
    except OSError as e:
        raise ContractExportError(str(target), str(e)) from e

    logger.info("OpenAPI spec written", extra={"path": str(target), "bytes": len(payload)})
    return target
