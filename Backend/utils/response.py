"""
Response envelopes shared by every endpoint.

success -> {"status": "success", "data": ..., "meta": {...}}
            (validation results also carry "message": "Validation Success")
failure -> {"status": "error", "message": ..., "code": ..., "details": {...}}
"""
from __future__ import annotations

from typing import Any, Dict

from fastapi.responses import JSONResponse

from core.validator import ValidationResult


def success(data: Any = None, **meta: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {"status": "success"}
    if data is not None:
        out["data"] = data
    if meta:
        out["meta"] = meta
    return out


def failure(message: str, code: int = 400, **details: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {"status": "error", "message": message, "code": code}
    if details:
        out["details"] = details
    return out


def error_response(message: str, code: int = 400, **details: Any) -> JSONResponse:
    return JSONResponse(failure(message, code, **details), status_code=code)


def validation_response(result: ValidationResult, **meta: Any) -> JSONResponse:
    """200 with the result when every field is present, 400 listing the missing ones otherwise."""
    if result.valid:
        out = success(result.to_dict(), **meta)
        out["message"] = result.message()
        return JSONResponse(out, status_code=200)
    return error_response(
        result.message(),
        400,
        reason="missing_fields",
        missing_fields=list(result.missing_fields),
        **meta,
    )


def malformed_response(reason: str, **meta: Any) -> JSONResponse:
    return error_response(f"Malformed input: {reason}", 400, reason="malformed_input", **meta)
