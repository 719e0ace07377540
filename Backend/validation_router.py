from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Request

from config import get_settings
from core.profile_registry import UnknownProfileError
from core.validator import MalformedInputError
from schemas import ProfileView, ValidateRequest
from services.validation_service import ValidationService, build_service
from utils.response import error_response, malformed_response, success, validation_response

logger = logging.getLogger("validation_router")
router = APIRouter(prefix="/v1", tags=["validation"])


@lru_cache(maxsize=1)
def get_service() -> ValidationService:
    return build_service(get_settings())


@router.get("/profiles")
async def list_profiles(service: ValidationService = Depends(get_service)):
    registry = service.registry
    views = [ProfileView(**registry.get(name).model_dump()).model_dump() for name in registry.names()]
    return success(views, count=len(views))


@router.post("/validate")
async def validate_document(payload: ValidateRequest, service: ValidationService = Depends(get_service)):
    try:
        if payload.profile is not None:
            result = service.check_profile(payload.profile, payload.document)
            return validation_response(result, profile=payload.profile)
        result = service.check(payload.document, payload.required_fields)
        return validation_response(result)

    except UnknownProfileError:
        return error_response(f"Unknown profile '{payload.profile}'", 404)
    except MalformedInputError as me:
        return malformed_response(str(me))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Validation error")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post("/profiles/{name}/validate")
async def validate_with_profile(name: str, request: Request, service: ValidationService = Depends(get_service)):
    """Validate the raw request body against a named profile."""
    try:
        body = await request.body()
        result = service.check_raw(name, body)
        return validation_response(result, profile=name)

    except UnknownProfileError:
        return error_response(f"Unknown profile '{name}'", 404)
    except MalformedInputError as me:
        return malformed_response(str(me), profile=name)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Validation error")
        raise HTTPException(status_code=500, detail="Internal Server Error")
