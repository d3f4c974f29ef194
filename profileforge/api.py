"""
HTTP API for Profileforge.

Routes (under ``/api/<version>``):
  GET /character/random   random character, persisted
  GET /character/{seed}   stored character for a seed, or a new seeded one
  GET /character          overrides, ``fields`` filter, ``count`` bulk, optional ``seed``
  GET /traits             reference traits grouped by category
  GET /schema             JSON schema of a character
  GET /stats              usage statistics

Run with ``python -m scripts.manage serve`` or ``uvicorn profileforge.api:app``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .db import get_session
from .filtering import filter_fields, parse_fields
from .generator import CharacterGenerator, InvalidOverrideError, generate_multiple
from .logging_utils import JsonlGenerationLogger, log_generation
from .pools import TraitPools, load_pools
from .store import CharacterStore
from .types import GENDERS, GenerationOptions

logger = logging.getLogger(__name__)

SERVICE_NAME = "Fictional Profile Generation API"
SERVICE_VERSION = "1.0.0"

CHARACTER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "integer"},
        "name": {"type": "string"},
        "age": {"type": "integer", "minimum": 1, "maximum": 120},
        "gender": {"type": "string", "enum": list(GENDERS)},
        "occupation": {"type": "string"},
        "background": {"type": "string"},
        "appearance": {
            "type": "object",
            "properties": {
                "hair_color": {"type": "string"},
                "eye_color": {"type": "string"},
                "height_cm": {"type": "integer"},
                "build": {"type": "string"},
            },
            "required": ["hair_color", "eye_color", "height_cm", "build"],
        },
        "personality_traits": {"type": "array", "items": {"type": "string"}},
        "hobbies": {"type": "array", "items": {"type": "string"}},
        "seed": {"type": "string", "nullable": True},
        "created_at": {"type": "string", "format": "date-time"},
    },
    "required": ["name", "age", "gender", "appearance", "personality_traits", "hobbies"],
}


@dataclass
class ServiceContext:
    """Per-application collaborators, built once in create_app."""

    settings: Settings
    pools: TraitPools
    store: CharacterStore
    gen_logger: Optional[JsonlGenerationLogger] = None


def get_context(request: Request) -> ServiceContext:
    return request.app.state.context


router = APIRouter(tags=["Characters"])


@router.get("/character/random")
def generate_random(ctx: ServiceContext = Depends(get_context), session: Session = Depends(get_session)):
    character = CharacterGenerator(ctx.pools).generate()
    stored = ctx.store.create(session, character, mode="random")
    log_generation(ctx.gen_logger, "random", character, character_id=stored.id)
    return {"success": True, "data": stored.to_dict()}


@router.get("/character/{seed}")
def generate_with_seed(
    seed: str,
    ctx: ServiceContext = Depends(get_context),
    session: Session = Depends(get_session),
):
    existing = ctx.store.find_by_seed(session, seed)
    if existing is not None:
        return {"success": True, "data": existing.to_dict(), "cached": True}

    character = CharacterGenerator(ctx.pools, seed).generate()
    stored = ctx.store.create(session, character, mode="seeded")
    log_generation(ctx.gen_logger, "seeded", character, character_id=stored.id)
    return {"success": True, "data": stored.to_dict(), "cached": False}


@router.get("/character")
def generate_custom(
    name: Optional[str] = None,
    gender: Optional[str] = None,
    age: Optional[str] = None,
    occupation: Optional[str] = None,
    hair_color: Optional[str] = None,
    eye_color: Optional[str] = None,
    height_cm: Optional[str] = None,
    build: Optional[str] = None,
    fields: Optional[str] = Query(None, description="Comma-separated list of fields to return"),
    count: int = Query(1, ge=1, description="Number of characters to generate"),
    seed: Optional[str] = Query(None, description="Base seed; batch member i uses \"<seed>_<i>\""),
    ctx: ServiceContext = Depends(get_context),
    session: Session = Depends(get_session),
):
    max_count = ctx.settings.max_characters_per_request
    if count > max_count:
        raise HTTPException(status_code=400, detail=f"Count cannot exceed {max_count}")

    options = GenerationOptions(
        name=name,
        gender=gender,
        age=age,
        occupation=occupation,
        hair_color=hair_color,
        eye_color=eye_color,
        height_cm=height_cm,
        build=build,
    )
    requested = parse_fields(fields)

    if count == 1:
        character = CharacterGenerator(ctx.pools, seed).generate(options)
        stored = ctx.store.create(session, character, mode="custom")
        log_generation(ctx.gen_logger, "custom", character, options.to_dict(), character_id=stored.id)
        return {"success": True, "data": filter_fields(stored, requested)}

    saved = []
    for character in generate_multiple(ctx.pools, count, seed=seed, options=options):
        stored = ctx.store.create(session, character, mode="custom")
        log_generation(ctx.gen_logger, "custom", character, options.to_dict(), character_id=stored.id)
        saved.append(stored)
    logger.info("Generated %d characters (seed=%r)", len(saved), seed)
    return {"success": True, "count": len(saved), "data": filter_fields(saved, requested)}


@router.get("/traits")
def get_traits(ctx: ServiceContext = Depends(get_context), session: Session = Depends(get_session)):
    db_traits = ctx.store.available_traits(session)
    return {
        "success": True,
        "data": {
            "personality_traits": db_traits.get("personality_trait", []),
            "occupations": db_traits.get("occupation", []),
            "hobbies": db_traits.get("hobby", []),
            "appearance": {
                "hair_colors": db_traits.get("hair_color", []),
                "eye_colors": db_traits.get("eye_color", []),
                "builds": db_traits.get("build", []),
            },
            "genders": list(GENDERS),
        },
    }


@router.get("/schema")
def get_schema():
    return {"success": True, "data": CHARACTER_SCHEMA}


@router.get("/stats")
def get_stats(ctx: ServiceContext = Depends(get_context), session: Session = Depends(get_session)):
    return {
        "success": True,
        "data": {
            "total_characters_generated": ctx.store.count(session),
            "api_version": ctx.settings.api_version,
            "database": session.get_bind().dialect.name,
        },
    }


def _endpoint_docs(prefix: str) -> Dict[str, Any]:
    return {
        "random": {
            "url": f"{prefix}/character/random",
            "method": "GET",
            "description": "Generate a completely random character",
        },
        "seeded": {
            "url": f"{prefix}/character/{{seed}}",
            "method": "GET",
            "description": "Generate a deterministic character based on seed",
            "example": f"{prefix}/character/myseed123",
        },
        "custom": {
            "url": f"{prefix}/character",
            "method": "GET",
            "description": "Generate a character with custom parameters",
            "parameters": {
                "gender": ", ".join(GENDERS),
                "age": "integer",
                "occupation": "string",
                "hair_color": "string",
                "eye_color": "string",
                "height_cm": "integer",
                "build": "string",
                "fields": "comma-separated list of fields to return",
                "count": "number of characters to generate",
                "seed": (
                    "base seed; a single character uses it as is, "
                    "character i of a batch (count >= 2) uses \"<seed>_<i>\""
                ),
            },
        },
        "traits": {"url": f"{prefix}/traits", "method": "GET", "description": "Get all available traits and options"},
        "schema": {"url": f"{prefix}/schema", "method": "GET", "description": "Get JSON schema for character object"},
        "stats": {"url": f"{prefix}/stats", "method": "GET", "description": "Get API usage statistics"},
    }


def _error(status_code: int, error: str, message: Optional[str] = None, **extra: Any) -> JSONResponse:
    body: Dict[str, Any] = {"success": False, "error": error}
    if message is not None:
        body["message"] = message
    body.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def create_app(settings: Optional[Settings] = None, pools: Optional[TraitPools] = None) -> FastAPI:
    settings = settings or get_settings()
    pools = pools or load_pools(settings.trait_pools_path)
    gen_logger = JsonlGenerationLogger(settings.generation_log_path) if settings.generation_log_path else None

    app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)
    app.state.context = ServiceContext(settings=settings, pools=pools, store=CharacterStore(), gen_logger=gen_logger)
    app.include_router(router, prefix=settings.api_prefix)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(InvalidOverrideError)
    async def invalid_override_handler(request: Request, exc: InvalidOverrideError):
        return _error(400, "Invalid parameter", str(exc), field=exc.field_name)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return _error(500, "Failed to generate character", str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(422, "Invalid request", details=exc.errors())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error(404, "Endpoint not found", f"The endpoint {request.method} {request.url.path} does not exist")
        return _error(exc.status_code, str(exc.detail))

    @app.get("/")
    def root() -> Dict[str, Any]:
        return {
            "success": True,
            "message": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "api_version": settings.api_version,
            "documentation": {"endpoints": _endpoint_docs(settings.api_prefix)},
        }

    @app.get("/health")
    def health(session: Session = Depends(get_session)) -> Dict[str, Any]:
        try:
            session.execute(text("SELECT 1"))
            connected = True
        except SQLAlchemyError as exc:
            logger.warning("Database health check failed: %s", exc)
            session.rollback()
            connected = False
        return {
            "success": True,
            "status": "healthy",
            "database": "connected" if connected else "disconnected",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app = create_app()
