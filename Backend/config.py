"""
Centralized configuration for the validator service.
- Loads from environment variables and an optional app.yaml file.
- Provides typed settings via Pydantic models.
- Exposes helpers for logging and CORS.
"""
from __future__ import annotations

import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
import yaml

# Ensure .env is loaded early
load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class CORSConfig(BaseModel):
    allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "OPTIONS"])
    allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    allow_credentials: bool = True


class FastAPIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    workers: int = 1
    cors: CORSConfig = Field(default_factory=CORSConfig)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    slow_request_threshold_ms: int = 500

    @field_validator("level")
    def _upper_level(cls, v: str) -> str:
        return v.upper()


class ValidationConfig(BaseModel):
    # JSON null does not satisfy a required field unless this is turned off.
    null_is_missing: bool = True
    empty_string_is_missing: bool = False
    profiles_path: str = Field(default_factory=lambda: os.path.join(BASE_DIR, "profiles.json"))


class AppMeta(BaseModel):
    app_name: str = "Required Field Validator"
    environment: str = Field(default_factory=lambda: os.getenv("APP_ENV", "dev"))
    version: str = "1.0"


class Settings(BaseModel):
    meta: AppMeta = Field(default_factory=AppMeta)
    fastapi: FastAPIConfig = Field(default_factory=FastAPIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)


def _load_yaml_config(path: str) -> dict:
    if not os.path.isfile(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return data


def _env_flag(name: str):
    val = os.getenv(name)
    if val is None:
        return None
    return val.strip().lower() in ("1", "true", "yes", "on")


def _env_override(cfg: dict) -> dict:
    """Override select fields from env; keep simple to avoid surprises."""
    if os.getenv("APP_ENV"):
        cfg.setdefault("meta", {})["environment"] = os.getenv("APP_ENV")
    if os.getenv("LOG_LEVEL"):
        cfg.setdefault("logging", {})["level"] = os.getenv("LOG_LEVEL")

    val_cfg = cfg.setdefault("validation", {})
    for k_env, key in [
        ("VALIDATOR_NULL_IS_MISSING", "null_is_missing"),
        ("VALIDATOR_EMPTY_STRING_IS_MISSING", "empty_string_is_missing"),
    ]:
        flag = _env_flag(k_env)
        if flag is not None:
            val_cfg[key] = flag
    if os.getenv("VALIDATOR_PROFILES_PATH"):
        val_cfg["profiles_path"] = os.getenv("VALIDATOR_PROFILES_PATH")

    return cfg


def load_settings(path: str | None = None) -> Settings:
    base_cfg = _load_yaml_config(path or os.getenv("APP_CONFIG", os.path.join(BASE_DIR, "app.yaml")))
    merged = _env_override(base_cfg)
    # Pydantic will coerce nested dicts into typed models
    return Settings(**merged)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


# ---- Helpers ---------------------------------------------------------------

def configure_logging(settings: Settings) -> None:
    import logging
    import sys

    from middleware.request_id import RequestIdLogFilter

    console = logging.StreamHandler(sys.stdout)
    console.addFilter(RequestIdLogFilter())

    logging.basicConfig(
        level=settings.logging.level,
        format=(
            "%(message)s"
            if settings.logging.json_format
            else "%(asctime)s %(levelname)s %(name)s [%(request_id)s] - %(message)s"
        ),
        handlers=[console],
    )


def build_cors(settings: Settings):
    from fastapi.middleware.cors import CORSMiddleware

    def add(app):
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.fastapi.cors.allow_origins,
            allow_methods=settings.fastapi.cors.allow_methods,
            allow_headers=settings.fastapi.cors.allow_headers,
            allow_credentials=settings.fastapi.cors.allow_credentials,
        )
        return app

    return add
