"""
Profile registry: named lists of required fields, loaded from profiles.json.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Dict, List

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger("profile_registry")


class UnknownProfileError(KeyError):
    """No profile is registered under the requested name."""


class Profile(BaseModel):
    name: str
    required: List[str] = Field(default_factory=list)
    description: str = ""

    @field_validator("required")
    def _no_blank_names(cls, v: List[str]) -> List[str]:
        if any(not name for name in v):
            raise ValueError("required field names must be non-empty strings")
        return v


class ProfileRegistry:
    def __init__(self) -> None:
        self._profiles: Dict[str, Profile] = {}

    def register(self, name: str, required: List[str], description: str = "") -> Profile:
        profile = Profile(name=name, required=list(required), description=description)
        self._profiles[name] = profile
        return profile

    def has(self, name: str) -> bool:
        return name in self._profiles

    def get(self, name: str) -> Profile:
        if name not in self._profiles:
            raise UnknownProfileError(name)
        return self._profiles[name]

    def names(self) -> List[str]:
        return sorted(self._profiles)

    def load_file(self, path: str) -> int:
        """Register every profile from a JSON file; returns how many were loaded.

        A missing file is tolerated (empty registry). A file that exists but
        can't be parsed is a configuration error and raises ValueError.
        """
        if not os.path.isfile(path):
            logger.warning(f"Profiles file not found: {path}")
            return 0
        with open(path, "r", encoding="utf-8") as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid profiles file {path}: {e}") from e

        profiles = raw.get("profiles") if isinstance(raw, dict) else None
        if not isinstance(profiles, dict):
            raise ValueError(f"Invalid profiles file {path}: expected a 'profiles' object")

        for name, meta in profiles.items():
            if not isinstance(meta, dict):
                raise ValueError(f"Invalid profile '{name}' in {path}: expected an object")
            try:
                self.register(name, meta.get("required", []), meta.get("description", ""))
            except ValidationError as e:
                raise ValueError(f"Invalid profile '{name}' in {path}: {e}") from e
        logger.info(f"Loaded {len(profiles)} profile(s) from {path}")
        return len(profiles)
