from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, model_validator


class ValidateRequest(BaseModel):
    document: Any
    required_fields: Optional[List[str]] = None
    profile: Optional[str] = None

    @model_validator(mode="after")
    def _check_one_of(self):
        if (self.required_fields is None) == (self.profile is None):
            raise ValueError("Provide exactly one of 'required_fields' or 'profile'")
        return self


class ProfileView(BaseModel):
    name: str
    required: List[str]
    description: str = ""
