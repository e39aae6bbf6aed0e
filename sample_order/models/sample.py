"""Pydantic models for samples and reorder request/response bodies."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Sample(BaseModel):
    """A uniquely-coded item holding a 1-based rank within its collection."""

    model_config = ConfigDict(frozen=True)

    code: str
    position: int

    @field_validator("code")
    @classmethod
    def code_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("sample.code must be a non-empty string")
        return v


class ReorderRequest(BaseModel):
    target_position: int = Field(ge=1)
    codes: List[str] = Field(default_factory=list)


class PositionUpdate(BaseModel):
    position: int = Field(ge=1)


class PositionMapResponse(BaseModel):
    collection_id: str
    positions: Dict[str, int]
    changed: List[str]


class SampleList(BaseModel):
    collection_id: str
    samples: List[Sample]


__all__ = [
    "Sample",
    "ReorderRequest",
    "PositionUpdate",
    "PositionMapResponse",
    "SampleList",
]
