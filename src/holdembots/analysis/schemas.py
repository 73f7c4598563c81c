from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["VerificationRecord", "VerificationReport"]


class _APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class VerificationRecord(_APIModel):
    profile_name: str = Field(..., alias="profile")
    expected: int
    actual: float
    deviation: int
    status: Literal["ahead", "onTrack", "behind"]


class VerificationReport(_APIModel):
    records: list[VerificationRecord]

    def to_list(self) -> list[dict[str, Any]]:
        return [record.to_dict() for record in self.records]
