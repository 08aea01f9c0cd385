from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from pydantic import BaseModel, Field


BUILD_STEPS: Sequence[str] = (
    "lead_magnet",
    "landing_page",
    "email_sequence",
    "social_capture",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Phase3Data(BaseModel):
    """Funnel phase flags stored on the account record."""

    started: bool = False
    funnel_craft_complete: bool = False
    funnel_build_complete: bool = False
    funnel_blueprint: str | None = None
    lead_magnet: bool = False
    landing_page: bool = False
    email_sequence: bool = False
    social_capture: bool = False

    @property
    def completed_build_steps(self) -> int:
        return sum(1 for step in BUILD_STEPS if getattr(self, step))

    @property
    def build_progress_percent(self) -> int:
        return round(100 * self.completed_build_steps / len(BUILD_STEPS))

    @property
    def progress_percent(self) -> int:
        done = self.completed_build_steps + (1 if self.funnel_craft_complete else 0)
        return round(100 * done / (len(BUILD_STEPS) + 1))

    @property
    def can_build(self) -> bool:
        return self.funnel_craft_complete

    @property
    def phase_complete(self) -> bool:
        return self.funnel_craft_complete and self.funnel_build_complete


class AccountRecord(BaseModel):
    id: str
    phase_3_data: Phase3Data = Field(default_factory=Phase3Data)
    phase_3_complete: bool = False
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


__all__ = ["AccountRecord", "Phase3Data", "BUILD_STEPS"]
