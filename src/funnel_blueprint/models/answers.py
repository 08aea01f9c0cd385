from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


ANSWER_FIELDS: Sequence[str] = (
    "problem",
    "quick_win",
    "format",
    "title",
    "points",
    "ideal_client",
    "transformation",
    "offer",
    "objections",
)


class FunnelAnswers(BaseModel):
    """Ordered answers from the funnel craft conversation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    problem: str = ""
    quick_win: str = ""
    format: str = ""
    title: str = ""
    points: str = Field(default="", description="Free-text enumeration of lead magnet points")
    ideal_client: str = ""
    transformation: str = ""
    offer: str = ""
    objections: str = ""

    @classmethod
    def from_list(cls, answers: Sequence[str]) -> "FunnelAnswers":
        if len(answers) != len(ANSWER_FIELDS):
            raise ValueError(
                f"Expected {len(ANSWER_FIELDS)} answers, got {len(answers)}"
            )
        return cls(**dict(zip(ANSWER_FIELDS, answers)))

    def as_list(self) -> list[str]:
        return [getattr(self, name) for name in ANSWER_FIELDS]


__all__ = ["FunnelAnswers", "ANSWER_FIELDS"]
