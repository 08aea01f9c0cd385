from __future__ import annotations

from pydantic import BaseModel, Field


class FunnelCopyRequest(BaseModel):
    coaching_type: str
    ideal_client: str
    main_problem: str
    lead_magnet: str
    next_step: str = ""
    social_handle: str | None = None
    domain: str | None = None


class LandingPageCopy(BaseModel):
    headline: str
    subheadline: str
    button_text: str


class EmailCopy(BaseModel):
    subject: str
    body: str


class FunnelCopy(BaseModel):
    post_caption: str
    dm_template: str
    landing_page: LandingPageCopy
    delivery_email: EmailCopy
    followup_email: EmailCopy
    fallback: bool = Field(default=False, description="True when the model output could not be used")


__all__ = ["FunnelCopy", "FunnelCopyRequest", "LandingPageCopy", "EmailCopy"]
