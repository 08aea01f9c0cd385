from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ContentModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LandingPageContent(_ContentModel):
    hero_headline: str = ""
    hero_subheadline: str = ""
    hero_button_text: str = ""
    problem_intro: str = ""
    pain_points: list[str] = Field(default_factory=list)
    transformation_intro: str = ""
    transformation_points: list[str] = Field(default_factory=list)
    transformation_button_text: str = ""
    benefits_title: str = ""
    benefits: list[str] = Field(default_factory=list)
    benefits_button_text: str = ""
    about_headline: str = ""
    about_subheadline: str = ""
    about_bio: str = ""
    final_cta_headline: str = ""
    final_cta_button_text: str = ""
    final_cta_below_text: str = ""


class LeadMagnetPoint(_ContentModel):
    title: str = ""
    content: str = ""


class LeadMagnetContent(_ContentModel):
    title: str = ""
    format: str = ""
    intro: str = ""
    points: list[LeadMagnetPoint] = Field(default_factory=list)
    conclusion: str = ""


class EmailContent(_ContentModel):
    title: str = ""
    day: str = ""
    subject_line: str = ""
    body: str = ""


class PostCTA(_ContentModel):
    hook: str = ""
    content: str = ""


class SocialCaptureContent(_ContentModel):
    dm_message: str = ""
    comment_replies: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    post_ctas: list[PostCTA] = Field(default_factory=list, alias="postCTAs")


class LeadMagnetWorkflowContent(_ContentModel):
    dm_message: str = ""
    post_ctas: list[str] = Field(default_factory=list, alias="postCTAs")


class EditableContent(_ContentModel):
    """User-editable model derived from a stored blueprint document."""

    landing_page: LandingPageContent = Field(default_factory=LandingPageContent)
    lead_magnet: LeadMagnetContent = Field(default_factory=LeadMagnetContent)
    emails: list[EmailContent] = Field(default_factory=list)
    social_capture: SocialCaptureContent = Field(default_factory=SocialCaptureContent)
    lead_magnet_workflow: LeadMagnetWorkflowContent = Field(
        default_factory=LeadMagnetWorkflowContent
    )


__all__ = [
    "EditableContent",
    "EmailContent",
    "LandingPageContent",
    "LeadMagnetContent",
    "LeadMagnetPoint",
    "LeadMagnetWorkflowContent",
    "PostCTA",
    "SocialCaptureContent",
]
