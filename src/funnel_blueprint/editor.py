from __future__ import annotations

import typing
from typing import Any, Callable

from pydantic import BaseModel, TypeAdapter

from .models.content import (
    EditableContent,
    EmailContent,
    LandingPageContent,
    LeadMagnetContent,
    LeadMagnetWorkflowContent,
    SocialCaptureContent,
)

SECTION_SEPARATOR = "\n\n" + "=" * 40 + "\n\n"


def _resolve_field(model: type[BaseModel], name: str) -> str:
    """Map an attribute name or its camelCase alias to the attribute name."""
    if name in model.model_fields:
        return name
    for field_name, info in model.model_fields.items():
        if info.alias == name:
            return field_name
    raise KeyError(f"{model.__name__} has no field {name!r}")


def _item_type(annotation: Any) -> Any:
    args = typing.get_args(annotation)
    if typing.get_origin(annotation) is not list or not args:
        raise KeyError("field is not an array")
    return args[0]


class ContentEditor:
    """Field-by-field edits of an ``EditableContent`` model.

    Every mutation replaces only the namespace it touches (copy-on-write);
    the other namespaces keep their identity. Nothing here is persisted.
    """

    def __init__(self, content: EditableContent | None = None) -> None:
        self._content = content if content is not None else EditableContent()

    @property
    def content(self) -> EditableContent:
        return self._content

    def update_scalar_field(self, namespace: str, field: str, value: str) -> EditableContent:
        ns = _resolve_field(EditableContent, namespace)
        section = getattr(self._content, ns)
        if not isinstance(section, BaseModel):
            raise KeyError(f"{namespace!r} has no scalar fields")
        name = _resolve_field(type(section), field)
        if typing.get_origin(type(section).model_fields[name].annotation) is list:
            raise KeyError(f"{field!r} is an array field")
        return self._replace(ns, section.model_copy(update={name: value}))

    def update_array_item(
        self, namespace: str, field: str | None, index: int, value: Any
    ) -> EditableContent:
        def change(items: list[Any], item_type: Any) -> list[Any]:
            position = self._check_index(items, index)
            items[position] = self._coerce(item_type, value)
            return items

        return self._edit_array(namespace, field, change)

    def update_item_field(
        self, namespace: str, field: str | None, index: int, key: str, value: str
    ) -> EditableContent:
        def change(items: list[Any], item_type: Any) -> list[Any]:
            position = self._check_index(items, index)
            item = items[position]
            if not isinstance(item, BaseModel):
                raise KeyError(f"items of {namespace!r} have no fields")
            items[position] = item.model_copy(update={_resolve_field(type(item), key): value})
            return items

        return self._edit_array(namespace, field, change)

    def add_array_item(
        self, namespace: str, field: str | None, default_value: Any = None
    ) -> EditableContent:
        def change(items: list[Any], item_type: Any) -> list[Any]:
            if default_value is None:
                items.append(item_type() if item_type is not str else "")
            else:
                items.append(self._coerce(item_type, default_value))
            return items

        return self._edit_array(namespace, field, change)

    def remove_array_item(self, namespace: str, field: str | None, index: int) -> EditableContent:
        def change(items: list[Any], item_type: Any) -> list[Any]:
            del items[self._check_index(items, index)]
            return items

        return self._edit_array(namespace, field, change)

    def serialize_section(self, namespace: str) -> str:
        ns = _resolve_field(EditableContent, namespace)
        return _SERIALIZERS[ns](getattr(self._content, ns))

    def serialize_all(self) -> str:
        parts = [
            serializer(getattr(self._content, ns)) for ns, serializer in _SERIALIZERS.items()
        ]
        return SECTION_SEPARATOR.join(part for part in parts if part)

    def _edit_array(
        self,
        namespace: str,
        field: str | None,
        change: Callable[[list[Any], Any], list[Any]],
    ) -> EditableContent:
        ns = _resolve_field(EditableContent, namespace)
        section = getattr(self._content, ns)
        if isinstance(section, list):
            item_type = _item_type(EditableContent.model_fields[ns].annotation)
            return self._replace(ns, change(list(section), item_type))
        if field is None:
            raise KeyError(f"{namespace!r} needs an array field name")
        name = _resolve_field(type(section), field)
        item_type = _item_type(type(section).model_fields[name].annotation)
        items = change(list(getattr(section, name)), item_type)
        return self._replace(ns, section.model_copy(update={name: items}))

    def _replace(self, ns: str, value: Any) -> EditableContent:
        self._content = self._content.model_copy(update={ns: value})
        return self._content

    @staticmethod
    def _check_index(items: list[Any], index: int) -> int:
        if not 0 <= index < len(items):
            raise IndexError(f"index {index} out of range for {len(items)} items")
        return index

    @staticmethod
    def _coerce(item_type: Any, value: Any) -> Any:
        return TypeAdapter(item_type).validate_python(value)


def _block(title: str, lines: list[str]) -> str:
    return "\n".join([title, "", *lines]).rstrip()


def _listed(items: list[str], marker: str = "• ") -> list[str]:
    return [f"{marker}{item}" for item in items]


def serialize_landing_page(page: LandingPageContent) -> str:
    return _block(
        "LANDING PAGE COPY",
        [
            "HERO",
            f"Headline: {page.hero_headline}",
            f"Subheadline: {page.hero_subheadline}",
            f"Button: {page.hero_button_text}",
            "",
            "DOES THIS SOUND LIKE YOU?",
            f"Intro: {page.problem_intro}",
            *_listed(page.pain_points),
            "",
            "IMAGINE",
            f"Intro: {page.transformation_intro}",
            *_listed(page.transformation_points),
            f"Button: {page.transformation_button_text}",
            "",
            "WHAT YOU'LL GET",
            f"Title: {page.benefits_title}",
            *_listed(page.benefits, "✓ "),
            f"Button: {page.benefits_button_text}",
            "",
            "ABOUT ME",
            f"Headline: {page.about_headline}",
            f"Subheadline: {page.about_subheadline}",
            f"Bio: {page.about_bio}",
            "",
            "FINAL CTA",
            f"Headline: {page.final_cta_headline}",
            f"Button: {page.final_cta_button_text}",
            f"Below Form: {page.final_cta_below_text}",
        ],
    )


def serialize_lead_magnet(lead_magnet: LeadMagnetContent) -> str:
    lines = [
        f"Title: {lead_magnet.title}",
        f"Format: {lead_magnet.format}",
        "",
        "Introduction:",
        lead_magnet.intro,
    ]
    for number, point in enumerate(lead_magnet.points, start=1):
        lines.extend(["", f"{number}. {point.title}", point.content])
    lines.extend(["", "Conclusion:", lead_magnet.conclusion])
    return _block("LEAD MAGNET CONTENT", lines)


def serialize_emails(emails: list[EmailContent]) -> str:
    lines: list[str] = []
    for number, email in enumerate(emails, start=1):
        if lines:
            lines.extend(["", "-----", ""])
        lines.extend(
            [
                f"EMAIL {number}: {email.title} ({email.day})",
                f"Subject: {email.subject_line}",
                "",
                email.body,
            ]
        )
    return _block("EMAIL SEQUENCE", lines)


def serialize_social_capture(social: SocialCaptureContent) -> str:
    lines = ["DM Message:", social.dm_message, "", "Comment Replies:"]
    lines.extend(f"{number}. {reply}" for number, reply in enumerate(social.comment_replies, start=1))
    lines.extend(["", "Keywords:", *_listed(social.keywords), "", "Post CTAs:"])
    for cta in social.post_ctas:
        lines.extend(["", f"{cta.hook}:", cta.content])
    return _block("SOCIAL CAPTURE", lines)


def serialize_lead_magnet_workflow(workflow: LeadMagnetWorkflowContent) -> str:
    lines = ["DM Message:", workflow.dm_message, "", "Post CTAs:"]
    lines.extend(f"{number}. {cta}" for number, cta in enumerate(workflow.post_ctas, start=1))
    return _block("LEAD MAGNET WORKFLOW", lines)


_SERIALIZERS: dict[str, Callable[[Any], str]] = {
    "landing_page": serialize_landing_page,
    "lead_magnet": serialize_lead_magnet,
    "emails": serialize_emails,
    "social_capture": serialize_social_capture,
    "lead_magnet_workflow": serialize_lead_magnet_workflow,
}


__all__ = ["ContentEditor", "SECTION_SEPARATOR"]
