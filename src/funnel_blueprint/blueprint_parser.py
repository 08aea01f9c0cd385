from __future__ import annotations

import logging
import re
from typing import Callable

from . import dictionaries as d
from .generator import format_short
from .models.content import (
    EditableContent,
    EmailContent,
    LeadMagnetPoint,
    LeadMagnetWorkflowContent,
    PostCTA,
)

logger = logging.getLogger(__name__)

_FLAGS = re.MULTILINE | re.DOTALL
_BOUNDARY = r"(?=^## |^═{3,}|\Z)"
_RULE_LINE = re.compile(r"-{3,}")
_LABEL_LINE = re.compile(r"^\*\*[^*\n]+:\*\*[ \t]*$")


def _clean(text: str) -> str:
    """Strip a captured block and drop trailing sub-rule lines."""
    lines = text.strip().splitlines()
    while lines and _RULE_LINE.fullmatch(lines[-1].strip()):
        lines.pop()
    return "\n".join(lines).strip()


def _heading_window(document: str, heading: str, *, literal: bool = True) -> str | None:
    pattern = re.escape(heading) if literal else heading
    match = re.search(rf"^## {pattern}[ \t]*\n(.*?){_BOUNDARY}", document, _FLAGS)
    return match.group(1) if match else None


def _label_value(window: str, label: str) -> str:
    match = re.search(
        rf"\*\*{re.escape(label)}:\*\*[ \t]*([^\n]*)(?:\n([^\n]*))?", window
    )
    if not match:
        return ""
    same_line = match.group(1).strip()
    if same_line:
        return same_line
    next_line = (match.group(2) or "").strip()
    if _LABEL_LINE.match(next_line):
        return ""
    return next_line


def _label_block(window: str, label: str) -> str:
    match = re.search(
        rf"\*\*{re.escape(label)}:\*\*[ \t]*\n(.*?)(?=^\*\*[^*\n]+:\*\*|^-{{3,}}|\Z)",
        window,
        _FLAGS,
    )
    return _clean(match.group(1)) if match else ""


def _marked_list(window: str, label: str, marker: str) -> list[str]:
    match = re.search(rf"\*\*{re.escape(label)}:\*\*[ \t]*\n", window)
    if not match:
        return []
    items: list[str] = []
    for line in window[match.end():].splitlines():
        stripped = line.strip()
        if _LABEL_LINE.match(stripped) or _RULE_LINE.fullmatch(stripped):
            break
        if line.lstrip().startswith(marker):
            item = line.lstrip()[len(marker):].strip()
            if item:
                items.append(item)
    return items


def _bullets(window: str, marker: str) -> list[str]:
    return [
        line.lstrip()[len(marker):].strip()
        for line in window.splitlines()
        if line.lstrip().startswith(marker) and line.lstrip()[len(marker):].strip()
    ]


def _body_after_label(window: str) -> str:
    """Body of a heading window with its leading ``**label:**`` line removed."""
    body = window.strip()
    first, _, rest = body.partition("\n")
    if _LABEL_LINE.match(first.strip()):
        body = rest
    return _clean(body)


class BlueprintParser:
    """Re-extract the editable model from a stored blueprint document.

    Every namespace is filled by its own extractor. A section that is missing
    or malformed leaves that namespace at its default value; the parse as a
    whole always returns a fully shaped model.
    """

    def parse(self, document: str) -> EditableContent:
        content = EditableContent()
        if not document:
            return content
        extractors: list[tuple[str, Callable[[str, EditableContent], None]]] = [
            ("hero", self._parse_hero),
            ("problem", self._parse_problem),
            ("transformation", self._parse_transformation),
            ("benefits", self._parse_benefits),
            ("about", self._parse_about),
            ("final_cta", self._parse_final_cta),
            ("lead_magnet", self._parse_lead_magnet),
            ("emails", self._parse_emails),
            ("social_capture", self._parse_social_capture),
            ("lead_magnet_workflow", self._parse_lead_magnet_workflow),
        ]
        for name, extractor in extractors:
            try:
                extractor(document, content)
            except Exception:
                logger.warning(
                    "Failed to parse blueprint section",
                    exc_info=True,
                    extra={"section": name},
                )
        return content

    def _update_landing_page(self, content: EditableContent, **fields) -> None:
        content.landing_page = content.landing_page.model_copy(update=fields)

    def _parse_hero(self, document: str, content: EditableContent) -> None:
        window = _heading_window(document, d.HEADING_HERO)
        if window is None:
            return
        self._update_landing_page(
            content,
            hero_headline=_label_value(window, d.LABEL_HEADLINE),
            hero_subheadline=_label_value(window, d.LABEL_SUBHEADLINE),
            hero_button_text=_label_value(window, d.LABEL_CTA_BUTTON),
        )

    def _parse_problem(self, document: str, content: EditableContent) -> None:
        window = _heading_window(document, d.HEADING_PROBLEM)
        if window is None:
            return
        self._update_landing_page(
            content,
            problem_intro=_label_value(window, d.LABEL_INTRO),
            pain_points=_marked_list(window, d.LABEL_PAIN_POINTS, d.BULLET),
        )

    def _parse_transformation(self, document: str, content: EditableContent) -> None:
        window = _heading_window(document, r"IMAGINE[^\n]*FROM NOW[^\n]*?", literal=False)
        if window is None:
            return
        self._update_landing_page(
            content,
            transformation_intro=_label_value(window, d.LABEL_INTRO),
            transformation_points=_marked_list(window, d.LABEL_TRANSFORMATION_POINTS, d.BULLET),
            transformation_button_text=_label_value(window, d.LABEL_CTA_BUTTON),
        )

    def _parse_benefits(self, document: str, content: EditableContent) -> None:
        window = _heading_window(document, d.HEADING_BENEFITS)
        if window is None:
            return
        self._update_landing_page(
            content,
            benefits_title=_label_value(window, d.LABEL_SECTION_TITLE),
            benefits=_marked_list(window, d.LABEL_BENEFITS, d.CHECK),
            benefits_button_text=_label_value(window, d.LABEL_CTA_BUTTON),
        )

    def _parse_about(self, document: str, content: EditableContent) -> None:
        window = _heading_window(document, d.HEADING_ABOUT)
        if window is None:
            return
        self._update_landing_page(
            content,
            about_headline=_label_value(window, d.LABEL_HEADLINE),
            about_subheadline=_label_value(window, d.LABEL_SUBHEADLINE),
            about_bio=_label_block(window, d.LABEL_BIO),
        )

    def _parse_final_cta(self, document: str, content: EditableContent) -> None:
        window = _heading_window(document, d.HEADING_FINAL_CTA)
        if window is None:
            return
        self._update_landing_page(
            content,
            final_cta_headline=_label_value(window, d.LABEL_HEADLINE),
            final_cta_button_text=_label_value(window, d.LABEL_CTA_BUTTON),
            final_cta_below_text=_label_value(window, d.LABEL_BELOW_FORM),
        )

    def _lead_magnet_bounds(self, document: str) -> tuple[int, int, re.Match[str] | None]:
        header = re.search(r"^## ([^\n]*)\n+\*Format:[ \t]*([^*\n]*)\*", document, re.MULTILINE)
        if header:
            start = header.start()
        else:
            banner = re.search(rf"^{re.escape(d.SECTION_LEAD_MAGNET)}", document, re.MULTILINE)
            start = banner.end() if banner else 0
        end_match = re.compile(
            rf"^### {re.escape(d.HEADING_CONCLUSION)}|^═{{3,}}[ \t]*\n+SECTION", re.MULTILINE
        ).search(document, start)
        end = end_match.start() if end_match else len(document)
        return start, end, header

    def _parse_lead_magnet(self, document: str, content: EditableContent) -> None:
        start, end, header = self._lead_magnet_bounds(document)
        window = document[start:end]
        fields: dict[str, object] = {}
        if header:
            fields["title"] = header.group(1).strip()
            fields["format"] = header.group(2).strip()

        intro = re.search(
            rf"^### {re.escape(d.HEADING_INTRODUCTION)}[ \t]*\n(.*?)(?=^-{{3,}}|^#{{2,3}} |^═{{3,}}|\Z)",
            window,
            _FLAGS,
        )
        if intro:
            fields["intro"] = _clean(intro.group(1))

        points = [
            LeadMagnetPoint(title=match.group(1).strip(), content=_clean(match.group(2)))
            for match in re.finditer(
                r"^### \d+\.[ \t]*([^\n]*)\n(.*?)(?=^#{2,3} |\Z)",
                window,
                _FLAGS,
            )
        ]
        if points:
            fields["points"] = points

        conclusion = re.search(
            rf"^### {re.escape(d.HEADING_CONCLUSION)}[ \t]*\n(.*?)(?=^═{{3,}}|\Z)",
            document[start:],
            _FLAGS,
        )
        if conclusion:
            fields["conclusion"] = _clean(conclusion.group(1))

        if fields:
            content.lead_magnet = content.lead_magnet.model_copy(update=fields)

    def _parse_emails(self, document: str, content: EditableContent) -> None:
        emails: list[EmailContent] = []
        for match in re.finditer(
            r"^## EMAIL \d+:[ \t]*([^\n]*)\n(.*?)(?=^## EMAIL \d+:|^═{3,}|\Z)",
            document,
            _FLAGS,
        ):
            block = match.group(2)
            send = re.search(r"^\*Send:[ \t]*([^*\n]*)\*", block, re.MULTILINE)
            body = re.search(rf"\*\*{re.escape(d.LABEL_BODY)}:\*\*[ \t]*\n(.*)", block, re.DOTALL)
            emails.append(
                EmailContent(
                    title=match.group(1).strip(),
                    day=send.group(1).strip() if send else "",
                    subject_line=_label_value(block, d.LABEL_SUBJECT),
                    body=_clean(body.group(1)) if body else "",
                )
            )
        content.emails = emails

    def _parse_social_capture(self, document: str, content: EditableContent) -> None:
        fields: dict[str, object] = {}

        dm_window = _heading_window(document, d.HEADING_DM)
        if dm_window is not None:
            fields["dm_message"] = _body_after_label(dm_window)

        replies_window = _heading_window(document, d.HEADING_COMMENT_REPLIES)
        if replies_window is not None:
            fields["comment_replies"] = [
                match.group(1).strip()
                for match in re.finditer(r"^\d+\.[ \t]+([^\n]+)$", replies_window, re.MULTILINE)
            ]

        keywords_window = _heading_window(document, d.HEADING_KEYWORDS)
        if keywords_window is not None:
            fields["keywords"] = _bullets(keywords_window, d.BULLET)

        ctas_window = _heading_window(document, d.HEADING_POST_CTAS)
        if ctas_window is not None:
            fields["post_ctas"] = [
                PostCTA(hook=match.group(1).strip(), content=_clean(match.group(2)))
                for match in re.finditer(
                    r"^\*\*([^*\n]*Hook):\*\*[ \t]*\n(.*?)(?=^\*\*[^*\n]*Hook:\*\*|\Z)",
                    ctas_window,
                    _FLAGS,
                )
            ]

        if fields:
            content.social_capture = content.social_capture.model_copy(update=fields)

    def _parse_lead_magnet_workflow(self, document: str, content: EditableContent) -> None:
        dm_window = _heading_window(document, d.HEADING_LEAD_MAGNET_DM)
        if dm_window is not None:
            dm_message = _body_after_label(dm_window)
        else:
            dm_message = content.social_capture.dm_message

        post_ctas: list[str] = []
        title = content.lead_magnet.title
        if title:
            lead_format = format_short(content.lead_magnet.format).lower() or "guide"
            post_ctas = [
                template.format(title=title, format=lead_format)
                for template in d.WORKFLOW_POST_CTA_TEMPLATES
            ]
        content.lead_magnet_workflow = LeadMagnetWorkflowContent(
            dm_message=dm_message, post_ctas=post_ctas
        )


def parse_blueprint(document: str) -> EditableContent:
    return BlueprintParser().parse(document)


def split_sections(document: str) -> dict[str, str]:
    """Raw text of each top-level section, for copying straight from the document."""
    sections: dict[str, str] = {}
    for key, banner in d.SECTION_BANNERS.items():
        match = re.search(
            rf"^{re.escape(banner)}[ \t]*\n.*?(?=\n═{{3,}}[ \t]*\n\s*(?:SECTION \d+:|{re.escape(d.SECTION_NEXT_STEPS)})|\Z)",
            document or "",
            _FLAGS,
        )
        sections[key] = match.group(0).strip() if match else ""
    return sections


__all__ = ["BlueprintParser", "parse_blueprint", "split_sections"]
