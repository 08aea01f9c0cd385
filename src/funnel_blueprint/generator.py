from __future__ import annotations

import re
from typing import Sequence

from . import dictionaries as d
from .models.answers import FunnelAnswers

CONTACT_FIRST_NAME = "{{contact.first_name}}"

_POINT_DELIMITERS = re.compile(r"\d+\.|•|-|\n")

MAX_OUTLINE_POINTS = 7
MAX_BENEFITS = 5


def split_points(text: str) -> list[str]:
    """Split a free-text enumeration on numbering, bullets, hyphens and newlines."""
    return [part.strip() for part in _POINT_DELIMITERS.split(text) if part.strip()]


def format_short(lead_magnet_format: str) -> str:
    short = re.sub(r"\s*\(PDF\)", "", lead_magnet_format).replace("Short ", "")
    return _inline(short)


def _inline(text: str) -> str:
    return " ".join(text.split())


def _clip(text: str, limit: int) -> str:
    return _inline(text)[:limit]


def _lower(text: str, limit: int) -> str:
    return _clip(text, limit).lower()


def _label(label: str, value: str) -> str:
    return f"**{label}:**\n{value}"


class BlueprintGenerator:
    def __init__(
        self,
        *,
        email_schedule: Sequence[tuple[str, str]] = d.EMAIL_SCHEDULE,
        comment_replies: Sequence[str] = d.COMMENT_REPLIES,
        keywords: Sequence[str] = d.SUGGESTED_KEYWORDS,
        next_steps: Sequence[str] = d.NEXT_STEPS,
    ) -> None:
        if len(email_schedule) != 4:
            raise ValueError("The email sequence has exactly 4 emails")
        self._email_schedule = tuple(email_schedule)
        self._comment_replies = tuple(comment_replies)
        self._keywords = tuple(keywords)
        self._next_steps = tuple(next_steps)

    def generate(
        self,
        answers: FunnelAnswers | Sequence[str],
        author_name: str,
        date: str,
    ) -> str:
        if not isinstance(answers, FunnelAnswers):
            answers = FunnelAnswers.from_list(answers)
        points = split_points(answers.points)
        blocks = [
            "\n".join(
                [
                    d.DOCUMENT_TITLE,
                    "",
                    f"Created for: {author_name}",
                    f"Date: {date}",
                ]
            ),
            self._banner(d.SECTION_LEAD_MAGNET),
            self._build_lead_magnet(answers, points),
            self._banner(d.SECTION_LANDING_PAGE),
            self._build_landing_page(answers, points, author_name),
            self._banner(d.SECTION_EMAILS),
            self._build_emails(answers, points, author_name),
            self._banner(d.SECTION_SOCIAL_CAPTURE),
            self._build_social_capture(answers, author_name),
            self._banner(d.SECTION_NEXT_STEPS),
            "\n".join(f"✅ {step}" for step in self._next_steps),
            d.RULE,
        ]
        return "\n\n".join(blocks)

    def _banner(self, title: str) -> str:
        return f"{d.RULE}\n\n{title}\n\n{d.RULE}"

    def _join(self, parts: Sequence[str]) -> str:
        return f"\n\n{d.SUB_RULE}\n\n".join(parts)

    def _offer_sentence(self, answers: FunnelAnswers) -> str:
        offer = answers.offer.lower()
        if "call" in offer or "book" in offer:
            return (
                "If you're ready to go deeper, I'd love to help. Book a time and let's "
                f"talk about your next steps: {d.BOOKING_PLACEHOLDER}"
            )
        return f"If you want to take this further, I'd love to tell you about {_lower(answers.offer, 80)}."

    def _build_lead_magnet(self, answers: FunnelAnswers, points: Sequence[str]) -> str:
        short = format_short(answers.format).lower()
        header = "\n\n".join(
            [f"## {_inline(answers.title)}", f"*Format: {_inline(answers.format)}*"]
        )
        intro = "\n\n".join(
            [
                f"### {d.HEADING_INTRODUCTION}",
                f"{_inline(answers.problem)} — it's frustrating, overwhelming, and you're not "
                f"alone. This {short} will help you {_lower(answers.quick_win, 80)}.",
            ]
        )
        outline = "\n\n".join(
            f"### {index}. {point}\n\n"
            "[Add 2-3 sentences explaining this point. Include one specific, actionable "
            "tip they can implement immediately.]"
            for index, point in enumerate(points[:MAX_OUTLINE_POINTS], start=1)
        )
        conclusion = "\n\n".join(
            [
                f"### {d.HEADING_CONCLUSION}",
                f"You now have the foundation to {_lower(answers.transformation, 60)}. Take "
                "action on even one of these points and you'll feel the difference.",
                self._offer_sentence(answers),
            ]
        )
        parts = [header, intro]
        if outline:
            parts.append(outline)
        parts.append(conclusion)
        return self._join(parts)

    def _build_landing_page(
        self,
        answers: FunnelAnswers,
        points: Sequence[str],
        author_name: str,
    ) -> str:
        short = format_short(answers.format)
        title = _inline(answers.title)
        hero = "\n\n".join(
            [
                f"## {d.HEADING_HERO}",
                _label(d.LABEL_HEADLINE, title),
                _label(
                    d.LABEL_SUBHEADLINE,
                    f"For {_lower(answers.ideal_client, 60)}: discover "
                    f"{_lower(answers.quick_win, 60)}.",
                ),
                _label(d.LABEL_CTA_BUTTON, f"Get My Free {short}"),
            ]
        )
        pain_points = [
            f"You're tired of {_lower(answers.problem, 60)}",
            f"You keep telling yourself {_lower(answers.objections, 60)}",
            "You've tried different solutions but nothing seems to stick",
            f"You want {_lower(answers.transformation, 50)} but you're not sure how to get there",
        ]
        problem = "\n\n".join(
            [
                f"## {d.HEADING_PROBLEM}",
                _label(
                    d.LABEL_INTRO,
                    f"You're {_lower(answers.ideal_client, 80)}, and you've been struggling "
                    f"with {_lower(answers.problem, 60)}. Sound familiar?",
                ),
                _label(d.LABEL_PAIN_POINTS, "\n".join(d.BULLET + item for item in pain_points)),
            ]
        )
        transformation_points = [
            f"You {_lower(answers.transformation, 80)}",
            "You've stopped second-guessing yourself and started taking action",
            "You finally feel confident and in control",
            "You know exactly what to do next",
        ]
        imagine = "\n\n".join(
            [
                f"## {d.HEADING_IMAGINE}",
                _label(
                    d.LABEL_INTRO,
                    f"You've downloaded the {title}. You've actually used it. And now?",
                ),
                _label(
                    d.LABEL_TRANSFORMATION_POINTS,
                    "\n".join(d.BULLET + item for item in transformation_points),
                ),
                _label(d.LABEL_CTA_BUTTON, "Yes, I Want This!"),
            ]
        )
        benefits = "\n\n".join(
            [
                f"## {d.HEADING_BENEFITS}",
                _label(d.LABEL_SECTION_TITLE, f"Inside your free {title}:"),
                _label(
                    d.LABEL_BENEFITS,
                    "\n".join(d.CHECK + point for point in points[:MAX_BENEFITS]),
                ),
                _label(d.LABEL_CTA_BUTTON, f"Send Me the {short}"),
            ]
        )
        about = "\n\n".join(
            [
                f"## {d.HEADING_ABOUT}",
                _label(d.LABEL_HEADLINE, f"Hi! I'm {_inline(author_name)}."),
                _label(
                    d.LABEL_SUBHEADLINE,
                    f"I help {_lower(answers.ideal_client, 80)} "
                    f"{_lower(answers.transformation, 60)}.",
                ),
                _label(
                    d.LABEL_BIO,
                    "[Add your credibility here: certifications, years of experience, "
                    "results you've helped clients achieve]\n\n"
                    "[Share a short piece of your story: why you do this work]\n\n"
                    f"I created this free {short.lower()} because I know what it's like to "
                    f"face {_lower(answers.problem, 60)}. This is the starting point I wish I'd had.",
                ),
            ]
        )
        final_cta = "\n\n".join(
            [
                f"## {d.HEADING_FINAL_CTA}",
                _label(d.LABEL_HEADLINE, f"Ready to {_lower(answers.transformation, 40)}?"),
                _label(d.LABEL_CTA_BUTTON, f"Get My Free {short}"),
                _label(d.LABEL_BELOW_FORM, d.BELOW_FORM_TEXT),
            ]
        )
        keep_or_delete = "\n\n".join(
            [
                f"## {d.HEADING_KEEP_OR_DELETE}",
                "\n".join(d.BULLET + line for line in d.KEEP_OR_DELETE_GUIDANCE),
            ]
        )
        return self._join([hero, problem, imagine, benefits, about, final_cta, keep_or_delete])

    def _build_emails(
        self,
        answers: FunnelAnswers,
        points: Sequence[str],
        author_name: str,
    ) -> str:
        title = _inline(answers.title)
        first_point = points[0] if points else "[Point 1 from your lead magnet]"
        subjects = (
            f"Your {title} is here ✨",
            f"The #1 mistake I see {_lower(answers.ideal_client, 30)} make",
            "Is this what's holding you back?",
            "Ready for the next step?",
        )
        bodies = (
            "\n\n".join(
                [
                    f"Hey {CONTACT_FIRST_NAME},",
                    "Welcome! I'm so glad you're here.",
                    f"Here's your free {title}: [LINK]",
                    f"Inside, you'll discover {_lower(answers.quick_win, 60)}.",
                    f'Start with "{first_point}" — try it today and let me know how it goes.',
                    author_name,
                    "P.S. Keep an eye on your inbox — over the next week I'll share a few "
                    f"insights that'll help you {_lower(answers.transformation, 40)}.",
                ]
            ),
            "\n\n".join(
                [
                    f"Hey {CONTACT_FIRST_NAME},",
                    "Here's something I've noticed after working with dozens of "
                    f"{_lower(answers.ideal_client, 30)}...",
                    f"Most people think the solution to {_lower(answers.problem, 40)} is "
                    "[common assumption]. But actually, it starts with "
                    f"{_lower(answers.quick_win, 60)}.",
                    "Here's what I'd suggest: [One specific, actionable tip]",
                    "Try it and let me know how it goes. I read every reply.",
                    author_name,
                ]
            ),
            "\n\n".join(
                [
                    f"Hey {CONTACT_FIRST_NAME},",
                    "Can we talk about something?",
                    "If you haven't taken the next step yet, I get it. Maybe there's a voice "
                    f'saying: "{_clip(answers.objections, 100)}"',
                    "[Client name or \"A client of mine\"] felt the same way. They were dealing "
                    f"with {_lower(answers.problem, 60)}.",
                    f"After working together, they {_lower(answers.transformation, 80)}.",
                    "This is possible for you too.",
                    author_name,
                ]
            ),
            "\n\n".join(
                [
                    f"Hey {CONTACT_FIRST_NAME},",
                    "You've been reading my emails (thank you!), and I have a question...",
                    f"Are you still dealing with {_lower(answers.problem, 40)}?",
                    "If so, I'd love to help.",
                    self._offer_sentence(answers),
                    author_name,
                ]
            ),
        )
        emails = []
        for number, ((email_title, send), subject, body) in enumerate(
            zip(self._email_schedule, subjects, bodies), start=1
        ):
            emails.append(
                "\n\n".join(
                    [
                        f"## EMAIL {number}: {email_title}\n*Send: {send}*",
                        _label(d.LABEL_SUBJECT, subject),
                        _label(d.LABEL_BODY, body),
                    ]
                )
            )
        return self._join(emails)

    def _build_social_capture(self, answers: FunnelAnswers, author_name: str) -> str:
        short = format_short(answers.format).lower()
        title = _inline(answers.title)
        dm = "\n\n".join(
            [
                f"## {d.HEADING_DM}",
                f"**{d.LABEL_DM}:**",
                f"Hey {CONTACT_FIRST_NAME}! 👋",
                f"Thanks for reaching out — I'm so glad you want the {title}.",
                "Here's where you can grab it: [LANDING PAGE LINK]",
                f"Inside you'll find {_lower(answers.quick_win, 50)}.",
                "Let me know what you think!",
                author_name,
            ]
        )
        replies = "\n\n".join(
            [
                f"## {d.HEADING_COMMENT_REPLIES}",
                "*(For auto-reply to comments)*",
                "\n".join(
                    f"{index}. {reply}"
                    for index, reply in enumerate(self._comment_replies, start=1)
                ),
            ]
        )
        post_ctas = "\n\n".join(
            [
                f"## {d.HEADING_POST_CTAS}",
                _label(
                    d.HOOK_PROBLEM,
                    f"Struggling with {_lower(answers.problem, 40)}? I put together a free "
                    f"{short} that shows you {_lower(answers.quick_win, 40)}.\n\n"
                    "Comment \"FREE\" and I'll DM you the link.",
                ),
                _label(
                    d.HOOK_ASPIRATION,
                    f"Want to {_lower(answers.transformation, 40)} without "
                    f"{_lower(answers.objections, 30)}?\n\n"
                    f"I created {title} just for you.\n\n"
                    "Comment \"YES\" below and I'll send it over.",
                ),
                _label(
                    d.HOOK_CURIOSITY,
                    "I used to think [common misconception about "
                    f"{_lower(answers.problem, 20)}]. Then I discovered "
                    f"{_lower(answers.quick_win, 50)}.\n\n"
                    f"I put everything I learned into a free {short}. "
                    "Comment \"GUIDE\" if you want it.",
                ),
            ]
        )
        keywords = "\n\n".join(
            [
                f"## {d.HEADING_KEYWORDS}",
                "\n".join(d.BULLET + keyword for keyword in self._keywords),
            ]
        )
        return self._join([dm, replies, post_ctas, keywords])


def generate_blueprint(
    answers: FunnelAnswers | Sequence[str],
    author_name: str,
    date: str,
) -> str:
    return BlueprintGenerator().generate(answers, author_name, date)


__all__ = [
    "BlueprintGenerator",
    "generate_blueprint",
    "split_points",
    "format_short",
    "CONTACT_FIRST_NAME",
]
