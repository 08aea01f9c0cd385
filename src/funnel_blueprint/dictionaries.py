from __future__ import annotations

from typing import Mapping, Sequence


FUNNEL_CRAFT_QUESTIONS: Sequence[str] = (
    "What's the #1 problem your ideal client is struggling with? The thing they're Googling at 2am?",
    "What's a quick win you could give them? Something they could do or learn in 10-15 minutes that would make them feel progress?",
    "What format would work best for this quick win? (Checklist, Cheat Sheet, Short Guide (PDF), Video Training, Audio/Meditation)",
    "What would you call this free resource? Give me a working title.",
    "What are the main points or steps you'd include? Just give me 3-7 bullet points — we'll flesh these out.",
    "Who is your ideal client? Describe them like you're describing a friend.",
    "What specific transformation do you help them achieve? What's different after working with you?",
    "What do you offer people who want to go further? (discovery call, program, paid session...)",
    "What objections or doubts stop people from taking the next step with you?",
)

CRAFT_INTRO = (
    "Let's create your lead generation system — a free resource, landing page, "
    "email sequence, and social media templates that bring you aligned clients.\n\n"
    "I'll ask you 9 questions, then generate everything you need."
)

CRAFT_COMPLETE_MESSAGE = (
    "Your Funnel Blueprint is ready! Head to 'Build Your Funnel' to implement "
    "each piece. Your generated content is ready to paste."
)


# Marker vocabulary shared by the generator and the parser.
RULE = "═" * 63
SUB_RULE = "-----"

DOCUMENT_TITLE = "YOUR FUNNEL BLUEPRINT"

SECTION_LEAD_MAGNET = "SECTION 1: LEAD MAGNET CONTENT"
SECTION_LANDING_PAGE = "SECTION 2: LANDING PAGE COPY"
SECTION_EMAILS = "SECTION 3: EMAIL SEQUENCE"
SECTION_SOCIAL_CAPTURE = "SECTION 4: LEAD MAGNET SOCIAL CAPTURE"
SECTION_NEXT_STEPS = "NEXT STEPS"

SECTION_BANNERS: Mapping[str, str] = {
    "lead_magnet": SECTION_LEAD_MAGNET,
    "landing_page": SECTION_LANDING_PAGE,
    "emails": SECTION_EMAILS,
    "social_capture": SECTION_SOCIAL_CAPTURE,
}

HEADING_HERO = "HERO SECTION"
HEADING_PROBLEM = "DOES THIS SOUND LIKE YOU?"
HEADING_IMAGINE = "IMAGINE A FEW WEEKS FROM NOW…"
HEADING_BENEFITS = "WHAT YOU'LL GET"
HEADING_ABOUT = "ABOUT ME"
HEADING_FINAL_CTA = "FINAL CTA"
HEADING_KEEP_OR_DELETE = "SECTIONS TO KEEP OR DELETE"
HEADING_DM = "DM MESSAGE TEMPLATE"
HEADING_LEAD_MAGNET_DM = "LEAD MAGNET DM"
HEADING_COMMENT_REPLIES = "COMMENT REPLY VARIATIONS"
HEADING_POST_CTAS = "POST CTA EXAMPLES"
HEADING_KEYWORDS = "SUGGESTED KEYWORDS"

HEADING_INTRODUCTION = "Introduction"
HEADING_CONCLUSION = "Conclusion + Next Step"

LABEL_HEADLINE = "Headline"
LABEL_SUBHEADLINE = "Subheadline"
LABEL_CTA_BUTTON = "CTA Button Text"
LABEL_INTRO = "Intro"
LABEL_PAIN_POINTS = "Pain Points"
LABEL_TRANSFORMATION_POINTS = "Transformation Points"
LABEL_SECTION_TITLE = "Section Title"
LABEL_BENEFITS = "Benefits"
LABEL_BIO = "Bio"
LABEL_BELOW_FORM = "Below Form Text"
LABEL_SUBJECT = "Subject Line"
LABEL_BODY = "Body"
LABEL_DM = "For Comment-to-DM Automation"

BULLET = "• "
CHECK = "✓ "

HOOK_PROBLEM = "Problem-Aware Hook"
HOOK_ASPIRATION = "Aspiration Hook"
HOOK_CURIOSITY = "Curiosity Hook"

EMAIL_SCHEDULE: Sequence[tuple[str, str]] = (
    ("Welcome + Delivery", "Immediately"),
    ("Value + Teaching", "Day 2"),
    ("Objections + Proof", "Day 4"),
    ("Invitation", "Day 7"),
)


# Static copy blocks.
COMMENT_REPLIES: Sequence[str] = (
    "Just sent you a DM! 💫",
    "Check your messages ✨",
    "Sent you the details — check your DMs!",
    "Message incoming! 📩",
    "Just DMed you the link 🙌",
)

SUGGESTED_KEYWORDS: Sequence[str] = (
    "FREE",
    "YES",
    "GUIDE",
    "SEND",
    "[Custom keyword related to your topic]",
)

KEEP_OR_DELETE_GUIDANCE: Sequence[str] = (
    "Hero: keep — every landing page needs it",
    "Does This Sound Like You: keep — it builds recognition",
    "Imagine: optional — delete if the page feels long",
    "What You'll Get: keep — it shows the value of the free resource",
    "About Me: optional — keep if you have a strong story or credentials",
    "Final CTA: keep — give readers a second chance to opt in",
)

NEXT_STEPS: Sequence[str] = (
    "Head to \"Build Your Funnel\" to implement each piece",
    "Create your lead magnet from the content outline",
    "Paste your landing page copy and email sequence into your system",
    "Activate your comment-to-DM workflow with the social capture templates",
)

BELOW_FORM_TEXT = "Your info is safe. Unsubscribe anytime."

BOOKING_PLACEHOLDER = "[YOUR BOOKING LINK]"

WORKFLOW_POST_CTA_TEMPLATES: Sequence[str] = (
    'I just made my {format} "{title}" free for you. Comment "FREE" below and I\'ll send it straight to your DMs.',
    'Want {title}? It\'s a free {format} that walks you through it step by step. Comment "SEND" and it\'s yours.',
)


__all__ = [
    "FUNNEL_CRAFT_QUESTIONS",
    "CRAFT_INTRO",
    "CRAFT_COMPLETE_MESSAGE",
    "RULE",
    "SUB_RULE",
    "SECTION_BANNERS",
    "EMAIL_SCHEDULE",
    "COMMENT_REPLIES",
    "SUGGESTED_KEYWORDS",
    "KEEP_OR_DELETE_GUIDANCE",
    "NEXT_STEPS",
    "WORKFLOW_POST_CTA_TEMPLATES",
]
