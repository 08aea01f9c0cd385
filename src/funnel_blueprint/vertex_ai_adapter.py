from __future__ import annotations

import json
import logging
from typing import Any

import vertexai
from pydantic import ValidationError
from vertexai.generative_models import GenerationConfig, GenerativeModel

from .models.funnel_copy import EmailCopy, FunnelCopy, FunnelCopyRequest, LandingPageCopy

logger = logging.getLogger(__name__)

FUNNEL_COPY_SYSTEM_PROMPT = """You are a marketing copywriter who specializes in helping coaches, healers, and wellness practitioners create authentic, warm content that converts. You use the PAS (Problem-Agitate-Solution) framework but keep the tone conversational and non-pushy.

Generate marketing content based on the user's business information. The content should feel personal, warm, and speak directly to their ideal client's pain points.

IMPORTANT: Return ONLY valid JSON with no markdown formatting, no code blocks, just the raw JSON object."""


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def fallback_funnel_copy(request: FunnelCopyRequest) -> FunnelCopy:
    """Deterministic copy used when the model output cannot be used."""
    lead_magnet = request.lead_magnet or "your free guide"
    ideal_client = request.ideal_client or "you"
    domain = request.domain or "yourdomain.com"
    return FunnelCopy(
        post_caption=(
            f"🌟 Ready to {lead_magnet.lower()}?\n\n"
            f"I created something special for {ideal_client.lower()}...\n\n"
            "Comment \"GUIDE\" below and I'll send it to you! 👇"
        ),
        dm_template=(
            "Hey! 👋 Thanks for your interest!\n\n"
            f"Here's your free resource: https://{domain}\n\n"
            "Let me know if you have any questions!"
        ),
        landing_page=LandingPageCopy(
            headline=f"Free: {request.lead_magnet or 'Your Guide'}",
            subheadline=f"For {request.ideal_client or 'those ready to transform'}",
            button_text="Get Instant Access",
        ),
        delivery_email=EmailCopy(
            subject=f"Your {request.lead_magnet or 'free resource'} is here! 🎉",
            body=(
                "Hi there!\n\nThank you for requesting your free resource.\n\n"
                "You can access it here: [LINK]\n\nEnjoy!\n\nWarmly"
            ),
        ),
        followup_email=EmailCopy(
            subject="Quick tip for you",
            body=(
                "Hi there!\n\nI hope you're finding value in the resource I sent!\n\n"
                "Here's a quick tip to get even more from it...\n\nWarmly"
            ),
        ),
        fallback=True,
    )


class VertexAIAdapter:
    """Adapter for Vertex AI Gemini models."""

    def __init__(
        self,
        *,
        project_id: str,
        location: str = "asia-northeast1",
        model_name: str = "gemini-1.5-pro",
        model: GenerativeModel | None = None,
    ) -> None:
        """Initialize Vertex AI adapter.

        Args:
            project_id: GCP project ID
            location: Vertex AI location
            model_name: Model name (e.g., "gemini-1.5-pro")
            model: Pre-built model, skips ``vertexai.init`` when given
        """
        self.project_id = project_id
        self.location = location
        self.model_name = model_name

        if model is None:
            vertexai.init(project=project_id, location=location)
            model = GenerativeModel(model_name, system_instruction=FUNNEL_COPY_SYSTEM_PROMPT)
        self.model = model

    def generate_content(
        self,
        prompt: str,
        *,
        temperature: float = 0.7,
        max_output_tokens: int = 8192,
        response_format: str | None = None,
    ) -> str:
        """Generate content using Vertex AI.

        Args:
            prompt: Input prompt
            temperature: Sampling temperature (0.0 - 1.0)
            max_output_tokens: Maximum output tokens
            response_format: Optional response format ("json" for JSON mode)

        Returns:
            Generated text
        """
        generation_config = GenerationConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            response_mime_type="application/json" if response_format == "json" else None,
        )

        response = self.model.generate_content(
            prompt,
            generation_config=generation_config,
        )

        generated_text = response.text

        logger.info(
            "Generated content with Vertex AI",
            extra={
                "model": self.model_name,
                "temperature": temperature,
                "input_length": len(prompt),
                "output_length": len(generated_text),
            },
        )

        return generated_text

    def generate_json(
        self,
        prompt: str,
        *,
        temperature: float = 0.7,
        max_output_tokens: int = 8192,
    ) -> Any:
        """Generate a structured JSON response.

        Raises:
            ValueError: If the model does not return valid JSON
        """
        response = self.generate_content(
            prompt,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            response_format="json",
        )

        try:
            return json.loads(_strip_code_fences(response))
        except json.JSONDecodeError as exc:
            logger.error(
                "Failed to parse JSON response",
                exc_info=True,
                extra={"response": response},
            )
            raise ValueError(f"Invalid JSON response: {exc}") from exc

    def generate_funnel_copy(self, request: FunnelCopyRequest) -> FunnelCopy:
        """Generate post, DM, landing page and email copy for a coach.

        Falls back to deterministic copy when the model answers with something
        that is not the expected JSON object. Transport errors propagate.
        """
        prompt = f"""Create marketing content for this coach:

Business: {request.coaching_type}
Ideal Client: {request.ideal_client}
Main Problem: {request.main_problem}
Lead Magnet: {request.lead_magnet}
Next Step: {request.next_step}
Social Handle: {request.social_handle or ""}
Website Domain: {request.domain or ""}

Generate:
1. An Instagram/Facebook post caption (with a clear CTA asking people to comment a keyword like "GUIDE" or "YES" to get the free resource)
2. A DM template that warmly delivers the link when someone comments
3. Landing page copy (headline, subheadline, button text)
4. A delivery email (subject + body) that delivers the lead magnet
5. A follow-up email for day 2 (subject + body) that adds value and has a soft CTA

Return as JSON with this exact structure:
{{
  "post_caption": "string",
  "dm_template": "string",
  "landing_page": {{"headline": "string", "subheadline": "string", "button_text": "string"}},
  "delivery_email": {{"subject": "string", "body": "string"}},
  "followup_email": {{"subject": "string", "body": "string"}}
}}
"""

        try:
            result = self.generate_json(prompt, temperature=0.8)
            return FunnelCopy.model_validate(result)
        except (ValueError, ValidationError):
            logger.warning(
                "Falling back to template funnel copy",
                exc_info=True,
                extra={"model": self.model_name, "lead_magnet": request.lead_magnet},
            )
            return fallback_funnel_copy(request)


__all__ = ["VertexAIAdapter", "fallback_funnel_copy", "FUNNEL_COPY_SYSTEM_PROMPT"]
