# app/services/openai_service.py
"""
OpenAI Service for LinkedIn content generation.
Wraps chat completions and maps provider failures onto ExternalServiceError.
"""

import json
import re
from typing import Any

import openai
from openai import AsyncOpenAI

from app.config import settings
from app.infrastructure.observability.logging import get_logger
from app.utils.errors import ExternalServiceError

logger = get_logger(__name__)

_JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


class OpenAIService:
    """
    Text generation backed by the OpenAI chat completions API.

    ``is_configured`` is False when no API key is set; callers are expected to
    fall back to templates instead of calling the provider.
    """

    def __init__(self, client: AsyncOpenAI | None = None):
        self.client = client
        if self.client is None and settings.OPENAI_API_KEY:
            self.client = AsyncOpenAI(
                api_key=settings.OPENAI_API_KEY,
                timeout=settings.OPENAI_TIMEOUT_SECONDS,
            )
            logger.info(
                "OpenAI client initialized",
                model=settings.OPENAI_MODEL,
                timeout=settings.OPENAI_TIMEOUT_SECONDS,
            )

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def _complete(self, prompt: str, max_tokens: int, operation: str) -> str:
        if not self.client:
            raise ExternalServiceError(
                "AI service is not configured", reason="auth_misconfigured"
            )

        try:
            response = await self.client.chat.completions.create(
                model=settings.OPENAI_MODEL,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens,
            )
        except openai.RateLimitError as e:
            logger.warning("OpenAI rate limit hit", operation=operation, error=str(e))
            raise ExternalServiceError(
                "AI service rate limit reached. Please try again later.",
                reason="rate_limited",
            ) from e
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            logger.error("OpenAI authentication failed", operation=operation, error=str(e))
            raise ExternalServiceError(
                "AI service authentication failed. Please check API key.",
                reason="auth_misconfigured",
            ) from e
        except openai.OpenAIError as e:
            logger.error(
                "OpenAI API call failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ExternalServiceError(f"AI {operation} failed: {e}") from e

        if not response.choices or not response.choices[0].message.content:
            raise ExternalServiceError(f"AI {operation} failed: empty response")

        content = response.choices[0].message.content.strip()
        logger.info(
            "OpenAI API call successful",
            operation=operation,
            response_length=len(content),
            usage_tokens=response.usage.total_tokens if response.usage else 0,
        )
        return content

    async def generate_text(self, prompt: str, max_tokens: int = 1500) -> str:
        return await self._complete(prompt, max_tokens, "content generation")

    async def generate_json_list(self, prompt: str, max_tokens: int = 2000) -> list[Any]:
        """Run a prompt that must answer with a JSON array and parse it."""
        text = await self._complete(prompt, max_tokens, "structured generation")
        match = _JSON_ARRAY_RE.search(text)
        if not match:
            raise ExternalServiceError("AI structured generation failed: no JSON array in response")
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise ExternalServiceError(
                "AI structured generation failed: invalid JSON in response"
            ) from e
        if not isinstance(parsed, list):
            raise ExternalServiceError("AI structured generation failed: expected a list")
        return parsed

    async def generate_linkedin_post(
        self,
        topic: str,
        description: str,
        skills: list[str],
        tone: str = "professional",
        max_words: int = 300,
    ) -> str:
        prompt = f"""Generate a professional LinkedIn post about the following topic:

Topic: {topic}
Description: {description}
Author's skills/expertise: {", ".join(skills)}
Tone: {tone}
Maximum words: {max_words}

Requirements:
- Write in English
- Be authentic and engaging
- Include 3-5 relevant hashtags
- Focus on providing value to the reader
- Keep it concise

Return only the post content, ready to be published on LinkedIn."""
        return await self.generate_text(prompt)

    async def generate_post_ideas(self, skills: list[str], count: int = 5) -> list[dict[str, str]]:
        prompt = f"""Generate {count} LinkedIn post topic ideas for a professional with these skills: {", ".join(skills)}.

The topics should showcase their expertise, support an international job search
and increase their visibility with recruiters.

Return ONLY a JSON array of objects with the keys "title", "description" and "reason"."""
        items = await self.generate_json_list(prompt)
        ideas = []
        for item in items:
            if isinstance(item, dict) and item.get("title"):
                ideas.append(
                    {
                        "title": str(item["title"]),
                        "description": str(item.get("description", "")),
                        "reason": str(item.get("reason", "")),
                    }
                )
        if not ideas:
            raise ExternalServiceError("AI structured generation failed: no usable ideas")
        return ideas[:count]

    async def generate_recruiter_messages(
        self, name: str, company: str, skills: list[str], experience: str, language: str
    ) -> list[str]:
        language_name = "Brazilian Portuguese" if language == "pt" else "English"
        prompt = f"""Write three short LinkedIn connection messages in {language_name} to {name}, a recruiter at {company}.
The sender's skills: {", ".join(skills[:3]) or "software development"}.
The sender's experience: {experience or "not specified"}.
Use three tones, in this order: professional, friendly, direct.

Return ONLY a JSON array of three strings."""
        items = await self.generate_json_list(prompt)
        messages = [item for item in items if isinstance(item, str) and item.strip()]
        if not messages:
            raise ExternalServiceError("AI structured generation failed: no usable messages")
        return messages[:3]
