"""Mentor response generation with Google Gemini."""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

import google.generativeai as genai
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from app.core.config import settings
from app.exceptions.provider import (
    ProviderConfigurationError,
    ProviderError,
    ProviderTimeoutError,
    ResponseGenerationError,
)

logger = logging.getLogger(__name__)

ENCOURAGEMENT = (
    "Always maintain a helpful, encouraging, and professional tone "
    "while staying true to your personality."
)
APOLOGY = "I apologize, but I encountered an issue generating a response. Please try again."

TITLE_INSTRUCTION = (
    "Generate a short, descriptive title (5-8 words) for a mentoring conversation "
    "based on the user's first message. Make it engaging and specific to the topic."
)
DEFAULT_TITLE = "Mentoring Session"
FALLBACK_TITLE = "New Conversation"

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
}


def build_system_instruction(system_prompt: str, personality: str) -> str:
    """Combine a persona prompt and personality into one system instruction."""
    return f"{system_prompt}\n\nPersonality traits: {personality}. {ENCOURAGEMENT}"


def to_contents(messages: Iterable[Any]) -> tuple[list[dict], list[str]]:
    """Split a transcript into Gemini contents and extra system notes.

    Accepts dicts or objects with ``role``/``content``. Assistant turns map to
    the ``model`` role; system turns are returned separately so they can be
    appended to the system instruction.
    """
    contents: list[dict] = []
    system_notes: list[str] = []
    for message in messages:
        role = message["role"] if isinstance(message, dict) else message.role
        content = message["content"] if isinstance(message, dict) else message.content
        role = getattr(role, "value", role)
        if role == "system":
            system_notes.append(content)
            continue
        contents.append({"role": "model" if role == "assistant" else "user", "parts": [content]})
    return contents, system_notes


class MentorResponseGenerator:
    """Generates mentor replies through one chat-completion call per turn."""

    def __init__(self, api_key: str | None = None, model_name: str | None = None):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model_name = model_name or settings.gemini_model
        self._configured = False

    def _initialize_client(self):
        """Configure the Gemini SDK on first use."""
        if self._configured:
            return
        if not self.api_key:
            raise ProviderConfigurationError("Gemini API key not configured")
        try:
            genai.configure(api_key=self.api_key)
        except Exception as e:
            logger.error(f"Failed to initialize Gemini client: {str(e)}")
            raise ProviderConfigurationError(f"Failed to initialize AI service: {str(e)}") from e
        self._configured = True
        logger.info(f"Gemini client initialized with model: {self.model_name}")

    def _build_model(self, system_instruction: str, max_tokens: int, temperature: float, penalties: bool = True):
        config = {
            "candidate_count": 1,
            "max_output_tokens": max_tokens,
            "temperature": temperature,
        }
        if penalties:
            config["presence_penalty"] = settings.gemini_presence_penalty
            config["frequency_penalty"] = settings.gemini_frequency_penalty
        return genai.GenerativeModel(
            model_name=self.model_name,
            system_instruction=system_instruction,
            safety_settings=SAFETY_SETTINGS,
            generation_config=genai.types.GenerationConfig(**config),
        )

    async def generate(self, messages: Iterable[Any], system_prompt: str, personality: str) -> str:
        """Generate the mentor's next reply.

        Args:
            messages: Ordered transcript turns with ``role`` and ``content``.
            system_prompt: The mentor's persona prompt.
            personality: The mentor's personality description.

        Returns:
            The generated text, or a canned apology when the reply is empty.

        Raises:
            ProviderConfigurationError: The API key is missing.
            ProviderTimeoutError: The request exceeded ``ai_request_timeout``.
            ResponseGenerationError: Any other transport or API failure.
        """
        self._initialize_client()

        contents, system_notes = to_contents(messages)
        instruction = build_system_instruction(system_prompt, personality)
        if system_notes:
            instruction = "\n\n".join([instruction, *system_notes])

        try:
            model = self._build_model(instruction, settings.gemini_max_tokens, settings.gemini_temperature)
            response = await asyncio.wait_for(
                model.generate_content_async(contents), timeout=settings.ai_request_timeout
            )
        except TimeoutError:
            logger.error(f"Mentor response timed out after {settings.ai_request_timeout}s")
            raise ProviderTimeoutError("Mentor response generation timed out") from None
        except ProviderError:
            raise
        except Exception as e:
            logger.error(f"Gemini API call failed: {str(e)}")
            raise ResponseGenerationError(details={"reason": str(e)}) from e

        text = self._extract_text(response)
        if not text:
            logger.warning("Empty response from AI service, returning apology")
            return APOLOGY
        return text

    async def generate_title(self, first_message: str) -> str:
        """Generate a short conversation title. Never raises."""
        try:
            self._initialize_client()
            model = self._build_model(TITLE_INSTRUCTION, 50, 0.3, penalties=False)
            response = await asyncio.wait_for(
                model.generate_content_async(first_message), timeout=settings.ai_request_timeout
            )
        except Exception as e:
            logger.warning(f"Failed to generate conversation title: {str(e)}")
            return FALLBACK_TITLE

        title = self._extract_text(response).strip().strip('"')
        return title[:255] if title else DEFAULT_TITLE

    @staticmethod
    def _extract_text(response) -> str:
        if not response:
            return ""
        try:
            return (response.text or "").strip()
        except ValueError:
            # .text raises when the candidate was blocked or has no parts
            return ""
