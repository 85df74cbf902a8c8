"""LLM service: structured (JSON) text generation through Google Gemini."""
import logging
from typing import Any, Optional

import google.genai as genai
from google.genai import types

logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"


class LLMRateLimitError(Exception):
    """Raised when the LLM provider returns 429 / RESOURCE_EXHAUSTED (quota or rate limit)."""


def _build_config(
    system_instruction: Optional[str],
    response_schema: Optional[Any],
) -> Optional[types.GenerateContentConfig]:
    config_kw: dict[str, Any] = {}
    if system_instruction:
        config_kw["system_instruction"] = system_instruction
    if response_schema is not None:
        config_kw["response_mime_type"] = JSON_MIME_TYPE
        config_kw["response_schema"] = response_schema
    if not config_kw:
        return None
    return types.GenerateContentConfig(**config_kw)


async def _generate_text_gemini_async(
    api_key: str,
    prompt: str,
    model: str,
    config: Optional[types.GenerateContentConfig] = None,
) -> Optional[str]:
    """Call Gemini async generate_content; returns response text or None."""
    try:
        client = genai.Client(api_key=api_key.strip())
        response = await client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=config,
        )
        text = (getattr(response, "text", None) or "").strip()
        return text or None
    except Exception as e:
        err_str = str(e).upper()
        if "429" in err_str or "RESOURCE_EXHAUSTED" in err_str:
            raise LLMRateLimitError(
                "Google Gemini (GenAI) rate limit exceeded (quota or requests per minute); try again shortly."
            ) from e
        logger.warning("generate_text_async (Gemini %s) failed: %s", model, e)
        return None


class LLMService:
    """
    Application-facing LLM service. Owns the Gemini credential and model selection.
    All methods return raw response text, or None when the provider failed or returned nothing;
    the failure cause is logged here.
    """

    def __init__(
        self,
        gemini_api_key: Optional[str] = None,
        default_text_model: Optional[str] = None,
        backup_text_model: Optional[str] = None,
    ):
        self._gemini_api_key = (gemini_api_key or "").strip() or None
        self._default_text_model = (default_text_model or "").strip() or "gemini-2.5-flash"
        self._backup_text_model = (backup_text_model or "").strip() or None

    @property
    def has_text_provider(self) -> bool:
        """True when a Gemini API key is configured."""
        return self._gemini_api_key is not None

    @property
    def default_text_model(self) -> str:
        return self._default_text_model

    async def generate_text_async(
        self,
        prompt: str,
        model: Optional[str] = None,
        *,
        system_instruction: Optional[str] = None,
        response_schema: Optional[Any] = None,
    ) -> Optional[str]:
        """
        Async: generate text from a prompt. Uses Gemini when gemini_api_key is set.
        When response_schema is given the model is asked for application/json matching it.
        model: optional; when None uses default from config (llm_default_text_model).
        On 429, falls back once to llm_backup_text_model if one is configured.
        """
        if not self._gemini_api_key:
            return None
        primary = (model or "").strip() or self._default_text_model
        config = _build_config(system_instruction, response_schema)
        try:
            return await _generate_text_gemini_async(self._gemini_api_key, prompt, primary, config)
        except LLMRateLimitError:
            if self._backup_text_model and self._backup_text_model != primary:
                logger.info("generate_text_async 429, falling back to backup model %s", self._backup_text_model)
                try:
                    return await _generate_text_gemini_async(
                        self._gemini_api_key, prompt, self._backup_text_model, config
                    )
                except LLMRateLimitError:
                    logger.warning("generate_text_async backup model also rate limited")
                    return None
            logger.warning("generate_text_async rate limited and no backup model configured")
            return None
