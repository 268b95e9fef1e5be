"""
Gemini client adapter: prompt in, raw model text out
"""
import asyncio
import logging
from typing import Dict, Optional

import google.generativeai as genai

from engpal.config import Settings
from engpal.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class GeminiService:
    """
    Thin wrapper around the Gemini SDK

    One attempt per call, bounded by GEMINI_TIMEOUT_SECONDS. Every failure
    surfaces as UpstreamError so callers have a single thing to catch.
    """

    def __init__(self, api_key: Optional[str], default_model: str, timeout: float = 60.0):
        self.default_model = default_model
        self.timeout = timeout
        self._models: Dict[str, genai.GenerativeModel] = {}
        self._initialized = bool(api_key)
        if self._initialized:
            genai.configure(api_key=api_key)
        else:
            logger.error("Gemini API key missing, client not initialized")

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiService":
        return cls(
            api_key=settings.GEMINI_API_KEY,
            default_model=settings.GEMINI_MODEL,
            timeout=settings.GEMINI_TIMEOUT_SECONDS,
        )

    def _get_model(self, model_name: str) -> genai.GenerativeModel:
        if model_name not in self._models:
            self._models[model_name] = genai.GenerativeModel(model_name)
        return self._models[model_name]

    async def generate(self, prompt: str, model_name: Optional[str] = None) -> str:
        """
        Send a text prompt to Gemini

        Args:
            prompt: Full instruction text
            model_name: Override of the default model

        Returns:
            The model's raw text answer

        Raises:
            UpstreamError: client missing, call failed, timed out or returned no text
        """
        if not self._initialized:
            raise UpstreamError("Gemini client not initialized")

        model_name = model_name or self.default_model
        model = self._get_model(model_name)

        try:
            response = await asyncio.wait_for(
                model.generate_content_async(
                    prompt,
                    request_options={"timeout": self.timeout}
                ),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Gemini call timed out after {self.timeout}s ({model_name})")
            raise UpstreamError(f"gemini API call timed out after {self.timeout}s") from e
        except Exception as e:
            logger.error(f"Gemini call failed ({model_name}): {str(e)}")
            raise UpstreamError(f"gemini API call failed: {str(e)}") from e

        try:
            text = response.text
        except ValueError as e:
            # Blocked or empty candidates have no text accessor
            raise UpstreamError(f"gemini returned no text: {str(e)}") from e

        return text

    async def validate_credentials(self) -> bool:
        """
        Check that the configured API key is accepted by Gemini

        Looks up the default model, which is cheap and needs a valid key.
        """
        if not self._initialized:
            return False

        try:
            await asyncio.wait_for(
                asyncio.to_thread(
                    genai.get_model,
                    f"models/{self.default_model}",
                    request_options={"timeout": self.timeout}
                ),
                timeout=self.timeout
            )
            return True
        except Exception as e:
            logger.warning(f"Gemini credential check failed: {str(e)}")
            return False
