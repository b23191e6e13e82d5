# studypod/services/ai/gemini_client.py
import asyncio
import logging
from typing import Optional

import google.generativeai as genai

from ...core.config import settings
from ...core.error_handlers import AIServiceException

logger = logging.getLogger(__name__)

class GeminiClient:
    """Thin async wrapper over google-generativeai; every failure becomes AIServiceException"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model_name = model_name or settings.gemini_model
        self.timeout = timeout if timeout is not None else settings.ai_timeout_seconds
        self._model = None

    def _get_model(self):
        # Created on first use so the app boots without a key
        if self._model is None:
            if not self.api_key:
                logger.error("GEMINI_API_KEY not configured")
                raise AIServiceException("AI service not properly configured", status_code=503)
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    async def generate(self, prompt: str, json_mode: bool = False) -> str:
        """Run a single-turn prompt and return the response text (may be empty)"""
        model = self._get_model()
        generation_config = {"response_mime_type": "application/json"} if json_mode else None

        try:
            response = await asyncio.wait_for(
                model.generate_content_async(prompt, generation_config=generation_config),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Gemini request timed out after {self.timeout}s")
            raise AIServiceException("AI service timeout", status_code=504)
        except Exception as e:
            logger.error(f"Unexpected AI service error: {e}")
            raise AIServiceException(f"AI service error: {str(e)}")

        try:
            return response.text or ""
        except (ValueError, AttributeError) as e:
            # .text raises when the candidate was blocked or has no parts
            logger.error(f"Invalid Gemini response format: {e}")
            raise AIServiceException("Invalid AI response format")
