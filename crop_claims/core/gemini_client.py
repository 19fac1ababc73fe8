import asyncio
from typing import Any, Dict, List, Optional, Union

from google import genai
from google.genai import types

from crop_claims.core.exceptions import APIClientError, APITimeoutError
from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)


class GeminiClient:
    """Wrapper for Google Gemini API client."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout: int = 60,
        max_retries: int = 1,
    ):
        """Initialize Gemini client.

        Args:
            api_key: Gemini API key
            model: Model name to use
            timeout: Per-attempt timeout in seconds
            max_retries: Maximum attempts before giving up
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.max_retries = max(1, max_retries)

        try:
            self.client = genai.Client(api_key=self.api_key)
            LOGGER.info(f"Initialized Gemini client with model {self.model}")
        except Exception as e:
            LOGGER.error(f"Failed to initialize Gemini client: {e}")
            raise APIClientError(f"Failed to initialize Gemini client: {e}", original_error=e)

    @staticmethod
    def image_part(data: bytes, mime_type: str = "image/jpeg") -> types.Part:
        """Build an inline image part for a multimodal request."""
        return types.Part.from_bytes(data=data, mime_type=mime_type)

    def _build_config(
        self,
        system_instruction: Optional[str],
        generation_config: Optional[Dict[str, Any]],
    ) -> types.GenerateContentConfig:
        config = types.GenerateContentConfig(
            temperature=0.0,  # Default to deterministic
        )

        if generation_config:
            if "temperature" in generation_config:
                config.temperature = generation_config["temperature"]
            if "max_output_tokens" in generation_config:
                config.max_output_tokens = generation_config["max_output_tokens"]
            if "response_mime_type" in generation_config:
                config.response_mime_type = generation_config["response_mime_type"]
            if "response_schema" in generation_config:
                config.response_schema = generation_config["response_schema"]

        if system_instruction:
            config.system_instruction = system_instruction

        return config

    async def generate_content(
        self,
        contents: Union[str, List[Union[str, types.Part]]],
        system_instruction: Optional[str] = None,
        generation_config: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Generate content using Gemini model.

        Args:
            contents: Input content (string or list of text/image parts)
            system_instruction: Optional system instruction
            generation_config: Optional generation config (temperature, response schema, etc.)

        Returns:
            Generated text response ("" if the model returned no text)

        Raises:
            APITimeoutError: If the last attempt timed out
            APIClientError: If generation fails
        """
        config = self._build_config(system_instruction, generation_config)

        for attempt in range(self.max_retries):
            try:
                response = await asyncio.wait_for(
                    self.client.aio.models.generate_content(
                        model=self.model,
                        contents=contents,
                        config=config,
                    ),
                    timeout=self.timeout,
                )

                if not response.text:
                    LOGGER.warning("Empty response from Gemini")
                    return ""

                return response.text

            except asyncio.TimeoutError as e:
                LOGGER.warning(
                    f"Gemini API timeout (Attempt {attempt + 1}/{self.max_retries}) after {self.timeout}s"
                )
                if attempt >= self.max_retries - 1:
                    raise APITimeoutError(
                        f"Gemini generation timed out after {self.timeout}s", original_error=e
                    )

            except Exception as e:
                LOGGER.warning(
                    f"Gemini API error (Attempt {attempt + 1}/{self.max_retries}): {e}"
                )
                if attempt >= self.max_retries - 1:
                    LOGGER.error(f"Gemini generation failed after retries: {e}", exc_info=True)
                    raise APIClientError(f"Gemini generation failed: {e}", original_error=e)

            await asyncio.sleep(2 ** attempt)

        raise APIClientError("Gemini generation failed")
