from typing import Optional, Dict, Any
from google import genai
from google.genai import types
from ..LLMInterface import LLMInterface, LLMResponse
from ..LLMConfig import LLMConfig
import logging


class GeminiProvider(LLMInterface):
    def __init__(self,
        api_key: str,
        model_id: str = None,
     ):
        self.api_key = api_key
        self._model_id = model_id or LLMConfig.DEFAULT_GEMINI_MODEL

        if not self.api_key:
            raise ValueError("Google API key is required")

        self.client = genai.Client(api_key=self.api_key)

        self.default_config = {
            "max_output_tokens": 2048,
            "temperature": 0.1,
            "top_p": 0.9
        }
        self.logger = logging.getLogger(__name__)

    @property
    def model_id(self) -> str:
        return self._model_id

    @staticmethod
    def _parse_usage_metadata(response) -> dict:
        """Extract token usage from a Gemini API response."""
        if not response.usage_metadata:
            return {}
        return {
            "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
            "completion_tokens": response.usage_metadata.candidates_token_count or 0,
            "total_tokens": response.usage_metadata.total_token_count or 0
        }

    async def generate(self, prompt: str, config: Optional[Dict[str, Any]] = None) -> LLMResponse:
        if not self.client:
            raise RuntimeError("genai client was not set")
        if not self.model_id:
            raise RuntimeError("generation model was not set")

        final_config_dict = self.default_config.copy()
        if config:
            config = dict(config)
            if "max_tokens" in config:
                config["max_output_tokens"] = config.pop("max_tokens")
            final_config_dict.update(config)

        # A pydantic response_schema implies JSON output
        if final_config_dict.get("response_schema") is not None:
            final_config_dict["response_mime_type"] = "application/json"

        generation_config = types.GenerateContentConfig(**final_config_dict)

        try:
            response = await self.client.aio.models.generate_content(
                model=self._model_id,
                contents=prompt,
                config=generation_config
            )
            usage = self._parse_usage_metadata(response)
            return LLMResponse(content=response.text, usage_metadata=usage)
        except Exception as e:
            self.logger.error(f"Gemini generation error: {e}")
            raise RuntimeError(f"Failed to generate content: {str(e)}")
