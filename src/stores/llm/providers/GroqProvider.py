import json
import logging
from typing import Optional, Dict, Any
from groq import AsyncGroq
from ..LLMInterface import LLMInterface, LLMResponse
from ..LLMConfig import LLMConfig

logger = logging.getLogger(__name__)

class GroqProvider(LLMInterface):
    def __init__(self, api_key: str, model_id: str = None):
        self.api_key = api_key
        self._model_id = model_id or LLMConfig.DEFAULT_GROQ_MODEL

        if not self.api_key:
            raise ValueError("Groq API key is required")

        self.client = AsyncGroq(api_key=self.api_key)

        self.default_config = {
            "temperature": 0.1,
            "max_tokens": 2048,
            "top_p": 0.9,
        }

    @property
    def model_id(self) -> str:
        return self._model_id

    @staticmethod
    def _parse_usage_metadata(response) -> dict:
        """Extract token usage from a Groq API response."""
        if not response.usage:
            return {}
        return {
            "prompt_tokens": response.usage.prompt_tokens,
            "completion_tokens": response.usage.completion_tokens,
            "total_tokens": response.usage.total_tokens
        }

    @staticmethod
    def _schema_instructions(schema) -> str:
        """Groq has no schema-constrained decoding, so the schema travels in the prompt."""
        return (
            "\n\nThe JSON object MUST validate against this JSON Schema:\n"
            + json.dumps(schema.model_json_schema())
        )

    async def generate(self, prompt: str, config: Optional[Dict[str, Any]] = None) -> LLMResponse:
        try:
            # Filter and map config for Groq
            groq_config = self.default_config.copy()
            if config:
                groq_config.update(config)

            # Groq unsupported parameters or different names
            if "max_output_tokens" in groq_config:
                groq_config["max_tokens"] = groq_config.pop("max_output_tokens")

            # Remove Gemini-specific parameters
            mime_type = groq_config.pop("response_mime_type", None)
            schema = groq_config.pop("response_schema", None)

            if schema is not None:
                prompt = prompt + self._schema_instructions(schema)
            if schema is not None or mime_type == "application/json":
                groq_config["response_format"] = {"type": "json_object"}

            response = await self.client.chat.completions.create(
                model=self._model_id,
                messages=[{"role": "user", "content": prompt}],
                **groq_config
            )

            content = response.choices[0].message.content
            usage = self._parse_usage_metadata(response)
            return LLMResponse(content=content, usage_metadata=usage)

        except Exception as e:
            logger.error(f"Groq generation error: {e}")
            raise RuntimeError(f"Failed to generate content via Groq: {str(e)}")
