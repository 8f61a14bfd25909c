import logging
from typing import Optional
from .providers.GeminiProvider import GeminiProvider
from .providers.GroqProvider import GroqProvider
from .providers.FallbackProvider import FallbackProvider
from .LLMConfig import LLMConfig
from .LLMInterface import LLMInterface


from utils.config import Settings

logger = logging.getLogger(__name__)


class LLMProviderFactory:
    def __init__(self, config: Settings):
        self.config = config

    def create(self, provider: str, model_id: str = None) -> Optional[LLMInterface]:
        """
        Build the generation client for `provider`.

        Returns None when the provider has no credentials, so callers can
        report the backend as unavailable instead of failing mid-request.
        """
        provider_key = provider.strip().lower()

        # 1. Instantiate Primary
        primary = None
        if provider_key == LLMConfig.PROVIDER_GEMINI:
            if not self.config.GEMINI_API_KEY:
                logger.warning("GEMINI_API_KEY is not set; Gemini generation disabled")
            else:
                primary = GeminiProvider(
                    model_id=model_id or self.config.GENERATION_MODEL_ID,
                    api_key=self.config.GEMINI_API_KEY,
                )
        elif provider_key == LLMConfig.PROVIDER_GROQ:
            if not self.config.GROQ_API_KEY:
                logger.warning("GROQ_API_KEY is not set; Groq generation disabled")
                return None
            # Direct Groq usage
            return GroqProvider(
                api_key=self.config.GROQ_API_KEY,
                model_id=model_id or self.config.DEFAULT_GROQ_MODEL
            )
        else:
            raise ValueError(f"Invalid LLM provider: '{provider}'")

        # 2. Check Fallback (Only applies if Primary is Gemini for now)
        if self.config.ENABLE_LLM_FALLBACK and self.config.GROQ_API_KEY:
            secondary = GroqProvider(
                api_key=self.config.GROQ_API_KEY,
                model_id=self.config.DEFAULT_GROQ_MODEL
            )
            if primary is None:
                return secondary
            return FallbackProvider(primary, secondary)

        return primary
