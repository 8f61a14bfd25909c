import logging
from typing import Optional, Dict, Any

from ..LLMInterface import LLMInterface, LLMResponse

logger = logging.getLogger(__name__)


class FallbackProvider(LLMInterface):
    """
    Generation through a primary backend, retried once on a secondary one.

    Only the primary's model id is reported, so usage rows of a fallback
    answer are still attributed to the configured model.
    """

    def __init__(self, primary: LLMInterface, secondary: LLMInterface):
        self.primary = primary
        self.secondary = secondary

    @property
    def model_id(self) -> str:
        return self.primary.model_id

    async def generate(self, prompt: str, config: Optional[Dict[str, Any]] = None) -> LLMResponse:
        try:
            return await self.primary.generate(prompt, config)
        except Exception as primary_error:
            logger.warning(
                f"{self.primary.model_id} failed ({primary_error}); retrying on {self.secondary.model_id}"
            )
            try:
                return await self.secondary.generate(prompt, config)
            except Exception as secondary_error:
                raise RuntimeError(
                    f"Both generation backends failed: {primary_error}; {secondary_error}"
                ) from secondary_error
