from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class LLMResponse(BaseModel):
    content: Any = None
    usage_metadata: Dict[str, int] = Field(default_factory=dict)


class LLMInterface(ABC):
    @property
    @abstractmethod
    def model_id(self) -> str:
        pass

    @abstractmethod
    async def generate(self, prompt: str, config: Optional[Dict[str, Any]] = None) -> LLMResponse:
        """
        Generates text.
        'config' can override temperature, token limits or the response
        format at runtime. A 'response_schema' entry (a pydantic model class)
        asks the provider to constrain its JSON output to that schema.
        """
        pass
