from .LLMProviderFactory import LLMProviderFactory
from .LLMInterface import LLMInterface, LLMResponse
