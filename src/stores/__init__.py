from .llm import LLMProviderFactory
from .llm.providers import GeminiProvider, GroqProvider
from .voice import VoiceSessionFactory
from .voice.providers import VapiSession
from .llm.LLMInterface import LLMInterface
