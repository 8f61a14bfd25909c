from .GeminiProvider import GeminiProvider
from .GroqProvider import GroqProvider
from .FallbackProvider import FallbackProvider
