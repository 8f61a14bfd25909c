class LLMConfig:
    """Provider identifiers and default models for the generation backends."""

    PROVIDER_GEMINI = "gemini"
    PROVIDER_GROQ = "groq"

    DEFAULT_GEMINI_MODEL: str = "gemini-2.0-flash-001"
    DEFAULT_GROQ_MODEL: str = "llama-3.3-70b-versatile"
