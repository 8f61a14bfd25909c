from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # ── Application Settings ─────────────────────────────────────────────
    APP_NAME: str = Field(default="Recruit-Interview")
    APP_VERSION: str = Field(default="0.1")
    APP_BASE_URL: str = Field(default="http://localhost:8000")
    LOG_LEVEL: str = Field(default="INFO")
    CORS_ORIGINS: list[str] = Field(default=["http://localhost:3000"])

    # ── File Upload Settings ─────────────────────────────────────────────
    FILE_MAX_SIZE_MB: int = Field(default=10)
    FILE_ALLOWED_TYPES: list[str] = Field(
        default=[
            "application/pdf",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "application/msword",
            "text/plain",
        ]
    )
    FILE_BYTES_TO_MB: int = Field(default=1048576)
    UPLOAD_MAX_FILES: int = Field(default=10)

    # ── Database Settings (MongoDB) ──────────────────────────────────────
    # Empty MONGO_DB runs the service without persistence (demo mode).
    MONGO_DB: str = Field(default="")
    DB_NAME: str = Field(default="recruit-interview")
    MONGO_TIMEOUT_MS: int = Field(default=3000)

    RUNS_COLLECTION: str = Field(default="recruit_runs")
    CANDIDATES_COLLECTION: str = Field(default="recruit_candidates")
    INTERVIEWS_COLLECTION: str = Field(default="recruit_interviews")
    STATS_COLLECTION: str = Field(default="recruitment_stats")
    FEEDBACK_COLLECTION: str = Field(default="feedback")
    PRACTICE_INTERVIEWS_COLLECTION: str = Field(default="interviews")
    USAGE_LOGS_COLLECTION: str = Field(default="usage_logs")

    # ── LLM Configuration ────────────────────────────────────────────────
    GENERATION_BACKEND: str = Field(default="gemini")
    GENERATION_MODEL_ID: str = Field(default="gemini-2.0-flash-001")
    DEFAULT_GROQ_MODEL: str = Field(default="llama-3.3-70b-versatile")
    ENABLE_LLM_FALLBACK: bool = Field(default=False)

    # ── API Keys ─────────────────────────────────────────────────────────
    GROQ_API_KEY: str = Field(default="")
    GEMINI_API_KEY: str = Field(default="")

    # ── Screening ────────────────────────────────────────────────────────
    RESUME_CHAR_BUDGET: int = Field(default=20000)
    REPORT_RESUME_CHAR_BUDGET: int = Field(default=5000)
    TEXT_SNIPPET_CHARS: int = Field(default=1000)
    SHORTLIST_THRESHOLD: int = Field(default=70, ge=0, le=100)

    # ── Voice Sessions (Vapi) ────────────────────────────────────────────
    VOICE_BACKEND: str = Field(default="vapi")
    VAPI_API_KEY: str = Field(default="")
    VAPI_ASSISTANT_ID: str = Field(default="")
    VAPI_PHONE_NUMBER_ID: str = Field(default="")
    VAPI_BASE_URL: str = Field(default="https://api.vapi.ai")
    VAPI_POLL_INTERVAL_SECONDS: float = Field(default=5.0)
    VAPI_MAX_CALL_MINUTES: int = Field(default=30)

    # ── Email (SMTP) ─────────────────────────────────────────────────────
    SMTP_HOST: str = Field(default="")
    SMTP_PORT: int = Field(default=587)
    SMTP_USER: str = Field(default="")
    SMTP_PASSWORD: str = Field(default="")
    ADMIN_EMAIL: str = Field(default="")

    # ── Scheduling & Internal Auth ───────────────────────────────────────
    CALENDLY_LINK: str = Field(default="https://calendly.com/your-company/interview")
    CALENDLY_WEBHOOK_SECRET: str = Field(default="")
    INTERNAL_API_KEY: str = Field(default="internal-key")
    INTERVIEW_LOOKAHEAD_HOURS: int = Field(default=72)
    INTERNAL_CALL_TIMEOUT_SECONDS: float = Field(default=1800.0)


@lru_cache()
def get_settings():
    return Settings()
