from enum import Enum
from typing import Optional
from pydantic import BaseModel


class VoiceBackendEnum(Enum):
    VAPI = "vapi"


class SessionState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    ENDED = "ended"
    FAILED = "failed"


class SessionEvent(Enum):
    MESSAGE = "message"
    CALL_END = "call-end"
    ERROR = "error"


TERMINAL_STATES = {SessionState.ENDED, SessionState.FAILED}


class CallCustomer(BaseModel):
    number: str
    name: Optional[str] = None


class VoiceSessionConfig(BaseModel):
    """
    Typed configuration for a voice-session backend.

    Fields:
        api_key:               Private API key of the voice provider.
        base_url:              REST endpoint of the provider.
        assistant_id:          Pre-configured interviewer assistant.
        phone_number_id:       Provider number the outbound call is placed from.
        poll_interval_seconds: Delay between call status polls.
        max_call_minutes:      Hard cap on call length; the session errors
                               out once it is exceeded.
    """
    api_key: str
    base_url: str
    assistant_id: str
    phone_number_id: str
    poll_interval_seconds: float = 5.0
    max_call_minutes: int = 30
