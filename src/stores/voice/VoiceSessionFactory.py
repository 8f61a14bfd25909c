import logging
from typing import Optional
from .VoiceSessionEnums import VoiceBackendEnum, VoiceSessionConfig
from .VoiceSessionInterface import VoiceSessionInterface
from .providers.VapiSession import VapiSession

logger = logging.getLogger(__name__)


class VoiceSessionFactory:
    def __init__(self, config):
        self.config = config

    @property
    def available(self) -> bool:
        return bool(
            self.config.VAPI_API_KEY
            and self.config.VAPI_ASSISTANT_ID
            and self.config.VAPI_PHONE_NUMBER_ID
        )

    def create_session(self) -> Optional[VoiceSessionInterface]:
        """A fresh session per call; None when the backend has no credentials."""
        if not self.available:
            logger.warning("Voice backend is not configured; no session created")
            return None

        session_config = VoiceSessionConfig(
            api_key=self.config.VAPI_API_KEY,
            base_url=self.config.VAPI_BASE_URL,
            assistant_id=self.config.VAPI_ASSISTANT_ID,
            phone_number_id=self.config.VAPI_PHONE_NUMBER_ID,
            poll_interval_seconds=self.config.VAPI_POLL_INTERVAL_SECONDS,
            max_call_minutes=self.config.VAPI_MAX_CALL_MINUTES,
        )

        if self.config.VOICE_BACKEND == VoiceBackendEnum.VAPI.value:
            return VapiSession(session_config)
        else:
            raise ValueError(f"Unsupported voice backend: {self.config.VOICE_BACKEND}")
