import asyncio
import logging
import time
from typing import Any, Dict, Optional
import httpx
from ..VoiceSessionInterface import VoiceSessionInterface
from ..VoiceSessionEnums import CallCustomer, VoiceSessionConfig

logger = logging.getLogger(__name__)

# Vapi message roles that carry spoken transcript
ROLE_MAP = {
    "bot": "assistant",
    "assistant": "assistant",
    "user": "user",
}


class VapiSession(VoiceSessionInterface):
    """Outbound phone interview driven through the Vapi REST API."""

    def __init__(self, config: VoiceSessionConfig, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__()
        self.config = config
        self._owns_client = http_client is None
        self.client = http_client or httpx.AsyncClient(
            base_url=config.base_url,
            headers={"Authorization": f"Bearer {config.api_key}"},
            timeout=30.0,
        )
        self._delivered = 0
        self.ended_reason: Optional[str] = None

    async def _open(self, customer: CallCustomer, variables: Dict[str, Any]) -> str:
        payload = {
            "assistantId": self.config.assistant_id,
            "phoneNumberId": self.config.phone_number_id,
            "customer": customer.model_dump(exclude_none=True),
            "assistantOverrides": {
                "variableValues": variables,
                "maxDurationSeconds": self.config.max_call_minutes * 60,
            },
        }
        response = await self.client.post("/call", json=payload)
        response.raise_for_status()
        call = response.json()
        if not call.get("id"):
            raise RuntimeError("Vapi did not return a call id")
        return call["id"]

    @staticmethod
    def _extract_messages(call: dict) -> list[dict]:
        artifact = call.get("artifact") or {}
        messages = artifact.get("messages") or call.get("messages") or []
        turns = []
        for message in messages:
            role = ROLE_MAP.get(message.get("role"))
            content = (message.get("message") or "").strip()
            if role and content:
                turns.append({"role": role, "content": content})
        return turns

    async def _fetch_call(self) -> dict:
        response = await self.client.get(f"/call/{self.session_id}")
        response.raise_for_status()
        return response.json()

    async def _run(self) -> None:
        deadline = time.monotonic() + self.config.max_call_minutes * 60 + 60
        while True:
            call = await self._fetch_call()

            turns = self._extract_messages(call)
            for turn in turns[self._delivered:]:
                await self._deliver_message(turn["role"], turn["content"])
            self._delivered = max(self._delivered, len(turns))

            if call.get("status") == "ended":
                artifact = call.get("artifact") or {}
                self.recording_url = artifact.get("recordingUrl") or call.get("recordingUrl")
                self.ended_reason = call.get("endedReason")
                logger.info(f"Vapi call {self.session_id} ended: {self.ended_reason}")
                return

            if time.monotonic() > deadline:
                raise TimeoutError(
                    f"Vapi call {self.session_id} exceeded {self.config.max_call_minutes} minutes"
                )
            await asyncio.sleep(self.config.poll_interval_seconds)

    async def _close(self) -> None:
        if self._owns_client and not self.client.is_closed:
            await self.client.aclose()
