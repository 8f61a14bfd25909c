import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional
from utils.exceptions import VoiceSessionError
from .VoiceSessionEnums import CallCustomer, SessionEvent, SessionState, TERMINAL_STATES

logger = logging.getLogger(__name__)


class VoiceSessionInterface(ABC):
    """
    One outbound voice call, as a small state machine.

    idle -> active -> ended | failed. The session owns every callback
    registered through on(); the first terminal event (call-end or error)
    detaches all of them before they are invoked, so no handler outlives
    the call it was registered for.
    """

    def __init__(self):
        self.state = SessionState.IDLE
        self.session_id: Optional[str] = None
        self.recording_url: Optional[str] = None
        self._handlers: Dict[SessionEvent, List[Callable]] = {event: [] for event in SessionEvent}
        self._task: Optional[asyncio.Task] = None

    # ── Callback registry ────────────────────────────────────────────────

    def on(self, event: SessionEvent, handler: Callable) -> None:
        if self.state in TERMINAL_STATES:
            raise VoiceSessionError(f"Session already {self.state.value}")
        self._handlers[SessionEvent(event)].append(handler)

    def handler_count(self) -> int:
        return sum(len(handlers) for handlers in self._handlers.values())

    def _detach_all(self) -> Dict[SessionEvent, List[Callable]]:
        snapshot = {event: list(handlers) for event, handlers in self._handlers.items()}
        for handlers in self._handlers.values():
            handlers.clear()
        return snapshot

    @staticmethod
    async def _invoke(handlers: List[Callable], payload: Any) -> None:
        for handler in handlers:
            try:
                result = handler(payload)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Voice session handler failed: {e}")

    # ── Lifecycle ────────────────────────────────────────────────────────

    async def start(self, customer: CallCustomer, variables: Optional[Dict[str, Any]] = None) -> None:
        """Place the call and begin driving it in the background."""
        if self.state != SessionState.IDLE:
            raise VoiceSessionError(f"Cannot start a session that is {self.state.value}")
        try:
            self.session_id = await self._open(customer, variables or {})
        except Exception as e:
            self.state = SessionState.FAILED
            self._detach_all()
            await self._safe_close()
            raise VoiceSessionError(f"Failed to start voice session: {e}") from e

        self.state = SessionState.ACTIVE
        logger.info(f"Voice session {self.session_id} started")
        self._task = asyncio.create_task(self._drive())

    async def stop(self) -> None:
        """Abandon the call: detach every handler and stop driving it."""
        if self.state in TERMINAL_STATES:
            return
        self.state = SessionState.ENDED
        self._detach_all()
        if self._task and not self._task.done():
            self._task.cancel()
        await self._safe_close()

    async def _safe_close(self) -> None:
        try:
            await self._close()
        except Exception as e:
            logger.warning(f"Failed to close voice session {self.session_id}: {e}")

    async def wait(self) -> None:
        if self._task:
            await asyncio.gather(self._task, return_exceptions=True)

    async def _drive(self) -> None:
        try:
            await self._run()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            await self._fail(e)
            return
        await self._end()

    async def _deliver_message(self, role: str, content: str) -> None:
        if self.state != SessionState.ACTIVE:
            return
        await self._invoke(
            list(self._handlers[SessionEvent.MESSAGE]),
            {"type": "transcript", "transcriptType": "final", "role": role, "transcript": content},
        )

    async def _end(self) -> None:
        if self.state in TERMINAL_STATES:
            return
        self.state = SessionState.ENDED
        handlers = self._detach_all()
        logger.info(f"Voice session {self.session_id} ended")
        await self._safe_close()
        await self._invoke(handlers[SessionEvent.CALL_END], {"session_id": self.session_id})

    async def _fail(self, error: Exception) -> None:
        if self.state in TERMINAL_STATES:
            return
        self.state = SessionState.FAILED
        handlers = self._detach_all()
        logger.error(f"Voice session {self.session_id} failed: {error}")
        await self._safe_close()
        await self._invoke(handlers[SessionEvent.ERROR], error)

    # ── Provider hooks ───────────────────────────────────────────────────

    @abstractmethod
    async def _open(self, customer: CallCustomer, variables: Dict[str, Any]) -> str:
        """Create the call with the provider and return its id."""
        pass

    @abstractmethod
    async def _run(self) -> None:
        """
        Follow the call until it ends, calling _deliver_message() for each
        final transcript turn. Returning means the call ended normally;
        raising means it failed.
        """
        pass

    async def _close(self) -> None:
        """Release provider-side resources. Optional."""
        return None
