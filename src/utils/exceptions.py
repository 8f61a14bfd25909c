class ScoringError(Exception):
    """Model call or schema validation failed for one resume."""


class InvalidTransition(Exception):
    """An interview status change the state machine does not allow."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move interview from '{current}' to '{target}'")


class VoiceSessionError(Exception):
    """The voice session could not be started or failed mid-call."""
