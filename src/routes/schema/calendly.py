from pydantic import BaseModel, field_validator
from typing import Optional


class CalendlyScheduledEvent(BaseModel):
    start_time: Optional[str] = None
    uri: Optional[str] = None


class CalendlyEventType(BaseModel):
    uri: Optional[str] = None


class CalendlyInvitee(BaseModel):
    email: Optional[str] = None
    scheduled_event: Optional[CalendlyScheduledEvent] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip().lower()


class CalendlyPayload(CalendlyInvitee):
    """
    Calendly sends the invitee either nested under `invitee` or flattened
    into the payload itself, so both places are accepted.
    """
    invitee: Optional[CalendlyInvitee] = None
    event_type: Optional[CalendlyEventType] = None
    event: Optional[str] = None

    def booking(self) -> tuple[Optional[str], Optional[str], Optional[str]]:
        """Invitee email, start time and event URI."""
        invitee = self.invitee or self
        scheduled_event = invitee.scheduled_event or self.scheduled_event or CalendlyScheduledEvent()
        event_uri = (self.event_type.uri if self.event_type else None) or scheduled_event.uri or self.event
        return invitee.email, scheduled_event.start_time, event_uri


class CalendlyEvent(BaseModel):
    event: Optional[str] = None
    payload: Optional[CalendlyPayload] = None
