from pydantic import BaseModel, ConfigDict
from .config import Settings


class Capabilities(BaseModel):
    """
    Which external collaborators this process can use.

    Resolved once at start-up and handed to controllers, so call sites ask
    this object instead of re-reading the environment.

    Fields:
        store:                Document store configured and reachable.
        generation:           A generation client could be built.
        voice:                The voice-session backend has credentials.
        email:                SMTP relay credentials are present.
        webhook_verification: A webhook secret is set; when False inbound
                              scheduling events are accepted unsigned.
    """
    model_config = ConfigDict(frozen=True)

    store: bool = False
    generation: bool = False
    voice: bool = False
    email: bool = False
    webhook_verification: bool = False

    @classmethod
    def resolve(cls, settings: Settings, store_ready: bool, generation_ready: bool) -> "Capabilities":
        return cls(
            store=store_ready,
            generation=generation_ready,
            voice=bool(
                settings.VAPI_API_KEY
                and settings.VAPI_ASSISTANT_ID
                and settings.VAPI_PHONE_NUMBER_ID
            ),
            email=bool(settings.SMTP_HOST and settings.SMTP_USER and settings.SMTP_PASSWORD),
            webhook_verification=bool(settings.CALENDLY_WEBHOOK_SECRET),
        )
