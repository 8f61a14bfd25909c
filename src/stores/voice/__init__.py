from .VoiceSessionFactory import VoiceSessionFactory
from .VoiceSessionInterface import VoiceSessionInterface
from .VoiceSessionEnums import CallCustomer, SessionEvent, SessionState
