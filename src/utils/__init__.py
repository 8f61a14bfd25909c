from .config import Settings, get_settings
from .capabilities import Capabilities
