from utils import get_settings, Settings, Capabilities


class BaseController:
    def __init__(self, capabilities: Capabilities = None):
        self.app_settings: Settings = get_settings()
        self.capabilities = capabilities or Capabilities()
