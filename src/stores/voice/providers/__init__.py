from .VapiSession import VapiSession
