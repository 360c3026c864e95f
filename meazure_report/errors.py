class MeazureError(Exception):
    pass


class ConfigError(MeazureError):
    """Credentials or defaults file is missing required data or cannot be parsed."""


class AuthError(MeazureError):
    """Meazure rejected the stored credentials."""


class FetchError(MeazureError):
    """Transport level failure while talking to Meazure."""


class ProjectionError(MeazureError):
    """Date range given to the projector cannot be interpreted."""
