"""Error kinds shared by the update checker."""

from enum import Enum


class ErrorKind(str, Enum):
    """Why a mod could not be resolved."""

    MALFORMED_VERSION = "malformed_version"
    PROVIDER_UNKNOWN = "provider_unknown"
    NETWORK_FAILURE = "network_failure"
    INVALID_RESPONSE = "invalid_response"
    NO_MATCH = "no_match"


class ModManagerError(Exception):
    """Base error carrying an ErrorKind."""

    kind: ErrorKind

    def __init__(self, message: str, kind: ErrorKind):
        super().__init__(message)
        self.message = message
        self.kind = kind


class MalformedVersionError(ModManagerError, ValueError):
    """Raised when a version string cannot be parsed."""

    def __init__(self, raw: str, reason: str = "not a semantic version"):
        super().__init__(f"Malformed version {raw!r}: {reason}", ErrorKind.MALFORMED_VERSION)
        self.raw = raw


class ProviderUnknownError(ModManagerError, LookupError):
    """Raised when a provider name is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Provider not registered: {name}", ErrorKind.PROVIDER_UNKNOWN)
        self.name = name
