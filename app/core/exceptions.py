"""
Error taxonomy for the tote art service.

Each error carries the HTTP status it maps to and a short client-safe
message. The exception handlers in main.py turn them into {"error": message}.
"""
from typing import Optional


class ToteArtError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ToteArtError):
    """Missing or malformed client input."""
    status_code = 400


class ProviderError(ToteArtError):
    """An image-generation provider returned a failure or an unusable payload."""
    status_code = 502

    def __init__(self, message: str, provider: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.provider = provider
        self.status = status


class GenerationFailedError(ProviderError):
    """Every preview slot failed, including the fallback attempts."""


class ConfigurationError(ToteArtError):
    """A required credential, bucket or table setting is absent."""
    status_code = 500


class PersistenceError(ToteArtError):
    """The object-store write failed."""
    status_code = 502
