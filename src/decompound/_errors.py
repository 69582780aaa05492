"""Decompound error types."""


class DecompoundError(Exception):
    """Base error for all decompound failures."""


class ConfigurationError(DecompoundError):
    """Missing, unknown or malformed configuration."""


class ResourceLoadError(DecompoundError):
    """A shared resource could not be read or parsed."""


class FingerprintError(ResourceLoadError):
    """Content digest of a backing file could not be computed."""
