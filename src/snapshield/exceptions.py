"""Exception hierarchy for snapshield."""


class SnapShieldError(Exception):
    """Base exception for snapshield errors"""
    pass


class ConfigurationError(SnapShieldError):
    """Raised when configuration is invalid"""
    pass


class InvalidEntityError(SnapShieldError):
    """Raised when a detected entity has an impossible span"""
    pass


class PoolExhaustedError(SnapShieldError):
    """Raised when a replacement pool has nothing to sample from.

    Never caught inside the library: an unreplaced span is a leak, so the
    host has to see this.
    """
    pass
