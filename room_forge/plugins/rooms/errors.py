from __future__ import annotations


class RoomForgeError(ValueError):
    """Base class for room generation / rendering failures."""


class ConfigError(RoomForgeError):
    """A required field is missing or a structural invariant is broken."""


class DomainViolation(RoomForgeError):
    """A value falls outside its declared domain."""
