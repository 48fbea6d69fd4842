"""Error types raised while constructing SKIDODGE components."""


class SkidodgeError(Exception):
    """Base class for all SKIDODGE errors."""


class ResourceUnavailable(SkidodgeError):
    """A drawing surface or its rendering context cannot be acquired."""


class InvalidConfiguration(SkidodgeError):
    """Dimensions, column counts or rates are out of range."""
