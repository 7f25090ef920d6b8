"""
Exception types for the Minehunt engine.

Out-of-bounds and repeated clicks are not errors: the controller
ignores them. Only configuration and protocol mistakes raise.
"""


class MinehuntError(Exception):
    """Base class for all Minehunt errors."""


class InvalidLevelConfig(MinehuntError, ValueError):
    """A level definition that cannot produce a playable board."""


class InvalidTransition(MinehuntError, RuntimeError):
    """A controller action requested from a state that does not allow it."""


class ScoreReportError(MinehuntError, OSError):
    """A score reporter could not store a submission."""
