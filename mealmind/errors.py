"""Error types raised by the MealMind core."""

from __future__ import annotations


class MealMindError(Exception):
    """Base class; ``message`` is safe to show to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(MealMindError):
    """Missing or invalid credential for the generation service."""


class TransportError(MealMindError):
    """Network failure or non-success response from the generation service."""


class GenerationParseError(MealMindError):
    """The service answered, but no usable JSON object could be extracted."""


class NotFoundError(MealMindError):
    """A stored record with the given id does not exist."""


class ValidationError(MealMindError, ValueError):
    """User input failed a required-field check."""
