from .exceptions import (
    ChangeHistoryError,
    ConfigurationError,
    EngineDestroyedError,
    HandlerRegistrationError,
    UntrackableEntityError,
)

__all__ = [
    "ChangeHistoryError",
    "ConfigurationError",
    "EngineDestroyedError",
    "HandlerRegistrationError",
    "UntrackableEntityError",
]
