# comp_model/exceptions.py
"""
Custom exception classes for the compensation engine.

None of these derive from ValueError, so raising them inside a pydantic
validator lets the engine error reach the caller unchanged instead of being
wrapped in a pydantic.ValidationError.
"""


class EngineError(Exception):
    """Base exception for all engine errors."""

    pass


class ValidationError(EngineError):
    """Raised when caller-supplied configuration is self-contradictory."""

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


class UnmatchedTierError(EngineError):
    """Raised when an FTE-adjusted model has no tier covering the provider FTE."""

    pass


class DegenerateInputError(EngineError):
    """Raised when an input makes the calculation undefined (e.g. division by zero)."""

    pass


__all__ = ["EngineError", "ValidationError", "UnmatchedTierError", "DegenerateInputError"]
