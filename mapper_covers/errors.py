# mapper_covers/errors.py
from __future__ import annotations

"""
Exception hierarchy for mapper_covers.

Every error raised on purpose by the package derives from :class:`CoverError`.
The concrete classes also derive from the matching builtin (``ValueError`` or
``RuntimeError``) so callers that already catch those keep working.
"""

__all__ = [
    "CoverError",
    "InvalidParameterError",
    "MissingParameterError",
    "CoverNotBuiltError",
    "CoverValidationError",
    "DimensionMismatchError",
]


class CoverError(Exception):
    """Base class for cover construction errors."""


class InvalidParameterError(CoverError, ValueError):
    """A parameter value was rejected at assignment time."""


class MissingParameterError(CoverError, RuntimeError):
    """A cover was constructed before its required parameters were set."""


class CoverNotBuiltError(CoverError, RuntimeError):
    """Level sets were requested before :meth:`Cover.construct_cover` ran."""


class CoverValidationError(CoverError, ValueError):
    """The index set and level sets of a cover are inconsistent."""


class DimensionMismatchError(CoverError, ValueError):
    """Point data and box bounds disagree on dimensionality."""
