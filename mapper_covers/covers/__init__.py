"""Cover strategies: the :class:`Cover` contract and its built-in variants."""

from __future__ import annotations

from .base import Cover, ParameterField
from .ball import BallCover
from .cover_map import cover_map
from .custom import FunctionCover
from .fixed_interval import FixedIntervalCover
from .interval import IntervalCoverBase
from .restrained_interval import RestrainedIntervalCover

__all__ = [
    "Cover",
    "ParameterField",
    "IntervalCoverBase",
    "FixedIntervalCover",
    "RestrainedIntervalCover",
    "BallCover",
    "FunctionCover",
    "cover_map",
]
