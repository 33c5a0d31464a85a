# mapper_covers/__init__.py
from __future__ import annotations

"""
mapper_covers: covers of filter spaces and the nerve skeleton of Mapper graphs.

Recommended usage:
    import mapper_covers as mc

    cover = mc.FixedIntervalCover(f, number_intervals=10, percent_overlap=25).construct_cover()
    adjacency = mc.edgelist_to_adjacency(mc.nerve_edges(cover))

Public API:
    - Curated user-facing symbols are re-exported from :mod:`mapper_covers.api`.
    - Subpackages (``covers``, ``geometry``, ``nerve``, ``summaries``) hold the
      lower-level building blocks.
"""

import logging

from ._version import __version__
from .api import *  # noqa: F401,F403
from .api import __all__ as _api_all

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["__version__", *_api_all]
