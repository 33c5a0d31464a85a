from .cover_summary import CoverSummary, summarize_cover

__all__ = ["CoverSummary", "summarize_cover"]
