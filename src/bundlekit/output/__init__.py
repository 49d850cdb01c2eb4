"""Content-addressed output files and periodic trimming."""

from .writer import OutputWriter, TrimReport

__all__ = ["OutputWriter", "TrimReport"]
