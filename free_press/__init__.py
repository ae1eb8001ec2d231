"""
Free Press - media outlet catalog with bias and press-freedom scoring.

This package keeps a catalog of media outlets, computes a Free Press Score
for each from ownership, funding, legal and accountability research, detects
and merges duplicate entries, and drives LLM research calls that fill in
outlet metadata.

Main entry point is the CLI via `free-press` commands.

Example:
    $ free-press seed
    $ free-press duplicates
"""

__all__ = ["__version__", "Outlet", "OutletRepository", "DuplicateResolver", "calculate_scores"]
__version__ = "0.1.0"

from .core.dedup import DuplicateResolver
from .core.scoring import calculate_scores
from .core.types import Outlet
from .repository import OutletRepository
