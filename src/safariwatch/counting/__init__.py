"""Animal counting module for safariwatch.

Public API:
    extract_count -- First-integer heuristic over model text
    AnimalCounter -- Per-feed counting operation
    AnimalWatch -- Counts both feeds and builds the report
"""

from safariwatch.counting.extract import extract_count
from safariwatch.counting.operation import AnimalCounter
from safariwatch.counting.report import AnimalWatch, aggregate, build_report

__all__ = ["AnimalCounter", "AnimalWatch", "aggregate", "build_report", "extract_count"]
