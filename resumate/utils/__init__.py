"""
Shared utilities for resumate.

Common functionality used across contexts:
- Logger setup with provenance
- Pipeline event log (JSON Lines)
- Timestamps
- Text table formatting
"""

from resumate.utils.timestamp import epoch_seconds, format_timestamp, now_exact

__all__ = ["epoch_seconds", "format_timestamp", "now_exact"]
