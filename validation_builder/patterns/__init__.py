"""
Pattern map editing and the remote pattern registry client.
"""

from validation_builder.patterns.store import add_pattern, validate_pattern_key
from validation_builder.patterns.client import (
    PatternRegistryClient,
    PatternFetchResult,
    FETCH_FAILED_NOTICE,
)

__all__ = [
    "add_pattern",
    "validate_pattern_key",
    "PatternRegistryClient",
    "PatternFetchResult",
    "FETCH_FAILED_NOTICE",
]
