"""
Data-integrity anomalies found while cancelling.

Cancellation still succeeds; the counter on the affected side is left as is.
"""

from enum import StrEnum


class ConsistencyWarning(StrEnum):
    ITEM_MISSING = 'item_missing'
    MEMBER_MISSING = 'member_missing'
    MEMBER_COUNT_AT_ZERO = 'member_count_at_zero'
