"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RecordId wraps str: identifiers are opaque, never parsed
    - All valid operators and resource kinds encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import Any, Mapping, NewType


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", str)


# ─── Record Shapes ───────────────────────────────────────────────

# Resolved records leave the Store as plain JSON-ready dicts
Record = dict[str, Any]
RecordLike = Mapping[str, Any]


# ─── Enums ───────────────────────────────────────────────────────

class ResourceKind(str, Enum):
    """The two record collections owned by the Store."""
    LABELS = "labels"
    TODOS = "todos"


class FilterOperator(str, Enum):
    """Comparison operators understood by the filter engine."""
    EQ = "eq"
    NEQ = "neq"
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"

    @property
    def is_ordering(self) -> bool:
        return self not in (FilterOperator.EQ, FilterOperator.NEQ)

    @classmethod
    def from_token(cls, token: str) -> "FilterOperator":
        """Accept both `$gt` and `gt` spellings."""
        return cls(token[1:] if token.startswith("$") else token)


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
