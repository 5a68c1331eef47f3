"""
Enumerations for web API exploration models.
"""

from enum import Enum, IntEnum


class StepStatus(str, Enum):
    """Lifecycle status of an exploration step."""
    PENDING = "pending"
    LOADING = "loading"
    COMPLETED = "completed"
    ERROR = "error"


class SupportLevel(str, Enum):
    """Browser support level for an API."""
    SUPPORTED = "supported"
    PARTIAL = "partial"
    NOT_SUPPORTED = "not-supported"
    UNKNOWN = "unknown"


class IssueState(str, Enum):
    """State of an issue-tracker issue."""
    OPEN = "open"
    CLOSED = "closed"


class BugPriority(str, Enum):
    """Chromium bug priority."""
    P0 = "P0"
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    P4 = "P4"


class Tier(IntEnum):
    """
    Data-acquisition tiers, in fallback order.

    Lower number = structured and authoritative,
    higher number = best effort.
    """
    API = 1
    SCRAPE = 2
    SYNTHESIS = 3


class StepKind(str, Enum):
    """Discriminator for per-step result records."""
    API_NAME = "api_name"
    INTRODUCTION = "introduction"
    BROWSER_SUPPORT = "browser_support"
    EXPLAINER = "explainer"
    ISSUES = "issues"
    BUGS = "bugs"
    STATUS = "status"
    PREDICTION = "prediction"
