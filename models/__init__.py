"""
Models package initialization.
"""

from .enums import StepStatus, SupportLevel, IssueState, BugPriority, Tier, StepKind
from .schema import (
    BROWSERS,
    STEP_DEFINITIONS,
    InvalidTransition,
    SupportStatus,
    BrowserSupport,
    ExplainerInfo,
    GitHubIssue,
    ChromiumBug,
    ChromiumChange,
    ChromiumStatus,
    APIInfo,
    ApiNameResult,
    IntroductionResult,
    BrowserSupportResult,
    ExplainerResult,
    IssuesResult,
    BugsResult,
    StatusResult,
    PredictionResult,
    StepResult,
    StepDefinition,
    ExplorationStep,
)

__all__ = [
    "StepStatus",
    "SupportLevel",
    "IssueState",
    "BugPriority",
    "Tier",
    "StepKind",
    "BROWSERS",
    "STEP_DEFINITIONS",
    "InvalidTransition",
    "SupportStatus",
    "BrowserSupport",
    "ExplainerInfo",
    "GitHubIssue",
    "ChromiumBug",
    "ChromiumChange",
    "ChromiumStatus",
    "APIInfo",
    "ApiNameResult",
    "IntroductionResult",
    "BrowserSupportResult",
    "ExplainerResult",
    "IssuesResult",
    "BugsResult",
    "StatusResult",
    "PredictionResult",
    "StepResult",
    "StepDefinition",
    "ExplorationStep",
]
