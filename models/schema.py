"""
Pydantic data models for the web API exploration report.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .enums import BugPriority, IssueState, StepKind, StepStatus, SupportLevel


BROWSERS = ("chrome", "firefox", "safari", "edge")


class InvalidTransition(Exception):
    """Raised when an exploration step is moved out of lifecycle order."""


class SupportStatus(BaseModel):
    """Support status of one API in one browser."""
    version: str = Field(..., min_length=1, description="Version string, e.g. '88+'")
    status: SupportLevel = Field(SupportLevel.UNKNOWN, description="Support level")
    notes: Optional[str] = Field(None, description="Free-text notes")


class BrowserSupport(BaseModel):
    """Per-browser support matrix. Always exactly four browsers."""
    chrome: SupportStatus
    firefox: SupportStatus
    safari: SupportStatus
    edge: SupportStatus

    class Config:
        json_schema_extra = {
            "example": {
                "chrome": {"version": "88+", "status": "supported"},
                "firefox": {"version": "85+", "status": "supported"},
                "safari": {"version": "14+", "status": "supported"},
                "edge": {"version": "88+", "status": "supported"},
            }
        }


class ExplainerInfo(BaseModel):
    """A design explainer document for an API."""
    title: str = Field(..., description="Explainer title")
    url: str = Field(..., description="Explainer URL")
    description: str = Field("", description="Short summary")
    author: Optional[str] = Field(None, description="Author or owning organisation")
    date: Optional[str] = Field(None, description="Last-updated timestamp")

    @field_validator("title", "url")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Title and url are required; a half-filled explainer is invalid."""
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class GitHubIssue(BaseModel):
    """Issue from the web-platform-tests tracker."""
    id: int = Field(..., description="Issue number")
    title: str
    url: str
    state: IssueState = IssueState.OPEN
    created_at: Optional[str] = Field(None, description="Creation timestamp (ISO-8601)")
    author: str


class ChromiumBug(BaseModel):
    """Bug record from the Chromium bug portal."""
    id: str = Field(..., description="Tracker identifier, e.g. 'chromium:123456'")
    title: str
    url: str
    priority: BugPriority = BugPriority.P2
    status: str = "Untriaged"
    assignee: Optional[str] = None


class ChromiumChange(BaseModel):
    """One recent change in the Chromium implementation."""
    commit: str
    description: str
    date: str
    author: str


class ChromiumStatus(BaseModel):
    """Chromium implementation summary with ordered recent changes."""
    summary: str
    recent_changes: List[ChromiumChange] = Field(default_factory=list)


class APIInfo(BaseModel):
    """Aggregate report for a resolved API name."""
    name: str
    description: str
    mdn_url: str
    browser_support: BrowserSupport
    explainer: Optional[ExplainerInfo] = None
    github_issues: List[GitHubIssue] = Field(default_factory=list)
    chromium_bugs: List[ChromiumBug] = Field(default_factory=list)
    chromium_status: ChromiumStatus
    future_prediction: str


# ------------------------------------------------------------------
# Per-step results (tagged by ``kind``)
# ------------------------------------------------------------------

class ApiNameResult(BaseModel):
    kind: Literal[StepKind.API_NAME] = StepKind.API_NAME
    api_name: str = Field(..., min_length=1)


class IntroductionResult(BaseModel):
    kind: Literal[StepKind.INTRODUCTION] = StepKind.INTRODUCTION
    description: str
    mdn_url: str


class BrowserSupportResult(BaseModel):
    kind: Literal[StepKind.BROWSER_SUPPORT] = StepKind.BROWSER_SUPPORT
    browser_support: BrowserSupport


class ExplainerResult(BaseModel):
    kind: Literal[StepKind.EXPLAINER] = StepKind.EXPLAINER
    explainer: Optional[ExplainerInfo] = None


class IssuesResult(BaseModel):
    kind: Literal[StepKind.ISSUES] = StepKind.ISSUES
    issues: List[GitHubIssue] = Field(default_factory=list)


class BugsResult(BaseModel):
    kind: Literal[StepKind.BUGS] = StepKind.BUGS
    bugs: List[ChromiumBug] = Field(default_factory=list)


class StatusResult(BaseModel):
    kind: Literal[StepKind.STATUS] = StepKind.STATUS
    summary: str
    recent_changes: List[ChromiumChange] = Field(default_factory=list)


class PredictionResult(BaseModel):
    kind: Literal[StepKind.PREDICTION] = StepKind.PREDICTION
    prediction: str


StepResult = Annotated[
    Union[
        ApiNameResult,
        IntroductionResult,
        BrowserSupportResult,
        ExplainerResult,
        IssuesResult,
        BugsResult,
        StatusResult,
        PredictionResult,
    ],
    Field(discriminator="kind"),
]


class StepDefinition(BaseModel):
    """Static labels for one pipeline position."""
    id: int
    kind: StepKind
    title: str
    description: str


STEP_DEFINITIONS: List[StepDefinition] = [
    StepDefinition(
        id=1,
        kind=StepKind.API_NAME,
        title="Search Relevant API",
        description="Finding the most relevant API from MDN Web API documentation...",
    ),
    StepDefinition(
        id=2,
        kind=StepKind.INTRODUCTION,
        title="API Introduction",
        description="Gathering API introduction and documentation...",
    ),
    StepDefinition(
        id=3,
        kind=StepKind.BROWSER_SUPPORT,
        title="Browser Support",
        description="Analyzing browser support status...",
    ),
    StepDefinition(
        id=4,
        kind=StepKind.EXPLAINER,
        title="Explainer Search",
        description="Searching for public explainers...",
    ),
    StepDefinition(
        id=5,
        kind=StepKind.ISSUES,
        title="GitHub Issues",
        description="Finding recent GitHub issues...",
    ),
    StepDefinition(
        id=6,
        kind=StepKind.BUGS,
        title="Chromium Bugs",
        description="Searching Chromium bug portal...",
    ),
    StepDefinition(
        id=7,
        kind=StepKind.STATUS,
        title="Chromium Status",
        description="Analyzing current Chromium implementation...",
    ),
    StepDefinition(
        id=8,
        kind=StepKind.PREDICTION,
        title="Future Prediction",
        description="Generating future evolution prediction...",
    ),
]


class ExplorationStep(BaseModel):
    """
    One stage of the exploration pipeline.

    Status only moves forward: pending -> loading -> completed | error.
    ``result`` is set only when completed, ``error`` only on error.
    """
    id: int = Field(..., ge=1, le=8, description="Position in the pipeline")
    title: str
    description: str
    status: StepStatus = StepStatus.PENDING
    result: Optional[StepResult] = None
    error: Optional[str] = None

    @classmethod
    def from_definition(cls, definition: StepDefinition) -> "ExplorationStep":
        return cls(
            id=definition.id,
            title=definition.title,
            description=definition.description,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status in (StepStatus.COMPLETED, StepStatus.ERROR)

    def __setattr__(self, name, value):
        # Completed and errored steps are frozen
        if name in type(self).model_fields and self.is_terminal:
            raise InvalidTransition(
                f"Step {self.id} is {self.status.value} and can no longer change"
            )
        super().__setattr__(name, value)

    def start(self) -> None:
        if self.status != StepStatus.PENDING:
            raise InvalidTransition(
                f"Step {self.id} cannot start from {self.status.value}"
            )
        self.status = StepStatus.LOADING

    def complete(self, result: StepResult) -> None:
        if self.status != StepStatus.LOADING:
            raise InvalidTransition(
                f"Step {self.id} cannot complete from {self.status.value}"
            )
        self.result = result
        self.status = StepStatus.COMPLETED

    def fail(self, message: str) -> None:
        if self.status != StepStatus.LOADING:
            raise InvalidTransition(
                f"Step {self.id} cannot fail from {self.status.value}"
            )
        self.error = message
        self.status = StepStatus.ERROR
