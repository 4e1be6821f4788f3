"""Core domain models for the safariwatch system.

These models represent the data flowing through the system: the camera
feeds being watched, the fixed remote browser session configuration,
per-feed count results, and the reports derived from them.
"""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Confidence(str, enum.Enum):
    """Confidence label attached to a count result."""

    HIGH = "High"  # The remote vision task returned an answer
    ERROR = "Error"  # The counting operation failed


class DiagnosticStatus(str, enum.Enum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


# ---------------------------------------------------------------------------
# Camera Feeds
# ---------------------------------------------------------------------------


class CameraFeed(BaseModel):
    """A single webcam preview image to count animals on."""

    model_config = ConfigDict(frozen=True)

    species: str = Field(description="Plural species noun, e.g. 'tigers'")
    noun: str = Field(description="Singular species noun, e.g. 'tiger'")
    image_url: str = Field(description="URL of the feed's preview image")

    @property
    def count_key(self) -> str:
        """Key under which tool outputs report this feed's count."""
        return f"{self.noun}Count"


# ---------------------------------------------------------------------------
# Remote Session Configuration
# ---------------------------------------------------------------------------


class Toggle(BaseModel):
    model_config = ConfigDict(frozen=True)

    active: bool


class ProxySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    active: bool = True
    type: str = "anchor_residential"
    country_code: str = "us"


class SessionTimeout(BaseModel):
    """Remote-enforced session limits, in minutes."""

    model_config = ConfigDict(frozen=True)

    max_duration: int = 15
    idle_timeout: int = 1


class LiveView(BaseModel):
    model_config = ConfigDict(frozen=True)

    read_only: bool = False


class Viewport(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = Field(default=1440, gt=0)
    height: int = Field(default=900, gt=0)


class AnchorSessionConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    recording: Toggle = Field(default_factory=lambda: Toggle(active=True))
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    timeout: SessionTimeout = Field(default_factory=SessionTimeout)
    live_view: LiveView = Field(default_factory=LiveView)


class AnchorBrowserConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    adblock: Toggle = Field(default_factory=lambda: Toggle(active=True))
    popup_blocker: Toggle = Field(default_factory=lambda: Toggle(active=False))
    extra_stealth: Toggle = Field(default_factory=lambda: Toggle(active=True))
    headless: Toggle = Field(default_factory=lambda: Toggle(active=False))
    viewport: Viewport = Field(default_factory=Viewport)
    fullscreen: Toggle = Field(default_factory=lambda: Toggle(active=False))
    captcha_solver: Toggle = Field(default_factory=lambda: Toggle(active=False))


class SessionRequest(BaseModel):
    """Body of the create-session call."""

    model_config = ConfigDict(frozen=True)

    session: AnchorSessionConfig = Field(default_factory=AnchorSessionConfig)
    browser: AnchorBrowserConfig = Field(default_factory=AnchorBrowserConfig)


class TaskBrowserOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    adblock: Toggle = Field(default_factory=lambda: Toggle(active=True))
    extra_stealth: Toggle = Field(default_factory=lambda: Toggle(active=True))


class VisualTaskRequest(BaseModel):
    """Body of the perform-web-task call."""

    model_config = ConfigDict(frozen=True)

    prompt: str
    url: str
    headless: bool = False
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    browser: TaskBrowserOptions = Field(default_factory=TaskBrowserOptions)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class CountResult(BaseModel):
    """Outcome of one counting operation against one camera feed."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(default=0, ge=0, description="Number of animals counted")
    confidence: Confidence = Field(description="High on success, Error on failure")
    detail: str = Field(default="", description="Raw model text or the error message")
    success: bool

    @classmethod
    def failure(cls, detail: str) -> CountResult:
        return cls(count=0, confidence=Confidence.ERROR, detail=detail, success=False)

    def to_tool_output(self, feed: CameraFeed) -> dict[str, object]:
        """Render as the species-keyed dict returned by the counting tools."""
        return {
            feed.count_key: self.count,
            "confidence": self.confidence.value,
            "details": self.detail,
            "success": self.success,
        }


class SafariReport(BaseModel):
    """Aggregated counts of both feeds plus a human-readable report."""

    model_config = ConfigDict(frozen=True)

    giraffes: int = Field(default=0, ge=0)
    tigers: int = Field(default=0, ge=0)
    total_animals: int = Field(default=0, ge=0)
    report: str = ""
    success: bool = False

    def to_tool_output(self) -> dict[str, object]:
        return {
            "giraffes": self.giraffes,
            "tigers": self.tigers,
            "totalAnimals": self.total_animals,
            "report": self.report,
            "success": self.success,
        }


class WorkflowRun(BaseModel):
    """Result of one run of the fixed monitoring workflow."""

    model_config = ConfigDict(frozen=True)

    tiger: CountResult
    giraffe: CountResult
    report: str
    total_animals: int = Field(ge=0)
    timestamp: datetime

    @property
    def success(self) -> bool:
        return self.tiger.success and self.giraffe.success


class DiagnosticResult(BaseModel):
    """Outcome of the session + fetch-webpage connectivity check."""

    model_config = ConfigDict(frozen=True)

    status: DiagnosticStatus
    message: str
    session_id: str = "none"

    def to_tool_output(self) -> dict[str, object]:
        return {
            "status": self.status.value,
            "message": self.message,
            "sessionId": self.session_id,
        }
