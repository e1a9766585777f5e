from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Tone(str, Enum):
    PROFESSIONAL = "Professional"
    FRIENDLY = "Friendly"
    EMPATHETIC = "Empathetic"
    CONCISE = "Concise"
    PERSUASIVE = "Persuasive"
    DIRECT_BUT_POLITE = "Direct but polite"


class Length(str, Enum):
    SHORT = "Short"
    MEDIUM = "Medium"
    LONG = "Long"


GOAL_CHOICES = (
    "Be clear",
    "Be polite",
    "Be confident",
    "Reduce jargon",
    "Soften refusal",
    "Ask for decision",
    "Keep it brief",
)

DEFAULT_GOALS = ["Be clear", "Be polite"]


# Input types
@dataclass
class RewriteOptions:
    tone: Tone = Tone.PROFESSIONAL
    length: Length = Length.MEDIUM
    audience: str = "General"
    goals: List[str] = field(default_factory=lambda: list(DEFAULT_GOALS))

    def __post_init__(self):
        # plain strings are accepted and normalised to the enum members
        try:
            self.tone = Tone(self.tone)
        except ValueError:
            raise ValueError(f"Unknown tone: {self.tone!r}") from None
        try:
            self.length = Length(self.length)
        except ValueError:
            raise ValueError(f"Unknown length: {self.length!r}") from None

    def toggle_goal(self, goal: str) -> None:
        """Drop the goal if selected, otherwise append it after the existing ones."""
        if goal in self.goals:
            self.goals = [g for g in self.goals if g != goal]
        else:
            self.goals = [*self.goals, goal]

    @classmethod
    def from_form(cls, tone: str, length: str, audience: str, goals: List[str]) -> "RewriteOptions":
        # an unknown tone or length raises ValueError naming the bad field
        return cls(tone=tone, length=length, audience=audience, goals=list(goals))


@dataclass
class RewriteRequest:
    prompt: str


# Output types
@dataclass
class RewriteResult:
    text: str


# Errors
class EmptyScenarioError(ValueError):
    """Raised before any network call when the scenario is blank."""

    def __init__(self, message: str = "Type a scenario first."):
        super().__init__(message)


class RewriteError(Exception):
    """A failure relayed to the caller as a plain-text response."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MissingPromptError(RewriteError):
    status_code = 400

    def __init__(self):
        super().__init__("Missing prompt")


class MissingCredentialError(RewriteError):
    def __init__(self, env_var: str = "OPENAI_API_KEY"):
        super().__init__(f"Missing {env_var}")
