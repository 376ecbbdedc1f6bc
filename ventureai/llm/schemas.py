"""
Pydantic Schemas for Generation Inputs and Structured Outputs

Inputs describe the venture being analyzed. Output schemas define the shape
a structured endpoint must decode to before its payload is accepted; the
payload keys stay camelCase because the web client reads them directly.
"""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# Inputs
# =============================================================================


class VentureProfile(BaseModel):
    """Profile fields of the venture a request is about."""

    name: str
    description: str = ""
    problem: str = ""
    idea: str = ""
    audience: str = ""
    answers: dict[str, str] = Field(default_factory=dict)

    def to_profile_fields(self) -> dict[str, str]:
        fields = {
            "name": self.name,
            "description": self.description,
            "problem": self.problem,
            "idea": self.idea,
            "audience": self.audience,
        }
        for question, answer in self.answers.items():
            fields[f"answer:{question}"] = answer
        return fields


class Transaction(BaseModel):
    """One finance ledger entry."""

    date: dt.date
    type: Literal["income", "expense"]
    amount: float
    category: str
    description: str = ""


class SurveyInfo(BaseModel):
    """A customer-development survey being drafted."""

    title: str = Field(min_length=1)
    description: str = ""


class SurveyAnswer(BaseModel):
    question: str
    value: str


class SurveyResponse(BaseModel):
    """One respondent's answers, in question order."""

    respondent_name: str | None = Field(default=None, alias="respondentName")
    answers: list[SurveyAnswer] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# Structured outputs
# =============================================================================


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class IdeaAnalysisOutput(_Payload):
    summary: str = Field(min_length=1)
    suggested_name: str | None = Field(default=None, alias="suggestedName")
    suggested_description: str | None = Field(default=None, alias="suggestedDescription")
    suggested_problem: str | None = Field(default=None, alias="suggestedProblem")
    suggested_idea: str | None = Field(default=None, alias="suggestedIdea")
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list, alias="nextSteps")


class ExecutiveSummary(_Payload):
    overall_score: int = Field(ge=0, le=100, alias="overallScore")
    verdict: str
    key_recommendations: list[str] = Field(default_factory=list, alias="keyRecommendations")


class ComprehensiveAnalysisOutput(_Payload):
    executive_summary: ExecutiveSummary = Field(alias="executiveSummary")
    key_advantages: list[str] = Field(default_factory=list, alias="keyAdvantages")
    problem_areas: list[str] = Field(default_factory=list, alias="problemAreas")
    strategic_suggestions: list[str] = Field(default_factory=list, alias="strategicSuggestions")


class TaskSuggestion(_Payload):
    title: str = Field(min_length=1)
    description: str = ""
    priority: Literal["high", "medium", "low"] = "medium"

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class FinanceAnalysisOutput(_Payload):
    health_score: int = Field(ge=0, le=100, alias="healthScore")
    summary: str = Field(min_length=1)
    observations: list[str] = Field(default_factory=list)
    cost_saving_tips: list[str] = Field(default_factory=list, alias="costSavingTips")
    missed_opportunities: list[str] = Field(default_factory=list, alias="missedOpportunities")
    verdict: Literal["excellent", "good", "fair", "poor"]


class SurveyQuestion(_Payload):
    text: str = Field(min_length=1)
    type: Literal["text", "single_choice", "multiple_choice", "rating"] = "text"
    options: list[str] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _choices_need_options(self) -> "SurveyQuestion":
        if self.type in ("single_choice", "multiple_choice") and len(self.options) < 2:
            raise ValueError(f"{self.type} question needs at least two options")
        return self


class AudienceSegment(_Payload):
    name: str = Field(min_length=1)
    percent: int = Field(ge=0, le=100)
    description: str = ""


class SurveyAnalysisOutput(_Payload):
    summary: str = Field(min_length=1)
    problem_confirmed: bool = Field(alias="problemConfirmed")
    problem_confidence: int = Field(ge=0, le=100, alias="problemConfidence")
    key_insights: list[str] = Field(default_factory=list, alias="keyInsights")
    pain_points: list[str] = Field(default_factory=list, alias="painPoints")
    opportunities: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    audience_segments: list[AudienceSegment] = Field(default_factory=list, alias="audienceSegments")
    next_steps: list[str] = Field(default_factory=list, alias="nextSteps")
    overall_score: int = Field(ge=0, le=100, alias="overallScore")
    verdict: str = Field(min_length=1)
