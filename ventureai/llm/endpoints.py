"""Per-endpoint generation policy registry.

Every endpoint declares, in one place, the shape it expects back, what to do
when generation does not produce it, and its sampling limits. The resolver
reads these values instead of branching per call site. `validate_registry()`
runs once at startup and refuses to boot with a missing or inconsistent
entry.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any

from pydantic import Field, TypeAdapter

from .client import ExpectedShape
from .decoding import JsonKind
from .fallbacks import (
    FallbackInput,
    comprehensive_analysis_fallback,
    finance_analysis_fallback,
    idea_analysis_fallback,
    questions_fallback,
    sample_input,
    survey_analysis_fallback,
    survey_questions_fallback,
    tasks_fallback,
)
from .schemas import (
    ComprehensiveAnalysisOutput,
    FinanceAnalysisOutput,
    IdeaAnalysisOutput,
    SurveyAnalysisOutput,
    SurveyQuestion,
    TaskSuggestion,
    Transaction,
)


class Endpoint(str, Enum):
    CHAT = "chat"
    IDEA_ANALYSIS = "idea_analysis"
    COMPREHENSIVE_ANALYSIS = "comprehensive_analysis"
    QUESTIONS = "questions"
    TASK_SUGGESTIONS = "task_suggestions"
    FINANCE_ANALYSIS = "finance_analysis"
    BUSINESS_PLAN = "business_plan"
    SURVEY_QUESTIONS = "survey_questions"
    SURVEY_ANALYSIS = "survey_analysis"


class FailurePolicy(str, Enum):
    FALLBACK = "fallback"
    SURFACE_ERROR = "surface_error"


FallbackFactory = Callable[[FallbackInput], Any]


@dataclass(frozen=True)
class EndpointPolicy:
    endpoint: Endpoint
    expected_shape: ExpectedShape
    on_failure: FailurePolicy
    temperature: float
    max_output_tokens: int
    json_kind: JsonKind | None = None
    schema: Any = None
    fallback: FallbackFactory | None = None
    error_message: str = ""
    unconfigured_message: str = ""
    _adapter: TypeAdapter | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.schema is not None:
            object.__setattr__(self, "_adapter", TypeAdapter(self.schema))

    @property
    def is_structured(self) -> bool:
        return self.expected_shape is ExpectedShape.STRUCTURED_JSON

    def normalize(self, value: Any) -> Any:
        """
        Validate a decoded value against the endpoint schema.

        Returns the JSON-ready payload (camelCase keys). Raises
        pydantic.ValidationError when the value does not fit.
        """
        if self._adapter is None:
            return value
        validated = self._adapter.validate_python(value)
        return self._adapter.dump_python(validated, mode="json", by_alias=True)

    def build_fallback(self, data: FallbackInput) -> Any:
        if self.fallback is None:
            raise ValueError(f"Endpoint {self.endpoint.value} has no fallback")
        return self.fallback(data)


CHAT_UNAVAILABLE = "Sorry, an error occurred while processing your request. Please try again."
CHAT_NOT_CONFIGURED = "The AI assistant is not configured. Please contact the administrator."
BUSINESS_PLAN_UNAVAILABLE = "Failed to generate the business plan. Please try again."
BUSINESS_PLAN_NOT_CONFIGURED = "Business plan generation is not configured. Please contact the administrator."


def _structured(
    endpoint: Endpoint,
    *,
    kind: JsonKind,
    schema: Any,
    fallback: FallbackFactory,
    temperature: float,
    max_output_tokens: int,
) -> EndpointPolicy:
    return EndpointPolicy(
        endpoint=endpoint,
        expected_shape=ExpectedShape.STRUCTURED_JSON,
        on_failure=FailurePolicy.FALLBACK,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        json_kind=kind,
        schema=schema,
        fallback=fallback,
    )


ENDPOINT_POLICIES: Mapping[Endpoint, EndpointPolicy] = {
    Endpoint.CHAT: EndpointPolicy(
        endpoint=Endpoint.CHAT,
        expected_shape=ExpectedShape.FREE_TEXT,
        on_failure=FailurePolicy.SURFACE_ERROR,
        temperature=0.7,
        max_output_tokens=500,
        error_message=CHAT_UNAVAILABLE,
        unconfigured_message=CHAT_NOT_CONFIGURED,
    ),
    Endpoint.IDEA_ANALYSIS: _structured(
        Endpoint.IDEA_ANALYSIS,
        kind=JsonKind.OBJECT,
        schema=IdeaAnalysisOutput,
        fallback=idea_analysis_fallback,
        temperature=0.7,
        max_output_tokens=1000,
    ),
    Endpoint.COMPREHENSIVE_ANALYSIS: _structured(
        Endpoint.COMPREHENSIVE_ANALYSIS,
        kind=JsonKind.OBJECT,
        schema=ComprehensiveAnalysisOutput,
        fallback=comprehensive_analysis_fallback,
        temperature=0.8,
        max_output_tokens=4000,
    ),
    Endpoint.QUESTIONS: _structured(
        Endpoint.QUESTIONS,
        kind=JsonKind.ARRAY,
        schema=Annotated[list[Annotated[str, Field(min_length=1)]], Field(min_length=1)],
        fallback=questions_fallback,
        temperature=0.7,
        max_output_tokens=400,
    ),
    Endpoint.TASK_SUGGESTIONS: _structured(
        Endpoint.TASK_SUGGESTIONS,
        kind=JsonKind.ARRAY,
        schema=Annotated[list[TaskSuggestion], Field(min_length=1)],
        fallback=tasks_fallback,
        temperature=0.7,
        max_output_tokens=500,
    ),
    Endpoint.FINANCE_ANALYSIS: _structured(
        Endpoint.FINANCE_ANALYSIS,
        kind=JsonKind.OBJECT,
        schema=FinanceAnalysisOutput,
        fallback=finance_analysis_fallback,
        temperature=0.7,
        max_output_tokens=1000,
    ),
    Endpoint.BUSINESS_PLAN: EndpointPolicy(
        endpoint=Endpoint.BUSINESS_PLAN,
        expected_shape=ExpectedShape.FREE_TEXT,
        on_failure=FailurePolicy.SURFACE_ERROR,
        temperature=0.7,
        max_output_tokens=4000,
        error_message=BUSINESS_PLAN_UNAVAILABLE,
        unconfigured_message=BUSINESS_PLAN_NOT_CONFIGURED,
    ),
    Endpoint.SURVEY_QUESTIONS: _structured(
        Endpoint.SURVEY_QUESTIONS,
        kind=JsonKind.ARRAY,
        schema=Annotated[list[SurveyQuestion], Field(min_length=1)],
        fallback=survey_questions_fallback,
        temperature=0.7,
        max_output_tokens=1500,
    ),
    Endpoint.SURVEY_ANALYSIS: _structured(
        Endpoint.SURVEY_ANALYSIS,
        kind=JsonKind.OBJECT,
        schema=SurveyAnalysisOutput,
        fallback=survey_analysis_fallback,
        temperature=0.7,
        max_output_tokens=2000,
    ),
}


def get_policy(endpoint: Endpoint) -> EndpointPolicy:
    return ENDPOINT_POLICIES[endpoint]


_SAMPLE_TRANSACTIONS = (
    Transaction(date=dt.date(2024, 1, 1), type="income", amount=1000.0, category="sales"),
    Transaction(date=dt.date(2024, 1, 2), type="expense", amount=300.0, category="hosting"),
    Transaction(date=dt.date(2024, 1, 3), type="expense", amount=200.0, category="marketing"),
)


def validate_registry(policies: Mapping[Endpoint, EndpointPolicy] = ENDPOINT_POLICIES) -> None:
    """
    Check the registry is exhaustive and self-consistent.

    Raises:
        ValueError: naming every problem found
    """
    problems: list[str] = []

    for endpoint in Endpoint:
        policy = policies.get(endpoint)
        if policy is None:
            problems.append(f"{endpoint.value}: no policy registered")
            continue
        if policy.endpoint is not endpoint:
            problems.append(f"{endpoint.value}: registered under the wrong key ({policy.endpoint.value})")
        if policy.temperature < 0 or policy.max_output_tokens <= 0:
            problems.append(f"{endpoint.value}: invalid sampling limits")

        if policy.is_structured and policy.json_kind is None:
            problems.append(f"{endpoint.value}: structured endpoint without a JSON kind")

        if policy.on_failure is FailurePolicy.FALLBACK:
            if policy.fallback is None:
                problems.append(f"{endpoint.value}: fallback policy without a fallback factory")
                continue
            try:
                policy.normalize(policy.build_fallback(sample_input(_SAMPLE_TRANSACTIONS)))
            except Exception as e:
                problems.append(f"{endpoint.value}: fallback does not match its schema ({e})")
        elif not (policy.error_message and policy.unconfigured_message):
            problems.append(f"{endpoint.value}: surface-error policy without apology messages")

    if problems:
        raise ValueError("Invalid endpoint registry: " + "; ".join(problems))
