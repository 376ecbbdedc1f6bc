"""
Deterministic fallback payloads.

Served when generation is unavailable or its output cannot be used. Every
builder is a pure function of its input: the same venture always gets the
same fallback, and each payload validates against its endpoint's schema.
"""

from __future__ import annotations

import copy
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .schemas import Transaction, VentureProfile


@dataclass(frozen=True)
class FallbackInput:
    """What a fallback builder may look at."""

    profile: VentureProfile | None = None
    transactions: tuple[Transaction, ...] = ()
    survey_response_count: int = 0
    survey_question_count: int = 0

    @property
    def venture_name(self) -> str:
        return self.profile.name if self.profile else "Your venture"


DEFAULT_QUESTIONS = [
    "Which competitors are already on the market?",
    "How do you plan to monetize the product?",
    "What resources do you need to launch?",
]

DEFAULT_TASKS = [
    {"title": "Market research", "description": "Study competitors and the target audience", "priority": "high"},
    {"title": "MVP plan", "description": "Define the minimum feature set", "priority": "high"},
    {"title": "Build a prototype", "description": "Create a first version of the product", "priority": "medium"},
    {"title": "Testing", "description": "Run tests with potential users", "priority": "medium"},
    {"title": "Pitch deck", "description": "Prepare a presentation for investors", "priority": "low"},
]


def questions_fallback(_: FallbackInput) -> list[str]:
    return list(DEFAULT_QUESTIONS)


def tasks_fallback(_: FallbackInput) -> list[dict[str, str]]:
    return [dict(task) for task in DEFAULT_TASKS]


def idea_analysis_fallback(data: FallbackInput) -> dict[str, Any]:
    profile = data.profile or VentureProfile(name=data.venture_name)
    audience = profile.audience or "its target audience"

    strengths = []
    if profile.name:
        strengths.append("The project has a clear name")
    if profile.description:
        strengths.append("The core idea is described")
    if profile.problem:
        strengths.append("The audience's problem is identified")
    if profile.audience:
        strengths.append("The target audience is defined")
    if profile.answers:
        strengths.append("Implementation details have been thought through")

    improvements = []
    if not profile.problem:
        improvements.append("State the problem you solve more precisely")
    if not profile.audience:
        improvements.append("Describe the target audience in more detail")
    improvements.append("Research competitors on the market")
    improvements.append("Work out the monetization model")

    return {
        "summary": (
            f'"{profile.name}" has potential. The idea is clear, but the details need '
            "more work before pitching to investors."
        ),
        "suggestedName": profile.name,
        "suggestedDescription": profile.description or f"{profile.name} is an innovative solution for {audience}.",
        "suggestedProblem": profile.problem or "Describe a concrete problem your target audience has",
        "suggestedIdea": profile.idea or profile.description or "Describe how your product solves the problem",
        "strengths": strengths or ["A start has been made: the idea is written down"],
        "improvements": improvements,
        "nextSteps": ["Run market research", "Build an MVP", "Find the first users"],
    }


def _profile_score(profile: VentureProfile) -> int:
    """60..80, higher the more of the profile is filled in."""
    score = 60
    score += 5 if profile.problem else 0
    score += 5 if profile.idea else 0
    score += 5 if profile.audience else 0
    score += 3 if profile.description else 0
    score += 2 if profile.answers else 0
    return score


def comprehensive_analysis_fallback(data: FallbackInput) -> dict[str, Any]:
    profile = data.profile or VentureProfile(name=data.venture_name)
    score = _profile_score(profile)
    audience = profile.audience

    return {
        "executiveSummary": {
            "marketSize": "$1-5B",
            "growthRate": "15-25%",
            "projectedSize": "$3-10B by 2030",
            "recentFunding": "Active investment in the sector",
            "overallScore": score,
            "verdict": "good" if score >= 75 else "moderate",
            "keyRecommendations": [
                f"Focus on a narrow segment of {audience or 'your target audience'}",
                "Build an MVP within 2-3 months for fast validation",
                "Find the first 10-20 customers for feedback",
            ],
        },
        "marketAnalysis": {
            "greenFlags": [
                "Growing market with potential",
                "Clearly defined problem" if profile.problem else "A sense of direction exists",
                "Current technology makes the solution feasible",
                "Target audience is defined" if audience else "Broad potential market",
            ],
            "redFlags": [
                "Competitor research needs more depth",
                "The monetization model needs refinement",
                "Risk of large players entering the market",
            ],
        },
        "confidenceScores": {
            "problemValidation": {
                "score": 75 if profile.problem else 55,
                "description": (
                    "Problem is defined and needs confirmation from users"
                    if profile.problem
                    else "The problem needs to be clarified"
                ),
            },
            "solutionValidation": {
                "score": 70 if profile.idea else 50,
                "description": "Solution has potential and needs testing" if profile.idea else "Solution needs detail",
            },
            "marketValidation": {
                "score": 65 if audience else 45,
                "description": "Market is defined and needs sizing" if audience else "Market analysis is required",
            },
        },
        "keyAdvantages": [
            "Understanding of the target audience's problem",
            "An MVP can be built quickly",
            "Flexibility to adapt the solution",
            "Potential to scale",
        ],
        "problemAreas": [
            "Competition on the market",
            "Acquiring the first customers",
            "Limited resources at the start",
        ],
        "marketFactors": [
            {
                "name": "Target market clarity",
                "score": 70 if audience else 50,
                "description": f"Audience: {audience}" if audience else "The target audience needs clarification",
            },
            {"name": "Market timing", "score": 75, "description": "A good time to enter the market"},
            {"name": "Entry barriers", "score": 55, "description": "Moderate and surmountable"},
            {
                "name": "Problem-solution fit",
                "score": 75 if profile.problem and profile.idea else 55,
                "description": "Needs confirmation from users",
            },
        ],
        "executionFactors": [
            {"name": "MVP viability", "score": 80, "description": "An MVP can be built in 2-3 months"},
            {"name": "Value proposition", "score": 65, "description": "Needs refinement and testing"},
            {"name": "Resource requirements", "score": 70, "description": "A minimal team of 2-4 people"},
        ],
        "strategicSuggestions": [
            "Run 20+ interviews with potential customers",
            "Launch a landing page to collect sign-ups",
            "Study competitors and their pricing",
            "Define the key success metrics",
            "Find the first pilot customers",
        ],
        "quickWins": [
            {"title": "Customer interviews", "effort": "low", "description": "Run 10-20 interviews", "result": "Understanding of needs"},
            {"title": "Landing page", "effort": "low", "description": "Build a no-code page", "result": "50+ sign-ups"},
            {"title": "Competitor analysis", "effort": "medium", "description": "Study 5-10 competitors", "result": "Competitive advantages"},
        ],
        "roadmap": [
            {"phase": "Immediately", "period": "1 week", "items": ["Customer interviews", "Competitor analysis"]},
            {"phase": "Short term", "period": "1-3 months", "items": ["Build the MVP", "First users"]},
            {"phase": "Medium term", "period": "3-6 months", "items": ["Product-market fit", "First revenue"]},
        ],
    }


def _finance_verdict(score: int) -> str:
    if score >= 80:
        return "excellent"
    if score >= 60:
        return "good"
    if score >= 40:
        return "fair"
    return "poor"


def finance_analysis_fallback(data: FallbackInput) -> dict[str, Any]:
    income = sum(t.amount for t in data.transactions if t.type == "income")
    expenses = sum(t.amount for t in data.transactions if t.type == "expense")
    net = income - expenses

    if income > 0:
        score = int(max(0.0, min(100.0, 50 + 50 * net / income)))
    else:
        score = 30 if expenses else 50

    by_category: dict[str, float] = defaultdict(float)
    for t in data.transactions:
        if t.type == "expense":
            by_category[t.category] += t.amount

    observations = [
        f"Income: {income:.2f}, expenses: {expenses:.2f}, net: {net:.2f}",
        f"{len(data.transactions)} transactions analyzed",
    ]
    tips = ["Review recurring expenses monthly"]
    if by_category:
        top = max(by_category, key=lambda c: (by_category[c], c))
        observations.append(f'The largest expense category is "{top}" ({by_category[top]:.2f})')
        tips.insert(0, f'Look for savings in "{top}", your largest expense category')

    return {
        "healthScore": score,
        "summary": (
            "Automatic analysis is unavailable, so this summary is computed from your transaction totals. "
            + ("Income currently exceeds expenses." if net >= 0 else "Expenses currently exceed income.")
        ),
        "observations": observations,
        "costSavingTips": tips,
        "missedOpportunities": [] if income > 0 else ["No income recorded yet: validate a paid offer early"],
        "verdict": _finance_verdict(score),
    }


DEFAULT_SURVEY_QUESTIONS = [
    {"text": "What is the main problem you face in this area?", "type": "text"},
    {"text": "How do you solve this problem today?", "type": "text"},
    {"text": "How satisfied are you with your current solution?", "type": "rating"},
    {
        "text": "Would you pay for a more convenient solution?",
        "type": "single_choice",
        "options": ["Definitely yes", "Probably yes", "Not sure", "Probably not", "No"],
    },
    {
        "text": "Which features matter most to you?",
        "type": "multiple_choice",
        "options": ["Ease of use", "Speed", "Price", "Integrations", "Support", "Security"],
    },
]


def survey_questions_fallback(_: FallbackInput) -> list[dict[str, Any]]:
    return copy.deepcopy(DEFAULT_SURVEY_QUESTIONS)


def survey_analysis_fallback(data: FallbackInput) -> dict[str, Any]:
    responses = data.survey_response_count
    questions = data.survey_question_count

    return {
        "summary": (
            f"Received {responses} responses to {questions} questions. "
            "More data is needed for reliable conclusions."
        ),
        "problemConfirmed": responses >= 3,
        "problemConfidence": min(responses * 15, 80),
        "keyInsights": [
            "More respondents are needed for a reliable analysis",
            "In-depth interviews are recommended",
        ],
        "painPoints": ["Not enough data to identify pain points"],
        "opportunities": ["Keep collecting responses to find opportunities"],
        "risks": ["A small sample can give skewed results"],
        "recommendations": [
            "Increase the number of respondents to at least 20",
            "Add open questions for qualitative analysis",
            "Run 5-10 in-depth interviews",
        ],
        "audienceSegments": [],
        "nextSteps": ["Collect more responses", "Run interviews", "Update the hypothesis"],
        "overallScore": min(responses * 10, 60),
        "verdict": "Not enough data yet: keep collecting responses.",
    }


def sample_input(transactions: Sequence[Transaction] = ()) -> FallbackInput:
    """Minimal input used to check fallbacks at startup."""
    return FallbackInput(
        profile=VentureProfile(name="Sample"),
        transactions=tuple(transactions),
        survey_response_count=1,
        survey_question_count=1,
    )
