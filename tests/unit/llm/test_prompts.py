from __future__ import annotations

import datetime as dt

import pytest

from ventureai.conversation import ContextBundle, ConversationTurn, Role
from ventureai.llm import prompts
from ventureai.llm.schemas import SurveyAnswer, SurveyInfo, SurveyResponse, Transaction, VentureProfile

pytestmark = [pytest.mark.unit]


def _bundle(profile: VentureProfile, document_context: str = "") -> ContextBundle:
    return ContextBundle(
        prior_turns=(
            ConversationTurn(role=Role.USER, content="What is my market?"),
            ConversationTurn(role=Role.ASSISTANT, content="Urban families."),
        ),
        new_turn=ConversationTurn.user("How do I price it?"),
        profile_fields=profile.to_profile_fields(),
        document_context=document_context,
    )


def test_chat_prompt_carries_profile_and_turns(profile) -> None:
    system, messages = prompts.get_chat_prompt(_bundle(profile))

    assert 'venture "GreenCart"' in system
    assert "Problem: Fresh local produce is hard to buy in the city" in system
    assert "- How will you make money?: A 10% commission per order" in system
    assert "documents" not in system
    assert [m["role"] for m in messages] == ["user", "assistant", "user"]
    assert messages[-1]["content"] == "How do I price it?"


def test_chat_prompt_includes_document_context(profile) -> None:
    context = '\n\nVenture documents (1 of 1):\n\n--- Document 1: "plan.txt" ---\nRevenue 10k'

    system, _ = prompts.get_chat_prompt(_bundle(profile, context))

    assert system.endswith(context)


def test_questions_prompt_defaults_missing_fields() -> None:
    _, messages = prompts.get_questions_prompt(VentureProfile(name="X"))

    assert "Target audience: Not specified" in messages[0]["content"]


def test_analysis_prompt_appends_document_context(profile) -> None:
    _, messages = prompts.get_idea_analysis_prompt(profile, "\n\nVenture documents (1 of 2):")

    content = messages[0]["content"]
    assert "Q: How will you make money?\nA: A 10% commission per order" in content
    assert "Venture documents (1 of 2):" in content
    assert '"suggestedName"' in content


def test_task_prompt_lists_existing_tasks(profile) -> None:
    _, messages = prompts.get_task_suggestions_prompt(profile, ["Build MVP", "Hire designer"])

    assert "Existing tasks: Build MVP, Hire designer" in messages[0]["content"]


def test_finance_prompt_lists_transactions() -> None:
    transactions = [
        Transaction(date=dt.date(2026, 2, 1), type="income", amount=500.0, category="sales", description="Pilot"),
    ]

    _, messages = prompts.get_finance_analysis_prompt(transactions)

    assert "2026-02-01 | income | 500.0 | sales | Pilot" in messages[0]["content"]


def test_business_plan_prompt_summarizes_analysis(profile) -> None:
    analysis = {
        "executiveSummary": {"marketSize": "$2B", "overallScore": 74},
        "keyAdvantages": ["Local supply"],
        "competitors": [{"name": "FarmBox"}],
    }

    _, messages = prompts.get_business_plan_prompt(profile, analysis)

    content = messages[0]["content"]
    assert "- Market: $2B" in content
    assert "- Growth: Not specified" in content
    assert "- Competitors: FarmBox" in content


def test_survey_questions_prompt_includes_survey(profile) -> None:
    survey = SurveyInfo(title="Delivery habits", description="Families in Lisbon")

    system, messages = prompts.get_survey_questions_prompt(profile, survey)

    content = messages[0]["content"]
    assert "Customer Development" in system
    assert "Survey title: Delivery habits" in content
    assert "Survey description: Families in Lisbon" in content
    assert "Target audience: Urban families" in content


def test_survey_analysis_prompt_numbers_respondents(profile) -> None:
    responses = [
        SurveyResponse(respondentName="Ana", answers=[SurveyAnswer(question="Do you cook?", value="Daily")]),
        SurveyResponse(answers=[SurveyAnswer(question="Do you cook?", value="Rarely")]),
    ]

    _, messages = prompts.get_survey_analysis_prompt(profile, responses)

    content = messages[0]["content"]
    assert "Survey responses (2 respondents):" in content
    assert "Respondent 1 (Ana):\n  Do you cook?: Daily" in content
    assert "Respondent 2:\n  Do you cook?: Rarely" in content
