"""
Venture AI Endpoints

Chat, analysis, questions, task suggestions, finance analysis, business
plans and customer-development surveys for a venture. Status codes come from the resolved outcome: fallbacks
are served with 200, surfaced generation errors with 502.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ventureai.api.schemas import (
    BusinessPlanRequest,
    ChatHistoryMessage,
    ChatHistoryResponse,
    ChatRequest,
    FinanceAnalysisRequest,
    ProfileRequest,
    SurveyAnalysisRequest,
    SurveyQuestionsRequest,
    TaskSuggestionRequest,
)
from ventureai.conversation import Role
from ventureai.llm.resolver import GenerationOutcome
from ventureai.services import VentureAIService

router = APIRouter(prefix="/ventures/{venture_id}/ai")


def get_venture_ai(request: Request) -> VentureAIService:
    return request.app.state.venture_ai


def _respond(outcome: GenerationOutcome, key: str) -> JSONResponse:
    if not outcome.succeeded:
        return JSONResponse(status_code=outcome.http_status, content=outcome.payload)

    content: dict[str, Any] = {key: outcome.payload, "isFallback": outcome.is_fallback}
    return JSONResponse(status_code=outcome.http_status, content=content)


# =============================================================================
# Chat
# =============================================================================


@router.get("/chat", response_model=ChatHistoryResponse)
async def get_chat_history(venture_id: str, service: VentureAIService = Depends(get_venture_ai)):
    """Full conversation history, oldest first."""
    turns = service.chat_history(venture_id)
    return ChatHistoryResponse(
        messages=[
            ChatHistoryMessage(role=turn.role.value, content=turn.content, created_at=turn.created_at)
            for turn in turns
        ]
    )


@router.post("/chat")
async def chat(
    venture_id: str,
    body: ChatRequest,
    service: VentureAIService = Depends(get_venture_ai),
):
    """Answer the last message, which must be from the user."""
    last = body.messages[-1]
    outcome = await service.chat(venture_id, body.profile, last.content, role=Role(last.role))
    return _respond(outcome, "response")


# =============================================================================
# Analysis
# =============================================================================


@router.post("/analysis")
async def analyze_idea(
    venture_id: str,
    body: ProfileRequest,
    service: VentureAIService = Depends(get_venture_ai),
):
    outcome = await service.analyze_idea(body.profile, venture_id=venture_id)
    return _respond(outcome, "analysis")


@router.post("/comprehensive-analysis")
async def comprehensive_analysis(
    venture_id: str,
    body: ProfileRequest,
    service: VentureAIService = Depends(get_venture_ai),
):
    outcome = await service.comprehensive_analysis(body.profile, venture_id=venture_id)
    return _respond(outcome, "analysis")


@router.post("/questions")
async def generate_questions(
    venture_id: str,
    body: ProfileRequest,
    service: VentureAIService = Depends(get_venture_ai),
):
    outcome = await service.generate_questions(body.profile)
    return _respond(outcome, "questions")


@router.post("/tasks")
async def suggest_tasks(
    venture_id: str,
    body: TaskSuggestionRequest,
    service: VentureAIService = Depends(get_venture_ai),
):
    outcome = await service.suggest_tasks(body.profile, body.existing_tasks)
    return _respond(outcome, "tasks")


@router.post("/finance-analysis")
async def analyze_finances(
    venture_id: str,
    body: FinanceAnalysisRequest,
    service: VentureAIService = Depends(get_venture_ai),
):
    outcome = await service.analyze_finances(body.transactions)
    return _respond(outcome, "analysis")


@router.post("/business-plan")
async def business_plan(
    venture_id: str,
    body: BusinessPlanRequest,
    service: VentureAIService = Depends(get_venture_ai),
):
    outcome = await service.business_plan(body.profile, body.analysis)
    return _respond(outcome, "businessPlan")


# =============================================================================
# Customer Development Surveys
# =============================================================================


@router.post("/survey-questions")
async def generate_survey_questions(
    venture_id: str,
    body: SurveyQuestionsRequest,
    service: VentureAIService = Depends(get_venture_ai),
):
    outcome = await service.generate_survey_questions(body.profile, body.survey)
    return _respond(outcome, "questions")


@router.post("/survey-analysis")
async def analyze_survey(
    venture_id: str,
    body: SurveyAnalysisRequest,
    service: VentureAIService = Depends(get_venture_ai),
):
    """Analyze collected responses; 400 when there are none."""
    outcome = await service.analyze_survey(
        body.profile,
        body.responses,
        question_count=len(body.questions) if body.questions else None,
    )
    return _respond(outcome, "analysis")
