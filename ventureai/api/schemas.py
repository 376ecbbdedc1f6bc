"""Request and response bodies for the venture AI routes."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from ventureai.llm.schemas import SurveyInfo, SurveyResponse, Transaction, VentureProfile


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1)


class ChatRequest(BaseModel):
    """The last message is the new one; earlier messages are ignored."""

    profile: VentureProfile
    messages: list[ChatMessage] = Field(..., min_length=1)


class ChatHistoryMessage(BaseModel):
    role: str
    content: str
    created_at: datetime


class ChatHistoryResponse(BaseModel):
    messages: list[ChatHistoryMessage]


class ProfileRequest(BaseModel):
    profile: VentureProfile


class TaskSuggestionRequest(BaseModel):
    profile: VentureProfile
    existing_tasks: list[str] = Field(default_factory=list, alias="existingTasks")

    model_config = {"populate_by_name": True}


class FinanceAnalysisRequest(BaseModel):
    transactions: list[Transaction]


class BusinessPlanRequest(BaseModel):
    profile: VentureProfile
    analysis: dict[str, Any] | None = None


class SurveyQuestionsRequest(BaseModel):
    profile: VentureProfile
    survey: SurveyInfo


class SurveyAnalysisRequest(BaseModel):
    """`questions` lists the survey's question texts, when known."""

    profile: VentureProfile
    questions: list[str] = Field(default_factory=list)
    responses: list[SurveyResponse]


class DocumentRegistration(BaseModel):
    """Metadata for a file already stored under the uploads root."""

    id: str
    name: str
    file_url: str = Field(..., alias="fileUrl")
    file_size: int = Field(default=0, ge=0, alias="fileSize")
    file_type: str = Field(..., alias="fileType")

    model_config = {"populate_by_name": True}


class DocumentResponse(BaseModel):
    id: str
    name: str
    file_url: str
    file_size: int
    file_type: str
    created_at: datetime
