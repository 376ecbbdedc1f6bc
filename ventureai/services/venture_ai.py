"""
Venture AI Service

Entry point the HTTP layer calls for every generation endpoint:

    documents -> budget allocation -> context assembly
              -> generation client (or short-circuit) -> resolver

The generation client is injected once at startup; `None` means no
credential is configured and every request degrades without a network call.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from ventureai.config import Settings
from ventureai.conversation import (
    ContextAssembler,
    ConversationStore,
    ConversationTurn,
    Role,
    record_turn,
)
from ventureai.documents import (
    ContentBudgetAllocator,
    Document,
    DocumentContext,
    DocumentRepository,
    DocumentStorage,
    extract_text,
)
from ventureai.documents.models import EMPTY_DOCUMENT_CONTEXT
from ventureai.kernel.errors import ValidationError
from ventureai.llm import prompts
from ventureai.llm.client import GenerationClient, GenerationRequest
from ventureai.llm.endpoints import Endpoint, get_policy
from ventureai.llm.fallbacks import FallbackInput
from ventureai.llm.resolver import GenerationOutcome, OutcomeStatus, ResilientResponseResolver
from ventureai.llm.schemas import SurveyInfo, SurveyResponse, Transaction, VentureProfile

logger = structlog.get_logger()


class VentureAIService:
    """Document-grounded generation for a venture workspace."""

    def __init__(
        self,
        *,
        settings: Settings,
        client: GenerationClient | None,
        conversations: ConversationStore,
        documents: DocumentRepository,
        storage: DocumentStorage,
        resolver: ResilientResponseResolver | None = None,
    ):
        self.settings = settings
        self.client = client
        self.conversations = conversations
        self.documents = documents
        self.storage = storage
        self.resolver = resolver or ResilientResponseResolver()
        self.allocator = ContentBudgetAllocator(
            self._extract,
            per_doc_cap=settings.per_document_char_cap,
            aggregate_cap=settings.aggregate_char_cap,
        )
        self.assembler = ContextAssembler(conversations, history_window=settings.chat_history_window)

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    # =========================================================================
    # Shared pipeline
    # =========================================================================

    def _extract(self, document: Document) -> str:
        return extract_text(self.storage.path_for(document), document.mime_type)

    async def document_context(self, venture_id: str | None) -> DocumentContext:
        """Build the budgeted document context for a venture."""
        if not venture_id:
            return EMPTY_DOCUMENT_CONTEXT

        try:
            documents = self.documents.list_for(venture_id, self.settings.max_context_documents)
        except Exception as e:
            logger.error("Failed to list venture documents", venture_id=venture_id, error=str(e))
            return EMPTY_DOCUMENT_CONTEXT

        if self.settings.parallel_document_extraction:
            context = await self.allocator.allocate_async(documents)
        else:
            context = self.allocator.allocate(documents)

        logger.debug(
            "Document context built",
            venture_id=venture_id,
            total_documents=context.total_documents,
            included=len(context.included),
            chars=context.included_chars,
        )
        return context

    async def generate(
        self,
        endpoint: Endpoint,
        prompt: prompts.Prompt,
        fallback_input: FallbackInput | None = None,
    ) -> GenerationOutcome:
        """
        Run one generation attempt for `endpoint` and resolve it.

        The client is never called when no credential is configured.
        """
        policy = get_policy(endpoint)
        attempt = None

        if self.client is not None:
            system_instruction, messages = prompt
            attempt = await self.client.generate(
                GenerationRequest(
                    system_instruction=system_instruction,
                    messages=messages,
                    temperature=policy.temperature,
                    max_output_tokens=policy.max_output_tokens,
                    expected_shape=policy.expected_shape,
                    endpoint=endpoint.value,
                )
            )

        return self.resolver.resolve(policy, attempt, fallback_input)

    # =========================================================================
    # Chat
    # =========================================================================

    async def chat(
        self,
        venture_id: str,
        profile: VentureProfile,
        message: str,
        *,
        role: Role = Role.USER,
    ) -> GenerationOutcome:
        """
        Answer a user message in the venture's conversation.

        History is read before the new turn is stored so it is not included
        twice. The user turn is always recorded; the assistant turn only when
        the answer was accepted. Store failures never fail the request.

        Raises:
            InvalidTurnError: if `role` is not the user role
        """
        new_turn = ConversationTurn(role=Role(role), content=message)
        documents = await self.document_context(venture_id)
        bundle = self.assembler.assemble(
            venture_id,
            new_turn,
            profile.to_profile_fields(),
            documents.text,
        )

        record_turn(self.conversations, venture_id, Role.USER, message)

        outcome = await self.generate(Endpoint.CHAT, prompts.get_chat_prompt(bundle))

        if outcome.status is OutcomeStatus.SUCCESS and isinstance(outcome.payload, str):
            record_turn(self.conversations, venture_id, Role.ASSISTANT, outcome.payload)

        logger.info(
            "Chat resolved",
            venture_id=venture_id,
            status=outcome.status.value,
            history_turns=len(bundle.prior_turns),
            documents_included=len(documents.included),
        )
        return outcome

    def chat_history(self, venture_id: str) -> list[ConversationTurn]:
        return self.conversations.history(venture_id)

    # =========================================================================
    # Structured analysis
    # =========================================================================

    async def analyze_idea(self, profile: VentureProfile, venture_id: str | None = None) -> GenerationOutcome:
        documents = await self.document_context(venture_id)
        return await self.generate(
            Endpoint.IDEA_ANALYSIS,
            prompts.get_idea_analysis_prompt(profile, documents.text),
            FallbackInput(profile=profile),
        )

    async def comprehensive_analysis(
        self,
        profile: VentureProfile,
        venture_id: str | None = None,
    ) -> GenerationOutcome:
        documents = await self.document_context(venture_id)
        return await self.generate(
            Endpoint.COMPREHENSIVE_ANALYSIS,
            prompts.get_comprehensive_analysis_prompt(profile, documents.text),
            FallbackInput(profile=profile),
        )

    async def generate_questions(self, profile: VentureProfile) -> GenerationOutcome:
        return await self.generate(
            Endpoint.QUESTIONS,
            prompts.get_questions_prompt(profile),
            FallbackInput(profile=profile),
        )

    async def suggest_tasks(
        self,
        profile: VentureProfile,
        existing_tasks: Sequence[str] = (),
    ) -> GenerationOutcome:
        return await self.generate(
            Endpoint.TASK_SUGGESTIONS,
            prompts.get_task_suggestions_prompt(profile, existing_tasks),
            FallbackInput(profile=profile),
        )

    async def analyze_finances(self, transactions: Sequence[Transaction]) -> GenerationOutcome:
        """
        Analyze the most recent transactions.

        Raises:
            ValidationError: when fewer than the minimum number of
                transactions are supplied
        """
        if len(transactions) < self.settings.finance_min_transactions:
            raise ValidationError(
                message=(
                    f"At least {self.settings.finance_min_transactions} transactions "
                    "are required for analysis"
                ),
                code="finance.not_enough_transactions",
                meta={"count": len(transactions)},
                status_code=400,
            )

        recent = sorted(transactions, key=lambda t: t.date, reverse=True)
        recent = recent[: self.settings.finance_transaction_limit]

        return await self.generate(
            Endpoint.FINANCE_ANALYSIS,
            prompts.get_finance_analysis_prompt(recent),
            FallbackInput(transactions=tuple(recent)),
        )

    # =========================================================================
    # Customer development surveys
    # =========================================================================

    async def generate_survey_questions(self, profile: VentureProfile, survey: SurveyInfo) -> GenerationOutcome:
        return await self.generate(
            Endpoint.SURVEY_QUESTIONS,
            prompts.get_survey_questions_prompt(profile, survey),
            FallbackInput(profile=profile),
        )

    async def analyze_survey(
        self,
        profile: VentureProfile,
        responses: Sequence[SurveyResponse],
        question_count: int | None = None,
    ) -> GenerationOutcome:
        """
        Analyze collected survey responses.

        `question_count` defaults to the number of distinct questions answered.

        Raises:
            ValidationError: when there are no responses to analyze
        """
        if not responses:
            raise ValidationError(
                message="There are no survey responses to analyze",
                code="survey.no_responses",
                status_code=400,
            )

        if question_count is None:
            question_count = len({a.question for r in responses for a in r.answers})

        return await self.generate(
            Endpoint.SURVEY_ANALYSIS,
            prompts.get_survey_analysis_prompt(profile, responses),
            FallbackInput(
                profile=profile,
                survey_response_count=len(responses),
                survey_question_count=question_count,
            ),
        )

    # =========================================================================
    # Business plan
    # =========================================================================

    async def business_plan(
        self,
        profile: VentureProfile,
        analysis: Mapping[str, Any] | None = None,
    ) -> GenerationOutcome:
        return await self.generate(
            Endpoint.BUSINESS_PLAN,
            prompts.get_business_plan_prompt(profile, analysis),
        )
