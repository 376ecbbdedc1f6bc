"""
Prompt Templates for Venture Generation Endpoints

Each builder returns `(system_instruction, messages)` ready for a
GenerationRequest. Structured endpoints ask for bare JSON, but the decoder
tolerates prose and markdown fences around it.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from ventureai.conversation.models import ContextBundle

from .schemas import SurveyInfo, SurveyResponse, Transaction, VentureProfile

NOT_SPECIFIED = "Not specified"

Prompt = tuple[str, list[dict[str, Any]]]


def _or_default(value: str | None) -> str:
    return value.strip() if value and value.strip() else NOT_SPECIFIED


def _format_answers(answers: Mapping[str, str], *, question_prefix: str = "Q", answer_prefix: str = "A") -> str:
    return "\n\n".join(f"{question_prefix}: {q}\n{answer_prefix}: {a}" for q, a in answers.items())


def _profile_block(profile: VentureProfile) -> str:
    return (
        f"Name: {profile.name}\n"
        f"Idea: {_or_default(profile.description)}\n"
        f"Target audience: {_or_default(profile.audience)}\n"
        f"Problem: {_or_default(profile.problem)}"
    )


# =============================================================================
# Chat
# =============================================================================

CHAT_SYSTEM_PROMPT = """You are the AI assistant of the venture "{name}".
Your job is to help the founder develop the project, answer questions and give advice grounded in the venture's context.

Venture context:
Name: {name}
Description: {description}
Problem: {problem}
Solution (idea): {idea}
Target audience: {audience}
{details}
Answer briefly, to the point and encouragingly. If you do not know the answer, propose a hypothesis or a way to test it."""

CHAT_DOCUMENTS_INSTRUCTION = """

The founder uploaded the documents below. Use them when they are relevant to the question and say which document you relied on.{document_context}"""


def get_chat_prompt(bundle: ContextBundle) -> Prompt:
    """Build the chat prompt from an assembled ContextBundle."""
    fields = bundle.profile_fields
    answers = {
        key.split(":", 1)[1]: value
        for key, value in fields.items()
        if key.startswith("answer:")
    }
    details = ""
    if answers:
        details = "Additional details:\n" + "\n".join(f"- {q}: {a}" for q, a in answers.items()) + "\n"

    system = CHAT_SYSTEM_PROMPT.format(
        name=fields.get("name", ""),
        description=fields.get("description", ""),
        problem=fields.get("problem", ""),
        idea=fields.get("idea", ""),
        audience=fields.get("audience", ""),
        details=details,
    )
    if bundle.document_context:
        system += CHAT_DOCUMENTS_INSTRUCTION.format(document_context=bundle.document_context)

    return system, bundle.to_messages()


# =============================================================================
# Clarifying Questions
# =============================================================================

QUESTIONS_SYSTEM_PROMPT = """You are an experienced startup advisor. Your task is to ask clarifying questions that help you understand the venture idea and help the founder.
Questions must be specific and help uncover the details of the business."""


def get_questions_prompt(profile: VentureProfile) -> Prompt:
    user = f"""Venture: {profile.name}
Idea: {_or_default(profile.description)}
Target audience: {_or_default(profile.audience)}
Problem: {_or_default(profile.problem)}

Ask 3-4 clarifying questions that help understand:
- What makes the solution unique
- The business model
- Competitive advantages
- The implementation plan

Respond with a JSON array of strings only: ["Question 1?", "Question 2?", "Question 3?"]"""
    return QUESTIONS_SYSTEM_PROMPT, [{"role": "user", "content": user}]


# =============================================================================
# Idea Analysis
# =============================================================================

IDEA_ANALYSIS_SYSTEM_PROMPT = """You are an experienced startup advisor and business analyst.
Your task is to analyze the venture idea and propose improved wording.
Be specific and practical."""


def get_idea_analysis_prompt(profile: VentureProfile, document_context: str = "") -> Prompt:
    answers = ""
    if profile.answers:
        answers = "\nAnswers to questions:\n" + _format_answers(profile.answers)

    user = f"""Analyze the venture and suggest improvements:

{_profile_block(profile)}
{answers}{document_context}

Return JSON (no markdown):
{{
  "summary": "Short analysis of the idea (2-3 sentences, potential assessment)",
  "suggestedName": "A more compelling name (keep the current one if it is good)",
  "suggestedDescription": "Improved description for investors (2-3 sentences)",
  "suggestedProblem": "Clear problem statement (1-2 sentences)",
  "suggestedIdea": "Clear solution statement (1-2 sentences)",
  "strengths": ["Strength 1", "Strength 2"],
  "improvements": ["Recommendation 1", "Recommendation 2", "Recommendation 3"],
  "nextSteps": ["Next step 1", "Next step 2"]
}}"""
    return IDEA_ANALYSIS_SYSTEM_PROMPT, [{"role": "user", "content": user}]


# =============================================================================
# Comprehensive Analysis
# =============================================================================

COMPREHENSIVE_ANALYSIS_SYSTEM_PROMPT = """You are a venture analyst preparing an investment-grade assessment of an early-stage venture.
Estimate the market, score validation and execution factors, and propose a concrete roadmap.
Use realistic numbers and name real competitors where you know them."""


def get_comprehensive_analysis_prompt(profile: VentureProfile, document_context: str = "") -> Prompt:
    answers = _format_answers(profile.answers) if profile.answers else ""
    user = f"""Prepare a comprehensive analysis of this venture:

{_profile_block(profile)}
Solution: {_or_default(profile.idea)}
{answers}{document_context}

Return JSON (no markdown) with these keys:
{{
  "executiveSummary": {{"marketSize": "", "growthRate": "", "targetYear": "", "projectedSize": "", "recentFunding": "", "overallScore": 0, "verdict": "good|moderate|weak", "keyRecommendations": [""]}},
  "marketAnalysis": {{"greenFlags": [""], "redFlags": [""]}},
  "confidenceScores": {{"problemValidation": {{"score": 0, "description": ""}}, "solutionValidation": {{"score": 0, "description": ""}}, "marketValidation": {{"score": 0, "description": ""}}}},
  "keyAdvantages": [""],
  "problemAreas": [""],
  "marketFactors": [{{"name": "", "score": 0, "description": ""}}],
  "executionFactors": [{{"name": "", "score": 0, "description": ""}}],
  "strategicSuggestions": [""],
  "quickWins": [{{"title": "", "effort": "low|medium|high", "description": "", "result": ""}}],
  "roadmap": [{{"phase": "", "period": "", "items": [""]}}],
  "teamRequirements": {{"initialSize": 0, "mvpTimeline": "", "roles": [{{"role": "", "description": ""}}]}},
  "implementationPlan": [{{"title": "", "period": "", "cost": "", "risk": "low|medium|high"}}],
  "resources": [{{"category": "", "items": [{{"name": "", "description": ""}}]}}],
  "keyQuestions": [""],
  "sources": [""],
  "competitors": [{{"name": "", "region": "", "similarity": 0, "advantages": [""], "disadvantages": [""], "funding": "", "stage": ""}}]
}}"""
    return COMPREHENSIVE_ANALYSIS_SYSTEM_PROMPT, [{"role": "user", "content": user}]


# =============================================================================
# Task Suggestions
# =============================================================================

TASK_SUGGESTIONS_SYSTEM_PROMPT = "You are a project manager for early-stage ventures."


def get_task_suggestions_prompt(profile: VentureProfile, existing_tasks: Sequence[str]) -> Prompt:
    summary = profile.description or profile.idea or "software venture"
    existing = f"Existing tasks: {', '.join(existing_tasks)}\n" if existing_tasks else ""
    user = f"""Venture: {profile.name} ({summary})
{existing}
Suggest 5 concrete tasks to move the project forward.

Respond with a JSON array only:
[{{"title": "Task title", "description": "Description", "priority": "high/medium/low"}}]"""
    return TASK_SUGGESTIONS_SYSTEM_PROMPT, [{"role": "user", "content": user}]


# =============================================================================
# Finance Analysis
# =============================================================================

FINANCE_ANALYSIS_SYSTEM_PROMPT = """You are a financial analyst for early-stage ventures. Analyze the transactions and recommend how to optimize spending and improve financial health.
Be specific and practical."""


def format_transactions(transactions: Sequence[Transaction]) -> str:
    return "\n".join(
        f"{t.date.isoformat()} | {t.type} | {t.amount} | {t.category} | {t.description}"
        for t in transactions
    )


def get_finance_analysis_prompt(transactions: Sequence[Transaction]) -> Prompt:
    user = f"""Analyze these venture finances:

{format_transactions(transactions)}

Return JSON (no markdown):
{{
  "healthScore": 75,
  "summary": "Overall summary of the financial state (2-3 sentences)",
  "observations": ["Observation 1", "Observation 2"],
  "costSavingTips": ["Cost saving tip 1", "Cost saving tip 2 (specific, based on the data)"],
  "missedOpportunities": ["Missed opportunity 1", "What could be improved"],
  "verdict": "excellent/good/fair/poor"
}}"""
    return FINANCE_ANALYSIS_SYSTEM_PROMPT, [{"role": "user", "content": user}]


# =============================================================================
# Business Plan
# =============================================================================

BUSINESS_PLAN_SYSTEM_PROMPT = """You are an experienced business consultant who writes business plans.
Write a detailed, structured business plan for the venture. Be specific, thorough and professional.
Use the existing analysis when it is provided."""


def _analysis_summary(analysis: Mapping[str, Any] | None) -> str:
    if not analysis:
        return ""
    summary = analysis.get("executiveSummary") or {}
    advantages = analysis.get("keyAdvantages") or []
    competitors = [c.get("name", "") for c in analysis.get("competitors") or [] if isinstance(c, Mapping)]
    return (
        "\nExisting analysis:\n"
        f"- Market: {summary.get('marketSize') or NOT_SPECIFIED}\n"
        f"- Growth: {summary.get('growthRate') or NOT_SPECIFIED}\n"
        f"- Score: {summary.get('overallScore') or NOT_SPECIFIED}\n"
        f"- Advantages: {', '.join(advantages) or NOT_SPECIFIED}\n"
        f"- Competitors: {', '.join(competitors) or NOT_SPECIFIED}\n"
    )


def get_business_plan_prompt(profile: VentureProfile, analysis: Mapping[str, Any] | None = None) -> Prompt:
    user = f"""Write a detailed business plan for the venture:

Name: {profile.name}
Description: {_or_default(profile.description)}
Problem: {_or_default(profile.problem)}
Solution: {_or_default(profile.idea)}
Target audience: {_or_default(profile.audience)}
{_analysis_summary(analysis)}
Sections:
1. Company and product (mission, vision, product, value proposition, problem, solution)
2. Market analysis (target audience, competitors, advantages, market size)
3. Marketing and sales (channels, pricing, adoption model, scaling)
4. Operations (development stages, team roles, timeline, key processes)
5. Financial plan (investment, costs, revenue forecast, fundraising strategy)

Return Markdown with a heading for every section."""
    return BUSINESS_PLAN_SYSTEM_PROMPT, [{"role": "user", "content": user}]


# =============================================================================
# Customer Development Surveys
# =============================================================================

SURVEY_QUESTIONS_SYSTEM_PROMPT = """You are a Customer Development expert. Write survey questions for the venture's target audience.
The questions should help find out:
- Whether the problem exists
- How people solve it today
- Whether they are willing to pay for a solution
- Which features matter"""


def get_survey_questions_prompt(profile: VentureProfile, survey: SurveyInfo) -> Prompt:
    survey_description = f"Survey description: {survey.description}\n" if survey.description else ""
    user = f"""Venture: {profile.name}
Description: {_or_default(profile.description)}
Problem: {_or_default(profile.problem)}
Solution: {_or_default(profile.idea)}
Target audience: {_or_default(profile.audience)}
Survey title: {survey.title}
{survey_description}
Write 6-8 questions for the survey. Use different question types.

Respond with a JSON array only (no markdown):
[
  {{"text": "Question?", "type": "text"}},
  {{"text": "Question?", "type": "single_choice", "options": ["Option 1", "Option 2", "Option 3"]}},
  {{"text": "Question?", "type": "multiple_choice", "options": ["Option 1", "Option 2", "Option 3"]}},
  {{"text": "Rate from 1 to 5?", "type": "rating"}}
]

Types: text (free text), single_choice (one option), multiple_choice (several options), rating (score 1-5)"""
    return SURVEY_QUESTIONS_SYSTEM_PROMPT, [{"role": "user", "content": user}]


SURVEY_ANALYSIS_SYSTEM_PROMPT = """You are a Customer Development analyst. Analyze the survey responses and draw conclusions.
Be specific and base every conclusion on the data."""


def format_survey_responses(responses: Sequence[SurveyResponse]) -> str:
    blocks = []
    for i, response in enumerate(responses, start=1):
        header = f"Respondent {i}" + (f" ({response.respondent_name})" if response.respondent_name else "")
        answers = "\n".join(f"  {a.question}: {a.value}" for a in response.answers)
        blocks.append(f"{header}:\n{answers}")
    return "\n\n".join(blocks)


def get_survey_analysis_prompt(profile: VentureProfile, responses: Sequence[SurveyResponse]) -> Prompt:
    user = f"""Venture: {profile.name}
Description: {_or_default(profile.description)}
Problem: {_or_default(profile.problem)}
Target audience: {_or_default(profile.audience)}

Survey responses ({len(responses)} respondents):

{format_survey_responses(responses)}

Analyze the responses and return JSON (no markdown):
{{
  "summary": "Overall conclusion of the survey (3-4 sentences)",
  "problemConfirmed": true,
  "problemConfidence": 75,
  "keyInsights": ["Insight 1", "Insight 2", "Insight 3"],
  "painPoints": ["Pain point 1", "Pain point 2"],
  "opportunities": ["Opportunity 1", "Opportunity 2"],
  "risks": ["Risk 1", "Risk 2"],
  "recommendations": ["Recommendation 1", "Recommendation 2", "Recommendation 3"],
  "audienceSegments": [
    {{"name": "Segment 1", "percent": 60, "description": "Description"}},
    {{"name": "Segment 2", "percent": 40, "description": "Description"}}
  ],
  "nextSteps": ["Step 1", "Step 2", "Step 3"],
  "overallScore": 75,
  "verdict": "A short one-sentence verdict"
}}"""
    return SURVEY_ANALYSIS_SYSTEM_PROMPT, [{"role": "user", "content": user}]
