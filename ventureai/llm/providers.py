"""
Generation Backend Configuration

One OpenAI-compatible backend is used per process:
- DeepSeek (preferred)
- OpenAI (accepted for deployments that only configure OPENAI_API_KEY)

Both talk to `llm_api_base`, which defaults to the DeepSeek endpoint.

The backend is resolved once at startup. No credential means no client:
callers short-circuit to deterministic fallbacks instead.
"""

from dataclasses import dataclass
from enum import Enum

import structlog

from ventureai.config import Settings

logger = structlog.get_logger()


class Provider(str, Enum):
    """Supported generation providers."""

    DEEPSEEK = "deepseek"
    OPENAI = "openai"


@dataclass(frozen=True)
class BackendConfig:
    """Resolved backend for this process."""

    provider: Provider
    model: str
    api_key: str
    api_base: str | None

    def __repr__(self) -> str:
        # Never render the credential.
        return f"BackendConfig(provider={self.provider.value!r}, model={self.model!r}, api_base={self.api_base!r})"


def resolve_backend(settings: Settings) -> BackendConfig | None:
    """
    Resolve the generation backend from settings.

    Returns None when no credential is configured. That is an expected
    operating mode, so it is logged at info level.
    """
    if settings.deepseek_api_key:
        return BackendConfig(
            provider=Provider.DEEPSEEK,
            model=settings.llm_model,
            api_key=settings.deepseek_api_key,
            api_base=settings.llm_api_base,
        )

    if settings.openai_api_key:
        # Older deployments point the OpenAI key at the DeepSeek endpoint.
        return BackendConfig(
            provider=Provider.OPENAI,
            model=settings.llm_model,
            api_key=settings.openai_api_key,
            api_base=settings.llm_api_base,
        )

    logger.info("No generation credential configured; AI endpoints will serve fallbacks")
    return None
