"""
Resilient Response Resolver

Turns one generation attempt into the outcome returned to the caller:

    no client                  -> NO_CREDENTIALS
    usable content             -> SUCCESS
    empty / wrong type / bad   -> MALFORMED
    transport failure          -> CALL_FAILURE

NO_CREDENTIALS always degrades to a fallback with a success status; for
free-text endpoints that fallback is their fixed "not configured" text.
The other failures are handled by the endpoint's FailurePolicy: FALLBACK
serves the deterministic payload with a success status, SURFACE_ERROR
returns an explicit error object with a fixed apology.
Nothing in here raises for a bad backend response.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from ventureai.monitoring import get_metrics

from .client import CallFailure, GenerationResult
from .decoding import NO_STRUCTURED_DATA, decode_structured
from .endpoints import Endpoint, EndpointPolicy, FailurePolicy
from .fallbacks import FallbackInput

logger = structlog.get_logger()


class OutcomeStatus(str, Enum):
    NO_CREDENTIALS = "no_credentials"
    SUCCESS = "success"
    MALFORMED = "malformed"
    CALL_FAILURE = "call_failure"


ERROR_CODES = {
    OutcomeStatus.MALFORMED: "generation.malformed_response",
    OutcomeStatus.CALL_FAILURE: "generation.call_failed",
}


@dataclass(frozen=True)
class GenerationOutcome:
    """The single result of one generation request."""

    endpoint: Endpoint
    status: OutcomeStatus
    payload: Any
    is_fallback: bool
    error: str | None = None
    surfaced_error: bool = False

    @property
    def succeeded(self) -> bool:
        """False only when the endpoint surfaced an error object."""
        return not self.surfaced_error

    @property
    def http_status(self) -> int:
        return 200 if self.succeeded else 502


class _Rejected(Exception):
    """Internal: the attempt completed but its content is unusable."""


class ResilientResponseResolver:
    def resolve(
        self,
        policy: EndpointPolicy,
        attempt: GenerationResult | CallFailure | None,
        fallback_input: FallbackInput | None = None,
    ) -> GenerationOutcome:
        """
        Classify `attempt` and apply the endpoint's failure policy.

        Args:
            policy: Registered policy of the endpoint being served
            attempt: None when no client is configured, otherwise what the
                client returned
            fallback_input: Data the fallback builder may use

        Returns:
            GenerationOutcome (never raises on bad backend output)
        """
        if attempt is None:
            logger.info("Generation not configured, degrading", endpoint=policy.endpoint.value)
            return self._degrade(policy, OutcomeStatus.NO_CREDENTIALS, None, fallback_input)

        if isinstance(attempt, CallFailure):
            return self._degrade(policy, OutcomeStatus.CALL_FAILURE, attempt.error, fallback_input)

        try:
            payload = self._accept(policy, attempt.raw)
        except _Rejected as e:
            logger.warning(
                "Generation output rejected",
                endpoint=policy.endpoint.value,
                reason=str(e),
                raw_type=type(attempt.raw).__name__,
            )
            return self._degrade(policy, OutcomeStatus.MALFORMED, str(e), fallback_input)

        return self._record(
            GenerationOutcome(
                endpoint=policy.endpoint,
                status=OutcomeStatus.SUCCESS,
                payload=payload,
                is_fallback=False,
            )
        )

    def _accept(self, policy: EndpointPolicy, raw: Any) -> Any:
        if not isinstance(raw, str):
            raise _Rejected(f"expected text, got {type(raw).__name__}")
        if not raw.strip():
            raise _Rejected("empty response")

        if not policy.is_structured:
            return raw

        decoded = decode_structured(raw, policy.json_kind)
        if decoded is NO_STRUCTURED_DATA:
            raise _Rejected("no structured data found")

        try:
            return policy.normalize(decoded.value)
        except PydanticValidationError as e:
            raise _Rejected(f"schema mismatch: {e.error_count()} error(s)") from e

    def _degrade(
        self,
        policy: EndpointPolicy,
        status: OutcomeStatus,
        error: str | None,
        fallback_input: FallbackInput | None,
    ) -> GenerationOutcome:
        if status is not OutcomeStatus.NO_CREDENTIALS:
            logger.warning(
                "Generation degraded",
                endpoint=policy.endpoint.value,
                status=status.value,
                policy=policy.on_failure.value,
                error=error,
            )

        surfaced = False
        if policy.on_failure is FailurePolicy.FALLBACK:
            payload = policy.build_fallback(fallback_input or FallbackInput())
        elif status is OutcomeStatus.NO_CREDENTIALS:
            payload = policy.unconfigured_message
        else:
            payload = {"error": ERROR_CODES[status], "response": policy.error_message}
            surfaced = True

        return self._record(
            GenerationOutcome(
                endpoint=policy.endpoint,
                status=status,
                payload=payload,
                is_fallback=True,
                error=error,
                surfaced_error=surfaced,
            )
        )

    def _record(self, outcome: GenerationOutcome) -> GenerationOutcome:
        get_metrics().track_generation_outcome(
            outcome.endpoint.value,
            outcome.status.value,
            outcome.is_fallback,
        )
        return outcome
