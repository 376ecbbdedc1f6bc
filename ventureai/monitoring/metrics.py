"""
Prometheus Metrics

Defines and exports metrics for the document and generation pipeline.
"""

import structlog
from prometheus_client import Counter, Histogram

logger = structlog.get_logger()

# Singleton metrics instance
_metrics: "Metrics | None" = None


class Metrics:
    """
    Prometheus metrics for the venture workspace.

    Tracks:
    - Document extraction by kind and result
    - Size of the assembled document context
    - Generation calls and resolved outcomes
    """

    def __init__(self):
        self.documents_extracted_total = Counter(
            "ventureai_documents_extracted_total",
            "Total documents passed through text extraction",
            ["kind", "result"],  # result: text, empty
        )

        self.document_context_chars = Histogram(
            "ventureai_document_context_chars",
            "Characters of document text included in a context",
            buckets=[0, 1000, 2500, 5000, 10000, 15000, 20000, 25000],
        )

        self.generation_calls_total = Counter(
            "ventureai_generation_calls_total",
            "Total generation backend calls",
            ["endpoint", "status"],  # status: ok, failed
        )

        self.generation_call_duration_seconds = Histogram(
            "ventureai_generation_call_duration_seconds",
            "Generation backend call duration in seconds",
            ["endpoint"],
            buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
        )

        self.generation_outcomes_total = Counter(
            "ventureai_generation_outcomes_total",
            "Total resolved generation outcomes",
            ["endpoint", "status", "fallback"],
        )

        logger.info("Prometheus metrics initialized")

    def track_document_extraction(self, kind: str, has_text: bool) -> None:
        self.documents_extracted_total.labels(
            kind=kind,
            result="text" if has_text else "empty",
        ).inc()

    def track_document_context(self, chars: int) -> None:
        self.document_context_chars.observe(chars)

    def track_generation_call(self, endpoint: str, ok: bool, duration: float) -> None:
        """Track a single generation backend round trip."""
        self.generation_calls_total.labels(
            endpoint=endpoint,
            status="ok" if ok else "failed",
        ).inc()
        self.generation_call_duration_seconds.labels(endpoint=endpoint).observe(duration)

    def track_generation_outcome(self, endpoint: str, status: str, is_fallback: bool) -> None:
        self.generation_outcomes_total.labels(
            endpoint=endpoint,
            status=status,
            fallback=str(is_fallback).lower(),
        ).inc()


def get_metrics() -> Metrics:
    """Get or create the singleton metrics instance."""
    global _metrics
    if _metrics is None:
        _metrics = Metrics()
    return _metrics
