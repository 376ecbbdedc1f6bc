"""Monitoring: Prometheus metrics for the generation pipeline."""

from .metrics import Metrics, get_metrics

__all__ = [
    "Metrics",
    "get_metrics",
]
