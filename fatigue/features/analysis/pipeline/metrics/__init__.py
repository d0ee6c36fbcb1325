"""
Fatigue metrics package.

Turns aggregated groups into per-user rates, risk levels, per-message
frequencies and the overall summary.
"""

from .service import FatigueMetricsService, fatigue_metrics_service

__all__ = ["FatigueMetricsService", "fatigue_metrics_service"]
