"""
Services for the fatigue analysis: result publishing, charts and exports.
"""

from .analysis_store import AnalysisStore, NoAnalysisError, analysis_store
from .chart_service import ChartSeries, ChartService, chart_service
from .export_service import ExportService, export_service

__all__ = [
    "AnalysisStore",
    "ChartSeries",
    "ChartService",
    "ExportService",
    "NoAnalysisError",
    "analysis_store",
    "chart_service",
    "export_service",
]
