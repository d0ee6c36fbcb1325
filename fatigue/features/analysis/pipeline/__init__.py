"""
Analysis pipeline package.

ingestion -> aggregation -> metrics, wired together by AnalysisPipeline.
"""

from .service import AnalysisPipeline, analysis_pipeline

__all__ = ["AnalysisPipeline", "analysis_pipeline"]
