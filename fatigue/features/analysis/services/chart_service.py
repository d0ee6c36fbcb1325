"""
Chart data service.

Prepares label/series pairs for the two dashboard charts. Rendering is left
to the client.
"""

from dataclasses import dataclass

from fatigue.features.analysis.domain import AnalysisResult, RiskLevel

RISK_LABELS = {
    RiskLevel.LOW: "Low Risk",
    RiskLevel.MEDIUM: "Medium Risk",
    RiskLevel.HIGH: "High Risk",
}


@dataclass(slots=True)
class ChartSeries:
    labels: list[str]
    series: list[int]


class ChartService:
    def timeline(self, result: AnalysisResult) -> ChartSeries:
        """Messages sent per UTC day, oldest first."""
        return ChartSeries(
            labels=[entry.day.isoformat() for entry in result.daily_counts],
            series=[entry.count for entry in result.daily_counts],
        )

    def risk_distribution(self, result: AnalysisResult) -> ChartSeries:
        counts = {level: 0 for level in RiskLevel}
        for user in result.users:
            counts[user.risk_level] += 1

        return ChartSeries(
            labels=[RISK_LABELS[level] for level in RiskLevel],
            series=[counts[level] for level in RiskLevel],
        )


chart_service = ChartService()
