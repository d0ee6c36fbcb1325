from dataclasses import replace

from fatigue.features.analysis.services import ChartService


def test_timeline_counts_sends_per_day(sample_result):
    chart = ChartService().timeline(sample_result)

    assert chart.labels == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert chart.series == [2, 5, 1]
    assert sum(chart.series) == sample_result.summary.total_messages


def test_risk_distribution_covers_every_level(sample_result):
    chart = ChartService().risk_distribution(sample_result)

    assert chart.labels == ["Low Risk", "Medium Risk", "High Risk"]
    assert chart.series == [1, 1, 1]


def test_charts_for_empty_result(sample_result):
    empty = replace(sample_result, users=(), daily_counts=())
    service = ChartService()

    assert service.timeline(empty).labels == []
    assert service.risk_distribution(empty).series == [0, 0, 0]
