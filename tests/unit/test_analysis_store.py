from dataclasses import replace

import pytest

from fatigue.features.analysis.services import AnalysisStore, NoAnalysisError


def test_current_raises_before_first_publish():
    store = AnalysisStore()

    with pytest.raises(NoAnalysisError) as exc_info:
        store.current()

    assert exc_info.value.message == "No analysis available. Upload a CSV file first."
    assert store.peek() is None


def test_publish_replaces_previous_result(sample_result):
    store = AnalysisStore()
    newer = replace(sample_result, file_info=replace(sample_result.file_info, name="second.csv"))

    assert store.publish(sample_result) is None
    assert store.publish(newer) is sample_result
    assert store.current() is newer


def test_clear_drops_published_result(sample_result):
    store = AnalysisStore()
    store.publish(sample_result)

    store.clear()

    assert store.peek() is None
    with pytest.raises(NoAnalysisError):
        store.current()
