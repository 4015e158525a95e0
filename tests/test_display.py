import pytest

import throw_analytics_engine as tae


def test_format_metric_value():
    assert tae.format_metric_value(tae.METRIC_SPIN, 1012.6) == "1013 rpm"
    assert tae.format_metric_value(tae.METRIC_POWER, 55.04) == "55.0 mph"
    assert tae.format_metric_value(tae.METRIC_NOSE, 2.26) == "2.3°"
    assert tae.format_metric_value(tae.METRIC_WOBBLE, None) == "—"
    assert tae.format_metric_value(tae.METRIC_WOBBLE, 3.0, with_unit=False) == "3.0"


def test_labels_and_units():
    assert tae.format_metric(tae.METRIC_POWER) == "Power (Speed)"
    assert tae.metric_unit(tae.METRIC_SPIN) == "rpm"
    assert tae.metric_unit(tae.METRIC_WOBBLE) == "°"
    assert tae.goal_for_metric(tae.METRIC_NOSE) == "~ +1° to +3°"
    with pytest.raises(ValueError):
        tae.metric_unit("hyzer")


def test_every_metric_has_drills():
    by_metric = tae.drills_by_metric()

    assert set(by_metric) == set(tae.METRICS)
    for metric, drills in by_metric.items():
        assert drills
        assert all(d["metric"] == metric for d in drills)
        assert all(d["url"].startswith("https://") for d in drills)
    assert sum(len(d) for d in by_metric.values()) == len(tae.DRILLS)


def test_format_percentile_marks_missing_rank():
    assert tae.format_percentile(None) == "—"
    assert tae.format_percentile(0) == "0th"
    assert tae.format_percentile(73) == "73th"
