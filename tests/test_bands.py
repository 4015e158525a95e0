import pytest

import throw_analytics_engine as tae


def test_spin_bands():
    assert tae.band_for_metric("spin", 1100).band == tae.BAND_ADVANCED
    assert tae.band_for_metric("spin", 950).band == tae.BAND_INTERMEDIATE
    assert tae.band_for_metric("spin", 500).band == tae.BAND_BEGINNER


def test_power_bands():
    assert tae.band_for_metric("power", 60).band == tae.BAND_ADVANCED
    assert tae.band_for_metric("power", 52).band == tae.BAND_INTERMEDIATE
    assert tae.band_for_metric("power", 51.9).band == tae.BAND_BEGINNER


def test_wobble_bands_are_lower_is_better():
    adv = tae.band_for_metric("wobble", 2.9)
    mid = tae.band_for_metric("wobble", 3.0)
    low = tae.band_for_metric("wobble", 4.5)

    assert (adv.band, adv.score01) == (tae.BAND_ADVANCED, 0.9)
    assert (mid.band, mid.score01) == (tae.BAND_INTERMEDIATE, 0.6)
    assert (low.band, low.score01) == (tae.BAND_BEGINNER, 0.25)


@pytest.mark.parametrize(
    "value, band, note, score",
    [
        (1.0, tae.BAND_ADVANCED, "Driver-friendly nose", 0.9),
        (3.0, tae.BAND_ADVANCED, "Driver-friendly nose", 0.9),
        (3.5, tae.BAND_INTERMEDIATE, "Slightly nose-up", 0.55),
        (5.0, tae.BAND_INTERMEDIATE, "Slightly nose-up", 0.55),
        (5.1, tae.BAND_BEGINNER, "Nose-up (distance leak)", 0.2),
        (0.5, tae.BAND_INTERMEDIATE, "Near neutral", 0.6),
        (0.0, tae.BAND_INTERMEDIATE, "Near neutral", 0.6),
        (-1.0, tae.BAND_INTERMEDIATE, "Near neutral", 0.6),
        (-1.5, tae.BAND_INTERMEDIATE, "Slightly nose-down/neutral", 0.65),
    ],
)
def test_nose_decision_list_boundaries(value, band, note, score):
    result = tae.band_for_metric("nose", value)

    assert result.band == band
    assert result.note == note
    assert result.score01 == score
    assert result.has_data


def test_missing_value_is_flagged_no_data():
    result = tae.band_for_metric("spin", None)

    assert result.band == tae.BAND_BEGINNER
    assert result.note == "No data"
    assert result.score01 == 0.0
    assert not result.has_data
    # a genuine low band still counts as data
    assert tae.band_for_metric("spin", 100).has_data


def test_unknown_metric_rejected():
    with pytest.raises(ValueError):
        tae.band_for_metric("distance", 300)


def test_classify_session_covers_every_metric():
    stats = tae.SessionStats(count=3, avg_speed=None, avg_spin=1150.0, avg_nose=None, avg_wobble=None)
    bands = tae.classify_session(stats)

    assert set(bands) == set(tae.METRICS)
    assert bands[tae.METRIC_SPIN].band == tae.BAND_ADVANCED
    assert not bands[tae.METRIC_POWER].has_data
    assert not bands[tae.METRIC_NOSE].has_data
