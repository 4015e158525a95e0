import throw_analytics_engine as tae


def _metrics(issues):
    return [i.metric for i in issues]


def test_single_wobble_issue():
    issues = tae.build_issues({"wobble": 5.0, "nose": 2.0, "spin": 1000, "speed": 55})

    assert len(issues) == 1
    assert issues[0].metric == tae.METRIC_WOBBLE
    assert issues[0].priority == 100
    assert issues[0].value == 5.0
    assert "Avg wobble: 5.0°" in issues[0].detail


def test_nominal_session_is_all_clear():
    assert tae.build_issues({"wobble": 2.0, "nose": 2.0, "spin": 1000, "speed": 55}) == []


def test_every_rule_fires_in_priority_order():
    issues = tae.build_issues({"wobble": 4.2, "nose": 4.5, "spin": 800, "speed": 45})

    assert _metrics(issues) == [tae.METRIC_WOBBLE, tae.METRIC_NOSE, tae.METRIC_SPIN, tae.METRIC_POWER]
    assert [i.priority for i in issues] == [100, 90, 70, 40]


def test_mild_wobble_ranks_below_nose_and_spin():
    issues = tae.build_issues({"wobble": 3.5, "nose": 4.5, "spin": 800, "speed": 45})

    assert _metrics(issues) == [tae.METRIC_NOSE, tae.METRIC_SPIN, tae.METRIC_WOBBLE, tae.METRIC_POWER]
    assert issues[2].priority == 60
    assert issues[2].headline == "Some wobble present"


def test_wobble_thresholds_are_strict():
    at_four = tae.build_issues({"wobble": 4.0})
    at_three = tae.build_issues({"wobble": 3.0})

    assert [i.priority for i in at_four] == [60]
    assert at_three == []


def test_absent_metrics_never_fire():
    assert tae.build_issues({}) == []
    assert tae.build_issues({"wobble": None, "nose": None, "spin": None, "speed": None}) == []


def test_zero_spin_and_speed_do_not_fire():
    assert tae.build_issues({"spin": 0.0, "speed": 0.0}) == []


def test_issue_labels():
    issues = tae.build_issues({"spin": 812.4, "speed": 41.26})
    spin, power = issues

    assert (spin.unit_text, spin.goal_text) == ("rpm", "≥ 950 rpm")
    assert "Avg spin: 812 rpm" in spin.detail
    assert (power.unit_text, power.goal_text) == ("mph", "≥ 52 mph")
    assert power.goal_text == tae.goal_for_metric(tae.METRIC_POWER)


def test_session_averages_feed_diagnosis():
    throws = tae.build_throws(
        [
            {"speedMph": "44", "spinRpm": "780", "wobbleAngle": "5.5"},
            {"speedMph": "46", "spinRpm": "820", "wobbleAngle": "4.5"},
        ]
    )
    stats = tae.summarize_session(throws)
    issues = tae.build_issues(stats.averages())

    assert _metrics(issues) == [tae.METRIC_WOBBLE, tae.METRIC_SPIN, tae.METRIC_POWER]
