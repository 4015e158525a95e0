import throw_analytics_engine as tae


def _population_with_nose(nose_values):
    nose = tuple(nose_values)
    filler = tuple(0.0 for _ in nose)
    return tae.Population(
        seed=0,
        n_samples=len(nose),
        speed=filler,
        wobble=filler,
        nose=nose,
        spin=filler,
        speed_sorted=filler,
        wobble_sorted=filler,
        nose_sorted=tuple(sorted(nose)),
        spin_sorted=filler,
    )


def test_below_all_is_zero_and_at_max_is_hundred():
    ref = [10.0, 20.0, 30.0, 40.0]

    assert tae.percentile_of(5.0, ref, True) == 0
    assert tae.percentile_of(40.0, ref, True) == 100
    assert tae.percentile_of(99.0, ref, True) == 100


def test_lower_is_better_flips_the_rank():
    ref = [10.0, 20.0, 30.0, 40.0]

    assert tae.percentile_of(5.0, ref, False) == 100
    assert tae.percentile_of(40.0, ref, False) == 0
    assert tae.percentile_of(20.0, ref, False) == 50


def test_ties_count_as_not_exceeding():
    ref = [1.0, 2.0, 2.0, 3.0]

    assert tae.percentile_of(2.0, ref, True) == 75
    assert tae.percentile_of(2.0, ref, False) == 25


def test_half_percentiles_round_up():
    ref = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0]

    # 1/8 -> 12.5 -> 13, and 7/8 -> 87.5 -> 88
    assert tae.percentile_of(1.0, ref, True) == 13
    assert tae.percentile_of(1.0, ref, False) == 88


def test_absent_inputs_give_absent_percentile():
    assert tae.percentile_of(5.0, [], True) is None
    assert tae.percentile_of(None, [1.0, 2.0], True) is None


def test_percentile_is_monotonic_over_population():
    pop = tae.generate_population(n_samples=1000, seed=3)
    probes = [25.0 + 0.5 * i for i in range(90)]

    up = [tae.percentile_of(v, pop.speed_sorted, True) for v in probes]
    down = [tae.percentile_of(v, pop.speed_sorted, False) for v in probes]

    assert all(a <= b for a, b in zip(up, up[1:]))
    assert all(a >= b for a, b in zip(down, down[1:]))
    assert all(0 <= p <= 100 for p in up + down)


def test_nose_percentile_rewards_closeness_to_target():
    pop = _population_with_nose([0.0, 1.0, 3.0, 4.0, 6.0])

    # distances from +2: [1, 1, 2, 2, 4]
    assert tae.nose_percentile_from_avg(2.0, pop) == 100
    assert tae.nose_percentile_from_avg(1.0, pop) == 60
    assert tae.nose_percentile_from_avg(3.0, pop) == 60
    assert tae.nose_percentile_from_avg(5.0, pop) == 20
    assert tae.nose_percentile_from_avg(-2.0, pop) == 0


def test_nose_percentile_absent():
    pop = _population_with_nose([1.0, 2.0])
    assert tae.nose_percentile_from_avg(None, pop) is None


def test_compute_percentiles_uses_metric_polarity():
    pop = tae.generate_population(n_samples=2000, seed=tae.DEFAULT_SEED)
    strong = tae.SessionStats(count=10, avg_speed=62.0, avg_spin=1200.0, avg_nose=2.0, avg_wobble=1.5)
    weak = tae.SessionStats(count=10, avg_speed=35.0, avg_spin=500.0, avg_nose=9.0, avg_wobble=9.0)

    hi = tae.compute_percentiles(strong, pop)
    lo = tae.compute_percentiles(weak, pop)

    for metric in tae.METRICS:
        assert hi[metric] > lo[metric]
    assert hi[tae.METRIC_WOBBLE] >= 90
    assert lo[tae.METRIC_WOBBLE] <= 10


def test_compute_percentiles_without_data():
    pop = tae.generate_population(n_samples=100, seed=1)
    out = tae.compute_percentiles(tae.SessionStats(count=0), pop)

    assert set(out) == set(tae.METRICS)
    assert all(p is None for p in out.values())
