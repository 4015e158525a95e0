import math
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

# ============================================================
# Constants & Baselines
# ============================================================

METRIC_WOBBLE = "wobble"
METRIC_NOSE = "nose"
METRIC_SPIN = "spin"
METRIC_POWER = "power"  # speed proxy

# Display order
METRICS = (METRIC_POWER, METRIC_SPIN, METRIC_NOSE, METRIC_WOBBLE)

BAND_BEGINNER = "Beginner"
BAND_INTERMEDIATE = "Intermediate"
BAND_ADVANCED = "Advanced"

# Synthetic population
DEFAULT_N_SAMPLES = 6000
DEFAULT_SEED = 1337

# Nose goodness = closeness to this angle (degrees)
NOSE_TARGET = 2.0

HISTOGRAM_BINS = 24
HISTOGRAM_PAD_FRACTION = 0.08

# Sane chart bounds so outliers don't blow out the scale
DISPLAY_BOUNDS = {
    METRIC_SPIN:   (300.0, 1300.0),
    METRIC_POWER:  (20.0, 75.0),
    METRIC_NOSE:   (-10.0, 18.0),
    METRIC_WOBBLE: (0.0, 12.0),
}

# Shaded "goal" region on the charts
GOAL_BANDS = {
    METRIC_NOSE:   (1.0, 3.0),
    METRIC_WOBBLE: (0.0, 3.0),
    METRIC_SPIN:   (950.0, 1200.0),
    METRIC_POWER:  (52.0, 75.0),
}

GOAL_TEXT = {
    METRIC_WOBBLE: "< 3.0°",
    METRIC_NOSE:   "~ +1° to +3°",
    METRIC_SPIN:   "≥ 950 rpm",
    METRIC_POWER:  "≥ 52 mph",
}

# Diagnosis thresholds
WOBBLE_SEVERE = 4.0
WOBBLE_MILD = 3.0
NOSE_HIGH = 4.0
SPIN_LOW = 900.0
SPEED_LOW = 50.0

PRIORITY_WOBBLE_SEVERE = 100
PRIORITY_NOSE_HIGH = 90
PRIORITY_SPIN_LOW = 70
PRIORITY_WOBBLE_MILD = 60
PRIORITY_SPEED_LOW = 40

# CSV column -> ThrowRecord field
NUMERIC_COLUMNS = {
    "timeSeconds": "time_seconds",
    "speedMph":    "speed",
    "spinRpm":     "spin",
    "noseAngle":   "nose",
    "wobbleAngle": "wobble",
    "launchAngle": "launch",
    "hyzerAngle":  "hyzer",
}

TEXT_COLUMNS = {
    "id":               "throw_id",
    "time":             "time",
    "throwType":        "throw_type",
    "primaryThrowType": "primary_throw_type",
    "tags":             "tags",
    "notes":            "notes",
}

_UINT32 = 0xFFFFFFFF


# ============================================================
# Coaching resources
# ============================================================

DRILLS = [
    {
        "id": "wobble-plane",
        "metric": METRIC_WOBBLE,
        "title": "Improve Nose Angle & Swing Plane",
        "description": "Keeping the disc on-plane through the release to reduce OAT/wobble.",
        "url": "https://www.youtube.com/watch?v=uDbfdt-LMyI",
        "credit": "Disc Golf Pro Tour (YouTube)",
    },
    {
        "id": "wobble-clean",
        "metric": METRIC_WOBBLE,
        "title": "Backhand Form Basics",
        "description": "Clean release mechanics to reduce off-axis torque.",
        "url": "https://www.youtube.com/watch?v=RgVGkgnBxuM",
        "credit": "Foundations Disc Golf (YouTube)",
    },
    {
        "id": "nose-cheat",
        "metric": METRIC_NOSE,
        "title": "Simple Nose Angle Cheat Sheet",
        "description": "Quick cues to control nose angle (avoid nose-up).",
        "url": "https://www.youtube.com/watch?v=neeW-UlrZRg",
        "credit": "Stepwise Disc Golf (YouTube)",
    },
    {
        "id": "nose-drill",
        "metric": METRIC_NOSE,
        "title": "This Drill Fixed My Nose Angle",
        "description": "A focused drill to reduce nose-up throws.",
        "url": "https://www.youtube.com/watch?v=FZSyIbGRDZM",
        "credit": "Nick Krush Disc Golf & Fitness (YouTube)",
    },
    {
        "id": "spin-snap",
        "metric": METRIC_SPIN,
        "title": "How to Get Snap",
        "description": "Late acceleration cues for better spin efficiency.",
        "url": "https://www.youtube.com/watch?v=vL5UB1Srbsg",
        "credit": "Ben’s Big Drive (YouTube)",
    },
    {
        "id": "spin-basic",
        "metric": METRIC_SPIN,
        "title": "How To Get More Spin Into Your Disc",
        "description": "Grip + timing cues for adding spin without muscling.",
        "url": "https://www.youtube.com/watch?v=ZBLIBlzDokg",
        "credit": "Decent Disc Golf (YouTube)",
    },
    {
        "id": "power-pocket",
        "metric": METRIC_POWER,
        "title": "Power Pocket Shadow Swing Drill",
        "description": "Sequencing and late acceleration for power (helps speed/spin).",
        "url": "https://www.youtube.com/watch?v=bbAm8X3Upi4",
        "credit": "Stepwise Disc Golf (YouTube)",
    },
]


def drills_for_metric(metric):
    _check_metric(metric)
    return [d for d in DRILLS if d["metric"] == metric]


def drills_by_metric():
    """Every metric maps to a (possibly empty) list of drills."""
    return {m: drills_for_metric(m) for m in METRICS}


# ============================================================
# Data structures
# ============================================================

@dataclass(frozen=True)
class ThrowRecord:
    idx: int
    throw_id: Optional[str] = None
    time: Optional[str] = None
    time_seconds: Optional[float] = None
    speed: Optional[float] = None
    spin: Optional[float] = None
    nose: Optional[float] = None
    wobble: Optional[float] = None
    launch: Optional[float] = None
    hyzer: Optional[float] = None
    throw_type: Optional[str] = None
    primary_throw_type: Optional[str] = None
    tags: Optional[str] = None
    notes: Optional[str] = None

    @property
    def type_label(self) -> Optional[str]:
        return self.primary_throw_type or self.throw_type

    @property
    def is_usable(self) -> bool:
        return self.speed is not None or self.spin is not None


@dataclass(frozen=True)
class SessionStats:
    count: int
    avg_speed: Optional[float] = None
    avg_spin: Optional[float] = None
    avg_nose: Optional[float] = None
    avg_wobble: Optional[float] = None
    sd_speed: Optional[float] = None
    sd_spin: Optional[float] = None
    sd_nose: Optional[float] = None
    sd_wobble: Optional[float] = None
    best_speed: Optional[float] = None
    best_spin: Optional[float] = None

    def averages(self) -> Dict[str, Optional[float]]:
        return {
            "speed": self.avg_speed,
            "spin": self.avg_spin,
            "nose": self.avg_nose,
            "wobble": self.avg_wobble,
        }

    def average_for(self, metric) -> Optional[float]:
        _check_metric(metric)
        if metric == METRIC_POWER:
            return self.avg_speed
        return self.averages()[metric]


@dataclass(frozen=True)
class Population:
    """
    Synthetic 'site-wide' distribution of per-thrower metrics.

    The four value tuples are parallel (index i is one synthetic thrower).
    Sorted copies are built once by generate_population() and never change.
    """
    seed: int
    n_samples: int
    speed: Tuple[float, ...] = field(repr=False)
    wobble: Tuple[float, ...] = field(repr=False)
    nose: Tuple[float, ...] = field(repr=False)
    spin: Tuple[float, ...] = field(repr=False)
    speed_sorted: Tuple[float, ...] = field(repr=False)
    wobble_sorted: Tuple[float, ...] = field(repr=False)
    nose_sorted: Tuple[float, ...] = field(repr=False)
    spin_sorted: Tuple[float, ...] = field(repr=False)

    def values_for(self, metric) -> Tuple[float, ...]:
        _check_metric(metric)
        if metric == METRIC_POWER:
            return self.speed
        return getattr(self, metric)

    def sorted_for(self, metric) -> Tuple[float, ...]:
        _check_metric(metric)
        if metric == METRIC_POWER:
            return self.speed_sorted
        return getattr(self, f"{metric}_sorted")

    def mean_for(self, metric) -> Optional[float]:
        return mean(self.values_for(metric))

    def averages(self) -> Dict[str, Optional[float]]:
        return {m: self.mean_for(m) for m in METRICS}


@dataclass(frozen=True)
class SkillBand:
    band: str
    note: str
    score01: float
    has_data: bool = True


@dataclass(frozen=True)
class Issue:
    metric: str
    priority: int
    headline: str
    detail: str
    value: Optional[float]
    unit_text: str
    goal_text: str


# ============================================================
# Utility functions
# ============================================================

def _check_metric(metric):
    if metric not in METRICS:
        raise ValueError(f"Unknown metric {metric!r}; expected one of {METRICS}")


def _clamp(x, lo, hi):
    return max(lo, min(hi, x))


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def to_number(value) -> Optional[float]:
    """
    Loose numeric coercion for sensor exports.

    Blank, non-numeric and non-finite inputs all come back as None.
    Digit separators ('1_000') are rejected; unsigned 0x/0o/0b literals
    are accepted. Never raises.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = float(value)
        return num if math.isfinite(num) else None

    text = str(value).strip()
    if not text or "_" in text:
        return None
    try:
        if text[:2].lower() in ("0x", "0o", "0b"):
            num = float(int(text, 0))
        else:
            num = float(text)
    except ValueError:
        return None
    return num if math.isfinite(num) else None


def _to_text(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def sample_sd(values: Sequence[float]) -> Optional[float]:
    """Sample standard deviation (n - 1). Undefined (None) below two values."""
    if len(values) < 2:
        return None
    m = mean(values)
    var = sum((x - m) ** 2 for x in values) / (len(values) - 1)
    return math.sqrt(var)


# ============================================================
# Throw records & session aggregation
# ============================================================

def build_throws(rows: Iterable[Mapping]) -> List[ThrowRecord]:
    """
    Coerce raw CSV rows into ThrowRecords.

    Every row becomes a record (idx is the 1-based row position), even when
    it carries no usable numbers; filtering happens in usable_throws().
    """
    throws = []
    for i, row in enumerate(rows, start=1):
        fields = {}
        for column, field_name in NUMERIC_COLUMNS.items():
            fields[field_name] = to_number(row.get(column))
        for column, field_name in TEXT_COLUMNS.items():
            fields[field_name] = _to_text(row.get(column))
        throws.append(ThrowRecord(idx=i, **fields))
    return throws


def usable_throws(throws: Iterable[ThrowRecord]) -> List[ThrowRecord]:
    return [t for t in throws if t.is_usable]


def _present(throws, attr):
    return [getattr(t, attr) for t in throws if getattr(t, attr) is not None]


def summarize_session(throws: Iterable[ThrowRecord]) -> SessionStats:
    """
    Session averages, spreads and bests over usable throws.

    Each metric is averaged over the throws that actually carry it, so the
    sample size can differ between speed, spin, nose and wobble.
    """
    clean = usable_throws(throws)

    speeds = _present(clean, "speed")
    spins = _present(clean, "spin")
    noses = _present(clean, "nose")
    wobbles = _present(clean, "wobble")

    return SessionStats(
        count=len(clean),
        avg_speed=mean(speeds),
        avg_spin=mean(spins),
        avg_nose=mean(noses),
        avg_wobble=mean(wobbles),
        sd_speed=sample_sd(speeds),
        sd_spin=sample_sd(spins),
        sd_nose=sample_sd(noses),
        sd_wobble=sample_sd(wobbles),
        best_speed=max(speeds) if speeds else None,
        best_spin=max(spins) if spins else None,
    )


# ============================================================
# Deterministic random numbers
# ============================================================

def _imul(a, b):
    return (a * b) & _UINT32


class Mulberry32:
    """
    Small 32-bit seeded generator.

    Same seed -> same stream on every platform, which keeps the synthetic
    population stable between reruns of the app.
    """

    def __init__(self, seed: int):
        self._state = int(seed) & _UINT32

    def random(self) -> float:
        """Next uniform value in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & _UINT32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _UINT32
        return ((t ^ (t >> 14)) & _UINT32) / 4294967296.0


def sample_standard_normal(rng: Mulberry32) -> float:
    """Box-Muller, cosine branch only. Consumes two draws (more if one is 0)."""
    u = 0.0
    while u == 0.0:
        u = rng.random()
    v = 0.0
    while v == 0.0:
        v = rng.random()
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


# ============================================================
# Synthetic population
# ============================================================

def generate_population(n_samples=DEFAULT_N_SAMPLES, seed=DEFAULT_SEED) -> Population:
    """
    Build a plausible, internally correlated population of throwers.

    Each synthetic thrower gets a latent skill deviate; speed and wobble hang
    off skill plus noise, then nose leans on that thrower's wobble and spin
    on their speed and wobble. Order matters: every draw comes from the same
    seeded stream.
    """
    if n_samples < 0:
        raise ValueError("n_samples must be >= 0")

    rng = Mulberry32(seed)

    speed, wobble, nose, spin = [], [], [], []

    for _ in range(n_samples):
        skill = sample_standard_normal(rng)

        # Draw order: skill, speed, wobble, nose, spin
        spd_noise = sample_standard_normal(rng)
        spd = _clamp(47.0 + 4.2 * skill + 3.8 * spd_noise, 25.0, 68.0)

        wob_noise = sample_standard_normal(rng)
        wob = _clamp(4.3 - 0.9 * skill + 0.9 * abs(wob_noise), 0.8, 11.0)

        nos_noise = sample_standard_normal(rng)
        nos = _clamp(
            3.0 - 0.4 * skill + 0.55 * (wob - 3.5) + 1.8 * nos_noise,
            -6.0,
            14.0,
        )

        spn_noise = sample_standard_normal(rng)
        spn = _clamp(
            860.0 + 10.5 * (spd - 45.0) + 70.0 * skill - 20.0 * (wob - 3.5) + 85.0 * spn_noise,
            350.0,
            1250.0,
        )

        speed.append(spd)
        wobble.append(wob)
        nose.append(nos)
        spin.append(spn)

    return Population(
        seed=seed,
        n_samples=n_samples,
        speed=tuple(speed),
        wobble=tuple(wobble),
        nose=tuple(nose),
        spin=tuple(spin),
        speed_sorted=tuple(sorted(speed)),
        wobble_sorted=tuple(sorted(wobble)),
        nose_sorted=tuple(sorted(nose)),
        spin_sorted=tuple(sorted(spin)),
    )


# ============================================================
# Percentiles
# ============================================================

def percentile_of(value, sorted_asc, higher_is_better=True) -> Optional[int]:
    """
    Population percentile of a single aggregate value.

    Ties count as 'not exceeding': the search finds the first entry strictly
    greater than value. Lower-is-better metrics flip the fraction.
    """
    if value is None or not sorted_asc:
        return None
    count_at_or_below = bisect_right(sorted_asc, value)
    frac = count_at_or_below / len(sorted_asc)
    p = frac if higher_is_better else 1.0 - frac
    return _round_half_up(p * 100.0)


def nose_percentile_from_avg(avg_nose, population: Population, target=NOSE_TARGET) -> Optional[int]:
    """Nose is scored on closeness to target, so rank distances instead of raw angles."""
    if avg_nose is None:
        return None
    dist = sorted(abs(n - target) for n in population.nose)
    return percentile_of(abs(avg_nose - target), dist, higher_is_better=False)


def compute_percentiles(stats: SessionStats, population: Population) -> Dict[str, Optional[int]]:
    return {
        METRIC_POWER: percentile_of(stats.avg_speed, population.speed_sorted, True),
        METRIC_SPIN: percentile_of(stats.avg_spin, population.spin_sorted, True),
        METRIC_NOSE: nose_percentile_from_avg(stats.avg_nose, population),
        METRIC_WOBBLE: percentile_of(stats.avg_wobble, population.wobble_sorted, False),
    }


# ============================================================
# Histograms
# ============================================================

def compute_histogram(values, bins, lo, hi) -> List[int]:
    """Equal-width bins over [lo, hi]; out-of-range values land in the edge bins."""
    if bins < 1:
        raise ValueError("bins must be >= 1")
    counts = [0] * bins
    span = hi - lo
    if span <= 0:
        return counts

    for v in values:
        t = (v - lo) / span
        idx = min(bins - 1, max(0, int(math.floor(t * bins))))
        counts[idx] += 1
    return counts


def nice_range(metric, values) -> Tuple[float, float]:
    """Data range padded ~8% (1 unit for a single point), clamped to DISPLAY_BOUNDS."""
    _check_metric(metric)
    bound_lo, bound_hi = DISPLAY_BOUNDS[metric]
    if not values:
        return bound_lo, bound_hi

    vmin = min(values)
    vmax = max(values)
    pad = (vmax - vmin) * HISTOGRAM_PAD_FRACTION or 1.0

    return max(bound_lo, vmin - pad), min(bound_hi, vmax + pad)


def metric_histogram(metric, population: Population, bins=HISTOGRAM_BINS):
    """
    Returns:
      counts: per-bin counts for the population array of this metric
      min/max: resolved display range
      edges: bins + 1 bin boundaries
    """
    values = population.values_for(metric)
    lo, hi = nice_range(metric, values)
    counts = compute_histogram(values, bins, lo, hi)
    width = (hi - lo) / bins
    edges = [lo + i * width for i in range(bins)] + [hi]
    return {"counts": counts, "min": lo, "max": hi, "edges": edges}


# ============================================================
# Skill bands
# ============================================================

NO_DATA_BAND = SkillBand(BAND_BEGINNER, "No data", 0.0, has_data=False)


def band_for_metric(metric, value) -> SkillBand:
    _check_metric(metric)
    if value is None:
        return NO_DATA_BAND

    if metric == METRIC_WOBBLE:
        if value < 3:
            return SkillBand(BAND_ADVANCED, "Very clean release", 0.9)
        if value < 4.5:
            return SkillBand(BAND_INTERMEDIATE, "Some OAT; manageable", 0.6)
        return SkillBand(BAND_BEGINNER, "High OAT/wobble", 0.25)

    if metric == METRIC_NOSE:
        # Ranges overlap; first match wins.
        if 1 <= value <= 3:
            return SkillBand(BAND_ADVANCED, "Driver-friendly nose", 0.9)
        if 3 < value <= 5:
            return SkillBand(BAND_INTERMEDIATE, "Slightly nose-up", 0.55)
        if value > 5:
            return SkillBand(BAND_BEGINNER, "Nose-up (distance leak)", 0.2)
        if abs(value) <= 1:
            return SkillBand(BAND_INTERMEDIATE, "Near neutral", 0.6)
        return SkillBand(BAND_INTERMEDIATE, "Slightly nose-down/neutral", 0.65)

    if metric == METRIC_SPIN:
        if value >= 1100:
            return SkillBand(BAND_ADVANCED, "Elite spin", 0.9)
        if value >= 950:
            return SkillBand(BAND_INTERMEDIATE, "Solid spin", 0.65)
        return SkillBand(BAND_BEGINNER, "Low spin (timing/clamp)", 0.3)

    if value >= 60:
        return SkillBand(BAND_ADVANCED, "Elite speed", 0.9)
    if value >= 52:
        return SkillBand(BAND_INTERMEDIATE, "Strong speed", 0.65)
    return SkillBand(BAND_BEGINNER, "Developing speed", 0.35)


def classify_session(stats: SessionStats) -> Dict[str, SkillBand]:
    return {m: band_for_metric(m, stats.average_for(m)) for m in METRICS}


# ============================================================
# Diagnosis
# ============================================================

def build_issues(averages: Mapping[str, Optional[float]]) -> List[Issue]:
    """
    Rank coaching issues from session averages.

    - averages: {'wobble', 'nose', 'spin', 'speed'} -> average or None

    Rules are independent, so several can fire at once. A metric with no
    data never fires. An empty list means nothing crossed a threshold.
    """
    wobble = averages.get("wobble")
    nose = averages.get("nose")
    spin = averages.get("spin")
    speed = averages.get("speed")

    issues = []

    if wobble is not None and wobble > WOBBLE_SEVERE:
        issues.append(
            Issue(
                metric=METRIC_WOBBLE,
                priority=PRIORITY_WOBBLE_SEVERE,
                headline="Wobble is costing you clean flight",
                detail=(
                    f"Avg wobble: {wobble:.1f}°. "
                    "High wobble usually means off-axis torque (release not matching swing plane)."
                ),
                value=wobble,
                unit_text="°",
                goal_text=GOAL_TEXT[METRIC_WOBBLE],
            )
        )
    elif wobble is not None and wobble > WOBBLE_MILD:
        issues.append(
            Issue(
                metric=METRIC_WOBBLE,
                priority=PRIORITY_WOBBLE_MILD,
                headline="Some wobble present",
                detail=(
                    f"Avg wobble: {wobble:.1f}°. "
                    "Tightening release plane can add consistency and keep spin."
                ),
                value=wobble,
                unit_text="°",
                goal_text=GOAL_TEXT[METRIC_WOBBLE],
            )
        )

    if nose is not None and nose > NOSE_HIGH:
        issues.append(
            Issue(
                metric=METRIC_NOSE,
                priority=PRIORITY_NOSE_HIGH,
                headline="Nose angle is too high (nose-up)",
                detail=(
                    f"Avg nose: {nose:.1f}°. "
                    "Nose-up bleeds distance even with good speed/spin. "
                    "Fixing this often adds easy carry."
                ),
                value=nose,
                unit_text="°",
                goal_text=GOAL_TEXT[METRIC_NOSE],
            )
        )

    if spin is not None and 0 < spin < SPIN_LOW:
        issues.append(
            Issue(
                metric=METRIC_SPIN,
                priority=PRIORITY_SPIN_LOW,
                headline="Spin is on the low side",
                detail=(
                    f"Avg spin: {spin:.0f} rpm. "
                    "Often improved by later acceleration + cleaner hit (don’t muscle early)."
                ),
                value=spin,
                unit_text="rpm",
                goal_text=GOAL_TEXT[METRIC_SPIN],
            )
        )

    if speed is not None and 0 < speed < SPEED_LOW:
        issues.append(
            Issue(
                metric=METRIC_POWER,
                priority=PRIORITY_SPEED_LOW,
                headline="Speed (power) has room to grow",
                detail=(
                    f"Avg speed: {speed:.1f} mph. "
                    "Sequencing + a later hit usually increases speed without increasing wobble."
                ),
                value=speed,
                unit_text="mph",
                goal_text=GOAL_TEXT[METRIC_POWER],
            )
        )

    issues.sort(key=lambda iss: -iss.priority)
    return issues


# ============================================================
# Display helpers
# ============================================================

def format_metric(metric) -> str:
    _check_metric(metric)
    if metric == METRIC_POWER:
        return "Power (Speed)"
    if metric == METRIC_SPIN:
        return "Spin"
    if metric == METRIC_NOSE:
        return "Nose"
    return "Wobble"


def metric_unit(metric) -> str:
    _check_metric(metric)
    if metric == METRIC_POWER:
        return "mph"
    if metric == METRIC_SPIN:
        return "rpm"
    return "°"


def goal_for_metric(metric) -> str:
    _check_metric(metric)
    return GOAL_TEXT[metric]


def format_metric_value(metric, value, with_unit=True) -> str:
    """Spin shows whole rpm, everything else one decimal. None -> em dash."""
    if value is None:
        return "—"
    digits = 0 if metric == METRIC_SPIN else 1
    text = f"{value:.{digits}f}"
    if not with_unit:
        return text
    unit = metric_unit(metric)
    return f"{text}{unit}" if unit == "°" else f"{text} {unit}"


def format_percentile(percentile) -> str:
    """'73th'-style label; None -> em dash, never '0th'."""
    if percentile is None:
        return "—"
    return f"{percentile}th"


# ============================================================
# Full session analysis
# ============================================================

def analyze_session(rows: Iterable[Mapping], population: Population):
    """
    Rows in, everything the UI needs out.

    Returns dict with:
      throws, usable, stats, percentiles, bands, issues

    Works for an empty table: counts are zero, averages and percentiles are
    None, every band is the 'No data' band and there are no issues.
    """
    throws = build_throws(rows)
    usable = usable_throws(throws)
    stats = summarize_session(usable)
    return {
        "throws": throws,
        "usable": usable,
        "stats": stats,
        "percentiles": compute_percentiles(stats, population),
        "bands": classify_session(stats),
        "issues": build_issues(stats.averages()),
    }
