import io
import logging

import streamlit as st
import pandas as pd
import numpy as np
import altair as alt
import plotly.graph_objects as go

import throw_analytics_engine as tae  # <-- analytics engine

logger = logging.getLogger(__name__)


def _clip01(x: float) -> float:
    return max(0.0, min(1.0, float(x)))


# ------------------------------------------------------------
# Page config
# ------------------------------------------------------------
st.set_page_config(
    page_title="Throwlytics",
    page_icon="🥏",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ------------------------------------------------------------
# Session state defaults
# ------------------------------------------------------------

DEFAULTS = {
    "seed": tae.DEFAULT_SEED,            # synthetic population seed
    "n_samples": tae.DEFAULT_N_SAMPLES,  # synthetic throwers
    "bins": tae.HISTOGRAM_BINS,          # histogram resolution
    "rows": [],                          # parsed CSV rows
    "csv_error": None,                   # last ingestion error shown to the user
    "uploader_key": 0,                   # bump to reset the file uploader
}


def init_session_state():
    for k, v in DEFAULTS.items():
        if k not in st.session_state:
            st.session_state[k] = v


init_session_state()


# ------------------------------------------------------------
# Cached engine calls
# ------------------------------------------------------------

@st.cache_resource(show_spinner="Generating synthetic population...")
def load_population(n_samples: int, seed: int) -> tae.Population:
    """One immutable population per (n_samples, seed), shared across sessions."""
    logger.info("Generating synthetic population n=%d seed=%d", n_samples, seed)
    return tae.generate_population(n_samples=n_samples, seed=seed)


@st.cache_data(show_spinner=False)
def parse_csv_rows(raw: bytes):
    """CSV bytes -> list of row dicts. Everything stays text; the engine coerces."""
    df = pd.read_csv(
        io.BytesIO(raw),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )
    df.columns = [str(c).strip() for c in df.columns]
    return df.to_dict("records")


# ------------------------------------------------------------
# Styling (simple dark-ish theme tweaks)
# ------------------------------------------------------------

st.markdown(
    """
    <style>
    .main {
        background-color: #06060a;
    }
    .stApp {
        background-color: #06060a;
    }
    h1, h2, h3, h4, h5, h6 {
        color: #eef3ff;
    }
    .stMarkdown, .stText, .stCaption, label {
        color: #e6ebf7 !important;
    }
    .tl-pill {
        display: inline-block;
        padding: 6px 10px;
        margin: 0 6px 6px 0;
        border-radius: 999px;
        background: rgba(255,255,255,0.06);
        border: 1px solid rgba(255,255,255,0.12);
        font-size: 0.8rem;
        color: rgba(238,243,255,0.92);
    }
    .tl-badge {
        padding: 4px 9px;
        border-radius: 999px;
        background: rgba(188,215,255,0.14);
        border: 1px solid rgba(188,215,255,0.25);
        font-size: 0.75rem;
        font-weight: 800;
        letter-spacing: 0.06em;
        text-transform: uppercase;
    }
    .tl-bar {
        height: 10px;
        border-radius: 999px;
        background: rgba(255,255,255,0.06);
        border: 1px solid rgba(255,255,255,0.10);
        overflow: hidden;
    }
    .tl-bar-fill {
        height: 100%;
        border-radius: 999px;
        background: linear-gradient(90deg, rgba(188,215,255,0.9), rgba(140,255,210,0.7));
    }
    </style>
    """,
    unsafe_allow_html=True,
)


def pills(items):
    html = "".join(f'<span class="tl-pill">{text}</span>' for text in items)
    st.markdown(html, unsafe_allow_html=True)


# ------------------------------------------------------------
# Sidebar controls
# ------------------------------------------------------------

with st.sidebar:
    st.header("Settings")

    st.markdown("**Synthetic Benchmarks**")
    st.session_state.seed = int(
        st.number_input(
            "Population seed",
            min_value=0,
            max_value=2**32 - 1,
            value=int(st.session_state.seed),
            step=1,
            help="Same seed = same simulated population every time.",
        )
    )
    st.session_state.n_samples = int(
        st.slider(
            "Simulated throwers",
            min_value=500,
            max_value=20000,
            value=int(st.session_state.n_samples),
            step=500,
            help="Size of the synthetic 'site-wide' population used for percentiles.",
        )
    )
    st.session_state.bins = int(
        st.slider(
            "Histogram bins",
            min_value=8,
            max_value=60,
            value=int(st.session_state.bins),
            step=1,
        )
    )

    st.markdown("---")
    st.markdown("**About the data**")
    st.caption(
        "All analysis runs locally. Global distributions are simulated "
        "(synthetic data), not collected from real users."
    )


# ------------------------------------------------------------
# Main title & upload
# ------------------------------------------------------------

st.title("Throwlytics – Disc Golf Throw Analytics")
st.caption(
    "Upload throws.csv from your sensor. You get a session summary, a skill band per metric, "
    "your percentile vs a simulated population, and ranked coaching priorities."
)

population = load_population(st.session_state.n_samples, st.session_state.seed)

up_col, clear_col = st.columns([4, 1])
with up_col:
    uploaded = st.file_uploader(
        "Throws CSV",
        type=["csv"],
        key=f"uploader_{st.session_state.uploader_key}",
        help="Expected columns: speedMph, spinRpm, noseAngle, wobbleAngle, launchAngle, "
             "hyzerAngle, time, throwType, primaryThrowType (any subset).",
    )
with clear_col:
    st.write("")
    st.write("")
    if st.button("Clear"):
        st.session_state.rows = []
        st.session_state.csv_error = None
        st.session_state.uploader_key += 1
        st.rerun()

if uploaded is not None:
    try:
        rows = parse_csv_rows(uploaded.getvalue())
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        logger.warning("Could not parse %s: %s", uploaded.name, exc)
        st.session_state.rows = []
        st.session_state.csv_error = f"CSV parse error: {exc}"
    else:
        logger.info("Loaded %d rows from %s", len(rows), uploaded.name)
        st.session_state.rows = rows
        st.session_state.csv_error = None

if st.session_state.csv_error:
    st.error(st.session_state.csv_error)

# Everything downstream comes from this one population
analysis = tae.analyze_session(st.session_state.rows, population)
stats = analysis["stats"]
percentiles = analysis["percentiles"]
bands = analysis["bands"]
issues = analysis["issues"]
has_user_data = stats.count > 0


# ------------------------------------------------------------
# Charts
# ------------------------------------------------------------

def draw_metric_histogram(metric, user_value, bins):
    """
    Population histogram for one metric with:
      - shaded goal band
      - global average rule (blue)
      - your average rule (green), if you have data
    """
    hist = tae.metric_histogram(metric, population, bins=bins)
    lo, hi = hist["min"], hist["max"]
    edges = np.array(hist["edges"])

    bars_df = pd.DataFrame({
        "start": edges[:-1],
        "end": edges[1:],
        "count": hist["counts"],
    })

    x_scale = alt.Scale(domain=[lo, hi], nice=False)
    unit = tae.metric_unit(metric)

    bars = (
        alt.Chart(bars_df)
        .mark_bar(color="rgba(188,215,255,0.35)", cornerRadius=2)
        .encode(
            x=alt.X("start:Q", title=f"{tae.format_metric(metric)} ({unit})", scale=x_scale),
            x2="end:Q",
            y=alt.Y("count:Q", title="Throwers"),
            tooltip=[
                alt.Tooltip("start:Q", format=".1f"),
                alt.Tooltip("end:Q", format=".1f"),
                "count:Q",
            ],
        )
    )

    layers = []

    goal_lo, goal_hi = tae.GOAL_BANDS[metric]
    goal_df = pd.DataFrame({"x": [max(lo, goal_lo)], "x2": [min(hi, goal_hi)]})
    if goal_df["x"][0] < goal_df["x2"][0]:
        layers.append(
            alt.Chart(goal_df)
            .mark_rect(opacity=0.12, color="#8cffd2")
            .encode(x=alt.X("x:Q", scale=x_scale), x2="x2:Q")
        )

    layers.append(bars)

    global_avg = population.mean_for(metric)
    if global_avg is not None:
        layers.append(
            alt.Chart(pd.DataFrame({"x": [global_avg], "label": ["Global avg"]}))
            .mark_rule(color="#bcd7ff", strokeWidth=2)
            .encode(x=alt.X("x:Q", scale=x_scale), tooltip=["label:N", alt.Tooltip("x:Q", format=".1f")])
        )

    if user_value is not None:
        layers.append(
            alt.Chart(pd.DataFrame({"x": [user_value], "label": ["You"]}))
            .mark_rule(color="#8cffd2", strokeWidth=2, strokeDash=[6, 3])
            .encode(x=alt.X("x:Q", scale=x_scale), tooltip=["label:N", alt.Tooltip("x:Q", format=".1f")])
        )

    chart = (
        alt.layer(*layers)
        .properties(height=160)
        .configure_view(stroke=None, fill="#06060a")
        .configure_axis(labelColor="#eef3ff", titleColor="#eef3ff", gridColor="#1b1f2a")
    )
    st.altair_chart(chart, use_container_width=True)


def draw_percentile_gauge(metric, percentile):
    """Percentile gauge. No data -> caption only; a missing rank is never drawn as 0."""
    if percentile is None:
        st.caption(f"Simulated percentile: {tae.format_percentile(percentile)} (no data)")
        return

    fig = go.Figure(
        go.Indicator(
            mode="gauge+number",
            value=percentile,
            number={"suffix": "th", "font": {"size": 26}},
            title={"text": "Simulated percentile", "font": {"size": 13}},
            domain={"x": [0, 1], "y": [0, 1]},
            gauge={
                "axis": {"range": [0, 100], "tickwidth": 1},
                "bar": {"color": "#8cffd2"},
                "steps": [
                    {"range": [0, 40], "color": "#1f2633"},
                    {"range": [40, 70], "color": "#273247"},
                    {"range": [70, 100], "color": "#2f3f5c"},
                ],
            },
        )
    )
    fig.update_layout(
        height=180,
        margin=dict(t=40, b=0, l=20, r=20),
        paper_bgcolor="#06060a",
        font={"color": "#eef3ff"},
    )
    st.plotly_chart(fig, use_container_width=True, key=f"gauge_{metric}")


# ------------------------------------------------------------
# Tabs
# ------------------------------------------------------------

tab_global, tab_session, tab_diag, tab_throws, tab_info = st.tabs(
    ["Global Benchmarks", "Session Summary", "Diagnosis", "All Throws", "Info"]
)

# ============================================================
# GLOBAL BENCHMARKS TAB
# ============================================================

with tab_global:
    st.subheader("Global Benchmarks (Simulated)")
    st.caption(
        "Synthetic 'site-wide' distributions so the benchmarks work without "
        "collecting any real user data."
    )

    global_avgs = population.averages()
    pills([
        f"Global avg speed: <b>{tae.format_metric_value(tae.METRIC_POWER, global_avgs[tae.METRIC_POWER])}</b>",
        f"Global avg spin: <b>{tae.format_metric_value(tae.METRIC_SPIN, global_avgs[tae.METRIC_SPIN])}</b>",
        f"Global avg nose: <b>{tae.format_metric_value(tae.METRIC_NOSE, global_avgs[tae.METRIC_NOSE])}</b>",
        f"Global avg wobble: <b>{tae.format_metric_value(tae.METRIC_WOBBLE, global_avgs[tae.METRIC_WOBBLE])}</b>",
    ])

    for metric in tae.METRICS:
        user_val = stats.average_for(metric) if has_user_data else None

        st.markdown(f"#### {tae.format_metric(metric)}")
        summary = f"Global avg: **{tae.format_metric_value(metric, global_avgs[metric])}**"
        if user_val is not None:
            summary += (
                f" • You: **{tae.format_metric_value(metric, user_val)}**"
                f" • Percentile: **{tae.format_percentile(percentiles[metric])}**"
            )
        else:
            summary += " • Upload a CSV to see your marker + percentile"
        summary += f" • Goal: **{tae.goal_for_metric(metric)}**"
        st.markdown(summary)

        draw_metric_histogram(metric, user_val, st.session_state.bins)

    st.caption("Blue line = global avg • Green dashed line = you • Shaded area ≈ goal range")

# ============================================================
# SESSION SUMMARY TAB
# ============================================================

with tab_session:
    if not has_user_data:
        st.info("Upload a CSV with speed or spin readings to see your session summary.")
    else:
        st.subheader("Session Summary")
        pills([
            f"Throws: {stats.count}",
            f"Avg Speed: {tae.format_metric_value(tae.METRIC_POWER, stats.avg_speed)}",
            f"Avg Spin: {tae.format_metric_value(tae.METRIC_SPIN, stats.avg_spin)}",
            f"Avg Nose: {tae.format_metric_value(tae.METRIC_NOSE, stats.avg_nose)}",
            f"Avg Wobble: {tae.format_metric_value(tae.METRIC_WOBBLE, stats.avg_wobble)}",
            f"Best Speed: {tae.format_metric_value(tae.METRIC_POWER, stats.best_speed)}",
            f"Best Spin: {tae.format_metric_value(tae.METRIC_SPIN, stats.best_spin)}",
        ])

        consistency = pd.DataFrame(
            {
                "Metric": [tae.format_metric(m) for m in tae.METRICS],
                "Average": [tae.format_metric_value(m, stats.average_for(m)) for m in tae.METRICS],
                "Std Dev": [
                    tae.format_metric_value(tae.METRIC_POWER, stats.sd_speed),
                    tae.format_metric_value(tae.METRIC_SPIN, stats.sd_spin),
                    tae.format_metric_value(tae.METRIC_NOSE, stats.sd_nose),
                    tae.format_metric_value(tae.METRIC_WOBBLE, stats.sd_wobble),
                ],
            }
        )
        st.markdown("### Consistency")
        st.dataframe(consistency, use_container_width=True, hide_index=True)
        st.caption("Std Dev needs at least two throws with that metric; otherwise it shows —.")

        st.markdown("### Metric Breakdown")
        cols = st.columns(len(tae.METRICS))
        for col, metric in zip(cols, tae.METRICS):
            b = bands[metric]
            with col:
                st.markdown(f"**{tae.format_metric(metric)}**")
                st.markdown(f"### {tae.format_metric_value(metric, stats.average_for(metric))}")
                if b.has_data:
                    st.markdown(f"**{b.band}** • {b.note}")
                else:
                    st.markdown(f"_{b.note}_")
                st.markdown(
                    f'<div class="tl-bar"><div class="tl-bar-fill" '
                    f'style="width:{_clip01(b.score01) * 100:.0f}%"></div></div>',
                    unsafe_allow_html=True,
                )
                draw_percentile_gauge(metric, percentiles[metric])
                st.caption(f"Goal: {tae.goal_for_metric(metric)}")

# ============================================================
# DIAGNOSIS TAB
# ============================================================

with tab_diag:
    if not has_user_data:
        st.info("Upload a CSV to get a diagnosis.")
    elif not issues:
        st.success("No major issues detected")
        st.markdown(
            "Your averages don’t trigger red flags. Next gains usually come from tighter "
            "variability (same release every time) and small angle tuning."
        )
    else:
        st.subheader("Top opportunities (ranked)")
        drills = tae.drills_by_metric()

        for iss in issues:
            with st.container(border=True):
                st.markdown(
                    f'<span class="tl-badge">{iss.metric}</span> &nbsp; <b>{iss.headline}</b>',
                    unsafe_allow_html=True,
                )
                pills([
                    f"{tae.format_metric(iss.metric)} avg: "
                    f"<b>{tae.format_metric_value(iss.metric, iss.value)}</b>",
                    f"Goal: {iss.goal_text}",
                    f"Percentile: <b>{tae.format_percentile(percentiles[iss.metric])}</b>",
                ])
                st.markdown(iss.detail)

                st.markdown("**Recommended Drills**")
                drill_cols = st.columns(2)
                for i, d in enumerate(drills[iss.metric]):
                    with drill_cols[i % 2]:
                        st.markdown(f"**{d['title']}**")
                        st.caption(d["description"])
                        st.markdown(f"[Watch on YouTube →]({d['url']})")
                        st.caption(f"Credit: {d['credit']}")

# ============================================================
# ALL THROWS TAB
# ============================================================

with tab_throws:
    if not has_user_data:
        st.info("No throws loaded yet.")
    else:
        st.subheader("All Throws")
        st.caption("Every usable row from your CSV (local only).")

        df_throws = pd.DataFrame(
            [
                {
                    "#": t.idx,
                    "Time": t.time,
                    "Type": t.type_label,
                    "Speed (mph)": t.speed,
                    "Spin (rpm)": t.spin,
                    "Nose (°)": t.nose,
                    "Wobble (°)": t.wobble,
                    "Launch (°)": t.launch,
                    "Hyzer (°)": t.hyzer,
                }
                for t in analysis["usable"]
            ]
        )
        df_throws["Spin (rpm)"] = pd.to_numeric(df_throws["Spin (rpm)"]).round(0)
        for c in ["Speed (mph)", "Nose (°)", "Wobble (°)", "Launch (°)", "Hyzer (°)"]:
            df_throws[c] = pd.to_numeric(df_throws[c]).round(1)
        st.dataframe(df_throws, use_container_width=True, hide_index=True)

        skipped = len(analysis["throws"]) - len(analysis["usable"])
        if skipped:
            st.caption(f"{skipped} row(s) skipped: no speed or spin reading.")

# ============================================================
# INFO TAB
# ============================================================

with tab_info:
    st.subheader("How it works")
    st.markdown(
        "- **Skill bands** come from fixed thresholds on your session averages.\n"
        "- **Percentiles** rank your average against a synthetic population of "
        f"{population.n_samples:,} throwers (seed {population.seed}). Wobble is "
        "lower-is-better; nose is ranked by closeness to "
        f"+{tae.NOSE_TARGET:.0f}°.\n"
        "- **Diagnosis** runs independent rules on your averages and ranks what fired. "
        "A metric with no data never triggers an issue."
    )
    st.caption(
        "Drill videos are linked from YouTube. Credit belongs to the original creators. "
        "Percentiles/graphs are simulated with synthetic data."
    )
