"""
Podium Coach — Public-Speaking Rehearsal Coach

================================================================================
HOW THIS SCRIPT WORKS (for studying)
================================================================================

This is the main Streamlit entry point. Streamlit re-runs top to bottom on
every user interaction. State persists via st.session_state (see
podium.state).

  FLOW:
  1. Page config, CSS, .env settings
  2. Load training profile (planned duration, simulator tuning)
  3. Session state init (PresentationSession + EvaluationHistory)
  4. SIDEBAR: branding, status badge, nav radio, profile + settings
  5. MAIN AREA:
     - REHEARSE tab: timer, heart rate, audience attention, captions,
       warning banners, Start / Pause / Stop and coaching buttons.
       While speaking, st_autorefresh(1s) reruns the page and the elapsed
       wall-clock time is fed to session.tick() in fixed steps.
     - REPORT tab: radar chart (Plotly), grade, sub-score cards, raw
       metrics, export JSON/CSV.
     - HISTORY tab: every report of this browser session, per-dimension
       averages, trend, CSV export, event timeline.

  RUN:
    streamlit run app.py  →  http://localhost:8501
"""

import time
from datetime import datetime
from pathlib import Path

import plotly.graph_objects as go
import streamlit as st
from streamlit_autorefresh import st_autorefresh

from styles import load_css
from podium.constants import (
    DIMENSIONS, DIMENSION_LABELS,
    KEY_NAV, KEY_LAST_TICK_TS, TICK_SECONDS_DEFAULT,
    WARNING_STUTTER, WARNING_SILENCE, WARNING_RELAX, WARNING_REPORT,
)
from podium.logger import read_events, clear_events
from podium.scoring import (
    report_to_json, history_to_csv, events_to_csv, score_band,
)
from podium.state import (
    init_state, new_session, get_session, get_history, get_mode,
    request_nav, apply_nav_request,
)
from podium.utils import load_profile_safe, get_settings

# =============================================================================
# Page config & CSS
# =============================================================================

st.set_page_config(
    page_title="Podium Coach",
    page_icon="🎤",
    layout="wide",
    initial_sidebar_state="expanded",
)
load_css()

settings = get_settings()
PROFILE_DIR = Path(settings["profile_path"]).parent

WARNING_TEXT = {
    WARNING_STUTTER: "Stutter detected — slow down and breathe.",
    WARNING_SILENCE: "Long silence — pick up your next point.",
    WARNING_RELAX: "Heart rate is high — try a relaxation break.",
    WARNING_REPORT: "Generating your evaluation report...",
}
BAND_CLASS = {"strong": "score-strong", "fair": "score-fair", "weak": "score-weak"}

# =============================================================================
# Helpers
# =============================================================================


def available_profiles() -> list[Path]:
    if not PROFILE_DIR.exists():
        return []
    return sorted(PROFILE_DIR.glob("*.json"))


def advance_session() -> None:
    """Feed wall-clock time since the last rerun into the session in fixed steps."""
    session = get_session()
    now_ts = time.time()
    last_ts = st.session_state.get(KEY_LAST_TICK_TS) or now_ts
    st.session_state[KEY_LAST_TICK_TS] = now_ts
    remaining = max(0.0, now_ts - last_ts)
    while remaining > 1e-6:
        step = min(TICK_SECONDS_DEFAULT, remaining)
        report = session.tick(step)
        remaining -= step
        if report is not None:
            request_nav("Report")
            st.rerun()


def render_warnings(warnings: list[str]) -> None:
    for w in warnings:
        text = WARNING_TEXT.get(w, w)
        if w == WARNING_REPORT:
            st.info(text)
        else:
            st.warning(text)


# =============================================================================
# Profile & session state
# =============================================================================

profile = load_profile_safe(settings["profile_path"])
init_state(profile, seed=settings["seed"])

# =============================================================================
# Sidebar
# =============================================================================

NAV_ITEMS = ["Rehearse", "Report", "History"]

with st.sidebar:
    st.markdown(
        '<div class="dashboard-header">'
        "<h1>🎤 Podium Coach</h1>"
        "<p>Public Speaking • Rehearsal Feedback</p>"
        "</div>",
        unsafe_allow_html=True,
    )
    mode = get_mode()
    badge_map = {
        "READY": ("● Ready", "status-idle"),
        "SPEAKING": ("● Speaking", "status-active"),
        "PAUSED": ("● Paused", "status-idle"),
        "FINISHED": ("● Report Ready", "status-ready"),
    }
    badge_text, badge_cls = badge_map.get(mode, badge_map["READY"])
    st.markdown(f'<span class="status-badge {badge_cls}">{badge_text}</span>', unsafe_allow_html=True)

    st.markdown("---")
    st.markdown("### Navigation")
    apply_nav_request(NAV_ITEMS)
    nav = st.radio("Section", NAV_ITEMS, label_visibility="collapsed", key=KEY_NAV)

    st.markdown("---")
    with st.expander("Settings", expanded=False):
        session = get_session()
        profiles = available_profiles()
        if profiles:
            names = [p.name for p in profiles]
            chosen = st.selectbox("Training profile", names, disabled=session.is_presenting)
            if st.button("Load profile", disabled=session.is_presenting):
                new_session(load_profile_safe(PROFILE_DIR / chosen), seed=settings["seed"])
                st.rerun()
        minutes = st.number_input(
            "Planned length (minutes)", min_value=0.5, max_value=60.0,
            value=float(session.planned_seconds / 60.0), step=0.5,
            disabled=session.is_presenting,
        )
        session.set_planned_duration(minutes * 60.0)
        session.auto_stop = st.toggle("Stop automatically at planned length", value=session.auto_stop)
        st.caption(f"profile={session.profile.get('name', '?')} seed={settings['seed']}")

# =============================================================================
# Main header
# =============================================================================

st.markdown(
    '<div class="dashboard-header">'
    "<h1>PODIUM COACH</h1>"
    "<p>Rehearse in front of a simulated audience, then get scored</p>"
    "</div>",
    unsafe_allow_html=True,
)

session = get_session()
history = get_history()

# =============================================================================
# REHEARSE tab
# =============================================================================

if nav == "Rehearse":
    if session.status == "speaking":
        st_autorefresh(interval=1000, limit=None, key="rehearsal_tick")
        advance_session()
    elif session.status == "finished":
        advance_session()

    st.subheader("Rehearsal")
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Timer", session.timer_label(), help=f"Planned {int(session.planned_seconds)}s")
        st.caption(f"Timer: {session.timer_band()}")
    with c2:
        st.metric("Heart Rate", f"{int(session.heart_rate.current_heart_rate())} BPM")
        st.progress(min(1.0, max(0.0, session.heart_rate.fill_ratio())))
    with c3:
        st.metric("Audience Attention", f"{int(session.attention.current_attention_percentage())}%")
        st.caption(f"{session.attention.attentive_count()}/{session.attention.total_count()} attentive")
    with c4:
        st.metric("Filler Words", session.speech.filler_word_count())
        st.caption(f"Stutters: {session.speech.stutter_count()} · Deviations: {session.speech.content_deviation_count()}")

    if session.speech.subtitle:
        st.markdown(f'<div class="subtitle">{session.speech.subtitle}</div>', unsafe_allow_html=True)
    render_warnings(session.active_warnings)

    b1, b2, b3, b4 = st.columns(4)
    with b1:
        if session.status in ("ready", "finished"):
            if st.button("Start Presentation", type="primary", width="stretch"):
                session.start()
                st.session_state[KEY_LAST_TICK_TS] = time.time()
                st.rerun()
        else:
            if st.button("Stop Presentation", type="primary", width="stretch"):
                advance_session()
                session.stop()
                request_nav("Report")
                st.rerun()
    with b2:
        if session.status == "speaking":
            if st.button("Pause", width="stretch"):
                advance_session()
                session.pause()
                st.rerun()
        elif session.status == "paused":
            if st.button("Resume", width="stretch"):
                session.resume()
                st.session_state[KEY_LAST_TICK_TS] = time.time()
                st.rerun()
        else:
            if st.button("Quick Test (30s)", width="stretch"):
                session.quick_test_mode()
                st.session_state[KEY_LAST_TICK_TS] = time.time()
                st.rerun()
    with b3:
        if st.button("Relaxation Break", width="stretch", disabled=session.status != "speaking"):
            session.trigger_relaxation()
    with b4:
        if st.button("Reset", width="stretch"):
            session.reset()
            st.rerun()

    with st.expander("Coaching simulation", expanded=False):
        s1, s2, s3 = st.columns(3)
        with s1:
            if st.button("Stress event (+20 BPM)", disabled=not session.is_presenting):
                session.simulate_stress_event()
        with s2:
            if st.button("Excellent content", disabled=not session.is_presenting):
                session.simulate_excellent_performance()
        with s3:
            if st.button("Went off-script", disabled=not session.is_presenting):
                session.add_content_deviation()

# =============================================================================
# REPORT tab
# =============================================================================

if nav == "Report":
    st.subheader("Performance Report")
    report = history.latest()
    if report is None:
        st.info("Finish a rehearsal to see your report.")
    else:
        categories = [DIMENSION_LABELS[d] for d in DIMENSIONS]
        values = [report.scores()[d] for d in DIMENSIONS]
        fig = go.Figure(data=go.Scatterpolar(
            r=values + [values[0]],
            theta=categories + [categories[0]],
            fill="toself",
            fillcolor="rgba(0,229,255,0.15)",
            line=dict(color="#00e5ff", width=2),
            marker=dict(size=6),
        ))
        fig.update_layout(
            polar=dict(
                bgcolor="rgba(0,0,0,0)",
                radialaxis=dict(visible=True, range=[0, 100], tickfont=dict(size=10, color="#8899aa")),
                angularaxis=dict(tickfont=dict(size=11, color="#e0e6ed")),
            ),
            showlegend=False,
            paper_bgcolor="rgba(0,0,0,0)",
            plot_bgcolor="rgba(0,0,0,0)",
            margin=dict(t=40, b=40, l=60, r=60),
            height=380,
        )
        st.plotly_chart(fig, width="stretch")

        band = score_band(report.overall_score)
        st.markdown(
            f'<div class="summary {BAND_CLASS[band]}">Overall Score: '
            f"{int(report.overall_score)}/100 ({report.grade})</div>",
            unsafe_allow_html=True,
        )
        st.caption(f"Focus next on: **{DIMENSION_LABELS[report.weakest_dimension]}**")

        cols = st.columns(len(DIMENSIONS))
        for col, d in zip(cols, DIMENSIONS):
            with col:
                st.metric(DIMENSION_LABELS[d], int(report.scores()[d]))

        overrun = report.time_overrun_seconds
        st.caption(
            f"Filler words: {report.filler_word_count} · "
            f"Content deviations: {report.content_deviation_count} · "
            f"Eye contact: {int(report.eye_contact_percentage)}% · "
            + (f"Time overrun: {int(overrun)}s · " if overrun > 0 else "Time control: good · ")
            + f"Avg heart rate: {int(report.average_heart_rate)} BPM"
        )

        st.markdown("---")
        st.markdown("### Export Your Results")
        exp1, exp2 = st.columns(2)
        with exp1:
            st.download_button(
                "Download Report (JSON)",
                data=report_to_json(report),
                file_name="podium_report.json",
                mime="application/json",
            )
        with exp2:
            csv_data = events_to_csv()
            st.download_button(
                "Download Event Transcript (CSV)",
                data=csv_data if csv_data else "No events recorded yet.",
                file_name="podium_session_transcript.csv",
                mime="text/csv",
            )

# =============================================================================
# HISTORY tab
# =============================================================================

if nav == "History":
    st.subheader("Progress History")
    reports = history.all()
    if not reports:
        st.info("No rehearsals scored yet.")
    else:
        header = ("#", "Finished", "Overall", "Grade", "Weakest")
        rows = [
            (str(i + 1), r.timestamp.strftime("%H:%M:%S"), f"{r.overall_score:.1f}", r.grade,
             DIMENSION_LABELS[r.weakest_dimension])
            for i, r in enumerate(reports)
        ]
        st.table([header] + rows)

        averages = history.dimension_averages()
        cols = st.columns(len(DIMENSIONS))
        for col, d in zip(cols, DIMENSIONS):
            with col:
                st.metric(f"Avg {DIMENSION_LABELS[d]}", averages[d])
        trend = history.overall_trend()
        if trend is not None:
            st.caption(f"Change since previous rehearsal: {trend:+.1f} points")

        st.download_button(
            "Download History (CSV)",
            data=history_to_csv(list(reports)),
            file_name="podium_history.csv",
            mime="text/csv",
        )

    with st.expander("Full Event Timeline", expanded=False):
        events = read_events()
        if events:
            for e in events[-50:]:
                st.caption(
                    f"{e.get('timestamp', '')} | {e.get('type', '')} | "
                    f"mode={e.get('mode', '')} | phase={e.get('phase', '')}"
                )
            if st.button("Clear event log"):
                clear_events()
                st.rerun()
        else:
            st.caption("No events logged yet.")

# =============================================================================
# Footer
# =============================================================================

st.markdown("---")
st.caption(f"Podium Coach • {datetime.now().strftime('%Y-%m-%d %H:%M')}")
