"""
Podium Coach backend package.

- constants: paths, config defaults, scoring thresholds, simulator tuning, session state keys
- metrics: SessionMetrics snapshot and SessionAccumulator (per-session metric collection)
- scoring: five-dimension rubric, weighted overall score, grade, weakest dimension, exports
- history: append-only EvaluationHistory with per-dimension averages and trend
- sources: collaborator protocols, neutral-default collector, placeholder readings
- simulators: heart rate, audience attention, speech feedback, eye contact
- timers: cooperative TimerQueue for warning banners and relaxation
- session: PresentationSession controller (start / tick / pause / stop / reset)
- state: Streamlit session-state wiring for the dashboard
- logger: log_event, read_events for logs/events.jsonl
- utils: load_profile, get_settings
"""
