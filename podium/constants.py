"""
Shared constants for Podium Coach.

Single place to change paths, config defaults, scoring thresholds,
simulator tuning and session state key names.
"""

# Paths (relative to project root)
PROFILE_PATH = "profiles/default.json"
EVENTS_LOG_PATH = "logs/events.jsonl"

# Environment overrides (read through podium.utils.get_settings)
ENV_PROFILE_PATH = "PODIUM_PROFILE_PATH"
ENV_EVENTS_LOG = "PODIUM_EVENTS_LOG"
ENV_SEED = "PODIUM_SEED"

# Presentation defaults
PRESENTATION_SECONDS_DEFAULT = 300.0   # planned talk length (5 min)
QUICK_TEST_SECONDS = 30.0
AUTO_STOP_DEFAULT = False              # stop automatically at planned duration
TICK_SECONDS_DEFAULT = 0.5             # dashboard simulation step
TIMER_WARNING_RATIO = 0.75             # timer turns "warning" past 75% of plan
TIMER_CRITICAL_RATIO = 0.90            # timer turns "critical" past 90% of plan
REPORT_DELAY_SECONDS = 1.0             # "generating report" banner delay
REPORT_FINALIZE_SECONDS = 0.5

# --- Scoring engine ---
# (upper bound inclusive, score)
FLUENCY_STEPS = [(10, 100.0), (20, 85.0), (35, 70.0), (50, 55.0)]
FLUENCY_FLOOR = 40.0
CONTENT_STEPS = [(0, 100.0), (1, 90.0), (2, 75.0), (4, 60.0)]
CONTENT_FLOOR = 45.0
TIME_CONTROL_STEPS = [(0.0, 100.0), (30.0, 90.0), (60.0, 75.0), (120.0, 60.0)]
TIME_CONTROL_FLOOR = 40.0
# (upper bound exclusive, score)
HEART_RATE_STEPS = [(85.0, 100.0), (95.0, 90.0), (105.0, 75.0), (115.0, 60.0)]
HEART_RATE_FLOOR = 45.0

EYE_CONTACT_WEIGHT = 0.6
ATTENTION_WEIGHT = 0.4

WEIGHT_FLUENCY = 0.25
WEIGHT_CONTENT = 0.25
WEIGHT_INTERACTION = 0.20
WEIGHT_TIME_CONTROL = 0.15
WEIGHT_EMOTIONAL_STABILITY = 0.15

# (lower bound inclusive, grade)
GRADE_STEPS = [
    (90.0, "Excellent"),
    (80.0, "Good"),
    (70.0, "Average"),
    (60.0, "Pass"),
]
BAND_STRONG = 85.0                     # summary colour: >= strong, >= fair, else weak
BAND_FAIR = 70.0

# Dimension order doubles as the weakest-dimension tie-break priority
DIMENSIONS = ["fluency", "content", "interaction", "time_control", "emotional_stability"]
DIMENSION_LABELS = {
    "fluency": "Fluency",
    "content": "Content",
    "interaction": "Interaction",
    "time_control": "Time Control",
    "emotional_stability": "Emotional Stability",
}

# --- Metric domains & neutral placeholders ---
HEART_RATE_MIN = 60.0
HEART_RATE_MAX = 140.0
HEART_RATE_BASE = 75.0                 # resting baseline, used when no samples exist
PERCENT_MIN = 0.0
PERCENT_MAX = 100.0
NEUTRAL_EYE_CONTACT = 50.0
NEUTRAL_ATTENTION = 60.0
NEUTRAL_OVERRUN = 0.0

# --- Heart-rate simulator ---
HR_STRESS_INCREASE_RATE = 0.5
HR_RELAX_DECREASE_RATE = 0.3
HR_HIGH_THRESHOLD = 120.0              # above this the relax prompt shows
HR_ELEVATED_THRESHOLD = 100.0
HR_RELAX_SECONDS = 5.0
HR_STUTTER_STRESS = 10.0
HR_SIMULATED_STRESS = 20.0

# --- Audience attention simulator ---
ATTENTION_START = 80.0
ATTENTION_DECAY_PER_SEC = 5.0
ATTENTION_GOOD_BONUS = 10.0
ATTENTION_POOR_PENALTY = 15.0
ATTENTION_HIGH = 70.0
ATTENTION_MEDIUM = 40.0
ATTENTION_LOW = 20.0
AUDIENCE_SIZE_DEFAULT = 12

# --- Speech feedback simulator ---
SPEECH_DETECTION_INTERVAL = 2.0
FILLER_PROBABILITY = 0.25
STUTTER_PROBABILITY = 0.15
SILENCE_PROBABILITY = 0.10
GOOD_PERFORMANCE_CHANCE = 0.3
FILLERS_PER_POOR_PERFORMANCE = 3       # every Nth filler word costs attention
STUTTER_WARNING_SECONDS = 2.0
SILENCE_WARNING_SECONDS = 3.0
FILLER_WORDS = ["um", "uh", "so", "like", "you know", "basically", "er"]
SPEECH_PHRASES = [
    "Good morning everyone, today I'd like to talk about...",
    "Our research focuses mainly on...",
    "As the experimental data shows...",
    "The key innovation of this approach is...",
    "Looking ahead, we plan to...",
    "To sum up...",
    "Thank you for listening.",
]

# --- Eye-contact simulator ---
EYE_CONTACT_MIN = 40.0
EYE_CONTACT_MAX = 85.0
EYE_CONTACT_STEP = 3.0

# --- Placeholder ranges for absent sensors ---
PLACEHOLDER_FILLER_RANGE = (5, 25)
PLACEHOLDER_DEVIATION_RANGE = (0, 5)
PLACEHOLDER_HEART_RATE_RANGE = (85.0, 115.0)
PLACEHOLDER_EYE_CONTACT_RANGE = (40.0, 85.0)
PLACEHOLDER_OVERRUN_RANGE = (-30.0, 120.0)

# Session state keys
KEY_NAV = "nav"                        # sidebar radio widget key
KEY_NAV_REQUEST = "nav_request"        # section to switch to on the next rerun
KEY_SESSION = "presentation_session"
KEY_HISTORY = "evaluation_history"
KEY_PROFILE = "profile"
KEY_LAST_TICK_TS = "last_tick_ts"

# Warning banner names
WARNING_STUTTER = "stutter"
WARNING_SILENCE = "silence"
WARNING_RELAX = "relax"
WARNING_REPORT = "generating_report"
