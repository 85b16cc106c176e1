"""
Simulated metric sources for rehearsals without real sensors.

================================================================================
HOW THIS SCRIPT WORKS (for studying)
================================================================================

Four small simulators stand in for hardware the trainer does not have. Each
one is advanced by tick(dt) from the session's frame loop and takes an
injected random.Random so a seeded run is reproducible.

  HeartRateMonitor:
  - While speaking the rate drifts upward ((U(-2, 5) + 0.5) * dt plus a slow
    sine wobble). While relaxing it drops quickly. Idle, it eases back to
    the 75 bpm baseline. Always clamped to [60, 140].
  - Above 120 bpm the relax prompt is visible (unless already relaxing).
  - average_heart_rate() is the mean of the samples taken while speaking.

  AudienceAttentionManager:
  - Attention starts at 80% and decays 5%/s while the talk runs.
  - good / poor performance, long silence and excellent content nudge it.
  - Each audience member is Attentive / Bored / OnPhone / Sleeping, drawn
    from a mix that depends on the attention tier.

  SpeechFeedbackSystem:
  - Every 2 s one detection: filler word (25%), stutter (15%), silence
    (10%) or normal speech. Each outcome feeds back into the attention and
    heart-rate simulators and, for counted events, the SessionAccumulator.

  EyeContactTracker:
  - Bounded random walk in [40, 85] %.

Collaborators are passed in; nothing is looked up globally.
"""

import math
import random
from typing import Callable, Literal

import numpy as np

from podium.constants import (
    HEART_RATE_MIN, HEART_RATE_MAX, HEART_RATE_BASE,
    HR_STRESS_INCREASE_RATE, HR_RELAX_DECREASE_RATE,
    HR_HIGH_THRESHOLD, HR_ELEVATED_THRESHOLD, HR_STUTTER_STRESS,
    ATTENTION_START, ATTENTION_DECAY_PER_SEC,
    ATTENTION_GOOD_BONUS, ATTENTION_POOR_PENALTY,
    ATTENTION_HIGH, ATTENTION_MEDIUM, ATTENTION_LOW,
    AUDIENCE_SIZE_DEFAULT, PERCENT_MIN, PERCENT_MAX,
    SPEECH_DETECTION_INTERVAL, FILLER_PROBABILITY,
    STUTTER_PROBABILITY, SILENCE_PROBABILITY,
    GOOD_PERFORMANCE_CHANCE, FILLERS_PER_POOR_PERFORMANCE,
    STUTTER_WARNING_SECONDS, SILENCE_WARNING_SECONDS,
    FILLER_WORDS, SPEECH_PHRASES,
    EYE_CONTACT_MIN, EYE_CONTACT_MAX, EYE_CONTACT_STEP,
    WARNING_STUTTER, WARNING_SILENCE,
)
from podium.logger import log_event
from podium.metrics import SessionAccumulator, clamp

AudienceState = Literal["Attentive", "Bored", "OnPhone", "Sleeping"]
HeartRateBand = Literal["normal", "elevated", "high"]
WarningHook = Callable[[str, float], None]

# (cumulative threshold, state) per attention tier
_MEDIUM_MIX: list[tuple[float, AudienceState]] = [(0.6, "Attentive"), (0.9, "Bored"), (1.0, "OnPhone")]
_LOW_MIX: list[tuple[float, AudienceState]] = [
    (0.3, "Attentive"), (0.5, "Bored"), (0.8, "OnPhone"), (1.0, "Sleeping"),
]
_VERY_LOW_MIX: list[tuple[float, AudienceState]] = [(0.5, "Sleeping"), (0.9, "OnPhone"), (1.0, "Bored")]


class HeartRateMonitor:
    """Speaker heart-rate simulation with stress events and relaxation."""

    def __init__(
        self,
        rng: random.Random,
        base_rate: float = HEART_RATE_BASE,
        min_rate: float = HEART_RATE_MIN,
        max_rate: float = HEART_RATE_MAX,
        stress_increase_rate: float = HR_STRESS_INCREASE_RATE,
        relax_decrease_rate: float = HR_RELAX_DECREASE_RATE,
        high_threshold: float = HR_HIGH_THRESHOLD,
    ):
        self.rng = rng
        self.base_rate = base_rate
        self.min_rate = min_rate
        self.max_rate = max_rate
        self.stress_increase_rate = stress_increase_rate
        self.relax_decrease_rate = relax_decrease_rate
        self.high_threshold = high_threshold

        self.current = base_rate
        self.speaking = False
        self.relaxing = False
        self._clock = 0.0
        self._samples: list[float] = []

    def start(self) -> None:
        self.speaking = True
        self.relaxing = False
        self._samples = []

    def stop(self) -> None:
        self.speaking = False
        self.relaxing = False

    def begin_relaxation(self) -> None:
        self.relaxing = True
        self.speaking = False

    def end_relaxation(self, resume_speaking: bool = True) -> None:
        self.relaxing = False
        self.speaking = resume_speaking

    def tick(self, dt: float) -> float:
        self._clock += dt
        if self.speaking:
            drift = self.rng.uniform(-2.0, 5.0) + self.stress_increase_rate
            self.current += drift * dt
            self.current += math.sin(self._clock * 0.5) * 0.5
        elif self.relaxing:
            self.current -= self.relax_decrease_rate * 10.0 * dt
        else:
            self.current += (self.base_rate - self.current) * min(1.0, dt * 0.5)
        self.current = clamp(self.current, self.min_rate, self.max_rate)
        if self.speaking:
            self._samples.append(self.current)
        return self.current

    def add_stress_event(self, amount: float) -> float:
        self.current = clamp(self.current + amount, self.min_rate, self.max_rate)
        log_event("STRESS_EVENT", {"amount": amount, "bpm": round(self.current)})
        return self.current

    @property
    def relax_prompt_visible(self) -> bool:
        return self.current > self.high_threshold and not self.relaxing

    def band(self) -> HeartRateBand:
        if self.current > self.high_threshold:
            return "high"
        if self.current > HR_ELEVATED_THRESHOLD:
            return "elevated"
        return "normal"

    def fill_ratio(self) -> float:
        return (self.current - self.min_rate) / (self.max_rate - self.min_rate)

    def current_heart_rate(self) -> float:
        return self.current

    def average_heart_rate(self) -> float:
        if not self._samples:
            return (self.current + self.base_rate) / 2.0
        return float(np.mean(self._samples))


class AudienceAttentionManager:
    """Audience attention level plus a per-member state for display."""

    def __init__(
        self,
        rng: random.Random,
        audience_size: int = AUDIENCE_SIZE_DEFAULT,
        start_attention: float = ATTENTION_START,
        decay_rate: float = ATTENTION_DECAY_PER_SEC,
        good_bonus: float = ATTENTION_GOOD_BONUS,
        poor_penalty: float = ATTENTION_POOR_PENALTY,
    ):
        self.rng = rng
        self.start_attention = start_attention
        self.decay_rate = decay_rate
        self.good_bonus = good_bonus
        self.poor_penalty = poor_penalty

        self.attention = start_attention
        self.active = False
        self.members: list[AudienceState] = ["Attentive"] * max(0, audience_size)

    def start(self) -> None:
        self.active = True
        self.attention = self.start_attention
        self.members = ["Attentive"] * len(self.members)

    def stop(self) -> None:
        self.active = False

    def tick(self, dt: float) -> float:
        if not self.active:
            return self.attention
        self._nudge(-self.decay_rate * dt)
        self._update_members()
        return self.attention

    def _nudge(self, delta: float) -> None:
        self.attention = clamp(self.attention + delta, PERCENT_MIN, PERCENT_MAX)

    def _draw(self, mix: list[tuple[float, AudienceState]]) -> AudienceState:
        r = self.rng.random()
        for threshold, state in mix:
            if r < threshold:
                return state
        return mix[-1][1]

    def _update_members(self) -> None:
        if self.attention >= ATTENTION_HIGH:
            self.members = ["Attentive"] * len(self.members)
            return
        if self.attention >= ATTENTION_MEDIUM:
            mix = _MEDIUM_MIX
        elif self.attention >= ATTENTION_LOW:
            mix = _LOW_MIX
        else:
            mix = _VERY_LOW_MIX
        self.members = [self._draw(mix) for _ in self.members]

    def good_performance(self) -> None:
        self._nudge(self.good_bonus)

    def poor_performance(self) -> None:
        self._nudge(-self.poor_penalty)

    def long_silence(self) -> None:
        self._nudge(-self.poor_penalty * 2.0)

    def excellent_content(self) -> None:
        self._nudge(self.good_bonus * 2.0)

    def current_attention_percentage(self) -> float:
        return self.attention

    def attentive_count(self) -> int:
        return sum(1 for m in self.members if m == "Attentive")

    def total_count(self) -> int:
        return len(self.members)


class SpeechFeedbackSystem:
    """Simulated speech detector: filler words, stutters, silences, captions."""

    def __init__(
        self,
        rng: random.Random,
        attention: AudienceAttentionManager | None = None,
        heart_rate: HeartRateMonitor | None = None,
        show_warning: WarningHook | None = None,
        detection_interval: float = SPEECH_DETECTION_INTERVAL,
        filler_probability: float = FILLER_PROBABILITY,
        stutter_probability: float = STUTTER_PROBABILITY,
        silence_probability: float = SILENCE_PROBABILITY,
        filler_words: list[str] | None = None,
        speech_phrases: list[str] | None = None,
    ):
        self.rng = rng
        self.attention = attention
        self.heart_rate = heart_rate
        self.show_warning = show_warning
        self.detection_interval = detection_interval
        self.filler_probability = filler_probability
        self.stutter_probability = stutter_probability
        self.silence_probability = silence_probability
        self.filler_words = list(filler_words or FILLER_WORDS)
        self.speech_phrases = list(speech_phrases or SPEECH_PHRASES)

        self.accumulator: SessionAccumulator | None = None
        self.active = False
        self.subtitle = ""
        self._since_detection = 0.0
        self._phrase_index = 0
        self._filler_words = 0
        self._stutters = 0
        self._content_deviations = 0

    def start(self, accumulator: SessionAccumulator | None = None) -> None:
        self.accumulator = accumulator
        self.active = True
        self.subtitle = "Get ready to begin..."
        self._since_detection = 0.0
        self._phrase_index = 0
        self._filler_words = 0
        self._stutters = 0
        self._content_deviations = 0

    def stop(self) -> None:
        self.active = False
        self.subtitle = ""

    def tick(self, dt: float) -> str | None:
        """Advance; returns the detection outcome when one ran this tick."""
        if not self.active:
            return None
        self._since_detection += dt
        if self._since_detection < self.detection_interval:
            return None
        self._since_detection = 0.0
        return self.perform_detection()

    def perform_detection(self) -> str:
        r = self.rng.random()
        if r < self.filler_probability:
            self.detect_filler_word()
            return "filler"
        if r < self.filler_probability + self.stutter_probability:
            self.detect_stutter()
            return "stutter"
        if r < self.filler_probability + self.stutter_probability + self.silence_probability:
            self.detect_silence()
            return "silence"
        self.normal_speech()
        return "normal"

    def detect_filler_word(self) -> None:
        filler = self.rng.choice(self.filler_words)
        count = self.add_filler_word()
        self.subtitle = f"{filler}..."
        if self.attention is not None and count % FILLERS_PER_POOR_PERFORMANCE == 0:
            self.attention.poor_performance()
        log_event("FILLER_WORD", {"filler": filler, "count": count}, mode="SPEAKING")

    def detect_stutter(self) -> None:
        if self.accumulator is not None:
            self.accumulator.record_stutter()
        self._stutters += 1
        self.subtitle = "I- I- I..."
        if self.show_warning is not None:
            self.show_warning(WARNING_STUTTER, STUTTER_WARNING_SECONDS)
        if self.attention is not None:
            self.attention.poor_performance()
        if self.heart_rate is not None:
            self.heart_rate.add_stress_event(HR_STUTTER_STRESS)
        log_event("STUTTER", {"count": self._stutters}, mode="SPEAKING")

    def detect_silence(self) -> None:
        self.subtitle = "[long silence...]"
        if self.show_warning is not None:
            self.show_warning(WARNING_SILENCE, SILENCE_WARNING_SECONDS)
        if self.attention is not None:
            self.attention.long_silence()
        log_event("SILENCE", {}, mode="SPEAKING")

    def normal_speech(self) -> None:
        if self.speech_phrases:
            self.subtitle = self.speech_phrases[self._phrase_index]
            self._phrase_index = (self._phrase_index + 1) % len(self.speech_phrases)
        if self.attention is not None and self.rng.random() < GOOD_PERFORMANCE_CHANCE:
            self.attention.good_performance()

    def simulate_excellent_performance(self) -> None:
        if self.attention is not None:
            self.attention.excellent_content()
        self.normal_speech()

    def add_filler_word(self) -> int:
        if self.accumulator is not None:
            self.accumulator.record_filler_word()
        self._filler_words += 1
        return self._filler_words

    def add_content_deviation(self) -> int:
        if self.accumulator is not None:
            self.accumulator.record_content_deviation()
        self._content_deviations += 1
        log_event("CONTENT_DEVIATION", {"count": self._content_deviations}, mode="SPEAKING")
        return self._content_deviations

    def filler_word_count(self) -> int:
        return self._filler_words

    def stutter_count(self) -> int:
        return self._stutters

    def content_deviation_count(self) -> int:
        return self._content_deviations


class EyeContactTracker:
    """Bounded random walk standing in for a gaze tracker."""

    def __init__(
        self,
        rng: random.Random,
        low: float = EYE_CONTACT_MIN,
        high: float = EYE_CONTACT_MAX,
        step: float = EYE_CONTACT_STEP,
    ):
        self.rng = rng
        self.low = low
        self.high = high
        self.step = step
        self.value = (low + high) / 2.0
        self.active = False

    def start(self) -> None:
        self.active = True
        self.value = self.rng.uniform(self.low, self.high)

    def stop(self) -> None:
        self.active = False

    def tick(self, dt: float) -> float:
        if self.active:
            self.value = clamp(self.value + self.rng.uniform(-self.step, self.step), self.low, self.high)
        return self.value

    def eye_contact_percentage(self) -> float:
        return self.value
