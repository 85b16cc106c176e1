"""
Presentation session controller: one rehearsal from start to report.

================================================================================
HOW THIS SCRIPT WORKS (for studying)
================================================================================

PresentationSession owns every collaborator of a rehearsal and receives them
(or builds them from a profile) up front. Nothing is discovered at runtime.

  LIFECYCLE (status):
  - "ready"    → start() → "speaking"
  - "speaking" → pause() → "paused" → resume() → "speaking"
  - "speaking" / "paused" → stop() → "finished" (report appended to history)
  - any → reset() → "ready" (a running session is stopped and evaluated first)

  FRAME LOOP:
  tick(dt) is the only thing that moves time. While speaking it advances the
  elapsed clock, steps the four simulators, samples heart rate / attention /
  eye contact into the SessionAccumulator and fires due timers (warning
  banners, end of relaxation). Paused sessions ignore ticks entirely.
  With auto_stop the session stops itself at the planned duration and tick()
  returns the report.

  EVALUATION:
  stop() records the overrun (elapsed minus planned), closes the accumulator
  and hands the frozen snapshot to podium.scoring.evaluate(). Stopping early
  is fine: whatever has been accumulated is scored.
"""

import random
from typing import Any, Literal

from podium.constants import (
    PRESENTATION_SECONDS_DEFAULT, QUICK_TEST_SECONDS, AUTO_STOP_DEFAULT,
    TIMER_WARNING_RATIO, TIMER_CRITICAL_RATIO,
    REPORT_DELAY_SECONDS, REPORT_FINALIZE_SECONDS,
    HR_RELAX_SECONDS, HR_SIMULATED_STRESS,
    WARNING_RELAX, WARNING_REPORT,
)
from podium.history import EvaluationHistory
from podium.logger import log_event
from podium.metrics import SessionAccumulator
from podium.scoring import DEFAULT_WEIGHTS, EvaluationReport, ScoringWeights, evaluate
from podium.simulators import (
    AudienceAttentionManager, EyeContactTracker,
    HeartRateMonitor, SpeechFeedbackSystem,
)
from podium.timers import TimerQueue
from podium.utils import default_profile, profile_section

SessionStatus = Literal["ready", "speaking", "paused", "finished"]
TimerBand = Literal["normal", "warning", "critical"]

_RELAX_TIMER = "relax_end"


class PresentationSession:
    def __init__(
        self,
        profile: dict[str, Any] | None = None,
        history: EvaluationHistory | None = None,
        rng: random.Random | None = None,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        heart_rate: HeartRateMonitor | None = None,
        attention: AudienceAttentionManager | None = None,
        speech: SpeechFeedbackSystem | None = None,
        eye_contact: EyeContactTracker | None = None,
    ):
        self.profile = profile if profile is not None else default_profile()
        self.history = history if history is not None else EvaluationHistory()
        self.rng = rng or random.Random()
        self.weights = weights

        self.planned_seconds = float(self.profile.get("presentation_seconds", PRESENTATION_SECONDS_DEFAULT))
        self.auto_stop = bool(self.profile.get("auto_stop", AUTO_STOP_DEFAULT))

        self.timers = TimerQueue()
        self._warnings: set[str] = set()

        self.heart_rate = heart_rate or HeartRateMonitor(self.rng, **profile_section(self.profile, "heart_rate"))
        self.attention = attention or AudienceAttentionManager(
            self.rng, **profile_section(self.profile, "attention"),
        )
        self.speech = speech or SpeechFeedbackSystem(
            self.rng,
            attention=self.attention,
            heart_rate=self.heart_rate,
            show_warning=self.show_warning,
            filler_words=self.profile.get("filler_words"),
            speech_phrases=self.profile.get("speech_phrases"),
            **profile_section(self.profile, "speech"),
        )
        self.eye_contact = eye_contact or EyeContactTracker(
            self.rng, **profile_section(self.profile, "eye_contact"),
        )

        self.accumulator = SessionAccumulator()
        self.status: SessionStatus = "ready"
        self.elapsed = 0.0
        self.last_report: EvaluationReport | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_presenting(self) -> bool:
        return self.status in ("speaking", "paused")

    def start(self) -> None:
        if self.is_presenting:
            return
        self.elapsed = 0.0
        self.accumulator = SessionAccumulator()
        self.timers.clear()
        self._warnings.clear()
        self.heart_rate.start()
        self.attention.start()
        self.speech.start(self.accumulator)
        self.eye_contact.start()
        self.status = "speaking"
        log_event(
            "SESSION_START",
            {"planned_seconds": self.planned_seconds, "profile": self.profile.get("name", "")},
            mode="SPEAKING",
        )

    def tick(self, dt: float) -> EvaluationReport | None:
        if self.status == "paused" or dt <= 0:
            return None
        if self.status == "speaking":
            self.elapsed += dt
        self.heart_rate.tick(dt)
        self.attention.tick(dt)
        self.speech.tick(dt)
        self.eye_contact.tick(dt)
        if self.status == "speaking":
            self.accumulator.sample_heart_rate(self.heart_rate.current_heart_rate())
            self.accumulator.sample_attention(self.attention.current_attention_percentage())
            self.accumulator.sample_eye_contact(self.eye_contact.eye_contact_percentage())
        self.timers.tick(dt)
        if self.auto_stop and self.status == "speaking" and self.elapsed >= self.planned_seconds:
            return self.stop()
        return None

    def stop(self) -> EvaluationReport | None:
        """End the rehearsal and score it. Returns None if nothing was running."""
        if not self.is_presenting:
            return None
        self.accumulator.record_overrun(self.overrun_seconds())
        self.heart_rate.stop()
        self.attention.stop()
        self.speech.stop()
        self.eye_contact.stop()
        self.timers.cancel(_RELAX_TIMER)
        self.status = "finished"

        metrics = self.accumulator.close()
        report = evaluate(metrics, self.weights)
        self.history.append(report)
        self.last_report = report
        self.show_warning(WARNING_REPORT, REPORT_DELAY_SECONDS + REPORT_FINALIZE_SECONDS)

        log_event("SESSION_STOP", {"elapsed_seconds": round(self.elapsed, 1)}, mode="FINISHED")
        log_event(
            "EVALUATION",
            {
                "overall_score": report.overall_score,
                "grade": report.grade,
                "weakest_dimension": report.weakest_dimension,
                "history_size": len(self.history),
            },
            mode="FINISHED",
        )
        return report

    def pause(self) -> None:
        if self.status != "speaking":
            return
        self.status = "paused"
        log_event("PAUSE", {"elapsed_seconds": round(self.elapsed, 1)}, mode="PAUSED")

    def resume(self) -> None:
        if self.status != "paused":
            return
        self.status = "speaking"
        log_event("RESUME", {"elapsed_seconds": round(self.elapsed, 1)}, mode="SPEAKING")

    def reset(self) -> EvaluationReport | None:
        report = self.stop() if self.is_presenting else None
        self.elapsed = 0.0
        self.status = "ready"
        self.timers.clear()
        self._warnings.clear()
        log_event("RESET", {}, mode="READY")
        return report

    def set_planned_duration(self, seconds: float) -> None:
        self.planned_seconds = max(0.0, float(seconds))

    def quick_test_mode(self) -> None:
        self.set_planned_duration(QUICK_TEST_SECONDS)
        self.start()

    # ------------------------------------------------------------------
    # Coaching hooks
    # ------------------------------------------------------------------

    def trigger_relaxation(self) -> None:
        if self.status != "speaking":
            return
        self.heart_rate.begin_relaxation()
        self.timers.schedule(HR_RELAX_SECONDS, self._end_relaxation, name=_RELAX_TIMER)
        log_event("RELAXATION", {"seconds": HR_RELAX_SECONDS}, mode="SPEAKING", phase="relax_start")

    def _end_relaxation(self) -> None:
        self.heart_rate.end_relaxation(resume_speaking=self.status == "speaking")
        log_event("RELAXATION", {}, mode="SPEAKING", phase="relax_end")

    def simulate_stress_event(self) -> None:
        self.heart_rate.add_stress_event(HR_SIMULATED_STRESS)

    def simulate_excellent_performance(self) -> None:
        self.speech.simulate_excellent_performance()
        self.attention.excellent_content()

    def add_content_deviation(self) -> int:
        if not self.is_presenting:
            return self.speech.content_deviation_count()
        return self.speech.add_content_deviation()

    def add_filler_word(self) -> int:
        if not self.is_presenting:
            return self.speech.filler_word_count()
        return self.speech.add_filler_word()

    # ------------------------------------------------------------------
    # Warnings & timing
    # ------------------------------------------------------------------

    def show_warning(self, name: str, seconds: float) -> None:
        self._warnings.add(name)
        self.timers.schedule(seconds, lambda: self._warnings.discard(name), name=name)

    @property
    def active_warnings(self) -> list[str]:
        warnings = set(self._warnings)
        if self.status == "speaking" and self.heart_rate.relax_prompt_visible:
            warnings.add(WARNING_RELAX)
        return sorted(warnings)

    def overrun_seconds(self) -> float:
        return self.elapsed - self.planned_seconds

    def timer_label(self) -> str:
        minutes, seconds = divmod(int(self.elapsed), 60)
        return f"{minutes:02d}:{seconds:02d}"

    def timer_band(self) -> TimerBand:
        if self.planned_seconds <= 0:
            return "critical"
        ratio = self.elapsed / self.planned_seconds
        if ratio >= TIMER_CRITICAL_RATIO:
            return "critical"
        if ratio >= TIMER_WARNING_RATIO:
            return "warning"
        return "normal"
