"""
Headless Rehearsal Simulator for Podium Coach
=============================================

HOW TO USE:
  python tools/simulate_sessions.py --sessions 5 --seconds 240 --seed 7
  python tools/simulate_sessions.py --profile profiles/quick_test.json --csv out/history.csv
  python tools/simulate_sessions.py --placeholder --sessions 3

HOW IT WORKS:
  - Builds one PresentationSession per run from the chosen profile, seeded
    so a given --seed always produces the same numbers.
  - Ticks it in fixed steps (--dt) for --seconds of simulated speaking time,
    then stops it (or lets auto_stop end it) and prints the report.
  - --placeholder skips the simulation and scores random stand-in readings
    collected through podium.sources, the same numbers the trainer used
    when no sensors were attached.
  - All reports go into one EvaluationHistory; --csv writes it out.
"""

import argparse
import random
from pathlib import Path

from podium.constants import DIMENSIONS, DIMENSION_LABELS, PROFILE_PATH
from podium.history import EvaluationHistory
from podium.scoring import EvaluationReport, evaluate, history_to_csv
from podium.session import PresentationSession
from podium.sources import PlaceholderSource, collect_metrics
from podium.utils import load_profile_safe


def run_simulated(profile: dict, history: EvaluationHistory, rng: random.Random,
                  seconds: float, dt: float) -> EvaluationReport:
    session = PresentationSession(profile=profile, history=history, rng=rng)
    session.start()
    t = 0.0
    while t < seconds:
        report = session.tick(dt)
        if report is not None:
            return report
        t += dt
    return session.stop()


def run_placeholder(history: EvaluationHistory, rng: random.Random) -> EvaluationReport:
    placeholder = PlaceholderSource(rng)
    metrics = collect_metrics(
        attention=placeholder, heart_rate=placeholder, speech=placeholder,
        timing=placeholder, eye_contact=placeholder,
    )
    report = evaluate(metrics)
    history.append(report)
    return report


def print_report(index: int, report: EvaluationReport) -> None:
    print(f"\n--- Session {index} ---")
    print(f"Overall: {report.overall_score:.1f} ({report.grade})  "
          f"weakest: {DIMENSION_LABELS[report.weakest_dimension]}")
    for d in DIMENSIONS:
        print(f"  {DIMENSION_LABELS[d]:<20} {report.scores()[d]:6.1f}")
    print(f"  filler={report.filler_word_count} deviations={report.content_deviation_count} "
          f"eye={report.eye_contact_percentage:.0f}% overrun={report.time_overrun_seconds:.0f}s "
          f"hr={report.average_heart_rate:.0f}bpm")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run simulated rehearsals and score them.")
    parser.add_argument("--profile", default=PROFILE_PATH)
    parser.add_argument("--sessions", type=int, default=3)
    parser.add_argument("--seconds", type=float, default=None,
                        help="speaking time per session (default: profile's planned length)")
    parser.add_argument("--dt", type=float, default=0.5)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--placeholder", action="store_true")
    parser.add_argument("--csv", type=Path, default=None)
    args = parser.parse_args()

    profile = load_profile_safe(args.profile)
    rng = random.Random(args.seed)
    history = EvaluationHistory()
    seconds = args.seconds if args.seconds is not None else float(profile.get("presentation_seconds", 300))

    for i in range(1, max(0, args.sessions) + 1):
        if args.placeholder:
            report = run_placeholder(history, rng)
        else:
            report = run_simulated(profile, history, rng, seconds, args.dt)
        print_report(i, report)

    if len(history):
        print(f"\n{'=' * 40}")
        print(f"Sessions: {len(history)}")
        for d, avg in history.dimension_averages().items():
            print(f"  avg {DIMENSION_LABELS[d]:<20} {avg:6.1f}")
        trend = history.overall_trend()
        if trend is not None:
            print(f"  last change: {trend:+.1f}")

    if args.csv is not None:
        args.csv.parent.mkdir(parents=True, exist_ok=True)
        args.csv.write_text(history_to_csv(list(history.all())), encoding="utf-8")
        print(f"\nHistory saved to: {args.csv}")


if __name__ == "__main__":
    main()
