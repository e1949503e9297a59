from __future__ import annotations

"""CLI for RapidDent: a terminal front end over SessionManager."""

import argparse
import sys
from pathlib import Path
from typing import Any, Callable, Dict

from analytics import breakdown_by_type, export_ndjson, export_parquet, progress_frame

from .. import __version__
from ..config.config import load_config, validate_config
from ..content.question import option_id_for
from ..drills.base_drill import correct_answer_text, prompt_choice
from ..errors import ServiceError
from ..exam.session import format_clock
from ..exam.ticker import ElapsedTicker
from ..stats.stats import correct_questions, format_exam_result, format_summary, review_questions, summarize
from . import explain
from .session_manager import SessionManager


def _build_ui() -> Dict[str, Callable[..., Any]]:
    def ask(prompt: str) -> str:
        return input(prompt)

    def inform(msg: str) -> None:
        print(msg)

    return {"ask": ask, "inform": inform}


def _cmd_rapid_fire(mgr: SessionManager, ui: Dict[str, Callable[..., Any]], args: argparse.Namespace) -> int:
    drill = mgr.start_rapid_fire(review_mode=args.review)
    mode = "Review" if args.review else "Rapid Fire"
    ui["inform"](f"{mode}: {len(drill.deck)} cards.\n")
    result = drill.run(ui)
    ui["inform"](f"Session score: {result.correct}/{result.total}")
    return 0


def _cmd_scenario(mgr: SessionManager, ui: Dict[str, Callable[..., Any]], args: argparse.Namespace) -> int:
    drill = mgr.start_scenario()
    if not drill.questions:
        ui["inform"]("No questions found for this scenario.")
        return 0
    result = drill.run(ui)
    ui["inform"](f"Scenario score: {result.correct}/{len(drill.questions)}")
    return 0


def _cmd_exam(mgr: SessionManager, ui: Dict[str, Callable[..., Any]], args: argparse.Namespace) -> int:
    ask, inform = ui["ask"], ui["inform"]
    warn_s = int(mgr.cfg["exam"]["warning_threshold_s"])
    ticker = ElapsedTicker()
    controller = mgr.start_exam(ticker)
    session = controller.session
    inform(f"Mock exam: {session.total} questions, {format_clock(session.duration_s)} on the clock.\n")
    try:
        while not session.finished:
            ticker.pump()
            q = session.current_question
            if q is None:
                break
            flag = " (hurry!)" if session.remaining_seconds < warn_s else ""
            inform(f"[{format_clock(session.remaining_seconds)}{flag}] {session.answered_count + 1} of {session.total}")
            inform(q.question_text)
            choice = prompt_choice(ask, "True or false? (t/f, q to quit): ", {"t": "t", "f": "f", "q": "q"})
            if choice == "q":
                controller.abandon()
                inform("Exam abandoned.")
                return 1
            # An answer given within the allotted time counts even if the
            # clock runs out in the same second.
            if ticker.elapsed() < session.duration_s:
                controller.answer(q, option_id_for(choice == "t"))
            ticker.pump()
    except KeyboardInterrupt:
        controller.abandon()
        raise
    inform("")
    inform(format_exam_result(session.finalize()))
    return 0


def _cmd_dashboard(mgr: SessionManager, ui: Dict[str, Callable[..., Any]], args: argparse.Namespace) -> int:
    ui["inform"](format_summary(summarize(mgr.progress)))
    return 0


def _cmd_list(mgr: SessionManager, ui: Dict[str, Callable[..., Any]], args: argparse.Namespace) -> int:
    inform = ui["inform"]
    if args.cmd == "correct":
        questions = correct_questions(mgr.service, mgr.progress)
        empty = "No correct answers yet."
    else:
        questions = review_questions(mgr.service, mgr.progress)
        empty = "No questions need review."
    if not questions:
        inform(empty)
        return 0
    for i, q in enumerate(questions, start=1):
        inform(f"{i}. {q.question_text}")
        inform(f"   Answer: {correct_answer_text(q)}")
        if args.verbose and q.explanation:
            inform(f"   {q.explanation}")
    return 0


def _cmd_reset(mgr: SessionManager, ui: Dict[str, Callable[..., Any]], args: argparse.Namespace) -> int:
    if not args.yes:
        reply = ui["ask"]("Reset all progress? This cannot be undone. [y/N]: ")
        if reply.strip().lower() not in ("y", "yes"):
            ui["inform"]("Cancelled.")
            return 1
    mgr.progress.reset()
    ui["inform"]("Progress reset.")
    return 0


def _cmd_report(mgr: SessionManager, ui: Dict[str, Callable[..., Any]], args: argparse.Namespace) -> int:
    df = progress_frame(mgr.service.fetch_questions(), mgr.progress)
    ui["inform"](breakdown_by_type(df).to_string(index=False))
    if args.out:
        out = Path(args.out)
        if out.suffix.lower() == ".parquet":
            export_parquet(df, out)
        else:
            export_ndjson(df, out)
        ui["inform"](f"Wrote {len(df)} rows to {out}")
    return 0


COMMANDS: Dict[str, Callable[[SessionManager, Dict[str, Callable[..., Any]], argparse.Namespace], int]] = {
    "rapid-fire": _cmd_rapid_fire,
    "scenario": _cmd_scenario,
    "exam": _cmd_exam,
    "dashboard": _cmd_dashboard,
    "correct": _cmd_list,
    "needs-review": _cmd_list,
    "reset": _cmd_reset,
    "report": _cmd_report,
}


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="Path to YAML config")
    common.add_argument("--explain", action="store_true", help="Trace milestones to stdout")

    p = argparse.ArgumentParser(prog="rapiddent", description="Dental exam study in the terminal")
    p.add_argument("--version", action="version", version=f"rapiddent {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    rf = sub.add_parser("rapid-fire", parents=[common], help="True/false practice cards")
    rf.add_argument("--review", action="store_true", help="Only questions that need review")
    sub.add_parser("scenario", parents=[common], help="A random clinical scenario")
    sub.add_parser("exam", parents=[common], help="Timed mock exam")
    sub.add_parser("dashboard", parents=[common], help="Progress summary")
    for name in ("correct", "needs-review"):
        lp = sub.add_parser(name, parents=[common], help=f"List {name.replace('-', ' ')} questions")
        lp.add_argument("-v", "--verbose", action="store_true", help="Include explanations")
    rs = sub.add_parser("reset", parents=[common], help="Erase all progress")
    rs.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    rp = sub.add_parser("report", parents=[common], help="Progress breakdown by question type")
    rp.add_argument("--out", default=None, help="Write rows to .ndjson or .parquet")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = validate_config(load_config(args.config))
    explain.enable(args.explain or cfg["explain"])

    ui = _build_ui()
    try:
        mgr = SessionManager(cfg)
        return COMMANDS[args.cmd](mgr, ui, args)
    except ServiceError as exc:
        print(f"ERROR: {exc.message}", file=sys.stderr)
        return 2
    except (KeyboardInterrupt, EOFError):
        print("")
        return 130


if __name__ == "__main__":
    sys.exit(main())
