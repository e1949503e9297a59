from __future__ import annotations

"""Countdown tick sources and the controller that binds one to an exam.

A tick source calls back once per elapsed second on the caller's own
dispatch context; nothing here spawns threads. The controller stops the
source as soon as the exam finishes or is abandoned, so no tick ever lands
on a dead session.
"""

import time
from typing import Any, Callable, Optional, Protocol

from ..app.explain import trace as xtrace
from ..content.question import QuestionRecord
from .session import AnswerOutcome, ExamSession


class TickSource(Protocol):
    def start(self, on_tick: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


class ScheduledTicker:
    """Re-arming one-shot timer for an event-loop host.

    Meant for GUI front ends such as tkinter, passing ``widget.after`` and
    ``widget.after_cancel``. The terminal CLI blocks on input and uses
    ``ElapsedTicker`` instead.
    """

    def __init__(
        self,
        schedule: Callable[[int, Callable[[], None]], Any],
        cancel: Callable[[Any], None],
        interval_ms: int = 1000,
    ) -> None:
        self._schedule = schedule
        self._cancel = cancel
        self.interval_ms = int(interval_ms)
        self._on_tick: Optional[Callable[[], None]] = None
        self._handle: Any = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self, on_tick: Callable[[], None]) -> None:
        self._on_tick = on_tick
        self._running = True
        self._arm()

    def stop(self) -> None:
        self._running = False
        if self._handle is not None:
            self._cancel(self._handle)
            self._handle = None

    def _arm(self) -> None:
        self._handle = self._schedule(self.interval_ms, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if not self._running or self._on_tick is None:
            return
        self._on_tick()
        if self._running:
            self._arm()


class ElapsedTicker:
    """Turns monotonic elapsed time into whole ticks when pumped.

    Suited to blocking front ends (terminal prompts) that cannot receive a
    timer callback while waiting for input: call ``pump()`` whenever control
    returns and every second that passed is delivered in order.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, interval_s: float = 1.0) -> None:
        self._clock = clock
        self.interval_s = float(interval_s)
        self._on_tick: Optional[Callable[[], None]] = None
        self._origin = 0.0
        self._delivered = 0
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self, on_tick: Callable[[], None]) -> None:
        self._on_tick = on_tick
        self._origin = self._clock()
        self._delivered = 0
        self._running = True

    def stop(self) -> None:
        self._running = False

    def elapsed(self) -> float:
        return self._clock() - self._origin

    def pump(self) -> int:
        """Deliver all ticks due so far; returns how many were delivered."""
        if not self._running or self._on_tick is None:
            return 0
        due = int(self.elapsed() // self.interval_s) - self._delivered
        delivered = 0
        for _ in range(max(0, due)):
            if not self._running:
                break
            self._delivered += 1
            delivered += 1
            self._on_tick()
        return delivered


class ExamController:
    def __init__(self, session: ExamSession, ticker: TickSource) -> None:
        self.session = session
        self.ticker = ticker
        self._unsubscribe = session.on_finished(self._on_finished)

    def start(self) -> None:
        self.session.start()
        if not self.session.finished:
            self.ticker.start(self.session.tick)

    def answer(self, question: QuestionRecord, answered_option_id: str) -> Optional[AnswerOutcome]:
        return self.session.submit_answer(question, answered_option_id)

    def abandon(self) -> None:
        """Stop the countdown when the exam is dismissed before it finishes."""
        self.ticker.stop()
        self._unsubscribe()
        xtrace("exam_abandoned", {"answered": self.session.answered_count, "finished": self.session.finished})

    def _on_finished(self, _session: ExamSession) -> None:
        self.ticker.stop()
