# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Dispatch engine: a fixed-size worker pool that drains a word source.

Every word pulled yields exactly one outcome. Results and ProbeErrors are
published on two unbounded queues, so a slow consumer never blocks a
worker; consumers iterate `results()` and `errors()` until the engine
closes them once all workers have finished (or cancellation fired).
"""

from __future__ import annotations

import logging
import queue
import sys
import threading
from collections.abc import Iterator
from enum import Enum
from typing import IO, Any

from ..config import Options
from ..models import Outcome, ProbeError, Result
from ..strategies.base import Strategy
from ..wordlist import WordSource
from .progress import Progress

logger = logging.getLogger(__name__)

_CLOSED = object()


class EngineState(str, Enum):
    CREATED = "CREATED"
    RUNNING = "RUNNING"
    DRAINING = "DRAINING"
    STOPPED = "STOPPED"


def _drain(channel: queue.Queue) -> Iterator[Any]:
    while True:
        item = channel.get()
        if item is _CLOSED:
            return
        yield item


class Engine:
    """Runs `strategy.process` once per word on `options.threads` worker threads."""

    def __init__(
        self,
        options: Options,
        strategy: Strategy,
        words: WordSource,
        *,
        cancel_event: threading.Event | None = None,
        stream: IO[str] | None = None,
    ):
        self.options = options
        self.strategy = strategy
        self.words = words
        self.cancel_event = cancel_event or threading.Event()
        self.progress = Progress(words.total)
        self._stream = stream
        self._results: queue.Queue = queue.Queue()
        self._errors: queue.Queue = queue.Queue()
        self._state = EngineState.CREATED
        self._state_lock = threading.Lock()
        self._display_lock = threading.Lock()
        self._progress_width = 0

    @property
    def state(self) -> EngineState:
        with self._state_lock:
            return self._state

    def results(self) -> Iterator[Result]:
        return _drain(self._results)

    def errors(self) -> Iterator[ProbeError]:
        return _drain(self._errors)

    def cancel(self) -> None:
        self.cancel_event.set()

    def config_string(self) -> str:
        return self.strategy.config_string()

    def start(self) -> None:
        """
        Run to completion (or cancellation) and close both channels.

        Only setup failures raise (SetupError from `strategy.setup()`); probe
        failures are published as ProbeErrors.
        """
        with self._state_lock:
            if self._state is not EngineState.CREATED:
                raise RuntimeError("engine can only be started once")
            self._state = EngineState.RUNNING

        try:
            setup = getattr(self.strategy, "setup", None)
            if callable(setup):
                setup()

            workers = [
                threading.Thread(target=self._worker, name=f"wordbuster-worker-{index}", daemon=True)
                for index in range(self.options.threads)
            ]
            logger.debug("Starting %d workers for %d words", len(workers), self.progress.total)
            for worker in workers:
                worker.start()
            for worker in workers:
                worker.join()
        finally:
            self._close()

    def _worker(self) -> None:
        while not self.cancel_event.is_set():
            word = self.words.next_word()
            if word is None:
                self._set_state(EngineState.DRAINING)
                break
            outcome = self._process(word)
            if isinstance(outcome, Result):
                self._results.put(outcome)
            else:
                self._errors.put(outcome)
            self.progress.increment()
        logger.debug("%s finished", threading.current_thread().name)

    def _process(self, word: str) -> Outcome:
        try:
            outcome = self.strategy.process(word)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Strategy %s failed on %r: %s", self.strategy.name, word, exc)
            return ProbeError.from_exception(word, exc)
        if isinstance(outcome, (Result, ProbeError)):
            return outcome
        return ProbeError(word=word, message=f"strategy {self.strategy.name} returned no outcome")

    def _set_state(self, state: EngineState) -> None:
        with self._state_lock:
            if self._state is EngineState.RUNNING:
                self._state = state

    def _close(self) -> None:
        with self._state_lock:
            if self._state is EngineState.STOPPED:
                return
            self._state = EngineState.STOPPED
        self._results.put(_CLOSED)
        self._errors.put(_CLOSED)
        logger.debug("Engine stopped after %d / %d words", *self.progress.snapshot())

    # Terminal progress line; both hooks are no-ops in quiet/no-progress mode.

    def _progress_enabled(self) -> bool:
        return not (self.options.quiet or self.options.no_progress)

    def print_progress(self) -> None:
        if not self._progress_enabled():
            return
        line = self.progress.render()
        with self._display_lock:
            stream = self._stream or sys.stderr
            stream.write(f"\r{line}")
            stream.flush()
            self._progress_width = len(line)

    def clear_progress(self) -> None:
        if not self._progress_enabled():
            return
        with self._display_lock:
            if not self._progress_width:
                return
            stream = self._stream or sys.stderr
            stream.write("\r" + " " * self._progress_width + "\r")
            stream.flush()
            self._progress_width = 0


__all__ = ["Engine", "EngineState"]
