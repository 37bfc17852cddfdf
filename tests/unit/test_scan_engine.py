# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import threading
import time

import pytest

from wordbuster.config import Options
from wordbuster.errors import SetupError
from wordbuster.models import ProbeError, Result
from wordbuster.scan import Engine, EngineState, Progress
from wordbuster.wordlist import StaticWordSource


class RecordingStrategy:
    """Echoes each word back so outcomes can be matched to their word."""

    name = "recording"

    def __init__(self, fail_every: int = 0, delay: float = 0.0):
        self.fail_every = fail_every
        self.delay = delay
        self.seen: list[str] = []
        self.progress_seen: list[int] = []
        self.engine: Engine | None = None
        self._lock = threading.Lock()

    def process(self, word: str):
        with self._lock:
            self.seen.append(word)
            if self.engine is not None:
                self.progress_seen.append(self.engine.progress.completed)
        if self.delay:
            time.sleep(self.delay)
        index = int(word.split("-")[1])
        if self.fail_every and index % self.fail_every == 0:
            return ProbeError(word=word, message=f"failed {word}")
        return Result(word=word, status_code=200, extra={"echo": word})

    def result_to_string(self, result: Result) -> str:
        return result.word

    def config_string(self) -> str:
        return "[+] Mode: recording"


def collect(engine: Engine, timeout: float = 10.0):
    """Drain both channels concurrently, the way the CLI does, while the engine runs."""
    results: list[Result] = []
    errors: list[ProbeError] = []
    consumers = [
        threading.Thread(target=lambda: results.extend(engine.results())),
        threading.Thread(target=lambda: errors.extend(engine.errors())),
    ]
    for consumer in consumers:
        consumer.start()
    raised = None
    try:
        engine.start()
    except Exception as exc:  # noqa: BLE001
        raised = exc
    for consumer in consumers:
        consumer.join(timeout)
        assert not consumer.is_alive(), "channel was never closed"
    return results, errors, raised


def make_words(count: int) -> list[str]:
    return [f"word-{i}" for i in range(count)]


@pytest.mark.parametrize("threads", [1, 3, 7, 25])
def test_every_word_yields_exactly_one_outcome(threads):
    words = make_words(25)
    strategy = RecordingStrategy(fail_every=4)
    engine = Engine(Options(target="t", threads=threads), strategy, StaticWordSource(words))

    results, errors, raised = collect(engine)

    assert raised is None
    emitted = [r.word for r in results] + [e.word for e in errors]
    assert sorted(emitted) == sorted(words)
    assert len(emitted) == len(set(emitted))
    assert sorted(strategy.seen) == sorted(words)
    assert all(r.extra["echo"] == r.word for r in results)
    assert all(e.message == f"failed {e.word}" for e in errors)
    assert len(errors) == len([w for w in words if int(w.split("-")[1]) % 4 == 0])
    assert engine.progress.snapshot() == (25, 25)
    assert engine.state is EngineState.STOPPED


def test_progress_is_monotonic_and_reaches_total():
    strategy = RecordingStrategy(delay=0.001)
    engine = Engine(Options(target="t", threads=4), strategy, StaticWordSource(make_words(40)))
    strategy.engine = engine

    collect(engine)

    assert strategy.progress_seen == sorted(strategy.progress_seen)
    assert engine.progress.completed == engine.progress.total == 40


def test_cancellation_stops_workers_and_closes_channels():
    cancel = threading.Event()

    class CancellingStrategy(RecordingStrategy):
        def process(self, word):
            outcome = super().process(word)
            if len(self.seen) >= 5:
                cancel.set()
            return outcome

    strategy = CancellingStrategy(delay=0.01)
    engine = Engine(Options(target="t", threads=2), strategy, StaticWordSource(make_words(1000)), cancel_event=cancel)

    results, errors, raised = collect(engine)

    assert raised is None
    completed, total = engine.progress.snapshot()
    assert completed < total
    assert len(results) + len(errors) == completed
    assert engine.state is EngineState.STOPPED


def test_cancel_before_start_processes_nothing():
    strategy = RecordingStrategy()
    engine = Engine(Options(target="t", threads=3), strategy, StaticWordSource(make_words(10)))
    engine.cancel()

    results, errors, _ = collect(engine)

    assert results == errors == []
    assert strategy.seen == []


def test_setup_error_propagates_and_still_closes_channels():
    class Unreachable(RecordingStrategy):
        def setup(self):
            raise SetupError("unable to connect")

    strategy = Unreachable()
    engine = Engine(Options(target="t"), strategy, StaticWordSource(make_words(3)))

    results, errors, raised = collect(engine)

    assert isinstance(raised, SetupError)
    assert results == errors == []
    assert strategy.seen == []
    assert engine.state is EngineState.STOPPED


def test_strategy_exceptions_and_empty_returns_become_probe_errors():
    class Flaky(RecordingStrategy):
        def process(self, word):
            if word == "word-0":
                raise RuntimeError("kaboom")
            if word == "word-1":
                return None
            return super().process(word)

    engine = Engine(Options(target="t", threads=2), Flaky(), StaticWordSource(make_words(4)))

    results, errors, _ = collect(engine)

    by_word = {error.word: error for error in errors}
    assert by_word["word-0"].message == "kaboom"
    assert "returned no outcome" in by_word["word-1"].message
    assert sorted(r.word for r in results) == ["word-2", "word-3"]


def test_engine_starts_only_once():
    engine = Engine(Options(target="t"), RecordingStrategy(), StaticWordSource([]))
    collect(engine)
    with pytest.raises(RuntimeError):
        engine.start()


def test_outcomes_do_not_block_without_consumers():
    engine = Engine(Options(target="t", threads=4), RecordingStrategy(), StaticWordSource(make_words(200)))
    engine.start()
    assert len(list(engine.results())) == 200
    assert list(engine.errors()) == []


def test_progress_line_and_clear_hook():
    stream = io.StringIO()
    engine = Engine(Options(target="t"), RecordingStrategy(), StaticWordSource(make_words(3)), stream=stream)
    engine.print_progress()
    assert stream.getvalue() == "\rProgress: 0 / 3 (0.00%)"
    engine.clear_progress()
    assert stream.getvalue().endswith("\r" + " " * len("Progress: 0 / 3 (0.00%)") + "\r")


def test_progress_hooks_are_silent_when_quiet():
    stream = io.StringIO()
    engine = Engine(Options(target="t", quiet=True), RecordingStrategy(), StaticWordSource(make_words(3)), stream=stream)
    engine.print_progress()
    engine.clear_progress()
    assert stream.getvalue() == ""


def test_progress_render():
    progress = Progress(total=3)
    assert progress.increment() == 1
    assert progress.snapshot() == (1, 3)
    assert progress.render() == "Progress: 1 / 3 (33.33%)"
    assert Progress(total=0).percent() == 0.0


def test_config_string_is_delegated():
    engine = Engine(Options(target="t"), RecordingStrategy(), StaticWordSource([]))
    assert engine.config_string() == "[+] Mode: recording"


def test_results_are_read_only_values_but_not_hashable():
    result = Result(word="a", status_code=200, extra={"location": "/b"})
    assert result == Result(word="a", status_code=200, extra={"location": "/b"})
    with pytest.raises(TypeError):
        result.extra["location"] = "/c"
    with pytest.raises(TypeError):
        hash(result)
    assert hash(ProbeError(word="a", message="boom")) == hash(ProbeError(word="a", message="boom"))
