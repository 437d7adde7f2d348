import asyncio

from passgauge.backends import BackendChoice, StrengthBackend
from passgauge.dispatcher import StrengthDispatcher
from passgauge.pipeline import StrengthPipeline
from passgauge.strength import INITIAL_RESULT, PasswordStrength


class SlowBackend(StrengthBackend):
    """Fake backend with per-password delays (seconds) and scores."""

    name = "slow"

    def __init__(self, scores=None, delays=None):
        super().__init__()
        self.scores = scores or {}
        self.delays = delays or {}
        self.calls = []

    async def raw_score(self, password):
        self.calls.append(password)
        await asyncio.sleep(self.delays.get(password, 0))
        return self.scores.get(password, 2)


def make_pipeline(debounce, **backends):
    mapping = {BackendChoice[name]: b for name, b in backends.items()}
    dispatcher = StrengthDispatcher(mapping, selected=next(iter(mapping)))
    applied = []
    pipeline = StrengthPipeline(dispatcher, debounce=debounce, on_result=applied.append)
    return pipeline, applied


def test_burst_of_input_evaluates_only_last_value():
    async def scenario():
        backend = SlowBackend()
        pipeline, applied = make_pipeline(0.05, NATIVE=backend)
        pipeline.submit("a")
        pipeline.submit("ab")
        last = pipeline.submit("abc")
        await last
        pipeline.close()
        return backend.calls, applied

    calls, applied = asyncio.run(scenario())
    assert calls == ["abc"]
    assert len(applied) == 1

def test_nothing_evaluated_before_quiet_period():
    async def scenario():
        backend = SlowBackend()
        pipeline, applied = make_pipeline(0.2, NATIVE=backend)
        pipeline.submit("abc")
        await asyncio.sleep(0.05)
        seen = list(backend.calls)
        pipeline.close()
        return seen, pipeline.result

    seen, result = asyncio.run(scenario())
    assert seen == []
    assert result == INITIAL_RESULT

def test_backend_switch_bypasses_debounce():
    async def scenario():
        native = SlowBackend({"hunter2": 1})
        js = SlowBackend({"hunter2": 3})
        pipeline, applied = make_pipeline(10.0, NATIVE=native, JS_ENGINE=js)
        pipeline.submit("hunter2")
        task = pipeline.select_backend(BackendChoice.JS_ENGINE)
        await asyncio.wait_for(task, 1.0)
        # the cancelled debounce timer never fires for the old backend
        await asyncio.sleep(0.05)
        pipeline.close()
        return native.calls, js.calls, pipeline

    native_calls, js_calls, pipeline = asyncio.run(scenario())
    assert native_calls == []
    assert js_calls == ["hunter2"]
    assert pipeline.selected is BackendChoice.JS_ENGINE
    assert pipeline.result.strength is PasswordStrength.SAFELY_UNGUESSABLE

def test_stale_result_does_not_overwrite_newer():
    async def scenario():
        backend = SlowBackend(scores={"abc": 1, "abcd": 4}, delays={"abc": 0.3, "abcd": 0.01})
        pipeline, applied = make_pipeline(0.0, NATIVE=backend)
        older = pipeline.submit("abc")
        await asyncio.sleep(0.05)  # "abc" is now in flight
        newer = pipeline.submit("abcd")
        await newer
        await older
        pipeline.close()
        return backend.calls, applied, pipeline.result

    calls, applied, result = asyncio.run(scenario())
    assert calls == ["abc", "abcd"]
    assert [r.strength for r in applied] == [PasswordStrength.VERY_UNGUESSABLE]
    assert result.strength is PasswordStrength.VERY_UNGUESSABLE

def test_blank_input_rates_too_guessable():
    async def scenario():
        backend = SlowBackend({"x": 4})
        pipeline, applied = make_pipeline(0.0, NATIVE=backend)
        await pipeline.submit("x")
        await pipeline.submit("   ")
        pipeline.close()
        return backend.calls, applied

    calls, applied = asyncio.run(scenario())
    assert calls == ["x"]
    assert applied[-1].strength is PasswordStrength.TOO_GUESSABLE

def test_failing_listener_does_not_stop_others():
    async def scenario():
        pipeline, applied = make_pipeline(0.0, NATIVE=SlowBackend({"x": 3}))

        def broken(result):
            raise RuntimeError("listener bug")

        pipeline.on_result(broken)
        late = []
        pipeline.on_result(late.append)
        await pipeline.evaluate_now()
        pipeline.close()
        return applied, late

    applied, late = asyncio.run(scenario())
    assert len(applied) == len(late) == 1

def test_close_cancels_pending_and_is_idempotent():
    async def scenario():
        backend = SlowBackend()
        pipeline, applied = make_pipeline(0.05, NATIVE=backend)
        pending = pipeline.submit("abc")
        pipeline.close()
        pipeline.close()
        await asyncio.sleep(0.1)
        return backend, pending, pipeline.submit("more")

    backend, pending, after_close = asyncio.run(scenario())
    assert pending.cancelled()
    assert backend.calls == []
    assert backend.closed
    assert after_close is None

def test_backend_switch_supersedes_inflight_evaluation():
    async def scenario():
        native = SlowBackend({"hunter2": 1}, delays={"hunter2": 0.3})
        js = SlowBackend({"hunter2": 4})
        pipeline, applied = make_pipeline(0.0, NATIVE=native, JS_ENGINE=js)
        old = pipeline.submit("hunter2")
        await asyncio.sleep(0.05)  # native evaluation is in flight
        await pipeline.select_backend(BackendChoice.JS_ENGINE)
        await old
        pipeline.close()
        return native.calls, js.calls, applied, pipeline.result

    native_calls, js_calls, applied, result = asyncio.run(scenario())
    assert native_calls == js_calls == ["hunter2"]
    assert [r.strength for r in applied] == [PasswordStrength.VERY_UNGUESSABLE]
    assert result.strength is PasswordStrength.VERY_UNGUESSABLE
