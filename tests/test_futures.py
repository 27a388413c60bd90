"""
Tests for future chaining and the default executor.
"""
import threading
from concurrent.futures import Future, ThreadPoolExecutor

import pytest

from mojang_metadata.futures import get_default_executor, shutdown_default_executor, then


class TestThen:

    def test_applies_function_to_result(self):
        source = Future()
        chained = then(source, lambda value: value * 2)

        source.set_result(21)

        assert chained.result(timeout=1) == 42

    def test_already_completed_source(self):
        source = Future()
        source.set_result("ready")

        assert then(source, str.upper).result(timeout=1) == "READY"

    def test_source_exception_propagates(self):
        source = Future()
        called = []
        chained = then(source, called.append)

        source.set_exception(ConnectionError("refused"))

        with pytest.raises(ConnectionError):
            chained.result(timeout=1)
        assert called == []

    def test_function_exception_fails_chained_future(self):
        source = Future()
        chained = then(source, lambda document: document["missing"])

        source.set_result({})

        with pytest.raises(KeyError):
            chained.result(timeout=1)

    def test_cancelled_source_cancels_chained(self):
        source = Future()
        chained = then(source, lambda value: value)

        source.cancel()

        assert chained.cancelled()

    def test_cancelled_chained_future_ignores_completion(self):
        source = Future()
        chained = then(source, lambda value: value)

        assert chained.cancel()
        source.set_result(1)

        assert chained.cancelled()

    def test_runs_on_completing_thread(self):
        ran_on = []
        release = threading.Event()

        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="completer") as pool:
            source = pool.submit(release.wait, 5)
            chained = then(source, lambda _: ran_on.append(threading.current_thread().name))
            release.set()
            chained.result(timeout=5)

        assert ran_on[0].startswith("completer")


class TestDefaultExecutor:

    def test_created_once_and_recreated_after_shutdown(self):
        try:
            first = get_default_executor()
            assert get_default_executor() is first

            shutdown_default_executor()

            second = get_default_executor()
            assert second is not first
            assert second.submit(lambda: "ok").result(timeout=5) == "ok"
        finally:
            shutdown_default_executor()

    def test_shutdown_without_executor_is_noop(self):
        shutdown_default_executor()
        shutdown_default_executor()
