"""
Unit tests for the poll loop state machine.

The loop is driven with a fake snapshot source and a fake clock, so no
test sleeps for real.
"""

import io
import threading
from unittest.mock import Mock

import pytest

from rwstat.aggregation import SampleAggregator
from rwstat.orchestration import LoopState, PollLoop, ProbeState
from rwstat.reporting import SampleReporter
from rwstat.validation import FetchError


def make_loop(source, clock, iterations=0, interval=10, state=None, sleep=None):
    stream = io.StringIO()
    loop = PollLoop(
        source=source,
        aggregator=SampleAggregator(),
        reporter=SampleReporter(stream),
        interval_seconds=interval,
        iterations=iterations,
        clock=clock.time,
        sleep=sleep or clock.sleep,
        state=state,
    )
    return loop, stream


@pytest.mark.unit
class TestPollLoop:
    """Test cases for PollLoop.run."""

    def test_initial_state_is_stopped(self, fake_source_factory, fake_clock):
        loop, _ = make_loop(fake_source_factory([]), fake_clock)
        assert loop.status == LoopState.STOPPED

    def test_runs_requested_iterations(self, fake_source_factory, fake_clock):
        source = fake_source_factory(
            [{"Com_select": 10, "Com_insert": 2}, {"Com_select": 69, "Com_insert": 19}]
        )
        loop, stream = make_loop(source, fake_clock, iterations=2)

        cycles = loop.run()

        assert cycles == 2
        assert loop.status == LoopState.STOPPED
        lines = stream.getvalue().splitlines()
        assert lines == [
            "Time: 1253902509\tInterval: 10\tR: 10\tdR: 10\tW: 2\tdW: 2\tdR/dW: 5.00\tR/W: 5.00",
            "Time: 1253902519\tInterval: 10\tR: 69\tdR: 59\tW: 19\tdW: 17\tdR/dW: 3.47\tR/W: 3.63",
        ]

    def test_no_initial_delay_and_no_trailing_sleep(self, fake_source_factory, fake_clock):
        source = fake_source_factory([{"Com_select": 1}] * 3)
        loop, _ = make_loop(source, fake_clock, iterations=3, interval=7)

        loop.run()

        # Sleeps only between cycles
        assert fake_clock.sleeps == [7, 7]

    def test_timestamp_is_taken_before_fetch(self, fake_source_factory, fake_clock):
        class SlowSource(fake_source_factory):
            def fetch_snapshot(self):
                fake_clock.now += 3  # query latency
                return super().fetch_snapshot()

        loop, stream = make_loop(
            SlowSource([{"Com_select": 1}, {"Com_select": 2}]), fake_clock, iterations=2
        )
        loop.run()

        times = [line.split("\t")[0] for line in stream.getvalue().splitlines()]
        # No drift correction: second cycle starts after latency + interval
        assert times == ["Time: 1253902509", "Time: 1253902522"]

    def test_fetch_error_is_fatal(self, fake_source_factory, fake_clock):
        source = fake_source_factory([{"Com_select": 1}, {"Com_select": 2}], fail_at=1)
        loop, stream = make_loop(source, fake_clock)

        with pytest.raises(FetchError):
            loop.run()

        assert loop.status == LoopState.STOPPED
        assert loop.state.cycles_completed == 1
        assert len(stream.getvalue().splitlines()) == 1
        assert source.fetch_count == 2

    def test_unbounded_loop_stops_on_request(self, fake_source_factory, fake_clock):
        source = fake_source_factory([{"Com_select": i} for i in range(100)])
        state = ProbeState()

        def sleep(seconds):
            fake_clock.sleep(seconds)
            if len(fake_clock.sleeps) == 4:
                state.shutdown_requested.set()

        loop, stream = make_loop(source, fake_clock, state=state, sleep=sleep)

        assert loop.run() == 4
        assert loop.status == LoopState.STOPPED
        assert len(stream.getvalue().splitlines()) == 4

    def test_stop_requested_before_run(self, fake_source_factory, fake_clock):
        source = fake_source_factory([{"Com_select": 1}])
        loop, stream = make_loop(source, fake_clock)
        loop.request_stop()

        assert loop.run() == 0
        assert source.fetch_count == 0
        assert stream.getvalue() == ""

    def test_status_is_running_during_cycle(self, fake_source_factory, fake_clock):
        observed = []

        class ObservingSource(fake_source_factory):
            def fetch_snapshot(self):
                observed.append(loop.status)
                return super().fetch_snapshot()

        loop, _ = make_loop(ObservingSource([{"Com_select": 1}]), fake_clock, iterations=1)
        loop.run()

        assert observed == [LoopState.RUNNING]
        assert loop.status == LoopState.STOPPED

    def test_default_sleep_is_interrupted_by_stop(self, fake_source_factory, fake_clock):
        source = fake_source_factory([{"Com_select": i} for i in range(10)])
        loop = PollLoop(
            source=source,
            aggregator=SampleAggregator(),
            reporter=SampleReporter(io.StringIO()),
            interval_seconds=3600,
            clock=fake_clock.time,
        )

        worker = threading.Thread(target=loop.run)
        worker.start()
        # The loop fetches once, then blocks on the shutdown event
        while loop.state.cycles_completed < 1:
            worker.join(0.01)
        loop.request_stop()
        worker.join(5)

        assert not worker.is_alive()
        assert loop.state.cycles_completed == 1
        assert loop.status == LoopState.STOPPED

    def test_default_sleep_is_capped_at_timeout_max(self, fake_source_factory, fake_clock):
        loop = PollLoop(
            source=fake_source_factory([]),
            aggregator=SampleAggregator(),
            reporter=SampleReporter(io.StringIO()),
            interval_seconds=10,
            clock=fake_clock.time,
        )
        loop.state.shutdown_requested = Mock()

        loop._wait_for_shutdown(threading.TIMEOUT_MAX * 2)
        loop._wait_for_shutdown(5)

        waits = [c.args[0] for c in loop.state.shutdown_requested.wait.call_args_list]
        assert waits == [threading.TIMEOUT_MAX, 5]

    def test_run_cycle_does_not_sleep(self, fake_source_factory, fake_clock):
        loop, stream = make_loop(fake_source_factory([{"Com_update": 4}]), fake_clock)

        loop.run_cycle()

        assert fake_clock.sleeps == []
        assert "W: 4\tdW: 4" in stream.getvalue()
