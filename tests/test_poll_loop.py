import pytest

from app.poll_loop import PollLoop


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def test_short_runs_wait_out_the_interval():
    clock = FakeClock()
    starts = []

    def job():
        starts.append(clock.now)
        clock.now += 10

    runs = PollLoop(job, 3600, sleep=clock.sleep, clock=clock).run(max_runs=3)

    assert runs == 3
    assert starts == [0, 3600, 7200]
    assert clock.sleeps == [3590, 3590, 3590]


def test_long_runs_start_next_immediately():
    clock = FakeClock()
    starts = []

    def job():
        starts.append(clock.now)
        clock.now += 5000

    PollLoop(job, 3600, sleep=clock.sleep, clock=clock).run(max_runs=2)

    assert starts == [0, 5000]
    assert clock.sleeps == []


def test_keyboard_interrupt_stops_loop():
    clock = FakeClock()
    calls = []

    def job():
        calls.append(1)
        if len(calls) == 2:
            raise KeyboardInterrupt

    runs = PollLoop(job, 1, sleep=clock.sleep, clock=clock).run()

    assert runs == 1
    assert len(calls) == 2


def test_job_errors_propagate():
    def job():
        raise FileNotFoundError("source missing")

    with pytest.raises(FileNotFoundError):
        PollLoop(job, 1, sleep=lambda s: None).run(max_runs=1)
