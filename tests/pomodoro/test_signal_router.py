import unittest

from pomodoro import (
    CountdownScheduler,
    LiveTimerRegistry,
    Phase,
    PhaseStarted,
    PhaseTimer,
    SIGNAL_SKIP_BREAK,
    SignalRouter,
)


class _RecordingNotifier:
    def __init__(self):
        self.events: list[PhaseStarted] = []

    def notify_phase_started(self, event: PhaseStarted) -> None:
        self.events.append(event)


class _Clock:
    def __init__(self):
        self.now_ms = 0

    def __call__(self) -> int:
        return self.now_ms


class SignalRouterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _Clock()
        self.scheduler = CountdownScheduler(monotonic_ms_fn=self.clock)
        self.registry = LiveTimerRegistry()
        self.router = SignalRouter(self.registry)
        self.notifier = _RecordingNotifier()

    def _break_running_timer(self) -> PhaseTimer:
        timer = PhaseTimer(self.scheduler, notifier=self.notifier, registry=self.registry)
        timer.start_focus_session()
        self.clock.now_ms += timer.snapshot().total_duration_ms
        self.scheduler.run_pending()
        self.assertEqual(Phase.BREAK, timer.snapshot().phase)
        self.notifier.events.clear()
        return timer

    def test_timer_attaches_itself_on_construction(self) -> None:
        timer = PhaseTimer(self.scheduler, registry=self.registry)
        self.assertIs(timer, self.registry.current())

    def test_skip_break_signal_reaches_live_timer(self) -> None:
        timer = self._break_running_timer()

        delivered = self.router.dispatch(SIGNAL_SKIP_BREAK)

        self.assertTrue(delivered)
        self.assertEqual([Phase.FOCUS], [event.phase for event in self.notifier.events])
        self.assertEqual(Phase.FOCUS, timer.snapshot().phase)
        self.assertTrue(timer.snapshot().running)

    def test_signal_name_is_case_insensitive(self) -> None:
        self._break_running_timer()
        self.assertTrue(self.router.dispatch(" skip_break "))

    def test_signal_without_live_timer_is_dropped(self) -> None:
        self.assertIsNone(self.registry.current())
        self.assertFalse(self.router.dispatch(SIGNAL_SKIP_BREAK))

    def test_closed_timer_no_longer_receives_signals(self) -> None:
        timer = self._break_running_timer()
        timer.close()

        self.assertIsNone(self.registry.current())
        self.assertFalse(self.router.dispatch(SIGNAL_SKIP_BREAK))
        self.assertEqual([], self.notifier.events)

    def test_detach_ignores_other_instances(self) -> None:
        first = PhaseTimer(self.scheduler, registry=self.registry)
        with self.assertLogs("pomodoro.registry", level="WARNING"):
            second = PhaseTimer(self.scheduler, registry=self.registry)

        first.close()
        self.assertIs(second, self.registry.current())

    def test_unknown_signal_is_dropped(self) -> None:
        timer = self._break_running_timer()

        with self.assertLogs("pomodoro.signals", level="WARNING"):
            delivered = self.router.dispatch("START_BREAK")

        self.assertFalse(delivered)
        self.assertEqual(Phase.BREAK, timer.snapshot().phase)


if __name__ == "__main__":
    unittest.main()
