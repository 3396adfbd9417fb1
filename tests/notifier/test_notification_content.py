import unittest

from notifier import build_notification
from notifier.content import (
    BREAK_MESSAGES,
    BREAK_TITLE,
    FOCUS_MESSAGES,
    FOCUS_TITLE,
)
from pomodoro import Phase, PhaseStarted, SIGNAL_SKIP_BREAK


def _first(options):
    return options[0]


class NotificationContentTests(unittest.TestCase):
    def test_focus_notification_uses_focus_styling_without_action(self) -> None:
        event = PhaseStarted(phase=Phase.FOCUS, title="Focus started", body="-")

        notification = build_notification(event, choice_fn=_first)

        self.assertEqual(FOCUS_TITLE, notification.title)
        self.assertEqual(FOCUS_MESSAGES[0], notification.body)
        self.assertEqual("#ff4500", notification.color_hex)
        self.assertEqual((0, 300, 300, 300), notification.vibration_pattern)
        self.assertIsNone(notification.action)

    def test_break_notification_offers_skip_break_action(self) -> None:
        event = PhaseStarted(phase=Phase.BREAK, title="Break started", body="-")

        notification = build_notification(event, choice_fn=_first)

        self.assertEqual(BREAK_TITLE, notification.title)
        self.assertEqual(BREAK_MESSAGES[0], notification.body)
        self.assertEqual("#3cb371", notification.color_hex)
        self.assertEqual((0, 200, 100, 200), notification.vibration_pattern)
        self.assertIsNotNone(notification.action)
        if notification.action is None:
            self.fail("Expected break notification to carry an action")
        self.assertEqual(SIGNAL_SKIP_BREAK, notification.action.signal)

    def test_default_choice_picks_a_known_message(self) -> None:
        event = PhaseStarted(phase=Phase.BREAK, title="Break started", body="-")
        self.assertIn(build_notification(event).body, BREAK_MESSAGES)

    def test_payload_is_json_friendly(self) -> None:
        event = PhaseStarted(phase=Phase.BREAK, title="Break started", body="-")

        payload = build_notification(event, choice_fn=_first).to_payload()

        self.assertEqual("break", payload["phase"])
        self.assertEqual([0, 200, 100, 200], payload["vibration_pattern"])
        self.assertEqual(
            {"label": "Back to work", "signal": SIGNAL_SKIP_BREAK},
            payload["action"],
        )


if __name__ == "__main__":
    unittest.main()
