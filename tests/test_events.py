import unittest

from whistle_trainer.core.events import EventEmitter, TrainerEvents, TrainerEventType
from whistle_trainer.note_types import CycleReport


class TestEventEmitter(unittest.TestCase):
    def setUp(self):
        self.emitter = EventEmitter()
        self.received = []

    def test_emit_calls_listeners(self):
        self.emitter.on(TrainerEventType.SCORE_CHANGED, self.received.append)
        self.emitter.emit(TrainerEventType.SCORE_CHANGED, 3)
        self.assertEqual(self.received, [3])

    def test_listener_registered_once(self):
        self.emitter.on(TrainerEventType.SCORE_CHANGED, self.received.append)
        self.emitter.on(TrainerEventType.SCORE_CHANGED, self.received.append)
        self.emitter.emit(TrainerEventType.SCORE_CHANGED, 1)
        self.assertEqual(self.received, [1])

    def test_off(self):
        self.emitter.on(TrainerEventType.SCORE_CHANGED, self.received.append)
        self.emitter.off(TrainerEventType.SCORE_CHANGED, self.received.append)
        self.emitter.emit(TrainerEventType.SCORE_CHANGED, 1)
        self.assertEqual(self.received, [])

    def test_failing_listener_does_not_block_others(self):
        def broken(_):
            raise RuntimeError("listener failed")

        self.emitter.on(TrainerEventType.ERROR, broken)
        self.emitter.on(TrainerEventType.ERROR, self.received.append)
        self.emitter.emit(TrainerEventType.ERROR, "x")
        self.assertEqual(self.received, ["x"])

    def test_clear(self):
        self.emitter.on(TrainerEventType.SCORE_CHANGED, self.received.append)
        self.emitter.clear()
        self.emitter.emit(TrainerEventType.SCORE_CHANGED, 1)
        self.assertEqual(self.received, [])


class TestTrainerEvents(unittest.TestCase):
    def test_typed_helpers(self):
        events = TrainerEvents()
        log = []
        events.on_sequence_changed(lambda seq: log.append(("sequence", seq)))
        events.on_note_rejected(lambda detected, expected: log.append(("rejected", detected, expected)))
        events.on_score_changed(lambda score: log.append(("score", score)))
        events.on_cycle_completed(lambda report: log.append(("cycle", report.active)))
        events.on_error(lambda error: log.append(("error", str(error))))

        events.emit_sequence_changed([1, 2])
        events.emit_note_rejected("E4", "D4")
        events.emit_score_changed(2)
        events.emit_cycle_completed(CycleReport(active=False))
        events.emit_error(ValueError("bad"))

        self.assertEqual(
            log,
            [
                ("sequence", (1, 2)),
                ("rejected", "E4", "D4"),
                ("score", 2),
                ("cycle", False),
                ("error", "bad"),
            ],
        )


if __name__ == "__main__":
    unittest.main()
