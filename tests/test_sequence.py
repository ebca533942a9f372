import random
import unittest

from whistle_trainer.core.config import ExerciseSettings
from whistle_trainer.core.events import TrainerEvents
from whistle_trainer.errors import NoEnabledNotesError
from whistle_trainer.exercise import SequenceMatcher, TargetSequenceGenerator
from whistle_trainer.note_types import MatchResult, NoteName, TargetNote


def notes(*names):
    return [NoteName.parse(name) for name in names]


class ScriptedGenerator:
    """Hands out predefined sequences, then raises when exhausted."""

    def __init__(self, *sequences):
        self._sequences = [list(s) for s in sequences]
        self.calls = 0

    def generate(self):
        self.calls += 1
        if not self._sequences:
            raise NoEnabledNotesError()
        return [TargetNote(note) for note in notes(*self._sequences.pop(0))]


class TestTargetSequenceGenerator(unittest.TestCase):
    def test_single_enabled_note(self):
        settings = ExerciseSettings({"D4": True, "E4": False, "F#4": False}, consecutive_notes=3)
        generator = TargetSequenceGenerator(settings, random.Random(1))
        for _ in range(20):
            sequence = generator.generate()
            self.assertEqual([t.note for t in sequence], notes("D4", "D4", "D4"))
            self.assertTrue(all(not t.played for t in sequence))

    def test_new_targets_are_logged(self):
        settings = ExerciseSettings({"E5": True}, consecutive_notes=2)
        generator = TargetSequenceGenerator(settings)
        with self.assertLogs("whistle_trainer.exercise.sequence", level="INFO") as logs:
            generator.generate()
        self.assertIn("New target notes generated: E5 E5", logs.output[0])

    def test_all_disabled_raises(self):
        settings = ExerciseSettings({"D4": False, "E4": False}, consecutive_notes=2)
        generator = TargetSequenceGenerator(settings)
        with self.assertRaises(NoEnabledNotesError):
            generator.generate()

    def test_empty_configuration_raises(self):
        generator = TargetSequenceGenerator(ExerciseSettings({}))
        with self.assertRaises(NoEnabledNotesError):
            generator.generate()

    def test_draws_only_enabled_notes(self):
        settings = ExerciseSettings({"D5": True, "E5": True, "F#5": False}, consecutive_notes=10)
        generator = TargetSequenceGenerator(settings, random.Random(7))
        drawn = {t.note for _ in range(30) for t in generator.generate()}
        self.assertEqual(drawn, set(notes("D5", "E5")))

    def test_length_follows_settings_at_generation_time(self):
        settings = ExerciseSettings({"A5": True}, consecutive_notes=2)
        generator = TargetSequenceGenerator(settings)
        self.assertEqual(len(generator.generate()), 2)
        settings.set_consecutive_notes(4)
        self.assertEqual(len(generator.generate()), 4)

    def test_length_is_clamped(self):
        settings = ExerciseSettings({"A5": True}, consecutive_notes=25)
        self.assertEqual(len(TargetSequenceGenerator(settings).generate()), 10)
        settings.set_consecutive_notes(0)
        self.assertEqual(len(TargetSequenceGenerator(settings).generate()), 1)


class TestSequenceMatcher(unittest.TestCase):
    def setUp(self):
        self.generator = ScriptedGenerator(["D4", "E4"], ["G4", "A4"])
        self.events = TrainerEvents()
        self.sequences = []
        self.rejections = []
        self.events.on_sequence_changed(self.sequences.append)
        self.events.on_note_rejected(lambda detected, expected: self.rejections.append((detected, expected)))
        self.matcher = SequenceMatcher(self.generator, self.events)
        self.matcher.regenerate()

    def test_out_of_order_note_is_rejected(self):
        result = self.matcher.submit(NoteName.parse("E4"))
        self.assertEqual(result, MatchResult.REJECTED)
        self.assertEqual(self.matcher.cursor, 0)
        self.assertEqual(self.matcher.score, 0)
        self.assertFalse(any(t.played for t in self.matcher.sequence))
        self.assertEqual(self.rejections, [(NoteName.parse("E4"), NoteName.parse("D4"))])

    def test_in_order_notes_score_and_regenerate(self):
        self.assertEqual(self.matcher.submit(NoteName.parse("D4")), MatchResult.MATCHED)
        self.assertEqual(self.matcher.cursor, 1)
        self.assertTrue(self.matcher.sequence[0].played)

        self.assertEqual(self.matcher.submit(NoteName.parse("E4")), MatchResult.COMPLETED)
        self.assertEqual(self.matcher.score, 2)
        self.assertEqual(self.generator.calls, 2)
        self.assertEqual([t.note for t in self.matcher.sequence], notes("G4", "A4"))
        self.assertEqual(self.matcher.cursor, 0)

    def test_repeated_wrong_note_never_mutates_state(self):
        before = self.matcher.sequence
        for _ in range(10):
            self.assertEqual(self.matcher.submit(NoteName.parse("B4")), MatchResult.REJECTED)
        self.assertEqual(self.matcher.sequence, before)
        self.assertEqual(self.matcher.score, 0)

    def test_same_note_held_is_not_deduplicated(self):
        matcher = SequenceMatcher(ScriptedGenerator(["D4", "D4", "D4"], ["E4"]))
        matcher.regenerate()
        matcher.submit(NoteName.parse("D4"))
        matcher.submit(NoteName.parse("D4"))
        self.assertEqual(matcher.score, 2)
        self.assertEqual(matcher.cursor, 2)

    def test_sequence_changes_are_emitted(self):
        self.matcher.submit(NoteName.parse("D4"))
        self.matcher.submit(NoteName.parse("E4"))
        # Initial, after D4, after E4 (completed), regenerated
        self.assertEqual(len(self.sequences), 4)
        self.assertTrue(all(isinstance(s, tuple) for s in self.sequences))
        self.assertEqual([t.played for t in self.sequences[1]], [True, False])
        self.assertEqual([t.played for t in self.sequences[2]], [True, True])

    def test_emitted_snapshots_do_not_change(self):
        first = self.sequences[0]
        self.matcher.submit(NoteName.parse("D4"))
        self.assertFalse(first[0].played)

    def test_failed_regeneration_keeps_completed_sequence(self):
        errors = []
        self.events.on_error(errors.append)
        for name in ("D4", "E4", "G4", "A4"):
            self.matcher.submit(NoteName.parse(name))
        self.assertEqual(self.matcher.score, 4)
        self.assertEqual(len(errors), 1)
        self.assertIsInstance(errors[0], NoEnabledNotesError)
        self.assertTrue(self.matcher.is_complete)
        self.assertIsNone(self.matcher.cursor)
        self.assertEqual(self.matcher.submit(NoteName.parse("G4")), MatchResult.REJECTED)
        self.assertEqual(self.rejections[-1], (NoteName.parse("G4"), None))
        self.assertEqual(self.matcher.score, 4)

    def test_reset(self):
        self.matcher.submit(NoteName.parse("D4"))
        self.matcher.reset()
        self.assertEqual(self.matcher.score, 0)
        self.assertEqual(self.matcher.sequence, ())
        self.assertEqual(self.sequences[-1], ())


if __name__ == "__main__":
    unittest.main()
