import unittest

import numpy as np

from whistle_trainer.errors import CaptureError
from whistle_trainer.mock_audio_input import MockAudioInput


class TestMockAudioInput(unittest.TestCase):
    def test_frames_in_order_then_last_repeats(self):
        audio = MockAudioInput(sample_rate=8000)
        self.assertIsNone(audio.latest_frame())
        audio.extend([np.zeros(4), np.ones(4)])
        self.assertEqual(audio.pending, 2)
        self.assertEqual(audio.latest_frame().samples.sum(), 0.0)
        self.assertEqual(audio.latest_frame().samples.sum(), 4.0)
        self.assertEqual(audio.latest_frame().samples.sum(), 4.0)
        self.assertEqual(audio.latest_frame().sample_rate, 8000)

    def test_start_stop(self):
        audio = MockAudioInput()
        audio.start()
        self.assertTrue(audio.is_running())
        audio.stop()
        self.assertFalse(audio.is_running())

    def test_failure(self):
        audio = MockAudioInput(fail_reason="unplugged")
        with self.assertRaises(CaptureError):
            audio.start()
        self.assertEqual(audio.start_calls, 1)
        self.assertFalse(audio.is_running())


if __name__ == "__main__":
    unittest.main()
