import unittest

import numpy as np

from whistle_trainer.audio import FrameBuffer


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.buffer = FrameBuffer(frame_size=8, sample_rate=8000)

    def test_empty_until_window_is_full(self):
        self.assertIsNone(self.buffer.latest())
        self.buffer.write(np.ones(5))
        self.assertIsNone(self.buffer.latest())
        self.buffer.write(np.ones(3))
        self.assertIsNotNone(self.buffer.latest())

    def test_keeps_most_recent_samples(self):
        self.buffer.write(np.arange(6))
        self.buffer.write(np.arange(6, 12))
        frame = self.buffer.latest()
        np.testing.assert_array_equal(frame.samples, np.arange(4, 12))
        self.assertEqual(frame.sample_rate, 8000)

    def test_oversized_block(self):
        self.buffer.write(np.arange(20))
        np.testing.assert_array_equal(self.buffer.latest().samples, np.arange(12, 20))

    def test_multichannel_uses_first_channel(self):
        block = np.column_stack([np.arange(8), -np.arange(8)])
        self.buffer.write(block)
        np.testing.assert_array_equal(self.buffer.latest().samples, np.arange(8))

    def test_frames_are_snapshots(self):
        self.buffer.write(np.zeros(8))
        frame = self.buffer.latest()
        self.buffer.write(np.ones(8))
        self.assertEqual(frame.samples.sum(), 0.0)

    def test_clear(self):
        self.buffer.write(np.ones(8))
        self.buffer.clear()
        self.assertIsNone(self.buffer.latest())

    def test_changing_sample_rate_discards_audio(self):
        self.buffer.write(np.ones(8))
        self.buffer.sample_rate = 16000
        self.assertIsNone(self.buffer.latest())
        self.buffer.write(np.ones(8))
        self.assertEqual(self.buffer.latest().sample_rate, 16000)

    def test_invalid_frame_size(self):
        with self.assertRaises(ValueError):
            FrameBuffer(frame_size=1, sample_rate=8000)


if __name__ == "__main__":
    unittest.main()
