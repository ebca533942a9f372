import unittest

from whistle_trainer.detection import FrequencySmoother


class TestFrequencySmoother(unittest.TestCase):
    def test_average_of_history(self):
        smoother = FrequencySmoother()
        self.assertIsNone(smoother.average)
        self.assertEqual(smoother.add(440.0), 440.0)
        self.assertEqual(smoother.add(460.0), 450.0)

    def test_oldest_reading_is_evicted(self):
        smoother = FrequencySmoother(history_size=5)
        for frequency in (100.0, 200.0, 300.0, 400.0, 500.0, 600.0):
            smoother.add(frequency)
        self.assertEqual(len(smoother), 5)
        self.assertEqual(smoother.history, (200.0, 300.0, 400.0, 500.0, 600.0))
        self.assertEqual(smoother.average, 400.0)

    def test_clear(self):
        smoother = FrequencySmoother()
        smoother.add(587.0)
        smoother.clear()
        self.assertEqual(len(smoother), 0)
        self.assertIsNone(smoother.average)

    def test_history_size(self):
        self.assertEqual(FrequencySmoother().history_size, 5)
        with self.assertRaises(ValueError):
            FrequencySmoother(history_size=0)


if __name__ == "__main__":
    unittest.main()
