"""Signal helpers shared by the test modules."""

import numpy as np

FRAME_SIZE = 2048
SAMPLE_RATE = 44100


def sine(frequency, amplitude=0.5, sample_rate=SAMPLE_RATE, size=FRAME_SIZE):
    t = np.arange(size) / sample_rate
    return amplitude * np.sin(2 * np.pi * frequency * t)


def silence(size=FRAME_SIZE):
    return np.zeros(size)
