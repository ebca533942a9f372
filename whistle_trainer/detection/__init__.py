"""Signal processing stages of the detection cycle."""

from .frequency_smoother import FrequencySmoother
from .volume_gate import VolumeGate, compute_rms
from .yin import YinPitchEstimator

__all__ = ["FrequencySmoother", "VolumeGate", "YinPitchEstimator", "compute_rms"]
