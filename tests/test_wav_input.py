import numpy as np
import pytest
import soundfile as sf

from helpers import sine
from whistle_trainer.audio.wav_input import WavFileInput
from whistle_trainer.errors import CaptureError


@pytest.fixture
def wav_path(tmp_path):
    path = tmp_path / "d5.wav"
    sf.write(str(path), sine(587.33, size=22050), 44100)
    return path


def test_reports_file_sample_rate(wav_path):
    audio = WavFileInput(str(wav_path))
    assert audio.sample_rate == 44100
    assert audio.latest_frame() is None


def test_replay_fills_the_frame(wav_path):
    audio = WavFileInput(str(wav_path), frame_size=2048, realtime=False)
    audio.start()
    audio.wait(timeout=5.0)
    frame = audio.latest_frame()
    assert frame is not None
    assert len(frame) == 2048
    assert frame.sample_rate == 44100
    assert np.max(np.abs(frame.samples)) > 0.4
    assert not audio.is_running()
    audio.stop()
    assert audio.latest_frame() is None


def test_gain_is_applied(wav_path):
    audio = WavFileInput(str(wav_path), realtime=False, gain=0.5)
    audio.start()
    audio.wait(timeout=5.0)
    assert np.max(np.abs(audio.latest_frame().samples)) < 0.26
    audio.stop()


def test_missing_file(tmp_path):
    with pytest.raises(CaptureError):
        WavFileInput(str(tmp_path / "missing.wav"))
