"""Microphone capture using the sounddevice library."""

from __future__ import annotations
import numpy as np
import sounddevice as sd
from typing import Optional, Dict, Any, List, ClassVar

from ..errors import CaptureError
from ..logger import get_logger
from ..core.interfaces import IAudioInput
from ..note_types import SampleFrame
from .frame_buffer import FrameBuffer

logger = get_logger(__name__)


class SoundDeviceInput(IAudioInput):
    """Audio input handler using sounddevice library."""

    # Audio configuration
    SAMPLE_RATE: ClassVar[int] = 44100  # Hz
    FRAME_SIZE: ClassVar[int] = 2048  # Samples per analysis frame
    BLOCK_SIZE: ClassVar[int] = 512  # Samples per capture callback
    CHANNELS: ClassVar[int] = 1  # Mono audio
    FALLBACK_RATES: ClassVar[List[int]] = [44100, 48000, 22050, 16000]

    def __init__(
        self,
        device_id: Optional[int] = None,
        sample_rate: Optional[int] = None,
        frame_size: Optional[int] = None,
        channels: Optional[int] = None,
        block_size: Optional[int] = None,
    ) -> None:
        """Initialize the audio input handler.

        Args:
            device_id: Audio input device ID, or None for the default input device
            sample_rate: Preferred sample rate in Hz, or None for default (44100)
            frame_size: Samples per analysis frame, or None for default (2048)
            channels: Number of audio channels, or None for default (1)
            block_size: Samples per capture callback, or None for default (512)
        """
        self._device_id = device_id
        self._sample_rate = sample_rate or self.SAMPLE_RATE
        self._channels = channels or self.CHANNELS
        self._block_size = block_size or self.BLOCK_SIZE
        self._buffer = FrameBuffer(frame_size or self.FRAME_SIZE, self._sample_rate)

        self._stream: Optional[sd.InputStream] = None
        self._running = False

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def is_running(self) -> bool:
        return self._running

    def latest_frame(self) -> Optional[SampleFrame]:
        return self._buffer.latest()

    def _rates_to_try(self) -> List[int]:
        rates = list(self.FALLBACK_RATES)
        if self._sample_rate in rates:
            rates.remove(self._sample_rate)
        rates.insert(0, self._sample_rate)
        return rates

    def _audio_callback(
        self,
        indata: np.ndarray,
        _frames: int,
        _time_info: dict,
        status: sd.CallbackFlags,
    ) -> None:
        """Callback for processing audio data from the input stream.

        Note:
            This is called from a separate audio thread, so it only copies
            the block into the frame buffer.
        """
        if status:
            logger.warning(f"Audio callback status: {status}")

        # Extract mono audio data (take first channel if multi-channel)
        audio_data = indata[:, 0] if indata.ndim > 1 else indata
        self._buffer.write(audio_data)

    def start(self) -> None:
        """Open the input stream, trying fallback sample rates.

        Raises:
            CaptureError: If no sample rate works on the device
        """
        if self._running:
            logger.warning("Audio input already running")
            return

        errors = []
        for rate in self._rates_to_try():
            try:
                logger.info(f"Trying to start audio input with sample rate: {rate} Hz")
                self._buffer.sample_rate = rate
                self._stream = sd.InputStream(
                    device=self._device_id,
                    samplerate=rate,
                    blocksize=self._block_size,
                    channels=self._channels,
                    dtype="float32",
                    callback=self._audio_callback,
                )
                self._stream.start()
                self._sample_rate = rate
                self._running = True
                logger.info(f"Audio input started with sample rate {rate} Hz")
                return
            except (sd.PortAudioError, ValueError) as e:
                logger.warning(
                    f"Failed to start audio input with sample rate {rate} Hz: {e}"
                )
                errors.append(str(e))
                self._close_stream()

        error_msg = f"Could not open audio input device: {errors[-1] if errors else 'unknown error'}"
        logger.error(error_msg)
        raise CaptureError(error_msg)

    def stop(self) -> None:
        """Stop capturing audio."""
        if not self._running:
            return
        self._close_stream()
        self._running = False
        self._buffer.clear()
        logger.info("Audio input stopped")

    def _close_stream(self) -> None:
        if self._stream is None:
            return
        try:
            self._stream.stop()
            self._stream.close()
        except sd.PortAudioError as e:
            logger.error(f"Error stopping audio input: {e}")
        finally:
            self._stream = None


def list_input_devices() -> List[Dict[str, Any]]:
    """Describe every device with input channels, with its supported sample rates."""
    devices = []
    for device_id, device in enumerate(sd.query_devices()):
        if device["max_input_channels"] <= 0:
            continue
        supported = []
        for rate in [8000, 16000, 22050, 44100, 48000, 96000]:
            try:
                sd.check_input_settings(device=device_id, samplerate=rate, channels=1)
                supported.append(rate)
            except (sd.PortAudioError, ValueError):
                continue
        devices.append(
            {
                "id": device_id,
                "name": device["name"],
                "max_input_channels": device["max_input_channels"],
                "default_samplerate": device["default_samplerate"],
                "supported_rates": supported,
            }
        )
    return devices
