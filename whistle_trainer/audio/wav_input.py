import threading
import time
from typing import Optional

import soundfile as sf

from ..core.interfaces import IAudioInput
from ..errors import CaptureError
from ..logger import get_logger
from ..note_types import SampleFrame
from .frame_buffer import FrameBuffer

logger = get_logger(__name__)


class WavFileInput(IAudioInput):
    """Replays a sound file at real-time speed as if it were a microphone."""

    def __init__(
        self,
        file_path: str,
        frame_size: int = 2048,
        block_size: int = 512,
        loop: bool = False,
        gain: float = 1.0,
        realtime: bool = True,
    ):
        self._file_path = file_path
        self._block_size = block_size
        self._loop = loop
        self._gain = gain
        self._realtime = realtime
        self._is_running = False
        self._thread: Optional[threading.Thread] = None

        try:
            with sf.SoundFile(self._file_path) as f:
                self._sample_rate = f.samplerate
        except (OSError, RuntimeError) as e:
            raise CaptureError(f"Could not open audio file {file_path}: {e}") from e
        self._buffer = FrameBuffer(frame_size, self._sample_rate)

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def is_running(self) -> bool:
        """Returns True if the input is currently streaming data."""
        return self._is_running

    def latest_frame(self) -> Optional[SampleFrame]:
        return self._buffer.latest()

    def start(self) -> None:
        if self._is_running:
            return
        self._is_running = True
        self._thread = threading.Thread(target=self._stream_data, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._is_running = False
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
        self._buffer.clear()

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until a non-looping replay has reached the end of the file."""
        if self._thread:
            self._thread.join(timeout)

    def _stream_data(self) -> None:
        try:
            with sf.SoundFile(self._file_path) as f:
                while self._is_running:
                    data = f.read(self._block_size, dtype="float32", always_2d=True)
                    if len(data) == 0:
                        if self._loop:
                            f.seek(0)
                            continue
                        break

                    # Apply gain if specified
                    if self._gain != 1.0:
                        data *= self._gain

                    self._buffer.write(data[:, 0])

                    # Simulate real-time playback speed
                    if self._realtime:
                        time.sleep(len(data) / self._sample_rate)
        except (OSError, RuntimeError) as e:
            logger.error(f"Error streaming audio file {self._file_path}: {e}")

        self._is_running = False  # Ensure flag is reset on exit
