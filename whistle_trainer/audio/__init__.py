"""Capture inputs that feed sample frames to the detection cycle.

The sounddevice and soundfile backed inputs live in their own modules so
that importing this package does not load the native audio libraries.
"""

from .frame_buffer import FrameBuffer

__all__ = ["FrameBuffer"]
