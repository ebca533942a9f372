"""Factory for creating Whistle Trainer components."""

import random
from typing import Callable, Dict, Optional

from ..logger import get_logger
from ..detection import FrequencySmoother, VolumeGate, YinPitchEstimator
from .config import ConfigManager, ExerciseSettings
from .interfaces import IAudioInput
from ..trainer import PracticeTrainer

logger = get_logger(__name__)


def _sounddevice_input(**kwargs) -> IAudioInput:
    # Imported on demand so PortAudio is only loaded for live capture
    from ..audio.audio_input import SoundDeviceInput

    return SoundDeviceInput(**kwargs)


def _wav_input(file_path: str, frame_size: int = 2048, **kwargs) -> IAudioInput:
    from ..audio.wav_input import WavFileInput

    kwargs.pop("device_id", None)
    kwargs.pop("sample_rate", None)
    kwargs.pop("channels", None)
    return WavFileInput(file_path, frame_size=frame_size, **kwargs)


def _mock_input(sample_rate: int = 44100, **kwargs) -> IAudioInput:
    from ..mock_audio_input import MockAudioInput

    return MockAudioInput(sample_rate=sample_rate, fail_reason=kwargs.get("fail_reason"))


class ComponentFactory:
    """Factory for creating Whistle Trainer components."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """Initialize the component factory.

        Args:
            config_manager: Configuration manager, or None to create a default one
        """
        self.config_manager = config_manager or ConfigManager()

        # Register capture implementations
        self.audio_input_builders: Dict[str, Callable[..., IAudioInput]] = {
            "default": _sounddevice_input,
            "wav": _wav_input,
            "mock": _mock_input,
        }

    def create_pitch_estimator(self, **kwargs) -> YinPitchEstimator:
        config = self.config_manager.get_config("pitch_detection")
        params = {
            "threshold": config["yin_threshold"],
            "min_frequency": config["min_frequency"],
            "max_frequency": config["max_frequency"],
        }
        params.update(kwargs)
        return YinPitchEstimator(**params)

    def create_volume_gate(self, **kwargs) -> VolumeGate:
        config = self.config_manager.get_config("pitch_detection")
        params = {"threshold": config["volume_threshold"]}
        params.update(kwargs)
        return VolumeGate(**params)

    def create_frequency_smoother(self, **kwargs) -> FrequencySmoother:
        config = self.config_manager.get_config("pitch_detection")
        params = {"history_size": config["history_size"]}
        params.update(kwargs)
        return FrequencySmoother(**params)

    def create_exercise_settings(self, **overrides) -> ExerciseSettings:
        config = self.config_manager.get_config("exercise")
        config.update(overrides)
        return ExerciseSettings.from_config(config)

    def create_audio_input(self, implementation: str = "default", **kwargs) -> IAudioInput:
        """Create a capture input.

        Args:
            implementation: 'default' (microphone), 'wav' (needs file_path) or 'mock'
            **kwargs: Additional parameters to pass to the constructor

        Returns:
            Audio input instance

        Raises:
            ValueError: If the implementation is not registered
        """
        if implementation not in self.audio_input_builders:
            raise ValueError(f"Unknown audio input implementation: {implementation}")

        # Get default configuration, then override with provided parameters
        config = self.config_manager.get_config("audio_input")
        config.update(kwargs)

        instance = self.audio_input_builders[implementation](**config)
        logger.info(f"Created audio input: {implementation}")
        return instance

    def create_trainer(
        self,
        audio_input: Optional[IAudioInput] = None,
        settings: Optional[ExerciseSettings] = None,
        rng: Optional[random.Random] = None,
    ) -> PracticeTrainer:
        """Create a PracticeTrainer wired from the current configuration."""
        exercise = self.config_manager.get_config("exercise")
        trainer = PracticeTrainer(
            audio_input=audio_input or self.create_audio_input(),
            settings=settings or ExerciseSettings.from_config(exercise),
            interval=exercise["detection_interval"],
            estimator_factory=self.create_pitch_estimator,
            gate_factory=self.create_volume_gate,
            smoother_factory=self.create_frequency_smoother,
            rng=rng,
        )
        logger.info("Created practice trainer")
        return trainer
