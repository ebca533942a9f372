"""Configuration management for Whistle Trainer components."""

from typing import Dict, Any, List, Mapping, Optional
import json
import os
from pathlib import Path

from ..logger import get_logger
from ..note_types import NoteName

logger = get_logger(__name__)

MIN_CONSECUTIVE_NOTES = 1
MAX_CONSECUTIVE_NOTES = 10

# Fingerable notes of a D tin whistle, by octave
D_WHISTLE_NOTES: Dict[int, List[str]] = {
    5: ["D", "E", "F#", "G", "A", "B"],
    6: ["C", "C#", "D", "E", "F#", "G", "A", "B"],
    7: ["D", "E", "F#", "G", "A", "B", "C#"],
}
# Octaves enabled when no configuration exists
DEFAULT_ENABLED_OCTAVES = (5, 6)


def default_enabled_notes() -> Dict[str, bool]:
    """Enabled-note mapping for a fresh install."""
    return {
        f"{note}{octave}": octave in DEFAULT_ENABLED_OCTAVES
        for octave, notes in D_WHISTLE_NOTES.items()
        for note in notes
    }


def clamp_consecutive_notes(value: Any) -> int:
    """Clamp a consecutive-note count into 1-10; unparsable values become 1."""
    try:
        count = int(value)
    except (TypeError, ValueError):
        return MIN_CONSECUTIVE_NOTES
    return max(MIN_CONSECUTIVE_NOTES, min(MAX_CONSECUTIVE_NOTES, count))


class ConfigManager:
    """Configuration manager for Whistle Trainer components."""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Directory to store configuration files, or None to use default
        """
        if config_dir is None:
            # Use ~/.config/whistle_trainer by default
            home = os.path.expanduser("~")
            config_dir = os.path.join(home, ".config", "whistle_trainer")

        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        # Default configurations
        self.default_configs = {
            "audio_input": {
                "device_id": None,
                "sample_rate": 44100,
                "frame_size": 2048,
                "channels": 1,
            },
            "pitch_detection": {
                "volume_threshold": 0.01,
                "yin_threshold": 0.1,
                "min_frequency": 50.0,
                "max_frequency": 1600.0,
                "history_size": 5,
            },
            "exercise": {
                "consecutive_notes": 1,
                "detection_interval": 0.1,
                "enabled_notes": default_enabled_notes(),
            },
        }

        # Load existing configurations or create default ones
        self.configs = {}
        for config_name, default_config in self.default_configs.items():
            self.configs[config_name] = self.load_config(config_name, default_config)

    def load_config(self, name: str, default_config: Dict[str, Any]) -> Dict[str, Any]:
        """Load configuration from file or create default.

        Args:
            name: Configuration name
            default_config: Default configuration to use if file doesn't exist

        Returns:
            Configuration dictionary
        """
        config_file = self.config_dir / f"{name}.json"

        if config_file.exists():
            try:
                with open(config_file, "r") as f:
                    config = json.load(f)
                logger.info(f"Loaded configuration from {config_file}")

                # Ensure all default keys are present
                for key, value in default_config.items():
                    if key not in config:
                        config[key] = value

                return config
            except (OSError, ValueError) as e:
                logger.error(f"Error loading configuration from {config_file}: {e}")
                return json.loads(json.dumps(default_config))
        else:
            # Create default configuration
            config = json.loads(json.dumps(default_config))
            self.save_config(name, config)
            return config

    def save_config(self, name: str, config: Dict[str, Any]) -> bool:
        """Save configuration to file.

        Args:
            name: Configuration name
            config: Configuration dictionary

        Returns:
            True if saved successfully, False otherwise
        """
        config_file = self.config_dir / f"{name}.json"

        try:
            with open(config_file, "w") as f:
                json.dump(config, f, indent=2)
            logger.info(f"Saved configuration to {config_file}")
            return True
        except OSError as e:
            logger.error(f"Error saving configuration to {config_file}: {e}")
            return False

    def get_config(self, name: str) -> Dict[str, Any]:
        """Get a copy of a configuration by name.

        Args:
            name: Configuration name

        Returns:
            Configuration dictionary
        """
        return json.loads(json.dumps(self.configs.get(name, {})))

    def update_config(self, name: str, updates: Dict[str, Any]) -> bool:
        """Update configuration and save to file.

        Args:
            name: Configuration name
            updates: Dictionary of updates to apply

        Returns:
            True if updated and saved successfully, False otherwise
        """
        if name not in self.configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        self.configs[name].update(updates)
        return self.save_config(name, self.configs[name])

    def reset_config(self, name: str) -> bool:
        """Reset configuration to default.

        Args:
            name: Configuration name

        Returns:
            True if reset successfully, False otherwise
        """
        if name not in self.default_configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        self.configs[name] = json.loads(json.dumps(self.default_configs[name]))
        return self.save_config(name, self.configs[name])


class ExerciseSettings:
    """The set of enabled target notes and the sequence length.

    Read by the sequence generator each time it builds a sequence, so
    changes apply to the next sequence and never to the current one.
    """

    def __init__(
        self,
        enabled_notes: Optional[Mapping[str, bool]] = None,
        consecutive_notes: int = MIN_CONSECUTIVE_NOTES,
    ) -> None:
        """Initialize the settings.

        Args:
            enabled_notes: Mapping of note name (e.g. 'F#5') to enabled flag,
                or None for the default D whistle layout
            consecutive_notes: Number of notes per target sequence (clamped to 1-10)
        """
        if enabled_notes is None:
            enabled_notes = default_enabled_notes()
        # Validate names up front and keep them in canonical form
        self._enabled: Dict[NoteName, bool] = {}
        for name, enabled in enabled_notes.items():
            self._enabled[NoteName.parse(name)] = bool(enabled)
        self._consecutive_notes = clamp_consecutive_notes(consecutive_notes)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ExerciseSettings":
        """Build settings from the 'exercise' configuration section."""
        return cls(
            enabled_notes=config.get("enabled_notes"),
            consecutive_notes=config.get("consecutive_notes", MIN_CONSECUTIVE_NOTES),
        )

    def to_config(self) -> Dict[str, Any]:
        return {
            "consecutive_notes": self._consecutive_notes,
            "enabled_notes": {str(note): enabled for note, enabled in self._enabled.items()},
        }

    @property
    def enabled_notes(self) -> Dict[str, bool]:
        return {str(note): enabled for note, enabled in self._enabled.items()}

    @property
    def consecutive_notes(self) -> int:
        return self._consecutive_notes

    def set_consecutive_notes(self, value: Any) -> int:
        """Set the sequence length, clamped to 1-10. Returns the stored value."""
        self._consecutive_notes = clamp_consecutive_notes(value)
        return self._consecutive_notes

    def set_note(self, name: str, enabled: bool) -> None:
        self._enabled[NoteName.parse(name)] = bool(enabled)

    def toggle_note(self, name: str) -> bool:
        """Flip one note's enabled flag. Returns the new flag."""
        note = NoteName.parse(name)
        self._enabled[note] = not self._enabled.get(note, False)
        return self._enabled[note]

    def toggle_octave(self, octave: int) -> None:
        """Flip the enabled flag of every configured note in an octave."""
        for note in self._enabled:
            if note.octave == octave:
                self._enabled[note] = not self._enabled[note]

    def available_notes(self) -> List[NoteName]:
        """Enabled notes, in configuration order."""
        return [note for note, enabled in self._enabled.items() if enabled]
