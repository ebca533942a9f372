"""Main entry point for the Whistle Trainer CLI."""

import argparse
import math
import sys
import time
from typing import List, Optional

from ..core.config import ConfigManager, ExerciseSettings
from ..core.factory import ComponentFactory
from ..errors import TrainerError
from ..logger import get_logger
from ..logging_config import setup_logging
from ..note_types import CycleReport, NoteName
from ..notation import format_text, to_abc
from ..note_utils import note_to_frequency
from ..trainer import PracticeTrainer

logger = get_logger(__name__)

# The lowest whistle D (D5) is written as ABC "D"
STAFF_OCTAVE_SHIFT = -1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Whistle Trainer - note sequence practice")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--config-dir", default=None, help="Configuration directory (default: ~/.config/whistle_trainer)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    def add_input_args(sub):
        sub.add_argument("--device", type=int, default=None, help="Audio input device ID")
        sub.add_argument("--sample-rate", type=int, default=None, help="Preferred sample rate in Hz")
        sub.add_argument("--file", default=None, help="Replay a sound file instead of the microphone")
        sub.add_argument("--duration", type=float, default=None, help="Stop after this many seconds")

    practice = subparsers.add_parser("practice", help="Play the target notes in order")
    add_input_args(practice)
    practice.add_argument(
        "--notes", type=int, default=None, help="Consecutive notes per sequence (1-10)"
    )
    practice.add_argument(
        "--enable",
        default=None,
        help="Comma separated notes to practice, e.g. D5,E5,F#5 (default: configured notes)",
    )
    practice.add_argument(
        "--staff", action="store_true", help="Print targets as ABC notation instead of text"
    )

    detect = subparsers.add_parser("detect", help="Print the detected pitch every cycle")
    add_input_args(detect)

    subparsers.add_parser("devices", help="List audio input devices")
    return parser


def create_trainer(factory: ComponentFactory, args, settings: Optional[ExerciseSettings] = None) -> PracticeTrainer:
    overrides = {}
    if args.device is not None:
        overrides["device_id"] = args.device
    if args.sample_rate is not None:
        overrides["sample_rate"] = args.sample_rate
    if args.file:
        audio_input = factory.create_audio_input("wav", file_path=args.file)
    else:
        audio_input = factory.create_audio_input(**overrides)
    return factory.create_trainer(audio_input=audio_input, settings=settings)


def run_until_stopped(trainer: PracticeTrainer, duration: Optional[float]) -> None:
    """Run a started trainer until Ctrl+C or the duration elapses."""
    deadline = time.monotonic() + duration if duration else None
    try:
        while deadline is None or time.monotonic() < deadline:
            time.sleep(0.1)
    except KeyboardInterrupt:
        print()
    finally:
        trainer.stop()
        # Detach the printers so nothing is shown after the session
        trainer.events.clear()


def build_settings(factory: ComponentFactory, args) -> ExerciseSettings:
    """Exercise settings from the config, with command line overrides.

    Raises:
        ValueError: If a configured or requested note name is invalid
    """
    settings = factory.create_exercise_settings()
    if args.notes is not None:
        settings.set_consecutive_notes(args.notes)
    if args.enable:
        # --enable replaces the configured selection
        wanted = [name.strip() for name in args.enable.split(",") if name.strip()]
        for name in settings.enabled_notes:
            settings.set_note(name, False)
        for name in wanted:
            settings.set_note(name, True)
    return settings


def run_practice(factory: ComponentFactory, args) -> int:
    try:
        settings = build_settings(factory, args)
        trainer = create_trainer(factory, args, settings)
    except (TrainerError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    def show_sequence(sequence):
        if not sequence:
            return
        if args.staff:
            # Whistle parts are written an octave below sounding pitch
            print(to_abc(sequence, octave_shift=STAFF_OCTAVE_SHIFT))
        else:
            print(f"Target Notes: {format_text(sequence)}")

    def show_score(score):
        if score:
            print(f"Score: {score}")

    trainer.events.on_sequence_changed(show_sequence)
    trainer.events.on_score_changed(show_score)
    trainer.events.on_error(lambda error: print(f"Error: {error}"))

    try:
        trainer.start()
    except TrainerError as e:
        print(f"Error: {e}")
        return 1

    print("Recording started. Press Ctrl+C to stop.")
    run_until_stopped(trainer, args.duration)
    print("Recording stopped")
    return 0


def describe_cycle(report: CycleReport) -> str:
    """One line of detect output, with the deviation from the nearest note in cents."""
    if not report.note:
        return f"Detected Note: -  ({report.message})"
    reference = note_to_frequency(NoteName.parse(report.note))
    cents = 1200 * math.log2(report.frequency / reference)
    return f"Detected Note: {report.note}  Frequency: {report.frequency} Hz  ({cents:+.0f} cents)"


def run_detect(factory: ComponentFactory, args) -> int:
    try:
        trainer = create_trainer(factory, args)
    except (TrainerError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    last = {"note": None}

    def show_cycle(report: CycleReport):
        if report.note != last["note"]:
            last["note"] = report.note
            print(describe_cycle(report))

    trainer.events.on_cycle_completed(show_cycle)
    try:
        trainer.start()
    except TrainerError as e:
        print(f"Error: {e}")
        return 1
    run_until_stopped(trainer, args.duration)
    return 0


def run_devices() -> int:
    from ..audio.audio_input import list_input_devices

    print("Available audio input devices:")
    print("-" * 70)
    for device in list_input_devices():
        print(f"Device {device['id']}: {device['name']}")
        print(f"  Max input channels: {device['max_input_channels']}")
        print(f"  Default sample rate: {device['default_samplerate']} Hz")
        rates = ", ".join(str(rate) for rate in device["supported_rates"]) or "none"
        print(f"  Supported sample rates: {rates}")
        print()
    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command line arguments, or None to use sys.argv

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    setup_logging(level="DEBUG" if parsed_args.debug else None)

    if parsed_args.command == "devices":
        return run_devices()
    if parsed_args.command not in ("practice", "detect"):
        parser.print_help()
        return 1

    factory = ComponentFactory(ConfigManager(parsed_args.config_dir))
    if parsed_args.command == "practice":
        return run_practice(factory, parsed_args)
    return run_detect(factory, parsed_args)


if __name__ == "__main__":
    sys.exit(main())
