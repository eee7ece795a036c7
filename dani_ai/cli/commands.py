"""CLI commands for the Dani.ai photo editor."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from ..assets import asset_from_path
from ..camera import CameraSession
from ..client import ImageEditClient
from ..config import configure_logging
from ..errors import PhotoEditError
from ..modes import AGE_OPTIONS, get_available_modes, get_mode_preset
from ..session import EditorSession
from ..utils import decode_data_uri, save_bytes

logger = logging.getLogger(__name__)


def _run_edit(session: EditorSession, args: argparse.Namespace) -> int:
    """Apply the mode options from ``args`` to the session, generate and save."""
    session.select_mode(args.mode)
    if args.age:
        session.set_age_direction(args.age)
    if args.prompt:
        session.set_custom_prompt(args.prompt)

    logger.info(f"Generating {session.mode.value} edit...")
    result = session.generate(ImageEditClient())
    if not result.ok:
        logger.error(f"Generation failed: {result.error}")
        return 1

    output_path = args.output or session.download_name()
    save_bytes(decode_data_uri(result.image), output_path)
    logger.info(f"Edited image saved to: {output_path}")
    print(output_path)
    return 0


def modes_command(args: argparse.Namespace) -> int:
    """List the available edit modes.

    Args:
        args: Command line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    for mode in get_available_modes():
        preset = get_mode_preset(mode)
        line = f"{mode.value:<14} {preset.label}"
        if preset.needs_prompt:
            line += f"  (text, default: {preset.default_text})"
        elif preset.needs_age:
            line += f"  (age: {', '.join(label.lower() for label, _ in AGE_OPTIONS)})"
        print(line)
    return 0


def edit_command(args: argparse.Namespace) -> int:
    """Run the edit command.

    Args:
        args: Command line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        input_path = Path(args.input)
        if not input_path.exists():
            logger.error(f"Input file does not exist: {input_path}")
            return 1

        logger.info(f"Loading image: {input_path}")
        asset = asset_from_path(input_path)

        with EditorSession() as session:
            session.load_upload(asset.name, asset.data, asset.mime_type)
            return _run_edit(session, args)
    except (PhotoEditError, ValueError, RuntimeError) as e:
        logger.error(f"Error editing image: {e}")
        return 1


def capture_command(args: argparse.Namespace) -> int:
    """Run the capture command: take a webcam photo, then edit or save it.

    Args:
        args: Command line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        with EditorSession() as session:
            devices = args.device or None
            if not session.open_camera(lambda: CameraSession(devices)):
                logger.error(session.error)
                return 1

            logger.info(f"Capturing from camera device {session.camera.device}")
            asset = session.capture_photo()
            if asset is None:
                logger.error(session.error)
                return 1

            if args.raw:
                output_path = args.output or asset.name
                save_bytes(asset.data, output_path)
                logger.info(f"Captured photo saved to: {output_path}")
                print(output_path)
                return 0

            return _run_edit(session, args)
    except (PhotoEditError, ValueError, RuntimeError) as e:
        logger.error(f"Error capturing image: {e}")
        return 1


def _add_mode_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-m", "--mode",
        default="RESTORE",
        help="Edit mode id or label (see 'dani-ai modes'), defaults to RESTORE"
    )
    parser.add_argument(
        "-a", "--age",
        choices=[value.value.lower() for _, value in AGE_OPTIONS],
        help="Target age for the AGE_CHANGE mode"
    )
    parser.add_argument(
        "-p", "--prompt",
        help="Custom instructions for CLOTH_CHANGE, BG_CHANGE and OBJECT_REMOVE"
    )
    parser.add_argument(
        "-o", "--output",
        help="Output image file path (defaults to '<prefix>-<mode>-<timestamp>.png')"
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all commands."""
    parser = argparse.ArgumentParser(
        description="Edit photos with a hosted AI image model."
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (defaults to DANI_LOG_LEVEL or INFO)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("modes", help="List the available edit modes")

    edit_parser = subparsers.add_parser("edit", help="Edit an image file")
    edit_parser.add_argument("input", help="Input image file path")
    _add_mode_arguments(edit_parser)

    capture_parser = subparsers.add_parser("capture", help="Take a photo with the webcam and edit it")
    capture_parser.add_argument(
        "-d", "--device",
        type=int,
        action="append",
        help="Camera device index to try (repeatable, preferred first)"
    )
    capture_parser.add_argument(
        "--raw",
        action="store_true",
        help="Save the captured photo without editing it"
    )
    _add_mode_arguments(capture_parser)

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level.upper() if args.log_level else None)

    if args.command == "modes":
        return modes_command(args)
    elif args.command == "edit":
        return edit_command(args)
    elif args.command == "capture":
        return capture_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
