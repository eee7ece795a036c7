"""Basic workflow example for Dani.ai.

This example edits one photo with several modes and saves each result.
"""

import os
import argparse
import logging
from pathlib import Path

from dani_ai import AgeDirection, EditMode, PhotoEditError, asset_from_path, edit_image
from dani_ai.utils import decode_data_uri, save_bytes

# Set up logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

EXAMPLE_EDITS = [
    (EditMode.RESTORE, None, None),
    (EditMode.AGE_CHANGE, AgeDirection.ELDERLY, None),
    (EditMode.BG_CHANGE, None, "a snowy mountain cabin"),
]


def main():
    """Run the basic workflow example."""
    parser = argparse.ArgumentParser(description="Dani.ai basic workflow example")
    parser.add_argument("input", help="Input image file path")
    parser.add_argument("-o", "--output", help="Output directory (defaults to 'output')")
    args = parser.parse_args()

    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"Input file does not exist: {input_path}")
        return 1

    output_dir = Path(args.output or "output")
    os.makedirs(output_dir, exist_ok=True)

    logger.info(f"Loading image: {input_path}")
    asset = asset_from_path(input_path)

    for mode, age_direction, custom_prompt in EXAMPLE_EDITS:
        logger.info(f"Applying {mode.value}...")
        try:
            result = edit_image(asset, mode, age_direction, custom_prompt)
        except PhotoEditError as e:
            logger.error(f"{mode.value} failed: {e}")
            continue
        output_path = output_dir / f"{mode.value.lower()}_{input_path.stem}.png"
        save_bytes(decode_data_uri(result), str(output_path))
        logger.info(f"Saved {mode.value} result to: {output_path}")

    return 0

if __name__ == "__main__":
    main()
