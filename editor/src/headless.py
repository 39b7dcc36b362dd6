"""Headless Feedback Renderer - CLI entry point.

Replays a JSON tick script through a Scene without opening a window and
writes frames as PNG.

A script is a JSON list of ticks. Each tick is an object with optional
"x"/"y" (buffer pixels; omit both for "no cursor"), an optional "click"
("pressed", "held", "released", "idle"; default "idle") and an optional
"mode" ("dual", "edit", "view"; default: the --mode flag).

Usage:
    python editor/src/headless.py <script.json> [-o OUTPUT_DIR] [--every N]

Examples:
    python editor/src/headless.py examples/drag_seed.json
    python editor/src/headless.py examples/spawn_and_spin.json -o renders/ --every 10 --seed 7
"""

import sys
import os
import argparse
import json
import logging
import random

# Add editor/src to path so imports work
_src_dir = os.path.dirname(os.path.abspath(__file__))
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from components.scene import Scene
from models.input import ClickState, EditMode, InputSample
from models.transform import Vec2
from services.frame_export import save_frame
from utils.logger import configure_logging
from constants import DEFAULT_BUFFER_WIDTH, DEFAULT_BUFFER_HEIGHT

logger = logging.getLogger(__name__)


class ScriptError(ValueError):
    """Tick script is malformed."""


def parse_tick(entry, default_mode):
    """Convert one script entry into (InputSample, EditMode).

    Raises:
        ScriptError: on missing half-coordinates or unknown names
    """
    if not isinstance(entry, dict):
        raise ScriptError(f"Tick must be an object, got {entry!r}")

    has_x = 'x' in entry
    has_y = 'y' in entry
    if has_x != has_y:
        raise ScriptError(f"Tick needs both x and y or neither: {entry!r}")
    try:
        cursor = Vec2(float(entry['x']), float(entry['y'])) if has_x else None
        click = ClickState(str(entry.get('click', 'idle')).lower())
        mode = EditMode(str(entry['mode']).lower()) if 'mode' in entry else default_mode
    except (TypeError, ValueError) as e:
        raise ScriptError(f"Invalid tick {entry!r}: {e}") from e
    return InputSample(cursor, click), mode


def load_script(file_path, default_mode=EditMode.DUAL):
    """Read and parse a tick script file.

    Returns:
        List of (InputSample, EditMode)
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ScriptError(f"Invalid JSON in {file_path}: {e}") from e
    if not isinstance(data, list):
        raise ScriptError("Script must be a JSON list of ticks")
    return [parse_tick(entry, default_mode) for entry in data]


def run_script(scene, ticks, output_dir, every=0, prefix='frame'):
    """Tick the scene through a script, saving frames.

    Args:
        scene: Scene to drive
        ticks: List of (InputSample, EditMode)
        output_dir: Directory for PNG files
        every: Save every Nth frame (0: final frame only)
        prefix: File name prefix

    Returns:
        List of written paths
    """
    written = []
    last = len(ticks) - 1
    for index, (sample, mode) in enumerate(ticks):
        frame = scene.tick(sample, mode)
        periodic = every > 0 and (index + 1) % every == 0
        if periodic or index == last:
            path = os.path.join(output_dir, f"{prefix}_{index + 1:05d}.png")
            save_frame(frame, scene.width, scene.height, path)
            written.append(path)
            logger.debug("Tick %d: %d objects -> %s", index + 1, len(scene.objects), path)
    return written


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Replay a tick script through the feedback scene and render PNG frames (headless).',
    )
    parser.add_argument(
        'script',
        help='Path to a JSON tick script.',
    )
    parser.add_argument(
        '-o', '--output',
        default='./output',
        help='Output directory for PNG files (default: ./output).',
    )
    parser.add_argument('--width', type=int, default=DEFAULT_BUFFER_WIDTH, help='Framebuffer width.')
    parser.add_argument('--height', type=int, default=DEFAULT_BUFFER_HEIGHT, help='Framebuffer height.')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for spawned objects.')
    parser.add_argument(
        '--mode',
        choices=[mode.value for mode in EditMode],
        default=EditMode.DUAL.value,
        help='Draw mode for ticks that do not set one (default: dual).',
    )
    parser.add_argument(
        '--every',
        type=int,
        default=0,
        help='Also save every Nth frame (default: final frame only).',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    script_path = os.path.abspath(args.script)
    output_dir = os.path.abspath(args.output)

    if not os.path.isfile(script_path):
        print(f"Error: Script not found: {script_path}")
        return 1

    try:
        ticks = load_script(script_path, EditMode(args.mode))
        scene = Scene(args.width, args.height, rng=random.Random(args.seed))
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if not ticks:
        print("Script contains no ticks.")
        return 1

    print(f"Replaying {len(ticks)} tick(s) at {scene.width}x{scene.height} ...")
    written = run_script(scene, ticks, output_dir, every=args.every)
    print(f"\nDone. Wrote {len(written)} frame(s) to {output_dir}/")
    print(f"  {len(scene.objects)} object(s) in scene")
    return 0


if __name__ == '__main__':
    sys.exit(main())
