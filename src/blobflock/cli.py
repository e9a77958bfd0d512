"""
CLI entry points.

Usage:
    blobflock [options]                       # interactive window
    blobflock-render -o demo.mp4 [options]    # headless macro replay to MP4
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from blobflock.macros.catalog import MacroCatalog
from blobflock.macros.events import MacroValidationError
from blobflock.settings import Settings, SettingsStore
from blobflock.simulation import Simulation

logger = logging.getLogger(__name__)

# Map profile to defaults
PROFILES = {
    "low": {"width": 854, "height": 480, "fps": 30, "quality": "fast"},
    "medium": {"width": 1280, "height": 720, "fps": 60, "quality": "medium"},
    "high": {"width": 1920, "height": 1080, "fps": 60, "quality": "high"},
}


def _progress_bar(current: int, total: int, width: int = 35):
    """Print a progress bar to stdout."""
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    if sys.stdout.isatty():
        sys.stdout.write(f"\r[{bar}] {pct:5.1f}%  frame {current}/{total}")
        sys.stdout.flush()
        if current >= total:
            sys.stdout.write("\n")
    else:
        if current % max(1, total // 20) == 0 or current >= total:
            print(f"{pct:5.1f}%  frame {current}/{total}", flush=True)


def _add_common_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--settings", type=Path, default=None,
        help="Settings JSON file (default: ~/.config/blobflock/settings.json)",
    )
    parser.add_argument("--width", type=int, default=None, help="Surface width (overrides settings)")
    parser.add_argument("--height", type=int, default=None, help="Surface height (overrides settings)")
    parser.add_argument("-n", "--count", type=int, default=None, help="Number of blobs (overrides settings)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible flock")
    parser.add_argument("--macros", type=Path, default=None, help="JSON file of extra macros to load")
    parser.add_argument("-m", "--macro", type=str, default=None, help="Name of the current macro")
    parser.add_argument(
        "--reset-settings", action="store_true",
        help="Delete the stored settings and start from the defaults",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def _build_simulation(args, width=None, height=None) -> Simulation:
    """Load settings and macros, apply overrides and build a Simulation. Exits on bad input."""
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    store = SettingsStore(args.settings)
    if args.reset_settings:
        logger.info("Resetting stored settings at %s", store.path)
        settings: Settings = store.reset()
    else:
        settings = store.load()

    width = args.width or width
    height = args.height or height
    if width:
        settings.canvas.width = width
    if height:
        settings.canvas.height = height
    if args.count is not None:
        settings.blob.count = args.count

    catalog = MacroCatalog()
    if args.macros is not None:
        if not args.macros.exists():
            print(f"Error: Macro file not found: {args.macros}", file=sys.stderr)
            sys.exit(1)
        try:
            catalog.load_file(args.macros)
        except MacroValidationError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    if args.macro is not None and args.macro not in catalog:
        print(f"Error: Unknown macro {args.macro!r} (have: {', '.join(catalog.names())})", file=sys.stderr)
        sys.exit(1)

    return Simulation(
        settings=settings,
        catalog=catalog,
        macro_name=args.macro,
        seed=args.seed,
        store=store,
    )


def main():
    parser = argparse.ArgumentParser(
        prog="blobflock",
        description="Interactive flock of oscillator-modulated blobs",
    )
    _add_common_args(parser)
    parser.add_argument("-f", "--fps", type=int, default=60, help="Frame rate cap (default: 60)")
    parser.add_argument(
        "--record-out", type=Path, default=None,
        help="Write the live input recording to this JSON file on exit",
    )
    args = parser.parse_args()

    sim = _build_simulation(args)

    from blobflock.app import App

    App(sim, fps=args.fps, record_out=args.record_out).run()


def render_main():
    parser = argparse.ArgumentParser(
        prog="blobflock-render",
        description="Replay a macro headlessly and encode the result to MP4",
    )
    _add_common_args(parser)
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output MP4 path")
    parser.add_argument(
        "-p", "--profile", type=str, default="medium",
        choices=["low", "medium", "high"],
        help="Target profile (low: 480p 30fps, medium: 720p 60fps, high: 1080p 60fps)",
    )
    parser.add_argument("-f", "--fps", type=int, default=None, help="Frames per second (overrides profile)")
    parser.add_argument("-d", "--duration", type=float, default=10.0, help="Seconds to render (default: 10)")
    parser.add_argument("--no-macro", action="store_true", help="Do not start the macro")
    parser.add_argument(
        "-q", "--quality", type=str, default=None,
        choices=["high", "medium", "fast"],
        help="Encoding quality (defaults to profile quality)",
    )
    args = parser.parse_args()

    p_cfg = PROFILES[args.profile]
    fps = args.fps or p_cfg["fps"]
    quality = args.quality or p_cfg["quality"]

    sim = _build_simulation(args, width=p_cfg["width"], height=p_cfg["height"])
    width, height = sim.size
    total_frames = max(1, int(args.duration * fps))

    from blobflock.encoder import encode_video, render_frames

    macro_label = "none" if args.no_macro else sim.macro_name
    print(f"Rendering {total_frames} frames at {width}x{height} @ {fps}fps")
    print(f"  Blobs: {len(sim.blobs)}, Macro: {macro_label}, Seed: {args.seed}")

    t0 = time.time()
    frame_gen = render_frames(sim, total_frames, fps=fps, start_macro=not args.no_macro)
    output = encode_video(
        frame_iterator=frame_gen,
        output_path=args.output,
        width=width,
        height=height,
        fps=fps,
        quality=quality,
        total_frames=total_frames,
        progress_callback=_progress_bar,
    )

    elapsed = time.time() - t0
    file_size_mb = output.stat().st_size / 1024 / 1024

    print(f"\nDone! {file_size_mb:.1f} MB")
    print(f"  Render+encode took {elapsed:.1f}s ({total_frames / max(elapsed, 0.01):.1f} fps)")
    print(f"  Output: {output}")


if __name__ == "__main__":
    main()
