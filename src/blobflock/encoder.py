"""
Headless export of a simulation run to MP4.

Frames are rendered off-screen at a fixed timestep and piped to ffmpeg
via stdin. No intermediate files are written.
"""

import subprocess
from pathlib import Path
from typing import Callable, Iterator, Optional

import numpy as np
import pygame

from blobflock.renderer import PygameSurface
from blobflock.simulation import Simulation


# Quality presets: (preset, crf, pix_fmt)
QUALITY_PRESETS = {
    "high": ("slow", "18", "yuv444p"),
    "medium": ("medium", "23", "yuv420p"),
    "fast": ("ultrafast", "28", "yuv420p"),
}


def render_frames(
    simulation: Simulation,
    n_frames: int,
    fps: int = 60,
    start_macro: bool = False,
) -> Iterator[np.ndarray]:
    """
    Run the simulation for ``n_frames`` fixed steps of 1/fps seconds.

    The drawing surface persists between frames so that runs with
    clearing disabled leave trails, as they do on screen.

    Args:
        simulation: Simulation to advance (mutated in place).
        n_frames: Number of frames to yield.
        fps: Frames per second; sets the timestep.
        start_macro: Start the current macro before the first frame.

    Yields:
        (H, W, 3) uint8 RGB arrays, one per frame.
    """
    dt = 1.0 / fps
    surface = PygameSurface(pygame.Surface(simulation.size))

    if start_macro and simulation.macro is not None:
        simulation.macro.start()

    for _ in range(n_frames):
        simulation.tick(dt, surface)
        yield surface.to_array()


def encode_video(
    frame_iterator: Iterator[np.ndarray],
    output_path: Path,
    width: int = 1280,
    height: int = 720,
    fps: int = 60,
    quality: str = "medium",
    total_frames: Optional[int] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> Path:
    """
    Encode frames to an MP4 file.

    Args:
        frame_iterator: Yields (H, W, 3) uint8 numpy arrays.
        output_path: Output MP4 path.
        width: Frame width.
        height: Frame height.
        fps: Frames per second.
        quality: "high", "medium", or "fast".
        total_frames: Total frame count for progress reporting.
        progress_callback: Optional callback(current_frame, total_frames).

    Returns:
        Path to the output file.
    """
    preset, crf, pix_fmt = QUALITY_PRESETS.get(quality, QUALITY_PRESETS["medium"])

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = [
        "ffmpeg", "-y",
        # Raw video input from pipe
        "-f", "rawvideo",
        "-pix_fmt", "rgb24",
        "-s", f"{width}x{height}",
        "-r", str(fps),
        "-i", "pipe:0",
        # Video encoding
        "-c:v", "libx264",
        "-preset", preset,
        "-crf", crf,
        "-pix_fmt", pix_fmt,
        # Output
        str(output_path),
    ]

    proc = subprocess.Popen(
        cmd,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )

    frame_count = 0
    try:
        for frame in frame_iterator:
            proc.stdin.write(frame.tobytes())
            frame_count += 1

            if progress_callback and total_frames:
                progress_callback(frame_count, total_frames)

    except BrokenPipeError:
        pass
    finally:
        if proc.stdin:
            proc.stdin.close()

    proc.wait()

    if proc.returncode != 0:
        stderr = proc.stderr.read().decode("utf-8", errors="replace")
        # Filter out common non-error ffmpeg messages
        error_lines = [
            line for line in stderr.split("\n")
            if "error" in line.lower() or "invalid" in line.lower()
        ]
        error_msg = "\n".join(error_lines[-5:]) if error_lines else stderr[-500:]
        raise RuntimeError(
            f"ffmpeg exited with code {proc.returncode}: {error_msg}"
        )

    return output_path
