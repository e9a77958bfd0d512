"""Tests for headless rendering and the FFmpeg video encoder."""

import shutil
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from blobflock.encoder import encode_video, render_frames


def _solid_frames(n: int, width: int, height: int, color=(128, 64, 200)):
    """Generate N solid-color frames."""
    frame = np.full((height, width, 3), color, dtype=np.uint8)
    for _ in range(n):
        yield frame.copy()


class TestRenderFrames:
    def test_yields_requested_frames(self, sim):
        frames = list(render_frames(sim, 4, fps=30))
        assert len(frames) == 4
        for frame in frames:
            assert frame.shape == (100, 200, 3)
            assert frame.dtype == np.uint8

    def test_animation_progresses(self, sim):
        frames = list(render_frames(sim, 10, fps=10))
        assert not np.array_equal(frames[0], frames[-1])

    def test_starts_macro(self, sim):
        gen = render_frames(sim, 1, fps=30, start_macro=True)
        next(gen)
        assert sim.macro.running

    def test_seeded_runs_are_identical(self, small_settings):
        from blobflock.simulation import Simulation

        a = list(render_frames(Simulation(settings=small_settings, seed=11), 5, start_macro=True))
        b = list(render_frames(Simulation(settings=small_settings, seed=11), 5, start_macro=True))
        assert all(np.array_equal(x, y) for x, y in zip(a, b))


class TestEncodeVideo:
    def _fake_proc(self, returncode=0, stderr=b""):
        proc = MagicMock()
        proc.returncode = returncode
        proc.stderr.read.return_value = stderr
        return proc

    def test_pipes_every_frame(self, tmp_path):
        proc = self._fake_proc()
        progress = []
        with patch("blobflock.encoder.subprocess.Popen", return_value=proc) as popen:
            result = encode_video(
                _solid_frames(3, 32, 16), tmp_path / "out.mp4",
                width=32, height=16, fps=30, quality="fast",
                total_frames=3, progress_callback=lambda c, t: progress.append((c, t)),
            )

        cmd = popen.call_args[0][0]
        assert cmd[0] == "ffmpeg"
        assert "32x16" in cmd
        assert cmd[-1] == str(tmp_path / "out.mp4")
        assert proc.stdin.write.call_count == 3
        assert len(proc.stdin.write.call_args[0][0]) == 32 * 16 * 3
        assert progress[-1] == (3, 3)
        assert result == tmp_path / "out.mp4"

    def test_ffmpeg_failure_raises(self, tmp_path):
        proc = self._fake_proc(returncode=1, stderr=b"frame=0\nError opening output\n")
        with patch("blobflock.encoder.subprocess.Popen", return_value=proc):
            with pytest.raises(RuntimeError, match="Error opening output"):
                encode_video(_solid_frames(1, 8, 8), tmp_path / "x.mp4", width=8, height=8)

    @pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not installed")
    def test_produces_mp4(self, sim, tmp_path):
        output = tmp_path / "demo.mp4"
        result = encode_video(
            render_frames(sim, 15, fps=30), output,
            width=200, height=100, fps=30, quality="fast",
        )
        assert result.exists()
        assert result.stat().st_size > 0
