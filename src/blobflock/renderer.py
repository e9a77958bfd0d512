"""
Render pass for the flock.

Drawing goes through the small ``DrawSurface`` contract so the
simulation does not depend on a particular backend. ``PygameSurface``
is the backend used by the window and the video exporter.
"""

import abc
import math
from typing import Iterable, Sequence, Tuple, Union

import numpy as np
import pygame

from blobflock.core.blob import Blob
from blobflock.settings import Settings

ColourLike = Union[str, Tuple[int, int, int]]


class DrawSurface(abc.ABC):
    """Minimal drawing contract used by the render pass."""

    @property
    @abc.abstractmethod
    def size(self) -> Tuple[int, int]:
        """(width, height) in pixels."""

    @abc.abstractmethod
    def fill(self, colour: ColourLike):
        """Paint the whole surface."""

    @abc.abstractmethod
    def disc(self, colour: ColourLike, center: Tuple[float, float], radius: float):
        """Draw a filled circle."""

    @abc.abstractmethod
    def border(self, colour: ColourLike):
        """Stroke a one pixel outline around the surface bounds."""


class PygameSurface(DrawSurface):
    """DrawSurface backed by a pygame Surface."""

    def __init__(self, surface: pygame.Surface):
        self.surface = surface

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def fill(self, colour: ColourLike):
        self.surface.fill(pygame.Color(colour))

    def disc(self, colour: ColourLike, center: Tuple[float, float], radius: float):
        x, y = center
        # pygame cannot rasterise non-finite coordinates
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        pygame.draw.circle(self.surface, colour, (int(round(x)), int(round(y))), max(1, int(radius)))

    def border(self, colour: ColourLike):
        w, h = self.size
        pygame.draw.rect(self.surface, pygame.Color(colour), pygame.Rect(0, 0, w, h), 1)

    def to_array(self) -> np.ndarray:
        """Convert to an (H, W, 3) uint8 array for video encoding."""
        # pygame uses (width, height) but numpy expects (height, width)
        arr = pygame.surfarray.array3d(self.surface)
        return np.ascontiguousarray(np.transpose(arr, (1, 0, 2)))


def mirrored_positions(
    x: float, y: float, width: float, height: float, symmetry: bool
) -> Sequence[Tuple[float, float]]:
    """Positions at which a blob is drawn: itself, plus 3 reflections with symmetry."""
    coords = [(x, y)]
    if symmetry:
        coords.extend([
            (x, height - y),
            (width - x, y),
            (width - x, height - y),
        ])
    return coords


def draw_frame(
    surface: DrawSurface,
    blobs: Iterable[Blob],
    settings: Settings,
    force_clear: bool = False,
):
    """
    Draw one frame of the flock.

    Args:
        surface: Target surface.
        blobs: Blobs to draw, in order.
        settings: Supplies radius, background, border and the clear/symmetry options.
        force_clear: Paint the background even when clearing is disabled
            (used for the first frame after setup).
    """
    if settings.clear_canvas or force_clear:
        surface.fill(settings.canvas.background_colour)

    width, height = surface.size
    surface.border(settings.canvas.border_colour)

    radius = settings.blob.radius
    for blob in blobs:
        for pos in mirrored_positions(blob.x, blob.y, width, height, settings.symmetry):
            surface.disc(blob.colour.rgb, pos, radius)
