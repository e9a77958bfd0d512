"""
Operations applied uniformly to every blob in a flock.
"""

import math
from typing import Iterable

from blobflock.core.blob import Blob


def attract_blobs(blobs: Iterable[Blob], x: float, y: float):
    """Point every blob's bearing at (x, y)."""
    for blob in blobs:
        dx = x - blob.x
        dy = -(y - blob.y)
        blob.bearing = math.atan2(dx, dy)


def move_blobs(blobs: Iterable[Blob], x: float, y: float):
    """Teleport every blob to (x, y), leaving bearings alone."""
    for blob in blobs:
        blob.x = x
        blob.y = y


def dispatch_click(blobs: Iterable[Blob], x: float, y: float, paused: bool):
    """Move all blobs to the point if paused, otherwise head them towards it."""
    if paused:
        move_blobs(blobs, x, y)
    else:
        attract_blobs(blobs, x, y)
