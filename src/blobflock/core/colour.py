"""
HSV colour handling.

Hue runs from 0 to 360 degrees, saturation and value from 0 to 100
(the Photoshop convention). Output channels are integers in [0, 255].
"""

import math


def _channel(fraction: float) -> int:
    """Scale a 0-1 channel to 0-255, rounding halves up."""
    return int(math.floor(fraction * 255 + 0.5))


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[int, int, int]:
    """
    Convert an HSV triple to an RGB triple.

    Out-of-range arguments are clamped rather than rejected.

    Args:
        h: Hue in degrees (0-360).
        s: Saturation (0-100).
        v: Value (0-100).

    Returns:
        (r, g, b) integers in [0, 255].
    """
    h = max(0.0, min(360.0, h))
    s = max(0.0, min(100.0, s)) / 100.0
    v = max(0.0, min(100.0, v)) / 100.0

    if s == 0:
        # Achromatic (grey)
        grey = _channel(v)
        return (grey, grey, grey)

    h /= 60.0  # sector 0 to 5
    i = math.floor(h)
    f = h - i

    p = v * (1.0 - s)
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))

    # h == 360 lands in sector 6 and shares the sector 5 branch
    if i == 0:
        r, g, b = v, t, p
    elif i == 1:
        r, g, b = q, v, p
    elif i == 2:
        r, g, b = p, v, t
    elif i == 3:
        r, g, b = p, q, v
    elif i == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return (_channel(r), _channel(g), _channel(b))


class Colour:
    """
    An HSV colour with a cached RGB conversion.

    The RGB triple is recomputed on every call to ``update`` so drawing
    never has to convert per frame.
    """

    def __init__(self, hue: float, sat: float, val: float):
        self.hue = 0.0
        self.sat = 0.0
        self.val = 0.0
        self.rgb: tuple[int, int, int] = (0, 0, 0)
        self.update(hue, sat, val)

    def update(self, hue: float, sat: float, val: float):
        """Set the HSV triple and refresh the cached RGB value."""
        self.hue = hue % 360
        self.sat = sat
        self.val = val
        self.rgb = hsv_to_rgb(self.hue, self.sat, self.val)

    def set_hue(self, hue: float):
        self.update(hue, self.sat, self.val)

    def __repr__(self) -> str:
        return f"Colour(hue={self.hue:.1f}, sat={self.sat:.1f}, val={self.val:.1f})"
