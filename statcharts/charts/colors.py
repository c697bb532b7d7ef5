"""
Colour helpers shared by the renderers.
"""

import numpy as np
from matplotlib.colors import to_hex, to_rgb

BRIGHTER = 1 / 0.7


def brighter(color: str, k: float = 1.0) -> str:
    """Brighten a colour the way d3-color's ``rgb.brighter(k)`` does.

    Each channel is multiplied by (1/0.7)**k and clipped to the valid range.
    """
    factor = BRIGHTER**k
    rgb = np.clip(np.asarray(to_rgb(color)) * factor, 0.0, 1.0)
    return to_hex(tuple(rgb))


def darker(color: str, k: float = 1.0) -> str:
    """Inverse of brighter()."""
    return brighter(color, -k)
