"""
Periodic plus smooth image decomposition.

Splits u into p + s where p is periodic-friendly (no boundary jumps) and s is
smooth, following L. Moisan, "Periodic plus smooth image decomposition",
J. Math. Imaging Vis. 39 (2011).
"""

from typing import Tuple

import numpy as np


def periodic_smooth_decomposition(image: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Decompose a 2-D image into periodic and smooth components.

    Args:
        image: 2-D float array

    Returns:
        (periodic, smooth) with periodic + smooth == image
    """
    u = np.asarray(image, dtype=np.float64)
    rows, cols = u.shape

    # Boundary jumps
    v = np.zeros_like(u)
    v[0, :] += u[-1, :] - u[0, :]
    v[-1, :] += u[0, :] - u[-1, :]
    v[:, 0] += u[:, -1] - u[:, 0]
    v[:, -1] += u[:, 0] - u[:, -1]

    q = np.arange(rows).reshape(-1, 1)
    r = np.arange(cols).reshape(1, -1)
    denominator = 2.0 * np.cos(2.0 * np.pi * q / rows) + 2.0 * np.cos(2.0 * np.pi * r / cols) - 4.0
    denominator[0, 0] = 1.0

    s_hat = np.fft.fft2(v) / denominator
    s_hat[0, 0] = 0.0
    smooth = np.real(np.fft.ifft2(s_hat))

    return u - smooth, smooth
