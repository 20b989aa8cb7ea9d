# audio.py
from enum import Enum

import numpy as np
from scipy.signal import get_window


class WindowType(Enum):
    RECTANGULAR = "boxcar"
    HAMMING = "hamming"
    HANNING = "hann"
    BLACKMAN = "blackman"


def apply_window(samples, window_type=WindowType.HAMMING) -> np.ndarray:
    """Multiply samples by a symmetric window of the same length."""
    x = np.asarray(samples, dtype=np.float64)
    if x.size == 0:
        return x.copy()
    window_type = WindowType(window_type)
    w = get_window(window_type.value, len(x), fftbins=False)
    return x * w


def normalize(samples) -> np.ndarray:
    """Scale samples into [-1, 1] by the peak absolute value."""
    x = np.asarray(samples, dtype=np.float64)
    peak = np.max(np.abs(x)) if x.size else 0.0
    if peak > 0:
        return x / peak
    return x


def pre_emphasize(samples, alpha: float = 0.97) -> np.ndarray:
    x = np.asarray(samples, dtype=np.float64)
    if x.size == 0:
        return x.copy()
    y = np.empty_like(x)
    y[0] = x[0]
    y[1:] = x[1:] - alpha * x[:-1]
    return y
