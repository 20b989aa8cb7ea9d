# analysis.py
from dataclasses import dataclass

import numpy as np

from wavelet_audio.dwt import DWT, CoefficientBuffer
from wavelet_audio.wavelets import WaveletFamily


def energy_of(band) -> float:
    band = np.asarray(band, dtype=np.float64)
    return float(np.sum(band**2))


def soft_threshold(coeffs, threshold: float) -> np.ndarray:
    """Shrink every coefficient toward zero: sign(x) * max(|x| - threshold, 0)."""
    if threshold < 0:
        raise ValueError(f"threshold must be non-negative, got {threshold}")
    c = np.asarray(coeffs, dtype=np.float64)
    return np.sign(c) * np.maximum(np.abs(c) - threshold, 0.0)


@dataclass
class AudioAnalysis:
    levels: int                     # requested depth
    energy_distribution: np.ndarray # one entry per band, sums to 1 if energy > 0
    coefficients: np.ndarray
    lengths: tuple
    original_length: int

    @property
    def depth(self) -> int:
        return max(len(self.lengths) - 1, 0)

    @property
    def buffer(self) -> CoefficientBuffer:
        return CoefficientBuffer(self.coefficients, self.lengths)


class AudioAnalyzer:
    def __init__(self, family=WaveletFamily.DAUBECHIES4):
        self.dwt = DWT(family)

    @property
    def family(self) -> WaveletFamily:
        return self.dwt.family

    def analyze(self, samples, levels: int) -> AudioAnalysis:
        """Decompose ``samples`` and report the share of energy in each band."""
        samples = np.asarray(samples, dtype=np.float64)
        buffer = self.dwt.decompose_levels(samples, levels)

        energy = np.array([energy_of(b) for b in buffer.bands()], dtype=np.float64)
        total = energy.sum()
        if total > 0:
            energy = energy / total

        return AudioAnalysis(
            levels=levels,
            energy_distribution=energy,
            coefficients=buffer.coeffs,
            lengths=buffer.lengths,
            original_length=len(samples),
        )

    def denoise(self, samples, threshold: float, levels: int = 6) -> np.ndarray:
        """Soft-threshold every coefficient and reconstruct.

        The approximation band is thresholded along with the details. The
        result keeps the padding samples; truncate to ``len(samples)`` if
        needed.
        """
        buffer = self.dwt.decompose_levels(samples, levels)
        shrunk = CoefficientBuffer(soft_threshold(buffer.coeffs, threshold), buffer.lengths)
        return self.dwt.reconstruct_levels(shrunk)


def analyze_audio(samples, family=WaveletFamily.DAUBECHIES4, levels: int = 5) -> AudioAnalysis:
    return AudioAnalyzer(family).analyze(samples, levels)
