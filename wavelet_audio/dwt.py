# dwt.py
from dataclasses import dataclass, field

import numpy as np

from wavelet_audio.exceptions import BandLayoutError, SignalTooShortError
from wavelet_audio.wavelets import FilterSet, WaveletFamily, coefficients_for, to_family


@dataclass(frozen=True)
class CoefficientBuffer:
    """Flat coefficient array plus the lengths of the bands it holds.

    Multi-level buffers are ordered coarse-to-fine: band 0 is the final
    approximation, band 1 the coarsest detail and the last band the finest
    detail (the one produced first). ``DWT.reconstruct_levels`` relies on
    this order.
    """

    coeffs: np.ndarray
    lengths: tuple = field(default_factory=tuple)

    def __post_init__(self):
        coeffs = np.asarray(self.coeffs, dtype=np.float64).ravel()
        lengths = tuple(int(n) for n in self.lengths)
        if any(n < 0 for n in lengths):
            raise BandLayoutError(f"Band lengths must be non-negative, got {lengths}")
        if sum(lengths) != coeffs.size:
            raise BandLayoutError(
                f"Band lengths {lengths} sum to {sum(lengths)} "
                f"but the buffer holds {coeffs.size} coefficients"
            )
        object.__setattr__(self, "coeffs", coeffs)
        object.__setattr__(self, "lengths", lengths)

    @classmethod
    def empty(cls):
        return cls(np.array([], dtype=np.float64), ())

    @classmethod
    def from_bands(cls, bands):
        bands = [np.asarray(b, dtype=np.float64) for b in bands]
        if not bands:
            return cls.empty()
        return cls(np.concatenate(bands), tuple(len(b) for b in bands))

    @property
    def depth(self) -> int:
        return max(len(self.lengths) - 1, 0)

    def band(self, index: int) -> np.ndarray:
        start = sum(self.lengths[:index])
        return self.coeffs[start : start + self.lengths[index]]

    def bands(self) -> list:
        out = []
        pos = 0
        for n in self.lengths:
            out.append(self.coeffs[pos : pos + n])
            pos += n
        return out

    def __len__(self):
        return self.coeffs.size


def _gather(values: np.ndarray, idx: np.ndarray, valid: np.ndarray) -> np.ndarray:
    if values.size == 0:
        return np.zeros(idx.shape, dtype=np.float64)
    return np.where(valid, values[np.clip(idx, 0, values.size - 1)], 0.0)


class DWT:
    """Discrete wavelet transform engine for one wavelet family.

    The filter set is resolved once at construction; the engine holds no
    other state and may be shared between threads.
    """

    def __init__(self, family=WaveletFamily.DAUBECHIES4):
        self._family = to_family(family)
        self._filters = coefficients_for(self._family)

    @property
    def family(self) -> WaveletFamily:
        return self._family

    @property
    def filters(self) -> FilterSet:
        return self._filters

    @property
    def filter_length(self) -> int:
        return self._filters.filter_length

    def __repr__(self):
        return f"DWT({self._family.value!r})"

    def extend(self, signal) -> np.ndarray:
        """Mirror ``L-1`` samples onto each end, without repeating the endpoints."""
        x = np.asarray(signal, dtype=np.float64)
        pad = self.filter_length - 1
        if len(x) < pad:
            raise SignalTooShortError(self._family.value, pad, len(x))
        if pad == 0:
            return x.copy()
        return np.concatenate([x[:pad][::-1], x, x[-pad:][::-1]])

    def _convolve_downsample(self, padded: np.ndarray, taps: np.ndarray) -> np.ndarray:
        out_len = len(padded) // 2
        idx = 2 * np.arange(out_len)[:, None] + np.arange(len(taps))[None, :]
        terms = _gather(padded, idx, idx < len(padded))
        return terms @ taps

    def _upsample_convolve(self, band: np.ndarray, taps: np.ndarray, out_len: int) -> np.ndarray:
        s = np.arange(out_len)[:, None] + np.arange(len(taps))[None, :]
        half = s // 2
        terms = _gather(band, half, (s % 2 == 0) & (half < len(band)))
        return terms @ taps

    def decompose(self, signal) -> CoefficientBuffer:
        """Single-level forward transform: bands ``[approx, detail]``."""
        x = np.asarray(signal, dtype=np.float64)
        if x.size == 0:
            return CoefficientBuffer.empty()
        padded = self.extend(x)
        cA = self._convolve_downsample(padded, self._filters.dec_lo)
        cD = self._convolve_downsample(padded, self._filters.dec_hi)
        return CoefficientBuffer.from_bands([cA, cD])

    def reconstruct_bands(self, cA, cD) -> np.ndarray:
        """Single-level inverse from an approximation band and a detail band.

        The output holds ``2 * len(cA)`` samples.
        """
        cA = np.asarray(cA, dtype=np.float64)
        cD = np.asarray(cD, dtype=np.float64)
        out_len = 2 * len(cA)
        low = self._upsample_convolve(cA, self._filters.rec_lo, out_len)
        high = self._upsample_convolve(cD, self._filters.rec_hi, out_len)
        return low + high

    def reconstruct(self, buffer: CoefficientBuffer) -> np.ndarray:
        if len(buffer.lengths) != 2:
            raise BandLayoutError(
                f"Single-level reconstruction needs exactly 2 bands, "
                f"got {len(buffer.lengths)} (lengths={buffer.lengths})"
            )
        cA, cD = buffer.bands()
        return self.reconstruct_bands(cA, cD)

    def decompose_levels(self, signal, max_levels: int) -> CoefficientBuffer:
        """Multi-level forward transform.

        Stops early once the running approximation drops below 2 samples,
        so the achieved depth (``buffer.depth``) may be less than
        ``max_levels``.
        """
        if max_levels < 0:
            raise ValueError(f"max_levels must be non-negative, got {max_levels}")
        current = np.asarray(signal, dtype=np.float64)
        if current.size == 0:
            return CoefficientBuffer.empty()

        details = []
        for _ in range(max_levels):
            if len(current) < 2:
                break
            step = self.decompose(current)
            if len(step.lengths) < 2:
                break
            cA, cD = step.bands()
            details.append(cD)
            current = cA

        # finest detail was produced first
        return CoefficientBuffer.from_bands([current] + details[::-1])

    def reconstruct_levels(self, buffer: CoefficientBuffer) -> np.ndarray:
        """Multi-level inverse.

        The result is not truncated: boundary padding makes it longer than
        the original signal, whose samples occupy the leading positions.
        """
        bands = buffer.bands()
        if not bands:
            return np.array([], dtype=np.float64)
        current = bands[0]
        for detail in bands[1:]:
            current = self.reconstruct_bands(current, detail)
        return np.asarray(current, dtype=np.float64)


def dwt(signal, family=WaveletFamily.DAUBECHIES4):
    return DWT(family).decompose(signal)


def idwt(buffer, family=WaveletFamily.DAUBECHIES4):
    return DWT(family).reconstruct(buffer)


def wavedec(signal, family=WaveletFamily.DAUBECHIES4, levels=5):
    return DWT(family).decompose_levels(signal, levels)


def waverec(buffer, family=WaveletFamily.DAUBECHIES4):
    return DWT(family).reconstruct_levels(buffer)
