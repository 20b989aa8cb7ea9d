# wavelets.py
from dataclasses import dataclass
from enum import Enum

import numpy as np

from wavelet_audio.exceptions import UnknownWaveletError


class WaveletFamily(Enum):
    HAAR = "haar"
    DAUBECHIES4 = "db4"
    DAUBECHIES8 = "db8"
    BIORTHOGONAL22 = "bior2.2"
    BIORTHOGONAL44 = "bior4.4"


def _taps(values) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class FilterSet:
    """Decomposition and reconstruction filters of one wavelet family.

    All four filters share a single length, the filter length L.
    """

    dec_lo: np.ndarray
    dec_hi: np.ndarray
    rec_lo: np.ndarray
    rec_hi: np.ndarray

    def __post_init__(self):
        for name in ("dec_lo", "dec_hi", "rec_lo", "rec_hi"):
            object.__setattr__(self, name, _taps(getattr(self, name)))
        sizes = {len(self.dec_lo), len(self.dec_hi), len(self.rec_lo), len(self.rec_hi)}
        if len(sizes) != 1:
            raise ValueError(f"filters must share one length, got {sorted(sizes)}")

    @property
    def filter_length(self) -> int:
        return len(self.dec_lo)


_R2 = 0.7071067811865476

# D4 taps
_DB4 = [0.4829629131445341, 0.8365163037378079, 0.2241438680420134, -0.1294095225512604]

_DB8_LO = [
    0.32580343, 0.01094572, -0.84322608, 0.04068942, 0.41809227,
    -0.04068942, -0.84322608, -0.01094572, 0.32580343,
]
_DB8_HI = [
    0.32580343, -0.01094572, -0.84322608, -0.04068942, 0.41809227,
    0.04068942, -0.84322608, 0.01094572, 0.32580343,
]

_BIOR44_LO = [
    0.03782845550699535, -0.023849465019380396, -0.11062440441842342,
    0.37740285561265297, 0.85269867900940344, 0.37740285561265297,
    -0.11062440441842342, -0.023849465019380396, 0.03782845550699535,
]
_BIOR44_HI = [0.0, 0.0, 0.0, _R2, -_R2, 0.0, 0.0, 0.0, 0.0]


# db8 and bior4.4 reuse the decomposition filters for reconstruction.
# This does not give perfect reconstruction for those two families.
FILTER_BANK = {
    WaveletFamily.HAAR: FilterSet(
        dec_lo=[_R2, _R2],
        dec_hi=[-_R2, _R2],
        rec_lo=[_R2, _R2],
        rec_hi=[_R2, -_R2],
    ),
    WaveletFamily.DAUBECHIES4: FilterSet(
        dec_lo=_DB4,
        dec_hi=[_DB4[3], -_DB4[2], _DB4[1], -_DB4[0]],
        rec_lo=_DB4[::-1],
        rec_hi=[-_DB4[0], _DB4[1], -_DB4[2], _DB4[3]],
    ),
    WaveletFamily.DAUBECHIES8: FilterSet(
        dec_lo=_DB8_LO,
        dec_hi=_DB8_HI,
        rec_lo=_DB8_LO,
        rec_hi=_DB8_HI,
    ),
    WaveletFamily.BIORTHOGONAL22: FilterSet(
        dec_lo=[-0.1767766952966369, 0.3535533905932738, 1.0606601717798214,
                0.3535533905932738, -0.1767766952966369],
        dec_hi=[0.0, 0.0, _R2, -_R2, 0.0],
        rec_lo=[0.0, 0.0, _R2, _R2, 0.0],
        rec_hi=[0.1767766952966369, 0.3535533905932738, -1.0606601717798214,
                0.3535533905932738, 0.1767766952966369],
    ),
    WaveletFamily.BIORTHOGONAL44: FilterSet(
        dec_lo=_BIOR44_LO,
        dec_hi=_BIOR44_HI,
        rec_lo=_BIOR44_LO,
        rec_hi=_BIOR44_HI,
    ),
}


def to_family(family) -> WaveletFamily:
    """Accept a WaveletFamily or its short name ("haar", "db4", ...)."""
    if isinstance(family, WaveletFamily):
        return family
    try:
        return WaveletFamily(str(family).lower())
    except ValueError:
        names = ", ".join(f.value for f in WaveletFamily)
        raise UnknownWaveletError(
            f"Unknown wavelet family {family!r}; expected one of: {names}"
        ) from None


def coefficients_for(family) -> FilterSet:
    fam = to_family(family)
    try:
        return FILTER_BANK[fam]
    except KeyError:
        raise UnknownWaveletError(f"No filter set registered for {fam}") from None


def normalize_coeffs(coeffs) -> np.ndarray:
    """Scale a tap sequence to unit L2 norm."""
    c = np.asarray(coeffs, dtype=np.float64)
    norm = np.sqrt(np.sum(c**2))
    if norm > 0:
        return c / norm
    return c
