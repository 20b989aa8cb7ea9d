import numpy as np
import pytest
from wavelet_audio.analysis import AudioAnalysis, AudioAnalyzer
from wavelet_audio.features import energy_entropy, extract_features, spectral_centroid


def _analysis(energy):
    energy = np.asarray(energy, dtype=float)
    return AudioAnalysis(
        levels=len(energy) - 1,
        energy_distribution=energy,
        coefficients=np.zeros(len(energy)),
        lengths=tuple([1] * len(energy)),
        original_length=len(energy),
    )


def test_extract_features_values():
    f = extract_features(_analysis([0.5, 0.25, 0.25]))
    assert len(f) == 5
    np.testing.assert_allclose(f[:3], [1.0, 0.5, 0.25])
    assert abs(f[3] - 0.75) < 1e-12  # 0*0.5 + 1*0.25 + 2*0.25
    assert abs(f[4] - 1.5) < 1e-12


def test_extract_features_single_band():
    f = extract_features(_analysis([1.0]))
    assert len(f) == 4
    assert f[-1] == 0.0


def test_extract_features_from_signal():
    n = 64
    samples = np.sin(2 * np.pi * 8 * np.arange(n) / n)
    analysis = AudioAnalyzer("haar").analyze(samples, 3)
    f = extract_features(analysis)
    assert f[0] >= 0.0
    assert abs(f[0] - 1.0) < 1e-9


def test_entropy_skips_zero_bands():
    assert energy_entropy([1.0, 0.0, 0.0]) == 0.0


def test_centroid():
    assert spectral_centroid([0.0, 0.0, 1.0]) == 2.0


def test_extract_features_empty():
    with pytest.raises(ValueError):
        extract_features(_analysis([]))
