# features.py
import numpy as np


def spectral_centroid(energy) -> float:
    energy = np.asarray(energy, dtype=np.float64)
    return float(np.sum(np.arange(len(energy)) * energy))


def energy_entropy(energy) -> float:
    energy = np.asarray(energy, dtype=np.float64)
    nz = energy[energy > 0]
    return float(-np.sum(nz * np.log2(nz)))


def extract_features(analysis) -> np.ndarray:
    """
    Scalar features from an AudioAnalysis energy distribution.

    Returns, in order: total energy, band-0 energy, band-1 energy (only
    when the analysis has a second band), band centroid, energy entropy.
    """
    energy = np.asarray(analysis.energy_distribution, dtype=np.float64)
    if energy.size == 0:
        raise ValueError("Analysis has no bands to derive features from.")

    features = [float(energy.sum()), float(energy[0])]
    if energy.size > 1:
        features.append(float(energy[1]))
    features.append(spectral_centroid(energy))
    features.append(energy_entropy(energy))
    return np.array(features, dtype=np.float64)
