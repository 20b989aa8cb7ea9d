# utils.py
import json
import os
from dataclasses import dataclass

import numpy as np
import soundfile as sf

from wavelet_audio.analysis import AudioAnalysis


@dataclass
class AudioData:
    samples: np.ndarray  # mono, float64
    sample_rate: int
    channels: int


def read_audio(audio_path: str) -> AudioData:
    """Read an audio file, downmixing to mono and keeping the channel count."""
    audio, Fs = sf.read(audio_path, always_2d=True)
    channels = audio.shape[1]
    audio = audio.mean(axis=1).astype(np.float64)
    return AudioData(samples=audio, sample_rate=int(Fs), channels=channels)


def load_audio(audio_path: str) -> tuple[np.ndarray, int]:
    """Load and preprocess audio signal."""
    data = read_audio(audio_path)
    return data.samples, data.sample_rate


def save_audio(audio_path: str, samples, sample_rate: int, length: int = None) -> None:
    """Write mono samples, optionally truncated to ``length``."""
    out = np.asarray(samples, dtype=np.float64)
    if length is not None:
        out = out[:length]
    sf.write(audio_path, out, sample_rate)
    print(f"Saved {len(out)} samples to {audio_path}")


def _plain(v):
    if isinstance(v, np.ndarray):
        return v.tolist()
    if hasattr(v, "item"):
        return v.item()
    if hasattr(v, "value"):  # enums
        return v.value
    return v


def save_analysis(analysis: AudioAnalysis, params: dict, output_dir: str) -> str:
    """Save an analysis and the parameters that produced it to JSON."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, "analysis.json")
    data = {
        "params": {k: _plain(v) for k, v in params.items()},
        "levels": int(analysis.levels),
        "energy_distribution": _plain(analysis.energy_distribution),
        "coefficients": _plain(analysis.coefficients),
        "lengths": list(analysis.lengths),
        "original_length": int(analysis.original_length),
    }
    with open(path, "w") as f:
        json.dump(data, f)
    print(f"Saved analysis to {path}")
    return path


def load_analysis(path: str) -> tuple[AudioAnalysis, dict]:
    """Load an analysis and its parameters from JSON."""
    with open(path, "r") as f:
        data = json.load(f)
    analysis = AudioAnalysis(
        levels=data["levels"],
        energy_distribution=np.asarray(data["energy_distribution"], dtype=np.float64),
        coefficients=np.asarray(data["coefficients"], dtype=np.float64),
        lengths=tuple(data["lengths"]),
        original_length=data["original_length"],
    )
    return analysis, data.get("params", {})
