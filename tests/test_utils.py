import numpy as np
import soundfile as sf
from wavelet_audio.analysis import AudioAnalyzer
from wavelet_audio.utils import load_analysis, load_audio, read_audio, save_analysis, save_audio


def test_save_and_load_audio(tmp_path):
    path = str(tmp_path / "tone.wav")
    x = 0.5 * np.sin(2 * np.pi * 440 * np.arange(800) / 8000)
    save_audio(path, np.concatenate([x, np.ones(10)]), 8000, length=len(x))

    y, Fs = load_audio(path)
    assert Fs == 8000
    assert y.dtype == np.float64
    assert len(y) == len(x)
    np.testing.assert_allclose(y, x, atol=1e-3)


def test_read_audio_downmixes_stereo(tmp_path):
    path = str(tmp_path / "stereo.wav")
    left = np.full(100, 0.5)
    right = np.full(100, -0.25)
    sf.write(path, np.column_stack([left, right]), 16000)

    data = read_audio(path)
    assert data.channels == 2
    assert data.sample_rate == 16000
    assert data.samples.ndim == 1
    np.testing.assert_allclose(data.samples, 0.125, atol=1e-3)


def test_save_and_load_analysis(tmp_path):
    x = np.sin(0.2 * np.arange(64))
    analysis = AudioAnalyzer("haar").analyze(x, 3)
    params = {"wavelet": "haar", "levels": 3, "threshold": np.float64(0.1)}

    path = save_analysis(analysis, params, str(tmp_path / "out"))
    loaded, loaded_params = load_analysis(path)

    assert loaded_params == {"wavelet": "haar", "levels": 3, "threshold": 0.1}
    assert loaded.lengths == analysis.lengths
    assert loaded.levels == 3
    assert loaded.original_length == 64
    np.testing.assert_allclose(loaded.coefficients, analysis.coefficients)
    np.testing.assert_allclose(loaded.energy_distribution, analysis.energy_distribution)
