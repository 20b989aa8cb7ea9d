# main.py
import numpy as np

from wavelet_audio.analysis import AudioAnalyzer
from wavelet_audio.audio import WindowType, apply_window, normalize
from wavelet_audio.features import extract_features
from wavelet_audio.utils import load_audio, save_analysis, save_audio

DEFAULT_PARAMS = {
    "wavelet": "db4",
    "levels": 6,
    "threshold": 0.05,
    "window": None,  # e.g. "hamming"
    "normalize": False,
}


def _prepare(audio, params):
    if params.get("normalize"):
        audio = normalize(audio)
    if params.get("window"):
        audio = apply_window(audio, WindowType(params["window"]))
    return audio


def denoise_file(audio_in, audio_out, params=None):
    params = {**DEFAULT_PARAMS, **(params or {})}
    audio, Fs = load_audio(audio_in)
    audio = _prepare(audio, params)

    analyzer = AudioAnalyzer(params["wavelet"])
    denoised = analyzer.denoise(audio, params["threshold"], params["levels"])

    # reconstruction carries boundary padding past the original length
    save_audio(audio_out, denoised, Fs, length=len(audio))
    return denoised[: len(audio)], Fs


def analyze_file(audio_in, output_dir, params=None):
    params = {**DEFAULT_PARAMS, **(params or {})}
    audio, Fs = load_audio(audio_in)
    audio = _prepare(audio, params)

    analysis = AudioAnalyzer(params["wavelet"]).analyze(audio, params["levels"])
    params["sample_rate"] = Fs
    save_analysis(analysis, params, output_dir)

    features = extract_features(analysis)
    print(f"Decomposition depth: {analysis.depth}")
    print("Energy distribution:", np.round(analysis.energy_distribution, 4))
    print("Features:", np.round(features, 4))
    return analysis, features


if __name__ == "__main__":
    mode = "denoise"  # set "denoise" or "analyze"

    if mode == "denoise":
        denoise_file("input.wav", "denoised.wav", {"threshold": 0.02})
        print("Denoising complete.")
    elif mode == "analyze":
        analyze_file("input.wav", "results/analysis", {"levels": 5})
        print("Analysis complete.")
