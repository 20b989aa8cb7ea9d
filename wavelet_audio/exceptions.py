# exceptions.py


class WaveletError(ValueError):
    """Base class for transform errors."""


class UnknownWaveletError(WaveletError):
    pass


class SignalTooShortError(WaveletError):
    def __init__(self, family, required, actual):
        self.family = family
        self.required = required
        self.actual = actual
        super().__init__(
            f"{family} needs at least {required} samples for boundary "
            f"extension, got {actual}"
        )


class BandLayoutError(WaveletError):
    pass
