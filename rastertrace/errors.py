class RasterError(ValueError):
    """Raised when raster dimensions do not match its sample buffer."""


class InvalidSettingsError(ValueError):
    """Raised when a conversion setting is out of range or malformed."""


class ConversionError(RuntimeError):
    """
    A vectorization stage failed.

    The message carries the failing stage ("<stage> failed: <message>") and the
    original exception is chained as ``__cause__``.
    """

    def __init__(self, stage: str, message: str):
        self.stage = stage
        self.reason = message
        super().__init__(f"{stage} failed: {message}")

    def __reduce__(self):
        # must survive pickling across ProcessPoolExecutor workers
        return self.__class__, (self.stage, self.reason)
