class WebCheckError(Exception):
    """Base class for audit pipeline errors."""


class InvalidURLError(WebCheckError):
    """The supplied text could not be turned into an http(s) URL."""

    def __init__(self, raw):
        super().__init__(f"Invalid url: {raw!r}")
        self.raw = raw


class EngineFailure(WebCheckError):
    """An external audit engine (Lighthouse, axe) failed to produce a result."""

    def __init__(self, engine: str, message: str):
        super().__init__(f"{engine}: {message}")
        self.engine = engine
