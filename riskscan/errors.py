"""Error types raised by the analyzers."""


class RiskScanError(Exception):
    """Base class for all riskscan errors."""


class UnsupportedFileType(RiskScanError, ValueError):
    def __init__(self, extension: str) -> None:
        super().__init__(f"File type not allowed: {extension or '(none)'}")
        self.extension = extension


class InvalidUrl(RiskScanError, ValueError):
    def __init__(self, url: str, detail: str | None = None) -> None:
        message = f"Invalid URL: {url!r}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.url = url


class ExtractionFailure(RiskScanError):
    """An extractor failed; analysis continues without its signals."""

    def __init__(self, extractor: str, cause: BaseException) -> None:
        super().__init__(f"{extractor} extractor failed: {cause}")
        self.extractor = extractor
        self.cause = cause


class CollaboratorTimeout(RiskScanError):
    """A network collaborator did not answer in time."""

    def __init__(self, step: str, timeout_seconds: float) -> None:
        super().__init__(f"{step} timed out after {timeout_seconds:g}s")
        self.step = step
        self.timeout_seconds = timeout_seconds
