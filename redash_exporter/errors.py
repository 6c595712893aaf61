class ExporterError(Exception):
    """Base class for recoverable failures inside one poll cycle."""


class FetchError(ExporterError):
    """A status endpoint could not be fetched."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"GET {path} failed: {reason}")
        self.path = path
        self.reason = reason


class NetworkError(FetchError):
    """No response was received (connection, DNS, TLS, timeout, bad URL)."""


class ReadError(FetchError):
    """A response arrived but its body could not be read."""


class DecodeError(ExporterError):
    """A fetched body could not be turned into a snapshot."""


class MalformedPayloadError(DecodeError):
    def __init__(self, kind: str, detail: str) -> None:
        super().__init__(f"{kind} parse error: {detail}. Is api key correct?")
        self.kind = kind
        self.detail = detail
