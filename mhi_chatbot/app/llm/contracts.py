from __future__ import annotations


class UpstreamError(Exception):
    """Base failure talking to the inference server.

    ``cause`` is the human-readable explanation surfaced to chat users.
    """

    def __init__(self, cause: str) -> None:
        super().__init__(cause)
        self.cause = cause


class UpstreamConnectionError(UpstreamError):
    pass


class UpstreamStatusError(UpstreamError):
    def __init__(self, cause: str, status_code: int) -> None:
        super().__init__(cause)
        self.status_code = status_code


class UpstreamTimeoutError(UpstreamError):
    pass
