from enum import Enum


class ErrorCode(str, Enum):
    INVALID_ARGUMENT = "invalid-argument"
    RESOURCE_EXHAUSTED = "resource-exhausted"
    UNAUTHENTICATED = "unauthenticated"
    INTERNAL = "internal"

    @property
    def wire_status(self) -> str:
        return self.value.replace("-", "_").upper()

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.RESOURCE_EXHAUSTED: 429,
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.INTERNAL: 500,
}


class MediaError(Exception):
    """Typed failure: a machine-readable ``code`` plus a human-readable ``message``."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r})"


class MediaBackendError(MediaError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INTERNAL, message)
