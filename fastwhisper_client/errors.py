"""Error taxonomy — every failure the session can surface to the user."""
from enum import Enum

from fastwhisper_client.constants import (
    MSG_ERR_AUTH,
    MSG_ERR_BAD_BOOKMARK,
    MSG_ERR_IN_PROGRESS,
    MSG_ERR_MALFORMED,
    MSG_ERR_NO_FILE,
    MSG_ERR_NO_SELECTION,
    MSG_ERR_NOT_FOUND,
    MSG_ERR_NOTHING_TO_EXPORT,
    MSG_ERR_PAYLOAD_TOO_LARGE,
    MSG_ERR_TOO_LARGE,
    MSG_ERR_UNKNOWN,
    MSG_ERR_UNSUPPORTED_MEDIA,
    MSG_ERR_UNSUPPORTED_TYPE,
)


class FastWhisperError(Exception):
    """Base class. `user_message` is what the session shows."""

    user_message: str = MSG_ERR_UNKNOWN

    def __init__(self, user_message: str | None = None) -> None:
        self.user_message = user_message or self.user_message
        super().__init__(self.user_message)


# ── validation ────────────────────────────────────────────────────────────────


class ValidationKind(Enum):
    TOO_LARGE = "too_large"
    UNSUPPORTED_TYPE = "unsupported_type"


class ValidationError(FastWhisperError):

    def __init__(self, kind: ValidationKind) -> None:
        self.kind = kind
        match kind:
            case ValidationKind.TOO_LARGE:
                super().__init__(MSG_ERR_TOO_LARGE)
            case ValidationKind.UNSUPPORTED_TYPE:
                super().__init__(MSG_ERR_UNSUPPORTED_TYPE)


class NoFileSelected(FastWhisperError):
    user_message = MSG_ERR_NO_FILE


# ── remote service ────────────────────────────────────────────────────────────


class TranscriptionError(FastWhisperError):
    pass


class AuthenticationError(TranscriptionError):
    user_message = MSG_ERR_AUTH


class PayloadTooLarge(TranscriptionError):
    user_message = MSG_ERR_PAYLOAD_TOO_LARGE


class UnsupportedMediaType(TranscriptionError):
    user_message = MSG_ERR_UNSUPPORTED_MEDIA


class ServiceError(TranscriptionError):

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class MalformedResponse(TranscriptionError):
    user_message = MSG_ERR_MALFORMED


class UnknownError(TranscriptionError):
    user_message = MSG_ERR_UNKNOWN


# ── session ───────────────────────────────────────────────────────────────────


class SubmissionInProgress(FastWhisperError):
    user_message = MSG_ERR_IN_PROGRESS


class RecordNotFound(FastWhisperError):

    def __init__(self, record_id: str | None = None) -> None:
        self.record_id = record_id
        match record_id:
            case None:
                super().__init__(MSG_ERR_NO_SELECTION)
            case _:
                super().__init__(MSG_ERR_NOT_FOUND % record_id)


class NothingToExport(FastWhisperError):
    user_message = MSG_ERR_NOTHING_TO_EXPORT


class InvalidBookmark(FastWhisperError):

    def __init__(self, text_length: int) -> None:
        super().__init__(MSG_ERR_BAD_BOOKMARK % text_length)
