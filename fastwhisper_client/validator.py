"""File Validator — size and extension checks for a candidate upload."""
from dataclasses import dataclass

from fastwhisper_client.constants import MAX_FILE_SIZE_BYTES, SUPPORTED_EXTENSIONS
from fastwhisper_client.errors import ValidationError, ValidationKind


@dataclass(frozen=True)
class Accepted:
    extension: str


@dataclass(frozen=True)
class Rejected:
    error: ValidationError

    @property
    def reason(self) -> str:
        return self.error.user_message


Verdict = Accepted | Rejected


def file_extension(file_name: str) -> str | None:
    """Lower-cased text after the last '.', or None when there is no dot."""
    match file_name.rpartition("."):
        case ("", "", _):
            return None
        case (_, _, ext):
            return ext.lower()


def validate(file_name: str, size_bytes: int) -> Verdict:
    """Size first, then extension; the first failing check wins."""
    if size_bytes > MAX_FILE_SIZE_BYTES:
        return Rejected(ValidationError(ValidationKind.TOO_LARGE))

    match file_extension(file_name):
        case str() as ext if ext in SUPPORTED_EXTENSIONS:
            return Accepted(extension=ext)
        case _:
            return Rejected(ValidationError(ValidationKind.UNSUPPORTED_TYPE))
