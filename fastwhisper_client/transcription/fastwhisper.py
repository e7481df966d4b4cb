"""FastWhisperTranscriptionClient — OpenAI-compatible /transcriptions backend."""
import json
import logging
from collections.abc import Mapping

import httpx
import openai
from openai import AsyncOpenAI

from fastwhisper_client.constants import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT,
    ERROR_DETAIL_FIELD,
    MULTIPART_CONTENT_TYPE,
    TRANSCRIPTION_LANGUAGE,
    TRANSCRIPTION_MODEL,
    TRANSCRIPTION_RESPONSE_FORMAT,
    TRANSCRIPTIONS_PATH,
)
from fastwhisper_client.errors import (
    AuthenticationError,
    MalformedResponse,
    PayloadTooLarge,
    ServiceError,
    TranscriptionError,
    UnknownError,
    UnsupportedMediaType,
)
from fastwhisper_client.transcription.client import TranscriptionClient

logger = logging.getLogger(__name__)


# ── pure helpers (module-level so tests can import them directly) ──────────────


def normalize_response(payload: object) -> str:
    """Resolve either success shape to the transcript text.

    `{"text": ...}` is the plain shape; `{"<file name>": {"text": ...}}` is the
    keyed-by-filename shape, of which only the first entry is read.
    """
    match payload:
        case {"text": str() as text}:
            return text
        case Mapping() if len(payload) > 0:
            match next(iter(payload.values())):
                case {"text": str() as text}:
                    return text
                case _:
                    raise MalformedResponse()
        case _:
            raise MalformedResponse()


def _detail(body: object) -> str | None:
    match body:
        case {"detail": str() as detail} if detail:
            return detail
        case Mapping() if body.get(ERROR_DETAIL_FIELD):
            return json.dumps(body[ERROR_DETAIL_FIELD])
        case _:
            return None


def classify_status_error(exc: openai.APIStatusError) -> TranscriptionError:
    """401 → 413 → 415 → detail → unknown, first match wins."""
    match (exc.status_code, _detail(exc.body)):
        case (401, _):
            return AuthenticationError()
        case (413, _):
            return PayloadTooLarge()
        case (415, _):
            return UnsupportedMediaType()
        case (_, str() as detail):
            return ServiceError(detail)
        case _:
            return UnknownError()


def _decode(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        raise MalformedResponse() from None


# ── client ────────────────────────────────────────────────────────────────────


class FastWhisperTranscriptionClient(TranscriptionClient):

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = float(DEFAULT_TIMEOUT),
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout

    async def transcribe(self, audio: bytes, file_name: str) -> str:
        # One request per call: the SDK's own retry loop is switched off.
        client = AsyncOpenAI(
            api_key=self._api_key,
            base_url=self._base_url,
            timeout=self._timeout,
            max_retries=0,
        )
        try:
            response = await client.post(
                TRANSCRIPTIONS_PATH,
                cast_to=httpx.Response,
                body={
                    "model": TRANSCRIPTION_MODEL,
                    "response_format": TRANSCRIPTION_RESPONSE_FORMAT,
                    "language": TRANSCRIPTION_LANGUAGE,
                },
                files=[("file", (file_name, audio))],
                options={"headers": {"Content-Type": MULTIPART_CONTENT_TYPE}},
            )
        except openai.APIStatusError as exc:
            logger.debug("Transcription HTTP %s: %s", exc.status_code, exc.body)
            raise classify_status_error(exc) from exc
        except openai.APIError as exc:
            logger.debug("Transcription request failed: %s", exc)
            raise UnknownError() from exc

        return normalize_response(_decode(response))
