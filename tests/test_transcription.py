"""TDD: TranscriptionClient tests written FIRST"""
import httpx
import openai
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from fastwhisper_client.errors import (
    AuthenticationError,
    MalformedResponse,
    PayloadTooLarge,
    ServiceError,
    UnknownError,
    UnsupportedMediaType,
)
from fastwhisper_client.transcription.client import TranscriptionClient
from fastwhisper_client.transcription.fastwhisper import (
    FastWhisperTranscriptionClient,
    classify_status_error,
    normalize_response,
)

URL = "http://localhost:8000/v1/transcriptions"


def _request() -> httpx.Request:
    return httpx.Request("POST", URL)


def _status_error(status: int, body: object = None) -> openai.APIStatusError:
    response = httpx.Response(status, request=_request())
    match status:
        case 401:
            return openai.AuthenticationError("unauthorized", response=response, body=body)
        case _:
            return openai.APIStatusError(f"HTTP {status}", response=response, body=body)


def _mock_openai(**post_kwargs) -> MagicMock:
    mock_openai = MagicMock()
    mock_openai.post = AsyncMock(**post_kwargs)
    return mock_openai


async def _transcribe_with(mock_openai: MagicMock) -> str:
    client = FastWhisperTranscriptionClient(api_key="test-key")
    with patch("fastwhisper_client.transcription.fastwhisper.AsyncOpenAI", return_value=mock_openai):
        return await client.transcribe(b"fake-audio-data", "talk.mp3")


def test_fastwhisper_client_implements_abc():
    assert issubclass(FastWhisperTranscriptionClient, TranscriptionClient)


# ── response normalization ────────────────────────────────────────────────────


def test_normalize_plain_text_shape():
    assert normalize_response({"text": "hello", "language": "en"}) == "hello"


def test_normalize_keyed_by_filename_shape():
    assert normalize_response({"file1.mp3": {"text": "hi"}}) == "hi"


def test_normalize_keyed_shape_reads_first_entry_only():
    payload = {"a.mp3": {"text": "first"}, "b.mp3": {"text": "second"}}
    assert normalize_response(payload) == "first"


def test_normalize_empty_text_is_still_valid():
    assert normalize_response({"text": ""}) == ""


@pytest.mark.parametrize(
    "payload",
    [{}, [], "plain text body", None, {"text": 42}, {"file1.mp3": "hi"}, {"file1.mp3": {"words": []}}],
)
def test_normalize_rejects_unknown_shapes(payload):
    with pytest.raises(MalformedResponse):
        normalize_response(payload)


# ── error classification ──────────────────────────────────────────────────────


def test_classify_401_is_authentication_error():
    assert isinstance(classify_status_error(_status_error(401)), AuthenticationError)


def test_classify_401_wins_over_detail():
    error = classify_status_error(_status_error(401, {"detail": "bad token"}))
    assert isinstance(error, AuthenticationError)


def test_classify_413_is_payload_too_large():
    assert isinstance(classify_status_error(_status_error(413, {"detail": "too big"})), PayloadTooLarge)


def test_classify_415_is_unsupported_media_type():
    assert isinstance(classify_status_error(_status_error(415)), UnsupportedMediaType)


def test_classify_detail_is_service_error():
    error = classify_status_error(_status_error(500, {"detail": "Model not loaded"}))
    assert isinstance(error, ServiceError)
    assert error.detail == "Model not loaded"
    assert error.user_message == "Model not loaded"


def test_classify_without_detail_is_unknown():
    assert isinstance(classify_status_error(_status_error(502, "Bad Gateway")), UnknownError)


def test_classify_empty_detail_is_unknown():
    assert isinstance(classify_status_error(_status_error(500, {"detail": ""})), UnknownError)


# ── transcribe ────────────────────────────────────────────────────────────────


async def test_transcribe_posts_multipart_request():
    mock_openai = _mock_openai(return_value=httpx.Response(200, json={"text": "hello"}))
    client = FastWhisperTranscriptionClient(
        api_key="test-key", base_url="http://asr.local/v1", timeout=30.0
    )

    with patch(
        "fastwhisper_client.transcription.fastwhisper.AsyncOpenAI", return_value=mock_openai
    ) as mock_cls:
        result = await client.transcribe(b"fake-audio-data", "talk.mp3")

    assert result == "hello"
    mock_cls.assert_called_once_with(
        api_key="test-key", base_url="http://asr.local/v1", timeout=30.0, max_retries=0
    )
    mock_openai.post.assert_called_once()
    call = mock_openai.post.call_args
    assert call.args == ("/transcriptions",)
    assert call.kwargs["body"] == {"model": "base", "response_format": "text", "language": "en"}
    assert call.kwargs["files"] == [("file", ("talk.mp3", b"fake-audio-data"))]
    assert call.kwargs["options"]["headers"]["Content-Type"] == "multipart/form-data"


async def test_transcribe_normalizes_keyed_shape():
    mock_openai = _mock_openai(return_value=httpx.Response(200, json={"talk.mp3": {"text": "hi"}}))
    assert await _transcribe_with(mock_openai) == "hi"


async def test_transcribe_keeps_text_verbatim():
    mock_openai = _mock_openai(return_value=httpx.Response(200, json={"text": " padded \n"}))
    assert await _transcribe_with(mock_openai) == " padded \n"


async def test_transcribe_non_json_body_is_malformed():
    mock_openai = _mock_openai(return_value=httpx.Response(200, text="just words"))
    with pytest.raises(MalformedResponse):
        await _transcribe_with(mock_openai)


async def test_transcribe_raises_authentication_error_on_401():
    mock_openai = _mock_openai(side_effect=_status_error(401))
    with pytest.raises(AuthenticationError):
        await _transcribe_with(mock_openai)


async def test_transcribe_raises_service_error_with_detail():
    mock_openai = _mock_openai(side_effect=_status_error(400, {"detail": "Invalid language"}))
    with pytest.raises(ServiceError, match="Invalid language"):
        await _transcribe_with(mock_openai)


async def test_transcribe_connection_failure_is_unknown():
    mock_openai = _mock_openai(side_effect=openai.APIConnectionError(request=_request()))
    with pytest.raises(UnknownError):
        await _transcribe_with(mock_openai)


async def test_transcribe_timeout_is_unknown():
    mock_openai = _mock_openai(side_effect=openai.APITimeoutError(request=_request()))
    with pytest.raises(UnknownError):
        await _transcribe_with(mock_openai)


async def test_transcribe_makes_exactly_one_request_on_failure():
    mock_openai = _mock_openai(side_effect=_status_error(503))
    with pytest.raises(UnknownError):
        await _transcribe_with(mock_openai)
    assert mock_openai.post.await_count == 1
