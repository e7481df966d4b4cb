"""SessionController — the single owner of session state.

A session runs IDLE → VALIDATING → SUBMITTING → SUCCEEDED | FAILED, and the
next user action starts again from IDLE. Validator and client failures never
escape `submit()`; they become `state.error`, replacing any earlier message.
"""
import itertools
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable

from fastwhisper_client.constants import (
    BYTES_PER_MB,
    EXPORT_FILENAME,
    HIGHLIGHT_CLOSE,
    HIGHLIGHT_OPEN,
    MSG_ERR_UNKNOWN,
    MSG_EXPORTED,
    MSG_FILE_CHOSEN,
    MSG_FILE_REJECTED,
    MSG_RECORD_DELETED,
    MSG_SUBMITTING,
    MSG_TRANSCRIBED,
    MSG_TRANSCRIPTION_FAILED,
)
from fastwhisper_client.errors import (
    FastWhisperError,
    InvalidBookmark,
    NoFileSelected,
    NothingToExport,
    RecordNotFound,
    SubmissionInProgress,
    TranscriptionError,
    UnknownError,
)
from fastwhisper_client.highlight import highlight
from fastwhisper_client.history_store import HistoryStore, TranscriptionRecord
from fastwhisper_client.transcription.client import TranscriptionClient
from fastwhisper_client.validator import Accepted, Rejected, Verdict, validate

logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class PendingUpload:
    file_name: str
    data: bytes
    verdict: Verdict

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def size_mb(self) -> float:
        return self.size_bytes / BYTES_PER_MB


@dataclass
class SessionState:
    phase: SessionPhase = SessionPhase.IDLE
    transcript: str = ""
    search_term: str = ""
    selected: TranscriptionRecord | None = None
    bookmarks: list[int] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    pending: PendingUpload | None = None
    in_flight: bool = False
    error: str | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionController:

    def __init__(
        self,
        store: HistoryStore,
        transcriber: TranscriptionClient,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._transcriber = transcriber
        self._clock = clock
        self.state = SessionState()

    @property
    def store(self) -> HistoryStore:
        return self._store

    # ── file selection & submission ───────────────────────────────────────────

    def choose_file(self, file_name: str, data: bytes) -> Verdict:
        self._settle()
        verdict = validate(file_name, len(data))
        match verdict:
            case Accepted():
                self.state.pending = PendingUpload(file_name=file_name, data=data, verdict=verdict)
                self.state.error = None
                logger.info(MSG_FILE_CHOSEN, file_name, self.state.pending.size_mb)
            case Rejected(error=error):
                self.state.pending = None
                logger.info(MSG_FILE_REJECTED, error.user_message)
                self._fail(error)
        return verdict

    async def submit(self) -> TranscriptionRecord | None:
        match self.state.in_flight:
            case True:
                raise SubmissionInProgress()
            case False:
                pass

        self._settle()
        self.state.error = None

        match self.state.pending:
            case None:
                return self._fail(NoFileSelected())
            case upload:
                pass

        self.state.phase = SessionPhase.VALIDATING
        match validate(upload.file_name, upload.size_bytes):
            case Rejected(error=error):
                return self._fail(error)
            case Accepted():
                pass

        self.state.phase = SessionPhase.SUBMITTING
        self.state.in_flight = True
        logger.info(MSG_SUBMITTING, upload.file_name, type(self._transcriber).__name__)
        try:
            text = await self._transcriber.transcribe(upload.data, upload.file_name)
        except TranscriptionError as exc:
            logger.warning(MSG_TRANSCRIPTION_FAILED, exc.user_message)
            return self._fail(exc)
        except Exception:
            logger.exception(MSG_TRANSCRIPTION_FAILED, MSG_ERR_UNKNOWN)
            return self._fail(UnknownError())
        finally:
            self.state.in_flight = False
            self.state.pending = None

        now = self._clock()
        record = TranscriptionRecord(id=self._next_id(now), text=text, timestamp=now)
        self._store.insert_front(record)
        self._show(record)
        self.state.phase = SessionPhase.SUCCEEDED
        logger.info(MSG_TRANSCRIBED, upload.file_name, len(text))
        return record

    # ── history ───────────────────────────────────────────────────────────────

    def select(self, record_id: str) -> TranscriptionRecord:
        self._settle()
        match self._store.get(record_id):
            case None:
                raise RecordNotFound(record_id)
            case record:
                self._show(record)
                return record

    def delete(self, record_id: str) -> bool:
        self._settle()
        removed = self._store.remove(record_id)
        match self.state.selected:
            case TranscriptionRecord(id=selected_id) if selected_id == record_id:
                self.state.selected = None
            case _:
                pass
        if removed:
            logger.info(MSG_RECORD_DELETED, record_id)
        return removed

    def add_bookmark(self, offset: int) -> TranscriptionRecord:
        record = self._active()
        match offset:
            case int() if 0 <= offset <= len(record.text):
                pass
            case _:
                raise InvalidBookmark(len(record.text))
        return self._show(self._store.add_bookmark(record.id, offset))

    def remove_bookmark(self, offset: int) -> TranscriptionRecord:
        return self._show(self._store.remove_bookmark(self._active().id, offset))

    def add_keyword(self, keyword: str) -> TranscriptionRecord:
        return self._show(self._store.add_keyword(self._active().id, keyword.strip()))

    def remove_keyword(self, keyword: str) -> TranscriptionRecord:
        return self._show(self._store.remove_keyword(self._active().id, keyword.strip()))

    # ── viewing ───────────────────────────────────────────────────────────────

    def set_search_term(self, term: str) -> None:
        self.state.search_term = term

    def highlighted(self, open_tag: str = HIGHLIGHT_OPEN, close_tag: str = HIGHLIGHT_CLOSE) -> str:
        return highlight(self.state.transcript, self.state.search_term, open_tag, close_tag)

    def export(self, directory: Path) -> Path:
        match self.state.transcript:
            case "":
                raise NothingToExport()
            case text:
                path = directory / EXPORT_FILENAME
                path.write_text(text, encoding="utf-8")
                logger.info(MSG_EXPORTED, path)
                return path

    # ── internals ─────────────────────────────────────────────────────────────

    def _settle(self) -> None:
        """A finished session returns to IDLE on the next user action."""
        match self.state.phase:
            case SessionPhase.SUCCEEDED | SessionPhase.FAILED:
                self.state.phase = SessionPhase.IDLE
            case _:
                pass

    def _fail(self, error: FastWhisperError) -> None:
        self.state.error = error.user_message
        self.state.phase = SessionPhase.FAILED
        return None

    def _show(self, record: TranscriptionRecord) -> TranscriptionRecord:
        self.state.selected = record
        self.state.transcript = record.text
        self.state.bookmarks = list(record.bookmarks)
        self.state.keywords = list(record.keywords)
        return record

    def _active(self) -> TranscriptionRecord:
        match self.state.selected:
            case None:
                raise RecordNotFound()
            case record:
                return record

    def _next_id(self, now: datetime) -> str:
        millis = int(now.timestamp() * 1000)
        return str(next(filter(lambda m: str(m) not in self._store, itertools.count(millis))))
