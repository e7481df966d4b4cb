import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from fastwhisper_client.constants import (
    DEFAULT_HISTORY_PATH,
    MSG_HISTORY_LOAD_FAILED,
    MSG_HISTORY_LOADED,
    MSG_HISTORY_SAVE_FAILED,
)
from fastwhisper_client.errors import RecordNotFound

logger = logging.getLogger(__name__)

HISTORY_STORE_PATH = Path(DEFAULT_HISTORY_PATH)


@dataclass
class TranscriptionRecord:
    id: str
    text: str
    timestamp: datetime
    bookmarks: list[int] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
            "bookmarks": list(self.bookmarks),
            "keywords": list(self.keywords),
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "TranscriptionRecord":
        return cls(
            id=str(raw["id"]),
            text=raw["text"],
            timestamp=datetime.fromisoformat(raw["timestamp"]),
            bookmarks=list(map(int, raw.get("bookmarks", []))),
            keywords=list(map(str, raw.get("keywords", []))),
        )


class HistoryStore:
    """Most-recent-first collection of records, snapshotted whole to one JSON file."""

    def __init__(self, path: Path = HISTORY_STORE_PATH) -> None:
        self._path = path
        self._records: list[TranscriptionRecord] = []
        self.load()

    def load(self) -> None:
        match self._path.exists():
            case True:
                try:
                    with open(self._path, encoding="utf-8") as f:
                        raw = json.load(f)
                    self._records = list(map(TranscriptionRecord.from_dict, raw))
                    logger.info(MSG_HISTORY_LOADED, len(self._records), self._path.name)
                except Exception as e:
                    logger.warning(MSG_HISTORY_LOAD_FAILED, e)
                    self._records = []
            case False:
                self._records = []

    def save(self) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(list(map(TranscriptionRecord.to_dict, self._records)), f, indent=2)
            os.replace(tmp, self._path)
        except Exception as e:
            logger.warning(MSG_HISTORY_SAVE_FAILED, e)

    # ── collection ────────────────────────────────────────────────────────────

    def insert_front(self, record: TranscriptionRecord) -> None:
        self._records.insert(0, record)
        self.save()

    def remove(self, record_id: str) -> bool:
        remaining = list(filter(lambda r: r.id != record_id, self._records))
        match len(remaining) == len(self._records):
            case True:
                return False
            case False:
                self._records = remaining
                self.save()
                return True

    def get(self, record_id: str) -> TranscriptionRecord | None:
        return next(filter(lambda r: r.id == record_id, self._records), None)

    def all(self) -> list[TranscriptionRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return self.get(str(record_id)) is not None

    # ── per-record annotations ────────────────────────────────────────────────

    def _require(self, record_id: str) -> TranscriptionRecord:
        match self.get(record_id):
            case None:
                raise RecordNotFound(record_id)
            case record:
                return record

    def add_bookmark(self, record_id: str, offset: int) -> TranscriptionRecord:
        record = self._require(record_id)
        record.bookmarks = sorted(set(record.bookmarks) | {offset})
        self.save()
        return record

    def remove_bookmark(self, record_id: str, offset: int) -> TranscriptionRecord:
        record = self._require(record_id)
        record.bookmarks = list(filter(lambda b: b != offset, record.bookmarks))
        self.save()
        return record

    def add_keyword(self, record_id: str, keyword: str) -> TranscriptionRecord:
        record = self._require(record_id)
        match keyword in record.keywords:
            case True:
                pass
            case False:
                record.keywords.append(keyword)
                self.save()
        return record

    def remove_keyword(self, record_id: str, keyword: str) -> TranscriptionRecord:
        record = self._require(record_id)
        record.keywords = list(filter(lambda k: k != keyword, record.keywords))
        self.save()
        return record
