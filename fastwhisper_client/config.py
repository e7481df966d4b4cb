from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os
from dotenv import load_dotenv

from fastwhisper_client.constants import (
    DEFAULT_API_URL,
    DEFAULT_HISTORY_PATH,
    DEFAULT_TIMEOUT,
)


@dataclass(frozen=True)
class Config:
    api_key: str
    api_url: str
    timeout: float
    history_path: Path
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        api_key = os.getenv("FASTWHISPER_API_KEY")
        api_url = os.getenv("FASTWHISPER_API_URL", DEFAULT_API_URL)
        timeout = os.getenv("FASTWHISPER_TIMEOUT", DEFAULT_TIMEOUT)
        history_path = os.getenv("HISTORY_PATH", DEFAULT_HISTORY_PATH)
        log_level = os.getenv("LOG_LEVEL", "INFO")

        return cls._validate(
            api_key=api_key,
            api_url=api_url.rstrip("/"),
            timeout=timeout,
            history_path=Path(history_path),
            log_level=log_level,
        )

    @staticmethod
    def _validate(
        api_key: Optional[str],
        api_url: str,
        timeout: str,
        history_path: Path,
        log_level: str,
    ) -> "Config":
        match api_key:
            case None | "":
                raise ValueError("FASTWHISPER_API_KEY must be set in .env")
            case _:
                pass

        match api_url:
            case "":
                raise ValueError("FASTWHISPER_API_URL must not be empty")
            case _:
                pass

        try:
            seconds = float(timeout)
        except ValueError:
            raise ValueError(f"FASTWHISPER_TIMEOUT must be a number, got {timeout!r}") from None
        match seconds:
            case s if s <= 0:
                raise ValueError("FASTWHISPER_TIMEOUT must be positive")
            case _:
                pass

        return Config(
            api_key=api_key,
            api_url=api_url,
            timeout=seconds,
            history_path=history_path,
            log_level=log_level,
        )
