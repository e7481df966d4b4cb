"""Search/highlight — pure helpers over an immutable transcript."""
import re

from fastwhisper_client.constants import HIGHLIGHT_CLOSE, HIGHLIGHT_OPEN


def _pattern(term: str) -> re.Pattern[str]:
    # User input is always a literal, never a regex.
    return re.compile(re.escape(term), re.IGNORECASE)


def find_matches(text: str, term: str) -> list[tuple[int, int]]:
    """(start, end) spans of every non-overlapping case-insensitive occurrence."""
    match term:
        case "":
            return []
        case _:
            return list(map(lambda m: m.span(), _pattern(term).finditer(text)))


def count_matches(text: str, term: str) -> int:
    return len(find_matches(text, term))


def highlight(
    text: str,
    term: str,
    open_tag: str = HIGHLIGHT_OPEN,
    close_tag: str = HIGHLIGHT_CLOSE,
) -> str:
    """Wrap each occurrence of `term` in open/close tags, keeping original casing."""
    match term:
        case "":
            return text
        case _:
            return _pattern(term).sub(lambda m: f"{open_tag}{m.group(0)}{close_tag}", text)
