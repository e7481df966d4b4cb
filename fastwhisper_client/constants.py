"""All magic values live here — no inline literals anywhere else."""

# Upload limits
MAX_FILE_SIZE_BYTES = 25 * 1024 * 1024
BYTES_PER_MB = 1024 * 1024

# Extension → display name, in the order they are listed to the user.
SUPPORTED_FORMATS: dict[str, str] = {
    "mp3": "MP3 Audio",
    "mp4": "MP4 Audio",
    "mpeg": "MPEG Audio",
    "mpga": "MPGA Audio",
    "m4a": "M4A Audio",
    "wav": "WAV Audio",
    "webm": "WebM Audio",
    "opus": "Opus Audio",
    "flac": "FLAC Audio",
    "ogg": "OGG Audio",
}
SUPPORTED_EXTENSIONS: tuple[str, ...] = tuple(SUPPORTED_FORMATS)

# Remote service wire values
TRANSCRIPTIONS_PATH = "/transcriptions"
TRANSCRIPTION_MODEL = "base"
TRANSCRIPTION_RESPONSE_FORMAT = "text"
TRANSCRIPTION_LANGUAGE = "en"
MULTIPART_CONTENT_TYPE = "multipart/form-data"
ERROR_DETAIL_FIELD = "detail"

# Config defaults
DEFAULT_API_URL = "http://localhost:8000/v1"
DEFAULT_TIMEOUT = "300"
DEFAULT_HISTORY_PATH = ".transcription_history.json"

# Export / search rendering
EXPORT_FILENAME = "transcription.txt"
HIGHLIGHT_OPEN = "<mark>"
HIGHLIGHT_CLOSE = "</mark>"
HIGHLIGHT_STYLE = "black on yellow"
HISTORY_PREVIEW_CHARS = 60

# User-facing error messages
MSG_ERR_TOO_LARGE = "File size should be less than 25MB"
MSG_ERR_UNSUPPORTED_TYPE = (
    "Unsupported file type. Please upload one of the supported formats: "
    + ", ".join(SUPPORTED_EXTENSIONS)
)
MSG_ERR_NO_FILE = "Please select a file"
MSG_ERR_AUTH = "Authentication failed. Please check your credentials."
MSG_ERR_PAYLOAD_TOO_LARGE = "File is too large. Please upload a smaller file."
MSG_ERR_UNSUPPORTED_MEDIA = "Unsupported file type. Please upload a valid audio file."
MSG_ERR_MALFORMED = "Unexpected response format from server"
MSG_ERR_UNKNOWN = "Error transcribing file. Please try again."
MSG_ERR_IN_PROGRESS = "A transcription is already in progress"
MSG_ERR_NOT_FOUND = "No transcription with id %s"
MSG_ERR_NO_SELECTION = "No transcription selected"
MSG_ERR_NOTHING_TO_EXPORT = "Nothing to export — transcribe or select a file first"
MSG_ERR_BAD_BOOKMARK = "Bookmark offset must be within the transcript (0–%d)"

# Log messages
MSG_FILE_CHOSEN = "File chosen: %s (%.2f MB)"
MSG_FILE_REJECTED = "File rejected: %s"
MSG_SUBMITTING = "→ Submitting %s to %s"
MSG_TRANSCRIBED = "✓ Transcribed %s (%d chars)"
MSG_TRANSCRIPTION_FAILED = "✗ Transcription failed: %s"
MSG_HISTORY_LOADED = "Loaded %d transcription(s) from %s"
MSG_HISTORY_LOAD_FAILED = "History load failed: %s, starting fresh"
MSG_HISTORY_SAVE_FAILED = "History save failed: %s"
MSG_RECORD_DELETED = "Deleted transcription %s"
MSG_EXPORTED = "Exported transcript to %s"

# CLI output
MSG_TRANSCRIBING = "Transcribing..."
MSG_THANK_YOU = "🌸 Thank you for downloading! 🌸"
MSG_HISTORY_EMPTY = "No history yet — transcribe a file first."
MSG_TRANSCRIPT_PLACEHOLDER = "Your transcription will appear here..."
MSG_MATCHES = "%d match(es) for %r"
MSG_DELETED = "Deleted %s"
MSG_BOOKMARKS = "Bookmarks: %s"
MSG_KEYWORDS = "Keywords: %s"
MSG_FILE_INFO = "File: %s\nSize: %.2f MB"
