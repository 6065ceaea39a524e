"""Load Claude Code session files (JSON and JSONL formats)."""

import json
from pathlib import Path

from pydantic import ValidationError

from .schemas import LogEntry, SessionData


class SessionLoadError(Exception):
    """Raised when a session file cannot be read or parsed."""

    pass


class SessionValidationError(SessionLoadError):
    """Raised when a JSON session document does not match the expected structure."""

    pass


def parse_session_file(filepath):
    """Read a session file and return validated session data.

    Supports both JSON and JSONL formats. The file is read as bytes so that
    a JSONL line with invalid UTF-8 only costs that line.
    """
    filepath = Path(filepath)
    try:
        data = filepath.read_bytes()
    except OSError as e:
        raise SessionLoadError(f"Could not read {filepath}: {e}") from e
    return load_session(filepath, data)


def load_session(path, text):
    """Parse raw session text, detecting the format from the path and content.

    ``text`` may be ``str`` or UTF-8 ``bytes``. JSONL files have one log entry
    per line. Anything else is treated as a single JSON document with a
    top-level ``loglines`` array.
    """
    if str(path).endswith(".jsonl") or _is_jsonl(text):
        return _parse_jsonl(text)
    return _parse_json(text)


def _split_lines(text):
    return text.split(b"\n" if isinstance(text, bytes) else "\n")


def _is_jsonl(text):
    """Check whether the first non-blank line is a JSON object without ``loglines``."""
    for line in _split_lines(text):
        line = line.strip()
        if not line:
            continue
        try:
            obj = json.loads(line)
        except ValueError:
            return False
        return isinstance(obj, dict) and "loglines" not in obj
    return False


def _parse_json(text):
    try:
        json.loads(text)
    except ValueError as e:
        raise SessionLoadError(f"Invalid JSON: {e}") from e
    # Validating from the raw JSON also rejects lone surrogate escapes
    try:
        return SessionData.model_validate_json(text)
    except ValidationError as e:
        raise SessionValidationError(f"Invalid session data: {e}") from e


def _parse_jsonl(text):
    loglines = []
    for line in _split_lines(text):
        line = line.strip()
        if not line:
            continue
        if isinstance(line, bytes):
            try:
                line = line.decode("utf-8")
            except UnicodeDecodeError:
                continue
        try:
            entry = LogEntry.model_validate_json(line)
        except ValidationError:
            continue

        # Only user and assistant entries are kept from JSONL
        if entry.type not in ("user", "assistant"):
            continue
        loglines.append(entry)

    return SessionData(loglines=loglines)
