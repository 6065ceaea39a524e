"""Session and conversation statistics: tool usage, long texts and git commits."""

import json
import re
from typing import NamedTuple

from .schemas import get_entry_message

# Regex to match git commit output: [branch hash] message
# Shared by the analyzer and the tool result renderer.
COMMIT_PATTERN = re.compile(
    r"\[(?P<ref>[^\[\]\n]+?)[ \t]+(?P<hash>[0-9a-f]{7,})\][ \t]+(?P<message>[^\n]+)"
)

LONG_TEXT_THRESHOLD = 500
LONG_TEXT_PREVIEW_LENGTH = 200

# Tool input fields that usually carry file contents or replacement text
LONG_TEXT_INPUT_FIELDS = ("content", "new_string", "newString", "replacement")

TOOL_NAME_PREFIX = "mcp_"

TOOL_NAME_ALIASES = {
    "todowrite": "todo",
    "todoread": "todo",
    "todo_write": "todo",
    "todo_read": "todo",
    "bash": "bash",
    "write": "write",
    "edit": "edit",
    "read": "read",
    "glob": "glob",
    "grep": "grep",
}


class CommitRecord(NamedTuple):
    hash: str
    message: str
    timestamp: str


class LongText(NamedTuple):
    type: str
    preview: str
    full: str
    timestamp: str


def strip_tool_name(name):
    """Lower-case a tool name and drop the MCP prefix."""
    if not isinstance(name, str):
        name = "" if name is None else str(name)
    name = name.lower()
    if name.startswith(TOOL_NAME_PREFIX):
        name = name[len(TOOL_NAME_PREFIX) :]
    return name


def normalize_tool_name(name):
    """Collapse alias spellings of a tool name to one canonical key."""
    stripped = strip_tool_name(name)
    return TOOL_NAME_ALIASES.get(stripped, stripped)


def find_commits(text, timestamp=""):
    """Find every ``[ref hash] message`` commit line in a block of tool output."""
    if not isinstance(text, str):
        return []
    return [
        CommitRecord(match.group("hash"), match.group("message").strip(), timestamp)
        for match in COMMIT_PATTERN.finditer(text)
    ]


def tool_result_text(content):
    """Return tool result content as searchable text, flattening lists to JSON."""
    if isinstance(content, str):
        return content
    return json.dumps(content, ensure_ascii=False, default=str)


def _preview(text):
    return text[:LONG_TEXT_PREVIEW_LENGTH] + "..."


def _long_tool_input(tool_input):
    if not isinstance(tool_input, dict):
        return None
    for field in LONG_TEXT_INPUT_FIELDS:
        value = tool_input.get(field)
        if isinstance(value, str) and len(value) > LONG_TEXT_THRESHOLD:
            return value
    return None


def _iter_blocks(message_data):
    content = message_data.get("content")
    if not isinstance(content, list):
        return
    for block in content:
        if isinstance(block, dict):
            yield block


def analyze_session(loglines):
    """Analyze a whole session to extract tool counts, long texts and commits."""
    tool_counts = {}  # normalized tool name -> count
    long_texts = []
    commits = []

    for entry in loglines:
        if entry.type not in ("user", "assistant"):
            continue
        message = get_entry_message(entry)
        if message is None:
            continue
        timestamp = entry.timestamp or ""
        message_data = message.model_dump(exclude_unset=True)

        for block in _iter_blocks(message_data):
            block_type = block.get("type", "")
            if block_type == "tool_use":
                name = normalize_tool_name(block.get("name", ""))
                tool_counts[name] = tool_counts.get(name, 0) + 1
                text = _long_tool_input(block.get("input"))
                if text is not None:
                    long_texts.append(
                        LongText(block.get("name", ""), _preview(text), text, timestamp)
                    )
            elif block_type == "thinking":
                text = block.get("thinking", "")
                if len(text) > LONG_TEXT_THRESHOLD:
                    long_texts.append(
                        LongText("thinking", _preview(text), text, timestamp)
                    )
            elif block_type == "tool_result":
                text = tool_result_text(block.get("content", ""))
                commits.extend(find_commits(text, timestamp))

    return {
        "tool_counts": tool_counts,
        "long_texts": long_texts,
        "commits": commits,
    }


def analyze_conversation(messages):
    """Summarize tool usage and commits for one conversation on the index page."""
    tool_counts = {}
    commits = []

    for log_type, message_json, timestamp in messages:
        try:
            message_data = json.loads(message_json)
        except json.JSONDecodeError:
            continue
        if not isinstance(message_data, dict):
            continue

        for block in _iter_blocks(message_data):
            block_type = block.get("type", "")
            if block_type == "tool_use":
                name = normalize_tool_name(block.get("name", ""))
                tool_counts[name] = tool_counts.get(name, 0) + 1
            elif block_type == "tool_result":
                text = tool_result_text(block.get("content", ""))
                commits.extend(find_commits(text, timestamp))

    return {
        "tool_stats": format_tool_stats(tool_counts),
        "commits": commits,
    }


def sorted_tool_counts(tool_counts):
    """Tool counts ordered by descending count; ties keep first-seen order."""
    return sorted(tool_counts.items(), key=lambda x: -x[1])


def format_tool_stats(tool_counts):
    """Format tool counts into a concise summary string."""
    if not tool_counts:
        return ""
    return " · ".join(f"{count} {name}" for name, count in sorted_tool_counts(tool_counts))
