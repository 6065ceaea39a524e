"""Group session log entries into conversations and split them into pages."""

import functools
import re
from dataclasses import dataclass, field
from typing import NamedTuple

from .schemas import get_entry_message

PROMPTS_PER_PAGE = 5
PREVIEW_LENGTH = 100


class ConversationMessage(NamedTuple):
    type: str
    message_json: str
    timestamp: str


@dataclass
class Conversation:
    """One user prompt plus everything that follows it until the next prompt."""

    user_text: str
    timestamp: str
    messages: list = field(default_factory=list)
    is_continuation: bool = False


def is_tool_result_message(message_data):
    """Check if a message contains only tool_result blocks."""
    content = message_data.get("content", [])
    if not isinstance(content, list):
        return False
    if not content:
        return False
    return all(
        isinstance(block, dict) and block.get("type") == "tool_result"
        for block in content
    )


def get_user_text_preview(message_data):
    """Build the short, single-line preview shown for a user prompt."""
    content = message_data.get("content", "")
    preview = ""
    if isinstance(content, str):
        preview = content
    elif isinstance(content, list):
        for block in content:
            if isinstance(block, dict) and block.get("type") == "text":
                text = block.get("text")
                if isinstance(text, str):
                    preview = text
                    break
        if not preview and content:
            first = content[0]
            if isinstance(first, dict) and first.get("type"):
                preview = f"[{first['type']}]"

    preview = " ".join(preview.split())
    if len(preview) > PREVIEW_LENGTH:
        return preview[:PREVIEW_LENGTH] + "..."
    return preview


def _group_step(conversations, entry):
    if entry.type not in ("user", "assistant"):
        return conversations
    message = get_entry_message(entry)
    if message is None:
        return conversations

    timestamp = entry.timestamp or ""
    message_data = message.model_dump(exclude_unset=True)

    if entry.type == "user" and not is_tool_result_message(message_data):
        conversations.append(
            Conversation(
                user_text=get_user_text_preview(message_data),
                timestamp=timestamp,
                is_continuation=bool(entry.isCompactSummary),
            )
        )
    # Tool replies and assistant output before the first prompt are dropped
    if conversations:
        conversations[-1].messages.append(
            ConversationMessage(
                entry.type, message.model_dump_json(exclude_unset=True), timestamp
            )
        )
    return conversations


def group_conversations(loglines):
    """Fold session entries into an ordered list of conversations."""
    return functools.reduce(_group_step, loglines, [])


def paginate_conversations(conversations, per_page=PROMPTS_PER_PAGE):
    """Split conversations into consecutive pages of ``per_page`` items."""
    if per_page < 1:
        raise ValueError(f"per_page must be at least 1, got {per_page}")
    return [
        conversations[start : start + per_page]
        for start in range(0, len(conversations), per_page)
    ]


def calculate_total_pages(total_conversations, per_page=PROMPTS_PER_PAGE):
    return (total_conversations + per_page - 1) // per_page


def page_filename(page_num):
    return f"page-{page_num:03d}.html"


def make_msg_id(timestamp):
    return "msg-" + re.sub(r"[^A-Za-z0-9]", "-", timestamp or "")
