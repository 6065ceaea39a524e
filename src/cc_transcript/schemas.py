"""Pydantic models describing the structure of a Claude Code session log."""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field


class TextBlock(BaseModel):
    type: Literal["text"]
    text: str


class ThinkingBlock(BaseModel):
    type: Literal["thinking"]
    thinking: str


class ImageSource(BaseModel):
    type: Optional[Literal["base64"]] = None
    media_type: str
    data: str


class ImageBlock(BaseModel):
    type: Literal["image"]
    source: ImageSource


class ToolUseBlock(BaseModel):
    type: Literal["tool_use"]
    id: str
    name: str
    input: dict[str, Any]


class ToolResultBlock(BaseModel):
    type: Literal["tool_result"]
    tool_use_id: Optional[str] = None
    content: Union[str, list[Any]]
    is_error: Optional[bool] = None


ContentBlock = Annotated[
    Union[TextBlock, ThinkingBlock, ImageBlock, ToolUseBlock, ToolResultBlock],
    Field(discriminator="type"),
]

MessageContent = Union[str, list[ContentBlock]]


class Message(BaseModel):
    role: Optional[Literal["user", "assistant"]] = None
    content: MessageContent


class LogEntry(BaseModel):
    """A single log line.

    Two shapes are accepted: the legacy one nests the payload under
    ``message`` while the current one carries ``content`` directly.
    """

    type: Literal["user", "assistant", "summary", "tool_use", "tool_result"]
    timestamp: Optional[str] = None
    message: Optional[Message] = None
    content: Optional[MessageContent] = None
    isCompactSummary: Optional[bool] = None
    sessionId: Optional[str] = None
    cwd: Optional[str] = None
    gitBranch: Optional[str] = None
    uuid: Optional[str] = None
    summary: Optional[str] = None
    leafUuid: Optional[str] = None
    isMeta: Optional[bool] = None
    toolName: Optional[str] = None
    toolUseId: Optional[str] = None
    toolInput: Optional[Any] = None
    isError: Optional[bool] = None


class SessionData(BaseModel):
    loglines: list[LogEntry]


def get_entry_message(entry: LogEntry) -> Optional[Message]:
    """Return the entry's message, preferring the nested shape over the flat one."""
    if entry.message is not None:
        return entry.message
    if entry.content is not None:
        return Message(content=entry.content)
    return None
