"""Convert Claude Code session logs to paginated, mobile-friendly HTML transcripts."""

from .analysis import (
    COMMIT_PATTERN,
    CommitRecord,
    LongText,
    analyze_conversation,
    analyze_session,
    find_commits,
    format_tool_stats,
    normalize_tool_name,
)
from .cli import cli, main
from .conversations import (
    PROMPTS_PER_PAGE,
    Conversation,
    ConversationMessage,
    calculate_total_pages,
    group_conversations,
    make_msg_id,
    page_filename,
    paginate_conversations,
)
from .parse import (
    SessionLoadError,
    SessionValidationError,
    load_session,
    parse_session_file,
)
from .render import render_content_block, render_message
from .schemas import LogEntry, Message, SessionData
from .transcript import (
    TranscriptOutput,
    generate_html,
    render_index_page,
    render_page,
    render_transcript,
    render_transcript_from_file,
    save_transcript,
)
