"""Assemble transcript pages and the index into complete HTML documents."""

import json
from dataclasses import dataclass, field
from pathlib import Path

import click

from .analysis import analyze_conversation, analyze_session
from .assets import CSS, JS
from .conversations import (
    PROMPTS_PER_PAGE,
    group_conversations,
    make_msg_id,
    page_filename,
    paginate_conversations,
)
from .parse import parse_session_file
from .render import _macros, get_template, render_markdown_text, render_message


@dataclass
class TranscriptOutput:
    """Rendered transcript: a mapping of output filename to HTML text."""

    files: dict = field(default_factory=dict)

    def write_to(self, output_dir):
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for filename, content in self.files.items():
            path = output_dir / filename
            path.write_text(content, encoding="utf-8")
            written.append(path)
        return written


def generate_pagination_html(current_page, total_pages):
    return _macros.pagination(current_page, total_pages)


def generate_index_pagination_html(total_pages):
    """Generate pagination for index page where Index is current (first page)."""
    return _macros.index_pagination(total_pages)


def render_page(conversations, page_num, total_pages, github_repo=None):
    messages_html = []
    for conv in conversations:
        is_first = True
        for log_type, message_json, timestamp in conv.messages:
            msg_html = render_message(log_type, message_json, timestamp, github_repo)
            if msg_html:
                # Wrap continuation summaries in collapsed details
                if is_first and conv.is_continuation:
                    msg_html = _macros.continuation(msg_html)
                messages_html.append(msg_html)
            is_first = False

    page_template = get_template("page.html")
    return page_template.render(
        css=CSS,
        js=JS,
        page_num=page_num,
        total_pages=total_pages,
        pagination_html=generate_pagination_html(page_num, total_pages),
        messages_html="".join(messages_html),
    )


def get_first_assistant_text(messages):
    """Return the first non-blank assistant text block of a conversation."""
    for log_type, message_json, _timestamp in messages:
        if log_type != "assistant":
            continue
        try:
            message_data = json.loads(message_json)
        except json.JSONDecodeError:
            continue
        content = message_data.get("content") if isinstance(message_data, dict) else None
        if isinstance(content, str) and content.strip():
            return content
        if not isinstance(content, list):
            continue
        for block in content:
            if not isinstance(block, dict) or block.get("type") != "text":
                continue
            text = block.get("text")
            if isinstance(text, str) and text.strip():
                return text
    return None


def _plural(count, noun):
    return f"{count} {noun}{'' if count == 1 else 's'}"


def render_index_page(conversations, loglines, total_pages, github_repo=None):
    session_stats = analyze_session(loglines)
    total_messages = sum(1 for e in loglines if e.type in ("user", "assistant"))
    total_tool_calls = sum(session_stats["tool_counts"].values())

    summary_html = _macros.index_summary(
        [
            _plural(len(conversations), "prompt"),
            _plural(total_messages, "message"),
            _plural(total_tool_calls, "tool call"),
            _plural(len(session_stats["commits"]), "commit"),
            _plural(total_pages, "page"),
        ]
    )

    index_items = []
    for i, conv in enumerate(conversations):
        prompt_num = i + 1
        page_num = (i // PROMPTS_PER_PAGE) + 1
        link = f"{page_filename(page_num)}#{make_msg_id(conv.timestamp)}"
        stats = analyze_conversation(conv.messages)

        long_texts_html = ""
        assistant_text = get_first_assistant_text(conv.messages)
        if assistant_text:
            long_texts_html = _macros.index_long_text(
                render_markdown_text(assistant_text)
            )
        stats_html = _macros.index_stats(stats["tool_stats"], long_texts_html)

        index_items.append(
            _macros.index_item(
                prompt_num,
                link,
                conv.timestamp,
                conv.user_text,
                stats_html,
                conv.is_continuation,
            )
        )
        for commit in stats["commits"]:
            index_items.append(
                _macros.index_commit(
                    commit.hash, commit.message, commit.timestamp, github_repo
                )
            )

    index_template = get_template("index.html")
    return index_template.render(
        css=CSS,
        js=JS,
        pagination_html=generate_index_pagination_html(total_pages),
        summary_html=summary_html,
        index_items_html="".join(index_items),
    )


def render_transcript(session, github_repo=None):
    """Render parsed session data to an index plus one document per page."""
    loglines = session.loglines
    conversations = group_conversations(loglines)
    pages = paginate_conversations(conversations)
    total_pages = len(pages)

    output = TranscriptOutput()
    output.files["index.html"] = render_index_page(
        conversations, loglines, total_pages, github_repo
    )
    for page_num, page_convs in enumerate(pages, start=1):
        output.files[page_filename(page_num)] = render_page(
            page_convs, page_num, total_pages, github_repo
        )
    return output


def render_transcript_from_file(filepath, github_repo=None):
    return render_transcript(parse_session_file(filepath), github_repo)


def save_transcript(output, output_dir):
    """Write a rendered transcript and echo one line per generated file."""
    output_dir = Path(output_dir)
    for path in output.write_to(output_dir):
        if path.name != "index.html":
            click.echo(f"Generated {path.name}")
    total_pages = len(output.files) - 1
    click.echo(
        f"Generated {(output_dir / 'index.html').resolve()} ({_plural(total_pages, 'page')})"
    )
    return output_dir


def generate_html(json_path, output_dir, github_repo=None):
    """Convert a session file into HTML files under ``output_dir``."""
    output = render_transcript_from_file(json_path, github_repo)
    save_transcript(output, output_dir)
    return output
