"""Render message content blocks to HTML fragments."""

import html
import json

import markdown
from jinja2 import Environment, PackageLoader
from pydantic import BaseModel

from .analysis import COMMIT_PATTERN, strip_tool_name
from .conversations import is_tool_result_message, make_msg_id

# Set up Jinja2 environment
_jinja_env = Environment(
    loader=PackageLoader("cc_transcript", "templates"),
    autoescape=True,
)

# Load macros template and expose macros
_macros_template = _jinja_env.get_template("macros.html")
_macros = _macros_template.module

TODO_STATUSES = {
    "pending": "pending",
    "in_progress": "in_progress",
    "in-progress": "in_progress",
    "completed": "completed",
}


def get_template(name):
    """Get a Jinja2 template by name."""
    return _jinja_env.get_template(name)


def format_json(obj):
    try:
        if isinstance(obj, str):
            obj = json.loads(obj)
        formatted = json.dumps(obj, indent=2, ensure_ascii=False)
        return f'<pre class="json">{html.escape(formatted)}</pre>'
    except (json.JSONDecodeError, TypeError, ValueError):
        return f"<pre>{html.escape(str(obj))}</pre>"


def dump_json(obj):
    return json.dumps(obj, indent=2, ensure_ascii=False, default=str)


def render_markdown_text(text):
    if not text:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return markdown.markdown(text, extensions=["fenced_code", "tables"])


def is_json_like(text):
    if not text or not isinstance(text, str):
        return False
    text = text.strip()
    return (text.startswith("{") and text.endswith("}")) or (
        text.startswith("[") and text.endswith("]")
    )


def get_filename(file_path):
    """Return the text after the last path separator."""
    return file_path.rsplit("/", 1)[-1] if "/" in file_path else file_path


def _input_value(tool_input, *keys, default=""):
    """Read the first present field, accepting snake_case and camelCase spellings."""
    for key in keys:
        value = tool_input.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            return value
        return dump_json(value)
    return default


def render_todo_write(tool_input, tool_id):
    todos = tool_input.get("todos")
    if not isinstance(todos, list):
        todos = []
    items = []
    for todo in todos:
        if isinstance(todo, dict):
            content = _input_value(todo, "content")
            status = todo.get("status")
            if not isinstance(status, str):
                status = None
            status = TODO_STATUSES.get(status, "pending")
        else:
            content, status = str(todo), "pending"
        items.append({"content": content, "status": status})
    return _macros.todo_list(items, tool_id)


def render_write_tool(tool_input, tool_id):
    """Render Write tool calls with file path header and content preview."""
    file_path = _input_value(tool_input, "file_path", "filePath", default="Unknown file")
    content = _input_value(tool_input, "content")
    return _macros.write_tool(file_path, get_filename(file_path), content, tool_id)


def render_edit_tool(tool_input, tool_id):
    """Render Edit tool calls with the removed and added text in separate sections."""
    file_path = _input_value(tool_input, "file_path", "filePath", default="Unknown file")
    old_string = _input_value(tool_input, "old_string", "oldString")
    new_string = _input_value(tool_input, "new_string", "newString")
    replace_all = bool(tool_input.get("replace_all") or tool_input.get("replaceAll"))
    return _macros.edit_tool(
        file_path, get_filename(file_path), old_string, new_string, replace_all, tool_id
    )


def render_bash_tool(tool_input, tool_id):
    """Render Bash tool calls with command as plain text."""
    command = _input_value(tool_input, "command")
    description = _input_value(tool_input, "description")
    return _macros.bash_tool(command, description, tool_id)


TOOL_RENDERERS = {
    "write": render_write_tool,
    "edit": render_edit_tool,
    "bash": render_bash_tool,
    "todowrite": render_todo_write,
    "todo_write": render_todo_write,
}


def render_image(block):
    source = block.get("source")
    if not isinstance(source, dict):
        source = {}
    media_type = source.get("media_type") or "image/png"
    data = source.get("data") or ""
    return _macros.image_block(media_type, data)


def render_tool_use(block):
    tool_name = block.get("name") or "Unknown tool"
    tool_input = block.get("input")
    if not isinstance(tool_input, dict):
        tool_input = {}
    tool_id = block.get("id") or ""

    renderer = TOOL_RENDERERS.get(strip_tool_name(tool_name))
    if renderer is not None:
        return renderer(tool_input, tool_id)

    description = _input_value(tool_input, "description")
    display_input = {k: v for k, v in tool_input.items() if k != "description"}
    return _macros.tool_use(tool_name, description, dump_json(display_input), tool_id)


def render_commit_links(content, github_repo):
    """Replace each commit line with a linked card, keeping surrounding text as is."""
    parts = []
    last_end = 0
    for match in COMMIT_PATTERN.finditer(content):
        before = content[last_end : match.start()]
        if before:
            parts.append(f"<pre>{html.escape(before)}</pre>")
        parts.append(
            _macros.commit_card(
                match.group("hash"), match.group("message").strip(), github_repo
            )
        )
        last_end = match.end()
    after = content[last_end:]
    if after:
        parts.append(f"<pre>{html.escape(after)}</pre>")
    return "".join(parts)


def render_tool_result(block, github_repo=None):
    content = block.get("content", "")
    is_error = bool(block.get("is_error"))
    collapsible = True

    if isinstance(content, list):
        parts = []
        for item in content:
            item_type = item.get("type") if isinstance(item, dict) else None
            if item_type == "image":
                collapsible = False
                parts.append(render_image(item))
            elif item_type == "text":
                parts.append(f"<pre>{html.escape(str(item.get('text', '')))}</pre>")
            else:
                parts.append(format_json(item))
        content_html = "".join(parts)
    elif isinstance(content, str):
        if github_repo and COMMIT_PATTERN.search(content):
            content_html = render_commit_links(content, github_repo)
        else:
            content_html = f"<pre>{html.escape(content)}</pre>"
    else:
        content_html = format_json(content)
    return _macros.tool_result(content_html, is_error, collapsible)


def render_content_block(block, github_repo=None):
    if isinstance(block, BaseModel):
        block = block.model_dump(exclude_unset=True)
    if not isinstance(block, dict):
        return _macros.unknown_block(dump_json(block))

    block_type = block.get("type", "")
    if block_type == "text":
        content_html = render_markdown_text(block.get("text", ""))
        return _macros.assistant_text(content_html)
    elif block_type == "thinking":
        content_html = render_markdown_text(block.get("thinking", ""))
        return _macros.thinking(content_html)
    elif block_type == "image":
        return render_image(block)
    elif block_type == "tool_use":
        return render_tool_use(block)
    elif block_type == "tool_result":
        return render_tool_result(block, github_repo)
    else:
        return _macros.unknown_block(dump_json(block))


def render_user_message_content(message_data, github_repo=None):
    content = message_data.get("content", "")
    if isinstance(content, str):
        if not content.strip():
            return ""
        if is_json_like(content):
            return _macros.user_content(format_json(content))
        return _macros.user_content(render_markdown_text(content))
    elif isinstance(content, list):
        return "".join(render_content_block(block, github_repo) for block in content)
    return f"<p>{html.escape(str(content))}</p>"


def render_assistant_message(message_data, github_repo=None):
    content = message_data.get("content", [])
    if isinstance(content, str):
        return _macros.assistant_text(render_markdown_text(content))
    elif isinstance(content, list):
        return "".join(render_content_block(block, github_repo) for block in content)
    return f"<p>{html.escape(str(content))}</p>"


def render_message(log_type, message_json, timestamp, github_repo=None):
    if not message_json:
        return ""
    try:
        message_data = json.loads(message_json)
    except json.JSONDecodeError:
        return ""
    if not isinstance(message_data, dict):
        return ""

    if log_type == "user":
        content_html = render_user_message_content(message_data, github_repo)
        # Check if this is a tool result message
        if is_tool_result_message(message_data):
            role_class, role_label = "tool-reply", "Tool reply"
        else:
            role_class, role_label = "user", "User"
    elif log_type == "assistant":
        content_html = render_assistant_message(message_data, github_repo)
        role_class, role_label = "assistant", "Assistant"
    else:
        return ""
    if not content_html.strip():
        return ""
    msg_id = make_msg_id(timestamp)
    return _macros.message(role_class, role_label, msg_id, timestamp, content_html)
