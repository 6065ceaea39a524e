"""Command-line interface."""

import json
import re
import webbrowser
from urllib.parse import urlsplit

import click
from click_default_group import DefaultGroup
import httpx

from .analysis import analyze_session, sorted_tool_counts
from .conversations import group_conversations
from .parse import SessionLoadError, load_session, parse_session_file
from .transcript import render_transcript, save_transcript

GITHUB_REPO_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


def validate_repo(ctx, param, value):
    if value is None:
        return None
    if not GITHUB_REPO_PATTERN.match(value):
        raise click.BadParameter("expected owner/repo, e.g. simonw/datasette")
    return value


def is_url(path):
    """Check if a path is a URL (starts with http:// or https://)."""
    return path.startswith("http://") or path.startswith("https://")


def fetch_url(url):
    """Fetch a session file from a URL and return its text.

    Raises click.ClickException on network errors.
    """
    try:
        response = httpx.get(url, timeout=60.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.RequestError as e:
        raise click.ClickException(f"Failed to fetch URL: {e}")
    except httpx.HTTPStatusError as e:
        raise click.ClickException(
            f"Failed to fetch URL: {e.response.status_code} {e.response.reason_phrase}"
        )
    return response.text


def load_input(source):
    """Load session data from a local path or a URL."""
    try:
        if is_url(source):
            click.echo(f"Fetching {source}...", err=True)
            text = fetch_url(source)
            # The URL path decides the format, same as a local file name
            return load_session(urlsplit(source).path, text)
        return parse_session_file(source)
    except SessionLoadError as e:
        raise click.ClickException(str(e))


@click.group(cls=DefaultGroup, default="render", default_if_no_args=True)
@click.version_option(None, "-v", "--version", package_name="cc-transcript")
def cli():
    """Convert Claude Code session JSON/JSONL files to paginated HTML transcripts."""
    pass


@cli.command("render")
@click.argument("input_file")
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False),
    default="./output",
    show_default=True,
    help="Output directory.",
)
@click.option(
    "--repo",
    callback=validate_repo,
    help="GitHub repo (owner/name) used to link detected commits.",
)
@click.option(
    "--open",
    "open_browser",
    is_flag=True,
    help="Open the generated index.html in your default browser.",
)
def render_cmd(input_file, output, repo, open_browser):
    """Convert a session file or URL to HTML."""
    session = load_input(input_file)
    transcript = render_transcript(session, github_repo=repo)

    output = save_transcript(transcript, output)
    click.echo(f"Output: {output.resolve()}")

    if open_browser:
        index_url = (output / "index.html").resolve().as_uri()
        webbrowser.open(index_url)


@cli.command("stats")
@click.argument("input_file")
@click.option("--json", "as_json", is_flag=True, help="Print the statistics as JSON.")
def stats_cmd(input_file, as_json):
    """Print tool usage, commits and other statistics for a session."""
    session = load_input(input_file)
    conversations = group_conversations(session.loglines)
    stats = analyze_session(session.loglines)
    tool_counts = sorted_tool_counts(stats["tool_counts"])

    summary = {
        "prompts": len(conversations),
        "messages": sum(
            1 for e in session.loglines if e.type in ("user", "assistant")
        ),
        "tool_calls": sum(stats["tool_counts"].values()),
        "tools": dict(tool_counts),
        "commits": [commit._asdict() for commit in stats["commits"]],
        "long_texts": len(stats["long_texts"]),
    }

    if as_json:
        click.echo(json.dumps(summary, indent=2, ensure_ascii=False))
        return

    click.echo(f"Prompts: {summary['prompts']}")
    click.echo(f"Messages: {summary['messages']}")
    click.echo(f"Tool calls: {summary['tool_calls']}")
    for name, count in tool_counts:
        click.echo(f"  {name}: {count}")
    click.echo(f"Commits: {len(summary['commits'])}")
    for commit in stats["commits"]:
        click.echo(f"  {commit.hash[:7]} {commit.message}")
    click.echo(f"Long texts: {summary['long_texts']}")


def main():
    cli()
