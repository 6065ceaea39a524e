"""Tests for page and index assembly."""

from pathlib import Path

import pytest

from cc_transcript import (
    SessionData,
    TranscriptOutput,
    generate_html,
    parse_session_file,
    render_transcript,
    render_transcript_from_file,
    save_transcript,
)

FIXTURES = Path(__file__).parent
SAMPLE = FIXTURES / "sample_session.json"


def make_session(entries):
    return SessionData.model_validate({"loglines": entries})


def prompt(text, timestamp, **extra):
    return {
        "type": "user",
        "timestamp": timestamp,
        "message": {"role": "user", "content": text},
        **extra,
    }


def reply(blocks, timestamp):
    return {
        "type": "assistant",
        "timestamp": timestamp,
        "message": {"role": "assistant", "content": blocks},
    }


def prompts(count):
    return [prompt(f"Prompt {i}", f"2025-01-01T10:{i:02d}:00Z") for i in range(count)]


class TestOutputFiles:
    @pytest.mark.parametrize(
        "count,expected",
        [
            (0, ["index.html"]),
            (1, ["index.html", "page-001.html"]),
            (5, ["index.html", "page-001.html"]),
            (6, ["index.html", "page-001.html", "page-002.html"]),
            (10, ["index.html", "page-001.html", "page-002.html"]),
            (11, ["index.html", "page-001.html", "page-002.html", "page-003.html"]),
        ],
    )
    def test_page_files(self, count, expected):
        output = render_transcript(make_session(prompts(count)))
        assert list(output.files) == expected

    def test_empty_session_index(self):
        output = render_transcript(make_session([]))
        index_html = output.files["index.html"]
        assert index_html.startswith("<!DOCTYPE html>")
        assert "0 prompts · 0 messages · 0 tool calls · 0 commits · 0 pages" in index_html
        assert "page-001.html" not in index_html

    def test_prompts_land_on_their_page(self):
        output = render_transcript(make_session(prompts(7)))
        assert "Prompt 4" in output.files["page-001.html"]
        assert "Prompt 5" not in output.files["page-001.html"]
        assert "Prompt 5" in output.files["page-002.html"]
        assert 'href="page-002.html#msg-2025-01-01T10-05-00Z"' in output.files["index.html"]


class TestWriteScenario:
    def test_write_tool_on_page(self):
        session = make_session(
            [
                prompt("Please write a file", "2025-01-01T10:00:00Z"),
                reply(
                    [
                        {
                            "type": "tool_use",
                            "id": "toolu_1",
                            "name": "Write",
                            "input": {"file_path": "/a/b.txt", "content": "hi"},
                        }
                    ],
                    "2025-01-01T10:00:01Z",
                ),
            ]
        )
        output = render_transcript(session)
        page = output.files["page-001.html"]
        assert '<span class="file-tool-path">b.txt</span>' in page
        assert '<div class="file-tool-fullpath">/a/b.txt</div>' in page
        assert '<pre class="file-content">hi</pre>' in page
        assert "1 write" in output.files["index.html"]


class TestPagination:
    def test_single_page_has_only_index_link(self):
        page = render_transcript(make_session(prompts(1))).files["page-001.html"]
        assert '<div class="pagination"><a href="index.html" class="index-link">Index</a></div>' in page
        assert "Next &rarr;" not in page
        assert "page 1/1" in page

    def test_multi_page_controls(self):
        output = render_transcript(make_session(prompts(12)))
        first = output.files["page-001.html"]
        middle = output.files["page-002.html"]
        last = output.files["page-003.html"]

        assert '<span class="disabled">&larr; Prev</span>' in first
        assert '<a href="page-002.html">Next &rarr;</a>' in first
        assert '<span class="current">1</span>' in first

        assert '<a href="page-001.html">&larr; Prev</a>' in middle
        assert '<a href="page-003.html">Next &rarr;</a>' in middle
        assert "page 2/3" in middle

        assert '<span class="disabled">Next &rarr;</span>' in last

    def test_index_pagination(self):
        index_html = render_transcript(make_session(prompts(6))).files["index.html"]
        assert '<span class="current">Index</span>' in index_html
        assert '<a href="page-002.html">2</a>' in index_html
        assert '<a href="page-001.html">Next &rarr;</a>' in index_html


class TestSampleTranscript:
    @pytest.fixture
    def output(self):
        return render_transcript_from_file(SAMPLE)

    def test_index_summary(self, output):
        assert (
            '<p class="index-summary">2 prompts · 9 messages · 3 tool calls · 1 commit · 1 page</p>'
            in output.files["index.html"]
        )

    def test_index_items(self, output):
        index_html = output.files["index.html"]
        assert 'href="page-001.html#msg-2025-01-01T10-00-00-000Z"' in index_html
        assert 'href="page-001.html#msg-2025-01-01T10-05-00-000Z"' in index_html
        assert "<p>Create a **hello** script</p>" in index_html
        assert "1 write · 1 bash" in index_html
        assert "1 todo" in index_html
        assert "create the script now." in index_html

    def test_index_commit_without_repo(self, output):
        index_html = output.files["index.html"]
        assert '<span class="index-commit-hash">1a2b3c4</span>' in index_html
        assert '<div class="index-commit-msg">Add hello script</div>' in index_html
        assert "github.com" not in index_html

    def test_index_commit_with_repo(self):
        session = parse_session_file(SAMPLE)
        output = render_transcript(session, github_repo="owner/repo")
        assert 'href="https://github.com/owner/repo/commit/1a2b3c4"' in output.files["index.html"]
        assert 'href="https://github.com/owner/repo/commit/1a2b3c4"' in output.files["page-001.html"]

    def test_page_messages(self, output):
        page = output.files["page-001.html"]
        assert 'id="msg-2025-01-01T10-00-00-000Z"' in page
        assert 'id="msg-2025-01-01T10-05-04-000Z"' in page
        assert page.count('class="message tool-reply"') == 3
        assert "<strong>hello</strong>" in page
        assert 'class="thinking"' in page
        assert "todo-in-progress" in page
        assert "[main 1a2b3c4] Add hello script" in page


class TestContinuation:
    def test_continuation_is_wrapped(self):
        session = make_session(
            [
                prompt("Summary of the earlier session", "2025-01-01T09:00:00Z", isCompactSummary=True),
                prompt("Carry on", "2025-01-01T09:01:00Z"),
            ]
        )
        output = render_transcript(session)
        page = output.files["page-001.html"]
        assert '<details class="continuation"><summary>Session continuation summary</summary>' in page
        assert page.count("<details") == 1
        assert 'class="index-item continuation-item"' in output.files["index.html"]


class TestWriteOutput:
    def test_write_to_creates_directories(self, tmp_path):
        output = TranscriptOutput(files={"index.html": "<p>i</p>", "page-001.html": "<p>1</p>"})
        target = tmp_path / "out" / "nested"
        written = output.write_to(target)
        assert sorted(p.name for p in written) == ["index.html", "page-001.html"]
        assert (target / "page-001.html").read_text(encoding="utf-8") == "<p>1</p>"

    def test_generate_html(self, tmp_path, capsys):
        output = generate_html(SAMPLE, tmp_path)
        assert (tmp_path / "index.html").exists()
        assert (tmp_path / "page-001.html").exists()
        assert set(output.files) == {"index.html", "page-001.html"}
        captured = capsys.readouterr().out
        assert "Generated page-001.html" in captured
        assert "(1 page)" in captured

    def test_save_transcript_counts_pages(self, tmp_path, capsys):
        output = render_transcript(make_session(prompts(6)))
        assert save_transcript(output, tmp_path / "out") == tmp_path / "out"
        captured = capsys.readouterr().out
        assert "Generated page-002.html" in captured
        assert "(2 pages)" in captured
        assert "Generated index.html" not in captured
