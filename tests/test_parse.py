"""Tests for session file format detection and loading."""

import json
from pathlib import Path

import pytest

from cc_transcript import (
    SessionLoadError,
    SessionValidationError,
    load_session,
    parse_session_file,
)
from cc_transcript.schemas import Message, TextBlock, ToolResultBlock, get_entry_message

FIXTURES = Path(__file__).parent


class TestJsonFormat:
    def test_parses_sample_json(self):
        data = parse_session_file(FIXTURES / "sample_session.json")
        assert [e.type for e in data.loglines] == [
            "summary",
            "user",
            "assistant",
            "user",
            "assistant",
            "user",
            "assistant",
            "user",
            "assistant",
            "user",
        ]

    def test_keeps_legacy_and_flat_message_shapes(self):
        data = parse_session_file(FIXTURES / "sample_session.json")
        legacy = data.loglines[1]
        assert legacy.message.content == "Create a **hello** script"
        flat = data.loglines[7]
        assert flat.message is None
        assert flat.content == "Now track the remaining work"

    def test_malformed_json_raises(self, tmp_path):
        p = tmp_path / "broken.json"
        p.write_text('{"loglines": [', encoding="utf-8")
        with pytest.raises(SessionLoadError):
            parse_session_file(p)

    def test_schema_failure_raises_validation_error(self, tmp_path):
        p = tmp_path / "invalid.json"
        payload = {
            "loglines": [
                {"type": "user", "message": {"content": "ok"}},
                {"type": "user", "message": {"content": [{"type": "bogus"}]}},
            ]
        }
        p.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(SessionValidationError):
            parse_session_file(p)

    def test_unknown_entry_type_fails_whole_document(self, tmp_path):
        p = tmp_path / "invalid.json"
        p.write_text(json.dumps({"loglines": [{"type": "system"}]}), encoding="utf-8")
        with pytest.raises(SessionValidationError):
            parse_session_file(p)

    def test_non_loglines_entries_are_kept_in_json_mode(self):
        text = json.dumps(
            {"loglines": [{"type": "summary", "summary": "s"}, {"type": "user", "content": "hi"}]}
        )
        data = load_session("session.json", text)
        assert [e.type for e in data.loglines] == ["summary", "user"]

    def test_missing_file_raises_load_error(self, tmp_path):
        with pytest.raises(SessionLoadError) as excinfo:
            parse_session_file(tmp_path / "does-not-exist.json")
        assert "does-not-exist.json" in str(excinfo.value)


class TestJsonlFormat:
    def test_keeps_only_valid_user_and_assistant_lines(self):
        data = parse_session_file(FIXTURES / "sample_session.jsonl")
        assert [e.type for e in data.loglines] == [
            "user",
            "assistant",
            "user",
            "assistant",
        ]
        assert [e.timestamp for e in data.loglines] == [
            "2025-02-01T09:00:00.000Z",
            "2025-02-01T09:00:02.000Z",
            "2025-02-01T09:00:04.000Z",
            "2025-02-01T09:00:06.000Z",
        ]

    def test_detects_jsonl_from_content(self):
        text = (FIXTURES / "sample_session.jsonl").read_text(encoding="utf-8")
        data = load_session("session.txt", text)
        assert len(data.loglines) == 4

    def test_detection_skips_leading_blank_lines(self):
        text = '\n\n{"type": "user", "content": "hi"}\n{"type": "assistant", "content": "hello"}\n'
        data = load_session("session.log", text)
        assert [e.type for e in data.loglines] == ["user", "assistant"]

    def test_single_line_json_document_is_not_jsonl(self):
        text = json.dumps({"loglines": [{"type": "user", "content": "hi"}]})
        data = load_session("session.data", text)
        assert data.loglines[0].content == "hi"

    def test_jsonl_extension_wins_over_content(self):
        # A loglines document in a .jsonl file is treated line by line and dropped
        text = json.dumps({"loglines": [{"type": "user", "content": "hi"}]})
        data = load_session("session.jsonl", text)
        assert data.loglines == []

    def test_empty_file(self):
        assert load_session("empty.jsonl", "").loglines == []


class TestEntryMessage:
    def test_prefers_nested_message(self):
        data = load_session(
            "s.json",
            json.dumps(
                {
                    "loglines": [
                        {
                            "type": "user",
                            "message": {"content": "nested"},
                            "content": "flat",
                        }
                    ]
                }
            ),
        )
        assert get_entry_message(data.loglines[0]).content == "nested"

    def test_falls_back_to_flat_content(self):
        data = load_session(
            "s.json",
            json.dumps(
                {
                    "loglines": [
                        {
                            "type": "user",
                            "content": [{"type": "tool_result", "content": "ok"}],
                        }
                    ]
                }
            ),
        )
        message = get_entry_message(data.loglines[0])
        assert isinstance(message, Message)
        assert isinstance(message.content[0], ToolResultBlock)

    def test_missing_message(self):
        data = load_session("s.json", json.dumps({"loglines": [{"type": "assistant"}]}))
        assert get_entry_message(data.loglines[0]) is None

    def test_blocks_are_typed(self):
        data = load_session(
            "s.json",
            json.dumps(
                {"loglines": [{"type": "assistant", "content": [{"type": "text", "text": "hi"}]}]}
            ),
        )
        assert isinstance(get_entry_message(data.loglines[0]).content[0], TextBlock)


class TestEncodingProblems:
    def test_jsonl_line_with_invalid_utf8_is_dropped(self, tmp_path):
        p = tmp_path / "session.jsonl"
        p.write_bytes(
            b'{"type": "user", "content": "first"}\n'
            b'{"type": "user", "content": "bad \xff\xfe bytes"}\n'
            b'{"type": "assistant", "content": "last"}\n'
        )
        data = parse_session_file(p)
        assert [e.type for e in data.loglines] == ["user", "assistant"]
        assert data.loglines[0].content == "first"

    def test_jsonl_content_detection_from_bytes(self):
        data = load_session("session.log", b'{"type": "user", "content": "hi"}\n')
        assert [e.content for e in data.loglines] == ["hi"]

    def test_json_document_with_invalid_utf8_raises(self, tmp_path):
        p = tmp_path / "session.json"
        p.write_bytes(b'{"loglines": [{"type": "user", "content": "\xff"}]}')
        with pytest.raises(SessionLoadError):
            parse_session_file(p)

    def test_lone_surrogate_rejected_in_json_document(self):
        text = json.dumps({"loglines": [{"type": "user", "content": "a\ud800b"}]})
        with pytest.raises(SessionLoadError):
            load_session("session.json", text)

    def test_lone_surrogate_line_dropped_in_jsonl(self):
        lines = [
            json.dumps({"type": "user", "content": "a\ud800b"}),
            json.dumps({"type": "user", "content": "fine"}),
        ]
        data = load_session("session.jsonl", "\n".join(lines))
        assert [e.content for e in data.loglines] == ["fine"]

    def test_paired_surrogates_are_kept(self):
        text = json.dumps({"loglines": [{"type": "user", "content": "smile \U0001F600"}]})
        data = load_session("session.json", text)
        assert data.loglines[0].content == "smile \U0001F600"
