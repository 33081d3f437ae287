"""Unit tests for streaming patch application."""

import logging

import pytest

from .lib import PatchError, PatchParseError
from .stream import PatchStream

SET_LABEL = '{"op":"set","path":"/props/ariaLabel","value":"Dashboard"}'
ADD_TEXT = '{"op":"add","path":"/children","value":{"type":"Text"}}'


class TestPatchStream:
    """Chunked JSONL input."""

    @pytest.mark.unit
    def test_partial_line_buffered(self):
        stream = PatchStream({"type": "Container"})
        assert stream.feed(SET_LABEL[:20]) == []
        assert stream.pending == SET_LABEL[:20]
        assert stream.tree == {"type": "Container"}

        applied = stream.feed(SET_LABEL[20:] + "\n")
        assert [p.op for p in applied] == ["set"]
        assert stream.tree["props"] == {"ariaLabel": "Dashboard"}
        assert stream.pending == ""
        assert stream.applied == 1

    @pytest.mark.unit
    def test_multiple_lines_in_one_chunk(self):
        stream = PatchStream({"type": "Container"})
        applied = stream.feed(f"{SET_LABEL}\n{ADD_TEXT}\n{SET_LABEL[:5]}")
        assert len(applied) == 2
        assert stream.tree["children"] == [{"type": "Text"}]
        assert stream.pending == SET_LABEL[:5]

    @pytest.mark.unit
    def test_close_flushes_tail(self):
        stream = PatchStream({})
        stream.feed(ADD_TEXT)
        assert stream.tree == {}
        assert len(stream.close()) == 1
        assert stream.tree == {"children": [{"type": "Text"}]}
        assert stream.close() == []

    @pytest.mark.unit
    def test_input_tree_untouched(self):
        root = {"type": "Container"}
        stream = PatchStream(root)
        stream.feed(SET_LABEL + "\n")
        assert root == {"type": "Container"}

    @pytest.mark.unit
    def test_apply_failure_keeps_good_prefix(self):
        stream = PatchStream({"props": {"text": "a"}})
        bad = '{"op":"add","path":"/props/text","value":"b"}'
        with pytest.raises(PatchError):
            stream.feed(f"{SET_LABEL}\n{bad}\n")
        assert stream.tree == {"props": {"text": "a", "ariaLabel": "Dashboard"}}
        assert stream.applied == 1

    @pytest.mark.unit
    def test_parse_failure(self):
        stream = PatchStream({})
        with pytest.raises(PatchParseError):
            stream.feed("{oops}\n")
        assert stream.tree == {}

    @pytest.mark.unit
    def test_debug_logging(self, caplog):
        stream = PatchStream({})
        with caplog.at_level(logging.DEBUG, logger="uischema"):
            stream.feed(ADD_TEXT + "\n")
        assert "Applied 1 patch(es)" in caplog.text
