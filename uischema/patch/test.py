"""Unit tests for the patch engine."""

import copy

import pytest

from uischema.schema import Document

from .lib import (
    MAX_POINTER_DEPTH,
    PatchError,
    PatchOperation,
    PatchParseError,
    apply_patch,
    apply_patches,
    create_add_patch,
    create_remove_patch,
    create_replace_patch,
    create_set_patch,
    escape_segment,
    parse_jsonl_patches,
    parse_pointer,
    serialize_patches_to_jsonl,
)


def _clone_apply(root, patch):
    """Reference applicator: deep-copy the tree, then mutate the copy in place.

    Covers the dict/list cases exercised below. Used only to cross-check
    output equality against the structural-sharing engine.
    """
    patch = patch if isinstance(patch, PatchOperation) else PatchOperation(**patch)
    result = copy.deepcopy(root)
    segments = parse_pointer(patch.path)
    if not segments:
        return copy.deepcopy(patch.value)

    current = result
    for position, segment in enumerate(segments[:-1]):
        upcoming = segments[position + 1]
        blank = [] if upcoming.isdigit() or upcoming == "-" else {}
        if isinstance(current, list):
            index = int(segment)
            if index == len(current):
                current.append(blank)
            elif current[index] is None:
                current[index] = blank
            current = current[index]
        else:
            if current.get(segment) is None:
                if patch.op == "remove":
                    return result
                current[segment] = blank
            current = current[segment]

    leaf = segments[-1]
    value = copy.deepcopy(patch.value)
    if isinstance(current, list):
        if leaf == "-":
            current.append(value)
        elif patch.op == "remove":
            if int(leaf) < len(current):
                del current[int(leaf)]
        elif patch.op == "add":
            current.insert(int(leaf), value)
        elif int(leaf) == len(current):
            current.append(value)
        else:
            current[int(leaf)] = value
    elif patch.op == "remove":
        current.pop(leaf, None)
    elif patch.op == "add":
        if current.get(leaf) is None:
            current[leaf] = [value]
        else:
            current[leaf].append(value)
    else:
        current[leaf] = value
    return result


def _sample_tree():
    return {
        "type": "Container",
        "props": {"ariaLabel": "Loading..."},
        "children": [
            {"type": "Text", "props": {"text": "A"}},
            {"type": "Row", "children": [{"type": "Spacer"}]},
        ],
        "meta": {"a/b": 1, "m~n": 2},
    }


class TestPointer:
    """JSON Pointer parsing."""

    @pytest.mark.unit
    @pytest.mark.parametrize("path", ["", "/"])
    def test_root(self, path):
        assert parse_pointer(path) == []

    @pytest.mark.unit
    def test_segments(self):
        assert parse_pointer("/children/0/props") == ["children", "0", "props"]

    @pytest.mark.unit
    def test_unescape_order(self):
        """~01 decodes to ~1, not to /."""
        assert parse_pointer("/a~1b/m~0n/~01") == ["a/b", "m~n", "~1"]

    @pytest.mark.unit
    def test_escape(self):
        assert escape_segment("a/b~c") == "a~1b~0c"
        assert parse_pointer("/" + escape_segment("~1/")) == ["~1/"]

    @pytest.mark.unit
    def test_missing_slash(self):
        with pytest.raises(PatchError, match="must start with"):
            parse_pointer("children/0")


class TestApplyPatches:
    """Core operation semantics."""

    @pytest.mark.unit
    def test_scenario_set_and_add(self):
        tree = {"type": "Container", "props": {"ariaLabel": "Loading..."}}
        patches = parse_jsonl_patches(
            '{"op":"set","path":"/props/ariaLabel","value":"Dashboard"}\n'
            '{"op":"add","path":"/children","value":{"type":"Text","props":{"text":"Hello"}}}'
        )
        result = apply_patches(tree, patches)
        assert result["props"]["ariaLabel"] == "Dashboard"
        assert result["children"] == [{"type": "Text", "props": {"text": "Hello"}}]

    @pytest.mark.unit
    def test_scenario_append_and_insert(self):
        x, y = {"type": "Badge"}, {"type": "Icon"}
        tree = {"children": [{"type": "Text"}, {"type": "Image"}]}

        appended = apply_patch(tree, {"op": "add", "path": "/children/-", "value": x})
        assert len(appended["children"]) == 3
        assert appended["children"][2] == x

        inserted = apply_patch(appended, {"op": "add", "path": "/children/0", "value": y})
        assert len(inserted["children"]) == 4
        assert inserted["children"][0] == y
        assert inserted["children"][1] == {"type": "Text"}

    @pytest.mark.unit
    def test_set_creates_missing_intermediates(self):
        result = apply_patch({}, create_set_patch("/slots/header/props/text", "Hi"))
        assert result == {"slots": {"header": {"props": {"text": "Hi"}}}}

    @pytest.mark.unit
    def test_intermediate_array_created_for_index(self):
        result = apply_patch({}, create_set_patch("/children/0/type", "Text"))
        assert result == {"children": [{"type": "Text"}]}

    @pytest.mark.unit
    def test_null_intermediate_treated_as_missing(self):
        result = apply_patch({"props": None}, create_set_patch("/props/text", "Hi"))
        assert result == {"props": {"text": "Hi"}}

    @pytest.mark.unit
    def test_set_replace_at_index(self):
        tree = {"children": ["a", "b"]}
        assert apply_patch(tree, create_replace_patch("/children/1", "c")) == {
            "children": ["a", "c"]
        }
        assert apply_patch(tree, create_set_patch("/children/2", "c")) == {
            "children": ["a", "b", "c"]
        }

    @pytest.mark.unit
    def test_add_appends_to_existing_array_field(self):
        result = apply_patch({"children": [1]}, create_add_patch("/children", 2))
        assert result == {"children": [1, 2]}

    @pytest.mark.unit
    def test_null_value_is_a_value(self):
        result = apply_patch({"props": {"text": "x"}}, create_set_patch("/props/text", None))
        assert result == {"props": {"text": None}}

    @pytest.mark.unit
    def test_remove_key_and_index(self):
        tree = _sample_tree()
        result = apply_patch(tree, create_remove_patch("/children/0"))
        assert [c["type"] for c in result["children"]] == ["Row"]
        result = apply_patch(result, create_remove_patch("/props"))
        assert "props" not in result

    @pytest.mark.unit
    def test_root_set_and_replace(self):
        assert apply_patch({"a": 1}, create_set_patch("", {"b": 2})) == {"b": 2}
        assert apply_patch({"a": 1}, create_replace_patch("/", [1])) == [1]

    @pytest.mark.unit
    def test_escaped_keys(self):
        tree = _sample_tree()
        result = apply_patch(tree, create_set_patch("/meta/a~1b", 10))
        result = apply_patch(result, create_set_patch("/meta/m~0n", 20))
        assert result["meta"] == {"a/b": 10, "m~n": 20}

    @pytest.mark.unit
    def test_accepts_typed_model_root(self, sample_document_dict):
        document = Document.model_validate(sample_document_dict)
        result = apply_patch(document, create_set_patch("/root/props/ariaLabel", "Main"))
        assert result["root"]["props"] == {"ariaLabel": "Main"}
        assert result["schemaVersion"] == "0.1.0"


class TestErrors:
    """Failure modes."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("tree", "patch", "match"),
        [
            ({"children": [1]}, {"op": "set", "path": "/children/x", "value": 1}, "array index"),
            ({"children": [1]}, {"op": "add", "path": "/children/5", "value": 1}, "out of range"),
            ({"children": [1]}, {"op": "set", "path": "/children/-", "value": 1}, "append position"),
            ({"children": [1]}, {"op": "set", "path": "/children/-/type", "value": 1}, "last segment"),
            ({"children": [1]}, {"op": "set", "path": "/children/3/type", "value": 1}, "out of range"),
            ({"props": {"text": "a"}}, {"op": "add", "path": "/props/text", "value": 1}, "non-array"),
            ({"type": "Text"}, {"op": "set", "path": "/type/inner", "value": 1}, "not a container"),
            ({"type": "Text"}, {"op": "set", "path": "/type/inner/deeper", "value": 1}, "traverse"),
            ({}, {"op": "set", "path": "/a"}, "requires a value"),
            ({}, {"op": "add", "path": "", "value": 1}, "root"),
            ({}, {"op": "remove", "path": "/"}, "root"),
            ({}, {"op": "move", "path": "/a", "value": 1}, "Invalid patch operation"),
        ],
    )
    def test_invalid(self, tree, patch, match):
        with pytest.raises(PatchError, match=match):
            apply_patch(tree, patch)

    @pytest.mark.unit
    def test_partial_failure_reports_last_good(self):
        tree = {"props": {}}
        patches = [
            create_set_patch("/props/text", "one"),
            create_set_patch("/props/value", 2),
            create_add_patch("/props/text", "boom"),
            create_set_patch("/props/never", True),
        ]
        with pytest.raises(PatchError) as exc_info:
            apply_patches(tree, patches)
        assert exc_info.value.operation_index == 2
        assert exc_info.value.last_good == {"props": {"text": "one", "value": 2}}
        assert tree == {"props": {}}

    @pytest.mark.unit
    def test_first_failure_last_good_is_input(self):
        tree = {"type": "Text"}
        with pytest.raises(PatchError) as exc_info:
            apply_patches(tree, [create_set_patch("bad", 1)])
        assert exc_info.value.operation_index == 0
        assert exc_info.value.last_good is tree

    @pytest.mark.unit
    @pytest.mark.parametrize("op", ["set", "add", "replace"])
    @pytest.mark.parametrize("path", ["/props/text", "/children/0", "/children/-"])
    def test_value_required_below_root(self, op, path):
        """Only remove may omit value, at any depth."""
        tree = {"props": {"text": "a"}, "children": [{"type": "Text"}]}
        with pytest.raises(PatchError, match="requires a value"):
            apply_patch(tree, {"op": op, "path": path})

    @pytest.mark.unit
    def test_explicit_null_is_a_value(self):
        assert apply_patch({"props": {"text": "a"}}, create_set_patch("/props/text", None)) == {
            "props": {"text": None}
        }

    @pytest.mark.unit
    def test_pointer_depth_limit(self):
        tree = apply_patch({}, create_set_patch("/a" * MAX_POINTER_DEPTH, 1))
        for _ in range(MAX_POINTER_DEPTH - 1):
            tree = tree["a"]
        assert tree == {"a": 1}

    @pytest.mark.unit
    @pytest.mark.parametrize("depth", [MAX_POINTER_DEPTH + 1, 5000])
    def test_pointer_too_deep(self, depth):
        """Overlong pointers fail with PatchError, not a RecursionError."""
        with pytest.raises(PatchError, match="limit is"):
            apply_patch({}, create_set_patch("/a" * depth, 1))
        with pytest.raises(PatchError, match="limit is"):
            apply_patch({}, create_remove_patch("/a" * depth))


class TestStructuralSharing:
    """Untouched subtrees are reused by identity."""

    @pytest.mark.unit
    def test_input_not_mutated(self):
        tree = _sample_tree()
        snapshot = copy.deepcopy(tree)
        apply_patches(
            tree,
            [
                create_set_patch("/children/1/children/0/props/text", "x"),
                create_add_patch("/children/-", {"type": "Divider"}),
                create_remove_patch("/meta/a~1b"),
            ],
        )
        assert tree == snapshot

    @pytest.mark.unit
    def test_siblings_shared(self):
        tree = _sample_tree()
        result = apply_patch(tree, create_set_patch("/children/1/props/role", "region"))

        assert result is not tree
        assert result["children"] is not tree["children"]
        assert result["children"][1] is not tree["children"][1]
        assert result["children"][0] is tree["children"][0]
        assert result["children"][1]["children"] is tree["children"][1]["children"]
        assert result["props"] is tree["props"]
        assert result["meta"] is tree["meta"]

    @pytest.mark.unit
    def test_sibling_of_text_edit_shared(self):
        tree = _sample_tree()
        tree["children"][1]["props"] = {"text": "B"}
        result = apply_patch(tree, create_set_patch("/children/1/props/text", "C"))
        assert result["children"][0] is tree["children"][0]
        assert result["children"][1]["props"] == {"text": "C"}
        assert tree["children"][1]["props"] == {"text": "B"}

    @pytest.mark.unit
    def test_array_insert_shares_elements(self):
        tree = _sample_tree()
        result = apply_patch(tree, create_add_patch("/children/0", {"type": "Badge"}))
        assert result["children"][1] is tree["children"][0]
        assert result["children"][2] is tree["children"][1]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "path",
        ["/missing", "/props/missing", "/children/9", "/children/1/children/4", "/a/b/c", "/type/x"],
    )
    def test_noop_remove_returns_same_tree(self, path):
        tree = _sample_tree()
        assert apply_patch(tree, create_remove_patch(path)) is tree

    @pytest.mark.unit
    def test_remove_idempotent(self):
        tree = _sample_tree()
        once = apply_patch(tree, create_remove_patch("/props/ariaLabel"))
        twice = apply_patch(once, create_remove_patch("/props/ariaLabel"))
        assert twice == once
        assert twice is once


class TestReferenceEquivalence:
    """Structural sharing yields the same values as clone-then-mutate."""

    SEQUENCES = [
        [
            {"op": "set", "path": "/props/ariaLabel", "value": "Dashboard"},
            {"op": "add", "path": "/children", "value": {"type": "Text"}},
            {"op": "add", "path": "/children/0", "value": {"type": "Badge"}},
            {"op": "remove", "path": "/children/2"},
        ],
        [
            {"op": "set", "path": "/slots/header/type", "value": "Row"},
            {"op": "add", "path": "/slots/header/children", "value": {"type": "Icon"}},
            {"op": "add", "path": "/slots/header/children/-", "value": {"type": "Text"}},
            {"op": "replace", "path": "/slots/header/children/1/props", "value": {"text": "Hi"}},
        ],
        [
            {"op": "set", "path": "/children/2/type", "value": "Card"},
            {"op": "set", "path": "/children/2/children/0/type", "value": "Text"},
            {"op": "remove", "path": "/meta/m~0n"},
            {"op": "remove", "path": "/nothing/here"},
            {"op": "set", "path": "/children/1/children/1", "value": {"type": "Spacer"}},
        ],
    ]

    @pytest.mark.unit
    @pytest.mark.parametrize("sequence", SEQUENCES)
    def test_matches_reference(self, sequence):
        expected = _sample_tree()
        for patch in sequence:
            expected = _clone_apply(expected, patch)
        assert apply_patches(_sample_tree(), sequence) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("sequence", SEQUENCES)
    def test_deterministic(self, sequence):
        tree = _sample_tree()
        assert apply_patches(tree, sequence) == apply_patches(tree, sequence)

    @pytest.mark.unit
    @pytest.mark.parametrize("sequence", SEQUENCES)
    def test_split_batches_match_single_batch(self, sequence):
        """Applying P1 then P2 equals applying P1 ++ P2 in one call."""
        tree = _sample_tree()
        for split in range(len(sequence) + 1):
            staged = apply_patches(apply_patches(tree, sequence[:split]), sequence[split:])
            assert staged == apply_patches(tree, sequence)


class TestJsonl:
    """JSONL parsing and serialization."""

    @pytest.mark.unit
    def test_blank_lines_skipped(self):
        patches = parse_jsonl_patches(
            '\n  {"op":"remove","path":"/a"}\n\n\t\n{"op":"set","path":"/b","value":1}\n'
        )
        assert [p.op for p in patches] == ["remove", "set"]
        assert patches[0].has_value is False
        assert patches[1].has_value is True

    @pytest.mark.unit
    def test_explicit_null_value_present(self):
        (patch,) = parse_jsonl_patches('{"op":"set","path":"/a","value":null}')
        assert patch.has_value is True
        assert patch.value is None

    @pytest.mark.unit
    def test_invalid_json(self):
        with pytest.raises(PatchParseError, match="Invalid JSON in patch line 2") as exc_info:
            parse_jsonl_patches('{"op":"remove","path":"/a"}\n{"op":"set",')
        assert exc_info.value.line == '{"op":"set",'
        assert exc_info.value.line_number == 2

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "line",
        [
            '{"op":"copy","path":"/a"}',
            '{"path":"/a","value":1}',
            '{"op":"set","path":5,"value":1}',
            '{"op":"set","path":"/a","value":1,"from":"/b"}',
            "[1, 2]",
        ],
    )
    def test_invalid_operation(self, line):
        with pytest.raises(PatchParseError, match="Invalid patch operation in line 1"):
            parse_jsonl_patches(line)

    @pytest.mark.unit
    def test_parse_error_is_patch_error(self):
        with pytest.raises(PatchError):
            parse_jsonl_patches("not json")

    @pytest.mark.unit
    def test_serialize(self):
        text = serialize_patches_to_jsonl(
            [create_set_patch("/a", None), create_remove_patch("/b"), {"op": "add", "path": "/c", "value": [1]}]
        )
        assert text.split("\n") == [
            '{"op":"set","path":"/a","value":null}',
            '{"op":"remove","path":"/b"}',
            '{"op":"add","path":"/c","value":[1]}',
        ]
        assert [p.to_dict() for p in parse_jsonl_patches(text)] == [
            {"op": "set", "path": "/a", "value": None},
            {"op": "remove", "path": "/b"},
            {"op": "add", "path": "/c", "value": [1]},
        ]


class TestFactories:
    """Patch constructors."""

    @pytest.mark.unit
    def test_factories(self):
        assert create_set_patch("/a", 1).to_dict() == {"op": "set", "path": "/a", "value": 1}
        assert create_add_patch("/a", 1).op == "add"
        assert create_replace_patch("/a", 1).op == "replace"
        assert create_remove_patch("/a").to_dict() == {"op": "remove", "path": "/a"}
