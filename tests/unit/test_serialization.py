#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for AST serialization and deserialization."""
import json

import pytest

from mdnorm.ast import Comment, Element, Text, canonical_name, is_canonical, normalize
from mdnorm.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast


@pytest.mark.unit
class TestAstToDictConversion:
    """Test AST to dictionary conversion."""

    def test_text_node_to_dict(self) -> None:
        """Test converting Text node to dict."""
        assert ast_to_dict(Text("Hello")) == {"node_type": "Text", "content": "Hello"}

    def test_comment_node_to_dict(self) -> None:
        """Test converting Comment node to dict."""
        result = ast_to_dict(Comment(" note ", is_output_marker=True))

        assert result["node_type"] == "Comment"
        assert result["content"] == " note "
        assert result["is_output_marker"] is True

    def test_element_to_dict(self) -> None:
        """Test converting a nested Element to dict."""
        element = Element(
            canonical_name("a"),
            [(canonical_name("href"), "https://example.com"), ("class", "x"), ("class", "y")],
            [Text("link")],
            {"line": 3},
        )

        result = ast_to_dict(element)

        assert result["node_type"] == "Element"
        assert result["tag"] == "a"
        assert type(result["tag"]) is str
        assert result["attributes"] == [["href", "https://example.com"], ["class", "x"], ["class", "y"]]
        assert result["children"] == [{"node_type": "Text", "content": "link"}]
        assert result["metadata"] == {"line": 3}

    def test_unknown_node_raises(self) -> None:
        """Test that unknown node types are rejected."""
        with pytest.raises(ValueError, match="Unknown node type"):
            ast_to_dict(object())  # type: ignore[arg-type]


@pytest.mark.unit
class TestDictToAstConversion:
    """Test dictionary to AST conversion."""

    def test_element_from_dict(self) -> None:
        """Test rebuilding an element with attributes and children."""
        data = {
            "node_type": "Element",
            "tag": "pre",
            "attributes": [["data-x", "1"]],
            "children": [{"node_type": "Element", "tag": "code", "children": [{"node_type": "Text", "content": "42"}]}],
        }

        node = dict_to_ast(data)

        assert node == Element("pre", [("data-x", "1")], [Element("code", children=[Text("42")])])

    def test_comment_default_flag(self) -> None:
        """Test a comment without the flag is not an output marker."""
        assert dict_to_ast({"node_type": "Comment", "content": "c"}) == Comment("c")

    def test_unknown_node_type_raises(self) -> None:
        """Test that an unknown discriminator is rejected."""
        with pytest.raises(ValueError, match="Unknown node_type"):
            dict_to_ast({"node_type": "Bogus"})


@pytest.mark.unit
class TestJsonSerialization:
    """Test JSON string serialization."""

    def test_normalized_document_round_trip(self) -> None:
        """Test a normalized document survives JSON serialization."""
        doc = normalize(
            [
                Element("blockquote", children=[Element("h3", [("class", "tip")], [Text("Tip")])]),
                Comment(" plain "),
                Element("p", children=[Text("café")]),
            ]
        )

        json_str = ast_to_json(doc)

        assert "café" in json_str
        assert json_to_ast(json_str) == doc

    def test_indent(self) -> None:
        """Test indentation is passed through to json.dumps."""
        json_str = ast_to_json([Text("x")], indent=2)

        assert json_str.startswith("[\n  {")
        assert json.loads(json_str) == [{"node_type": "Text", "content": "x"}]

    def test_non_array_rejected(self) -> None:
        """Test that a top-level object is rejected."""
        with pytest.raises(ValueError, match="JSON array"):
            json_to_ast('{"node_type": "Text", "content": "x"}')

    def test_round_trip_restores_canonical_names(self) -> None:
        """Test tags and attribute names come back as canonical names."""
        doc = normalize([Element("a", [("href", "#top")], [Text("top")])])

        restored = json_to_ast(ast_to_json(doc))[0]

        assert is_canonical(restored.tag)
        assert restored.tag is canonical_name("a")
        assert all(is_canonical(name) for name, _ in restored.attributes)
        assert restored.attributes[0][1] == "#top"
        assert not is_canonical(restored.attributes[0][1])

    def test_non_json_metadata_rejected(self) -> None:
        """Test metadata JSON cannot hold raises instead of being stringified."""
        doc = [Element("p", metadata={"source": object()})]

        with pytest.raises(ValueError, match="not JSON serializable"):
            ast_to_json(doc)
