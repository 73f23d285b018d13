"""Tests for kubeacquire exceptions."""

import pytest

from kubeacquire.core.errors import (
    DocumentDecodeError,
    MalformedStructureError,
    NestingTooDeepError,
)


class TestMalformedStructureError:
    """Tests for MalformedStructureError."""

    def test_message(self):
        """Test the exact message format."""
        err = MalformedStructureError("$.foo.bar[1]", "int")

        assert str(err) == 'Looking for kubernetes object at "$.foo.bar[1]", but instead found int'
        assert err.path == "$.foo.bar[1]"
        assert err.type_name == "int"

    def test_raise_and_catch(self):
        """Test that the error can be raised and caught."""
        with pytest.raises(MalformedStructureError, match=r"instead found str"):
            raise MalformedStructureError("$", "str")


class TestNestingTooDeepError:
    """Tests for NestingTooDeepError."""

    def test_message_and_attributes(self):
        """Test the message and that it is a MalformedStructureError."""
        err = NestingTooDeepError("$[0][0]", "list", 1)

        assert str(err) == (
            'Looking for kubernetes object at "$[0][0]", but nesting exceeds maximum depth 1'
        )
        assert err.max_depth == 1
        assert isinstance(err, MalformedStructureError)


class TestDocumentDecodeError:
    """Tests for DocumentDecodeError."""

    def test_with_source(self):
        """Test that the source prefixes the message."""
        err = DocumentDecodeError("bad indent", source="app.yaml")

        assert str(err) == "app.yaml: bad indent"
        assert err.source == "app.yaml"

    def test_without_source(self):
        """Test the message without a source."""
        err = DocumentDecodeError("bad indent")

        assert str(err) == "bad indent"
        assert err.source is None
