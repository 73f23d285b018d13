"""Integration tests: decode YAML/JSON text and extract Kubernetes objects."""

import json

import pytest

from kubeacquire import (
    DocumentDecodeError,
    MalformedStructureError,
    ReadOptions,
    load_documents,
    read_objects,
)
from kubeacquire.k8s.provenance import get_provenance

SAMPLE_DEPLOYMENT = """apiVersion: apps/v1
kind: Deployment
metadata:
  name: payments-api
  labels:
    app: payments-api
spec:
  replicas: 3
  template:
    spec:
      containers:
      - name: payments-api
        image: payments-api:prod-1.2.3
"""

SAMPLE_STREAM = """apiVersion: v1
kind: Service
metadata:
  name: payments-api
---
# grouped objects
objects:
  config:
    apiVersion: v1
    kind: ConfigMap
    data:
      LOG_LEVEL: info
  extras:
  - apiVersion: v1
    kind: Secret
  - null
---
"""


class TestLoadDocuments:
    """Tests for load_documents()."""

    def test_single_document(self):
        """Test decoding a single YAML document."""
        documents = load_documents(SAMPLE_DEPLOYMENT)

        assert len(documents) == 1
        assert documents[0]["kind"] == "Deployment"
        assert documents[0]["spec"]["replicas"] == 3

    def test_multi_document_stream(self):
        """Test that each document of a stream is decoded, empty ones as None."""
        documents = load_documents(SAMPLE_STREAM)

        assert len(documents) == 3
        assert documents[0]["kind"] == "Service"
        assert list(documents[1]["objects"]) == ["config", "extras"]
        assert documents[2] is None

    def test_json_text(self):
        """Test that JSON text decodes as YAML."""
        documents = load_documents('[{"apiVersion": "v1", "kind": "Pod"}]')

        assert documents == [[{"apiVersion": "v1", "kind": "Pod"}]]

    def test_empty_text(self):
        """Test that empty text holds no documents."""
        assert load_documents("") == []

    def test_invalid_yaml(self):
        """Test that invalid YAML raises DocumentDecodeError."""
        with pytest.raises(DocumentDecodeError) as exc_info:
            load_documents("key: [unclosed", source="broken.yaml")

        assert str(exc_info.value).startswith("broken.yaml: Failed to parse YAML")
        assert exc_info.value.source == "broken.yaml"


class TestReadObjects:
    """Tests for read_objects()."""

    def test_single_manifest(self):
        """Test reading a single Deployment manifest."""
        objs = read_objects(SAMPLE_DEPLOYMENT)

        assert len(objs) == 1
        assert objs[0]["metadata"]["name"] == "payments-api"

    def test_stream_in_document_order(self):
        """Test that objects from all documents are returned in order."""
        objs = read_objects(SAMPLE_STREAM)

        assert [obj["kind"] for obj in objs] == ["Service", "ConfigMap", "Secret"]

    def test_results_serialize_to_json(self):
        """Test that extracted objects can be re-serialized as JSON."""
        objs = read_objects(SAMPLE_STREAM)

        decoded = json.loads(json.dumps(objs))

        assert decoded[1] == {
            "apiVersion": "v1",
            "kind": "ConfigMap",
            "data": {"LOG_LEVEL": "info"},
        }

    def test_error_path_single_document(self):
        """Test the error path for a misplaced value in a single document."""
        with pytest.raises(MalformedStructureError) as exc_info:
            read_objects('{"foo": {"bar": [null, 4.5]}}')

        assert str(exc_info.value) == (
            'Looking for kubernetes object at "$.foo.bar[1]", but instead found float'
        )

    def test_error_path_names_document(self):
        """Test that errors in a multi-document stream name the document."""
        text = "apiVersion: v1\nkind: Pod\n---\nitems:\n- true\n"

        with pytest.raises(MalformedStructureError) as exc_info:
            read_objects(text)

        assert str(exc_info.value) == (
            'Looking for kubernetes object at "document 1: $.items[0]", but instead found bool'
        )

    def test_provenance_records_source(self):
        """Test that provenance records the path and the source name."""
        opts = ReadOptions(show_provenance=True)

        objs = read_objects(SAMPLE_STREAM, source="payments.yaml", opts=opts)

        assert [get_provenance(obj) for obj in objs] == [
            {"path": "document 0: $", "file": "payments.yaml"},
            {"path": "document 1: $.objects.config", "file": "payments.yaml"},
            {"path": "document 1: $.objects.extras[0]", "file": "payments.yaml"},
        ]
        assert objs[0]["metadata"]["name"] == "payments-api"

    def test_without_provenance_objects_unchanged(self):
        """Test that objects are returned as decoded when provenance is off."""
        objs = read_objects(SAMPLE_STREAM, source="payments.yaml")

        assert objs[0]["metadata"] == {"name": "payments-api"}
        assert "metadata" not in objs[2]


class TestAnchorsAndAliases:
    """Tests for YAML anchors and aliases."""

    def test_anchored_boolean_error(self):
        """Test that an anchored boolean is reported as bool."""
        with pytest.raises(MalformedStructureError) as exc_info:
            read_objects("items:\n- &flag true\n")

        assert str(exc_info.value) == (
            'Looking for kubernetes object at "$.items[0]", but instead found bool'
        )

    def test_aliased_object_single_origin(self):
        """Test that an aliased object is returned once with its anchor's path."""
        text = "a: &obj {apiVersion: v1, kind: Pod}\nb: *obj\n"

        objs = read_objects(text, opts=ReadOptions(show_provenance=True))

        assert len(objs) == 1
        assert get_provenance(objs[0]) == {"path": "$.a"}

    def test_alias_chain_walked_once(self):
        """Test that nested alias fan-out does not multiply the walk."""
        lines = ["l0: &l0 [{apiVersion: v1, kind: Pod}]"]
        for i in range(1, 8):
            aliases = ", ".join([f"*l{i - 1}"] * 10)
            lines.append(f"l{i}: &l{i} [{aliases}]")

        objs = read_objects("\n".join(lines) + "\n", opts=ReadOptions(show_provenance=True))

        assert len(objs) == 1
        assert get_provenance(objs[0]) == {"path": "$.l0[0]"}
