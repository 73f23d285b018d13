"""Decode YAML/JSON text and extract the Kubernetes objects it holds.

This module feeds the walker from text: a YAML stream (JSON being a subset of
YAML) is decoded with ruamel.yaml, one value per document, and every document
is walked in order.
"""

import logging
from dataclasses import replace
from typing import Any, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from kubeacquire.core.errors import DocumentDecodeError
from kubeacquire.k8s.walker import ReadOptions, WalkContext, json_walk

logger = logging.getLogger(__name__)


def _create_yaml_instance() -> YAML:
    """Create configured ruamel.yaml instance for decoding manifests.

    Returns:
        Round-trip YAML instance; mappings decode to dict subclasses and
        sequences to list subclasses, keeping the source key order
    """
    yaml = YAML()
    yaml.allow_duplicate_keys = False
    return yaml


def load_documents(text: str, source: Optional[str] = None) -> List[Any]:
    """Decode every document of a YAML/JSON stream.

    Args:
        text: YAML or JSON text, possibly holding several ``---`` separated documents
        source: Name of the text's origin, used in error messages (optional)

    Returns:
        One decoded value per document; empty documents decode to None

    Raises:
        DocumentDecodeError: If the text is not valid YAML/JSON

    Example:
        >>> [doc["kind"] for doc in load_documents("kind: A\\n---\\nkind: B\\n")]
        ['A', 'B']
    """
    yaml = _create_yaml_instance()
    try:
        documents = list(yaml.load_all(text))
    except YAMLError as e:
        raise DocumentDecodeError(f"Failed to parse YAML: {e}", source=source) from e

    logger.debug(f"Decoded {len(documents)} document(s) from {source or '<text>'}")
    return documents


def read_objects(
    text: str, source: Optional[str] = None, opts: Optional[ReadOptions] = None
) -> List[dict]:
    """Decode a YAML/JSON stream and extract every Kubernetes object in it.

    A single-document stream is walked from the root label (``$``). In a
    multi-document stream document ``i`` is walked from ``document <i>: $``,
    so paths and errors say which document they refer to.

    Args:
        text: YAML or JSON text
        source: Name of the text's origin, recorded in provenance and errors
        opts: Walk options (default: ``ReadOptions()``); ``source`` overrides
            ``opts.source`` when given

    Returns:
        Kubernetes objects from all documents, in document order

    Raises:
        DocumentDecodeError: If the text is not valid YAML/JSON
        MalformedStructureError: If a document holds a misplaced value
    """
    if opts is None:
        opts = ReadOptions(source=source)
    elif source is not None:
        opts = replace(opts, source=source)

    documents = load_documents(text, source=opts.source)

    objs = []
    for i, document in enumerate(documents):
        if len(documents) == 1:
            label = opts.root_label
        else:
            label = f"document {i}: {opts.root_label}"
        objs.extend(json_walk(WalkContext(label=label, opts=opts), document))

    logger.debug(f"Read {len(objs)} object(s) from {opts.source or '<text>'}")
    return objs
