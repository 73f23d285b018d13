"""Provenance annotations for discovered Kubernetes objects.

When provenance is enabled the walker records, on each object it extracts,
the path at which the object was found (and the document it came from, when
known) as ``metadata.annotations`` entries. Existing metadata is merged into,
never replaced.
"""

import logging
from typing import Dict, Optional

from kubeacquire.k8s.constants import (
    ANNOTATION_PROVENANCE_FILE,
    ANNOTATION_PROVENANCE_PATH,
    ANNOTATIONS_KEY,
    METADATA_KEY,
)

logger = logging.getLogger(__name__)


def _ensure_mapping(parent: dict, key: str) -> dict:
    """Return ``parent[key]``, creating an empty mapping when absent or null."""
    if parent.get(key) is None:
        parent[key] = {}
    return parent[key]


def inject_provenance(obj: dict, path: str, source: Optional[str] = None) -> dict:
    """Annotate a Kubernetes object with where it was found.

    Mutates ``obj`` in place: ``metadata`` and ``metadata.annotations`` are
    created if missing, and the provenance annotations are added. Existing
    annotations are kept, and an object that already records a provenance
    path is left as it is so the first recorded origin wins.

    Args:
        obj: Kubernetes object mapping (has apiVersion and kind)
        path: Path at which the object was found (e.g. ``$.items[0]``)
        source: Name of the document the object came from (optional)

    Returns:
        The same ``obj``, for chaining

    Example:
        >>> obj = {"apiVersion": "v1", "kind": "Service"}
        >>> inject_provenance(obj, "$[1]")["metadata"]["annotations"]
        {'kubeacquire.io/provenance-path': '$[1]'}
    """
    metadata = obj.get(METADATA_KEY)
    if metadata is not None and not isinstance(metadata, dict):
        logger.warning(
            f"Not recording provenance for object at {path}: "
            f"metadata is {type(metadata).__name__}, not a mapping"
        )
        return obj
    if metadata is not None:
        annotations = metadata.get(ANNOTATIONS_KEY)
        if annotations is not None and not isinstance(annotations, dict):
            logger.warning(
                f"Not recording provenance for object at {path}: "
                f"annotations is {type(annotations).__name__}, not a mapping"
            )
            return obj

    metadata = _ensure_mapping(obj, METADATA_KEY)
    annotations = _ensure_mapping(metadata, ANNOTATIONS_KEY)

    if ANNOTATION_PROVENANCE_PATH in annotations:
        logger.debug(
            f"Object at {path} already records provenance "
            f"{annotations[ANNOTATION_PROVENANCE_PATH]}, keeping it"
        )
        return obj

    annotations[ANNOTATION_PROVENANCE_PATH] = path
    if source:
        annotations[ANNOTATION_PROVENANCE_FILE] = source

    return obj


def get_provenance(obj: dict) -> Dict[str, str]:
    """Read the provenance annotations recorded on an object.

    Args:
        obj: Kubernetes object mapping

    Returns:
        Dict with ``path`` and, when recorded, ``file`` keys; empty if the
        object carries no provenance
    """
    metadata = obj.get(METADATA_KEY)
    if not isinstance(metadata, dict):
        return {}
    annotations = metadata.get(ANNOTATIONS_KEY)
    if not isinstance(annotations, dict):
        return {}

    result = {}
    if ANNOTATION_PROVENANCE_PATH in annotations:
        result["path"] = annotations[ANNOTATION_PROVENANCE_PATH]
    if ANNOTATION_PROVENANCE_FILE in annotations:
        result["file"] = annotations[ANNOTATION_PROVENANCE_FILE]
    return result
