"""
kubeacquire: Kubernetes object acquisition from decoded documents

Walks already-decoded JSON/YAML values and extracts every embedded Kubernetes
object (any mapping carrying both ``apiVersion`` and ``kind``), reporting
misplaced values with the exact path at which they were found.
"""

__version__ = "1.0.0"

from kubeacquire.core.errors import (
    DocumentDecodeError,
    MalformedStructureError,
    NestingTooDeepError,
)
from kubeacquire.k8s.documents import load_documents, read_objects
from kubeacquire.k8s.walker import ReadOptions, WalkContext, json_walk, walk_objects

__all__ = [
    "__version__",
    "DocumentDecodeError",
    "MalformedStructureError",
    "NestingTooDeepError",
    "ReadOptions",
    "WalkContext",
    "json_walk",
    "walk_objects",
    "load_documents",
    "read_objects",
]
