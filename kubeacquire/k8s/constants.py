"""K8s constants used across the walker and provenance modules.

This module contains constants that are shared across multiple modules
to avoid circular import issues.
"""

# A mapping carrying both of these keys is a Kubernetes object
API_VERSION_KEY = "apiVersion"
KIND_KEY = "kind"

METADATA_KEY = "metadata"
ANNOTATIONS_KEY = "annotations"

# Provenance annotations written onto discovered objects
ANNOTATION_PROVENANCE_PATH = "kubeacquire.io/provenance-path"
ANNOTATION_PROVENANCE_FILE = "kubeacquire.io/provenance-file"

DEFAULT_ROOT_LABEL = "$"

# Python's default recursion limit is 1000 frames; stay well below it
DEFAULT_MAX_DEPTH = 512
