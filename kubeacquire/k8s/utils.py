"""Shared utility functions for inspecting decoded K8s values.

This module provides the classification helpers the walker relies on:
recognising Kubernetes objects and naming the type of misplaced values.
"""

from typing import Any

from ruamel.yaml.scalarbool import ScalarBoolean

from kubeacquire.k8s.constants import API_VERSION_KEY, KIND_KEY

# Checked in order: bool and ruamel.yaml's ScalarBoolean (an anchored
# boolean) are both subclasses of int
_SCALAR_TYPE_NAMES = (
    (bool, "bool"),
    (ScalarBoolean, "bool"),
    (int, "int"),
    (float, "float"),
    (str, "str"),
)


def is_kube_object(value: Any) -> bool:
    """Check whether a decoded value is a Kubernetes object.

    A Kubernetes object is any mapping that has both an ``apiVersion`` and
    a ``kind`` key. The values of those keys are not validated.

    Args:
        value: Decoded JSON/YAML value

    Returns:
        True if value is a mapping holding both marker keys
    """
    return isinstance(value, dict) and API_VERSION_KEY in value and KIND_KEY in value


def type_name(value: Any) -> str:
    """Render the type name of a decoded value for error messages.

    Builtin scalars render as ``bool``, ``int``, ``float`` and ``str``, also
    when the decoder hands back a subclass (ruamel.yaml's ``ScalarFloat``
    renders as ``float``, an anchored ``ScalarBoolean`` as ``bool``). Anything
    else renders as its class name.
    """
    for scalar_type, name in _SCALAR_TYPE_NAMES:
        if isinstance(value, scalar_type):
            return name
    return type(value).__name__

