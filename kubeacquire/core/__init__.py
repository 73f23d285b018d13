"""
Core domain-agnostic components for kubeacquire.

This package contains the exception types and configuration loading shared
by the Kubernetes walker and document reader.
"""

from kubeacquire.core.errors import (
    DocumentDecodeError,
    MalformedStructureError,
    NestingTooDeepError,
)

__all__ = [
    "DocumentDecodeError",
    "MalformedStructureError",
    "NestingTooDeepError",
]
