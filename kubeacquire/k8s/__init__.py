"""Kubernetes object acquisition for kubeacquire.

This module provides the K8s-specific pieces of the package:
- Walker: extracts Kubernetes objects from decoded JSON/YAML values
- Provenance: records where each object was found as annotations
- Documents: decodes YAML/JSON streams with ruamel.yaml and walks them
"""
