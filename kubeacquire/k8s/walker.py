"""Walker that extracts Kubernetes objects from decoded JSON/YAML values.

A decoded document may hold a single object, a list of objects, a mapping of
named objects, or any nesting of those. ``json_walk`` classifies each node:

- ``None`` contributes nothing
- a mapping with ``apiVersion`` and ``kind`` is an object and is not searched further
- any other mapping or list is searched recursively, once per walk even when
  YAML aliases place it at several paths
- any other value is an error naming the exact path at which it was found

Paths start at a root label (``$`` by default) and grow by ``.<key>`` for
mapping entries and ``[<index>]`` for list elements, e.g. ``$.foo.bar[1]``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from kubeacquire.core.config import (
    get_config_bool,
    get_config_int,
    get_config_value,
    load_config,
)
from kubeacquire.core.errors import MalformedStructureError, NestingTooDeepError
from kubeacquire.k8s.constants import DEFAULT_MAX_DEPTH, DEFAULT_ROOT_LABEL
from kubeacquire.k8s.provenance import inject_provenance
from kubeacquire.k8s.utils import is_kube_object, type_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadOptions:
    """Options controlling a walk.

    Attributes:
        show_provenance: Annotate each extracted object with where it was found
        max_depth: Maximum nesting depth before the walk is aborted
        root_label: Label of the document root in paths
        source: Name of the document being walked, recorded in provenance
    """
    show_provenance: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    root_label: str = DEFAULT_ROOT_LABEL
    source: Optional[str] = None

    @classmethod
    def from_config(
        cls, config: Optional[Dict[str, Any]] = None, source: Optional[str] = None
    ) -> "ReadOptions":
        """Build options from config.json / environment variables.

        Reads ``walk.show_provenance``, ``walk.max_depth`` and ``walk.root_label``
        (environment: ``WALK_SHOW_PROVENANCE``, ``WALK_MAX_DEPTH``,
        ``WALK_ROOT_LABEL``).

        Args:
            config: Optional config dict (loads config.json if not provided)
            source: Name of the document being walked (optional)
        """
        if config is None:
            config = load_config()
        return cls(
            show_provenance=get_config_bool(["walk", "show_provenance"], False, config),
            max_depth=get_config_int(["walk", "max_depth"], DEFAULT_MAX_DEPTH, config),
            root_label=get_config_value(["walk", "root_label"], DEFAULT_ROOT_LABEL, config),
            source=source,
        )


@dataclass(frozen=True)
class WalkContext:
    """Position of a node within the walked document.

    Contexts form a chain from the node back to the root; each recursive step
    gets a new child context, so sibling branches never share state.

    Attributes:
        label: This step's label (root label, ``.<key>`` or ``[<index>]``)
        opts: Options for the whole walk
        parent: Enclosing context, None at the root
        depth: Number of steps from the root
    """
    label: str
    opts: ReadOptions = field(default_factory=ReadOptions)
    parent: Optional["WalkContext"] = None
    depth: int = 0

    @classmethod
    def root(cls, opts: Optional[ReadOptions] = None) -> "WalkContext":
        """Create the root context labelled with ``opts.root_label``."""
        if opts is None:
            opts = ReadOptions()
        return cls(label=opts.root_label, opts=opts)

    def child(self, label: str) -> "WalkContext":
        """Create the context for a child node one step below this one."""
        return WalkContext(label=label, opts=self.opts, parent=self, depth=self.depth + 1)

    @property
    def path(self) -> str:
        """Full path of this node, e.g. ``$.foo.bar[1]``."""
        labels = []
        ctx: Optional[WalkContext] = self
        while ctx is not None:
            labels.append(ctx.label)
            ctx = ctx.parent
        return "".join(reversed(labels))

    def __str__(self) -> str:
        return self.path


def json_walk(context: WalkContext, value: Any) -> List[dict]:
    """Extract every Kubernetes object from a decoded value.

    Objects are returned in depth-first order: mapping entries in the
    mapping's own order, list elements by index.

    A container reached more than once in the same walk (a YAML alias puts one
    decoded node at several paths) is walked only at its first path; later
    occurrences contribute nothing. An aliased object is therefore returned
    once, with the path of its anchor.

    The input is not modified unless ``show_provenance`` is set. Provenance is
    then merged into each extracted object's metadata once the whole walk has
    succeeded, so a walk that raises leaves the input untouched.

    Args:
        context: Position of ``value`` in the document
        value: Decoded JSON/YAML value

    Returns:
        List of Kubernetes object mappings (empty for ``None``)

    Raises:
        MalformedStructureError: If a scalar is found where an object was expected.
            The first such value aborts the walk.
        NestingTooDeepError: If nesting exceeds ``context.opts.max_depth``

    Example:
        >>> json_walk(WalkContext.root(), {"foo": {"bar": [None, 42]}})
        Traceback (most recent call last):
        ...
        kubeacquire.core.errors.MalformedStructureError: Looking for kubernetes object at "$.foo.bar[1]", but instead found int
    """
    found = _walk(context, value, set())

    if context.opts.show_provenance:
        for ctx, obj in found:
            inject_provenance(obj, ctx.path, context.opts.source)

    return [obj for _, obj in found]


def _walk(context: WalkContext, value: Any, seen: Set[int]) -> List[Tuple[WalkContext, dict]]:
    if context.depth > context.opts.max_depth:
        raise NestingTooDeepError(context.path, type_name(value), context.opts.max_depth)

    if value is None:
        return []

    if isinstance(value, (dict, list)):
        if id(value) in seen:
            logger.debug(f"Skipping {context.path}: already walked through an alias")
            return []
        seen.add(id(value))

    if is_kube_object(value):
        logger.debug(f"Found {value.get('kind')} object at {context.path}")
        return [(context, value)]

    if isinstance(value, dict):
        found = []
        for key, child in value.items():
            found.extend(_walk(context.child(f".{key}"), child, seen))
        return found

    if isinstance(value, list):
        found = []
        for i, child in enumerate(value):
            found.extend(_walk(context.child(f"[{i}]"), child, seen))
        return found

    raise MalformedStructureError(context.path, type_name(value))


def walk_objects(
    value: Any,
    show_provenance: bool = False,
    label: Optional[str] = None,
    source: Optional[str] = None,
    opts: Optional[ReadOptions] = None,
) -> List[dict]:
    """Extract every Kubernetes object from a decoded value.

    Convenience wrapper around ``json_walk`` that builds the root context.

    Args:
        value: Decoded JSON/YAML value
        show_provenance: Annotate extracted objects with where they were found
            (ignored when ``opts`` is given)
        label: Root label for paths (default: ``opts.root_label``, i.e. ``$``)
        source: Document name recorded in provenance (ignored when ``opts`` is given)
        opts: Explicit options; overrides ``show_provenance`` and ``source``

    Returns:
        List of Kubernetes object mappings

    Example:
        >>> walk_objects([{"apiVersion": "v1", "kind": "Service"}, None])
        [{'apiVersion': 'v1', 'kind': 'Service'}]
    """
    if opts is None:
        opts = ReadOptions(show_provenance=show_provenance, source=source)
    context = WalkContext.root(opts)
    if label is not None:
        context = WalkContext(label=label, opts=opts)
    return json_walk(context, value)
