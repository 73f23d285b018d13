"""Exceptions raised while acquiring Kubernetes objects."""

from typing import Optional


class MalformedStructureError(Exception):
    """Raised when a value is found where a Kubernetes object was expected.

    The walker raises this for any scalar (string, number, boolean) reached
    during traversal that is neither a container nor a Kubernetes object.
    The message is part of the public contract and reads exactly::

        Looking for kubernetes object at "<path>", but instead found <type>

    Attributes:
        path: Fully qualified breadcrumb of the offending value (e.g. ``$.foo[1]``)
        type_name: Rendered type name of the offending value (e.g. ``int``)
    """

    def __init__(self, path: str, type_name: str, message: Optional[str] = None) -> None:
        """Initialize MalformedStructureError exception.

        Args:
            path: Path at which the offending value was found
            type_name: Rendered type name of the offending value
            message: Override for the default message (used by subclasses)
        """
        if message is None:
            message = (
                f'Looking for kubernetes object at "{path}", but instead found {type_name}'
            )
        super().__init__(message)
        self.path = path
        self.type_name = type_name


class NestingTooDeepError(MalformedStructureError):
    """Raised when a document nests deeper than the configured maximum.

    Attributes:
        path: Path at which the depth limit was crossed
        type_name: Rendered type name of the value at that path
        max_depth: The limit that was exceeded
    """

    def __init__(self, path: str, type_name: str, max_depth: int) -> None:
        super().__init__(
            path,
            type_name,
            message=(
                f'Looking for kubernetes object at "{path}", '
                f"but nesting exceeds maximum depth {max_depth}"
            ),
        )
        self.max_depth = max_depth


class DocumentDecodeError(Exception):
    """Raised when YAML/JSON text cannot be decoded into values.

    Attributes:
        message: Description of the decoder failure
        source: Name of the document that failed to decode (optional)
    """

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        if source:
            message = f"{source}: {message}"
        super().__init__(message)
        self.source = source
