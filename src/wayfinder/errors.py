"""Wayfinder exception hierarchy.

Shared by the dispatcher, route strategies, and the ASGI adapter so every
module raises and catches the same types.
"""


class WayfinderError(Exception):
    """Base for all wayfinder-specific errors."""


class TypeMismatch(WayfinderError, TypeError):  # noqa: N818
    """Raised when a value doesn't have the shape an operation expects.

    Registration calls raise it for anything that isn't route-shaped, and
    ``Dispatcher.handle_request`` raises it for anything that isn't a
    ``RequestEvent``. Subclasses ``TypeError`` so generic callers can
    catch it the usual way.
    """

    def __init__(self, name: str, expected: str, value: object) -> None:
        self.name = name
        self.expected = expected
        self.value = value
        super().__init__(
            f"{name!r} must be {expected}, got {type(value).__name__}: {value!r}"
        )


class ConfigurationError(WayfinderError):
    """Raised when a route or app definition is invalid.

    Always raised at definition time, never while dispatching.
    """
