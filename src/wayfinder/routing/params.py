"""Path pattern parsing and parameter conversion for ``PathRoute``.

Patterns use ``{name}`` placeholders with optional converters::

    /users/{id:int}
    /files/{filepath:path}
"""

import re
from dataclasses import dataclass

from wayfinder.errors import ConfigurationError

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}

_PLACEHOLDER = re.compile(r"\{([^{}:]+)(?::([^{}]+))?\}")
_ANGLE_PLACEHOLDER = re.compile(r"<[^<>/]+>")


@dataclass(frozen=True, slots=True)
class CompiledPath:
    """A path pattern compiled to an anchored regex."""

    pattern: str
    regex: re.Pattern[str]
    converters: dict[str, str]

    def match(self, path: str) -> dict[str, str | int | float] | None:
        """Return converted params for *path*, or ``None`` if it doesn't match."""
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return {
            name: convert_param(value, self.converters[name])
            for name, value in m.groupdict().items()
        }


def convert_param(value: str, param_type: str) -> str | int | float:
    """Convert a captured path segment to the converter's type.

    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    _, target_type = CONVERTERS[param_type]
    return target_type(value)


def compile_path(pattern: str) -> CompiledPath:
    """Compile a ``{param}`` path pattern.

    Raises ``ConfigurationError`` for unknown converters, duplicate names,
    a ``path`` converter that isn't last, or Flask-style ``<param>``
    placeholders.
    """
    if not pattern.startswith("/"):
        msg = f"Path pattern {pattern!r} must start with '/'."
        raise ConfigurationError(msg)
    if _ANGLE_PLACEHOLDER.search(pattern):
        msg = (
            f"Path pattern {pattern!r} uses <param> placeholders; "
            "use {param} or {param:int} instead."
        )
        raise ConfigurationError(msg)

    converters: dict[str, str] = {}
    parts: list[str] = []
    pos = 0
    for m in _PLACEHOLDER.finditer(pattern):
        name, param_type = m.group(1), m.group(2) or "str"
        if param_type not in CONVERTERS:
            msg = f"Unknown converter {param_type!r} in path pattern {pattern!r}."
            raise ConfigurationError(msg)
        if name in converters:
            msg = f"Duplicate parameter {name!r} in path pattern {pattern!r}."
            raise ConfigurationError(msg)
        if param_type == "path" and m.end() != len(pattern):
            msg = f"The path converter must be the last segment in {pattern!r}."
            raise ConfigurationError(msg)
        converters[name] = param_type
        parts.append(re.escape(pattern[pos : m.start()]))
        parts.append(f"(?P<{name}>{CONVERTERS[param_type][0]})")
        pos = m.end()
    parts.append(re.escape(pattern[pos:]))

    try:
        regex = re.compile("".join(parts))
    except re.error as exc:
        msg = f"Invalid path pattern {pattern!r}: {exc}"
        raise ConfigurationError(msg) from exc
    return CompiledPath(pattern=pattern, regex=regex, converters=converters)
