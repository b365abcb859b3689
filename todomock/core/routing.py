"""Routing — path templates compiled to regexes, matched in registration order.

Invariants:
    - A template is literal segments plus `:name` parameters; `:name?` is optional
    - A parameter captures exactly one path segment
    - Matching is anchored to the whole path; a trailing slash is tolerated
    - First registered template that matches wins; no match returns None
    - Params come back as a tuple in declaration order, None for absent optionals

Design Decisions:
    - Case-insensitive matching, optional trailing slash: the usual Express-style defaults
    - Router holds handlers opaquely; it never calls them
"""

import re
from dataclasses import dataclass
from typing import Generic, TypeVar
from urllib.parse import unquote

H = TypeVar("H")

_PARAM_SEGMENT = re.compile(r"^:(\w+)(\?)?$")


@dataclass(frozen=True)
class PathTemplate:
    """A compiled path template."""
    template: str
    pattern: re.Pattern
    param_names: tuple[str, ...]

    def match(self, path: str) -> tuple[str | None, ...] | None:
        found = self.pattern.match(path)
        if not found:
            return None
        return tuple(
            unquote(value) if value is not None else None
            for value in found.groups()
        )


def compile_template(template: str) -> PathTemplate:
    """Compile `/todos/:id?` into a PathTemplate."""
    if not template.startswith("/"):
        raise ValueError(f"Path template must start with '/': {template!r}")

    parts: list[str] = []
    names: list[str] = []
    for segment in template.strip("/").split("/"):
        if not segment:
            continue
        param = _PARAM_SEGMENT.match(segment)
        if param is None:
            parts.append("/" + re.escape(segment))
            continue
        name, optional = param.group(1), param.group(2)
        if name in names:
            raise ValueError(f"Duplicate parameter ':{name}' in {template!r}")
        names.append(name)
        if optional:
            parts.append(r"(?:/([^/]+?))?")
        else:
            parts.append(r"/([^/]+?)")

    pattern = re.compile("^" + "".join(parts) + r"/?$", re.IGNORECASE)
    return PathTemplate(template, pattern, tuple(names))


@dataclass(frozen=True)
class RouteMatch(Generic[H]):
    template: PathTemplate
    handler: H
    params: tuple[str | None, ...]

    @property
    def named_params(self) -> dict[str, str | None]:
        return dict(zip(self.template.param_names, self.params))


class Router(Generic[H]):
    """Ordered (template, handler) bindings."""

    def __init__(self):
        self._routes: list[tuple[PathTemplate, H]] = []

    def add(self, template: str, handler: H) -> None:
        self._routes.append((compile_template(template), handler))

    @property
    def templates(self) -> list[str]:
        return [t.template for t, _ in self._routes]

    def match(self, path: str) -> RouteMatch[H] | None:
        for template, handler in self._routes:
            params = template.match(path)
            if params is not None:
                return RouteMatch(template, handler, params)
        return None
