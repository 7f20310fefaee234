"""Registry data models — registry documents, component metadata and authors."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from ocinfo.errors import UsageError

REGISTRY_TYPE = "oc-registry"
DEPRECATED_STATE = "deprecated"

# npm "person" shorthand: ``Name <email> (url)``, every part optional
_PERSON_RE = re.compile(r"^([^<(]+?)?[ \t]*(?:<([^>(]+?)>)?[ \t]*(?:\(([^)]+?)\)|$)")


@dataclass
class RegistryDocument:
    """The JSON document served at the registry root."""

    type: str = ""
    components: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.type == REGISTRY_TYPE

    @classmethod
    def from_dict(cls, data: Any) -> RegistryDocument:
        if not isinstance(data, dict):
            return cls()
        components = data.get("components") or []
        return cls(
            type=str(data.get("type") or ""),
            components=list(components) if isinstance(components, list) else [],
        )


# ── Authors ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class StructuredAuthor:
    """An author given as ``{"name": ..., "email": ...}``."""

    name: str = ""
    email: str = ""
    url: str = ""

    @property
    def display(self) -> str:
        if self.email:
            return f"{self.name} <{self.email}>".strip()
        return self.name


@dataclass(frozen=True)
class TextAuthor:
    """An author given as free text, e.g. ``Jane Doe <jane@x.com> (https://x.com)``."""

    text: str

    def parsed(self) -> StructuredAuthor:
        match = _PERSON_RE.match(self.text.strip())
        if match is None:
            return StructuredAuthor(name=self.text.strip())
        name, email, url = match.groups()
        return StructuredAuthor(
            name=(name or "").strip(),
            email=(email or "").strip(),
            url=(url or "").strip(),
        )

    @property
    def display(self) -> str:
        return self.parsed().display


AuthorField = Union[TextAuthor, StructuredAuthor]


def parse_author(value: Any) -> AuthorField | None:
    """Build an author from the raw ``author`` value of a metadata document.

    Returns None when the component has no usable author.
    """
    if isinstance(value, str):
        return TextAuthor(value) if value else None
    if isinstance(value, dict):
        return StructuredAuthor(
            name=str(value.get("name") or ""),
            email=str(value.get("email") or ""),
            url=str(value.get("url") or ""),
        )
    return None


# ── Component metadata ──────────────────────────────────────────────


@dataclass
class ComponentMetadata:
    """The ``~info`` document of a single published component."""

    name: str
    version: str
    author: AuthorField | None = None
    dependencies: dict[str, str] = field(default_factory=dict)
    state: str = ""
    plugins: list[str] = field(default_factory=list)

    @property
    def qualified_id(self) -> str:
        return f"{self.name}@{self.version}"

    @property
    def is_deprecated(self) -> bool:
        return self.state == DEPRECATED_STATE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ComponentMetadata:
        """Build metadata from a parsed ``~info`` body.

        ``state`` and ``plugins`` are read from the top level first, then
        from the ``oc`` block registries nest them under.
        """
        oc = data.get("oc")
        if not isinstance(oc, dict):
            oc = {}

        dependencies = data.get("dependencies")
        plugins = data.get("plugins")
        if plugins is None:
            plugins = oc.get("plugins")
        if isinstance(plugins, dict):
            plugins = list(plugins)

        return cls(
            name=str(data.get("name") or ""),
            version=str(data.get("version") or ""),
            author=parse_author(data.get("author")),
            dependencies=dict(dependencies) if isinstance(dependencies, dict) else {},
            state=str(data.get("state") or oc.get("state") or ""),
            plugins=[str(p) for p in plugins] if isinstance(plugins, list) else [],
        )


class AggregationKey(str, Enum):
    """Which attribute of the active components to summarize."""

    AUTHORS = "authors"
    DEPENDENCIES = "dependencies"
    PLUGINS = "plugins"

    @property
    def label(self) -> str:
        return _LABELS[self]

    def extract(self, component: ComponentMetadata) -> list[str]:
        """Return the values this key picks out of a component."""
        if self is AggregationKey.AUTHORS:
            return [component.author.display] if component.author is not None else []
        if self is AggregationKey.DEPENDENCIES:
            return list(component.dependencies)
        return list(component.plugins)

    @classmethod
    def parse(cls, option: str) -> AggregationKey:
        try:
            return cls(option)
        except ValueError:
            raise UsageError(f"option {option} is not valid") from None


_LABELS = {
    AggregationKey.AUTHORS: "component authors",
    AggregationKey.DEPENDENCIES: "node.js dependencies",
    AggregationKey.PLUGINS: "node.js plugins",
}
