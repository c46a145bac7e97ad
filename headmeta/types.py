"""Result types for head metadata extraction."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

_EMPTY: Mapping[str, str | None] = MappingProxyType({})


@dataclass(frozen=True)
class Metadata:
    """Metadata extracted from a document's ``<head>``.

    Sequences are tuples and mappings are read-only views, so an
    instance cannot be changed once handed out.
    """

    title: str | None = None
    description: str | None = None
    keywords: str | None = None
    canonical: str | None = None
    meta: tuple[Mapping[str, str], ...] = ()
    al: Mapping[str, str | None] = field(default_factory=lambda: _EMPTY)
    og: Mapping[str, str | None] = field(default_factory=lambda: _EMPTY)
    twitter: Mapping[str, str | None] = field(default_factory=lambda: _EMPTY)
    json_ld: tuple[object, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "title": self.title,
            "description": self.description,
            "keywords": self.keywords,
            "canonical": self.canonical,
            "meta": [dict(attrs) for attrs in self.meta],
            "al": dict(self.al),
            "og": dict(self.og),
            "twitter": dict(self.twitter),
            "jsonLd": list(self.json_ld),
        }


@dataclass
class MetadataBuilder:
    """Mutable accumulator used during the single extraction pass."""

    title: str | None = None
    description: str | None = None
    keywords: str | None = None
    canonical: str | None = None
    meta: list[dict[str, str]] = field(default_factory=list)
    al: dict[str, str | None] = field(default_factory=dict)
    og: dict[str, str | None] = field(default_factory=dict)
    twitter: dict[str, str | None] = field(default_factory=dict)
    json_ld: list[object] = field(default_factory=list)

    def namespace(self, name: str) -> dict[str, str | None]:
        """Return the mapping for a known namespace (``al``/``og``/``twitter``)."""
        ns: dict[str, str | None] = getattr(self, name)
        return ns

    def freeze(self) -> Metadata:
        return Metadata(
            title=self.title,
            description=self.description,
            keywords=self.keywords,
            canonical=self.canonical,
            meta=tuple(MappingProxyType(dict(attrs)) for attrs in self.meta),
            al=MappingProxyType(dict(self.al)),
            og=MappingProxyType(dict(self.og)),
            twitter=MappingProxyType(dict(self.twitter)),
            json_ld=tuple(self.json_ld),
        )
