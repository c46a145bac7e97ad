"""Namespaced meta tag classification (App Links, OpenGraph, Twitter cards)."""

from __future__ import annotations

from dataclasses import dataclass

from headmeta.types import MetadataBuilder


@dataclass(frozen=True)
class KnownTag:
    """A namespace and the attribute whose value carries its prefix."""

    namespace: str
    key: str


# Checked in order; the first match claims the tag.
KNOWN_TAGS: tuple[KnownTag, ...] = (
    KnownTag("al", "property"),
    KnownTag("og", "property"),
    KnownTag("twitter", "name"),
)


def classify(
    attrs: dict[str, str],
    builder: MetadataBuilder,
    rules: tuple[KnownTag, ...] = KNOWN_TAGS,
) -> bool:
    """Record a meta tag under the first namespace it belongs to.

    Returns:
        True if a rule matched and the value was stored.
    """
    for rule in rules:
        value = attrs.get(rule.key)
        prefix = rule.namespace + ":"
        if value is not None and value.startswith(prefix):
            builder.namespace(rule.namespace)[value[len(prefix) :]] = attrs.get(
                "content"
            )
            return True
    return False
