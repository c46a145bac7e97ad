"""Tag attribute tokenizer."""

from __future__ import annotations

import re

# name = "double" | 'single' | unquoted
_ATTR_RE = re.compile(r"""([\w-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^"'\s>]+))""")


def parse_attributes(text: str) -> dict[str, str]:
    """Parse the attribute list of a tag into a dict.

    Names are lower-cased and the last duplicate wins. Attributes with
    no ``=`` or an empty value produce no entry. Values are taken
    literally, without entity decoding.

    Args:
        text: Raw text between the tag name and the closing ``>``.

    Returns:
        Mapping of attribute name to value.
    """
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(text):
        value = m.group(2) or m.group(3) or m.group(4)
        if value:
            attrs[m.group(1).lower()] = value
    return attrs
