"""
Event tag construction and metric-name normalisation.

A tag template such as ``kubernetes.metrics.*`` is compiled once into a
prefix and a suffix; every event tag is then ``prefix + item + suffix``.
A template without ``*`` is returned verbatim for every event.
"""

import re
from dataclasses import dataclass
from typing import Optional

WILDCARD = "*"

_UPPERCASE = re.compile(r"[A-Z]")


def underscore(name: str) -> str:
    """Convert a camelCase summary field key into a snake_case metric suffix."""
    return _UPPERCASE.sub(lambda m: "_" + m.group(0).lower(), name)


@dataclass(frozen=True)
class TagTemplate:
    template: str
    prefix: Optional[str] = None
    suffix: str = ""

    @classmethod
    def compile(cls, template: str) -> "TagTemplate":
        if WILDCARD not in template:
            return cls(template=template)
        prefix, _, suffix = template.partition(WILDCARD)
        return cls(template=template, prefix=prefix, suffix=suffix)

    def build(self, item_name: str) -> str:
        if self.prefix is None:
            return self.template
        return f"{self.prefix}{item_name}{self.suffix}"
