"""Node filter policy: which nodes are parsed, which subtrees are skipped."""

import re
from dataclasses import dataclass, field
from typing import Optional, Union

NamePattern = Union[str, re.Pattern]


def compile_patterns(values) -> list:
    """Turn raw strings into regexes; already compiled patterns pass through."""
    return [v if isinstance(v, re.Pattern) else re.compile(v) for v in values or []]


def matches_any(name: str, patterns) -> bool:
    """Exact match for plain strings, ``search`` for compiled patterns."""
    for pattern in patterns or []:
        if isinstance(pattern, re.Pattern):
            if pattern.search(name):
                return True
        elif pattern == name:
            return True
    return False


def _pattern_source(pattern: NamePattern) -> str:
    return pattern.pattern if isinstance(pattern, re.Pattern) else pattern


@dataclass
class FilterDecision:
    include: bool
    description: Optional[str] = None


@dataclass
class FilterPolicy:
    """Inclusion rules for one extraction run.

    ``exclude`` drops single nodes by name, ``exclude_children`` prunes the whole
    subtree below (and including) a matching node. ``node_types`` and
    ``require_export_settings`` restrict which kinds of nodes a parser sees.
    ``key_format`` rejects names that do not match it and reports why.
    """
    exclude: list = field(default_factory=list)
    exclude_children: list = field(default_factory=list)
    key_format: Optional[re.Pattern] = None
    node_types: Optional[tuple] = None
    require_export_settings: bool = False

    def is_excluded(self, node: dict) -> bool:
        return matches_any(node.get("name", ""), self.exclude)

    def is_skipped(self, node: dict) -> bool:
        if self.node_types is not None and node.get("type") not in self.node_types:
            return True
        if self.require_export_settings and not node.get("exportSettings"):
            return True
        return False

    def should_prune(self, node: dict) -> bool:
        return matches_any(node.get("name", ""), self.exclude_children)

    def check(self, node: dict) -> FilterDecision:
        excluded = self.is_excluded(node)
        skipped = self.is_skipped(node)
        if self.key_format is not None and not excluded and not skipped:
            name = node.get("name", "")
            if not self.key_format.search(name):
                return FilterDecision(
                    include=False,
                    description=f"key '{name}' did not conform to regex /{self.key_format.pattern}/",
                )
        return FilterDecision(include=not (excluded or skipped))

    def to_dict(self) -> dict:
        return {
            "exclude": [_pattern_source(p) for p in self.exclude],
            "excludeRegex": [isinstance(p, re.Pattern) for p in self.exclude],
            "excludeChildren": [_pattern_source(p) for p in self.exclude_children],
            "excludeChildrenRegex": [isinstance(p, re.Pattern) for p in self.exclude_children],
            "keyFormat": self.key_format.pattern if self.key_format is not None else None,
            "nodeTypes": list(self.node_types) if self.node_types is not None else None,
            "requireExportSettings": self.require_export_settings,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FilterPolicy":
        def restore(values, flags):
            flags = flags if flags is not None else [True] * len(values)
            return [re.compile(v) if is_re else v for v, is_re in zip(values, flags)]

        exclude = data.get("exclude") or []
        exclude_children = data.get("excludeChildren") or []
        key_format = data.get("keyFormat")
        node_types = data.get("nodeTypes")
        return cls(
            exclude=restore(exclude, data.get("excludeRegex")),
            exclude_children=restore(exclude_children, data.get("excludeChildrenRegex")),
            key_format=re.compile(key_format) if key_format else None,
            node_types=tuple(node_types) if node_types is not None else None,
            require_export_settings=bool(data.get("requireExportSettings", False)),
        )


# Preset policies per output type
def text_policy(exclude=None, exclude_children=None, key_format=None) -> FilterPolicy:
    return FilterPolicy(
        exclude=compile_patterns(exclude),
        exclude_children=compile_patterns(exclude_children),
        key_format=re.compile(key_format) if isinstance(key_format, str) else key_format,
        node_types=("TEXT",),
    )


def image_policy(exclude=None, exclude_children=None) -> FilterPolicy:
    return FilterPolicy(
        exclude=compile_patterns(exclude),
        exclude_children=compile_patterns(exclude_children),
        require_export_settings=True,
    )
