"""Registry of lexical rules grouped by category.

The registry is built once and handed to the extractor by reference. Rules work
on raw text with no notion of string or comment context, so a ``//`` inside a
string literal is reported as a comment.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Tuple

from annofinder.models import Category

TODO_MARKER = "TODO"


@dataclass(slots=True, frozen=True)
class PatternRule:
    """A single lexical rule. ``label`` is only used in diagnostics."""

    category: Category
    pattern: re.Pattern[str]
    label: str

    def finditer(self, text: str) -> Iterator[re.Match[str]]:
        return self.pattern.finditer(text)


class PatternRegistry:
    """Immutable, ordered table of rules per category."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[PatternRule] = ()) -> None:
        grouped: Dict[Category, list[PatternRule]] = {category: [] for category in Category}
        for rule in rules:
            grouped[rule.category].append(rule)
        self._rules: Dict[Category, Tuple[PatternRule, ...]] = {
            category: tuple(items) for category, items in grouped.items()
        }

    def rules_for(self, category: Category) -> Tuple[PatternRule, ...]:
        return self._rules[category]

    def with_rules(self, *rules: PatternRule) -> "PatternRegistry":
        """Return a new registry with ``rules`` appended after the existing ones."""
        return PatternRegistry([*self, *rules])

    def __iter__(self) -> Iterator[PatternRule]:
        for category in Category:
            yield from self._rules[category]

    def __len__(self) -> int:
        return sum(len(rules) for rules in self._rules.values())

    def __repr__(self) -> str:
        counts = ", ".join(f"{c.value}={len(r)}" for c, r in self._rules.items())
        return f"PatternRegistry({counts})"


def _rule(category: Category, label: str, expression: str, flags: int = 0) -> PatternRule:
    return PatternRule(category=category, pattern=re.compile(expression, flags), label=label)


def build_default_registry() -> PatternRegistry:
    """Build the stock comment, log and TODO rules."""
    return PatternRegistry(
        [
            _rule(Category.COMMENT, "line-comment", r"//.*"),
            _rule(Category.COMMENT, "block-comment", r"/\*.*?\*/", re.DOTALL),
            _rule(Category.COMMENT, "hash-comment", r"#.*"),
            _rule(Category.COMMENT, "triple-quoted", r"(\"\"\".*?\"\"\")|('''.*?''')", re.DOTALL),
            _rule(Category.LOG, "console.log", r"console\.log\(.*?\)"),
            _rule(Category.LOG, "System.out.println", r"System\.out\.println\(.*?\)"),
            _rule(Category.LOG, "logger.info", r"logger\.info\(.*?\)", re.IGNORECASE),
            _rule(Category.LOG, "logger.debug", r"logger\.debug\(.*?\)", re.IGNORECASE),
            _rule(Category.LOG, "logger.error", r"logger\.error\(.*?\)", re.IGNORECASE),
            _rule(Category.LOG, "print", r"print\(.*?\)"),
            # Evaluated per physical line by the extractor, not with finditer
            _rule(Category.TODO, "todo", re.escape(TODO_MARKER), re.IGNORECASE),
        ]
    )


DEFAULT_REGISTRY = build_default_registry()
