"""Pattern catalog: the ordered rule set used by one parse pass.

Catalog order is the tie-break between rules matching at the same offset:
the earlier rule wins.

Thread Safety:
PatternCatalog is immutable after creation. Safe to share.
Use CatalogBuilder for mutable construction.

Example:
    >>> builder = create_catalog_with_defaults()
    >>> builder.remove("word_italic")
    >>> catalog = builder.build()
    >>> "word_italic" in catalog
    False
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from functools import lru_cache

from spanmark.patterns import PatternRule, default_rules
from spanmark.utils.hashing import hash_str


def _rule_key(rule: PatternRule) -> str | None:
    compiled = getattr(rule.match, "pattern", None)
    if not isinstance(compiled, re.Pattern):
        return None
    return "\x1f".join(
        (
            rule.name,
            str(int(rule.element_type)),
            f"{rule.strip.lead},{rule.strip.trail}",
            str(rule.recurse),
            str(rule.exclusive),
            str(getattr(rule.match, "escapable", False)),
            str(compiled.flags),
            compiled.pattern,
        )
    )


def _fingerprint(rules: tuple[PatternRule, ...]) -> str | None:
    keys = []
    for rule in rules:
        key = _rule_key(rule)
        if key is None:
            return None
        keys.append(key)
    return hash_str("\x1e".join(keys))


class PatternCatalog:
    """Immutable, ordered collection of pattern rules.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_rules", "_by_name", "_fingerprint")

    def __init__(self, rules: tuple[PatternRule, ...] = ()) -> None:
        """Initialize catalog from rules in precedence order.

        Use CatalogBuilder to create instances with validation.
        """
        self._rules = rules
        self._by_name = {rule.name: rule for rule in rules}
        self._fingerprint = _fingerprint(rules)

    @property
    def fingerprint(self) -> str | None:
        """Content hash of the rules, or None if a matcher is not a regex.

        Catalogs built from equal rules share a fingerprint. Rules with
        arbitrary callables as matchers cannot be hashed by content.
        """
        return self._fingerprint

    def get(self, name: str) -> PatternRule | None:
        """Get rule by name.

        Args:
            name: Rule name (e.g., "bold", "hashtag")

        Returns:
            Rule if present, None otherwise
        """
        return self._by_name.get(name)

    @property
    def rules(self) -> tuple[PatternRule, ...]:
        """All rules in precedence order."""
        return self._rules

    @property
    def names(self) -> tuple[str, ...]:
        """Rule names in precedence order."""
        return tuple(rule.name for rule in self._rules)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[PatternRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"PatternCatalog({', '.join(self.names)})"


class CatalogBuilder:
    """Mutable builder for PatternCatalog.

    Example:
        >>> builder = CatalogBuilder()
        >>> builder.add(delimited("bold", "*", ElementType.BOLD))
        >>> catalog = builder.build()
    """

    __slots__ = ("_rules",)

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._rules: list[PatternRule] = []

    def _index(self, name: str) -> int:
        for i, rule in enumerate(self._rules):
            if rule.name == name:
                return i
        msg = f"No rule named '{name}'"
        raise KeyError(msg)

    def _check_new(self, rule: PatternRule) -> None:
        if any(existing.name == rule.name for existing in self._rules):
            msg = f"Rule '{rule.name}' already registered"
            raise ValueError(msg)

    def add(self, rule: PatternRule) -> CatalogBuilder:
        """Append a rule at the lowest precedence.

        Returns:
            Self for chaining

        Raises:
            ValueError: If a rule with the same name exists
        """
        self._check_new(rule)
        self._rules.append(rule)
        return self

    def add_all(self, rules: Iterable[PatternRule]) -> CatalogBuilder:
        """Append several rules in order."""
        for rule in rules:
            self.add(rule)
        return self

    def insert_before(self, name: str, rule: PatternRule) -> CatalogBuilder:
        """Insert a rule so it wins ties against the rule called ``name``.

        Raises:
            KeyError: If ``name`` is not registered
            ValueError: If a rule with the same name as ``rule`` exists
        """
        self._check_new(rule)
        self._rules.insert(self._index(name), rule)
        return self

    def remove(self, name: str) -> CatalogBuilder:
        """Remove a rule by name.

        Raises:
            KeyError: If ``name`` is not registered
        """
        del self._rules[self._index(name)]
        return self

    def build(self) -> PatternCatalog:
        """Build immutable catalog from the registered rules."""
        return PatternCatalog(tuple(self._rules))

    def __len__(self) -> int:
        return len(self._rules)


@lru_cache(maxsize=1)
def default_catalog() -> PatternCatalog:
    """Get the built-in catalog (built once, then shared).

    Thread Safety:
        The catalog is immutable; concurrent first calls may build it twice,
        which is harmless.
    """
    return PatternCatalog(default_rules())


def create_catalog_with_defaults() -> CatalogBuilder:
    """Get a builder pre-filled with the built-in rules.

    Example:
        >>> builder = create_catalog_with_defaults()
        >>> builder.add(my_rule)
        >>> catalog = builder.build()
    """
    return CatalogBuilder().add_all(default_rules())


__all__ = [
    "CatalogBuilder",
    "PatternCatalog",
    "create_catalog_with_defaults",
    "default_catalog",
]
