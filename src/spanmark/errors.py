"""Exception classes for Spanmark.

Malformed markup is never an error: it degrades to plain text. These
exceptions cover programmer mistakes (bad rule definitions, strip rules
applied to too-short text) and renderer failures.
"""

from __future__ import annotations


class SpanmarkError(Exception):
    """Base exception for all Spanmark errors.

    Subclass this for specific error categories.
    """

    pass


class DelimiterError(SpanmarkError, ValueError):
    """A strip rule was applied to text shorter than its delimiters.

    Raised by ``Delimiters.__call__``. This is a precondition violation by
    the rule's matcher, fatal to the parse call that triggers it.
    """

    def __init__(self, text: str, lead: int, trail: int) -> None:
        """Initialize delimiter error.

        Args:
            text: The raw match that could not be stripped
            lead: Number of leading delimiter characters expected
            trail: Number of trailing delimiter characters expected
        """
        self.text = text
        self.lead = lead
        self.trail = trail
        super().__init__(
            f"Cannot strip {lead}+{trail} delimiter characters from "
            f"{len(text)}-character match {text!r}"
        )


class CatalogError(SpanmarkError):
    """Error in a pattern rule or catalog definition.

    Raised when a rule is built from an invalid delimiter or pattern.
    """

    def __init__(self, rule_name: str, message: str) -> None:
        """Initialize catalog error.

        Args:
            rule_name: Name of the offending rule
            message: Description of the problem
        """
        self.rule_name = rule_name
        super().__init__(f"Rule '{rule_name}': {message}")


class RenderError(SpanmarkError):
    """Error during rendering.

    Raised when a wrap function returns something other than a string.
    """

    pass
