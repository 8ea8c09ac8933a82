"""Rule-based English pluralization used to derive collection names."""

from __future__ import annotations

from dataclasses import dataclass


def replace_last_occurrence(text: str, old: str, new: str) -> str:
    """Replace the rightmost case-insensitive occurrence of ``old`` in ``text``.

    Offsets are taken from ``text`` itself, never from ``text.lower()``.
    Returns ``text`` unchanged when ``old`` does not occur.
    """
    target = old.lower()
    width = len(old)
    for start in range(len(text) - width, -1, -1):
        if text[start:start + width].lower() == target:
            return text[:start] + new + text[start + width:]
    return text


@dataclass(frozen=True)
class PluralRule:
    """A suffix rule.

    Additive rules append ``plural`` to the word. Replacing rules swap the
    matched suffix for ``plural``.
    """

    plural: str
    replace: bool
    suffixes: tuple[str, ...]

    def match(self, word: str) -> str | None:
        """Return the first listed suffix the word ends with, if any."""
        for suffix in self.suffixes:
            if word[-len(suffix):].lower() == suffix:
                return suffix
        return None

    def apply(self, word: str, suffix: str) -> str:
        if self.replace:
            return replace_last_occurrence(word, suffix, self.plural)
        return word + self.plural


# First match wins, so order matters.
RULES: tuple[PluralRule, ...] = (
    PluralRule("s", False, ("th", "ph", "ay", "ey", "oy", "uy")),
    PluralRule("ice", True, ("ouse",)),
    PluralRule("es", False, ("bus", "ss", "sh", "ch", "x", "z")),
    PluralRule("es", False, ("o",)),
    PluralRule("ves", True, ("fe", "f")),
    PluralRule("na", True, ("non",)),
    PluralRule("ia", True, ("ion",)),
    PluralRule("es", True, ("is",)),
    PluralRule("ies", True, ("y",)),
    PluralRule("i", True, ("us",)),
)


def pluralize(word: str) -> str:
    """Return the plural form of a singular English noun.

    Blank input is returned unchanged. Words no rule matches get an ``s``.

    >>> pluralize("Category")
    'Categories'
    >>> pluralize("Mouse")
    'Mice'
    """
    if not word or word.isspace():
        return word

    for rule in RULES:
        suffix = rule.match(word)
        if suffix is not None:
            return rule.apply(word, suffix)
    return word + "s"
