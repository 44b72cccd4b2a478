"""
Identifier normalization.

Raw SQL identifiers may contain spaces, dashes, leading digits or reserved
words. NameSanitizer maps them to valid identifiers under a casing policy.
The mapping is stateless, so two raw names can normalize to the same result.
"""

import re
from enum import Enum
from typing import Iterable, List, Optional


PLACEHOLDER_NAME = "_"

_ILLEGAL_CHARS = re.compile(r"[^a-zA-Z0-9_$]")
_WORD_SEPARATORS = re.compile(r"[^a-zA-Z0-9]+")
_CAMEL_WORD = re.compile(r"[A-Z][a-z0-9]*|[a-z0-9]+")


class NamingCase(Enum):
    """Casing policies for generated identifiers."""
    VERBATIM = "verbatim"  # order_items
    CAMEL_CASE = "camel"   # orderItems


def split_words(name: str) -> List[str]:
    """
    Split on non-alphanumerics and before every capital letter.

    An all-caps chunk (`ID` in `user_ID`) stays one word. Camel-cased output
    splits back into the words it was joined from (`aBC` -> a, B, C).
    """
    words: List[str] = []
    for chunk in _WORD_SEPARATORS.split(name):
        if not chunk:
            continue
        if chunk[0].isupper() and chunk.isupper():
            words.append(chunk)
        else:
            words.extend(_CAMEL_WORD.findall(chunk))
    return words


def to_camel_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return ""
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


class NameSanitizer:
    """Normalizes identifiers for one target language."""

    def __init__(self, reserved_words: Optional[Iterable[str]] = None,
                 builtin_types: Optional[Iterable[str]] = None):
        """
        Args:
            reserved_words: Keywords that cannot be used as identifiers
            builtin_types: Predefined type names that cannot be redeclared
        """
        self.forbidden = frozenset(reserved_words or ()) | frozenset(builtin_types or ())

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.VERBATIM,
                      suffix_on_conflict: str = "_") -> str:
        """
        Normalize a raw identifier.

        Deterministic and idempotent: normalizing an already normalized
        name returns it unchanged.

        Args:
            name: Raw identifier from the catalog
            target_case: Casing policy
            suffix_on_conflict: Appended to reserved words and builtin types

        Returns:
            A valid identifier
        """
        if target_case == NamingCase.CAMEL_CASE:
            name = to_camel_case(name)

        cleaned = _ILLEGAL_CHARS.sub("_", name) or PLACEHOLDER_NAME
        if cleaned[0].isdigit():
            cleaned = "_" + cleaned

        if cleaned in self.forbidden:
            cleaned += suffix_on_conflict
        return cleaned
