"""
Locale-aware ordering and matching for facet values.

Place and company names are Turkish, so plain code point order would put
'Çanakkale' after 'Zonguldak' and treat 'I'/'ı' and 'İ'/'i' as unrelated
letters. Only Turkish gets a dedicated alphabet; other locales fall back to
case-folded ordering.
"""

from typing import Callable, Iterable, List

TURKISH_ALPHABET = "abcçdefgğhıijklmnoöpqrsştuüvwxyz"

_TURKISH_WEIGHTS = {letter: index for index, letter in enumerate(TURKISH_ALPHABET)}
_TURKISH_LOWER = str.maketrans({"I": "ı", "İ": "i"})
_SEARCH_FOLD = str.maketrans({"I": "i", "İ": "i", "ı": "i"})


def turkish_lower(text: str) -> str:
    return text.translate(_TURKISH_LOWER).lower()


def search_fold(text: str) -> str:
    """Fold text for case-insensitive substring search; dotted and dotless i match."""
    return text.translate(_SEARCH_FOLD).casefold()


def _turkish_weight(char: str):
    if char in _TURKISH_WEIGHTS:
        return (1, _TURKISH_WEIGHTS[char])
    if char.isalpha():
        return (2, ord(char))
    # digits, spaces and punctuation sort before letters
    return (0, ord(char))


def _turkish_key(text: str):
    return (tuple(_turkish_weight(char) for char in turkish_lower(text)), text)


def _default_key(text: str):
    return (text.casefold(), text)


def collation_key(locale: str = "tr") -> Callable[[str], tuple]:
    if locale.lower().split("_")[0].split("-")[0] == "tr":
        return _turkish_key
    return _default_key


def sort_values(values: Iterable[str], locale: str = "tr") -> List[str]:
    return sorted(values, key=collation_key(locale))
