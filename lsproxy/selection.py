"""Parsing of the comma-separated language list given on startup."""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from lsproxy import languages
from lsproxy.errors import UnknownLanguage
from lsproxy.languages import SupportedLanguage


@dataclass(frozen=True)
class Unspecified:
    """No language list was given; the workspace is auto-detected."""


@dataclass(frozen=True)
class Explicit:
    """Languages requested by the operator, in input order."""

    languages: Tuple[SupportedLanguage, ...]


@dataclass(frozen=True)
class Invalid:
    """At least one token was not a supported language."""

    tokens: Tuple[str, ...]


LanguageSelection = Union[Unspecified, Explicit, Invalid]


def resolve_selection(raw: Optional[str]) -> LanguageSelection:
    """Turn a raw language list into a selection.

    Every token is attempted so that all unknown names are reported at once.
    A single unknown token invalidates the whole list. Empty tokens, such as
    the middle of ``"python,,golang"``, count as unknown.

    Args:
        raw: Comma-separated canonical language names, or None.

    Returns:
        Unspecified when ``raw`` is None or blank, Invalid carrying every
        unknown token, or Explicit with the parsed languages.
    """
    if raw is None:
        return Unspecified()

    raw = raw.strip()
    if not raw:
        return Unspecified()

    parsed: List[SupportedLanguage] = []
    invalid: List[str] = []

    for token in raw.split(","):
        token = token.strip()
        try:
            parsed.append(languages.parse(token))
        except UnknownLanguage:
            invalid.append(token)

    if invalid:
        return Invalid(tuple(invalid))

    return Explicit(tuple(parsed))
