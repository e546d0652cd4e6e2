"""Registry of the language backends lsproxy can activate.

Each supported language has exactly one canonical lowercase name. The names
are matched exactly and case-sensitively; callers are responsible for any
trimming of user input.
"""

import enum
from typing import Dict, Tuple

from lsproxy.errors import UnknownLanguage


class SupportedLanguage(enum.Enum):
    """Closed set of language backend families."""

    PYTHON = enum.auto()
    TYPESCRIPT_JAVASCRIPT = enum.auto()
    RUST = enum.auto()
    CPP = enum.auto()
    CSHARP = enum.auto()
    JAVA = enum.auto()
    GOLANG = enum.auto()
    PHP = enum.auto()
    RUBY = enum.auto()
    RUBY_SORBET = enum.auto()

    def __str__(self) -> str:
        return canonical_form(self)


# (language, canonical name, file extensions used for workspace detection).
# Row order is the documented order of valid_forms().
_LANGUAGE_TABLE: Tuple[Tuple[SupportedLanguage, str, Tuple[str, ...]], ...] = (
    (SupportedLanguage.PYTHON, "python", (".py",)),
    (SupportedLanguage.TYPESCRIPT_JAVASCRIPT, "typescript_javascript", (".ts", ".tsx", ".js", ".jsx")),
    (SupportedLanguage.RUST, "rust", (".rs",)),
    (SupportedLanguage.CPP, "cpp", (".c", ".cc", ".cpp", ".cxx", ".h", ".hpp", ".hh")),
    (SupportedLanguage.CSHARP, "csharp", (".cs",)),
    (SupportedLanguage.JAVA, "java", (".java",)),
    (SupportedLanguage.GOLANG, "golang", (".go",)),
    (SupportedLanguage.PHP, "php", (".php",)),
    (SupportedLanguage.RUBY, "ruby", (".rb",)),
    # Sorbet projects use Ruby sources; detection keys off sorbet/config.
    (SupportedLanguage.RUBY_SORBET, "ruby_sorbet", ()),
)

_BY_NAME: Dict[str, SupportedLanguage] = {name: lang for lang, name, _ in _LANGUAGE_TABLE}
_BY_LANGUAGE: Dict[SupportedLanguage, str] = {lang: name for lang, name, _ in _LANGUAGE_TABLE}
_EXTENSIONS: Dict[SupportedLanguage, Tuple[str, ...]] = {lang: exts for lang, _, exts in _LANGUAGE_TABLE}


def parse(text: str) -> SupportedLanguage:
    """Parse a canonical language name.

    Args:
        text: The name to look up. It is not trimmed or case-folded.

    Returns:
        The matching language.

    Raises:
        UnknownLanguage: If ``text`` is not one of the canonical names.
    """
    try:
        return _BY_NAME[text]
    except KeyError:
        raise UnknownLanguage(text) from None


def canonical_form(language: SupportedLanguage) -> str:
    """Return the canonical name of a language."""
    return _BY_LANGUAGE[language]


def valid_forms() -> Tuple[str, ...]:
    """Return every canonical name, in registry order."""
    return tuple(name for _, name, _ in _LANGUAGE_TABLE)


def extensions_for(language: SupportedLanguage) -> Tuple[str, ...]:
    """Return the file extensions that mark a workspace as using ``language``."""
    return _EXTENSIONS[language]
