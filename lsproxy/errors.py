"""Exception hierarchy for lsproxy startup."""

from typing import List, Sequence, Tuple

USAGE_EXAMPLE = "Example: --languages python,golang or LANGUAGES=python,golang"


class LsproxyError(Exception):
    """Base exception for this project."""


class UnknownLanguage(LsproxyError):
    """Raised when a token is not the canonical form of a supported language."""

    def __init__(self, token: str):
        super().__init__(f"Unknown language: {token!r}")
        self.token = token


class InvalidLanguageList(LsproxyError):
    """Raised when a language list contains one or more unknown tokens."""

    def __init__(self, tokens: Sequence[str], valid_forms: Sequence[str]):
        self.tokens: Tuple[str, ...] = tuple(tokens)
        self.valid_forms: Tuple[str, ...] = tuple(valid_forms)
        super().__init__(f"Invalid language(s): {', '.join(self.tokens)}")

    def describe(self) -> List[str]:
        """Return the lines shown to the operator, one log record each."""
        lines = [str(self), "Supported languages:"]
        lines.extend(f"  - {form}" for form in self.valid_forms)
        lines.append(USAGE_EXAMPLE)
        return lines


class _CollaboratorFailure(LsproxyError):
    stage = "startup"

    def __init__(self, cause: BaseException):
        super().__init__(f"{self.stage} failed: {cause}")
        self.cause = cause


class ExportFailure(_CollaboratorFailure):
    """The OpenAPI document could not be written."""

    stage = "OpenAPI export"


class StateInitFailure(_CollaboratorFailure):
    """The application state could not be initialized."""

    stage = "State initialization"


class ServerFailure(_CollaboratorFailure):
    """The HTTP server terminated with an error."""

    stage = "Server"
