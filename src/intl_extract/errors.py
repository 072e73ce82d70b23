"""Exception hierarchy for message extraction.

Every error raised while extracting a file derives from ExtractionError and
carries the source location of the offending node so the CLI can point at it.
"""

from __future__ import annotations


class ExtractionError(Exception):
    """A user-facing extraction failure tied to a location in a source file."""

    def __init__(
        self,
        message: str,
        *,
        file: str | None = None,
        line: int | None = None,
        column: int | None = None,
        frame: str = "",
    ):
        self.message = message
        self.file = file
        self.line = line
        self.column = column
        self.frame = frame
        super().__init__(self._format())

    def _format(self) -> str:
        where = ""
        if self.file:
            where = self.file
            if self.line is not None:
                where += f":{self.line}:{self.column or 0}"
            where += ": "
        text = f"{where}{self.message}"
        if self.frame:
            text += "\n" + self.frame
        return text


class NotStaticallyEvaluable(ExtractionError):
    """A descriptor field could not be reduced to a constant."""


class TemplateSyntaxError(ExtractionError):
    """A defaultMessage is not valid ICU message syntax."""


class EscapingMismatch(TemplateSyntaxError):
    """Backslash escaping used in a JSX string literal, where it has no effect."""


class DuplicateIdConflict(ExtractionError):
    """The same message id was declared twice with different content."""


class MissingDescription(ExtractionError):
    """A descriptor has no description while descriptions are enforced."""


class ExpectedLiteralArgument(ExtractionError):
    """A formatIntlMessage() call whose first argument is not a literal."""


class InvalidMessageId(ExtractionError):
    """A descriptor whose id is missing or is not a string or number."""
