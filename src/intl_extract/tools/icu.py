"""ICU MessageFormat parsing and canonical printing.

Validates default messages and normalizes their formatting, e.g.
``{count,plural,one{# item}other{# items}}`` becomes
``{count, plural, one {# item} other {# items}}``.

Escapes follow the react-intl message syntax: ``\\{`` and ``\\}`` in text,
``\\#`` (or ``\\\\#``) kept as ``\\#``, and ``\\uXXXX``. Any other backslash,
including a doubled one, is a syntax error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

SIMPLE_TYPES = ("number", "date", "time")
OPTION_TYPES = ("plural", "selectordinal", "select")

WHITESPACE = " \t\n\r"
# Characters that end an argument id or a selector.
_ID_STOP = set(WHITESPACE + ",.+={}#")
_ESCAPE_PRINT = re.compile(r"\\#|[{}\\]")
_ESCAPED_CHARS = {"\\": "\\\\", "\\#": "\\#", "{": "\\{", "}": "\\}"}
_HEX = set("0123456789abcdefABCDEF")


class MessageSyntaxError(ValueError):
    """A message is not valid ICU MessageFormat syntax."""

    def __init__(self, message: str, offset: int, line: int, column: int):
        self.offset = offset
        self.line = line
        self.column = column
        super().__init__(message)


@dataclass
class TextElement:
    value: str


@dataclass
class SimpleFormat:
    type: str
    style: str | None = None


@dataclass
class Option:
    selector: str
    value: list["Element"]


@dataclass
class OptionalFormat:
    type: str
    options: list[Option] = field(default_factory=list)
    offset: int = 0


@dataclass
class ArgumentElement:
    id: str
    format: SimpleFormat | OptionalFormat | None = None


Element = TextElement | ArgumentElement


class _Parser:
    def __init__(self, message: str):
        self.text = message
        self.pos = 0

    # --- low level ---

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def error(self, expected: str) -> MessageSyntaxError:
        found = f'"{self.peek()}"' if self.peek() else "end of input"
        consumed = self.text[: self.pos]
        line = consumed.count("\n") + 1
        column = self.pos - (consumed.rfind("\n") + 1) + 1
        return MessageSyntaxError(
            f"Expected {expected} but {found} found.", self.pos, line, column
        )

    def skip_ws(self) -> None:
        while self.peek() and self.peek() in WHITESPACE:
            self.pos += 1

    def expect(self, char: str) -> None:
        if self.peek() != char:
            raise self.error(f'"{char}"')
        self.pos += 1

    def read_word(self) -> str:
        start = self.pos
        while self.peek() and self.peek() not in _ID_STOP:
            self.pos += 1
        return self.text[start:self.pos]

    def read_number(self) -> int:
        start = self.pos
        while self.peek().isdigit():
            self.pos += 1
        if start == self.pos:
            raise self.error("number")
        return int(self.text[start:self.pos])

    # --- grammar ---

    def parse(self) -> list[Element]:
        elements = self.pattern(nested=False)
        if self.pos < len(self.text):
            raise self.error("end of input")
        return elements

    def pattern(self, nested: bool) -> list[Element]:
        elements: list[Element] = []
        while True:
            char = self.peek()
            if char == "":
                if nested:
                    raise self.error('"}"')
                return elements
            if char == "}":
                if nested:
                    return elements
                raise self.error('"{" or text')
            if char == "{":
                elements.append(self.argument())
            else:
                elements.append(TextElement(self.message_text()))

    def message_text(self) -> str:
        out: list[str] = []
        while self.peek() and self.peek() not in "{}":
            char = self.peek()
            if char != "\\":
                out.append(char)
                self.pos += 1
                continue
            nxt = self.text[self.pos + 1:self.pos + 2]
            if nxt in ("{", "}"):
                out.append(nxt)
                self.pos += 2
            elif nxt == "#":
                out.append("\\#")
                self.pos += 2
            elif nxt == "\\" and self.text[self.pos + 2:self.pos + 3] == "#":
                # `\\#` reads the same as `\#`
                out.append("\\#")
                self.pos += 3
            elif nxt == "u" and len(self.text) >= self.pos + 6 and set(self.text[self.pos + 2:self.pos + 6]) <= _HEX:
                out.append(chr(int(self.text[self.pos + 2:self.pos + 6], 16)))
                self.pos += 6
            else:
                raise self.error('"\\\\#", "\\#", "\\{", "\\}" or "\\u"')
        return "".join(out)

    def argument(self) -> ArgumentElement:
        self.expect("{")
        self.skip_ws()
        if self.peek().isdigit():
            arg_id = str(self.read_number())
        else:
            arg_id = self.read_word()
            if not arg_id:
                raise self.error("argument name")
        self.skip_ws()

        fmt = None
        if self.peek() == ",":
            self.pos += 1
            self.skip_ws()
            fmt = self.element_format()
            self.skip_ws()
        self.expect("}")
        return ArgumentElement(arg_id, fmt)

    def element_format(self) -> SimpleFormat | OptionalFormat:
        start = self.pos
        kind = self.read_word()
        if kind in SIMPLE_TYPES:
            self.skip_ws()
            style = None
            if self.peek() == ",":
                self.pos += 1
                self.skip_ws()
                style = self.style()
            return SimpleFormat(kind, style)
        if kind in OPTION_TYPES:
            self.skip_ws()
            self.expect(",")
            self.skip_ws()
            offset = 0
            if kind != "select" and self.text.startswith("offset", self.pos):
                self.pos += len("offset")
                self.skip_ws()
                self.expect(":")
                self.skip_ws()
                offset = self.read_number()
            return OptionalFormat(kind, self.options(), offset)
        self.pos = start
        raise self.error('"number", "date", "time", "plural", "selectordinal" or "select"')

    def style(self) -> str:
        start = self.pos
        while self.peek() and self.peek() not in WHITESPACE + "{}":
            self.pos += 1
        if start == self.pos:
            raise self.error("argument style")
        return self.text[start:self.pos]

    def options(self) -> list[Option]:
        options: list[Option] = []
        while True:
            self.skip_ws()
            if self.peek() == "}" and options:
                return options
            if self.peek() == "=":
                self.pos += 1
                selector = f"={self.read_number()}"
            else:
                selector = self.read_word()
                if not selector:
                    raise self.error("selector")
            self.skip_ws()
            self.expect("{")
            self.skip_ws()
            value = self.pattern(nested=True)
            self.expect("}")
            options.append(Option(selector, value))


def parse(message: str) -> list[Element]:
    """Parse an ICU message into a list of elements."""
    return _Parser(message).parse()


def _print_elements(elements: list[Element]) -> str:
    out: list[str] = []
    for element in elements:
        if isinstance(element, TextElement):
            out.append(_ESCAPE_PRINT.sub(lambda m: _ESCAPED_CHARS[m.group(0)], element.value))
        elif element.format is None:
            out.append(f"{{{element.id}}}")
        elif isinstance(element.format, SimpleFormat):
            style = f", {element.format.style}" if element.format.style else ""
            out.append(f"{{{element.id}, {element.format.type}{style}}}")
        else:
            fmt = element.format
            offset = f", offset:{fmt.offset}" if fmt.offset else ""
            options = "".join(
                f" {option.selector} {{{_print_elements(option.value)}}}"
                for option in fmt.options
            )
            out.append(f"{{{element.id}, {fmt.type}{offset},{options}}}")
    return "".join(out)


def print_icu_message(message: str) -> str:
    """Validate ``message`` and return it in canonical form.

    Raises:
        MessageSyntaxError: if the message cannot be parsed.
    """
    return _print_elements(parse(message))
