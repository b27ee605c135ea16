"""Parser for .strings localization tables.

Tables use the familiar key/value syntax::

    /* Title of the settings screen */
    "settings.title" = "Settings";
    // Line comments are allowed too
    "greeting" = "Hello, \\"%@\\"!";

Keys and values are double-quoted and may contain the escapes \\", \\\\, \\n,
\\t, \\r and \\uXXXX. Files are UTF-8, or UTF-16 when a byte order mark is
present.
"""

import codecs
from pathlib import Path

from .errors import StringsFormatError

_ESCAPES = {
    '"': '"',
    '\\': '\\',
    "'": "'",
    'n': '\n',
    't': '\t',
    'r': '\r',
    '0': '\0',
}


def decode_strings_bytes(data: bytes) -> str:
    """Decode raw table bytes honouring a UTF-16/UTF-8 byte order mark."""
    if data.startswith(codecs.BOM_UTF16_LE) or data.startswith(codecs.BOM_UTF16_BE):
        return data.decode("utf-16")
    if data.startswith(codecs.BOM_UTF8):
        return data[len(codecs.BOM_UTF8):].decode("utf-8")
    return data.decode("utf-8")


class _Scanner:
    """Character scanner tracking the current line for error messages"""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def advance(self, count: int = 1) -> str:
        chunk = self.text[self.pos:self.pos + count]
        self.line += chunk.count("\n")
        self.pos += count
        return chunk

    def skip_trivia(self) -> None:
        """Skip whitespace and comments."""
        while not self.at_end():
            char = self.peek()
            if char.isspace():
                self.advance()
            elif char == "/" and self.peek(1) == "*":
                end = self.text.find("*/", self.pos + 2)
                if end == -1:
                    raise StringsFormatError("Unterminated block comment", self.line)
                self.advance(end + 2 - self.pos)
            elif char == "/" and self.peek(1) == "/":
                end = self.text.find("\n", self.pos)
                self.advance((end if end != -1 else len(self.text)) - self.pos)
            else:
                return

    def expect(self, char: str) -> None:
        self.skip_trivia()
        if self.peek() != char:
            found = self.peek() or "end of file"
            raise StringsFormatError(f"Expected '{char}' but found '{found}'", self.line)
        self.advance()

    def read_quoted(self) -> str:
        self.skip_trivia()
        if self.peek() != '"':
            found = self.peek() or "end of file"
            raise StringsFormatError(f"Expected quoted string but found '{found}'", self.line)
        self.advance()

        parts = []
        while True:
            if self.at_end():
                raise StringsFormatError("Unterminated string", self.line)
            char = self.advance()
            if char == '"':
                return "".join(parts)
            if char != "\\":
                parts.append(char)
                continue

            escape = self.advance()
            if escape in ("u", "U"):
                digits = self.advance(4)
                try:
                    parts.append(chr(int(digits, 16)))
                except ValueError:
                    raise StringsFormatError(f"Invalid unicode escape '\\{escape}{digits}'", self.line)
            elif escape in _ESCAPES:
                parts.append(_ESCAPES[escape])
            else:
                parts.append(escape)


def parse_strings(text: str) -> dict[str, str]:
    """Parse the contents of a .strings table.

    Args:
        text: Decoded table text

    Returns:
        Mapping of keys to localized values; later duplicates win

    Raises:
        StringsFormatError: If the table is malformed
    """
    scanner = _Scanner(text.lstrip("\ufeff"))
    entries: dict[str, str] = {}

    while True:
        scanner.skip_trivia()
        if scanner.at_end():
            return entries

        key = scanner.read_quoted()
        scanner.skip_trivia()
        if scanner.peek() == ";":
            # "key"; shorthand maps the key to itself
            scanner.advance()
            entries[key] = key
            continue

        scanner.expect("=")
        value = scanner.read_quoted()
        scanner.expect(";")
        entries[key] = value


def load_strings_file(path: Path) -> dict[str, str]:
    """Read and parse a .strings table from disk.

    Raises:
        OSError: If the file cannot be read
        StringsFormatError: If the file cannot be decoded or parsed
    """
    try:
        text = decode_strings_bytes(path.read_bytes())
    except UnicodeDecodeError as e:
        raise StringsFormatError(f"Cannot decode {path.name}: {e}")
    return parse_strings(text)
