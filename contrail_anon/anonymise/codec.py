"""
Encoding and decoding of cassandra CSV dump lines.

A line is ``KEY,COLUMN,VALUE``: key and column are ``0x`` prefixed hex, value
is a JSON document written as a double quoted string literal with backslash
escapes. Short JSON literals are sometimes dumped without the quotes.
"""
import binascii
import json
import re
from typing import Any

from contrail_anon.common.constants import EMPTY_JSON_OBJECT, HEX_PREFIX, NULL_LITERAL
from contrail_anon.common.dto import Record
from contrail_anon.common.exceptions import ParseError

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}
_SIMPLE_ESCAPES_REVERSED = {v: k for k, v in _SIMPLE_ESCAPES.items()}
_UNICODE_ESCAPES_LENGTH = {"u": 4, "U": 8}
_OCTAL_DIGITS = "01234567"
_HEX_DIGITS = "0123456789abcdefABCDEF"
_SURROGATES = re.compile("[\ud800-\udfff]")


def _decode_hex(field: str, name: str) -> bytes:
    if field.startswith(HEX_PREFIX):
        field = field[len(HEX_PREFIX):]

    try:
        return binascii.unhexlify(field)
    except (binascii.Error, ValueError) as exc:
        raise ParseError(f"Invalid hex in {name} field: {exc}") from exc


def _read_hex(text: str, start: int, length: int) -> int:
    digits = text[start:start + length]
    if len(digits) != length or any(c not in _HEX_DIGITS for c in digits):
        raise ParseError(f"Invalid escape sequence at position {start - 2}")
    return int(digits, 16)


def unquote(literal: str) -> str:
    """
    Unquote a double quoted string literal.

    \\x and octal escapes stand for single bytes, \\u and \\U for code points.
    """
    if len(literal) < 2 or literal[0] != '"' or literal[-1] != '"':
        raise ParseError("Value is not a double quoted string")

    body = literal[1:-1]
    result = bytearray()
    idx = 0
    while idx < len(body):
        char = body[idx]
        if char == '"' or char == "\n":
            raise ParseError(f"Unexpected {char!r} at position {idx + 1} of quoted value")

        if char != "\\":
            result += char.encode("utf-8", "surrogateescape")
            idx += 1
            continue

        if idx + 1 >= len(body):
            raise ParseError("Quoted value ends with a lone backslash")

        escape = body[idx + 1]
        if escape in _SIMPLE_ESCAPES:
            result += _SIMPLE_ESCAPES[escape].encode("utf-8")
            idx += 2
        elif escape == "x":
            result.append(_read_hex(body, idx + 2, 2))
            idx += 4
        elif escape in _UNICODE_ESCAPES_LENGTH:
            length = _UNICODE_ESCAPES_LENGTH[escape]
            code_point = _read_hex(body, idx + 2, length)
            if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
                raise ParseError(f"Invalid code point U+{code_point:04X} in quoted value")
            result += chr(code_point).encode("utf-8")
            idx += 2 + length
        elif escape in _OCTAL_DIGITS:
            digits = body[idx + 1:idx + 4]
            if len(digits) != 3 or any(c not in _OCTAL_DIGITS for c in digits) or int(digits, 8) > 0xFF:
                raise ParseError(f"Invalid octal escape at position {idx + 1}")
            result.append(int(digits, 8))
            idx += 4
        else:
            raise ParseError(f"Unknown escape sequence \\{escape} at position {idx + 1}")

    return result.decode("utf-8", "replace")


def quote(text: str) -> str:
    """Double quoted string literal of text, printable characters are kept as is"""
    chunks = ['"']
    for char in text:
        if char in _SIMPLE_ESCAPES_REVERSED:
            chunks.append("\\" + _SIMPLE_ESCAPES_REVERSED[char])
        elif char.isprintable():
            chunks.append(char)
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            chunks.append("\\x%02x" % ord(char))
        elif ord(char) < 0x10000:
            chunks.append("\\u%04x" % ord(char))
        else:
            chunks.append("\\U%08x" % ord(char))
    chunks.append('"')
    return "".join(chunks)


def _reject_constant(name: str):
    raise ParseError(f"Invalid JSON value: {name} is not a JSON number")


def to_canonical_json(value: Any) -> str:
    rendered = json.dumps(value, ensure_ascii=False, separators=(",", ":"), sort_keys=True)
    # lone surrogates only appear inside JSON strings, keep them as JSON escapes
    return _SURROGATES.sub(lambda m: "\\u%04x" % ord(m.group()), rendered)


def decode_line(line: str) -> Record:
    fields = line.split(",", 2)
    if len(fields) != 3:
        raise ParseError(f"Expected 3 comma separated fields, got {len(fields)}")

    key_field, column_field, value_field = fields
    key = _decode_hex(key_field, "key")
    column = _decode_hex(column_field, "column")

    if not value_field.startswith('"'):
        value_field = '"' + value_field + '"'

    raw_json = unquote(value_field)
    try:
        value = json.loads(raw_json, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ParseError(f"Invalid JSON value: {exc}") from exc

    return Record(key=key, column=column, value=value)


def encode_line(record: Record) -> str:
    """
    Render a record as a dump line, without the line terminator.

    Null values and empty objects are written as the bare ``null`` literal,
    this is what the cassandra loader expects for empty columns.
    """
    rendered = to_canonical_json(record.value)
    if record.value is None or rendered == EMPTY_JSON_OBJECT:
        value = NULL_LITERAL
    else:
        value = quote(rendered)

    return ",".join((
        HEX_PREFIX + record.key.hex(),
        HEX_PREFIX + record.column.hex(),
        value,
    ))
