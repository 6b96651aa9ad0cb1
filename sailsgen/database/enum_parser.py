"""Parser for MySQL enum column type strings such as enum('a','b')."""

import re
from typing import List

from ..errors import MalformedEnumDefinitionError

_ENUM_PREFIX = re.compile(r"\s*enum\s*\(", re.IGNORECASE)


def parse_enum_values(column_type: str) -> List[str]:
    """Return the literals of an enum(...) definition in source order.

    Literals are single-quoted and comma separated. Inside a literal a
    doubled quote ('') or a backslash escape stands for the next character.
    """
    match = _ENUM_PREFIX.match(column_type)
    if not match:
        raise MalformedEnumDefinitionError(column_type, "expected enum(...)", 0)

    values: List[str] = []
    pos = match.end()
    length = len(column_type)

    while True:
        pos = _skip_spaces(column_type, pos)
        if pos >= length or column_type[pos] != "'":
            raise MalformedEnumDefinitionError(column_type, "expected a quoted literal", pos)

        pos += 1
        chars = []
        while True:
            if pos >= length:
                raise MalformedEnumDefinitionError(column_type, "unterminated literal", pos)
            char = column_type[pos]
            if char == "\\":
                if pos + 1 >= length:
                    raise MalformedEnumDefinitionError(column_type, "dangling escape", pos)
                chars.append(column_type[pos + 1])
                pos += 2
            elif char == "'":
                if column_type[pos + 1:pos + 2] == "'":
                    chars.append("'")
                    pos += 2
                else:
                    pos += 1
                    break
            else:
                chars.append(char)
                pos += 1
        values.append("".join(chars))

        pos = _skip_spaces(column_type, pos)
        if pos >= length:
            raise MalformedEnumDefinitionError(column_type, "missing closing parenthesis", pos)
        if column_type[pos] == ",":
            pos += 1
            continue
        if column_type[pos] == ")":
            pos += 1
            break
        raise MalformedEnumDefinitionError(column_type, f"unexpected character {column_type[pos]!r}", pos)

    if column_type[pos:].strip():
        raise MalformedEnumDefinitionError(column_type, "trailing characters after enum list", pos)
    return values


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos
