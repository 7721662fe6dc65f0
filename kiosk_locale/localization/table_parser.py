"""Comma-delimited table parser for locale sources.

Handles the quoting rules translators actually use in spreadsheet exports:

- a field is quoted only when its first character is a double quote
- inside a quoted field the delimiter is literal and "" is one literal quote
- a quoted field closes on a quote followed by the delimiter or end of line
- a quoted field left open at the end of a physical line continues on the
  next line, joined with a newline

Unquoted fields are kept verbatim, including surrounding whitespace.
"""

import re
from collections.abc import Iterator
from enum import Enum, auto

from kiosk_locale.core.logging_utils import setup_logger

__all__ = ["DELIMITER", "QUOTE", "Record", "parse", "split_record"]

logger = setup_logger(__name__)

DELIMITER = ","
QUOTE = '"'

Record = list[str]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class _State(Enum):
    FIELD_START = auto()
    UNQUOTED = auto()
    QUOTED = auto()
    QUOTE_IN_QUOTED = auto()  # saw a quote inside a quoted field


def split_record(line: str) -> Record | None:
    """Split one logical line into fields.

    Args:
        line: Logical line; may contain newlines inside quoted fields

    Returns:
        List of fields, or None if the line ends inside an open quote
    """
    fields: Record = []
    buffer: list[str] = []
    state = _State.FIELD_START

    def flush():
        fields.append("".join(buffer))
        buffer.clear()

    for c in line:
        if state is _State.FIELD_START:
            if c == QUOTE:
                state = _State.QUOTED
            elif c == DELIMITER:
                flush()
            else:
                buffer.append(c)
                state = _State.UNQUOTED

        elif state is _State.UNQUOTED:
            if c == DELIMITER:
                flush()
                state = _State.FIELD_START
            else:
                buffer.append(c)

        elif state is _State.QUOTED:
            if c == QUOTE:
                state = _State.QUOTE_IN_QUOTED
            else:
                buffer.append(c)

        else:  # QUOTE_IN_QUOTED
            if c == QUOTE:
                buffer.append(QUOTE)
                state = _State.QUOTED
            elif c == DELIMITER:
                flush()
                state = _State.FIELD_START
            else:
                # Lone quote mid-field stays literal; the field is still open
                buffer.append(QUOTE)
                buffer.append(c)
                state = _State.QUOTED

    if state is _State.QUOTED:
        return None

    flush()
    return fields


def parse(raw: str | None) -> Iterator[Record]:
    """Lazily parse raw table text into records.

    Empty physical lines between records are skipped. A record whose quote is
    still open when the input ends is dropped with a warning.

    Args:
        raw: Whole table text

    Yields:
        One list of fields per logical row
    """
    if not raw:
        return

    pending: str | None = None
    line_number = 0
    record_start = 0

    for physical in _LINE_BREAK.split(raw):
        line_number += 1

        if pending is None:
            if not physical:
                continue
            line = physical
            record_start = line_number
        else:
            line = f"{pending}\n{physical}"

        fields = split_record(line)
        if fields is None:
            pending = line
            continue

        pending = None
        yield fields

    if pending is not None:
        logger.warning(
            f"Unterminated quoted field starting at line {record_start}; record dropped"
        )
