from typing import Optional

from contrail_anon.common.enums import DumpTable


class ContrailAnonError(Exception):
    pass


class ParseError(ContrailAnonError):
    """Line of a dump can't be decoded: bad hex, bad quoting or bad JSON"""


class MalformedValueError(ContrailAnonError):
    """Decoded value doesn't have the shape expected for its column"""


class RecordError(ContrailAnonError):
    """
    Wraps a ParseError or MalformedValueError with the position of the failed row
    """

    def __init__(self, table: DumpTable, line_number: int, line: str, cause: Optional[Exception] = None):
        self.table = table
        self.line_number = line_number
        self.line = line
        self.cause = cause
        super().__init__(
            f"{table.value}: line {line_number}: {cause} (line: {line[:200]!r})"
        )
