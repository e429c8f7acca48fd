import json
import time
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Any, Optional, List

from contrail_anon.common.enums import ResultCode, VerboseOptions, DumpTable


@dataclass
class RunOptions:
    contrail_anon_version: str
    internal_operation_id: str
    run_dir: str
    debug: bool
    config: Optional[str]
    verbose: VerboseOptions
    fq_name_dump: str
    uuid_dump: str
    output_dir: str
    parallel: bool
    version: bool

    def to_dict(self):
        return {
            k: v.value if isinstance(v, Enum) else v
            for k, v in asdict(self).items()
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


@dataclass
class Record:
    """
    One line of a cassandra CSV dump.

    ``value`` holds the decoded JSON value of the column: None, bool, int,
    float, str, list or dict.
    """
    key: bytes
    column: bytes
    value: Any


@dataclass
class TableStats:
    table: DumpTable
    input_file: Optional[str] = None
    output_file: Optional[str] = None
    rows: int = 0
    rows_changed: int = 0
    elapsed: Optional[float] = None

    def to_dict(self):
        data = asdict(self)
        data["table"] = self.table.value
        return data


@dataclass
class AnonymiseResult:
    tables: List[TableStats] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return sum(stats.rows for stats in self.tables)


class AnonResult:
    run_options = None
    result_code = ResultCode.UNKNOWN
    result_data = None
    start_time = None
    end_time = None
    _elapsed = None
    _exception = None
    _traceback = None

    def start(self, run_options: RunOptions):
        self.run_options = run_options
        self.start_time = time.time()

    def fail(self, exception: Exception = None):
        from contrail_anon.common.utils import exception_to_str

        self.end_time = time.time()
        self.result_code = ResultCode.FAIL
        self._exception = exception
        self._traceback = exception_to_str(self._exception)

    def complete(self):
        self.end_time = time.time()
        self.result_code = ResultCode.DONE

    @property
    def elapsed(self):
        if not self._elapsed:
            if self.start_time is None or self.end_time is None:
                return None

            self._elapsed = round(self.end_time - self.start_time, 2)
        return self._elapsed

    @property
    def exception(self) -> Optional[Exception]:
        if not self._exception:
            return None
        return self._exception

    @property
    def error_message(self) -> Optional[str]:
        if not self._traceback:
            return None

        return self._traceback
