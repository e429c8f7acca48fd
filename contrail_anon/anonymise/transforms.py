from typing import Callable

from contrail_anon.anonymise.ip_mask import IpMask
from contrail_anon.anonymise.policy import hash_fq_name_segments
from contrail_anon.common.constants import (
    DISPLAY_NAME_COLUMN, FLOATING_IP_COLUMN, FQ_NAME_COLUMN, FQ_NAME_SEPARATOR
)
from contrail_anon.common.dto import Record
from contrail_anon.common.exceptions import MalformedValueError
from contrail_anon.common.utils import hash_value, to_bytes

RecordTransformer = Callable[[Record], Record]


def _column_name(record: Record) -> str:
    return record.column.decode("utf-8", "surrogateescape")


def anonymise_fq_name_record(record: Record) -> Record:
    """
    Columns of the fq_name table are ``<fq_name segments>:<uuid>``, the
    trailing uuid is kept and the fq_name part is hashed.
    """
    fq_name = _column_name(record).split(FQ_NAME_SEPARATOR)
    hashed = hash_fq_name_segments(fq_name[:-1])
    hashed.append(fq_name[-1])
    record.column = to_bytes(FQ_NAME_SEPARATOR.join(hashed))
    return record


class UuidRecordTransformer:
    """Anonymise the sensitive property columns of the uuid table"""

    def __init__(self, ip_mask: IpMask):
        self.ip_mask = ip_mask
        self._handlers = {
            FQ_NAME_COLUMN: self._anonymise_fq_name,
            DISPLAY_NAME_COLUMN: self._anonymise_display_name,
            FLOATING_IP_COLUMN: self._anonymise_floating_ip,
        }

    def __call__(self, record: Record) -> Record:
        handler = self._handlers.get(_column_name(record))
        if handler is not None:
            record.value = handler(record.value)
        return record

    @staticmethod
    def _anonymise_fq_name(value):
        # full fq_name here, there is no trailing uuid to keep
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise MalformedValueError(f"{FQ_NAME_COLUMN} must be a list of strings, got {value!r}")
        return hash_fq_name_segments(value)

    @staticmethod
    def _anonymise_display_name(value):
        if value is None:
            return value
        if not isinstance(value, str):
            raise MalformedValueError(f"{DISPLAY_NAME_COLUMN} must be a string, got {value!r}")
        return hash_value(to_bytes(value))

    def _anonymise_floating_ip(self, value):
        if value is None:
            return value
        if not isinstance(value, str):
            raise MalformedValueError(f"{FLOATING_IP_COLUMN} must be a string, got {value!r}")
        return self.ip_mask.apply(value)
