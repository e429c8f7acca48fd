import hashlib
import re
import sys
import traceback
import uuid
from pathlib import Path
from typing import Dict, Union

import yaml

from contrail_anon.common.constants import TRACEBACK_LINES_COUNT

_UUID_CANONICAL = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
UUID_PATTERN = re.compile(
    rf"(?:{_UUID_CANONICAL}|\{{{_UUID_CANONICAL}\}}|urn:uuid:{_UUID_CANONICAL}|[0-9a-f]{{32}})",
    re.IGNORECASE,
)


def exception_helper(show_traceback=True):
    exc_type, exc_value, exc_traceback = sys.exc_info()
    return "\n".join(
        [
            v
            for v in traceback.format_exception(
                exc_type, exc_value, exc_traceback if show_traceback else None
            )
        ]
    )


def exception_handler(func):
    def f(*args, **kwargs):
        try:
            func(*args, **kwargs)
        except Exception:
            print(exception_helper(show_traceback=True))
            raise

    return f


def exception_to_str(exc: Exception, limit: int = TRACEBACK_LINES_COUNT) -> str:
    tb_exc = traceback.TracebackException.from_exception(exc)
    lines = list(tb_exc.format())
    return "".join(lines[-limit:])


def pretty_size(bytes_v):
    units = [
        (1 << 50, " PB"),
        (1 << 40, " TB"),
        (1 << 30, " GB"),
        (1 << 20, " MB"),
        (1 << 10, " KB"),
        (1, (" byte", " bytes")),
    ]
    for factor, suffix in units:
        if bytes_v >= factor:
            break
    amount = int(bytes_v / factor)

    if isinstance(suffix, tuple):
        singular, multiple = suffix
        if amount == 1:
            suffix = singular
        else:
            suffix = multiple
    return str(amount) + suffix


def read_yaml(file_path: Union[str, Path]) -> Dict:
    path = Path(file_path)
    if path.suffix not in ('.yml', '.yaml'):
        raise ValueError("File must be .yml or .yaml")

    with open(path.absolute(), "r") as file:
        data = yaml.safe_load(file)

    return data


def hash_value(value: bytes) -> str:
    """
    SHA-256 of value as lowercase hex. Not salted: a name must hash to the same
    string in both tables and across runs.
    """
    return hashlib.sha256(value).hexdigest()


def to_bytes(value: str) -> bytes:
    # surrogateescape gives back the original bytes of columns which aren't valid UTF-8
    return value.encode("utf-8", "surrogateescape")


def is_uuid(value: str) -> bool:
    # canonical, braced, urn and 32 hex digits layouts only
    if not UUID_PATTERN.fullmatch(value):
        return False

    return uuid.UUID(value).int != 0
