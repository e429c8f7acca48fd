import time
from typing import BinaryIO, Iterable, Iterator, Optional, Tuple

from contrail_anon.anonymise.codec import decode_line, encode_line
from contrail_anon.anonymise.ip_mask import IpMask
from contrail_anon.anonymise.transforms import RecordTransformer, UuidRecordTransformer, anonymise_fq_name_record
from contrail_anon.common.constants import DEFAULT_PROGRESS_EVERY
from contrail_anon.common.dto import Record, TableStats
from contrail_anon.common.enums import DumpTable
from contrail_anon.common.exceptions import MalformedValueError, ParseError, RecordError
from contrail_anon.logger import get_logger

# (line number, source line, record)
Row = Tuple[int, str, Record]


def get_transformer(table: DumpTable, ip_mask: IpMask) -> RecordTransformer:
    if table == DumpTable.FQ_NAME:
        return anonymise_fq_name_record

    if table == DumpTable.UUID:
        return UuidRecordTransformer(ip_mask)

    raise RuntimeError("Unknown table: " + table.value)


def read_lines(stream: BinaryIO) -> Iterator[Tuple[int, str]]:
    for line_number, raw_line in enumerate(stream, start=1):
        line = raw_line.decode("utf-8", "surrogateescape")
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        yield line_number, line


def decode_records(table: DumpTable, lines: Iterable[Tuple[int, str]]) -> Iterator[Row]:
    for line_number, line in lines:
        try:
            record = decode_line(line)
        except ParseError as exc:
            raise RecordError(table, line_number, line, exc) from exc
        yield line_number, line, record


def transform_records(transformer: RecordTransformer, rows: Iterable[Row], stats: TableStats) -> Iterator[Row]:
    for line_number, line, record in rows:
        column, value = record.column, record.value
        try:
            record = transformer(record)
        except MalformedValueError as exc:
            raise RecordError(stats.table, line_number, line, exc) from exc

        if record.column != column or record.value != value:
            stats.rows_changed += 1
        yield line_number, line, record


def write_records(rows: Iterable[Row], output: BinaryIO, stats: TableStats, progress_every: int = DEFAULT_PROGRESS_EVERY):
    logger = get_logger()
    for line_number, _, record in rows:
        output.write((encode_line(record) + "\n").encode("utf-8", "surrogateescape"))
        stats.rows += 1
        if progress_every and line_number % progress_every == 0:
            logger.debug(f"[{stats.table.value}] Processed {line_number} rows")
    output.flush()


def process_table(
        input_stream: BinaryIO,
        output_stream: BinaryIO,
        table: DumpTable,
        ip_mask: IpMask,
        progress_every: int = DEFAULT_PROGRESS_EVERY,
        stats: Optional[TableStats] = None,
) -> TableStats:
    """
    Anonymise one table dump, row by row.

    Rows go through decode, transform and encode generator stages, so only
    the current row is held in memory and the output keeps the input order.
    The first bad row stops the processing with a RecordError.
    """
    if stats is None:
        stats = TableStats(table=table)

    start_t = time.time()
    transformer = get_transformer(table, ip_mask)
    rows = decode_records(table, read_lines(input_stream))
    rows = transform_records(transformer, rows, stats)
    write_records(rows, output_stream, stats, progress_every)
    stats.elapsed = round(time.time() - start_t, 2)
    return stats
