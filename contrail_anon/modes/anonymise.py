import asyncio
import json
from pathlib import Path
from typing import List, Tuple

from aioprocessing import AioQueue

from contrail_anon.anonymise.pipeline import process_table
from contrail_anon.common.dto import AnonymiseResult, TableStats
from contrail_anon.common.enums import DumpTable
from contrail_anon.common.multiprocessing_utils import run_tables_process
from contrail_anon.common.utils import exception_helper, pretty_size
from contrail_anon.context import Context


class AnonymiseMode:
    context: Context
    output_dir: Path
    tables: List[Tuple[DumpTable, Path]]

    def __init__(self, context: Context):
        self.context = context
        self.output_dir = Path(self.context.options.output_dir)
        # uuid table first, then fq_name table
        self.tables = [
            (DumpTable.UUID, Path(self.context.options.uuid_dump)),
            (DumpTable.FQ_NAME, Path(self.context.options.fq_name_dump)),
        ]

    def get_output_path(self, input_path: Path) -> Path:
        return self.output_dir / input_path.name

    def _check_paths(self):
        for table, input_path in self.tables:
            if not input_path.is_file():
                raise FileNotFoundError(f"Dump of {table.value} not found: {input_path}")

        input_names = [input_path.name for _, input_path in self.tables]
        if len(set(input_names)) != len(input_names):
            raise ValueError(f"Dumps must have different file names, got: {', '.join(input_names)}")

        self.output_dir.mkdir(parents=True, exist_ok=True)

        for _, input_path in self.tables:
            output_path = self.get_output_path(input_path)
            if output_path.exists() and output_path.resolve() == input_path.resolve():
                msg = f"Output file {output_path} would overwrite its dump, use another output directory"
                self.context.logger.error(msg)
                raise ValueError(msg)

    def _anonymise_table(self, table: DumpTable, input_path: Path) -> TableStats:
        output_path = self.get_output_path(input_path)
        self.context.logger.info(
            f"-------------> Started anonymise {table.value}: {input_path} ({pretty_size(input_path.stat().st_size)})"
            f" -> {output_path}"
        )

        stats = TableStats(table=table, input_file=str(input_path), output_file=str(output_path))
        with open(input_path, "rb") as input_file, open(output_path, "wb") as output_file:
            process_table(
                input_stream=input_file,
                output_stream=output_file,
                table=table,
                ip_mask=self.context.ip_mask,
                progress_every=self.context.progress_every,
                stats=stats,
            )

        self.context.logger.info(
            f"<------------- Finished anonymise {table.value}: {stats.rows} rows, {stats.rows_changed} changed, elapsed: {stats.elapsed} sec"
        )
        return stats

    def _process_table(self, name: str, queue: AioQueue, tables: List[Tuple[DumpTable, Path]]):
        # logger handlers aren't inherited when the process isn't forked
        self.context.setup_logger()
        self.context.logger.info(f"================> Process [{name}] Started process_table")

        try:
            queue.put([self._anonymise_table(table, input_path) for table, input_path in tables])
        except Exception as ex:
            self.context.logger.error(f"<================ Process [{name}]: {exception_helper()}")
            raise ex
        finally:
            queue.put(None)  # Shut down the worker
            queue.close()
            self.context.logger.debug(f"<================ Process [{name}] closed")

    async def _run_parallel(self) -> List[TableStats]:
        process_tasks = [
            asyncio.ensure_future(
                run_tables_process(
                    name=table.value,
                    ctx=self.context,
                    target_func=self._process_table,
                    tables=[(table, input_path)],
                )
            )
            for table, input_path in self.tables
        ]
        await asyncio.gather(*process_tasks)

        result = []
        for (table, _), process_task in zip(self.tables, process_tasks):
            process_task_result = process_task.result()
            if not process_task_result:
                raise RuntimeError(f"Anonymisation of {table.value} has been failed!")
            result.extend(process_task_result)

        return result

    async def run(self) -> AnonymiseResult:
        self.context.logger.info("-------------> Started anonymise mode")
        self._check_paths()

        if self.context.options.parallel:
            tables_stats = await self._run_parallel()
        else:
            tables_stats = [self._anonymise_table(table, input_path) for table, input_path in self.tables]

        result = AnonymiseResult(tables=tables_stats)
        self.context.logger.debug(json.dumps([stats.to_dict() for stats in tables_stats], indent=2))
        self.context.logger.info(f"<------------- Finished anonymise mode, total rows: {result.total_rows}")
        return result
