import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import aioprocessing

from contrail_anon.common.dto import TableStats
from contrail_anon.common.enums import DumpTable


async def run_tables_process(
        name: str,
        ctx,
        target_func: Callable,
        tables: List[Tuple[DumpTable, Path]],
) -> Optional[List[TableStats]]:
    """
    Run target_func(name, queue, tables) in a separate process.

    The process puts its list of TableStats in the queue, then None. A process
    which fails puts only None, so None is returned.
    """
    from contrail_anon.context import Context

    ctx: Context
    start_t = time.time()
    tables_names = ", ".join(table.value for table, _ in tables)
    ctx.logger.info(f"================> Process [{name}] started for: {tables_names}")
    queue = aioprocessing.AioQueue()

    p = aioprocessing.AioProcess(
        target=target_func,
        args=(name, queue, tables),
    )
    p.start()
    res = None
    while True:
        result = await queue.coro_get()
        if result is None:
            break
        res = result
    await p.coro_join()
    elapsed = round(time.time() - start_t, 2)

    if res is None:
        ctx.logger.error(f"<================ Process [{name}] failed, exit code: {p.exitcode}, elapsed: {elapsed} sec")
        return None

    rows = sum(stats.rows for stats in res)
    ctx.logger.info(f"<================ Process [{name}] finished, elapsed: {elapsed} sec. Anonymised {rows} rows")
    return res
