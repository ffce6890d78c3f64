import asyncio
from typing import Any, Coroutine

import aiohttp

from utils.logger_utils import get_logger

logger = get_logger(__name__)

_global_session: aiohttp.ClientSession | None = None


async def create_async_session(limit: int = 100, timeout: int = 60) -> aiohttp.ClientSession:
    """
    Creates or returns the shared aiohttp ClientSession.
    One session per run so the list, subgraph and logo clients share a connection pool.
    """
    global _global_session
    if _global_session is None or _global_session.closed:
        logger.debug(f"Creating aiohttp ClientSession with limit={limit}, timeout={timeout}s")
        timeout_obj = aiohttp.ClientTimeout(total=timeout)
        connector = aiohttp.TCPConnector(limit=limit, enable_cleanup_closed=True)
        _global_session = aiohttp.ClientSession(connector=connector, timeout=timeout_obj)
    return _global_session


async def close_async_session():
    """Closes the shared aiohttp ClientSession if it is open."""
    global _global_session
    if _global_session is not None and not _global_session.closed:
        logger.debug("Closing aiohttp ClientSession.")
        await _global_session.close()
        _global_session = None


async def gather_with_concurrency(n: int, *tasks: Coroutine[Any, Any, Any]) -> list[Any]:
    """
    Runs the tasks concurrently with at most n in flight, results in task order.
    """
    semaphore = asyncio.Semaphore(n)

    async def sem_task(task: Coroutine[Any, Any, Any]) -> Any:
        async with semaphore:
            return await task

    return await asyncio.gather(*(sem_task(task) for task in tasks))
