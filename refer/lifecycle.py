"""
Component Lifecycle helpers.

This module opens and closes components that implement the Openable or
Closable capability. Component methods may be plain functions or coroutine
functions; awaitable results are awaited. Batches run strictly sequentially
in the order given, each step waiting for the previous one to finish.
"""

import asyncio
import inspect
from functools import partial
from typing import Any, Callable, Iterable, Optional, Set

from custom_logging import get_logger
from refer.capabilities import is_closable, is_openable
from refer.exceptions import CloseError, ContainerError, OpenError

logger = get_logger("lifecycle")

# Strong references to fire-and-forget tasks until they complete
_background_tasks: Set[asyncio.Task] = set()


async def _await(awaitable):
    return await awaitable


async def invoke(method: Callable[..., Any], *args) -> None:
    result = method(*args)
    if inspect.isawaitable(result):
        await result


def is_open(component: Any) -> bool:
    """
    Check whether a component is open.

    Components that do not report their state are considered open.
    """
    check = getattr(component, "is_open", None)
    if callable(check) and not isinstance(component, type):
        return bool(check())
    return True


def is_all_open(components: Iterable[Any]) -> bool:
    """Check whether every component in the collection is open."""
    return all(is_open(component) for component in components)


async def open_one(correlation_id: Optional[str], component: Any) -> bool:
    """
    Open a single component if it is openable.

    Args:
        correlation_id: Transaction id to trace the call
        component: Component to open

    Returns:
        True if the component was opened, False if it is not openable

    Raises:
        OpenError: If the component failed to open
    """
    if not is_openable(component):
        return False

    try:
        await invoke(component.open, correlation_id)
    except ContainerError:
        raise
    except Exception as e:
        raise OpenError(component, str(e), correlation_id) from e
    return True


async def open_all(correlation_id: Optional[str], components: Iterable[Any]) -> None:
    """
    Open components one after another.

    The first failure aborts the batch; components after it are not opened
    and components before it are left open.

    Raises:
        OpenError: From the first component that failed to open
    """
    for component in components:
        await open_one(correlation_id, component)


async def close_one(correlation_id: Optional[str], component: Any) -> bool:
    """
    Close a single component if it is closable.

    Returns:
        True if the component was closed, False if it is not closable

    Raises:
        CloseError: If the component failed to close
    """
    if not is_closable(component):
        return False

    try:
        await invoke(component.close, correlation_id)
    except ContainerError:
        raise
    except Exception as e:
        raise CloseError(component, str(e), correlation_id) from e
    return True


async def close_all(correlation_id: Optional[str], components: Iterable[Any]) -> None:
    """
    Close components one after another.

    The first failure aborts the batch; components after it are not closed.

    Raises:
        CloseError: From the first component that failed to close
    """
    for component in components:
        await close_one(correlation_id, component)


def _task_done(description: str, task: asyncio.Task) -> None:
    _background_tasks.discard(task)
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.warning(f"Failed to {description}: {error}")


def run_nowait(description: str, call: Callable[[], Any]) -> None:
    """
    Run a lifecycle call without waiting for it and discard its errors.

    Synchronous calls complete immediately. Awaitable results are scheduled
    on the running event loop, or run to completion when no loop is running.

    Args:
        description: What the call does, for log messages
        call: Zero-argument callable performing the operation
    """
    try:
        result = call()
    except Exception as e:
        logger.warning(f"Failed to {description}: {e}")
        return

    if not inspect.isawaitable(result):
        return

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is None:
        try:
            asyncio.run(_await(result))
        except Exception as e:
            logger.warning(f"Failed to {description}: {e}")
        return

    task = loop.create_task(_await(result))
    _background_tasks.add(task)
    task.add_done_callback(partial(_task_done, description))


def open_nowait(correlation_id: Optional[str], component: Any) -> None:
    """Open a single component in the background, ignoring failures."""
    if is_openable(component):
        run_nowait(f"open {component!r}", partial(component.open, correlation_id))


def close_nowait(correlation_id: Optional[str], component: Any) -> None:
    """Close a single component in the background, ignoring failures."""
    if is_closable(component):
        run_nowait(f"close {component!r}", partial(component.close, correlation_id))
