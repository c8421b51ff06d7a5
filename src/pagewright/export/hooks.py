"""Export lifecycle hooks.

Each hook may be a plain function or a coroutine function. ``on_progress``
is called synchronously from state transitions; a coroutine returned there
is scheduled on the running loop.
"""

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Callable

from pagewright.core import get_logger

logger = get_logger(__name__)

Hook = Callable[..., Any]


@dataclass
class ExportHooks:
    before_export: Hook | None = None
    after_validation: Hook | None = None
    before_generate: Hook | None = None
    after_generate: Hook | None = None
    before_optimize: Hook | None = None
    after_optimize: Hook | None = None
    on_complete: Hook | None = None
    on_error: Hook | None = None
    on_progress: Hook | None = None

    async def call(self, name: str, *args: Any) -> None:
        hook = getattr(self, name)
        if hook is None:
            return
        result = hook(*args)
        if inspect.isawaitable(result):
            await result

    def notify(self, name: str, *args: Any) -> None:
        """Fire a hook without awaiting it."""
        hook = getattr(self, name)
        if hook is None:
            return
        result = hook(*args)
        if inspect.iscoroutine(result):
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.warning("hook_not_awaited", hook=name)
                result.close()
                return
            loop.create_task(result)


__all__ = ["Hook", "ExportHooks"]
