"""
Function-style entrypoints built on Bootstrap.
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Optional, Union

from ..models.enums import Phase
from ..models.options import BootstrapOptions, Hook
from .controller import Bootstrap, Terminate


def bootstrap(
    options: Union[BootstrapOptions, Mapping[str, Any]],
    *,
    terminate: Optional[Terminate] = None,
    handle_signals: bool = True,
) -> asyncio.Task:
    """
    Bootstrap a function on the running event loop.

    Args:
        options: Bootstrapping options; `run` is required
        handle_signals: Bind SIGINT/SIGTERM and interpreter shutdown to exit()

    Returns:
        The pipeline task
    """
    return Bootstrap(options, terminate=terminate).boot(handle_signals=handle_signals)


async def bootstrap_promise(register: Hook) -> None:
    """
    Await environment setup, then call your entrypoint yourself.

    Resolves once `register` has completed; raises the original failure if
    it did not. Never terminates the process, so no signal handlers are
    installed.

        await bootstrap_promise(connect_services)
        await main()
    """
    app = Bootstrap()
    app.configure(Phase.REGISTER, register)
    await app.boot_async(handle_signals=False)
