"""
Fire-once admin bootstrap.

Shortly after startup the service calls its own ensure-admin endpoint so the
designated admin account is repaired without anyone polling it. The call is
best-effort: one attempt, no retry, failures are logged and swallowed.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class BootstrapState(str, Enum):
    NOT_RUN = "not_run"
    RUNNING = "running"
    DONE = "done"


class AdminBootstrapTrigger:
    def __init__(
        self,
        url: str,
        delay_seconds: float = 5.0,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.delay_seconds = delay_seconds
        self.timeout = timeout
        self.transport = transport
        self.state = BootstrapState.NOT_RUN
        self._task: Optional[asyncio.Task] = None

    def schedule(self) -> Optional[asyncio.Task]:
        """Start run() in the background. Only the first call schedules anything."""
        if self.state is not BootstrapState.NOT_RUN or self._task is not None:
            return None
        self._task = asyncio.create_task(self.run())
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def run(self) -> None:
        if self.state is not BootstrapState.NOT_RUN:
            return
        self.state = BootstrapState.RUNNING
        try:
            if self.delay_seconds > 0:
                await asyncio.sleep(self.delay_seconds)
            await self._call()
        except Exception as e:
            logger.error(f"Error initializing admin: {e}")
        finally:
            self.state = BootstrapState.DONE

    async def _call(self) -> None:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.get(self.url, headers={"Content-Type": "application/json"})

        try:
            body = resp.json()
        except ValueError:
            body = {"message": resp.text}

        if resp.is_success:
            logger.info(f"Admin initialization successful: {body.get('message')}")
        else:
            logger.warning(
                f"Admin initialization failed ({resp.status_code}): {body.get('message')}"
            )
