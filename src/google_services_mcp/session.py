"""
Capability session for Google Services MCP Server.

A CapabilitySession holds the authorized credentials and one API client per
service family. It is built once per process by a SessionProvider and shared
read-only by every tool call afterwards.
"""

import asyncio
import threading
from dataclasses import dataclass, field
from typing import Any, Callable

import google_auth_httplib2
import httplib2

from google_services_mcp.utils import log


@dataclass(frozen=True)
class CapabilitySession:
    """Authorized Google API clients for the five service families."""

    credentials: Any
    drive: Any
    sheets: Any
    slides: Any
    docs: Any
    forms: Any
    _refresh_lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def authorized_http(self) -> google_auth_httplib2.AuthorizedHttp:
        """
        Build a fresh authorized transport for one request.

        httplib2.Http is not thread-safe, so requests running on different
        worker threads never share one. Expired credentials are refreshed
        under a lock so concurrent calls refresh them once.
        """
        with self._refresh_lock:
            if not self.credentials.valid:
                self.credentials.refresh(google_auth_httplib2.Request(httplib2.Http()))
        return google_auth_httplib2.AuthorizedHttp(self.credentials, http=httplib2.Http())

    def _execute_isolated(self, request: Any) -> Any:
        return request.execute(http=self.authorized_http())

    async def execute(self, request: Any) -> Any:
        """
        Execute a prepared googleapiclient request.

        The client library is blocking, so the call runs on a worker thread
        with its own transport and this coroutine suspends until it returns
        or raises.
        """
        return await asyncio.to_thread(self._execute_isolated, request)


class SessionProvider:
    """
    Lazily builds the process-wide CapabilitySession.

    Construction is single-flight: concurrent first callers share one
    in-flight attempt. A successful session is kept for the life of the
    provider; a failed attempt is forgotten so the next call tries again.
    """

    def __init__(self, factory: Callable[[], CapabilitySession]):
        self._factory = factory
        self._session: CapabilitySession | None = None
        self._pending: asyncio.Task | None = None

    @property
    def session(self) -> CapabilitySession | None:
        """The constructed session, or None if none has been built yet."""
        return self._session

    async def get(self) -> CapabilitySession:
        if self._session is not None:
            return self._session

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._construct())
            self._pending.add_done_callback(_consume_exception)

        # Shielded so a cancelled caller does not abort the shared attempt
        return await asyncio.shield(self._pending)

    async def _construct(self) -> CapabilitySession:
        log("Initializing Google API capability session...")
        try:
            session = await asyncio.to_thread(self._factory)
        except Exception as e:
            log(f"Error initializing capability session: {e}")
            self._pending = None
            raise

        self._session = session
        self._pending = None
        log("Capability session ready.")
        return session


def _consume_exception(task: asyncio.Task) -> None:
    # Failures already logged in _construct; mark retrieved when every waiter left
    if not task.cancelled():
        task.exception()
