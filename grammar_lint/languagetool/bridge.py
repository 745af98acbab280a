"""
Synchronous Grammar Bridge
==========================
Blocking front end for a grammar service whose ``check`` may be
asynchronous.

Lint rules are evaluated synchronously, so the caller hands each request
to a dedicated worker thread over a bounded queue and blocks on a reply
queue until the result (or error) arrives. The worker owns its own event
loop: coroutine results are run to completion there, plain results are
passed straight back.

Only one request is outstanding at a time. An optional timeout turns a
slow service into a ``GrammarServiceError``; the request itself is not
cancelled.

Usage:
    bridge = SyncGrammarBridge(service, timeout=30)
    matches = bridge.check("This are wrong.", options)
    bridge.close()
"""

import asyncio
import inspect
import queue
import threading
from typing import List, Optional

from ..config_logging import GrammarServiceError, get_logger
from .client import GrammarMatch, GrammarOptions, GrammarService

__version__ = "1.0.0"

logger = get_logger(__name__)

_STOP = object()


class SyncGrammarBridge:
    """Runs grammar requests on a worker thread and waits for each reply."""

    def __init__(self, service: GrammarService, timeout: Optional[float] = None):
        self.service = service
        self.timeout = timeout
        self._requests: queue.Queue = queue.Queue(maxsize=1)
        self._lock = threading.Lock()
        self._worker: Optional[threading.Thread] = None
        self._closed = False
        self.request_count = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def is_running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def _ensure_worker(self):
        if self.is_running:
            return
        self._worker = threading.Thread(
            target=self._run, name="grammar-lint-bridge", daemon=True
        )
        self._worker.start()

    def _run(self):
        """Worker loop: one request at a time until the stop sentinel."""
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        try:
            while True:
                request = self._requests.get()
                if request is _STOP:
                    break
                text, options, reply = request
                try:
                    result = self.service.check(text, options)
                    if inspect.isawaitable(result):
                        result = loop.run_until_complete(result)
                    reply.put((True, list(result or [])))
                except Exception as e:
                    reply.put((False, e))
        finally:
            loop.close()

    def check(self, text: str, options: GrammarOptions) -> List[GrammarMatch]:
        """
        Send ``text`` to the service and block until it answers.

        Raises:
            GrammarServiceError: on service failure, timeout, or after close()
        """
        with self._lock:
            if self._closed:
                raise GrammarServiceError("Grammar bridge is closed", text=text)
            self._ensure_worker()

            reply: queue.Queue = queue.Queue(maxsize=1)
            try:
                self._requests.put((text, options, reply), timeout=self.timeout)
                ok, payload = reply.get(timeout=self.timeout)
            except (queue.Full, queue.Empty):
                raise GrammarServiceError(
                    f"Grammar service timed out after {self.timeout}s", text=text,
                    timeout=self.timeout
                )
            self.request_count += 1

        if ok:
            return payload
        if isinstance(payload, GrammarServiceError):
            raise payload
        raise GrammarServiceError(f"Grammar service failed: {payload}", text=text) from payload

    def close(self, wait: float = 5.0):
        """Stop the worker thread. Later calls to check() fail."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            worker = self._worker
        if worker is None:
            return
        try:
            self._requests.put(_STOP, timeout=wait)
        except queue.Full:
            logger.warning("Grammar bridge worker busy at shutdown")
            return
        worker.join(wait)
