from __future__ import annotations

import logging
import socket
import threading
import time
from typing import Optional

import uvicorn

from .core.config import HOST, PORT
from .main import create_app
from .store import Store

logger = logging.getLogger(__name__)

STARTUP_TIMEOUT_SECONDS = 10.0


class MockServer:
    """Serves a store over HTTP from a daemon thread.

    Binds its own listening socket so that ``port=0`` yields a free port whose
    number is known before the first request::

        store = Store()
        ...populate...
        with MockServer(store) as server:
            requests.get(f"{server.base_url}/profile", ...)
    """

    def __init__(
        self,
        store: Optional[Store] = None,
        host: str = HOST,
        port: int = PORT,
        log_level: str = "warning",
    ) -> None:
        self.store = store if store is not None else Store()
        self.host = host
        self.port = port
        self.log_level = log_level
        self._socket: Optional[socket.socket] = None
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def address(self) -> tuple[str, int]:
        if self._socket is None:
            raise RuntimeError("server is not started")
        host, port = self._socket.getsockname()[:2]
        return host, port

    @property
    def base_url(self) -> str:
        host, port = self.address
        return f"http://{host}:{port}"

    def start(self) -> "MockServer":
        if self._thread is not None:
            raise RuntimeError("server already started")
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((self.host, self.port))
        sock.listen(128)
        self._socket = sock

        config = uvicorn.Config(
            create_app(self.store),
            log_config=None,
            log_level=self.log_level,
            access_log=False,
            lifespan="off",
        )
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(
            target=self._server.run,
            kwargs={"sockets": [sock]},
            name="distmock-server",
            daemon=True,
        )
        self._thread.start()

        deadline = time.monotonic() + STARTUP_TIMEOUT_SECONDS
        while not self._server.started:
            if not self._thread.is_alive() or time.monotonic() > deadline:
                self.close()
                raise RuntimeError("distmock server failed to start")
            time.sleep(0.01)
        logger.info("distmock listening on %s", self.base_url)
        return self

    def close(self) -> None:
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=STARTUP_TIMEOUT_SECONDS)
        if self._socket is not None:
            self._socket.close()
        self._server = None
        self._thread = None
        self._socket = None

    def __enter__(self) -> "MockServer":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.close()
