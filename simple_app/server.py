from __future__ import annotations

import sys
from types import FrameType
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .config import ConfigError, Settings
from .logger import log
from .main import create_app
from .shutdown import SHUTDOWN_TIMEOUT, GracefulShutdown, TimerFactory, start_timer


class Server(uvicorn.Server):
    """uvicorn server whose SIGTERM/SIGINT handling goes through GracefulShutdown.

    uvicorn's own handler forces an exit on a second SIGINT; here repeated
    signals are ignored and only the timeout forces the exit.
    """

    def __init__(
        self,
        config: uvicorn.Config,
        shutdown_timeout: float = SHUTDOWN_TIMEOUT,
        timer_factory: TimerFactory = start_timer,
    ) -> None:
        super().__init__(config)
        self.graceful = GracefulShutdown(
            self.stop_accepting, timeout=shutdown_timeout, timer_factory=timer_factory
        )

    def stop_accepting(self) -> None:
        self.should_exit = True

    def handle_exit(self, sig: int, frame: Optional[FrameType]) -> None:
        self.graceful.on_signal(sig)

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if not self.should_exit:
            log(f"Server is running on port {self.bound_port()}")

    def bound_port(self) -> int:
        # PORT=0 lets the OS pick; report what was actually bound
        for server in getattr(self, "servers", []):
            for sock in server.sockets or ():
                address = sock.getsockname()
                if isinstance(address, tuple):
                    return address[1]
        return self.config.port


def build_server(
    settings: Settings,
    app: Optional[FastAPI] = None,
    shutdown_timeout: float = SHUTDOWN_TIMEOUT,
) -> Server:
    config = uvicorn.Config(
        app if app is not None else create_app(),
        host=settings.host,
        port=settings.port,
        # request lines come from the app's own logger
        access_log=False,
        log_level="warning",
    )
    return Server(config, shutdown_timeout=shutdown_timeout)


def main() -> int:
    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1
    server = build_server(settings)
    server.run()
    if not server.started:
        return 1
    return server.graceful.closed()
