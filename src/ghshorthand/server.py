"""JSON-RPC server exposing the shorthand resolver on a unix socket.

Requests and responses are newline-delimited JSON-RPC 2.0 objects:

    {"jsonrpc": "2.0", "id": 1, "method": "resolve", "params": {"input": "zw 42"}}

``resolve`` answers with the Resolution, its annotation and the Alfred items;
``ping`` answers ``{"status": "ok"}``.
"""

from __future__ import annotations

import asyncio
import json
import os
import signal
import socket
import stat
from pathlib import Path
from typing import Any

from .alfred import build_items
from .config import ShorthandConfig
from .errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    ConfigError,
    RPCError,
    ShorthandError,
    classify_error,
)
from .logging import get_logger
from .parser import resolve

READ_TIMEOUT = 1.0
SHUTDOWN_GRACE = 2.0


class ShorthandServer:
    """Unix-socket JSON-RPC server for launcher queries."""

    def __init__(
        self,
        config: ShorthandConfig,
        socket_path: str | Path | None = None,
        read_timeout: float = READ_TIMEOUT,
    ) -> None:
        path = socket_path or config.socket_path
        if not path:
            raise ConfigError("no socket_path configured")
        self.config = config
        self.socket_path = Path(path).expanduser()
        self.read_timeout = read_timeout
        self.server: asyncio.AbstractServer | None = None
        self.clients: set[asyncio.StreamWriter] = set()
        self.logger = get_logger()

    def _remove_stale_socket(self) -> None:
        """Unlink a socket left behind by a server that is no longer running.

        Anything else at the path is left alone: a non-socket file is a
        ``ConfigError`` and a socket that still accepts connections means
        another server owns it.
        """
        try:
            mode = self.socket_path.lstat().st_mode
        except FileNotFoundError:
            return
        if not stat.S_ISSOCK(mode):
            raise ConfigError(f"socket_path {self.socket_path} exists and is not a socket")
        client = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            client.connect(str(self.socket_path))
        except ConnectionRefusedError:
            self.logger.info("removing stale socket", socket=str(self.socket_path))
            self.socket_path.unlink()
            return
        finally:
            client.close()
        raise ShorthandError(f"another server is already listening on {self.socket_path}")

    async def start(self) -> None:
        self.socket_path.parent.mkdir(parents=True, exist_ok=True)
        self._remove_stale_socket()
        # the socket file is created by bind(); keep it private from the start
        old_umask = os.umask(0o177)
        try:
            self.server = await asyncio.start_unix_server(
                self._handle_client, path=str(self.socket_path)
            )
        finally:
            os.umask(old_umask)
        self.socket_path.chmod(0o600)
        self.logger.info(f"server started on {self.socket_path}", socket=str(self.socket_path))

    async def stop(self) -> None:
        if self.server is None:
            return
        self.server.close()
        for writer in list(self.clients):
            writer.close()
        self.clients.clear()
        await self.server.wait_closed()
        self.server = None
        self.socket_path.unlink(missing_ok=True)
        self.logger.info("server stopped", socket=str(self.socket_path))

    async def _handle_client(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        self.clients.add(writer)
        try:
            while True:
                try:
                    data = await asyncio.wait_for(reader.readline(), timeout=self.read_timeout)
                except asyncio.TimeoutError:
                    self.logger.debug("closing idle client connection")
                    break
                if not data:
                    break
                response = self.handle_line(data)
                writer.write(json.dumps(response).encode() + b"\n")
                await writer.drain()
        except (ConnectionError, asyncio.IncompleteReadError, ValueError) as exc:
            info = classify_error(exc)
            self.logger.warning("client connection error", error=info.message, category=info.category)
        finally:
            self.clients.discard(writer)
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass

    def handle_line(self, data: bytes | str) -> dict[str, Any]:
        """Decode one request line and produce its JSON-RPC response."""
        try:
            request = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _error_response(None, RPCError(PARSE_ERROR, "Parse error"))
        return self.handle_request(request)

    def handle_request(self, request: Any) -> dict[str, Any]:
        request_id = request.get("id") if isinstance(request, dict) else None
        try:
            if not isinstance(request, dict) or not isinstance(request.get("method"), str):
                raise RPCError(INVALID_REQUEST, "Invalid Request")
            method = request["method"]
            params = request.get("params") or {}
            if not isinstance(params, dict):
                raise RPCError(INVALID_PARAMS, "params must be an object")
            if method == "resolve":
                result = self._resolve(params)
            elif method == "ping":
                result = {"status": "ok"}
            else:
                raise RPCError(METHOD_NOT_FOUND, f"Method not found: {method}")
        except RPCError as exc:
            self.logger.debug("rejected request", error=exc.message, code=exc.code)
            return _error_response(request_id, exc)
        except Exception as exc:
            info = classify_error(exc)
            self.logger.log_error("request failed", error=info.message, category=info.category)
            return _error_response(request_id, RPCError(INTERNAL_ERROR, "Internal error"))
        return {"jsonrpc": "2.0", "result": result, "id": request_id}

    def _resolve(self, params: dict[str, Any]) -> dict[str, Any]:
        text = params.get("input", "")
        if not isinstance(text, str):
            raise RPCError(INVALID_PARAMS, "input must be a string")
        resolution = resolve(self.config.repos, self.config.users, text)
        self.logger.log_resolution(text, resolution.kind.value, resolution.annotation())
        return {
            "resolution": resolution.to_dict(),
            "annotation": resolution.annotation(),
            "items": build_items(resolution, self.config).to_dict(),
        }


def _error_response(request_id: Any, error: RPCError) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "error": error.to_dict(), "id": request_id}


async def serve(config: ShorthandConfig, socket_path: str | Path | None = None) -> None:
    """Run until SIGINT/SIGTERM, then shut down within the grace period."""
    server = ShorthandServer(config, socket_path)
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)
    try:
        await server.start()
        await stop.wait()
        server.logger.info("shutting down server")
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)
        try:
            await asyncio.wait_for(server.stop(), timeout=SHUTDOWN_GRACE)
        except asyncio.TimeoutError:
            server.logger.log_error("server shutdown timed out")
            server.socket_path.unlink(missing_ok=True)


def run_server(config: ShorthandConfig, socket_path: str | Path | None = None) -> int:
    asyncio.run(serve(config, socket_path))
    return 0


__all__ = ["ShorthandServer", "serve", "run_server", "READ_TIMEOUT"]
