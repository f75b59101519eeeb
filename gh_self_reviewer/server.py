"""MCP server over stdio exposing the pull request tools.

Tool calls run in a worker thread because the GitHub client is blocking.
SIGINT/SIGTERM cancel the server; a call already running is allowed to
finish (each HTTP request is bounded by the configured timeout).
"""

import logging
import queue
import signal
import sys
import threading
from typing import Any, Dict, List, TextIO

import anyio
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from gh_self_reviewer.config import ServerConfig
from gh_self_reviewer.dispatcher import DispatchError, ToolDispatcher

LOG = logging.getLogger("gh_self_reviewer.server")


async def list_tools(dispatcher: ToolDispatcher) -> List[types.Tool]:
    return [
        types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
        for tool in dispatcher.tools()
    ]


async def call_tool(
    dispatcher: ToolDispatcher,
    name: str,
    arguments: Dict[str, Any] | None,
) -> List[types.TextContent]:
    """Run one tool invocation; DispatchError is logged and re-raised so the
    MCP layer answers with an error result."""
    try:
        text = await anyio.to_thread.run_sync(dispatcher.dispatch, name, arguments)
    except DispatchError as e:
        LOG.error("Tool call failed: %s", e)
        raise
    return [types.TextContent(type="text", text=text)]


def build_server(dispatcher: ToolDispatcher, config: ServerConfig) -> Server:
    """Create an MCP server with tools/list and tools/call bound to dispatcher."""
    server: Server = Server(config.name, version=config.version)

    @server.list_tools()
    async def _list_tools() -> List[types.Tool]:
        return await list_tools(dispatcher)

    @server.call_tool()
    async def _call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        return await call_tool(dispatcher, name, arguments)

    return server


class StdinLineReader:
    """Async line iterator over stdin for the stdio transport.

    A daemon thread does the blocking reads and queues the lines, so a
    shutdown signal never waits for the client to close stdin. An empty
    string in the queue marks end of input; ``close`` queues one to wake a
    pending read.

    The default stream is a private reader on the stdin descriptor, not
    ``sys.stdin.buffer``: the interpreter closes the latter at exit, which
    would contend with the daemon thread blocked inside it.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        if stream is None:
            stream = open(sys.stdin.fileno(), encoding="utf-8", errors="replace", closefd=False)
        self._stream = stream
        self._lines: queue.Queue[str] = queue.Queue()
        self._thread = threading.Thread(target=self._pump, name="stdin-reader", daemon=True)

    def _pump(self) -> None:
        try:
            for line in iter(self._stream.readline, ""):
                self._lines.put(line)
        except (OSError, ValueError) as e:
            LOG.warning("stdin read failed: %s", e)
        finally:
            self._lines.put("")

    def close(self) -> None:
        self._lines.put("")

    def __aiter__(self) -> "StdinLineReader":
        if self._thread.ident is None:
            self._thread.start()
        return self

    async def __anext__(self) -> str:
        line = await anyio.to_thread.run_sync(self._lines.get, abandon_on_cancel=True)
        if not line:
            raise StopAsyncIteration
        return line


async def _cancel_on_signal(scope: anyio.CancelScope) -> None:
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        async for signum in signals:
            LOG.info("Received %s, shutting down", signal.Signals(signum).name)
            scope.cancel()
            return


async def serve(server: Server, stdin: StdinLineReader | None = None) -> None:
    """Serve on stdin/stdout until the client disconnects or a signal arrives.

    On a signal, tool calls already running in worker threads finish before
    this returns; the pending stdin read is dropped.
    """
    reader = stdin if stdin is not None else StdinLineReader()
    try:
        async with anyio.create_task_group() as tg:
            tg.start_soon(_cancel_on_signal, tg.cancel_scope)
            async with stdio_server(stdin=reader) as (read_stream, write_stream):
                await server.run(read_stream, write_stream, server.create_initialization_options())
            LOG.info("Client disconnected")
            tg.cancel_scope.cancel()
    finally:
        reader.close()


def run_server(dispatcher: ToolDispatcher, config: ServerConfig) -> None:
    """Blocking entry: build the server and serve it over stdio until
    disconnect or SIGINT/SIGTERM."""
    server = build_server(dispatcher, config)
    LOG.info("Starting MCP server %s %s on stdio", config.name, config.version)
    anyio.run(serve, server)
