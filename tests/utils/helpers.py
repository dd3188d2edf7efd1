"""Test helper functions."""

import asyncio
import json
from contextlib import asynccontextmanager
from io import BytesIO
from typing import Any, Awaitable, Callable, Dict, Optional, Union

import httpx

from src.services.api_client import ApiClient

TEST_BASE_URL = "http://testserver/api"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, responder: Callable[[httpx.Request], Union[httpx.Response, Awaitable[httpx.Response]]]):
        self.requests: list[httpx.Request] = []

        async def handle(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            response = responder(request)
            if not isinstance(response, httpx.Response):
                response = await response
            return response

        super().__init__(handle)


def create_api_client(responder, timeout: float = 5.0) -> tuple[ApiClient, RecordingTransport]:
    """ApiClient wired to a recording mock transport."""
    transport = RecordingTransport(responder)
    return ApiClient(base_url=TEST_BASE_URL, timeout=timeout, transport=transport), transport


def request_json(request: httpx.Request) -> Any:
    """Decode a recorded request body (NaN tokens included)."""
    return json.loads(request.content)


@asynccontextmanager
async def trickling_server(body: bytes, delay: float):
    """
    Local HTTP server that sends its headers at once, then the body one byte
    every delay seconds. Yields the API base URL.
    """
    async def serve(reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        try:
            await reader.readuntil(b"\r\n\r\n")
            writer.write(
                b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n"
                + f"Content-Length: {len(body)}\r\n\r\n".encode("ascii")
            )
            await writer.drain()
            for i in range(len(body)):
                await asyncio.sleep(delay)
                writer.write(body[i:i + 1])
                await writer.drain()
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(serve, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield f"http://127.0.0.1:{port}/api"
    finally:
        server.close()


class MockSocket:
    """In-memory socket feeding one raw HTTP request to a handler."""

    def __init__(self, raw_request: bytes):
        self._rfile = BytesIO(raw_request)
        self.sent = bytearray()

    def makefile(self, *args, **kwargs):
        return self._rfile

    def sendall(self, data):
        self.sent.extend(data)

    def close(self):
        pass


def invoke_handler(
    handler_cls,
    method: str = "GET",
    path: str = "/",
    body: Optional[Union[Dict[str, Any], str]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Run a serverless handler class against one request.

    Returns a dict with status, lower-cased headers and the decoded JSON body.
    """
    raw_body = b""
    if body is not None:
        raw_body = (json.dumps(body) if isinstance(body, dict) else body).encode("utf-8")

    lines = [f"{method} {path} HTTP/1.1", "Host: testserver"]
    if raw_body:
        lines.append("Content-Type: application/json")
        lines.append(f"Content-Length: {len(raw_body)}")
    for name, value in (headers or {}).items():
        lines.append(f"{name}: {value}")
    raw_request = ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8") + raw_body

    sock = MockSocket(raw_request)
    handler_cls(sock, ("127.0.0.1", 8000), None)

    head, _, payload = bytes(sock.sent).partition(b"\r\n\r\n")
    status_line, *header_lines = head.decode("utf-8").split("\r\n")
    response_headers = {}
    for line in header_lines:
        name, _, value = line.partition(":")
        response_headers[name.strip().lower()] = value.strip()

    return {
        "status": int(status_line.split()[1]),
        "headers": response_headers,
        "json": json.loads(payload) if payload else None,
    }
