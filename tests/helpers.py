"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: every HTTP-facing test goes through
``RecordingTransport`` so assertions look at what would hit the wire.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import json
from typing import Any

import httpx


@dataclass
class RecordingTransport:
    """Mock transport that records requests and replays scripted responses.

    Script items are ``httpx.Response`` objects or exceptions to raise. An
    empty script answers ``200 {}``.
    """

    script: list[httpx.Response | BaseException] = field(default_factory=list)
    requests: list[httpx.Request] = field(default_factory=list)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.script:
            return httpx.Response(200, json={})
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


def hanging_client() -> httpx.AsyncClient:
    """Client whose transport never answers."""

    async def handler(request: httpx.Request) -> httpx.Response:
        del request
        await asyncio.Event().wait()
        raise AssertionError("unreachable")

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
