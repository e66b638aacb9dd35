from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from bgpview.errors import DecodeError, RemoteError, TransportError, URLConstructionError
from bgpview.types.models import (
    ASNDownstreamsInfo,
    ASNInfo,
    ASNIxsInfo,
    ASNPeersInfo,
    ASNPrefixesInfo,
    ASNUpstreamsInfo,
    Envelope,
    IPInfo,
    IXInfo,
    PrefixInfo,
    SearchInfo,
)
from bgpview.types.settings import DEFAULT_BASE_URL, Settings
from bgpview.utils.http import create_client
from bgpview.utils.logging import logger


E = TypeVar("E", bound=Envelope)

log = logger("client")


def _segment(value: Any) -> str:
    text = str(value)
    if text in ("", ".", ".."):
        raise URLConstructionError(f"invalid path segment: {text!r}")
    # ':' stays raw so IPv6 addresses keep their textual form in the path.
    return quote(text, safe=":")


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


class Client:
    """Async client for the BGPView lookup API.

    ``timeout`` bounds each call end to end, from connect to the last body
    byte. A caller-supplied ``http_client`` is used as is and left open on
    close; otherwise the client owns one built by ``create_client``, on
    ``transport`` when given.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 5.0,
        user_agent: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._owns_http = http_client is None
        self._http = http_client or create_client(timeout, user_agent=user_agent, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings, *, http_client: Optional[httpx.AsyncClient] = None) -> "Client":
        return cls(
            settings.base_url,
            timeout=settings.timeout_seconds,
            user_agent=settings.user_agent,
            http_client=http_client,
        )

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def _endpoint(self, *segments: Any) -> httpx.URL:
        parts = [_segment(s) for s in segments]
        try:
            base = httpx.URL(self.base_url)
        except httpx.InvalidURL as e:
            raise URLConstructionError(f"invalid base URL: {self.base_url!r}") from e
        if base.scheme not in ("http", "https") or not base.host:
            raise URLConstructionError(f"invalid base URL: {self.base_url!r}")
        path = base.path.rstrip("/") + "/" + "/".join(parts)
        try:
            return base.copy_with(path=path)
        except httpx.InvalidURL as e:
            raise URLConstructionError(f"invalid path: {path!r}") from e

    async def _get(
        self,
        model_cls: Type[E],
        *segments: Any,
        params: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> E:
        url = self._endpoint(*segments)
        deadline = self.timeout if timeout is None else timeout
        started = time.monotonic()
        try:
            # httpx timeouts are per phase; wait_for caps the whole exchange.
            r = await asyncio.wait_for(
                self._http.get(url, params=params, timeout=deadline),
                deadline,
            )
        except asyncio.TimeoutError as e:
            log["debug"]("Request timed out", url=str(url), deadline=deadline, elapsed_ms=_elapsed_ms(started))
            raise TransportError(f"request exceeded {deadline}s deadline") from e
        except httpx.TransportError as e:
            log["debug"]("Request failed", url=str(url), error=str(e), elapsed_ms=_elapsed_ms(started))
            raise TransportError(str(e) or type(e).__name__) from e

        log["debug"]("Request done", url=str(r.request.url), status=r.status_code, elapsed_ms=_elapsed_ms(started))
        if r.status_code != 200:
            raise RemoteError(r.status_code, r.text)
        try:
            return model_cls.model_validate_json(r.content)
        except ValidationError as e:
            raise DecodeError(f"cannot decode {model_cls.__name__}: {e}") from e

    async def get_asn(self, asn: int, *, timeout: Optional[float] = None) -> ASNInfo:
        return await self._get(ASNInfo, "asn", int(asn), timeout=timeout)

    async def get_asn_prefixes(self, asn: int, *, timeout: Optional[float] = None) -> ASNPrefixesInfo:
        return await self._get(ASNPrefixesInfo, "asn", int(asn), "prefixes", timeout=timeout)

    async def get_asn_peers(self, asn: int, *, timeout: Optional[float] = None) -> ASNPeersInfo:
        return await self._get(ASNPeersInfo, "asn", int(asn), "peers", timeout=timeout)

    async def get_asn_upstreams(self, asn: int, *, timeout: Optional[float] = None) -> ASNUpstreamsInfo:
        return await self._get(ASNUpstreamsInfo, "asn", int(asn), "upstreams", timeout=timeout)

    async def get_asn_downstreams(self, asn: int, *, timeout: Optional[float] = None) -> ASNDownstreamsInfo:
        return await self._get(ASNDownstreamsInfo, "asn", int(asn), "downstreams", timeout=timeout)

    async def get_asn_ixs(self, asn: int, *, timeout: Optional[float] = None) -> ASNIxsInfo:
        return await self._get(ASNIxsInfo, "asn", int(asn), "ixs", timeout=timeout)

    async def get_prefix(self, ip: str, cidr: int, *, timeout: Optional[float] = None) -> PrefixInfo:
        return await self._get(PrefixInfo, "prefix", ip, int(cidr), timeout=timeout)

    async def get_ip(self, ip: str, *, timeout: Optional[float] = None) -> IPInfo:
        return await self._get(IPInfo, "ip", ip, timeout=timeout)

    async def get_ix(self, ix_id: int, *, timeout: Optional[float] = None) -> IXInfo:
        return await self._get(IXInfo, "ix", int(ix_id), timeout=timeout)

    async def search(self, term: str, *, timeout: Optional[float] = None) -> SearchInfo:
        """Search ASNs and prefixes by number, address, name or description."""
        return await self._get(SearchInfo, "search", params={"query_term": term}, timeout=timeout)
