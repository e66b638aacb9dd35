from __future__ import annotations

from typing import Any, AsyncIterator, Dict, Literal

from fastapi import Depends, FastAPI, HTTPException, Query

from bgpview import __version__
from bgpview.client import Client
from bgpview.errors import BGPViewError, RemoteError, URLConstructionError
from bgpview.types.models import Envelope
from bgpview.types.settings import Settings
from bgpview.utils.env import load_env
from bgpview.utils.logging import logger


# Load .env once on import (safe no-op if missing)
load_env()

log = logger("api")

app = FastAPI(title="bgpview relay", version=__version__)

AsnView = Literal["prefixes", "peers", "upstreams", "downstreams", "ixs"]


async def get_client() -> AsyncIterator[Client]:
    async with Client.from_settings(Settings.from_env()) as client:
        yield client


def _status_for(err: BGPViewError) -> int:
    if isinstance(err, RemoteError) and err.status_code >= 400:
        return err.status_code
    if isinstance(err, URLConstructionError):
        return 400
    # Transport and decode failures are the upstream's fault.
    return 502


async def _relay(what: str, call: Any) -> Dict[str, Any]:
    try:
        env: Envelope = await call
    except BGPViewError as e:
        status = _status_for(e)
        log["warn"]("Upstream lookup failed", target=what, status=status, error=str(e))
        detail = e.body if isinstance(e, RemoteError) else str(e)
        raise HTTPException(status_code=status, detail=detail) from e
    return env.model_dump(mode="json", by_alias=True, exclude_unset=True)


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/asn/{asn}")
async def api_asn(asn: int, client: Client = Depends(get_client)) -> Dict[str, Any]:
    return await _relay(f"AS{asn}", client.get_asn(asn))


@app.get("/asn/{asn}/{view}")
async def api_asn_view(asn: int, view: AsnView, client: Client = Depends(get_client)) -> Dict[str, Any]:
    fetch = getattr(client, f"get_asn_{view}")
    return await _relay(f"AS{asn}/{view}", fetch(asn))


@app.get("/prefix/{ip}/{cidr}")
async def api_prefix(ip: str, cidr: int, client: Client = Depends(get_client)) -> Dict[str, Any]:
    return await _relay(f"{ip}/{cidr}", client.get_prefix(ip, cidr))


@app.get("/ip/{ip}")
async def api_ip(ip: str, client: Client = Depends(get_client)) -> Dict[str, Any]:
    return await _relay(ip, client.get_ip(ip))


@app.get("/ix/{ix_id}")
async def api_ix(ix_id: int, client: Client = Depends(get_client)) -> Dict[str, Any]:
    return await _relay(f"ix {ix_id}", client.get_ix(ix_id))


@app.get("/search")
async def api_search(q: str = Query(..., min_length=1), client: Client = Depends(get_client)) -> Dict[str, Any]:
    return await _relay(q, client.search(q))


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
