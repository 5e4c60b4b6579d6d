"""Read-only JSON-RPC client for Arc.

Used to check a deployment after the fact: is the RPC on the expected chain,
does an address hold code, what USDC balance does it have.  It cannot sign
or send transactions; those go through :mod:`contractwiz.clients.wallet`.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import httpx
from pydantic import BaseModel, Field

from contractwiz.config import NetworkConfig


class RpcResult(BaseModel):
    """Outcome of one JSON-RPC call."""

    success: bool = Field(default=True)
    result: Any = Field(default=None)
    error: str | None = Field(default=None)


class ConnectionStatus(BaseModel):
    connected: bool = Field(default=False)
    chain_id: int | None = Field(default=None)
    error: str | None = Field(default=None)


def parse_quantity(value: Any) -> int | None:
    """Decode a JSON-RPC hex quantity; ``None`` when *value* is not one."""
    if not isinstance(value, str) or not value.startswith("0x"):
        return None
    try:
        return int(value, 16)
    except ValueError:
        return None


def format_units(raw: int, decimals: int) -> str:
    """``1500000, 6`` -> ``"1.5"``."""
    value = Decimal(raw).scaleb(-decimals)
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


class ChainQueryClient:
    """Async JSON-RPC client bound to one network."""

    def __init__(self, network: NetworkConfig | None = None, timeout: int = 30) -> None:
        self.network = network or NetworkConfig()
        self.timeout = timeout
        self._request_id = 0

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=httpx.Timeout(self.timeout, connect=10.0))

    async def call(self, method: str, params: list[Any] | None = None) -> RpcResult:
        """Send one JSON-RPC request and unwrap ``result`` / ``error``."""
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or [],
        }
        try:
            async with self._client() as client:
                response = await client.post(self.network.rpc_url, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.ConnectError:
            return RpcResult(success=False, error=f"Cannot connect to {self.network.rpc_url}.")
        except httpx.TimeoutException:
            return RpcResult(success=False, error=f"RPC timed out after {self.timeout}s.")
        except httpx.HTTPStatusError as exc:
            return RpcResult(
                success=False, error=f"RPC returned HTTP {exc.response.status_code}"
            )
        except ValueError as exc:
            return RpcResult(success=False, error=f"Invalid JSON from RPC: {exc}")

        if "error" in data:
            err = data["error"]
            message = err.get("message", str(err)) if isinstance(err, dict) else str(err)
            return RpcResult(success=False, error=message)
        return RpcResult(result=data.get("result"))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def chain_id(self) -> int | None:
        res = await self.call("eth_chainId")
        return parse_quantity(res.result) if res.success else None

    async def verify_connection(self) -> ConnectionStatus:
        """Check the RPC answers with the configured chain id."""
        res = await self.call("eth_chainId")
        if not res.success:
            return ConnectionStatus(error=res.error)
        chain_id = parse_quantity(res.result)
        if chain_id is None:
            return ConnectionStatus(error=f"Invalid eth_chainId result: {res.result!r}")
        if chain_id != self.network.chain_id:
            return ConnectionStatus(
                chain_id=chain_id,
                error=f"Wrong network. Expected chainId {self.network.chain_id}, got {chain_id}",
            )
        return ConnectionStatus(connected=True, chain_id=chain_id)

    async def block_number(self) -> int | None:
        res = await self.call("eth_blockNumber")
        return parse_quantity(res.result) if res.success else None

    async def get_balance(self, address: str) -> str | None:
        """Native balance formatted as USDC (Arc's gas token)."""
        res = await self.call("eth_getBalance", [address, "latest"])
        raw = parse_quantity(res.result) if res.success else None
        if raw is None:
            return None
        return format_units(raw, self.network.usdc_decimals)

    async def get_code(self, address: str) -> str | None:
        res = await self.call("eth_getCode", [address, "latest"])
        return res.result if res.success else None

    async def is_contract(self, address: str) -> bool:
        code = await self.get_code(address)
        return bool(code) and code not in ("0x", "0x0")
