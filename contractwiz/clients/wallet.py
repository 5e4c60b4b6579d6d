"""Async client for the wallet-custody backend.

Signing never happens here.  The backend holds the Circle API credentials,
signs server-side, and returns a transaction record; this client only posts
``{"action": ..., ...}`` requests to it and normalises the replies.

Typical usage::

    client = WalletServiceClient(url="https://<project>.supabase.co/functions/v1/circle-wallet")
    result = await client.execute_contract_call(ContractCallRequest(
        wallet_id="w-1",
        contract_address="0xabc...",
        function_name="safeMint(address)",
        args=["0xdef..."],
    ))
    if result.success:
        print(result.transaction.tx_hash)
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from contractwiz.config import WalletServiceConfig


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContractCallRequest(_CamelModel):
    """A contract call to be signed and submitted by the custody service."""

    wallet_id: str = Field(..., description="Custody wallet identifier")
    contract_address: str = Field(..., description="Target contract")
    function_name: str = Field(..., description="ABI function signature, e.g. 'mint(address,uint256)'")
    args: list[Any] = Field(default_factory=list, description="Ordered call arguments")
    amount: Optional[str] = Field(default=None, description="Optional USDC amount as a decimal string")


class TransactionRecord(_CamelModel):
    """Transaction as reported by the custody service."""

    id: str = Field(default="")
    state: str = Field(default="")
    tx_hash: Optional[str] = Field(default=None)
    error_reason: Optional[str] = Field(default=None)


class Wallet(_CamelModel):
    id: str = Field(default="")
    address: str = Field(default="")
    blockchain: str = Field(default="")
    state: str = Field(default="")


class WalletServiceResponse(BaseModel):
    """Normalised reply from any wallet-service action."""

    success: bool = Field(default=True)
    error: str | None = Field(default=None)
    transaction: TransactionRecord | None = Field(default=None)
    wallets: list[Wallet] = Field(default_factory=list)
    balances: list[dict[str, Any]] = Field(default_factory=list)
    wallet_set_id: str | None = Field(default=None)


class WalletServiceClient:
    """Async client for the custody backend's single action endpoint."""

    def __init__(self, url: str, api_key: str = "", timeout: int = 30) -> None:
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: WalletServiceConfig) -> "WalletServiceClient":
        return cls(url=config.url, api_key=config.api_key, timeout=config.timeout)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return httpx.AsyncClient(
            headers=headers,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
        )

    async def _invoke(self, action: str, payload: dict[str, Any]) -> WalletServiceResponse:
        body = {"action": action, **payload}
        try:
            async with self._client() as client:
                response = await client.post(self.url, json=body)
                response.raise_for_status()
                data = response.json()
        except httpx.ConnectError:
            return WalletServiceResponse(
                success=False,
                error=f"Cannot connect to wallet service at {self.url}.",
            )
        except httpx.TimeoutException:
            return WalletServiceResponse(
                success=False,
                error=f"Wallet service timed out after {self.timeout}s.",
            )
        except httpx.HTTPStatusError as exc:
            return WalletServiceResponse(
                success=False,
                error=f"Wallet service returned HTTP {exc.response.status_code}: "
                      f"{exc.response.text[:500]}",
            )
        except ValueError as exc:
            return WalletServiceResponse(success=False, error=f"Invalid JSON from wallet service: {exc}")

        return self._parse(data)

    @staticmethod
    def _parse(data: dict[str, Any]) -> WalletServiceResponse:
        if not data.get("success", True):
            return WalletServiceResponse(
                success=False, error=data.get("error") or "Unknown wallet service error"
            )
        transaction = data.get("transaction")
        wallet = data.get("wallet")
        wallets = data.get("wallets") or ([wallet] if wallet else [])
        return WalletServiceResponse(
            success=True,
            transaction=TransactionRecord.model_validate(transaction) if transaction else None,
            wallets=[Wallet.model_validate(w) for w in wallets],
            balances=data.get("balances") or [],
            wallet_set_id=data.get("walletSetId"),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def create_wallet(self, user_id: str | None = None) -> WalletServiceResponse:
        payload = {"userId": user_id} if user_id else {}
        return await self._invoke("createWallet", payload)

    async def get_wallets(self) -> WalletServiceResponse:
        return await self._invoke("getWallets", {})

    async def get_wallet_balance(self, wallet_id: str) -> WalletServiceResponse:
        return await self._invoke("getWalletBalance", {"walletId": wallet_id})

    async def approve_usdc(self, wallet_id: str, spender: str, amount: str) -> WalletServiceResponse:
        """Allow *spender* (usually a paid-mint contract) to pull *amount* USDC."""
        return await self._invoke(
            "approveUSDC", {"walletId": wallet_id, "spender": spender, "amount": amount}
        )

    async def execute_contract_call(self, request: ContractCallRequest) -> WalletServiceResponse:
        payload = request.model_dump(by_alias=True, exclude_none=True)
        return await self._invoke("executeContractCall", payload)
