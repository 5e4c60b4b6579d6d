"""Tests for the read-only JSON-RPC client (contractwiz.clients.chain)."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from contractwiz.clients import ChainQueryClient, format_units, parse_quantity
from contractwiz.config import NetworkConfig

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("raw, decimals, expected", [
    (1_500_000, 6, "1.5"),
    (0, 6, "0"),
    (100_000_000, 6, "100"),
    (1, 6, "0.000001"),
    (12, 0, "12"),
])
def test_format_units(raw, decimals, expected):
    assert format_units(raw, decimals) == expected


@pytest.mark.parametrize("value, expected", [
    ("0x4cef52", 5042002),
    ("0x0", 0),
    (None, None),
    ("", None),
    ("0x", None),
    ("0xzz", None),
    ("12", None),
    (12, None),
])
def test_parse_quantity(value, expected):
    assert parse_quantity(value) == expected


@pytest.mark.asyncio
class TestChainQueryClient:
    @pytest.fixture
    def client(self) -> ChainQueryClient:
        return ChainQueryClient()

    async def test_request_shape(self, client, mock_async_client, json_response):
        http = mock_async_client(json_response({"jsonrpc": "2.0", "id": 1, "result": "0x4cef52"}))
        with patch("contractwiz.clients.chain.httpx.AsyncClient", return_value=http):
            assert await client.chain_id() == 5042002

        assert http.post.call_args.args[0] == "https://rpc.testnet.arc.network"
        assert http.post.call_args.kwargs["json"] == {
            "jsonrpc": "2.0", "id": 1, "method": "eth_chainId", "params": [],
        }

    async def test_request_ids_increment(self, client, mock_async_client, json_response):
        http = mock_async_client(json_response({"result": "0x1"}))
        with patch("contractwiz.clients.chain.httpx.AsyncClient", return_value=http):
            await client.block_number()
            await client.block_number()
        assert http.post.call_args.kwargs["json"]["id"] == 2

    async def test_verify_connection(self, client, mock_async_client, json_response):
        http = mock_async_client(json_response({"result": "0x4cef52"}))
        with patch("contractwiz.clients.chain.httpx.AsyncClient", return_value=http):
            status = await client.verify_connection()
        assert status.connected
        assert status.chain_id == 5042002

    async def test_wrong_network(self, client, mock_async_client, json_response):
        http = mock_async_client(json_response({"result": "0x1"}))
        with patch("contractwiz.clients.chain.httpx.AsyncClient", return_value=http):
            status = await client.verify_connection()
        assert not status.connected
        assert status.error == "Wrong network. Expected chainId 5042002, got 1"

    async def test_balance_in_usdc(self, client, mock_async_client, json_response):
        http = mock_async_client(json_response({"result": hex(2_500_000)}))
        with patch("contractwiz.clients.chain.httpx.AsyncClient", return_value=http):
            assert await client.get_balance("0xabc") == "2.5"
        assert http.post.call_args.kwargs["json"]["params"] == ["0xabc", "latest"]

    async def test_is_contract(self, client, mock_async_client, json_response):
        with patch("contractwiz.clients.chain.httpx.AsyncClient",
                   return_value=mock_async_client(json_response({"result": "0x6080"}))):
            assert await client.is_contract("0xabc")
        with patch("contractwiz.clients.chain.httpx.AsyncClient",
                   return_value=mock_async_client(json_response({"result": "0x"}))):
            assert not await client.is_contract("0xabc")

    async def test_rpc_error_object(self, client, mock_async_client, json_response):
        http = mock_async_client(json_response({"error": {"code": -32601, "message": "method not found"}}))
        with patch("contractwiz.clients.chain.httpx.AsyncClient", return_value=http):
            result = await client.call("eth_foo")
        assert not result.success
        assert result.error == "method not found"

    async def test_connect_error(self, client, mock_async_client):
        http = mock_async_client(side_effect=httpx.ConnectError("refused"))
        with patch("contractwiz.clients.chain.httpx.AsyncClient", return_value=http):
            status = await client.verify_connection()
            balance = await client.get_balance("0xabc")
        assert not status.connected
        assert "Cannot connect to https://rpc.testnet.arc.network" in status.error
        assert balance is None

    async def test_custom_network(self, mock_async_client, json_response):
        client = ChainQueryClient(NetworkConfig(rpc_url="https://rpc.local", chain_id=31337))
        http = mock_async_client(json_response({"result": hex(31337)}))
        with patch("contractwiz.clients.chain.httpx.AsyncClient", return_value=http):
            status = await client.verify_connection()
        assert status.connected
        assert http.post.call_args.args[0] == "https://rpc.local"

    async def test_null_chain_id_result(self, client, mock_async_client, json_response):
        http = mock_async_client(json_response({"jsonrpc": "2.0", "id": 1, "result": None}))
        with patch("contractwiz.clients.chain.httpx.AsyncClient", return_value=http):
            status = await client.verify_connection()
            chain_id = await client.chain_id()
            block = await client.block_number()
            balance = await client.get_balance("0xabc")
        assert not status.connected
        assert status.chain_id is None
        assert status.error == "Invalid eth_chainId result: None"
        assert chain_id is None
        assert block is None
        assert balance is None

    async def test_non_hex_result(self, client, mock_async_client, json_response):
        http = mock_async_client(json_response({"result": "arc"}))
        with patch("contractwiz.clients.chain.httpx.AsyncClient", return_value=http):
            status = await client.verify_connection()
            block = await client.block_number()
        assert not status.connected
        assert "Invalid eth_chainId result" in status.error
        assert block is None
