"""Tests for remote procedure call mocking."""

import pytest

from supamock.exceptions import NotMockedError, RpcNotMockedError


class TestRpc:
    """rpc() resolves canned responses by name."""

    @pytest.mark.asyncio
    async def test_registered_response(self, client):
        client.register_rpc("approve_access_request", {"success": True})

        result = await client.rpc("approve_access_request", {"id": 7})

        assert result.data == {"success": True}
        assert result.error is None

    @pytest.mark.asyncio
    async def test_registered_error(self, client):
        error = RuntimeError("permission denied")
        client.register_rpc("reject_access_request", {"success": True}, error)

        result = await client.rpc("reject_access_request")

        assert result.data is None
        assert result.error is error

    @pytest.mark.asyncio
    async def test_missing_rpc(self, client):
        result = await client.rpc("nonexistent", {})

        assert result.data is None
        assert isinstance(result.error, NotMockedError)
        assert str(result.error) == "RPC function nonexistent not mocked"
        assert result.error == RpcNotMockedError("nonexistent")
        assert result.error.details == {"kind": "rpc", "name": "nonexistent"}

    @pytest.mark.asyncio
    async def test_params_are_ignored(self, client):
        client.register_rpc("stats", [1, 2, 3])

        first = await client.rpc("stats", {"week": 1})
        second = await client.rpc("stats", {"week": 52})

        assert first.data == second.data == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_reregistering_overwrites(self, client):
        client.register_rpc("stats", "old")
        client.register_rpc("stats", "new")

        assert (await client.rpc("stats")).data == "new"
        assert client.rpcs.registered() == ["stats"]
