from unittest.mock import MagicMock

import pytest
from web3 import Web3
from web3.exceptions import (
    BadFunctionCallOutput,
    ContractLogicError,
    RequestTimedOut,
    Web3RPCError,
)
from web3.providers.base import BaseProvider

from builders import TOKEN
from erc20_ledger.app.domain.ports.out import CallResult
from erc20_ledger.app.infrastructure.fetchers.erc20_contract_reader import (
    Web3Erc20ContractBinder,
)


@pytest.fixture
def contract() -> MagicMock:
    return MagicMock()


@pytest.fixture
def w3(contract: MagicMock) -> MagicMock:
    w3 = MagicMock()
    w3.to_checksum_address.side_effect = lambda a: a
    w3.eth.contract.return_value = contract
    return w3


def _returns(contract: MagicMock, fn_name: str, value) -> None:
    getattr(contract.functions, fn_name).return_value.call.return_value = value


def _raises(contract: MagicMock, fn_name: str, exc: Exception) -> None:
    getattr(contract.functions, fn_name).return_value.call.side_effect = exc


def test_binds_contract_by_checksum_address(w3):
    Web3Erc20ContractBinder(w3=w3).bind(TOKEN)

    w3.to_checksum_address.assert_called_once_with("0x" + TOKEN.hex())
    assert w3.eth.contract.call_args.kwargs["address"] == "0x" + TOKEN.hex()


def test_successful_reads(w3, contract):
    _returns(contract, "name", "Wrapped Ether")
    _returns(contract, "symbol", "WETH")
    _returns(contract, "decimals", 18)
    _returns(contract, "totalSupply", 3 * 10**24)

    reader = Web3Erc20ContractBinder(w3=w3).bind(TOKEN)

    assert reader.try_name() == CallResult.ok("Wrapped Ether")
    assert reader.try_symbol() == CallResult.ok("WETH")
    assert reader.try_decimals() == CallResult.ok(18)
    assert reader.try_total_supply() == CallResult.ok(3 * 10**24)


@pytest.mark.parametrize(
    "exc",
    [
        ContractLogicError("execution reverted"),
        BadFunctionCallOutput("Could not decode contract function call"),
        ValueError("empty response"),
    ],
)
def test_revert_style_errors_become_reverted_results(w3, contract, exc):
    _raises(contract, "symbol", exc)

    reader = Web3Erc20ContractBinder(w3=w3).bind(TOKEN)

    assert reader.try_symbol().reverted


def test_provider_errors_propagate(w3, contract):
    _raises(contract, "name", ConnectionError("node unreachable"))

    reader = Web3Erc20ContractBinder(w3=w3).bind(TOKEN)

    with pytest.raises(ConnectionError):
        reader.try_name()


class _EthCallErrorProvider(BaseProvider):
    """Answers every eth_call with a fixed JSON-RPC error object."""

    def __init__(self, error: dict) -> None:
        super().__init__()
        self.error = error

    def make_request(self, method, params):
        if method == "eth_chainId":
            return {"jsonrpc": "2.0", "id": 1, "result": "0x1"}
        return {"jsonrpc": "2.0", "id": 1, "error": self.error}

    def is_connected(self, show_traceback: bool = False) -> bool:
        return True


@pytest.mark.parametrize(
    "message",
    ["invalid opcode: INVALID", "out of gas", "stack underflow (0 <=> 1)"],
)
def test_evm_execution_failure_without_revert_text_is_a_revert(message):
    w3 = Web3(_EthCallErrorProvider({"code": -32000, "message": message}))

    reader = Web3Erc20ContractBinder(w3=w3).bind(TOKEN)

    assert reader.try_name() == CallResult.revert()


def test_node_state_errors_from_eth_call_propagate():
    w3 = Web3(_EthCallErrorProvider({"code": -32000, "message": "header not found"}))

    reader = Web3Erc20ContractBinder(w3=w3).bind(TOKEN)

    with pytest.raises(Web3RPCError):
        reader.try_decimals()


@pytest.mark.parametrize(
    "exc",
    [
        RequestTimedOut("request timed out"),
        Web3RPCError(
            "limit exceeded",
            rpc_response={"jsonrpc": "2.0", "id": 1, "error": {"code": -32005, "message": "limit exceeded"}},
        ),
    ],
)
def test_rpc_transport_errors_propagate(w3, contract, exc):
    _raises(contract, "totalSupply", exc)

    reader = Web3Erc20ContractBinder(w3=w3).bind(TOKEN)

    with pytest.raises(type(exc)):
        reader.try_total_supply()
