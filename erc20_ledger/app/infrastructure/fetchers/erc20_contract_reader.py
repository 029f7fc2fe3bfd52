from __future__ import annotations

from typing import Any

from web3 import Web3
from web3.contract import Contract
from web3.exceptions import (
    BadFunctionCallOutput,
    ContractLogicError,
    MethodUnavailable,
    RequestTimedOut,
    Web3RPCError,
)

from erc20_ledger.app.domain.ports.out import (
    CallResult,
    Erc20ContractBinder,
    Erc20ContractReader,
)

# Minimal ERC-20 ABI fragments.
# decimals is read as uint256 so out-of-range values reach the registry
# instead of failing ABI decoding as uint8.
_ERC20_ABI = [
    {"name": "name", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "string"}]},
    {"name": "symbol", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "string"}]},
    {"name": "decimals", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "uint256"}]},
    {"name": "totalSupply", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "uint256"}]},
]

# Node messages for an eth_call the EVM executed and aborted without
# "execution reverted" (pre-0.8 assert, exhausted gas, corrupt bytecode).
_EXECUTION_FAILURE_MARKERS = (
    "revert",
    "invalid opcode",
    "out of gas",
    "stack underflow",
    "stack overflow",
    "invalid jump",
    "bad instruction",
    "vm execution error",
    "write protection",
    "return data out of bounds",
)


def _is_execution_failure(exc: Web3RPCError) -> bool:
    if isinstance(exc, (RequestTimedOut, MethodUnavailable)):
        return False

    error = (exc.rpc_response or {}).get("error")
    if isinstance(error, dict):
        if error.get("code") == 3:
            return True
        message = str(error.get("message") or "")
    else:
        message = str(error or exc.message)

    message = message.lower()
    return any(marker in message for marker in _EXECUTION_FAILURE_MARKERS)


class Web3Erc20ContractReader(Erc20ContractReader):
    """
    ERC-20 reader using a synchronous Web3 provider.

    Revert-style failures become CallResult.revert(): ContractLogicError,
    BadFunctionCallOutput, ABI decoding ValueError, and JSON-RPC errors
    reporting that the EVM aborted the call (invalid opcode, out of gas).
    Provider errors (connection, timeout, rate limiting, missing state)
    propagate to the caller.
    """

    def __init__(self, *, w3: Web3, contract_address: bytes) -> None:
        self._w3 = w3
        # web3 expects checksum hex string
        addr_hex = self._w3.to_checksum_address("0x" + contract_address.hex())
        self._contract: Contract = self._w3.eth.contract(address=addr_hex, abi=_ERC20_ABI)

    def try_name(self) -> CallResult[str]:
        return self._safe_call("name")

    def try_symbol(self) -> CallResult[str]:
        return self._safe_call("symbol")

    def try_decimals(self) -> CallResult[int]:
        return self._safe_call("decimals")

    def try_total_supply(self) -> CallResult[int]:
        return self._safe_call("totalSupply")

    def _safe_call(self, fn_name: str) -> CallResult[Any]:
        try:
            fn = getattr(self._contract.functions, fn_name)
            return CallResult.ok(fn().call())
        except (BadFunctionCallOutput, ContractLogicError, ValueError):
            # Non-ERC20, proxy weirdness, revert, or empty response
            return CallResult.revert()
        except Web3RPCError as exc:
            if _is_execution_failure(exc):
                return CallResult.revert()
            raise


class Web3Erc20ContractBinder(Erc20ContractBinder):
    def __init__(self, *, w3: Web3) -> None:
        self._w3 = w3

    def bind(self, contract_address: bytes) -> Web3Erc20ContractReader:
        return Web3Erc20ContractReader(w3=self._w3, contract_address=contract_address)
