from __future__ import annotations

import logging
import threading

from erc20_ledger.app.application.services.account_registry import AccountRegistry
from erc20_ledger.app.application.services.allowance_ledger import AllowanceLedger
from erc20_ledger.app.application.services.balance_ledger import BalanceLedger
from erc20_ledger.app.application.services.token_registry import TokenRegistry
from erc20_ledger.app.application.services.transaction_log import (
    TransactionLog,
    classify_transfer,
)
from erc20_ledger.app.domain.entities import (
    ZERO_ADDRESS,
    TransactionType,
    transaction_id,
)
from erc20_ledger.app.domain.errors import ContractReadReverted, OutOfRangeDecimals
from erc20_ledger.app.domain.events import ApprovalEvent, Erc20Event, TransferEvent
from erc20_ledger.app.domain.outcomes import (
    Processed,
    ReductionOutcome,
    Skipped,
    SkipReason,
)
from erc20_ledger.app.domain.ports.out import Erc20ContractBinder, EntityStore

logger = logging.getLogger(__name__)


class EventReducer:
    """
    Reduces ERC-20 Transfer/Approval logs into ledger entities.

    One call = one event, run to completion. Nothing in the skip taxonomy is
    raised to the caller: every handler returns Processed or Skipped(reason)
    and the caller moves on to the next event.

    Events are expected in chain order (block number, then log index);
    balance arithmetic is only meaningful in that order.
    """

    def __init__(
        self,
        store: EntityStore,
        *,
        binder: Erc20ContractBinder,
        zero_address: bytes = ZERO_ADDRESS,
    ) -> None:
        if len(zero_address) != 20:
            raise ValueError("zero_address must be 20 bytes")

        self._zero_address = zero_address
        self._tokens = TokenRegistry(store, binder=binder)
        self._accounts = AccountRegistry(store)
        self._balances = BalanceLedger(store, zero_address=zero_address)
        self._allowances = AllowanceLedger(store)
        self._transactions = TransactionLog(store)
        # load-or-create is read-check-write against the store
        self._lock = threading.Lock()

    @property
    def zero_address(self) -> bytes:
        return self._zero_address

    def handle(self, event: Erc20Event) -> ReductionOutcome:
        if isinstance(event, TransferEvent):
            return self.handle_transfer(event)
        if isinstance(event, ApprovalEvent):
            return self.handle_approval(event)
        raise TypeError(f"Unsupported event type: {type(event).__name__}")

    def handle_approval(self, event: ApprovalEvent) -> ReductionOutcome:
        with self._lock:
            outcome = self._reduce_approval(event)
        self._log_outcome(event, outcome)
        return outcome

    def handle_transfer(self, event: TransferEvent) -> ReductionOutcome:
        with self._lock:
            outcome = self._reduce_transfer(event)
        self._log_outcome(event, outcome)
        return outcome

    # ---------------------------------------------------------------------
    # Reductions
    # ---------------------------------------------------------------------

    def _reduce_approval(self, event: ApprovalEvent) -> ReductionOutcome:
        skipped = self._resolve_token(event.address)
        if skipped is not None:
            return skipped

        owner = self._accounts.load_or_create_account(event.params.owner)
        spender = self._accounts.load_or_create_account(event.params.spender)
        if owner is None or spender is None:
            return Skipped(SkipReason.MISSING_ACCOUNT)

        tx_id = transaction_id(event.block.number, event.transaction.hash, event.log_index)
        if self._transactions.exists(tx_id):
            return Skipped(SkipReason.DUPLICATE_EVENT, tx_id)

        self._allowances.overwrite(
            token=event.address,
            owner=owner.id,
            spender=spender.id,
            value=event.params.value,
        )
        record = self._transactions.append(
            type=TransactionType.APPROVAL,
            token=event.address,
            caller=owner.id,
            recipient=spender.id,
            amount=event.params.value,
            block=event.block,
            transaction=event.transaction,
            log_index=event.log_index,
        )
        return Processed(record.id, record.type)

    def _reduce_transfer(self, event: TransferEvent) -> ReductionOutcome:
        skipped = self._resolve_token(event.address)
        if skipped is not None:
            return skipped

        sender = self._accounts.load_or_create_account(event.params.from_address)
        receiver = self._accounts.load_or_create_account(event.params.to_address)
        if sender is None or receiver is None:
            return Skipped(SkipReason.MISSING_ACCOUNT)

        if sender.id == self._zero_address and receiver.id == self._zero_address:
            return Skipped(SkipReason.DEGENERATE_TRANSFER)

        tx_id = transaction_id(event.block.number, event.transaction.hash, event.log_index)
        if self._transactions.exists(tx_id):
            return Skipped(SkipReason.DUPLICATE_EVENT, tx_id)

        self._balances.apply_transfer(
            token=event.address,
            sender=sender.id,
            receiver=receiver.id,
            value=event.params.value,
        )
        record = self._transactions.append(
            type=classify_transfer(sender.id, receiver.id, zero_address=self._zero_address),
            token=event.address,
            caller=sender.id,
            recipient=receiver.id,
            amount=event.params.value,
            block=event.block,
            transaction=event.transaction,
            log_index=event.log_index,
        )
        return Processed(record.id, record.type)

    def _resolve_token(self, contract_address: bytes) -> Skipped | None:
        try:
            self._tokens.load_or_create_token(contract_address)
        except ContractReadReverted as e:
            return Skipped(SkipReason.CONTRACT_READ_REVERTED, e.method)
        except OutOfRangeDecimals as e:
            return Skipped(SkipReason.OUT_OF_RANGE_DECIMALS, str(e.decimals))
        return None

    @staticmethod
    def _log_outcome(event: Erc20Event, outcome: ReductionOutcome) -> None:
        if isinstance(outcome, Skipped):
            logger.info(
                "Skipped %s from %s at block %s log %s: %s",
                type(event).__name__,
                "0x" + event.address.hex(),
                event.block.number,
                event.log_index,
                outcome.reason.value,
                extra={"detail": outcome.detail},
            )
        else:
            logger.debug(
                "Processed %s %s",
                outcome.type.value,
                outcome.transaction_id,
            )
