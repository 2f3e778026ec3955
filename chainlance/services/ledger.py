# chainlance/services/ledger.py
import logging
from typing import List

from chainlance.models.transaction import Transaction, TransactionType
from chainlance.utils.helpers import generate_signature

logger = logging.getLogger(__name__)

# Counterparty used for funds held in the simulated escrow
ESCROW_ACCOUNT = "ChainLance_Program"


class Ledger:
    """Append-only record of simulated escrow movements, newest first.

    Held in memory for the running session only.
    """

    def __init__(self):
        self._entries: List[Transaction] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[Transaction]:
        return list(self._entries)

    def record_deposit(self, amount: float, payer: str) -> Transaction:
        tx = Transaction(
            id=generate_signature("sig_"),
            type=TransactionType.DEPOSIT,
            amount=amount,
            sender=payer,
            recipient=ESCROW_ACCOUNT,
        )
        return self._append(tx)

    def record_release(self, amount: float, payee: str) -> Transaction:
        tx = Transaction(
            id=generate_signature("sig_rel_"),
            type=TransactionType.RELEASE,
            amount=amount,
            sender=ESCROW_ACCOUNT,
            recipient=payee,
        )
        return self._append(tx)

    def _append(self, tx: Transaction) -> Transaction:
        self._entries.insert(0, tx)
        logger.info(f"Ledger {tx.type.value} {tx.amount} {tx.sender} -> {tx.recipient} ({tx.id})")
        return tx
