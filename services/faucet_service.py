"""
Faucet transfer orchestration: single transfers and paced batches.
"""
import time
from decimal import Decimal
from random import Random
from typing import List, Optional

from logger_config import get_logger
from models import (
    BATCH_MODE,
    SINGLE_MODE,
    FaucetResult,
    TransferOutcome,
    TransferSummary,
)
from utils.amounts import draw_amount, format_amount, parse_near_amount
from utils.exceptions import TransferError
from .near_service import NearSession

logger = get_logger(__name__)

DEFAULT_TRANSFER_DELAY_SECONDS = 0.5


class FixedDelayPacer:
    """Sleeps a fixed delay between consecutive batch transfers."""

    def __init__(self, delay_seconds: float = DEFAULT_TRANSFER_DELAY_SECONDS):
        self.delay_seconds = delay_seconds

    def pause(self) -> None:
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)


class FaucetService:
    """Sends NEAR from the master account through an open session."""

    def __init__(
        self,
        session: NearSession,
        rng: Optional[Random] = None,
        pacer: Optional[FixedDelayPacer] = None
    ):
        """
        Initialize faucet service.

        Args:
            session: Open NEAR session for the master account
            rng: Random source for batch amounts (seedable for tests)
            pacer: Pacing policy applied between batch transfers
        """
        self.session = session
        self.rng = rng or Random()
        self.pacer = pacer or FixedDelayPacer()

    def transfer(self, to_account_id: str, amount: str) -> str:
        """
        Send a decimal NEAR amount to an account.

        Args:
            to_account_id: Destination account id
            amount: Decimal textual NEAR amount

        Returns:
            Transaction hash

        Raises:
            ValidationError: If the amount can't be parsed (before any RPC call)
            TransferError: If the transfer fails
        """
        amount_yocto = parse_near_amount(amount)
        try:
            return self.session.send_money(to_account_id, amount_yocto)
        except TransferError as e:
            raise TransferError(e.message, account_id=to_account_id, amount=amount) from e

    def _attempt(self, account_id: str, amount: str) -> TransferOutcome:
        logger.info(f'Sending {amount} NEAR to {account_id}')
        try:
            tx_hash = self.transfer(account_id, amount)
        except Exception as e:
            logger.error(f'Transfer of {amount} NEAR to {account_id} failed: {str(e)}')
            return TransferOutcome(account=account_id, amount=amount, success=False, error=str(e))

        logger.info(f'Transfer to {account_id} successful, TX: {tx_hash}')
        return TransferOutcome(account=account_id, amount=amount, success=True, tx_hash=tx_hash)

    def single_transfer(self, account_id: str, amount: str) -> FaucetResult:
        """Send one fixed amount. Failures are reported in the result, never raised."""
        outcome = self._attempt(account_id, amount)

        summary = TransferSummary(total_selected=1)
        if outcome.success:
            summary.successful = 1
            summary.total_sent = amount
        else:
            summary.failed = 1

        return FaucetResult(
            mode=SINGLE_MODE,
            success=outcome.success,
            transfers=[outcome],
            summary=summary,
        )

    def batch_transfer(self, accounts: List[str], min_amount: float, max_amount: float) -> FaucetResult:
        """
        Send a random amount to each account, one after another.

        Every account gets its own draw from [min_amount, max_amount). A failed
        transfer doesn't stop the batch, and the pacer runs between accounts
        whatever the outcome. The batch succeeds if at least one transfer did.

        Args:
            accounts: Destination account ids, processed in order
            min_amount: Inclusive lower bound in NEAR
            max_amount: Exclusive upper bound in NEAR

        Returns:
            FaucetResult with one outcome per account
        """
        result = FaucetResult(mode=BATCH_MODE, summary=TransferSummary(total_selected=len(accounts)))

        if not accounts:
            logger.info('No accounts provided for batch transfer')
            return result

        logger.info(f'Sending to {len(accounts)} accounts')

        total_sent = Decimal('0')
        for index, account_id in enumerate(accounts):
            if index > 0:
                self.pacer.pause()

            amount = draw_amount(self.rng, min_amount, max_amount)
            outcome = self._attempt(account_id, amount)
            result.transfers.append(outcome)

            if outcome.success:
                result.summary.successful += 1
                total_sent += Decimal(amount)
            else:
                result.summary.failed += 1

        result.summary.total_sent = format_amount(total_sent)
        result.success = result.summary.successful > 0

        logger.info(
            f'Batch complete: {result.summary.successful} successful, '
            f'{result.summary.failed} failed, {result.summary.total_sent} NEAR sent'
        )
        return result
