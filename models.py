"""
Request and result models for the NEAR faucet.

Results serialize to the camelCase JSON returned by the Lambda.
"""
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from utils.amounts import MAX_DRAW_AMOUNT
from utils.exceptions import ValidationError

SINGLE_MODE = 'single'
BATCH_MODE = 'batch'

DEFAULT_MIN_AMOUNT = 1.0
DEFAULT_MAX_AMOUNT = 10.0


@dataclass
class SingleTransferRequest:
    """Send a fixed amount to one account."""

    account_id: str
    amount: str
    mode: str = SINGLE_MODE


@dataclass
class BatchTransferRequest:
    """Send a random amount in [min_amount, max_amount) to each account."""

    accounts: List[str]
    min_amount: float = DEFAULT_MIN_AMOUNT
    max_amount: float = DEFAULT_MAX_AMOUNT
    mode: str = BATCH_MODE


FaucetRequest = Union[SingleTransferRequest, BatchTransferRequest]


@dataclass(frozen=True)
class MasterCredentials:
    """Master account id and its parsed key pair. The key never shows in repr."""

    account_id: str
    key_pair: Any = field(repr=False)


@dataclass
class TransferOutcome:
    account: str
    amount: str
    success: bool
    tx_hash: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'account': self.account, 'amount': self.amount}
        if self.success:
            data['txHash'] = self.tx_hash
        data['success'] = self.success
        if not self.success:
            data['error'] = self.error
        return data


@dataclass
class TransferSummary:
    total_selected: int = 0
    successful: int = 0
    failed: int = 0
    total_sent: str = '0.00'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalSelected': self.total_selected,
            'successful': self.successful,
            'failed': self.failed,
            'totalSent': self.total_sent,
        }


@dataclass
class FaucetResult:
    """Aggregated outcome of a single or batch faucet run."""

    mode: str
    success: bool = False
    transfers: List[TransferOutcome] = field(default_factory=list)
    summary: TransferSummary = field(default_factory=TransferSummary)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'mode': self.mode,
            'transfers': [transfer.to_dict() for transfer in self.transfers],
            'summary': self.summary.to_dict(),
        }


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_bound(payload: Dict[str, Any], name: str, default: float) -> float:
    value = payload.get(name)
    if value is None:
        return default
    if not _is_number(value):
        raise ValidationError(f'{name} must be a number, got: {value!r}', field=name, value=value)
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f'{name} must be a finite number, got: {value!r}', field=name, value=value)
    if abs(value) > MAX_DRAW_AMOUNT:
        raise ValidationError(f'{name} must not exceed {MAX_DRAW_AMOUNT}, got: {value!r}', field=name, value=value)
    if Decimal(str(value)).as_tuple().exponent < -2:
        raise ValidationError(
            f'{name} must have at most two decimal places, got: {value!r}',
            field=name,
            value=value
        )
    return float(value)


def parse_faucet_request(payload: Any) -> FaucetRequest:
    """
    Validate a normalized payload and build the matching request.

    Args:
        payload: Decoded invocation payload

    Returns:
        SingleTransferRequest or BatchTransferRequest

    Raises:
        ValidationError: If the mode is unknown or required fields are missing
    """
    if not isinstance(payload, dict):
        raise ValidationError('Request payload must be a JSON object', value=payload)

    mode = payload.get('mode')

    if mode == SINGLE_MODE:
        account_id = payload.get('accountId')
        amount = payload.get('amount')
        if _is_number(amount):
            amount = str(amount)

        missing = [
            name for name, value in (('accountId', account_id), ('amount', amount))
            if not value or not isinstance(value, str)
        ]
        if missing:
            raise ValidationError(
                f'{" and ".join(missing)} required for single mode',
                field=missing[0]
            )
        return SingleTransferRequest(account_id=account_id, amount=amount)

    if mode == BATCH_MODE:
        accounts = payload.get('accounts')
        if not accounts or not isinstance(accounts, list):
            raise ValidationError('accounts array required for batch mode', field='accounts', value=accounts)

        invalid = [account for account in accounts if not account or not isinstance(account, str)]
        if invalid:
            raise ValidationError(
                f'accounts must be non-empty strings, got: {invalid!r}',
                field='accounts',
                value=invalid
            )

        min_amount = _parse_bound(payload, 'minAmount', DEFAULT_MIN_AMOUNT)
        max_amount = _parse_bound(payload, 'maxAmount', DEFAULT_MAX_AMOUNT)
        if min_amount < 0:
            raise ValidationError(f'minAmount must not be negative, got: {min_amount}', field='minAmount', value=min_amount)
        if min_amount > max_amount:
            raise ValidationError(
                f'minAmount ({min_amount}) must not exceed maxAmount ({max_amount})',
                field='minAmount',
                value=min_amount
            )

        return BatchTransferRequest(accounts=list(accounts), min_amount=min_amount, max_amount=max_amount)

    raise ValidationError(f'Invalid mode: {mode}', field='mode', value=mode)
