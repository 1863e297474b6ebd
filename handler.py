"""
Lambda handler for the NEAR localnet faucet.

Sends NEAR from the master account to user accounts, either one fixed
amount (mode "single") or random amounts to many accounts (mode "batch").

Event payload:
    {"mode": "single", "accountId": "user.near", "amount": "5.0"}
    {"mode": "batch", "accounts": ["a.near", "b.near"], "minAmount": 1.0, "maxAmount": 10.0}

API Gateway / Function URL events carry the same payload as a JSON string
in "body".
"""
import base64
import binascii
import json
from typing import Any

from config import Config, get_config
from logger_config import get_logger
from models import SingleTransferRequest, parse_faucet_request
from services.credential_service import CredentialResolver
from services.faucet_service import FaucetService, FixedDelayPacer
from services.near_service import NearSession
from services.parameter_store_service import ParameterStoreService
from utils.decorators import lambda_handler

logger = get_logger(__name__)


def normalize_event(event: Any) -> Any:
    """
    Extract the faucet payload from a raw Lambda event.

    A "body" is parsed as JSON text. If that fails, a body that is already
    a dict is used as is; otherwise the raw event is the payload. Events
    without a body are the payload themselves.
    """
    if not isinstance(event, dict) or not event.get('body'):
        return event

    body = event['body']
    if isinstance(body, str):
        try:
            if event.get('isBase64Encoded'):
                body = base64.b64decode(body).decode('utf-8')
            return json.loads(body)
        except (ValueError, binascii.Error) as e:
            logger.warning(f'Could not parse event body as JSON: {str(e)}')
            return event

    if isinstance(body, dict):
        return body
    return event


def build_faucet_service(config: Config) -> FaucetService:
    """Resolve master credentials and open a NEAR session for one invocation."""
    parameter_store = ParameterStoreService(config.aws_region)
    credentials = CredentialResolver(parameter_store, config).resolve()
    session = NearSession.open(credentials, config.near_network, config.near_node_url)
    return FaucetService(session, pacer=FixedDelayPacer(config.transfer_delay_seconds))


@lambda_handler
def faucet(event, context):
    """Validate the request, connect to NEAR and run the transfer(s)."""
    config = get_config()

    payload = normalize_event(event)
    request = parse_faucet_request(payload)
    logger.info(f'Faucet request in {request.mode} mode')

    faucet_service = build_faucet_service(config)

    if isinstance(request, SingleTransferRequest):
        result = faucet_service.single_transfer(request.account_id, request.amount)
    else:
        result = faucet_service.batch_transfer(request.accounts, request.min_amount, request.max_amount)

    return result.to_dict()
