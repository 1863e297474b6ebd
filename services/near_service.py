"""
NEAR RPC session bound to the faucet master account.
"""
from typing import Dict, Tuple

import requests
from near_api.account import Account
from near_api.providers import JsonProvider, JsonProviderError
from near_api.signer import KeyPair, Signer

from logger_config import get_logger
from models import MasterCredentials
from utils.exceptions import NetworkConnectionError, TransferError

logger = get_logger(__name__)


class NearSession:
    """
    Connection to a NEAR RPC node with the master account loaded.

    The session owns the signing key and the RPC provider. Transfers are
    only submitted through ``send_money``.
    """

    def __init__(
        self,
        network_id: str,
        node_url: str,
        account_id: str,
        key_store: Dict[Tuple[str, str], KeyPair],
        account: Account
    ):
        self.network_id = network_id
        self.node_url = node_url
        self.account_id = account_id
        self._key_store = key_store
        self._account = account

    @classmethod
    def open(cls, credentials: MasterCredentials, network_id: str, node_url: str) -> "NearSession":
        """
        Connect to the RPC node and load the master account.

        Args:
            credentials: Resolved master account credentials
            network_id: NEAR network identifier (e.g. 'localnet')
            node_url: RPC endpoint URL

        Returns:
            An open NearSession

        Raises:
            NetworkConnectionError: If the endpoint is unreachable or the
                master account can't be loaded
        """
        account_id = credentials.account_id
        key_store = {(network_id, account_id): credentials.key_pair}

        provider = JsonProvider(node_url)
        signer = Signer(account_id, key_store[(network_id, account_id)])

        try:
            account = Account(provider, signer, account_id)
        except (requests.RequestException, JsonProviderError) as e:
            raise NetworkConnectionError(
                f'Failed to connect to NEAR {network_id} at {node_url}: {str(e)}',
                node_url=node_url,
                network_id=network_id
            ) from e

        logger.info(f'Master account loaded: {account_id}')
        logger.info(f'Connected to NEAR at: {node_url}')
        return cls(network_id, node_url, account_id, key_store, account)

    def send_money(self, to_account_id: str, amount_yocto: int) -> str:
        """
        Submit a signed transfer from the master account.

        Args:
            to_account_id: Destination account id
            amount_yocto: Amount in yoctoNEAR

        Returns:
            Transaction hash

        Raises:
            TransferError: If the transaction is rejected or the RPC call fails.
                The decimal amount is attached by the caller.
        """
        try:
            result = self._account.send_money(to_account_id, amount_yocto)
        except Exception as e:
            raise TransferError(
                f'Transfer to {to_account_id} failed: {str(e)}',
                account_id=to_account_id
            ) from e

        return result['transaction']['hash']
