"""
Master account credential resolution from SSM Parameter Store.
"""
from near_api.signer import KeyPair

from config import Config
from logger_config import get_logger
from models import MasterCredentials
from utils.exceptions import CredentialResolutionError
from .parameter_store_service import ParameterStoreService

logger = get_logger(__name__)


class CredentialResolver:
    """Resolves the faucet master account id and signing key."""

    def __init__(self, parameter_store: ParameterStoreService, config: Config):
        """
        Initialize credential resolver.

        Args:
            parameter_store: Parameter Store service used for lookups
            config: Faucet configuration holding parameter names
        """
        self.parameter_store = parameter_store
        self.config = config

    def resolve_account_id(self) -> str:
        """
        Look up the master account id.

        Any lookup failure falls back to the configured default id.
        """
        param_name = self.config.master_account_id_param
        default_id = self.config.default_master_account_id
        try:
            account_id = self.parameter_store.get_parameter(param_name)
        except Exception as e:
            logger.warning(
                f'Using default master account ID: {default_id} '
                f'(SSM param {param_name} not found: {str(e)})'
            )
            return default_id

        if not account_id:
            logger.warning(f'SSM param {param_name} is empty, using default master account ID: {default_id}')
            return default_id
        return account_id

    def resolve_key_pair(self) -> KeyPair:
        """
        Look up and parse the master account private key.

        Raises:
            CredentialResolutionError: If the key is missing, empty or malformed
        """
        param_name = self.config.master_account_key_param
        try:
            private_key = self.parameter_store.get_parameter(param_name, with_decryption=True)
        except Exception as e:
            raise CredentialResolutionError(
                f'Master account key not found in SSM at {param_name}: {str(e)}',
                parameter_name=param_name
            ) from e

        if not private_key:
            raise CredentialResolutionError(
                f'Master account key not found in SSM at {param_name}',
                parameter_name=param_name
            )

        try:
            return KeyPair(private_key)
        except Exception as e:
            # The key material itself must stay out of the message
            raise CredentialResolutionError(
                f'Master account key at {param_name} is not a valid NEAR key pair',
                parameter_name=param_name
            ) from e

    def resolve(self) -> MasterCredentials:
        """
        Resolve master credentials.

        Returns:
            MasterCredentials with the account id and parsed key pair

        Raises:
            CredentialResolutionError: If the signing key can't be resolved
        """
        account_id = self.resolve_account_id()
        key_pair = self.resolve_key_pair()
        logger.info(f'Resolved master account credentials for {account_id}')
        return MasterCredentials(account_id=account_id, key_pair=key_pair)
