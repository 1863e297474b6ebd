"""
SSM Parameter Store service for secret lookups.
"""
import boto3
from typing import Optional
from logger_config import get_logger

logger = get_logger(__name__)


class ParameterStoreService:
    """Service for SSM Parameter Store operations."""

    def __init__(self, region_name: Optional[str] = None):
        """
        Initialize Parameter Store service.

        Args:
            region_name: AWS region; boto3's default resolution when None
        """
        self.region_name = region_name
        self._client = None

    @property
    def client(self):
        """Lazy initialization of SSM client."""
        if self._client is None:
            self._client = boto3.client('ssm', region_name=self.region_name)
        return self._client

    def get_parameter(self, name: str, with_decryption: bool = False) -> Optional[str]:
        """
        Get a parameter value by name.

        Args:
            name: Parameter name (e.g. '/near-localnet/master-account-key')
            with_decryption: Decrypt SecureString values

        Returns:
            Parameter value, or None if the parameter has no value

        Raises:
            ClientError: If the lookup fails (ParameterNotFound, AccessDenied, ...)
        """
        response = self.client.get_parameter(Name=name, WithDecryption=with_decryption)
        logger.debug(f'Fetched parameter {name} (decrypted: {with_decryption})')
        return response.get('Parameter', {}).get('Value')
