"""
Custom exception classes for the faucet handler and services.
"""
from typing import Optional, Any


class ValidationError(ValueError):
    """Exception raised for invalid request payloads or amounts."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None
    ):
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation if available
            value: Invalid value if available
        """
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value


class CredentialResolutionError(Exception):
    """Exception raised when the master signing key cannot be resolved."""

    def __init__(
        self,
        message: str,
        parameter_name: Optional[str] = None
    ):
        """
        Initialize credential resolution error.

        Args:
            message: Error message
            parameter_name: Parameter Store name involved if available
        """
        super().__init__(message)
        self.message = message
        self.parameter_name = parameter_name


class NetworkConnectionError(Exception):
    """Exception raised when the NEAR RPC endpoint can't be reached."""

    def __init__(
        self,
        message: str,
        node_url: Optional[str] = None,
        network_id: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.node_url = node_url
        self.network_id = network_id


class TransferError(Exception):
    """Exception raised when a single token transfer fails."""

    def __init__(
        self,
        message: str,
        account_id: Optional[str] = None,
        amount: Optional[str] = None
    ):
        """
        Initialize transfer error.

        Args:
            message: Error message
            account_id: Destination account if available
            amount: Decimal NEAR amount if available
        """
        super().__init__(message)
        self.message = message
        self.account_id = account_id
        self.amount = amount
