"""
Tests for the faucet Lambda entry point.
"""
import base64
import json
import os
import pytest
import boto3
from unittest.mock import Mock, patch
from moto import mock_aws

from handler import faucet, normalize_event
from utils.exceptions import CredentialResolutionError, NetworkConnectionError, ValidationError

SINGLE_PAYLOAD = {'mode': 'single', 'accountId': 'a.near', 'amount': '5'}


def _faucet_service(result=None):
    service = Mock()
    service.single_transfer.return_value.to_dict.return_value = result or {'success': True, 'mode': 'single'}
    service.batch_transfer.return_value.to_dict.return_value = result or {'success': True, 'mode': 'batch'}
    return service


@pytest.mark.handler
class TestNormalizeEvent:

    def test_direct_invocation(self):
        assert normalize_event(SINGLE_PAYLOAD) == SINGLE_PAYLOAD

    def test_json_body(self):
        assert normalize_event({'body': json.dumps(SINGLE_PAYLOAD)}) == SINGLE_PAYLOAD

    def test_base64_body(self):
        body = base64.b64encode(json.dumps(SINGLE_PAYLOAD).encode('utf-8')).decode('ascii')
        assert normalize_event({'body': body, 'isBase64Encoded': True}) == SINGLE_PAYLOAD

    def test_structured_body(self):
        assert normalize_event({'body': SINGLE_PAYLOAD}) == SINGLE_PAYLOAD

    def test_unparseable_body_falls_back_to_event(self):
        event = {'body': '{not json', 'mode': 'single'}
        assert normalize_event(event) is event

    def test_empty_body_uses_event(self):
        event = {'body': '', **SINGLE_PAYLOAD}
        assert normalize_event(event) is event


@pytest.mark.handler
class TestFaucetHandler:

    @patch('handler.build_faucet_service')
    def test_single_mode(self, mock_build, mock_context):
        service = _faucet_service()
        mock_build.return_value = service

        result = faucet(SINGLE_PAYLOAD, mock_context)

        service.single_transfer.assert_called_once_with('a.near', '5')
        assert result == {'success': True, 'mode': 'single'}

    @patch('handler.build_faucet_service')
    def test_wrapped_body_matches_direct_invocation(self, mock_build, mock_context):
        mock_build.return_value = _faucet_service()
        direct = faucet(SINGLE_PAYLOAD, mock_context)
        direct_call = mock_build.return_value.single_transfer.call_args

        mock_build.return_value = _faucet_service()
        wrapped = faucet({'body': '{"mode":"single","accountId":"a.near","amount":"5"}'}, mock_context)

        assert wrapped == direct
        assert mock_build.return_value.single_transfer.call_args == direct_call

    @patch('handler.build_faucet_service')
    def test_batch_mode_defaults(self, mock_build, mock_context):
        service = _faucet_service()
        mock_build.return_value = service

        faucet({'mode': 'batch', 'accounts': ['a.near', 'b.near']}, mock_context)

        service.batch_transfer.assert_called_once_with(['a.near', 'b.near'], 1.0, 10.0)

    @patch('handler.build_faucet_service')
    def test_missing_amount_fails_before_session(self, mock_build, mock_context):
        """Test validation errors propagate before any AWS or RPC access."""
        with pytest.raises(ValidationError, match='amount required for single mode'):
            faucet({'mode': 'single', 'accountId': 'a.near'}, mock_context)
        mock_build.assert_not_called()

    @patch('handler.build_faucet_service')
    def test_empty_batch_accounts_rejected(self, mock_build, mock_context):
        with pytest.raises(ValidationError, match='accounts array required'):
            faucet({'mode': 'batch', 'accounts': []}, mock_context)
        mock_build.assert_not_called()

    @patch('handler.build_faucet_service')
    def test_invalid_mode(self, mock_build, mock_context):
        with pytest.raises(ValidationError, match='Invalid mode: refund'):
            faucet({'mode': 'refund'}, mock_context)
        mock_build.assert_not_called()

    @pytest.mark.parametrize('literal', ['NaN', 'Infinity', '-Infinity'])
    @patch('handler.build_faucet_service')
    def test_non_finite_bounds_rejected(self, mock_build, literal, mock_context):
        """Test NaN and Infinity literals in a JSON body fail validation."""
        body = '{"mode":"batch","accounts":["a.near"],"minAmount":1,"maxAmount":' + literal + '}'

        with pytest.raises(ValidationError, match='maxAmount must be a finite number'):
            faucet({'body': body}, mock_context)
        mock_build.assert_not_called()

    @patch('handler.build_faucet_service')
    def test_session_errors_propagate(self, mock_build, mock_context):
        mock_build.side_effect = NetworkConnectionError('Failed to connect', node_url='http://localhost:3030')

        with pytest.raises(NetworkConnectionError):
            faucet(SINGLE_PAYLOAD, mock_context)


@pytest.mark.handler
@mock_aws()
@patch.dict(os.environ, {'FAUCET_TRANSFER_DELAY_MS': '0', 'AWS_REGION': 'us-east-1'})
def test_batch_end_to_end(aws_credentials, mock_context):
    """Test credentials come from SSM and transfers go through the NEAR account."""
    ssm = boto3.client('ssm', region_name='us-east-1')
    ssm.put_parameter(Name='/near-localnet/master-account-id', Value='faucet.near', Type='String')
    ssm.put_parameter(Name='/near-localnet/master-account-key', Value='ed25519:secret', Type='SecureString')

    account = Mock()
    account.send_money.side_effect = [
        {'transaction': {'hash': 'hash-a'}},
        Exception('NotEnoughBalance'),
    ]

    with patch('services.credential_service.KeyPair'), \
            patch('services.near_service.JsonProvider') as mock_provider, \
            patch('services.near_service.Signer') as mock_signer, \
            patch('services.near_service.Account', return_value=account) as mock_account:
        result = faucet(
            {'body': json.dumps({'mode': 'batch', 'accounts': ['a.near', 'b.near'], 'minAmount': 1, 'maxAmount': 1})},
            mock_context
        )

    mock_provider.assert_called_once_with('http://localhost:3030')
    mock_account.assert_called_once_with(mock_provider.return_value, mock_signer.return_value, 'faucet.near')
    assert result['success'] is True
    assert result['mode'] == 'batch'
    assert result['summary'] == {'totalSelected': 2, 'successful': 1, 'failed': 1, 'totalSent': '1.00'}
    assert result['transfers'][0] == {'account': 'a.near', 'amount': '1.00', 'txHash': 'hash-a', 'success': True}
    assert result['transfers'][1]['success'] is False
    assert 'NotEnoughBalance' in result['transfers'][1]['error']


@pytest.mark.handler
@mock_aws()
def test_missing_signing_key_aborts_invocation(aws_credentials, mock_context):
    with patch('services.near_service.JsonProvider') as mock_provider:
        with pytest.raises(CredentialResolutionError):
            faucet(SINGLE_PAYLOAD, mock_context)
    mock_provider.assert_not_called()
