"""Unit tests for block explorer source verification."""

from urllib.parse import parse_qs

import pytest
import requests
import responses

from multichain_deployments.exceptions import VerificationError
from multichain_deployments.explorer import check_verification_status, verify_contract_source
from multichain_deployments.resolver import NetworkResolver

ETHERSCAN_API = "https://api.etherscan.io/api"


@pytest.fixture
def ethereum(resolver: NetworkResolver):
    return resolver.resolve("Ethereum")


class TestVerifyContractSource:
    """Test the verify_contract_source function."""

    @responses.activate
    def test_returns_guid(self, ethereum):
        """Test a successful verification submission."""
        responses.add(
            responses.POST,
            ETHERSCAN_API,
            json={"status": "1", "message": "OK", "result": "guid-123"},
            status=200,
        )

        guid = verify_contract_source(
            ethereum, "0xabc", "AppleToken", "contract AppleToken {}", "v0.8.19+commit.7dd6d404"
        )

        assert guid == "guid-123"

    @responses.activate
    def test_sends_etherscan_form_fields(self, ethereum):
        """Test the submitted form, including the API key."""
        responses.add(
            responses.POST,
            ETHERSCAN_API,
            json={"status": "1", "message": "OK", "result": "guid-123"},
            status=200,
        )

        verify_contract_source(
            ethereum,
            "0xabc",
            "AppleToken",
            "contract AppleToken {}",
            "v0.8.19+commit.7dd6d404",
            constructor_arguments="00ff",
            optimization_used=True,
            runs=1000,
        )

        form = parse_qs(responses.calls[0].request.body)
        assert form["module"] == ["contract"]
        assert form["action"] == ["verifysourcecode"]
        assert form["contractaddress"] == ["0xabc"]
        assert form["contractname"] == ["AppleToken"]
        assert form["optimizationUsed"] == ["1"]
        assert form["runs"] == ["1000"]
        assert form["constructorArguements"] == ["00ff"]
        assert form["apikey"] == ["test-etherscan-key"]

    @responses.activate
    def test_api_error_raises(self, ethereum):
        """Test that status 0 responses raise VerificationError."""
        responses.add(
            responses.POST,
            ETHERSCAN_API,
            json={"status": "0", "message": "NOTOK", "result": "Invalid API Key"},
            status=200,
        )

        with pytest.raises(VerificationError) as exc_info:
            verify_contract_source(ethereum, "0xabc", "A", "contract A {}", "v0.8.19")

        assert "Invalid API Key" in str(exc_info.value)

    @responses.activate
    def test_http_error_raises(self, ethereum):
        """Test that non-200 responses raise VerificationError."""
        responses.add(responses.POST, ETHERSCAN_API, json={}, status=502)

        with pytest.raises(VerificationError) as exc_info:
            verify_contract_source(ethereum, "0xabc", "A", "contract A {}", "v0.8.19")

        assert "502" in str(exc_info.value)

    @responses.activate
    def test_network_error_raises(self, ethereum):
        """Test that connection problems raise VerificationError."""
        responses.add(
            responses.POST, ETHERSCAN_API, body=requests.ConnectionError("connection refused")
        )

        with pytest.raises(VerificationError) as exc_info:
            verify_contract_source(ethereum, "0xabc", "A", "contract A {}", "v0.8.19")

        assert isinstance(exc_info.value.__cause__, requests.RequestException)

    def test_network_without_explorer_api_raises(self, resolver: NetworkResolver):
        """Test that networks without an explorer API cannot be verified."""
        base = resolver.resolve("Base")

        with pytest.raises(VerificationError):
            verify_contract_source(base, "0xabc", "A", "contract A {}", "v0.8.19")

    @responses.activate
    def test_omits_api_key_when_not_configured(self, resolver: NetworkResolver):
        """Test that no apikey is sent for explorers without a key."""
        mantle = resolver.resolve("Mantle Testnet")
        responses.add(
            responses.POST,
            "https://explorer.testnet.mantle.xyz/api",
            json={"status": "1", "message": "OK", "result": "guid-456"},
            status=200,
        )

        assert verify_contract_source(mantle, "0xabc", "A", "contract A {}", "v0.8.19") == "guid-456"
        assert "apikey" not in parse_qs(responses.calls[0].request.body)


class TestCheckVerificationStatus:
    """Test the check_verification_status function."""

    @responses.activate
    def test_returns_pass_status(self, ethereum):
        """Test a completed verification."""
        responses.add(
            responses.GET,
            ETHERSCAN_API,
            json={"status": "1", "message": "OK", "result": "Pass - Verified"},
            status=200,
        )

        assert check_verification_status(ethereum, "guid-123") == "Pass - Verified"
        assert "guid=guid-123" in responses.calls[0].request.url
        assert "action=checkverifystatus" in responses.calls[0].request.url

    @responses.activate
    def test_pending_is_not_an_error(self, ethereum):
        """Test that a queued verification is reported, not raised."""
        responses.add(
            responses.GET,
            ETHERSCAN_API,
            json={"status": "0", "message": "NOTOK", "result": "Pending in queue"},
            status=200,
        )

        assert check_verification_status(ethereum, "guid-123") == "Pending in queue"

    @responses.activate
    def test_failed_verification_raises(self, ethereum):
        """Test that a rejected verification raises VerificationError."""
        responses.add(
            responses.GET,
            ETHERSCAN_API,
            json={"status": "0", "message": "NOTOK", "result": "Fail - Unable to verify"},
            status=200,
        )

        with pytest.raises(VerificationError):
            check_verification_status(ethereum, "guid-123")
