"""Block explorer source verification for multichain-deployments library."""

import logging
from typing import Any, Dict

import requests

from .exceptions import VerificationError
from .types import NetworkProfile

logger = logging.getLogger(__name__)


def _call_explorer_api(
    profile: NetworkProfile,
    method: str,
    params: Dict[str, Any],
    timeout: float,
    allow_pending: bool = False,
) -> str:
    """
    Call an Etherscan-compatible explorer API and return its ``result`` field.

    Raises:
        VerificationError: If the network has no explorer API, the request fails,
                           or the API reports an error
    """
    if not profile.explorer_api_url:
        raise VerificationError(f"No explorer API known for network '{profile.name}'")

    params = dict(params, module="contract")
    if profile.explorer_api_key:
        params["apikey"] = profile.explorer_api_key

    try:
        if method == "POST":
            response = requests.post(profile.explorer_api_url, data=params, timeout=timeout)
        else:
            response = requests.get(profile.explorer_api_url, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise VerificationError(f"Network error calling {profile.name} explorer: {e}") from e

    # Check for HTTP errors
    if response.status_code != 200:
        raise VerificationError(
            f"{profile.name} explorer request failed with status {response.status_code}"
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise VerificationError(f"{profile.name} explorer returned invalid JSON") from e

    result = payload.get("result")
    # Etherscan reports errors as status "0" with the reason in result
    if str(payload.get("status")) != "1":
        if allow_pending and isinstance(result, str) and result.lower().startswith("pending"):
            return result
        raise VerificationError(
            f"{profile.name} explorer error: {result or payload.get('message')}"
        )

    return result


def verify_contract_source(
    profile: NetworkProfile,
    address: str,
    contract_name: str,
    source_code: str,
    compiler_version: str,
    constructor_arguments: str = "",
    optimization_used: bool = False,
    runs: int = 200,
    timeout: float = 30,
) -> str:
    """
    Submit contract source for verification on the network's explorer.

    Args:
        profile: Network the contract was deployed to
        address: Deployed contract address
        contract_name: Contract name within the source
        source_code: Solidity source (single file)
        compiler_version: Full solc version, e.g. "v0.8.19+commit.7dd6d404"
        constructor_arguments: ABI-encoded constructor args, hex without 0x
        optimization_used: Whether the optimizer was enabled
        runs: Optimizer runs
        timeout: Request timeout in seconds

    Returns:
        Verification GUID, for check_verification_status()

    Raises:
        VerificationError: If the explorer rejects the submission or is unreachable
    """
    guid = _call_explorer_api(
        profile,
        "POST",
        {
            "action": "verifysourcecode",
            "contractaddress": address,
            "sourceCode": source_code,
            "codeformat": "solidity-single-file",
            "contractname": contract_name,
            "compilerversion": compiler_version,
            "optimizationUsed": 1 if optimization_used else 0,
            "runs": runs,
            # Etherscan's spelling
            "constructorArguements": constructor_arguments,
        },
        timeout,
    )
    logger.info("Submitted %s at %s for verification on %s", contract_name, address, profile.name)
    return guid


def check_verification_status(profile: NetworkProfile, guid: str, timeout: float = 30) -> str:
    """
    Check the state of a verification submission.

    Args:
        profile: Network the verification was submitted to
        guid: GUID returned by verify_contract_source()
        timeout: Request timeout in seconds

    Returns:
        Explorer status text, e.g. "Pass - Verified" or "Pending in queue"

    Raises:
        VerificationError: If verification failed or the explorer is unreachable
    """
    return _call_explorer_api(
        profile,
        "GET",
        {"action": "checkverifystatus", "guid": guid},
        timeout,
        allow_pending=True,
    )
