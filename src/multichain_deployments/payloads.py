"""JSON request and response payloads for multichain-deployments library."""

from typing import Any, Dict, List, Mapping, Sequence

from .exceptions import RequestValidationError
from .types import (
    ConstructorArg,
    DeploymentFailure,
    DeploymentOutcome,
    DeploymentRequest,
    DeploymentSuccess,
    NetworkProfile,
)


def parse_deployment_request(body: Mapping[str, Any]) -> DeploymentRequest:
    """
    Build a DeploymentRequest from an inbound JSON body.

    Expected shape::

        {"name": str, "chains": [str], "sourceCode": str,
         "constructorArgs": [str | [str]]}   # constructorArgs optional

    Args:
        body: Decoded JSON object

    Returns:
        DeploymentRequest

    Raises:
        RequestValidationError: If required fields are missing or ill-typed
    """
    if not isinstance(body, Mapping):
        raise RequestValidationError("Request body must be a JSON object")

    name = body.get("name")
    if not isinstance(name, str) or not name.strip():
        raise RequestValidationError("Field 'name' is required")

    source_code = body.get("sourceCode")
    if not isinstance(source_code, str) or not source_code.strip():
        raise RequestValidationError("Field 'sourceCode' is required")

    chains = body.get("chains")
    if chains is None:
        chains = []
    if not isinstance(chains, list) or not all(isinstance(c, str) for c in chains):
        raise RequestValidationError("Field 'chains' must be a list of strings")

    raw_args = body.get("constructorArgs")
    if raw_args is None:
        raw_args = []
    if not isinstance(raw_args, list):
        raise RequestValidationError("Field 'constructorArgs' must be a list")

    constructor_args: List[ConstructorArg] = []
    for arg in raw_args:
        if isinstance(arg, str):
            constructor_args.append(arg)
        elif isinstance(arg, list) and all(isinstance(item, str) for item in arg):
            constructor_args.append(list(arg))
        else:
            raise RequestValidationError(
                f"Constructor argument must be a string or a list of strings, got {arg!r}"
            )

    return DeploymentRequest(
        contract_name=name,
        source_code=source_code,
        constructor_args=constructor_args,
        chain_references=list(chains),
    )


def network_to_dict(network: NetworkProfile) -> Dict[str, Any]:
    """Public view of a network profile. The RPC URL is left out since it can embed secrets."""
    return {
        "id": network.id,
        "name": network.name,
        "nativeCurrency": {
            "name": network.native_currency.name,
            "symbol": network.native_currency.symbol,
            "decimals": network.native_currency.decimals,
        },
        "explorerUrl": network.explorer_url,
    }


def outcome_to_dict(outcome: DeploymentOutcome) -> Dict[str, Any]:
    """
    Serialize one deployment outcome.

    Args:
        outcome: DeploymentSuccess or DeploymentFailure

    Returns:
        JSON-ready dictionary with a "status" of "success" or "failure"
    """
    if isinstance(outcome, DeploymentSuccess):
        return {
            "status": "success",
            "chain": outcome.chain_reference,
            "network": network_to_dict(outcome.network),
            "address": outcome.address,
            "transactionHash": outcome.transaction_hash,
            "explorerLink": outcome.explorer_link,
        }

    if isinstance(outcome, DeploymentFailure):
        return {
            "status": "failure",
            "chain": outcome.chain_reference,
            "network": network_to_dict(outcome.network) if outcome.network else None,
            "reason": outcome.reason,
        }

    raise TypeError(f"Not a deployment outcome: {outcome!r}")


def outcomes_to_response(outcomes: Sequence[DeploymentOutcome]) -> Dict[str, Any]:
    """Response body for a deployment request: {"contracts": [...]} in request order."""
    return {"contracts": [outcome_to_dict(outcome) for outcome in outcomes]}
