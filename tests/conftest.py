"""Shared pytest fixtures for multichain-deployments tests."""

import pytest
from helpers import RecordingDeployer, make_record

from multichain_deployments.catalog import NetworkCatalog, default_catalog, parse_catalog
from multichain_deployments.config import Settings
from multichain_deployments.orchestrator import DeploymentOrchestrator
from multichain_deployments.resolver import NetworkResolver


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the test environment."""
    return Settings(
        rpc_secrets={"INFURA_API_KEY": "test-infura-key"},
        explorer_api_keys={"Ethereum": "test-etherscan-key"},
        deploy_timeout=10.0,
    )


@pytest.fixture
def catalog() -> NetworkCatalog:
    """The catalog bundled with the package."""
    return default_catalog()


@pytest.fixture
def small_catalog() -> NetworkCatalog:
    """Three-network catalog with two names equidistant from 'Chain AX'."""
    return parse_catalog(
        [
            make_record("Mantle Testnet", 5001),
            make_record("Chain AB", 101),
            make_record("Chain AC", 102),
        ]
    )


@pytest.fixture
def resolver(catalog: NetworkCatalog, settings: Settings) -> NetworkResolver:
    return NetworkResolver(catalog=catalog, settings=settings)


@pytest.fixture
def deployer() -> RecordingDeployer:
    return RecordingDeployer()


@pytest.fixture
def orchestrator(resolver: NetworkResolver, settings: Settings) -> DeploymentOrchestrator:
    return DeploymentOrchestrator(resolver=resolver, settings=settings)


@pytest.fixture
def source_code() -> str:
    return (
        "// SPDX-License-Identifier: MIT\n"
        "pragma solidity ^0.8.19;\n"
        "contract AppleToken { string public name; constructor(string memory n) { name = n; } }\n"
    )
