"""
multichain-deployments: resolve loosely named chains and deploy a contract to many of them at once
"""

from importlib.metadata import PackageNotFoundError, version

from .catalog import NetworkCatalog, default_catalog, load_catalog
from .config import Settings
from .deployer import CompiledContract, ContractDeployer, Web3ContractDeployer
from .exceptions import (
    CatalogError,
    CatalogNotFoundError,
    ContractDeploymentError,
    DefectiveCatalogEntryError,
    MultichainDeploymentError,
    RequestValidationError,
    VerificationError,
)
from .orchestrator import DeploymentOrchestrator
from .resolver import NetworkResolver
from .types import (
    DeploymentFailure,
    DeploymentOutcome,
    DeploymentRequest,
    DeploymentSuccess,
    DeployReceipt,
    NetworkCatalogEntry,
    NetworkProfile,
)

try:
    __version__ = version("multichain-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentOrchestrator",
    "NetworkResolver",
    "NetworkCatalog",
    "load_catalog",
    "default_catalog",
    "Settings",
    "ContractDeployer",
    "CompiledContract",
    "Web3ContractDeployer",
    "DeploymentRequest",
    "DeploymentOutcome",
    "DeploymentSuccess",
    "DeploymentFailure",
    "DeployReceipt",
    "NetworkCatalogEntry",
    "NetworkProfile",
    "MultichainDeploymentError",
    "CatalogError",
    "CatalogNotFoundError",
    "DefectiveCatalogEntryError",
    "RequestValidationError",
    "ContractDeploymentError",
    "VerificationError",
]
