"""Custom exception classes for multichain-deployments library."""


class MultichainDeploymentError(Exception):
    """Base exception for multichain-deployments errors."""

    pass


class CatalogError(MultichainDeploymentError, ValueError):
    """Raised when the network catalog cannot be used."""

    pass


class CatalogNotFoundError(MultichainDeploymentError, FileNotFoundError):
    """Raised when a network catalog file is not found."""

    pass


class DefectiveCatalogEntryError(CatalogError):
    """Raised when a catalog record is missing required fields."""

    pass


class RequestValidationError(MultichainDeploymentError, ValueError):
    """Raised when a deployment request is rejected before dispatch."""

    pass


class ContractDeploymentError(MultichainDeploymentError, RuntimeError):
    """Raised by a deployer when a single-chain deployment fails."""

    pass


class VerificationError(MultichainDeploymentError, RuntimeError):
    """Raised when an explorer rejects or cannot process a verification request."""

    pass
