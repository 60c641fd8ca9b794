"""Data types and dataclasses for multichain-deployments library."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

# A constructor argument is a scalar string or a tuple/array of strings
ConstructorArg = Union[str, Sequence[str]]


@dataclass(frozen=True)
class NativeCurrency:
    """Native gas token of a network."""

    name: str
    symbol: str
    decimals: int


@dataclass(frozen=True)
class Explorer:
    """Block explorer listed for a network."""

    name: str
    url: str


@dataclass(frozen=True)
class NetworkCatalogEntry:
    """A network as listed in the static catalog."""

    name: str  # Unique within the catalog, e.g. "Arbitrum One"
    chain_id: int
    native_currency: NativeCurrency
    rpc: Tuple[str, ...]  # URL templates, may contain ${VAR} placeholders
    explorers: Tuple[Explorer, ...] = ()  # First entry is the primary explorer


@dataclass(frozen=True)
class NetworkProfile:
    """Ready-to-use network descriptor produced by the resolver."""

    id: int  # Chain ID
    name: str
    native_currency: NativeCurrency
    rpc_url: str  # Placeholders substituted; may embed secrets
    explorer_url: Optional[str] = None
    explorer_name: Optional[str] = None
    explorer_api_url: Optional[str] = None
    explorer_api_key: Optional[str] = field(default=None, repr=False)

    def address_url(self, address: str) -> Optional[str]:
        """Explorer page for an address, or None if the network has no explorer."""
        if self.explorer_url:
            return f"{self.explorer_url.rstrip('/')}/address/{address}"
        return None

    def tx_url(self, tx_hash: str) -> Optional[str]:
        """Explorer page for a transaction, or None if the network has no explorer."""
        if self.explorer_url:
            return f"{self.explorer_url.rstrip('/')}/tx/{tx_hash}"
        return None


@dataclass(frozen=True)
class DeploymentRequest:
    """A contract to deploy and the chains to deploy it to."""

    contract_name: str
    source_code: str
    constructor_args: List[ConstructorArg] = field(default_factory=list)
    chain_references: List[str] = field(default_factory=list)  # Order defines output order


@dataclass(frozen=True)
class DeployReceipt:
    """What a deployer returns for a confirmed deployment."""

    address: str
    transaction_hash: str


@dataclass(frozen=True)
class DeploymentSuccess:
    """Contract deployed on one chain."""

    chain_reference: str
    network: NetworkProfile
    address: str
    transaction_hash: str
    explorer_link: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return True


@dataclass(frozen=True)
class DeploymentFailure:
    """Deployment attempt on one chain that did not succeed."""

    chain_reference: str
    reason: str
    network: Optional[NetworkProfile] = None  # None if resolution itself failed

    @property
    def succeeded(self) -> bool:
        return False


DeploymentOutcome = Union[DeploymentSuccess, DeploymentFailure]
