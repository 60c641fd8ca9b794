"""Contract deployer interface and web3 implementation."""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import TimeExhausted

from .exceptions import ContractDeploymentError
from .types import ConstructorArg, DeployReceipt, NetworkProfile

logger = logging.getLogger(__name__)


class ContractDeployer(Protocol):
    """Compiles, signs, broadcasts and confirms a contract deployment on one network."""

    def deploy(
        self,
        contract_name: str,
        network: NetworkProfile,
        source_code: str,
        constructor_args: Sequence[ConstructorArg],
        *,
        timeout: Optional[float] = None,
    ) -> DeployReceipt:
        """
        Deploy a contract.

        Must return within ``timeout`` seconds or raise. Any exception is
        reported as a failure for this network only.
        """
        ...


@dataclass(frozen=True)
class CompiledContract:
    """Compiler output needed to deploy a contract."""

    abi: List[Dict[str, Any]]
    bytecode: str


# (source_code, contract_name) -> CompiledContract
CompileFunction = Callable[[str, str], CompiledContract]


class Web3ContractDeployer:
    """ContractDeployer that sends a signed creation transaction over JSON-RPC."""

    def __init__(
        self,
        account: LocalAccount,
        compile_contract: CompileFunction,
        receipt_timeout: float = 120.0,
        request_timeout: float = 30.0,
    ):
        """
        Initialize the deployer.

        Args:
            account: Funded account that signs deployments
            compile_contract: Turns (source_code, contract_name) into ABI and bytecode
            receipt_timeout: Seconds to wait for the receipt when no deadline is given
            request_timeout: Seconds per JSON-RPC request
        """
        self._account = account
        self._compile = compile_contract
        self._receipt_timeout = receipt_timeout
        self._request_timeout = request_timeout
        # chain id -> lock held from nonce read until the transaction is sent
        self._nonce_locks: Dict[int, threading.Lock] = {}
        self._nonce_locks_guard = threading.Lock()

    def _nonce_lock(self, chain_id: int) -> threading.Lock:
        with self._nonce_locks_guard:
            return self._nonce_locks.setdefault(chain_id, threading.Lock())

    def _web3(self, network: NetworkProfile) -> Web3:
        return Web3(
            Web3.HTTPProvider(network.rpc_url, request_kwargs={"timeout": self._request_timeout})
        )

    def deploy(
        self,
        contract_name: str,
        network: NetworkProfile,
        source_code: str,
        constructor_args: Sequence[ConstructorArg],
        *,
        timeout: Optional[float] = None,
    ) -> DeployReceipt:
        """
        Deploy a contract and wait for its creation receipt.

        Args:
            contract_name: Contract to deploy from the source
            network: Resolved target network
            source_code: Solidity source
            constructor_args: Constructor arguments, in order
            timeout: Seconds to wait for the receipt

        Returns:
            DeployReceipt with the contract address and transaction hash

        Raises:
            ContractDeploymentError: If compilation fails, the receipt does not
                                     arrive in time, or the deployment reverts
        """
        try:
            compiled = self._compile(source_code, contract_name)
        except Exception as e:
            raise ContractDeploymentError(f"Compilation of {contract_name} failed: {e}") from e

        web3 = self._web3(network)
        contract = web3.eth.contract(abi=compiled.abi, bytecode=compiled.bytecode)

        # Concurrent deployments to one chain share the account nonce sequence
        with self._nonce_lock(network.id):
            transaction = contract.constructor(*constructor_args).build_transaction(
                {
                    "from": self._account.address,
                    "nonce": web3.eth.get_transaction_count(self._account.address, "pending"),
                    "chainId": network.id,
                }
            )
            signed = self._account.sign_transaction(transaction)
            tx_hash = web3.eth.send_raw_transaction(signed.raw_transaction)
        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info("Sent %s deployment to %s: %s", contract_name, network.name, tx_hash_hex)

        wait_timeout = timeout if timeout is not None else self._receipt_timeout
        try:
            receipt = web3.eth.wait_for_transaction_receipt(tx_hash, timeout=wait_timeout)
        except TimeExhausted as e:
            raise ContractDeploymentError(
                f"No receipt for {tx_hash_hex} on {network.name} after {wait_timeout:.0f}s"
            ) from e

        if receipt["status"] != 1:
            raise ContractDeploymentError(
                f"Deployment transaction {tx_hash_hex} reverted on {network.name}"
            )

        address = receipt["contractAddress"]
        if not address:
            raise ContractDeploymentError(
                f"Receipt for {tx_hash_hex} on {network.name} has no contract address"
            )

        return DeployReceipt(address=address, transaction_hash=tx_hash_hex)
