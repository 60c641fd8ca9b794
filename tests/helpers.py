"""Test helpers shared across multichain-deployments tests."""

import threading
from typing import Any, Dict, List, Optional, Sequence

from multichain_deployments.exceptions import ContractDeploymentError
from multichain_deployments.types import DeployReceipt, NetworkProfile


def make_record(name: str, chain_id: Any, **overrides: Any) -> Dict[str, Any]:
    """Build a chainlist-style catalog record."""
    record: Dict[str, Any] = {
        "name": name,
        "chainId": chain_id,
        "nativeCurrency": {"name": "Ether", "symbol": "ETH", "decimals": 18},
        "rpc": [f"https://rpc.chain{chain_id}.example"],
        "explorers": [{"name": "scan", "url": f"https://scan.chain{chain_id}.example"}],
    }
    record.update(overrides)
    return record


class RecordingDeployer:
    """ContractDeployer test double that records calls and fails on chosen networks."""

    def __init__(self, fail_on: Sequence[str] = (), delays: Optional[Dict[str, float]] = None):
        self.fail_on = set(fail_on)
        self.delays = delays or {}
        self.calls: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def deploy(
        self,
        contract_name: str,
        network: NetworkProfile,
        source_code: str,
        constructor_args: Sequence[Any],
        *,
        timeout: Optional[float] = None,
    ) -> DeployReceipt:
        with self._lock:
            self.calls.append(
                {
                    "contract_name": contract_name,
                    "network": network.name,
                    "source_code": source_code,
                    "constructor_args": list(constructor_args),
                    "timeout": timeout,
                }
            )
            call_number = len(self.calls)

        delay = self.delays.get(network.name)
        if delay:
            threading.Event().wait(delay)

        if network.name in self.fail_on:
            raise ContractDeploymentError(f"insufficient funds on {network.name}")

        return DeployReceipt(
            address=f"0x{network.id:040x}",
            transaction_hash=f"0x{call_number:064x}",
        )
