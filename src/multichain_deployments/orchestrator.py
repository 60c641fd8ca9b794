"""Multi-chain deployment fan-out for multichain-deployments library."""

import logging
import math
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Dict, List, Optional

from .config import Settings
from .constants import DEADLINE_GRACE
from .deployer import ContractDeployer
from .exceptions import RequestValidationError
from .resolver import NetworkResolver
from .types import (
    DeploymentFailure,
    DeploymentOutcome,
    DeploymentRequest,
    DeploymentSuccess,
    NetworkProfile,
)

logger = logging.getLogger(__name__)


def validate_request(request: DeploymentRequest) -> None:
    """
    Reject requests that must not reach any deployer.

    Args:
        request: Deployment request

    Raises:
        RequestValidationError: If the contract name or source code is missing,
                                or chains / constructor args are malformed
    """
    if not isinstance(request.contract_name, str) or not request.contract_name.strip():
        raise RequestValidationError("Contract name is required")
    if not isinstance(request.source_code, str) or not request.source_code.strip():
        raise RequestValidationError("Contract source code is required")

    if isinstance(request.chain_references, str):
        raise RequestValidationError("Chains must be a list of chain names, not a string")
    for reference in request.chain_references or ():
        if reference is not None and not isinstance(reference, str):
            raise RequestValidationError(f"Chain name must be a string, got {reference!r}")

    for arg in request.constructor_args or ():
        if isinstance(arg, str):
            continue
        if isinstance(arg, (list, tuple)) and all(isinstance(item, str) for item in arg):
            continue
        raise RequestValidationError(
            f"Constructor argument must be a string or a list of strings, got {arg!r}"
        )


def _describe_error(error: BaseException) -> str:
    message = str(error)
    return message if message else type(error).__name__


class DeploymentOrchestrator:
    """Deploys one contract to several chains concurrently."""

    def __init__(
        self,
        resolver: Optional[NetworkResolver] = None,
        deployer: Optional[ContractDeployer] = None,
        settings: Optional[Settings] = None,
        max_workers: Optional[int] = None,
        deploy_timeout: Optional[float] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            resolver: Chain reference resolver (defaults to one over the bundled catalog)
            deployer: Default deployer, used when deploy() is not given one
            settings: Runtime settings (defaults to Settings.from_env())
            max_workers: Upper bound on concurrent deployment attempts
                         (default: one attempt per chain reference at once)
            deploy_timeout: Deadline in seconds for a single attempt
        """
        if settings is None:
            settings = Settings.from_env()
        if resolver is None:
            resolver = NetworkResolver(settings=settings)

        self._resolver = resolver
        self._deployer = deployer
        self._max_workers = max_workers if max_workers is not None else settings.max_workers
        self._deploy_timeout = (
            deploy_timeout if deploy_timeout is not None else settings.deploy_timeout
        )

    @property
    def resolver(self) -> NetworkResolver:
        return self._resolver

    def deploy(
        self, request: DeploymentRequest, deployer: Optional[ContractDeployer] = None
    ) -> List[DeploymentOutcome]:
        """
        Deploy a contract to every chain named in the request.

        Each chain reference gets exactly one outcome, at the same position as
        the reference. Duplicate references are deployed independently. A failed
        attempt becomes a DeploymentFailure and never affects its siblings.

        Args:
            request: Contract, constructor args and chain references
            deployer: Deployer for this call (defaults to the one given at construction)

        Returns:
            List of DeploymentSuccess / DeploymentFailure, in input order

        Raises:
            RequestValidationError: If the request is rejected before dispatch
            ValueError: If no deployer is available
        """
        validate_request(request)

        if deployer is None:
            deployer = self._deployer
        if deployer is None:
            raise ValueError("No contract deployer configured")

        references = list(request.chain_references or [])
        if not references:
            return []

        outcomes: List[Optional[DeploymentOutcome]] = [None] * len(references)
        profiles: List[Optional[NetworkProfile]] = [None] * len(references)

        # Resolution is in-memory; only deployer calls run on the pool
        for index, reference in enumerate(references):
            try:
                profiles[index] = self._resolver.resolve(reference)
            except Exception as e:
                logger.warning("Could not resolve chain '%s': %s", reference, e)
                outcomes[index] = DeploymentFailure(
                    chain_reference=reference or "",
                    reason=f"Could not resolve chain: {_describe_error(e)}",
                )

        pending = [index for index, profile in enumerate(profiles) if profile is not None]
        if pending:
            self._dispatch(request, deployer, references, profiles, pending, outcomes)

        succeeded = sum(1 for outcome in outcomes if isinstance(outcome, DeploymentSuccess))
        logger.info(
            "Deployed %s to %d of %d chains", request.contract_name, succeeded, len(references)
        )
        return outcomes  # type: ignore[return-value]

    def _dispatch(
        self,
        request: DeploymentRequest,
        deployer: ContractDeployer,
        references: List[str],
        profiles: List[Optional[NetworkProfile]],
        pending: List[int],
        outcomes: List[Optional[DeploymentOutcome]],
    ) -> None:
        workers = len(pending)
        if self._max_workers is not None:
            workers = max(1, min(self._max_workers, workers))
        # Only an explicit cap queues attempts behind each other
        waves = math.ceil(len(pending) / workers)
        batch_timeout = self._deploy_timeout * waves + DEADLINE_GRACE

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="deploy")
        futures: Dict[Future, int] = {}
        try:
            for index in pending:
                profile = profiles[index]
                logger.info("Dispatching %s to %s", request.contract_name, profile.name)
                future = executor.submit(
                    self._attempt, deployer, request, references[index], profile
                )
                futures[future] = index

            done, not_done = wait(futures, timeout=batch_timeout)

            for future in done:
                index = futures[future]
                try:
                    outcomes[index] = future.result()
                except BaseException as e:
                    # Raised past _attempt, e.g. SystemExit in a deployer thread
                    logger.warning(
                        "Deployment to %s aborted: %s", profiles[index].name, _describe_error(e)
                    )
                    outcomes[index] = DeploymentFailure(
                        chain_reference=references[index],
                        reason=_describe_error(e),
                        network=profiles[index],
                    )

            for future in not_done:
                future.cancel()
                index = futures[future]
                logger.warning(
                    "Deployment to %s did not finish within %gs",
                    profiles[index].name,
                    batch_timeout,
                )
                outcomes[index] = DeploymentFailure(
                    chain_reference=references[index],
                    reason=f"Deployment timed out after {batch_timeout:g}s",
                    network=profiles[index],
                )
        finally:
            # Do not block on attempts that overran the deadline
            executor.shutdown(wait=False, cancel_futures=True)

    def _attempt(
        self,
        deployer: ContractDeployer,
        request: DeploymentRequest,
        reference: str,
        profile: NetworkProfile,
    ) -> DeploymentOutcome:
        """Run one deployment; every exception is turned into a DeploymentFailure."""
        try:
            receipt = deployer.deploy(
                request.contract_name,
                profile,
                request.source_code,
                list(request.constructor_args or []),
                timeout=self._deploy_timeout,
            )
            return DeploymentSuccess(
                chain_reference=reference,
                network=profile,
                address=receipt.address,
                transaction_hash=receipt.transaction_hash,
                explorer_link=profile.address_url(receipt.address),
            )
        except Exception as e:
            logger.warning("Deployment of %s to %s failed: %s", request.contract_name, profile.name, e)
            logger.debug("Deployment failure details", exc_info=True)
            return DeploymentFailure(
                chain_reference=reference,
                reason=_describe_error(e),
                network=profile,
            )
