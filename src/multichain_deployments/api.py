"""HTTP endpoint for multichain contract deployment."""

import logging
from typing import List, Optional, Union

from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .deployer import ContractDeployer
from .exceptions import RequestValidationError
from .orchestrator import DeploymentOrchestrator
from .payloads import outcomes_to_response, parse_deployment_request

logger = logging.getLogger(__name__)

DEPLOY_CONTRACT_PATH = "/api/deploy-contract"


class DeployContractBody(BaseModel):
    """Inbound JSON body. Presence of name and sourceCode is checked by the payload parser."""

    name: Optional[str] = None
    chains: Optional[List[str]] = None
    sourceCode: Optional[str] = None
    constructorArgs: Optional[List[Union[str, List[str]]]] = None


def create_app(
    deployer: ContractDeployer, orchestrator: Optional[DeploymentOrchestrator] = None
) -> FastAPI:
    """
    Create the deployment API application.

    Args:
        deployer: Deployer used for every request
        orchestrator: Orchestrator to use (defaults to one built from the environment)

    Returns:
        FastAPI: Configured application
    """
    if orchestrator is None:
        orchestrator = DeploymentOrchestrator()

    app = FastAPI(title="Multichain Deployments API")

    # Plain def: FastAPI runs it in a worker thread, the orchestrator blocks on its pool
    @app.post(DEPLOY_CONTRACT_PATH)
    def deploy_contract(body: DeployContractBody):
        try:
            request = parse_deployment_request(body.model_dump())
            outcomes = orchestrator.deploy(request, deployer)
        except RequestValidationError as e:
            logger.info("Rejected deployment request: %s", e)
            return JSONResponse(status_code=400, content={"error": str(e)})

        return outcomes_to_response(outcomes)

    @app.options(DEPLOY_CONTRACT_PATH)
    def deploy_contract_preflight() -> Response:
        return Response(status_code=200)

    return app
