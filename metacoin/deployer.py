"""
MetaCoin Deployment Driver
Compiles the contract, publishes it and records the address per network
"""

import asyncio
import logging
import os
import sys
from typing import Callable, Dict, List, Optional

from web3 import AsyncWeb3, Web3

from metacoin.artifacts import DeploymentRecord, artifact_path
from metacoin.compiler import compile_contract
from metacoin.config import Settings, configure_logging
from metacoin.contract_integration import ContractIntegration

logger = logging.getLogger(__name__)

CONTRACT_NAME = "MetaCoin"


async def deploy(settings: Settings, web3: Optional[AsyncWeb3] = None,
                 compile_fn: Callable[..., DeploymentRecord] = compile_contract) -> Dict:
    """Deploy MetaCoin to the configured network and persist the record"""
    record = compile_fn(settings.contracts_dir, CONTRACT_NAME, settings.solc_version)

    path = artifact_path(settings.artifacts_dir, CONTRACT_NAME)
    if os.path.exists(path):
        # keep addresses recorded for other networks
        record.networks = DeploymentRecord.load(path).networks

    integration = ContractIntegration(settings, web3)
    await integration.connect()

    factory = integration.web3.eth.contract(abi=record.abi, bytecode=record.bytecode)
    tx = await factory.constructor().build_transaction({
        "from": integration.account.address,
        "nonce": await integration.web3.eth.get_transaction_count(integration.account.address),
        "chainId": integration.network_id
    })

    logger.info(f"Deploying {CONTRACT_NAME} to {settings.network}")
    receipt = await integration.sign_and_send(tx)

    tx_hash = Web3.to_hex(receipt["transactionHash"])
    record.record_deployment(integration.network_id, receipt["contractAddress"], tx_hash)
    record.save(path)

    print(f"{CONTRACT_NAME} deployed at {receipt['contractAddress']}")
    explorer_url = integration.get_explorer_url(tx_hash)
    if explorer_url:
        print(f"Explorer URL: {explorer_url}")
    return receipt


async def main(argv: Optional[List[str]] = None):
    """Deploy to the network named on the command line (or NETWORK)"""
    argv = sys.argv[1:] if argv is None else argv
    configure_logging()
    settings = Settings.from_env(argv[0] if argv else None)
    await deploy(settings)


def cli():
    asyncio.run(main())


if __name__ == "__main__":
    cli()
