"""
MetaCoin Interaction Script
Reads a balance, sends coins once, and reads the balance again
"""

import asyncio
import logging
import os
import sys
from typing import Dict, List, Optional, Tuple

from web3 import AsyncWeb3, Web3

from metacoin.artifacts import DeploymentRecord, artifact_path
from metacoin.config import Settings, configure_logging
from metacoin.contract_integration import ContractIntegration
from metacoin.deployer import CONTRACT_NAME

logger = logging.getLogger(__name__)


async def run(settings: Settings, web3: Optional[AsyncWeb3] = None) -> Tuple[int, Dict, int]:
    path = artifact_path(settings.artifacts_dir, CONTRACT_NAME)
    if os.path.exists(path):
        record = DeploymentRecord.load(path)
    else:
        # never deployed anywhere; the lookup below reports the network id
        record = DeploymentRecord(CONTRACT_NAME, [], "")

    integration = ContractIntegration(settings, web3)
    await integration.initialize(record)
    account = integration.account.address

    before = await integration.get_balance(account)
    print(f"Balance before: {before}")

    receipt = await integration.send_coin(settings.recipient, settings.transfer_amount)
    print(Web3.to_json(receipt))

    after = await integration.get_balance(account)
    print(f"Balance after: {after}")

    explorer_url = integration.get_explorer_url(Web3.to_hex(receipt["transactionHash"]))
    if explorer_url:
        logger.info(f"Explorer URL: {explorer_url}")
    return before, receipt, after


async def main(argv: Optional[List[str]] = None):
    """Run the interaction against the network named on the command line (or NETWORK)"""
    argv = sys.argv[1:] if argv is None else argv
    configure_logging()
    settings = Settings.from_env(argv[0] if argv else None)
    await run(settings)


def cli():
    asyncio.run(main())


if __name__ == "__main__":
    cli()
