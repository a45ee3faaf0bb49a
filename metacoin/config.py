"""
Configuration Module
Network table, environment settings and logging setup shared by both scripts
"""

import logging
import os
from typing import Dict, Optional

from dotenv import load_dotenv
from eth_utils import is_address, to_checksum_address

# Load environment variables
load_dotenv()

DEFAULT_NETWORK = "development"
DEFAULT_RECIPIENT = "0x8f2a55949038a9610f50fb23b5883af3b4ecb3c3"
DEFAULT_TRANSFER_AMOUNT = 100

# Network configurations
NETWORK_CONFIGS: Dict[str, Dict] = {
    "development": {
        "rpc": os.getenv("DEVELOPMENT_RPC", "http://127.0.0.1:8545"),
        "explorer": None,
        "chain_id": int(os.getenv("DEVELOPMENT_CHAIN_ID", 1337))
    },
    "sepolia": {
        "rpc": os.getenv("SEPOLIA_RPC", "https://rpc.sepolia.org"),
        "explorer": "https://sepolia.etherscan.io",
        "chain_id": 11155111
    },
    "holesky": {
        "rpc": os.getenv("HOLESKY_RPC", "https://ethereum-holesky-rpc.publicnode.com"),
        "explorer": "https://holesky.etherscan.io",
        "chain_id": 17000
    }
}


class Settings:
    def __init__(self, network: str, rpc_url: str, private_key: str,
                 recipient: str = DEFAULT_RECIPIENT,
                 transfer_amount: int = DEFAULT_TRANSFER_AMOUNT,
                 artifacts_dir: str = "build/contracts",
                 contracts_dir: str = "contracts",
                 solc_version: str = "0.8.20",
                 receipt_timeout: float = 120):
        if network not in NETWORK_CONFIGS:
            raise ValueError(f"Unsupported network: {network}")
        if not private_key:
            raise ValueError("PRIVATE_KEY is not set")
        if not is_address(recipient):
            raise ValueError(f"Invalid recipient address: {recipient}")
        if transfer_amount <= 0:
            raise ValueError(f"Transfer amount must be positive, got {transfer_amount}")

        self.network = network
        self.rpc_url = rpc_url
        self.private_key = private_key
        self.recipient = to_checksum_address(recipient)
        self.transfer_amount = transfer_amount
        self.artifacts_dir = artifacts_dir
        self.contracts_dir = contracts_dir
        self.solc_version = solc_version
        self.receipt_timeout = receipt_timeout

    @property
    def explorer(self) -> Optional[str]:
        return NETWORK_CONFIGS[self.network]["explorer"]

    @classmethod
    def from_env(cls, network: Optional[str] = None) -> "Settings":
        """Build settings from environment variables (and .env)"""
        network = network or os.getenv("NETWORK", DEFAULT_NETWORK)
        if network not in NETWORK_CONFIGS:
            raise ValueError(f"Unsupported network: {network}")

        return cls(
            network=network,
            rpc_url=os.getenv("RPC_URL") or NETWORK_CONFIGS[network]["rpc"],
            private_key=os.getenv("PRIVATE_KEY", ""),
            recipient=os.getenv("RECIPIENT_ADDRESS", DEFAULT_RECIPIENT),
            transfer_amount=int(os.getenv("TRANSFER_AMOUNT", DEFAULT_TRANSFER_AMOUNT)),
            artifacts_dir=os.getenv("ARTIFACTS_DIR", "build/contracts"),
            contracts_dir=os.getenv("CONTRACTS_DIR", "contracts"),
            solc_version=os.getenv("SOLC_VERSION", "0.8.20"),
            receipt_timeout=float(os.getenv("RECEIPT_TIMEOUT", 120))
        )


def configure_logging(level: Optional[str] = None):
    """Configure root logging for the command line scripts"""
    handlers = [logging.StreamHandler()]
    log_file = os.getenv("LOG_FILE")
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
