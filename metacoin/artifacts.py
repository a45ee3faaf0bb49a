"""
Deployment Record Module
Reads and writes the per-network contract artifact produced at deploy time
"""

import json
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional

from eth_utils import to_checksum_address

logger = logging.getLogger(__name__)


class DeploymentNotFoundError(LookupError):
    """Raised when the artifact has no address for the connected network"""

    def __init__(self, contract_name: str, network_id: int):
        self.contract_name = contract_name
        self.network_id = network_id
        super().__init__(
            f"{contract_name} has not been deployed to detected network (network id: {network_id})"
        )


def artifact_path(artifacts_dir: str, contract_name: str) -> str:
    return os.path.join(artifacts_dir, f"{contract_name}.json")


class DeploymentRecord:
    def __init__(self, contract_name: str, abi: List[Dict], bytecode: str,
                 networks: Optional[Dict[str, Dict]] = None):
        self.contract_name = contract_name
        self.abi = abi
        self.bytecode = bytecode
        self.networks = networks or {}

    def address_for(self, network_id: int) -> str:
        """Return the deployed address for a network id"""
        entry = self.networks.get(str(network_id))
        if not entry or not entry.get("address"):
            raise DeploymentNotFoundError(self.contract_name, network_id)
        return to_checksum_address(entry["address"])

    def record_deployment(self, network_id: int, address: str, tx_hash: str):
        """Store (or replace) the address deployed on a network"""
        self.networks[str(network_id)] = {
            "address": to_checksum_address(address),
            "transactionHash": tx_hash
        }
        logger.info(f"Recorded {self.contract_name} at {address} for network {network_id}")

    def to_dict(self) -> Dict:
        return {
            "contractName": self.contract_name,
            "abi": self.abi,
            "bytecode": self.bytecode,
            "networks": self.networks,
            "updatedAt": datetime.now().isoformat()
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "DeploymentRecord":
        return cls(
            contract_name=data["contractName"],
            abi=data["abi"],
            bytecode=data.get("bytecode", ""),
            networks=data.get("networks", {})
        )

    @classmethod
    def load(cls, path: str) -> "DeploymentRecord":
        """Load a deployment record from a JSON artifact"""
        with open(path, 'r') as f:
            record = cls.from_dict(json.load(f))
        logger.debug(f"Loaded {record.contract_name} artifact from {path}")
        return record

    def save(self, path: str):
        """Write the deployment record to a JSON artifact"""
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved {self.contract_name} artifact to {path}")
