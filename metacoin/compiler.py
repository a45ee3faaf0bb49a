"""
Contract Compilation Module
Builds the MetaCoin contract with solc and returns an undeployed record
"""

import logging
import os
from typing import Dict

from solcx import compile_standard, install_solc

from metacoin.artifacts import DeploymentRecord

logger = logging.getLogger(__name__)


def read_sources(contracts_dir: str) -> Dict[str, Dict]:
    """Collect every .sol file under contracts_dir as standard-json sources"""
    sources = {}
    for name in sorted(os.listdir(contracts_dir)):
        if name.endswith(".sol"):
            with open(os.path.join(contracts_dir, name), 'r') as f:
                sources[name] = {"content": f.read()}
    if not sources:
        raise FileNotFoundError(f"No Solidity sources found in {contracts_dir}")
    return sources


def build_input(sources: Dict[str, Dict]) -> Dict:
    return {
        "language": "Solidity",
        "sources": sources,
        "settings": {
            "outputSelection": {"*": {"*": ["abi", "evm.bytecode"]}}
        }
    }


def compile_contract(contracts_dir: str, contract_name: str = "MetaCoin",
                     solc_version: str = "0.8.20") -> DeploymentRecord:
    """Compile contract_name and return its ABI and bytecode"""
    sources = read_sources(contracts_dir)

    install_solc(solc_version)
    logger.info(f"Compiling {len(sources)} source(s) with solc {solc_version}")
    compiled = compile_standard(
        build_input(sources),
        solc_version=solc_version,
        allow_paths=os.path.abspath(contracts_dir)
    )

    for contracts in compiled.get("contracts", {}).values():
        if contract_name in contracts:
            interface = contracts[contract_name]
            return DeploymentRecord(
                contract_name=contract_name,
                abi=interface["abi"],
                bytecode="0x" + interface["evm"]["bytecode"]["object"]
            )

    raise KeyError(f"Contract {contract_name} not found in compiler output")
