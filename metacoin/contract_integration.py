"""
Contract Integration Module
Handles interaction with the deployed MetaCoin smart contract
"""

import logging
from typing import Dict, Optional

from eth_account import Account
from eth_utils import to_checksum_address
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from metacoin.artifacts import DeploymentRecord
from metacoin.config import NETWORK_CONFIGS, Settings

logger = logging.getLogger(__name__)


class ContractIntegration:
    def __init__(self, settings: Settings, web3: Optional[AsyncWeb3] = None):
        self.settings = settings
        self.web3 = web3
        self.account = None
        self.network_id = None
        self.contract = None
        self.contract_address = None

    async def connect(self):
        """Connect to the node and load the signing account"""
        try:
            if self.web3 is None:
                self.web3 = AsyncWeb3(AsyncHTTPProvider(self.settings.rpc_url))
            if not await self.web3.is_connected():
                raise ConnectionError(f"Failed to connect to {self.settings.network} at {self.settings.rpc_url}")

            self.account = Account.from_key(self.settings.private_key)
            self.network_id = await self.web3.eth.chain_id
            expected = NETWORK_CONFIGS[self.settings.network]["chain_id"]
            if self.network_id != expected:
                raise ConnectionError(
                    f"Node at {self.settings.rpc_url} reports chain id {self.network_id}, "
                    f"expected {expected} for {self.settings.network}"
                )

            logger.info(f"Connected to {self.settings.network} (network id: {self.network_id})")
            logger.info(f"Account: {self.account.address}")

        except Exception as e:
            logger.error(f"Failed to connect: {e}")
            raise

    async def initialize(self, record: DeploymentRecord):
        """Connect and bind the contract deployed on the current network"""
        await self.connect()
        try:
            self.contract_address = record.address_for(self.network_id)
            self.contract = self.web3.eth.contract(
                address=self.contract_address,
                abi=record.abi
            )
            logger.info(f"Contract address: {self.contract_address}")

        except Exception as e:
            logger.error(f"Failed to initialize contract integration: {e}")
            raise

    async def sign_and_send(self, tx: Dict) -> Dict:
        """Sign a built transaction, submit it once and wait for its receipt"""
        signed = self.account.sign_transaction(tx)
        tx_hash = await self.web3.eth.send_raw_transaction(signed.raw_transaction)
        logger.info(f"Transaction submitted: {Web3.to_hex(tx_hash)}")

        receipt = await self.web3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self.settings.receipt_timeout
        )
        if receipt["status"] != 1:
            raise RuntimeError(f"Transaction failed: {Web3.to_hex(tx_hash)}")
        return receipt

    async def send_coin(self, recipient: str, amount: int) -> Dict:
        """Transfer amount coins from the local account to recipient"""
        try:
            tx = await self.contract.functions.sendCoin(
                to_checksum_address(recipient), amount
            ).build_transaction({
                "from": self.account.address,
                "nonce": await self.web3.eth.get_transaction_count(self.account.address),
                "chainId": self.network_id
            })

            receipt = await self.sign_and_send(tx)
            logger.info(f"Sent {amount} coins to {recipient} in block {receipt['blockNumber']}")
            return receipt

        except Exception as e:
            logger.error(f"Failed to send coins: {e}")
            raise

    async def get_balance(self, address: str) -> int:
        """Get coin balance of an address"""
        try:
            return await self.contract.functions.getBalance(
                to_checksum_address(address)
            ).call()
        except Exception as e:
            logger.error(f"Failed to get balance: {e}")
            raise

    async def get_balance_in_eth(self, address: str) -> int:
        """Get coin balance of an address converted to ETH"""
        try:
            return await self.contract.functions.getBalanceInEth(
                to_checksum_address(address)
            ).call()
        except Exception as e:
            logger.error(f"Failed to get balance in ETH: {e}")
            raise

    def get_explorer_url(self, tx_hash: str) -> Optional[str]:
        """Get explorer URL for transaction"""
        explorer = self.settings.explorer
        if not explorer:
            return None
        return f"{explorer}/tx/{tx_hash}"
