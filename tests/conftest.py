import asyncio

import pytest
from eth_account import Account
from eth_utils import to_checksum_address
from web3 import Web3
from web3.datastructures import AttributeDict

from metacoin.artifacts import DeploymentRecord
from metacoin.config import Settings

# Well-known local development key; never funded on a public network
TEST_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ACCOUNT = Account.from_key(TEST_KEY).address
RECIPIENT = "0x8f2a55949038a9610f50fb23b5883af3b4ecb3c3"
TOKEN_ADDRESS = to_checksum_address("0x" + "ab" * 20)

METACOIN_ABI = [
    {
        "inputs": [
            {"internalType": "address", "name": "receiver", "type": "address"},
            {"internalType": "uint256", "name": "amount", "type": "uint256"}
        ],
        "name": "sendCoin",
        "outputs": [{"internalType": "bool", "name": "sufficient", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "address", "name": "addr", "type": "address"}],
        "name": "getBalance",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    }
]


async def _value(value):
    return value


class FakeCall:
    def __init__(self, chain, on_call=None, on_build=None):
        self.chain = chain
        self.on_call = on_call
        self.on_build = on_build

    async def call(self):
        return self.on_call()

    async def build_transaction(self, tx):
        action, fields = self.on_build()
        self.chain.pending.append((tx["from"], action))
        built = {
            "from": tx["from"],
            "nonce": tx["nonce"],
            "chainId": tx["chainId"],
            "value": 0,
            "gas": 200000,
            "gasPrice": 1000000000
        }
        built.update(fields)
        return built


class FakeFunctions:
    def __init__(self, chain, address):
        self.chain = chain
        self.address = address

    def getBalance(self, addr):
        def on_call():
            self.chain.calls.append(("getBalance", addr))
            return self.chain.contracts[self.address].get(addr, 0)
        return FakeCall(self.chain, on_call=on_call)

    def getBalanceInEth(self, addr):
        def on_call():
            self.chain.calls.append(("getBalanceInEth", addr))
            return self.chain.contracts[self.address].get(addr, 0) * 2
        return FakeCall(self.chain, on_call=on_call)

    def sendCoin(self, receiver, amount):
        def transfer(sender):
            balances = self.chain.contracts[self.address]
            if balances.get(sender, 0) < amount:
                return None
            balances[sender] -= amount
            balances[receiver] = balances.get(receiver, 0) + amount
            return None

        def on_build():
            self.chain.calls.append(("sendCoin", receiver, amount))
            return transfer, {"to": self.address, "data": "0x90b98a11"}
        return FakeCall(self.chain, on_build=on_build)


class FakeContract:
    def __init__(self, chain, address):
        self.address = address
        self.functions = FakeFunctions(chain, address)


class FakeFactory:
    def __init__(self, chain, bytecode):
        self.chain = chain
        self.bytecode = bytecode

    def constructor(self):
        def create(sender):
            address = self.chain.next_contract_address
            self.chain.contracts[address] = {sender: 10000}
            return address

        def on_build():
            self.chain.calls.append(("constructor",))
            return create, {"data": self.bytecode}
        return FakeCall(self.chain, on_build=on_build)


class FakeEth:
    def __init__(self, chain):
        self.chain = chain

    @property
    def chain_id(self):
        return _value(self.chain.chain_id)

    async def get_transaction_count(self, address):
        return self.chain.nonces.get(address, 0)

    def contract(self, address=None, abi=None, bytecode=None):
        if address is None:
            return FakeFactory(self.chain, bytecode)
        return FakeContract(self.chain, address)

    async def send_raw_transaction(self, raw):
        self.chain.submissions += 1
        sender, action = self.chain.pending.pop(0)
        self.chain.nonces[sender] = self.chain.nonces.get(sender, 0) + 1
        tx_hash = Web3.keccak(raw)
        self.chain.results[tx_hash] = action(sender)
        return tx_hash

    async def wait_for_transaction_receipt(self, tx_hash, timeout=120):
        self.chain.receipt_waits += 1
        if self.chain.receipt_error:
            raise self.chain.receipt_error
        if self.chain.latency:
            await asyncio.sleep(self.chain.latency)
        self.chain.block_number += 1
        return AttributeDict({
            "transactionHash": tx_hash,
            "blockNumber": self.chain.block_number,
            "contractAddress": self.chain.results.get(tx_hash),
            "gasUsed": 21000,
            "status": self.chain.receipt_status
        })


class FakeChain:
    """In-memory stand-in for an AsyncWeb3 client talking to a MetaCoin node"""

    def __init__(self, chain_id=1337):
        self.chain_id = chain_id
        self.connected = True
        self.receipt_status = 1
        self.latency = 0
        self.receipt_error = None
        self.contracts = {}
        self.nonces = {}
        self.pending = []
        self.results = {}
        self.calls = []
        self.submissions = 0
        self.receipt_waits = 0
        self.block_number = 0
        self.next_contract_address = TOKEN_ADDRESS
        self.eth = FakeEth(self)

    async def is_connected(self):
        return self.connected


@pytest.fixture
def chain():
    return FakeChain()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        network="development",
        rpc_url="http://127.0.0.1:8545",
        private_key=TEST_KEY,
        recipient=RECIPIENT,
        artifacts_dir=str(tmp_path / "build"),
        contracts_dir=str(tmp_path / "contracts")
    )


@pytest.fixture
def metacoin_record():
    return DeploymentRecord("MetaCoin", METACOIN_ABI, "0x6080")
