import pytest

import core.rpc_client
from core.config import ExecutionSettings, Settings
from core.rpc_client import RpcClient
from core.signers import load_signers
from engine.runner import ScenarioRunner
from fake_node import FakeNode, FakeProvider

FAKE_RPC_URL = "http://fake-node:8545"

ENV_VARS = [
    "EVM_RPC_URL",
    "EVM_CHAIN_ID",
    "SIGNER_PRIVATE_KEYS",
    "POST_SUBMIT_DELAY",
    "CONFIRMATIONS",
    "TX_TIMEOUT",
    "ERC20_PRECOMPILE_ADDRESS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def use_node(monkeypatch):
    """Route every RpcClient created afterwards to the given fake node"""

    def install(node: FakeNode) -> FakeNode:
        monkeypatch.setattr(core.rpc_client, "make_provider", lambda rpc_url: FakeProvider(node))
        return node
    return install


@pytest.fixture
def fake_node(use_node) -> FakeNode:
    return use_node(FakeNode())


@pytest.fixture
def client(fake_node: FakeNode) -> RpcClient:
    return RpcClient(FAKE_RPC_URL)


@pytest.fixture
def execution() -> ExecutionSettings:
    return ExecutionSettings(post_submit_delay=0, confirmations=1, tx_timeout=5, poll_interval=0)


@pytest.fixture
def settings(execution: ExecutionSettings) -> Settings:
    return Settings(rpc_url=FAKE_RPC_URL, execution=execution)


@pytest.fixture
def signers(client: RpcClient):
    return load_signers(client)


@pytest.fixture
def runner(client: RpcClient, settings: Settings, signers) -> ScenarioRunner:
    return ScenarioRunner(client, settings, signers)


@pytest.fixture
def ctx(runner: ScenarioRunner):
    return runner.build_context()
