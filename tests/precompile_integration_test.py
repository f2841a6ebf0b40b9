"""
Acceptance scenarios against a live node.

Needs EVM_RPC_URL (and optionally SIGNER_PRIVATE_KEYS); skipped otherwise.
The scenarios mutate chain state, and the last one hands ownership to user1,
so run this against a fresh local network.
"""

import os

import pytest

from core.config import load_settings
from core.rpc_client import RpcClient
from core.signers import load_signers
from engine.runner import ScenarioRunner
from engine.scenarios import SCENARIOS

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not os.getenv("EVM_RPC_URL"), reason="EVM_RPC_URL not set"),
]


@pytest.fixture(scope="module")
def live_runner() -> ScenarioRunner:
    settings = load_settings(os.getenv("HARNESS_CONFIG", "config.yaml"))
    client = RpcClient(settings.rpc_url, chain_id=settings.chain_id)
    return ScenarioRunner(client, settings, load_signers(client, settings.private_keys))


@pytest.mark.parametrize("scenario", SCENARIOS, ids=[s.full_name for s in SCENARIOS])
def test_scenario(live_runner, scenario):
    result = live_runner.run_one(scenario)
    assert result.passed, result.error_message
