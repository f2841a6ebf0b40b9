"""
Sequential scenario runner
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.config import Settings
from core.errors import TransactionReverted
from core.rpc_client import RpcClient
from core.signers import Signer, resolve_roles
from engine.scenarios import Scenario, ScenarioContext, select_scenarios
from onchain.token import ERC20_ABI, ERC20_BURN0_ABI, Erc20Precompile

logger = logging.getLogger(__name__)


@dataclass
class ScenarioResult:
    """Outcome of one scenario"""
    scenario: Scenario
    passed: bool
    duration: float
    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging"""
        result = {
            'scenario': self.scenario.full_name,
            'passed': self.passed,
            'duration': round(self.duration, 3),
        }
        if self.error_message:
            result['error_message'] = self.error_message
        return result


class ScenarioRunner:
    """Runs acceptance scenarios one after another against a node"""

    def __init__(self, client: RpcClient, settings: Settings, signers: List[Signer]):
        self.client = client
        self.settings = settings
        self.roles = resolve_roles(signers, settings.roles)

    def build_context(self) -> ScenarioContext:
        """Fresh handles for each scenario, both bound to the owner"""
        owner = self.roles['owner']
        address = self.settings.precompile_address
        return ScenarioContext(
            client=self.client,
            execution=self.settings.execution,
            erc20=Erc20Precompile(owner, abi=ERC20_ABI, address=address, client=self.client),
            erc20_burn0=Erc20Precompile(owner, abi=ERC20_BURN0_ABI, address=address, client=self.client),
            owner=owner,
            user1=self.roles['user1'],
            user2=self.roles['user2'],
        )

    def run_one(self, scenario: Scenario) -> ScenarioResult:
        """
        Run a single scenario

        Assertion failures and unexpected reverts fail the scenario. Any
        other error (transport, RPC, timeout) is fatal and propagates.
        """
        logger.info(f"Running {scenario.full_name}")
        start = time.time()
        try:
            scenario.run(self.build_context())
        except (AssertionError, TransactionReverted) as e:
            duration = time.time() - start
            logger.error(f"FAILED {scenario.full_name}: {e}")
            return ScenarioResult(scenario, passed=False, duration=duration, error_message=str(e))
        except Exception as e:
            logger.error(f"Aborting run, {scenario.full_name} hit a fatal error: {e}")
            raise

        duration = time.time() - start
        logger.info(f"passed {scenario.full_name} ({duration:.1f}s)")
        return ScenarioResult(scenario, passed=True, duration=duration)

    def run(self, pattern: str = "") -> List[ScenarioResult]:
        scenarios = select_scenarios(pattern)
        if not scenarios:
            logger.warning(f"No scenarios match {pattern!r}")
        return [self.run_one(s) for s in scenarios]


def summarize(results: List[ScenarioResult]) -> bool:
    """Log a summary; returns True when every scenario passed"""
    passed = [r for r in results if r.passed]
    failed = [r for r in results if not r.passed]

    logger.info(f"{len(passed)} passed, {len(failed)} failed")
    for r in failed:
        logger.error(f"  {r.scenario.full_name}: {r.error_message}")
    return not failed
