#!/usr/bin/env python3
"""
ERC20 Precompile Acceptance Runner

Drives the ERC20 precompile exposed by an EVM node through JSON-RPC and
checks minting, burning, allowance and ownership-transfer behaviour.
"""

import logging
import sys

from core.config import load_settings
from core.rpc_client import configure_client
from core.signers import load_signers
from engine.runner import ScenarioRunner, summarize
from engine.scenarios import select_scenarios

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
log = logging.getLogger("erc20_precompile")


def main(argv=None) -> int:
    import argparse

    p = argparse.ArgumentParser(description="Run ERC20 precompile acceptance scenarios")
    p.add_argument("-c", "--config", default="config.yaml")
    p.add_argument("-k", "--filter", default="", help="only run scenarios whose group/title contains this")
    p.add_argument("--list", action="store_true", help="list scenarios and exit")
    p.add_argument("--no-delay", action="store_true", help="skip the fixed delay after each submission")
    a = p.parse_args(argv)

    if a.list:
        for s in select_scenarios(a.filter):
            print(s.full_name)
        return 0

    settings = load_settings(a.config)
    if a.no_delay:
        settings.execution.post_submit_delay = 0

    client = configure_client(settings.rpc_url, chain_id=settings.chain_id)
    log.info(f"connected to {settings.rpc_url} (chain {client.chain_id()})")

    signers = load_signers(client, settings.private_keys)
    runner = ScenarioRunner(client, settings, signers)

    results = runner.run(a.filter)
    return 0 if summarize(results) else 1


if __name__ == "__main__":
    sys.exit(main())
