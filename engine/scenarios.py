"""
Acceptance scenarios for the ERC20 precompile

Each scenario drives the precompile through a ScenarioContext and raises
AssertionError when the observed behaviour differs from the expected one.
Scenarios run sequentially against shared chain state, so amounts are
expressed as deltas against balances read right before the action.
"""

from dataclasses import dataclass
from typing import Callable, List

from core.config import ExecutionSettings
from core.constants import ZERO_ADDRESS, parse_ether
from core.rpc_client import RpcClient
from core.signers import Signer
from engine.helpers import confirm, expect_equal, expect_revert
from onchain.token import Erc20Precompile


@dataclass
class ScenarioContext:
    client: RpcClient
    execution: ExecutionSettings
    erc20: Erc20Precompile
    erc20_burn0: Erc20Precompile
    owner: Signer
    user1: Signer
    user2: Signer


@dataclass
class Scenario:
    group: str
    title: str
    run: Callable[[ScenarioContext], None]

    @property
    def full_name(self) -> str:
        return f"{self.group}/{self.title}"


# mint

def mint_reverts_for_non_owner(ctx: ScenarioContext):
    mint_amount = parse_ether('100')
    as_user1 = ctx.erc20.connect(ctx.user1)

    expect_revert(lambda: as_user1.mint(ctx.user2.address, mint_amount), ctx.execution)


def mint_by_owner_credits_recipient(ctx: ScenarioContext):
    mint_amount = parse_ether('100')
    as_owner = ctx.erc20.connect(ctx.owner)

    initial_balance = ctx.erc20.balance_of(ctx.user2.address)

    receipt = confirm(as_owner.mint(ctx.user2.address, mint_amount), ctx.execution)

    new_balance = ctx.erc20.balance_of(ctx.user2.address)
    expect_equal(new_balance, initial_balance + mint_amount, "user2 balance after mint")

    # Minting shows up as a transfer from the zero address
    transfers = [
        e for e in ctx.erc20.parse_events(receipt)
        if e['event'] == 'Transfer' and e['args']['to'] == ctx.user2.address
    ]
    if not transfers:
        raise AssertionError("mint emitted no Transfer event to the recipient")
    expect_equal(transfers[0]['args']['from'], ZERO_ADDRESS, "mint Transfer sender")
    expect_equal(transfers[0]['args']['value'], mint_amount, "mint Transfer value")


# burn

def burn_from_own_balance(ctx: ScenarioContext):
    mint_amount = parse_ether('100')
    burn_amount = parse_ether('50')

    confirm(ctx.erc20.mint(ctx.owner.address, mint_amount), ctx.execution)

    initial_balance = ctx.erc20.balance_of(ctx.owner.address)

    confirm(ctx.erc20.burn(burn_amount), ctx.execution)

    new_balance = ctx.erc20.balance_of(ctx.owner.address)
    expect_equal(new_balance, initial_balance - burn_amount, "owner balance after burn")


# burn0

def burn0_reverts_for_non_owner(ctx: ScenarioContext):
    burn_amount = parse_ether('10')
    as_user1 = ctx.erc20_burn0.connect(ctx.user1)

    expect_revert(lambda: as_user1.burn(ctx.user2.address, burn_amount), ctx.execution)


def burn0_owner_burns_from_any_account(ctx: ScenarioContext):
    mint_amount = parse_ether('100')
    burn_amount = parse_ether('30')

    confirm(ctx.erc20_burn0.mint(ctx.user1.address, mint_amount), ctx.execution)

    initial_balance = ctx.erc20.balance_of(ctx.user1.address)

    confirm(ctx.erc20_burn0.burn(ctx.user1.address, burn_amount), ctx.execution)

    new_balance = ctx.erc20_burn0.balance_of(ctx.user1.address)
    expect_equal(new_balance, initial_balance - burn_amount, "user1 balance after burn0")


def burn0_reverts_above_balance(ctx: ScenarioContext):
    current_balance = ctx.erc20_burn0.balance_of(ctx.user1.address)
    burn_amount = current_balance + parse_ether('1')

    expect_revert(lambda: ctx.erc20_burn0.burn(ctx.user1.address, burn_amount), ctx.execution)


# burnFrom

def _burn_from_with_allowance(ctx: ScenarioContext, holder: Signer, spender: Signer, mint: str, burn: str):
    mint_amount = parse_ether(mint)
    burn_amount = parse_ether(burn)

    confirm(ctx.erc20.mint(holder.address, mint_amount), ctx.execution)
    confirm(ctx.erc20.connect(holder).approve(spender.address, burn_amount), ctx.execution)

    initial_balance = ctx.erc20.balance_of(holder.address)
    initial_allowance = ctx.erc20.allowance(holder.address, spender.address)

    confirm(ctx.erc20.connect(spender).burn_from(holder.address, burn_amount), ctx.execution)

    new_balance = ctx.erc20.balance_of(holder.address)
    expect_equal(new_balance, initial_balance - burn_amount, f"{holder.label} balance after burnFrom")

    # The precompile does not consume the allowance on burnFrom
    new_allowance = ctx.erc20.allowance(holder.address, spender.address)
    expect_equal(new_allowance, initial_allowance, f"{holder.label} -> {spender.label} allowance after burnFrom")


def burn_from_any_caller_with_allowance(ctx: ScenarioContext):
    _burn_from_with_allowance(ctx, holder=ctx.user1, spender=ctx.user2, mint='100', burn='50')


def burn_from_specified_account(ctx: ScenarioContext):
    _burn_from_with_allowance(ctx, holder=ctx.user2, spender=ctx.user1, mint='200', burn='75')


# transferOwnership

def transfer_ownership_reverts_for_non_owner(ctx: ScenarioContext):
    as_user1 = ctx.erc20.connect(ctx.user1)

    expect_revert(lambda: as_user1.transfer_ownership(ctx.user2.address), ctx.execution)


def transfer_ownership_by_owner(ctx: ScenarioContext):
    initial_owner = ctx.erc20.owner()
    expect_equal(initial_owner, ctx.owner.address, "owner before transfer")

    as_owner = ctx.erc20.connect(ctx.owner)
    receipt = confirm(as_owner.transfer_ownership(ctx.user1.address), ctx.execution)

    new_owner = ctx.erc20.owner()
    expect_equal(new_owner, ctx.user1.address, "owner after transfer")

    transferred = [e for e in ctx.erc20.parse_events(receipt) if e['event'] == 'OwnershipTransferred']
    if not transferred:
        raise AssertionError("transferOwnership emitted no OwnershipTransferred event")
    expect_equal(transferred[0]['args']['previousOwner'], initial_owner, "OwnershipTransferred previousOwner")
    expect_equal(transferred[0]['args']['newOwner'], ctx.user1.address, "OwnershipTransferred newOwner")


# Ownership transfer is last: it leaves the precompile owned by user1
SCENARIOS: List[Scenario] = [
    Scenario('mint', 'reverts if the caller is not the contract owner', mint_reverts_for_non_owner),
    Scenario('mint', 'mints tokens to the recipient if the caller is the contract owner', mint_by_owner_credits_recipient),
    Scenario('burn', 'burns tokens from the caller', burn_from_own_balance),
    Scenario('burn0', 'reverts if the caller is not the contract owner', burn0_reverts_for_non_owner),
    Scenario('burn0', 'allows owner to burn tokens from any address', burn0_owner_burns_from_any_account),
    Scenario('burn0', 'reverts when burning more than the available balance', burn0_reverts_above_balance),
    Scenario('burnFrom', 'allows any caller to burn from an account with allowance', burn_from_any_caller_with_allowance),
    Scenario('burnFrom', 'burns tokens from the specified account with allowance', burn_from_specified_account),
    Scenario('transferOwnership', 'reverts if the caller is not the contract owner', transfer_ownership_reverts_for_non_owner),
    Scenario('transferOwnership', 'transfers ownership when called by the current owner', transfer_ownership_by_owner),
]


def select_scenarios(pattern: str = "") -> List[Scenario]:
    """Scenarios whose group/title contains the pattern (case-insensitive)"""
    if not pattern:
        return list(SCENARIOS)
    needle = pattern.lower()
    return [s for s in SCENARIOS if needle in s.full_name.lower()]
