"""Тесты коллабораторов: PolicyToken, Treasury, SimpleOracle."""

import pytest

from src.collaborators import PolicyToken, SimpleOracle, Treasury
from src.core.domain.events import (
    FundsReceived,
    FundsWithdrawn,
    InsurancePoolSet,
    OutcomeRecorded,
    Transfer,
)
from src.core.domain.units import to_wei
from src.core.errors import (
    IncorrectTokenOwner,
    InvalidReceiver,
    NonexistentToken,
    NotInsurancePool,
    OwnableUnauthorizedAccount,
    TransferFailed,
    ZeroAmount,
)
from src.runtime import ZERO_ADDRESS
from tests.conftest import ACCOUNT_BALANCE, RejectTransfer, buy


# =============================================================================
# POLICY TOKEN
# =============================================================================


class TestPolicyToken:

    def test_mint_only_by_pool(self, token, owner, user1):
        with pytest.raises(NotInsurancePool):
            token.mint(user1, user1)
        with pytest.raises(NotInsurancePool):
            token.mint(owner, user1)

    def test_unbound_token_rejects_mint(self, ledger, owner):
        token = PolicyToken(ledger, owner)
        assert token.insurance_pool is None
        with pytest.raises(NotInsurancePool):
            token.mint(owner, owner)

    def test_set_insurance_pool(self, ledger, owner, user1):
        token = PolicyToken(ledger, owner)
        token.set_insurance_pool(owner, user1)

        assert token.insurance_pool == user1
        assert ledger.last_event(InsurancePoolSet) == InsurancePoolSet(pool=user1)
        assert token.mint(user1, owner) == 1

    def test_set_insurance_pool_owner_only(self, token, user1):
        with pytest.raises(OwnableUnauthorizedAccount):
            token.set_insurance_pool(user1, user1)

    def test_set_insurance_pool_zero_address(self, token, owner):
        with pytest.raises(InvalidReceiver):
            token.set_insurance_pool(owner, ZERO_ADDRESS)

    def test_policies_of_owner_insertion_order(self, funded_pool, token, user1, user2):
        buy(funded_pool, user1, coverage=to_wei(1))
        buy(funded_pool, user2, coverage=to_wei(1))
        buy(funded_pool, user1, coverage=to_wei(1))

        assert token.policies_of_owner(user1) == [1, 3]
        assert token.policies_of_owner(user2) == [2]
        assert token.balance_of(user1) == 2

    def test_transfer_from(self, funded_pool, token, user1, user2, ledger):
        buy(funded_pool, user1, coverage=to_wei(1))

        token.transfer_from(user1, user1, user2, 1)

        assert token.owner_of(1) == user2
        assert token.policies_of_owner(user1) == []
        assert token.policies_of_owner(user2) == [1]
        assert ledger.last_event(Transfer) == Transfer(from_address=user1, to_address=user2, token_id=1)

    def test_transfer_from_not_holder(self, funded_pool, token, user1, user2):
        buy(funded_pool, user1, coverage=to_wei(1))

        with pytest.raises(IncorrectTokenOwner):
            token.transfer_from(user2, user1, user2, 1)
        with pytest.raises(IncorrectTokenOwner):
            token.transfer_from(user1, user2, user2, 1)

    def test_transfer_to_zero_address(self, funded_pool, token, user1):
        buy(funded_pool, user1, coverage=to_wei(1))

        with pytest.raises(InvalidReceiver):
            token.transfer_from(user1, user1, ZERO_ADDRESS, 1)
        assert token.owner_of(1) == user1

    def test_nonexistent_token(self, token):
        with pytest.raises(NonexistentToken) as exc_info:
            token.owner_of(42)
        assert exc_info.value.token_id == 42


# =============================================================================
# TREASURY
# =============================================================================


class TestTreasury:

    def test_receive(self, ledger, treasury, user1):
        ledger.transfer(user1, treasury.address, to_wei(1))

        assert treasury.balance == to_wei(1)
        assert ledger.last_event(FundsReceived) == FundsReceived(sender=user1, amount=to_wei(1))

    def test_receive_zero(self, ledger, treasury, user1):
        with pytest.raises(ZeroAmount):
            ledger.transfer(user1, treasury.address, 0)

    def test_withdrawal(self, ledger, treasury, owner, user1):
        ledger.transfer(user1, treasury.address, to_wei(2))

        treasury.withdrawal(owner, user1, to_wei(2))

        assert treasury.balance == 0
        assert ledger.balance_of(user1) == ACCOUNT_BALANCE
        assert ledger.last_event(FundsWithdrawn) == FundsWithdrawn(to=user1, amount=to_wei(2))

    def test_withdrawal_owner_only(self, ledger, treasury, user1):
        ledger.transfer(user1, treasury.address, to_wei(1))
        with pytest.raises(OwnableUnauthorizedAccount):
            treasury.withdrawal(user1, user1, to_wei(1))

    def test_withdrawal_zero(self, treasury, owner):
        with pytest.raises(ZeroAmount):
            treasury.withdrawal(owner, owner, 0)

    def test_withdrawal_above_balance(self, treasury, owner):
        with pytest.raises(TransferFailed):
            treasury.withdrawal(owner, owner, 1)

    def test_withdrawal_to_rejecting_contract(self, ledger, treasury, owner, user1):
        ledger.transfer(user1, treasury.address, to_wei(1))
        target = RejectTransfer(ledger)

        with pytest.raises(TransferFailed):
            treasury.withdrawal(owner, target.address, to_wei(1))
        assert treasury.balance == to_wei(1)

    def test_collects_protocol_fee(self, funded_pool, treasury, user1):
        for _ in range(3):
            buy(funded_pool, user1, coverage=to_wei(1))

        assert treasury.balance == 3 * to_wei("0.0015")

    def test_standalone_owner(self, ledger, user1):
        assert Treasury(ledger, user1).owner == user1


# =============================================================================
# ORACLE
# =============================================================================


class TestOracle:

    def test_default_outcome_false(self, oracle):
        assert oracle.is_event_happened(1) is False

    def test_set_event(self, oracle, owner, ledger):
        oracle.set_event(owner, 1, True)

        assert oracle.is_event_happened(1) is True
        assert ledger.last_event(OutcomeRecorded) == OutcomeRecorded(policy_id=1, outcome=True)

        oracle.set_event(owner, 1, False)
        assert oracle.is_event_happened(1) is False

    def test_set_event_owner_only(self, oracle, user1):
        with pytest.raises(OwnableUnauthorizedAccount):
            oracle.set_event(user1, 1, True)

    def test_standalone_owner(self, ledger, user2):
        assert SimpleOracle(ledger, user2).owner == user2
