"""Reward catalogue and redemption."""

import re
from datetime import date, timedelta

import pytest
from sqlalchemy import text

from volunteerhub.core.exceptions import (
    AgeRestricted,
    ConcurrentModification,
    InsufficientBalance,
    InsufficientCredits,
    RedemptionLimitReached,
    RedemptionNotActive,
    RedemptionNotFound,
    RewardNotFound,
    RewardUnavailable,
    RoleNotAllowed,
    ValidationFailed,
)
from volunteerhub.models.base import utcnow
from volunteerhub.models.redeemed_reward import RedeemedReward, RedemptionStatus
from volunteerhub.models.reward import RewardType
from volunteerhub.models.user import UserRole
from volunteerhub.schemas.reward import RewardCreate, RewardRestrictions
from volunteerhub.services.reward_service import RewardService, generate_redemption_code
from tests.factories import make_reward, make_user, principal_for


@pytest.fixture
def service(db) -> RewardService:
    return RewardService(db)


def _reward_in(**overrides) -> RewardCreate:
    data = dict(
        title="Cinema Ticket",
        description="One free ticket for any 2D movie",
        credit_cost=40,
        type=RewardType.VOUCHER,
        valid_until=utcnow() + timedelta(days=10),
        terms_and_conditions="Valid Monday to Thursday only",
        redemption_instructions="Show the code at the box office",
    )
    data.update(overrides)
    return RewardCreate(**data)


class TestRedemptionCode:
    @pytest.mark.parametrize(
        "reward_type,prefix",
        [
            (RewardType.DISCOUNT, "DSC"),
            (RewardType.VOUCHER, "VCH"),
            (RewardType.PRODUCT, "PRD"),
            (RewardType.SERVICE, "SRV"),
        ],
    )
    def test_prefix_follows_type(self, reward_type, prefix) -> None:
        code = generate_redemption_code(reward_type)
        assert re.fullmatch(rf"{prefix}-\d{{6}}-[A-Z0-9]{{3}}", code)


class TestRedeem:
    def test_redeem_exact_balance_then_again(self, db, service, company) -> None:
        reward = make_reward(db, company, credit_cost=15)
        user = make_user(db, credits=15)

        redeemed, updated = service.redeem(principal_for(user), reward.id)

        assert updated.credits_total == 0
        assert redeemed.redemption_code.startswith("DSC-")
        assert redeemed.status == RedemptionStatus.ACTIVE
        assert redeemed.credit_cost == 15
        assert db.query(RedeemedReward).filter(RedeemedReward.user_id == user.id).count() == 1

        with pytest.raises(InsufficientCredits) as exc_info:
            service.redeem(principal_for(user), reward.id)

        assert isinstance(exc_info.value, InsufficientBalance)
        db.refresh(user)
        assert user.credits_total == 0
        assert db.query(RedeemedReward).filter(RedeemedReward.user_id == user.id).count() == 1

    def test_stale_user_version_is_rejected(self, db, service, company) -> None:
        reward = make_reward(db, company, credit_cost=15)
        user = make_user(db, credits=15)
        assert user.credits_total == 15

        # A credit claim commits against the same user row first
        db.execute(text("UPDATE users SET version_id = version_id + 1 WHERE id = :id"), {"id": user.id})

        with pytest.raises(ConcurrentModification) as exc_info:
            service.redeem(principal_for(user), reward.id)

        assert exc_info.value.retryable is True
        db.refresh(user)
        assert user.credits_total == 15
        assert db.query(RedeemedReward).filter(RedeemedReward.user_id == user.id).count() == 0
        db.refresh(reward)
        assert reward.times_redeemed == 0

    def test_snapshot_survives_reward_changes(self, db, service, company) -> None:
        reward = make_reward(db, company, credit_cost=5, title="Old title")
        user = make_user(db, credits=5)
        redeemed, _ = service.redeem(principal_for(user), reward.id)

        reward.title = "New title"
        db.commit()

        db.refresh(redeemed)
        assert redeemed.reward_title == "Old title"

    def test_finite_stock_is_decremented(self, db, service, company) -> None:
        reward = make_reward(db, company, credit_cost=5, available_quantity=1)
        first = make_user(db, credits=10)
        second = make_user(db, credits=10)

        service.redeem(principal_for(first), reward.id)
        db.refresh(reward)
        assert reward.available_quantity == 0
        assert reward.times_redeemed == 1

        with pytest.raises(RewardUnavailable):
            service.redeem(principal_for(second), reward.id)
        db.refresh(second)
        assert second.credits_total == 10

    def test_expired_reward(self, db, service, company) -> None:
        reward = make_reward(db, company, valid_until=utcnow() - timedelta(days=1))
        user = make_user(db, credits=100)
        with pytest.raises(RewardUnavailable):
            service.redeem(principal_for(user), reward.id)

    def test_inactive_reward(self, db, service, company) -> None:
        reward = make_reward(db, company, is_active=False)
        user = make_user(db, credits=100)
        with pytest.raises(RewardUnavailable):
            service.redeem(principal_for(user), reward.id)

    def test_unknown_reward(self, service, volunteer) -> None:
        with pytest.raises(RewardNotFound):
            service.redeem(principal_for(volunteer), 424242)

    def test_per_user_limit(self, db, service, company) -> None:
        reward = make_reward(db, company, credit_cost=10, max_redemptions_per_user=1)
        user = make_user(db, credits=100)
        service.redeem(principal_for(user), reward.id)

        with pytest.raises(RedemptionLimitReached):
            service.redeem(principal_for(user), reward.id)

        db.refresh(user)
        assert user.credits_total == 90

    def test_minimum_age(self, db, service, company) -> None:
        reward = make_reward(db, company, credit_cost=10, min_age=18)
        today = date.today()
        minor = make_user(db, credits=100, birth_date=date(today.year - 16, 1, 1))
        adult = make_user(db, credits=100, birth_date=date(today.year - 30, 1, 1))
        unknown = make_user(db, credits=100, birth_date=None)

        with pytest.raises(AgeRestricted):
            service.redeem(principal_for(minor), reward.id)
        with pytest.raises(AgeRestricted):
            service.redeem(principal_for(unknown), reward.id)

        _, user = service.redeem(principal_for(adult), reward.id)
        assert user.credits_total == 90
        db.refresh(minor)
        assert minor.credits_total == 100

    def test_company_cannot_redeem(self, db, service, company) -> None:
        reward = make_reward(db, company)
        with pytest.raises(RoleNotAllowed):
            service.redeem(principal_for(company), reward.id)


class TestCatalogue:
    def test_company_creates_reward(self, service, company) -> None:
        reward = service.create_reward(
            principal_for(company),
            _reward_in(restrictions=RewardRestrictions(min_age=21, max_redemptions_per_user=2)),
        )

        assert reward.partner_id == company.id
        assert reward.partner_name == company.full_name
        assert reward.reward_type == RewardType.VOUCHER
        assert reward.min_age == 21
        assert reward.is_available()

    def test_volunteer_cannot_create_reward(self, service, volunteer) -> None:
        with pytest.raises(RoleNotAllowed):
            service.create_reward(principal_for(volunteer), _reward_in())

    def test_validity_must_be_in_future(self, service, company) -> None:
        with pytest.raises(ValidationFailed):
            service.create_reward(principal_for(company), _reward_in(valid_until=utcnow() - timedelta(hours=1)))

    def test_list_available_hides_expired_and_sold_out(self, db, service, company) -> None:
        live = make_reward(db, company, title="Live")
        make_reward(db, company, title="Expired", valid_until=utcnow() - timedelta(days=1))
        make_reward(db, company, title="Sold out", available_quantity=0)
        make_reward(db, company, title="Inactive", is_active=False)

        assert [r.id for r in service.list_available()] == [live.id]


class TestRedemptionUse:
    def test_mark_used_once(self, db, service, company) -> None:
        reward = make_reward(db, company, credit_cost=5)
        user = make_user(db, credits=5)
        redeemed, _ = service.redeem(principal_for(user), reward.id)

        used = service.mark_used(principal_for(user), redeemed.id)
        assert used.status == RedemptionStatus.USED
        assert used.used_at is not None

        with pytest.raises(RedemptionNotActive):
            service.mark_used(principal_for(user), redeemed.id)

    def test_expired_redemption_cannot_be_used(self, db, service, company) -> None:
        reward = make_reward(db, company, credit_cost=5, valid_until=utcnow() + timedelta(days=1))
        user = make_user(db, credits=5)
        redeemed, _ = service.redeem(principal_for(user), reward.id)

        later = utcnow() + timedelta(days=2)
        assert redeemed.effective_status(later) == RedemptionStatus.EXPIRED
        with pytest.raises(RedemptionNotActive):
            service.mark_used(principal_for(user), redeemed.id, now=later)

    def test_other_users_redemption_is_not_found(self, db, service, company) -> None:
        reward = make_reward(db, company, credit_cost=5)
        owner = make_user(db, credits=5)
        other = make_user(db, role=UserRole.VOLUNTEER)
        redeemed, _ = service.redeem(principal_for(owner), reward.id)

        with pytest.raises(RedemptionNotFound):
            service.mark_used(principal_for(other), redeemed.id)
