"""Тесты для Access Control (manager / admin guards)."""

import pytest

from src.core.domain import (
    DiscountParameters,
    GovernanceLimits,
    InstrumentConfig,
    OracleState,
    PriceCacheEntry,
    Roles,
)
from src.oracle import AccessControl, AuthorizationError, NotAdmin, NotManager

from tests.unit.conftest import ADMIN, MANAGER, OUTSIDER, FixedExpiryToken, StaticPriceSource


@pytest.fixture
def state():
    return OracleState(
        instrument=InstrumentConfig(
            pt_expiry=1000,
            pt=FixedExpiryToken(1000),
            underlying_oracle=StaticPriceSource(),
        ),
        discount=DiscountParameters(slope=0, intercept=0, last_discount_update=0),
        limits=GovernanceLimits(max_update_interval=1),
        roles=Roles(manager=MANAGER, admin=ADMIN),
        cache=PriceCacheEntry(),
    )


class TestAccessControl:
    def test_manager_passes(self, state):
        AccessControl(state).require_manager(MANAGER)

    def test_admin_passes(self, state):
        AccessControl(state).require_admin(ADMIN)

    @pytest.mark.parametrize("caller", [OUTSIDER, ADMIN, None, ""])
    def test_non_manager_fails_closed(self, state, caller):
        roles_before = state.roles

        with pytest.raises(NotManager):
            AccessControl(state).require_manager(caller)

        assert state.roles is roles_before

    @pytest.mark.parametrize("caller", [OUTSIDER, MANAGER, None])
    def test_non_admin_fails_closed(self, state, caller):
        with pytest.raises(NotAdmin):
            AccessControl(state).require_admin(caller)

    def test_errors_share_authorization_base(self):
        assert issubclass(NotManager, AuthorizationError)
        assert issubclass(NotAdmin, AuthorizationError)

    def test_tracks_role_replacement(self, state):
        """Guard читает текущую запись Roles, а не копию на момент создания."""
        access = AccessControl(state)
        state.roles = Roles(manager=OUTSIDER, admin=ADMIN)

        access.require_manager(OUTSIDER)
        with pytest.raises(NotManager):
            access.require_manager(MANAGER)

    def test_is_checks(self, state):
        access = AccessControl(state)
        assert access.is_manager(MANAGER)
        assert not access.is_manager(ADMIN)
        assert access.is_admin(ADMIN)
        assert not access.is_admin(None)
