"""
Tests for role based authorization.
"""

import pytest

from adfluence.errors import Forbidden
from adfluence.models.enums import AccountRole
from adfluence.services.authorization import (
    BRAND_DASHBOARD,
    CAMPAIGN_APPLICANTS,
    CAMPAIGN_CREATORS,
    INFLUENCER_DASHBOARD,
    authorize,
    require_role
)


@pytest.mark.unit
class TestAuthorize:
    """Role membership checks."""

    @pytest.mark.parametrize("role,allowed", [
        (AccountRole.BRAND, True),
        (AccountRole.AGENCY, True),
        (AccountRole.INFLUENCER, False),
        (AccountRole.INDIVIDUAL, False),
    ])
    def test_campaign_creation(self, register, role, allowed):
        assert authorize(register(role).account, CAMPAIGN_CREATORS) is allowed
        assert authorize(register(role).account, BRAND_DASHBOARD) is allowed

    @pytest.mark.parametrize("role,allowed", [
        (AccountRole.BRAND, False),
        (AccountRole.AGENCY, False),
        (AccountRole.INFLUENCER, True),
        (AccountRole.INDIVIDUAL, False),
    ])
    def test_applying_to_campaigns(self, register, role, allowed):
        assert authorize(register(role).account, CAMPAIGN_APPLICANTS) is allowed
        assert authorize(register(role).account, INFLUENCER_DASHBOARD) is allowed

    def test_plain_role_strings_are_accepted(self, brand):
        """Test required roles may be given as enum values or strings."""
        assert authorize(brand.account, ["brand"])
        assert not authorize(brand.account, ["influencer"])

    def test_missing_account_is_denied(self):
        assert authorize(None, CAMPAIGN_CREATORS) is False

    def test_empty_role_set_denies_everyone(self, brand):
        assert authorize(brand.account, []) is False

    def test_require_role_raises_forbidden(self, individual):
        with pytest.raises(Forbidden) as exc_info:
            require_role(individual.account, CAMPAIGN_CREATORS, "Only brands and agencies can create campaigns")

        assert exc_info.value.status_code == 403
        assert "brands and agencies" in exc_info.value.message

    def test_require_role_passes(self, agency):
        require_role(agency.account, CAMPAIGN_CREATORS)
