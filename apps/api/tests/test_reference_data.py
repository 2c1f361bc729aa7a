"""Tests for country reference data."""

import pytest
from pydantic import ValidationError

from transitionpath.models.enums import Region, RiskLevel
from transitionpath.modules.reference.countries import (
    COUNTRY_PROFILES,
    SUPPORTED_COUNTRIES,
    get_countries_by_region,
    get_countries_by_risk,
    get_country_profile,
    is_supported_country,
)


class TestCountryProfiles:
    def test_every_profile_is_supported(self):
        assert {p.id for p in COUNTRY_PROFILES} <= SUPPORTED_COUNTRIES

    def test_lookup_case_insensitive(self):
        profile = get_country_profile("Kenya")
        assert profile is not None
        assert profile.name == "Kenya"
        assert profile.currency_code == "KES"

    def test_lookup_unknown(self):
        assert get_country_profile("atlantis") is None
        # Supported for eligibility but carries no profile
        assert get_country_profile("rwanda") is None

    @pytest.mark.parametrize(
        ("country", "supported"),
        [("kenya", True), ("drc", True), ("south_africa", True), ("france", False), ("", False)],
    )
    def test_is_supported(self, country, supported):
        assert is_supported_country(country) is supported

    def test_by_region(self):
        ids = {p.id for p in get_countries_by_region(Region.EAST_AFRICA)}
        assert ids == {"kenya", "tanzania"}

    def test_by_risk_ceiling(self):
        assert [p.id for p in get_countries_by_risk(RiskLevel.LOW)] == ["morocco"]
        assert "nigeria" not in {p.id for p in get_countries_by_risk(RiskLevel.MEDIUM)}
        assert len(get_countries_by_risk(RiskLevel.HIGH)) == len(COUNTRY_PROFILES)

    def test_profiles_immutable(self):
        profile = get_country_profile("ghana")
        with pytest.raises(ValidationError):
            profile.name = "Gold Coast"
