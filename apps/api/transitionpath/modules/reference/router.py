"""Reference data API router: country profiles."""

from fastapi import APIRouter, HTTPException, Query

from transitionpath.models.enums import Region, RiskLevel
from transitionpath.modules.reference import countries
from transitionpath.modules.reference.schemas import CountryProfile

router = APIRouter(prefix="/countries", tags=["reference"])


@router.get("", response_model=list[CountryProfile])
async def list_countries(
    region: Region | None = Query(None),
    max_risk: RiskLevel | None = Query(None, alias="maxRisk"),
):
    """Country profiles, optionally filtered by region and political risk ceiling."""
    profiles = countries.COUNTRY_PROFILES
    if region is not None:
        profiles = countries.get_countries_by_region(region)
    if max_risk is not None:
        allowed = {c.id for c in countries.get_countries_by_risk(max_risk)}
        profiles = [c for c in profiles if c.id in allowed]
    return profiles


@router.get("/{country_id}", response_model=CountryProfile)
async def get_country(country_id: str):
    profile = countries.get_country_profile(country_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"Country profile {country_id!r} not found")
    return profile
