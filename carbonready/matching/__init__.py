"""
Recommendation Matching

Example Usage:
    from carbonready.matching import Profile, match_all, parse_catalog

    catalog = parse_catalog(rows_from_catalog_store)
    profile = Profile(business_type="Manufacturing", employees=25, location="Leeds")

    for result in match_all(catalog, profile)[:5]:
        print(result.match_score, result.entity.name, "; ".join(result.match_reasons))
"""

from .models import (
    CatalogEntity,
    Consultant,
    Entity,
    Grant,
    MatchResult,
    Profile,
    Subsidy,
    parse_catalog,
)
from .engine import (
    BASE_SCORE,
    SIGN_IN_REASON,
    business_type_matches,
    is_listable,
    is_open_to_all,
    location_matches,
    match_all,
    match_consultant,
    match_entity,
    match_grant,
    match_subsidy,
)
from .recommendations import get_recommended_consultant_types

__all__ = [
    # Models
    "CatalogEntity",
    "Consultant",
    "Entity",
    "Grant",
    "MatchResult",
    "Profile",
    "Subsidy",
    "parse_catalog",

    # Matching
    "BASE_SCORE",
    "SIGN_IN_REASON",
    "business_type_matches",
    "is_listable",
    "is_open_to_all",
    "location_matches",
    "match_all",
    "match_consultant",
    "match_entity",
    "match_grant",
    "match_subsidy",

    # Recommendations
    "get_recommended_consultant_types",
]
