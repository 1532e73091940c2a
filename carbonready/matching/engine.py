"""
Recommendation Matching Engine

Scores grants, subsidies and consultants against a business profile with an
additive heuristic and returns them ranked, each with the reasons behind
its score.

Grants:
    base 50
    business type   +25 match | +10 open to all | -10 restricted, no match
    location        +20 available | -15 not available
    SME             +5 when 0 < employees < 250

Subsidies:
    base 50
    business type   +25 match | +15 open to all | -10 restricted, no match
    location        +15 available (no penalty otherwise)
    head-count      -20 below min_employees, -20 above max_employees

Consultants:
    base 50
    expertise       +15 per tag overlapping a requested need
    location        +10 serves the area
    verified        +10
    experience      +5 for 5+ years

All scores are clamped to 0-100.
"""

import logging
from typing import Iterable, List, Optional

from ..helpers import clamp
from .models import Consultant, Entity, Grant, MatchResult, Profile, Subsidy

logger = logging.getLogger(__name__)


BASE_SCORE = 50
SIGN_IN_REASON = "Sign in to see personalized match scores"

# Declared business types that mean "no restriction"
OPEN_BUSINESS_TYPES = {"all", "any"}
UK_WIDE = "uk-wide"
SME_EMPLOYEE_LIMIT = 250
EXPERIENCED_YEARS = 5


# =============================================================================
# TEXT MATCHING
# =============================================================================

def _norm(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def _overlaps(a: str, b: str) -> bool:
    """Case-insensitive substring match in either direction."""
    a, b = _norm(a), _norm(b)
    if not a or not b:
        return False
    return a in b or b in a


def is_open_to_all(business_types: List[str]) -> bool:
    """True when an entity declares no business-type restriction."""
    declared = [_norm(t) for t in business_types if _norm(t)]
    return not declared or all(t in OPEN_BUSINESS_TYPES for t in declared)


def business_type_matches(business_types: List[str], business_type: str) -> bool:
    wanted = _norm(business_type).replace(" ", "_")
    return bool(wanted) and any(
        _norm(t).replace(" ", "_") == wanted for t in business_types
    )


def location_matches(location_scope: List[str], location: str) -> bool:
    """
    A scope matches when it is UK-wide, contains the profile location, or is
    contained by it (case-insensitive).
    """
    return any(
        _norm(scope) == UK_WIDE or _overlaps(scope, location)
        for scope in location_scope
    )


# =============================================================================
# PER-KIND MATCHERS
# =============================================================================

def _sign_in_result(entity: Entity) -> MatchResult:
    return MatchResult(entity=entity, match_score=BASE_SCORE, match_reasons=[SIGN_IN_REASON])


def match_grant(grant: Grant, profile: Optional[Profile]) -> MatchResult:
    """Score one grant against a profile."""
    if profile is None:
        return _sign_in_result(grant)

    score = BASE_SCORE
    reasons: List[str] = []

    if is_open_to_all(grant.business_types):
        score += 10
        reasons.append("Open to all business types")
    elif business_type_matches(grant.business_types, profile.business_type):
        score += 25
        reasons.append(f"Matches your industry: {profile.business_type}")
    else:
        score -= 10
        reasons.append(f"Not targeted at {profile.business_type or 'your'} businesses")

    if grant.location_scope:
        if location_matches(grant.location_scope, profile.location):
            score += 20
            reasons.append("Available in your region")
        else:
            score -= 15
            reasons.append("May not be available in your region")

    if profile.employees and profile.employees < SME_EMPLOYEE_LIMIT:
        score += 5
        reasons.append("Eligible as an SME")

    return MatchResult(entity=grant, match_score=int(clamp(score)), match_reasons=reasons)


def match_subsidy(subsidy: Subsidy, profile: Optional[Profile]) -> MatchResult:
    """
    Score one subsidy against a profile. A non-matching location is not
    penalized.
    """
    if profile is None:
        return _sign_in_result(subsidy)

    score = BASE_SCORE
    reasons: List[str] = []

    if is_open_to_all(subsidy.business_types):
        score += 15
        reasons.append("Available for all business types")
    elif business_type_matches(subsidy.business_types, profile.business_type):
        score += 25
        reasons.append(f"Available for {profile.business_type} businesses")
    else:
        score -= 10
        reasons.append(f"Not targeted at {profile.business_type or 'your'} businesses")

    if subsidy.location_scope and location_matches(subsidy.location_scope, profile.location):
        score += 15
        reasons.append("Available in your location")

    # Each bound is checked on its own
    employees = profile.employees or 0
    if subsidy.min_employees is not None and employees < subsidy.min_employees:
        score -= 20
        reasons.append(f"Requires minimum {subsidy.min_employees} employees")
    if subsidy.max_employees is not None and employees > subsidy.max_employees:
        score -= 20
        reasons.append(f"Maximum {subsidy.max_employees} employees")

    if subsidy.subsidy_type == "tax_relief":
        reasons.append("Tax relief - consult your accountant")

    return MatchResult(entity=subsidy, match_score=int(clamp(score)), match_reasons=reasons)


def match_consultant(
    consultant: Consultant,
    profile: Optional[Profile],
    needs: Optional[List[str]] = None,
) -> MatchResult:
    """
    Score one consultant against a profile's requested needs.

    Args:
        consultant: Catalog consultant
        profile: Business profile (None for anonymous visitors)
        needs: Requested expertise; defaults to profile.needs
    """
    if profile is None:
        return _sign_in_result(consultant)

    needs = profile.needs if needs is None else needs
    score = BASE_SCORE
    reasons: List[str] = []

    matched_expertise = [
        area for area in consultant.expertise_areas
        if any(_overlaps(area, need) for need in needs)
    ]
    if matched_expertise:
        score += 15 * len(matched_expertise)
        reasons.append(f"Expertise in: {', '.join(matched_expertise)}")

    region = _norm(consultant.region)
    if profile.location and (
        UK_WIDE in region
        or "remote" in region
        or _overlaps(region.replace("(remote)", ""), profile.location)
    ):
        score += 10
        reasons.append("Serves your area")

    if consultant.verified:
        score += 10
        reasons.append("Verified consultant")

    if consultant.years_experience and consultant.years_experience >= EXPERIENCED_YEARS:
        score += 5
        reasons.append(f"{consultant.years_experience}+ years experience")

    return MatchResult(entity=consultant, match_score=int(clamp(score)), match_reasons=reasons)


def match_entity(
    entity: Entity,
    profile: Optional[Profile],
    needs: Optional[List[str]] = None,
) -> MatchResult:
    """Dispatch to the matcher for the entity's kind."""
    if isinstance(entity, Grant):
        return match_grant(entity, profile)
    if isinstance(entity, Subsidy):
        return match_subsidy(entity, profile)
    if isinstance(entity, Consultant):
        return match_consultant(entity, profile, needs)
    raise TypeError(f"Unsupported catalog entity: {type(entity).__name__}")


def is_listable(entity: Entity) -> bool:
    """Active entries only; consultants must also be approved."""
    if not entity.is_active:
        return False
    if isinstance(entity, Consultant):
        return entity.status == "approved"
    return True


# =============================================================================
# BATCH MATCHING
# =============================================================================

def match_all(
    catalog: Iterable[Entity],
    profile: Optional[Profile],
    needs: Optional[List[str]] = None,
    active_only: bool = True,
) -> List[MatchResult]:
    """
    Score a whole catalog and rank it.

    Args:
        catalog: Parsed catalog entities (see parse_catalog)
        profile: Business profile, or None for anonymous visitors
        needs: Requested consultant expertise (default: profile.needs)
        active_only: Drop inactive entries and unapproved consultants

    Returns:
        MatchResults sorted by descending score; ties keep catalog order
    """
    entities = [e for e in catalog if is_listable(e)] if active_only else list(catalog)
    results = [match_entity(entity, profile, needs) for entity in entities]

    # sorted() is stable, so equal scores stay in catalog order
    ranked = sorted(results, key=lambda r: r.match_score, reverse=True)

    logger.debug(
        f"Matched {len(ranked)} catalog entries"
        f"{' (anonymous)' if profile is None else ''}"
    )
    return ranked
