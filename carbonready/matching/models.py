"""
Catalog and profile models for recommendation matching.

Catalog rows come from the external catalog store as plain dicts; these
models validate them once at the boundary. Instances are frozen: the
matching engine reads them and never writes.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class CatalogEntity(BaseModel):
    """Common eligibility profile of a grant, subsidy or consultant."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    description: str = ""
    business_types: List[str] = []
    location_scope: List[str] = []
    is_active: bool = True


class Grant(CatalogEntity):
    """Funding grant."""
    kind: Literal["grant"] = "grant"
    amount_description: Optional[str] = None
    grant_type: Optional[str] = None
    sectors: List[str] = []
    deadline: Optional[str] = None
    whats_covered: List[str] = []


class Subsidy(CatalogEntity):
    """Tax relief, rate reduction, loan, voucher or rebate."""
    kind: Literal["subsidy"] = "subsidy"
    subsidy_type: Literal[
        "tax_relief", "rate_reduction", "loan", "voucher", "rebate", "other"
    ] = "other"
    eligibility_text: str = ""
    min_employees: Optional[int] = Field(default=None, ge=0)
    max_employees: Optional[int] = Field(default=None, ge=0)
    value_description: Optional[str] = None
    application_link: Optional[str] = None
    deadline: Optional[str] = None


class Consultant(CatalogEntity):
    """Approved sustainability consultant."""
    kind: Literal["consultant"] = "consultant"
    specialty: str = ""
    region: str = ""
    expertise_areas: List[str] = []
    status: Literal["pending", "approved", "rejected", "suspended"] = "approved"
    verified: bool = False
    fee_type: Optional[str] = None
    years_experience: Optional[int] = Field(default=None, ge=0)


Entity = Union[Grant, Subsidy, Consultant]

_ENTITY_MODELS = {
    "grant": Grant,
    "subsidy": Subsidy,
    "consultant": Consultant,
}


class Profile(BaseModel):
    """Business profile owned by the external identity/profile store."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    business_type: str = ""
    employees: Optional[int] = Field(default=None, ge=0)
    location: str = ""
    needs: List[str] = []  # Requested consultant expertise


@dataclass
class MatchResult:
    """One catalog entity scored against a profile."""
    entity: Entity
    match_score: int
    match_reasons: List[str] = field(default_factory=list)


def parse_catalog(rows: Iterable[Dict[str, Any]]) -> List[Entity]:
    """
    Validate raw catalog rows into models.

    Each row needs a `kind` of grant, subsidy or consultant. Rows that fail
    validation are logged and skipped so one bad entry does not hide the
    rest of the catalog.

    Returns:
        Parsed entities in input order
    """
    entities: List[Entity] = []
    skipped = 0
    for row in rows:
        kind = row.get("kind")
        model = _ENTITY_MODELS.get(kind)
        if model is None:
            logger.warning(f"Skipping catalog row {row.get('id')!r}: unknown kind {kind!r}")
            skipped += 1
            continue
        try:
            entities.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping catalog row {row.get('id')!r}: {e.error_count()} validation error(s)")
            skipped += 1
    if skipped:
        logger.warning(f"Skipped {skipped} of {skipped + len(entities)} catalog rows")
    return entities
