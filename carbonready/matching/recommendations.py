"""
Consultant-type recommendations from onboarding assessment answers.
"""

from typing import Iterable, List, Optional

# Barrier reported during onboarding -> consultant specialties that address it
BARRIER_SPECIALTIES = {
    "grant_awareness": ["Grant Applications"],
    "technical_knowledge": ["Energy Audits", "Carbon Reporting"],
    "cost_funding": ["Grant Applications"],
}

UNSURE_GRANT_AWARENESS = {"not_aware", "unsure"}


def get_recommended_consultant_types(
    barriers: Optional[Iterable[str]] = None,
    selected_consultants: Optional[Iterable[str]] = None,
    grant_awareness: Optional[str] = None,
    tax_interest: Optional[str] = None,
) -> List[str]:
    """
    Suggest consultant specialties for a business.

    Args:
        barriers: Barrier codes selected in the assessment
        selected_consultants: Specialties the user asked for explicitly
        grant_awareness: "aware", "not_aware" or "unsure"
        tax_interest: "yes" when the user wants help with tax reliefs

    Returns:
        Specialties, de-duplicated, in first-seen order
    """
    recommendations: List[str] = []

    for barrier in barriers or []:
        recommendations.extend(BARRIER_SPECIALTIES.get(barrier, []))

    recommendations.extend(selected_consultants or [])

    if tax_interest == "yes":
        recommendations.append("Tax Specialists")

    if grant_awareness in UNSURE_GRANT_AWARENESS:
        recommendations.append("Grant Applications")

    return list(dict.fromkeys(recommendations))
