"""
Bullet Scoring

Hierarchical scoring: Company x Position x Bullet. Mirrors how a recruiter
reads a resume: company name first, then job title, then the bullets.

    score = base * company_multiplier * position_multiplier
    base  = tag_relevance * w.tag_relevance + priority / 10 * w.priority

All functions are pure. Priorities are not clamped, so out-of-range values
still produce a defined (if meaningless) score.
"""

from typing import Iterable, Mapping

from resumate.contexts.intake.resume_data_structure import (
    Bullet,
    Company,
    Position,
    RoleProfile,
    Tag,
)

PRIORITY_SCALE = 10.0

# Priority 1-10 maps onto [0.84, 1.2]; priority 5 is neutral (exactly 1.0)
MULTIPLIER_FLOOR = 0.8
MULTIPLIER_SPAN = 0.4

# Position tag relevance maps onto [0.9, 1.1]
POSITION_TAG_FLOOR = 0.9
POSITION_TAG_SPAN = 0.2


def calculate_tag_relevance(tags: Iterable[Tag], tag_weights: Mapping[Tag, float]) -> float:
    """
    Average weight of the tags that appear in tag_weights.

    Unmatched tags are ignored rather than counted as zero. Returns 0.0 when
    there are no tags, no weights, or no match.

    Example:
        calculate_tag_relevance(["engineering", "leadership"],
                                {"engineering": 1.0, "leadership": 0.9})
        # 0.95
    """
    if not tag_weights:
        return 0.0

    total_weight = 0.0
    matched = 0
    for tag in tags:
        weight = tag_weights.get(tag)
        if weight is not None:
            total_weight += weight
            matched += 1

    if matched == 0:
        return 0.0

    return total_weight / matched


def priority_signal(priority: float) -> float:
    """Linear map of the 1-10 manual ranking onto 0.1-1.0."""
    return priority / PRIORITY_SCALE


def _priority_multiplier(priority: float) -> float:
    return MULTIPLIER_FLOOR + priority_signal(priority) * MULTIPLIER_SPAN


def calculate_company_multiplier(company: Company) -> float:
    """Company prestige multiplier, ±20% around a neutral priority of 5."""
    return _priority_multiplier(company.priority)


def calculate_position_multiplier(position: Position, tag_weights: Mapping[Tag, float]) -> float:
    """
    Position seniority/relevance multiplier.

    Product of the priority multiplier and a tag multiplier. A position with no
    tags gets a tag multiplier of exactly 1.0.
    """
    priority_multiplier = _priority_multiplier(position.priority)

    if position.tags:
        relevance = calculate_tag_relevance(position.tags, tag_weights)
        tag_multiplier = POSITION_TAG_FLOOR + relevance * POSITION_TAG_SPAN
    else:
        tag_multiplier = 1.0

    return priority_multiplier * tag_multiplier


def score_bullet(bullet: Bullet, position: Position, company: Company, role_profile: RoleProfile) -> float:
    """
    Score a single bullet given its context and the target role profile.

    Args:
        bullet: Bullet to score (real or synthesized from a position description)
        position: Owning position
        company: Owning company
        role_profile: Target role profile

    Returns:
        Ranking score; may exceed 1.0 after multipliers
    """
    weights = role_profile.scoring_weights

    tag_score = calculate_tag_relevance(bullet.tags, role_profile.tag_weights)
    base_score = tag_score * weights.tag_relevance + priority_signal(bullet.priority) * weights.priority

    company_multiplier = calculate_company_multiplier(company)
    position_multiplier = calculate_position_multiplier(position, role_profile.tag_weights)

    return base_score * company_multiplier * position_multiplier
