"""
Bullet Selection

Selects the top N bullets from a career tree for a role profile:

1. Candidate generation: every position description (as a virtual bullet) and
   every real bullet is scored and flattened into a ScoredBullet.
2. Ranking: stable sort by score, descending. Equal scores keep generation order.
3. Quota filtering: one greedy pass that stops at max_bullets and skips
   candidates whose company or position has reached its cap.

min_per_company is carried on SelectionConfig but has no effect here.
"""

from collections import Counter
from typing import Dict, List, Optional, Tuple

from resumate.contexts.intake.resume_data_structure import (
    Bullet,
    Company,
    Position,
    ResumeData,
    RoleProfile,
    ScoredBullet,
)
from resumate.contexts.targeting.logger import _log_debug
from resumate.contexts.targeting.scoring import score_bullet
from resumate.contexts.targeting.selection_config import SelectionConfig

DESCRIPTION_SUFFIX = "-description"


def description_bullet_id(position: Position) -> str:
    return f"{position.id}{DESCRIPTION_SUFFIX}"


def is_description_bullet(scored: ScoredBullet) -> bool:
    """True if the scored item was synthesized from its position's description."""
    if not scored.position_description:
        return False
    return scored.bullet.id == f"{scored.position_id}{DESCRIPTION_SUFFIX}"


def description_as_bullet(position: Position) -> Bullet:
    """
    Synthesize a virtual bullet from a position description.

    The virtual bullet inherits the position's tags and priority and is scored
    through the same code path as a real bullet.
    """
    return Bullet(
        id=description_bullet_id(position),
        description=position.description or "",
        tags=list(position.tags),
        priority=position.priority,
    )


def _score(bullet: Bullet, position: Position, company: Company, role_profile: RoleProfile) -> ScoredBullet:
    score = score_bullet(bullet, position, company, role_profile)
    return ScoredBullet.from_context(bullet, score, position, company)


def collect_candidates(resume_data: ResumeData, role_profile: RoleProfile) -> List[ScoredBullet]:
    """
    Score every selectable item in the tree, in tree order.

    For each position the description (if non-empty) comes first, followed by
    its bullets in their stored order.
    """
    candidates: List[ScoredBullet] = []

    for company in resume_data.experience:
        for position in company.children:
            if position.description:
                candidates.append(_score(description_as_bullet(position), position, company, role_profile))

            for bullet in position.children:
                candidates.append(_score(bullet, position, company, role_profile))

    return candidates


def rank_candidates(candidates: List[ScoredBullet]) -> List[ScoredBullet]:
    """Sort by score descending. sorted() is stable, so ties keep their input order."""
    return sorted(candidates, key=lambda c: c.score, reverse=True)


def apply_diversity_constraints(
    sorted_bullets: List[ScoredBullet], config: SelectionConfig
) -> List[ScoredBullet]:
    """
    Greedy single pass over score-sorted candidates.

    Reaching max_bullets ends the pass. A candidate whose company or position
    is already at its cap is skipped, and the pass continues with the next one.

    Args:
        sorted_bullets: Candidates, already sorted by score descending
        config: Caps to apply

    Returns:
        Admitted candidates, still in descending score order
    """
    selected: List[ScoredBullet] = []
    company_counts: Dict[str, int] = {}
    position_counts: Dict[str, int] = {}
    skipped: Counter = Counter()

    for candidate in sorted_bullets:
        if config.max_bullets is not None and len(selected) >= config.max_bullets:
            break

        if (
            config.max_per_company is not None
            and company_counts.get(candidate.company_id, 0) >= config.max_per_company
        ):
            skipped["company"] += 1
            continue

        if (
            config.max_per_position is not None
            and position_counts.get(candidate.position_id, 0) >= config.max_per_position
        ):
            skipped["position"] += 1
            continue

        company_counts[candidate.company_id] = company_counts.get(candidate.company_id, 0) + 1
        position_counts[candidate.position_id] = position_counts.get(candidate.position_id, 0) + 1
        selected.append(candidate)

    _log_debug(
        f"Admitted {len(selected)} of {len(sorted_bullets)} candidates "
        f"(skipped {skipped['company']} by company cap, {skipped['position']} by position cap)"
    )
    return selected


def select_bullets(
    resume_data: ResumeData,
    role_profile: RoleProfile,
    config: Optional[SelectionConfig] = None,
) -> List[ScoredBullet]:
    """
    Select top bullets from resume data for the given role profile.

    Args:
        resume_data: Career tree (read only)
        role_profile: Target role profile (read only)
        config: Caps to apply (defaults to SelectionConfig.default())

    Returns:
        Selected ScoredBullets sorted by score descending
    """
    if config is None:
        config = SelectionConfig.default()

    candidates = collect_candidates(resume_data, role_profile)
    _log_debug(f"Scored {len(candidates)} candidates for role profile '{role_profile.id}'")

    return apply_diversity_constraints(rank_candidates(candidates), config)


def count_selectable_items(resume_data: ResumeData) -> Tuple[int, int, int]:
    """
    Count the items selection can draw from.

    Used to report denominators such as "18 of 140 accomplishments shown".

    Returns:
        Tuple of (bullet_count, position_description_count, total)
    """
    bullet_count = 0
    description_count = 0
    for company in resume_data.experience:
        for position in company.children:
            bullet_count += len(position.children)
            if position.description:
                description_count += 1

    return bullet_count, description_count, bullet_count + description_count
