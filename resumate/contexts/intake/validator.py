"""
Structural validation for resume data.

Selection assumes its input is well formed and never checks it. These checks
run at load time so that malformed data is rejected with a precise location
instead of silently producing a low-quality selection.
"""

from typing import Iterable, List

from resumate.contexts.intake.exceptions import InvalidResumeDataError
from resumate.contexts.intake.resume_data_structure import (
    Bullet,
    Company,
    Position,
    ResumeData,
    RoleProfile,
)

PRIORITY_RANGE = (1, 10)


def _check_priority(priority, label: str, path: str) -> None:
    low, high = PRIORITY_RANGE
    if isinstance(priority, bool) or not isinstance(priority, int) or not low <= priority <= high:
        raise InvalidResumeDataError(f"{label}: priority must be {low}-{high}, got {priority!r}", path or None)


def validate_bullet(bullet: Bullet, path: str = "") -> None:
    if not bullet.id:
        raise InvalidResumeDataError("Bullet ID cannot be empty", path or None)
    _check_priority(bullet.priority, f"Bullet '{bullet.id}'", path)
    if not bullet.description or not bullet.description.strip():
        raise InvalidResumeDataError(f"Bullet '{bullet.id}': must have non-empty description text", path or None)


def validate_position(position: Position, path: str = "") -> None:
    """
    Validate a position and its bullets.

    A position without bullets is accepted when it has a description, since the
    description is scored as a bullet of its own.
    """
    if not position.id:
        raise InvalidResumeDataError("Position ID cannot be empty", path or None)
    if not position.name:
        raise InvalidResumeDataError(f"Position '{position.id}': name cannot be empty", path or None)
    if not position.date_start:
        raise InvalidResumeDataError(f"Position '{position.id}': date_start cannot be empty", path or None)
    _check_priority(position.priority, f"Position '{position.id}'", path)
    if not position.children and not position.description:
        raise InvalidResumeDataError(
            f"Position '{position.id}': must have at least one bullet or a description", path or None
        )

    prefix = f"{path} → " if path else ""
    for i, bullet in enumerate(position.children):
        validate_bullet(bullet, f"{prefix}Position '{position.id}' → bullet[{i}]")


def validate_company(company: Company, path: str = "") -> None:
    if not company.id:
        raise InvalidResumeDataError("Company ID cannot be empty", path or None)
    if not company.date_start:
        raise InvalidResumeDataError(f"Company '{company.id}': date_start cannot be empty", path or None)
    _check_priority(company.priority, f"Company '{company.id}'", path)
    if not company.children:
        raise InvalidResumeDataError(f"Company '{company.id}': must have at least one position", path or None)

    prefix = f"{path} → " if path else ""
    for i, position in enumerate(company.children):
        validate_position(position, f"{prefix}Company '{company.id}' → position[{i}]")


def validate_role_profile(profile: RoleProfile, path: str = "") -> None:
    for tag, weight in profile.tag_weights.items():
        if not 0.0 <= weight <= 1.0:
            raise InvalidResumeDataError(
                f"Role profile '{profile.id}': tag weight for '{tag}' must be 0.0-1.0, got {weight}",
                path or None,
            )
    try:
        profile.scoring_weights.validate()
    except ValueError as e:
        raise InvalidResumeDataError(f"Role profile '{profile.id}': {e}", path or None) from e


def _duplicates(ids: Iterable[str]) -> List[str]:
    seen = set()
    duplicates: List[str] = []
    for item_id in ids:
        if item_id in seen and item_id not in duplicates:
            duplicates.append(item_id)
        seen.add(item_id)
    return duplicates


def find_duplicate_ids(resume_data: ResumeData) -> List[str]:
    """
    Return IDs used more than once within the same level of the experience tree.

    Companies, positions, and selectable items are checked separately. Virtual
    description IDs ("{position}-description") count as selectable items since
    they share the selection namespace with real bullets.
    """
    positions = [p for c in resume_data.experience for p in c.children]
    items = []
    for position in positions:
        if position.description:
            items.append(f"{position.id}-description")
        items.extend(bullet.id for bullet in position.children)

    return (
        _duplicates(c.id for c in resume_data.experience)
        + _duplicates(p.id for p in positions)
        + _duplicates(items)
    )


def validate_resume_data(resume_data: ResumeData, check_unique_ids: bool = True) -> None:
    """
    Validate the entire resume data structure.

    Args:
        resume_data: Loaded resume data
        check_unique_ids: Also reject duplicate IDs in the experience tree

    Raises:
        InvalidResumeDataError: On the first problem found, with its hierarchical path
    """
    if not resume_data.personal.name:
        raise InvalidResumeDataError("Personal info: name cannot be empty")

    if not resume_data.experience:
        raise InvalidResumeDataError("Resume must have at least one company in experience")

    for i, company in enumerate(resume_data.experience):
        validate_company(company, f"Experience[{i}]")

    for i, profile in enumerate(resume_data.role_profiles or []):
        validate_role_profile(profile, f"Role profile[{i}]")

    if check_unique_ids:
        duplicates = find_duplicate_ids(resume_data)
        if duplicates:
            raise InvalidResumeDataError(f"Duplicate IDs in experience: {', '.join(duplicates)}")

