"""
Intake Context

Responsibilities:
- Defines the career tree data model (Company -> Position -> Bullet) and role profiles
- Loads resume data documents (JSON/YAML)
- Validates structure and normalizes scoring weights

Owns: Resume data representation, loading, structural validation
Never: Scores or selects content
"""

from resumate.contexts.intake.exceptions import InvalidResumeDataError, RoleProfileNotFoundError
from resumate.contexts.intake.loader import get_role_profile, load_resume_data, prepare_role_profile
from resumate.contexts.intake.resume_data_structure import (
    Bullet,
    Company,
    Education,
    PersonalInfo,
    Position,
    ResumeData,
    RoleProfile,
    ScoredBullet,
    ScoringWeights,
    Tag,
)
from resumate.contexts.intake.validator import find_duplicate_ids, validate_resume_data

__all__ = [
    # Data structures
    "Tag",
    "Bullet",
    "Position",
    "Company",
    "ScoringWeights",
    "RoleProfile",
    "PersonalInfo",
    "Education",
    "ResumeData",
    "ScoredBullet",
    # Loading
    "load_resume_data",
    "get_role_profile",
    "prepare_role_profile",
    # Validation
    "validate_resume_data",
    "find_duplicate_ids",
    "InvalidResumeDataError",
    "RoleProfileNotFoundError",
]
