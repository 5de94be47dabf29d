"""
Resume data loading.

Reads resume-data documents (JSON or YAML) into ResumeData instances and looks
up role profiles. JSON is parsed through OmegaConf's YAML loader, so both
formats share one code path.
"""

import os
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from omegaconf import OmegaConf

from resumate.contexts.intake.exceptions import InvalidResumeDataError, RoleProfileNotFoundError
from resumate.contexts.intake.logger import _log_debug, _log_info, _log_warning
from resumate.contexts.intake.resume_data_structure import ResumeData, RoleProfile
from resumate.contexts.intake.validator import validate_resume_data

load_dotenv()
RESUME_DATA_PATH = Path(os.getenv("RESUME_DATA_PATH", "data/resume-data.json"))


def load_resume_data(path: Optional[Union[str, Path]] = None, validate: bool = True) -> ResumeData:
    """
    Load resume data from a JSON or YAML file.

    Args:
        path: Path to the document (defaults to RESUME_DATA_PATH env variable)
        validate: Run structural validation after parsing

    Returns:
        ResumeData instance

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidResumeDataError: If required fields are missing or validation fails
    """
    path = Path(path) if path is not None else RESUME_DATA_PATH
    if not path.exists():
        raise FileNotFoundError(f"Resume data not found: {path}")

    _log_debug(f"Loading resume data from {path}")
    # resolve=False: descriptions are free text and must not be treated as interpolations
    raw = OmegaConf.to_container(OmegaConf.load(path), resolve=False)
    if not isinstance(raw, dict):
        raise InvalidResumeDataError(f"Expected a mapping at the document root in {path}")

    try:
        resume_data = ResumeData.from_dict(raw)
    except KeyError as e:
        raise InvalidResumeDataError(f"Missing required field {e} in {path}") from e

    if validate:
        validate_resume_data(resume_data)

    profiles = resume_data.role_profiles or []
    _log_info(
        f"Loaded {len(resume_data.experience)} companies and {len(profiles)} role profiles from {path.name}"
    )
    return resume_data


def get_role_profile(resume_data: ResumeData, profile_id: str) -> RoleProfile:
    """
    Find a role profile by ID.

    Raises:
        RoleProfileNotFoundError: If no profile has this ID
    """
    profiles = resume_data.role_profiles or []
    for profile in profiles:
        if profile.id == profile_id:
            return profile
    raise RoleProfileNotFoundError(profile_id, [p.id for p in profiles])


def prepare_role_profile(profile: RoleProfile) -> RoleProfile:
    """
    Return a copy of the profile with scoring weights normalized to sum to 1.0.

    The original profile is left untouched. A warning is logged when the
    weights had to be rescaled.

    Raises:
        InvalidResumeDataError: If the weights cannot be normalized
    """
    try:
        weights, message = profile.scoring_weights.normalize()
    except ValueError as e:
        raise InvalidResumeDataError(f"Role profile '{profile.id}': {e}") from e
    if message is None:
        return profile

    _log_warning(f"Role profile '{profile.id}': {message}")
    return replace(profile, scoring_weights=weights, tag_weights=dict(profile.tag_weights))
