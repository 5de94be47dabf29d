"""
Generation payload assembly.

Bundles a selection with everything a document renderer needs (contact info,
education, skills, footer text, denominators) plus metadata for recreating the
exact same document later.
"""

import uuid
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from resumate.contexts.intake.resume_data_structure import (
    Education,
    PersonalInfo,
    ResumeData,
    RoleProfile,
    ScoredBullet,
)
from resumate.contexts.targeting.selection_config import SelectionConfig
from resumate.contexts.targeting.selector import count_selectable_items, select_bullets
from resumate.utils.timestamp import epoch_seconds


@dataclass
class GenerationMetadata:
    """
    Metadata for tracking and reconstruction.

    Attributes:
        generation_id: Unique ID for this generation
        timestamp: Unix epoch seconds
        selected_bullet_ids: IDs of selected bullets, in selection order
        role_profile_id: Role profile used
    """

    generation_id: str
    timestamp: int
    selected_bullet_ids: List[str]
    role_profile_id: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationMetadata":
        return cls(
            generation_id=data["generationId"],
            timestamp=int(data["timestamp"]),
            selected_bullet_ids=list(data["selectedBulletIds"]),
            role_profile_id=data["roleProfileId"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generationId": self.generation_id,
            "timestamp": self.timestamp,
            "selectedBulletIds": list(self.selected_bullet_ids),
            "roleProfileId": self.role_profile_id,
        }


@dataclass
class GenerationPayload:
    """Everything a renderer receives to produce a targeted resume."""

    personal: PersonalInfo
    selected_bullets: List[ScoredBullet]
    role_profile: RoleProfile
    education: Optional[List[Education]] = None
    skills: Optional[Dict[str, List[str]]] = None
    summary: Optional[str] = None
    meta_footer: Optional[str] = None
    total_bullets_available: Optional[int] = None
    total_companies_available: Optional[int] = None
    metadata: Optional[GenerationMetadata] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationPayload":
        education = data.get("education")
        metadata = data.get("metadata")
        return cls(
            personal=PersonalInfo.from_dict(data["personal"]),
            selected_bullets=[ScoredBullet.from_dict(b) for b in data["selectedBullets"]],
            role_profile=RoleProfile.from_dict(data["roleProfile"]),
            education=[Education.from_dict(e) for e in education] if education is not None else None,
            skills=data.get("skills"),
            summary=data.get("summary"),
            meta_footer=data.get("metaFooter"),
            total_bullets_available=data.get("totalBulletsAvailable"),
            total_companies_available=data.get("totalCompaniesAvailable"),
            metadata=GenerationMetadata.from_dict(metadata) if metadata is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "personal": self.personal.to_dict(),
            "selectedBullets": [b.to_dict() for b in self.selected_bullets],
            "roleProfile": self.role_profile.to_dict(),
            "education": [e.to_dict() for e in self.education] if self.education is not None else None,
            "skills": self.skills,
            "summary": self.summary,
            "metaFooter": self.meta_footer,
            "totalBulletsAvailable": self.total_bullets_available,
            "totalCompaniesAvailable": self.total_companies_available,
            "metadata": self.metadata.to_dict() if self.metadata is not None else None,
        }
        return {key: value for key, value in data.items() if value is not None}


def render_meta_footer(template: str, total_bullets: int, total_companies: int) -> str:
    """
    Fill footer placeholders with database totals.

    Supported placeholders: {bullet_count}, {company_count}. Any other braces
    are left as written.
    """
    return template.replace("{bullet_count}", str(total_bullets)).replace(
        "{company_count}", str(total_companies)
    )


def summarize_selection(selected: List[ScoredBullet]) -> Dict[str, Dict[str, int]]:
    """
    Count selected bullets per company and per tag.

    Returns:
        {"by_company": {...}, "by_position": {...}, "by_tag": {...}}, each in
        first-seen order
    """
    return {
        "by_company": dict(Counter(item.company_id for item in selected)),
        "by_position": dict(Counter(item.position_id for item in selected)),
        "by_tag": dict(Counter(tag for item in selected for tag in item.bullet.tags)),
    }


def build_generation_payload(
    resume_data: ResumeData,
    role_profile: RoleProfile,
    config: Optional[SelectionConfig] = None,
    generation_id: Optional[str] = None,
    selected: Optional[List[ScoredBullet]] = None,
) -> GenerationPayload:
    """
    Run selection and assemble the payload for a renderer.

    Args:
        resume_data: Career tree and surrounding resume sections
        role_profile: Target role profile
        config: Selection caps (defaults to SelectionConfig.default())
        generation_id: ID to record (a random UUID if omitted)
        selected: A selection already computed for this profile; skips re-running it

    Returns:
        GenerationPayload with metadata filled in
    """
    if selected is None:
        selected = select_bullets(resume_data, role_profile, config)

    _, _, total_selectable = count_selectable_items(resume_data)

    metadata = GenerationMetadata(
        generation_id=generation_id or uuid.uuid4().hex,
        timestamp=epoch_seconds(),
        selected_bullet_ids=[item.bullet.id for item in selected],
        role_profile_id=role_profile.id,
    )

    return GenerationPayload(
        personal=resume_data.personal,
        selected_bullets=list(selected),
        role_profile=role_profile,
        education=resume_data.education,
        skills=resume_data.skills,
        summary=resume_data.summary,
        meta_footer=resume_data.meta_footer,
        total_bullets_available=total_selectable,
        total_companies_available=len(resume_data.experience),
        metadata=metadata,
    )
