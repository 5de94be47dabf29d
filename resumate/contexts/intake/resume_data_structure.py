"""
Resume Data Structures

Defines the hierarchical career tree (Company -> Position -> Bullet), role
profiles, and the surrounding resume sections. These structures are the
interface between the Intake and Targeting contexts.

Intake owns:
- Building these instances from JSON/YAML documents (camelCase keys)
- Structural validation

Targeting only reads them; nothing downstream mutates a loaded tree.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

Tag = str

# Sum tolerance for deciding whether weights already add up to 1.0
NORMALIZE_TOLERANCE = 0.001
# Sum tolerance accepted by validate()
VALIDATE_TOLERANCE = 0.01


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    """Remove keys whose value is None (optional fields are omitted on output)."""
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class Bullet:
    """
    Leaf achievement statement.

    Attributes:
        id: Unique identifier
        description: Text that appears on the resume
        tags: Category tags used for relevance scoring
        priority: Manual importance 1-10, higher = more impressive
        name: Optional heading, rarely used
        location: Optional location, rarely used at bullet level
        date_start: Optional start date for time-bound achievements
        date_end: Optional end date for time-bound achievements
        summary: Optional short context
        link: Optional URL to the work, a recording, or a demo
    """

    id: str
    description: str
    tags: List[Tag] = field(default_factory=list)
    priority: int = 5
    name: Optional[str] = None
    location: Optional[str] = None
    date_start: Optional[str] = None
    date_end: Optional[str] = None
    summary: Optional[str] = None
    link: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bullet":
        return cls(
            id=data["id"],
            description=data["description"],
            tags=list(data.get("tags") or []),
            priority=data["priority"],
            name=data.get("name"),
            location=data.get("location"),
            date_start=data.get("dateStart"),
            date_end=data.get("dateEnd"),
            summary=data.get("summary"),
            link=data.get("link"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "name": self.name,
                "location": self.location,
                "dateStart": self.date_start,
                "dateEnd": self.date_end,
                "summary": self.summary,
                "description": self.description,
                "tags": list(self.tags),
                "priority": self.priority,
                "link": self.link,
            }
        )


@dataclass
class Position:
    """
    Role held at a company.

    A position with a description but no bullets is valid: the description is
    itself scored as a bullet during selection.
    """

    id: str
    name: str
    date_start: str
    tags: List[Tag] = field(default_factory=list)
    priority: int = 5
    date_end: Optional[str] = None
    location: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    children: List[Bullet] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Position":
        return cls(
            id=data["id"],
            name=data["name"],
            date_start=data["dateStart"],
            tags=list(data.get("tags") or []),
            priority=data["priority"],
            date_end=data.get("dateEnd"),
            location=data.get("location"),
            summary=data.get("summary"),
            description=data.get("description"),
            link=data.get("link"),
            children=[Bullet.from_dict(b) for b in data.get("children") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "name": self.name,
                "location": self.location,
                "dateStart": self.date_start,
                "dateEnd": self.date_end,
                "summary": self.summary,
                "description": self.description,
                "tags": list(self.tags),
                "priority": self.priority,
                "link": self.link,
                "children": [b.to_dict() for b in self.children],
            }
        )


@dataclass
class Company:
    """Top level of the experience hierarchy."""

    id: str
    date_start: str
    tags: List[Tag] = field(default_factory=list)
    priority: int = 5
    children: List[Position] = field(default_factory=list)
    name: Optional[str] = None
    location: Optional[str] = None
    date_end: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Company":
        return cls(
            id=data["id"],
            date_start=data["dateStart"],
            tags=list(data.get("tags") or []),
            priority=data["priority"],
            children=[Position.from_dict(p) for p in data.get("children") or []],
            name=data.get("name"),
            location=data.get("location"),
            date_end=data.get("dateEnd"),
            summary=data.get("summary"),
            description=data.get("description"),
            link=data.get("link"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "name": self.name,
                "location": self.location,
                "dateStart": self.date_start,
                "dateEnd": self.date_end,
                "summary": self.summary,
                "description": self.description,
                "tags": list(self.tags),
                "priority": self.priority,
                "link": self.link,
                "children": [p.to_dict() for p in self.children],
            }
        )


@dataclass(frozen=True)
class ScoringWeights:
    """
    Weights for the two scoring components.

    Should sum to ~1.0. The scorer does not enforce this; use normalize() or
    validate() where profiles are constructed.
    """

    tag_relevance: float
    priority: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringWeights":
        return cls(tag_relevance=float(data["tagRelevance"]), priority=float(data["priority"]))

    def to_dict(self) -> Dict[str, float]:
        return {"tagRelevance": self.tag_relevance, "priority": self.priority}

    def normalize(self) -> Tuple["ScoringWeights", Optional[str]]:
        """
        Rescale weights so they sum to 1.0.

        Returns:
            Tuple of (weights, message). Message is None when the weights
            already summed to 1.0 and were returned unchanged.

        Raises:
            ValueError: If the weights sum to zero or less, leaving no ratio to keep
        """
        total = self.tag_relevance + self.priority
        if abs(total - 1.0) < NORMALIZE_TOLERANCE:
            return self, None

        if total <= 0.0:
            raise ValueError(
                f"Scoring weights must sum to a positive value to normalize, got {total:.3f} "
                f"(tag_relevance: {self.tag_relevance:.2f}, priority: {self.priority:.2f})"
            )

        normalized = ScoringWeights(
            tag_relevance=self.tag_relevance / total,
            priority=self.priority / total,
        )
        message = (
            f"Normalized scoring weights from {total:.3f} to 1.0 "
            f"(tag_relevance: {self.tag_relevance:.2f} → {normalized.tag_relevance:.2f}, "
            f"priority: {self.priority:.2f} → {normalized.priority:.2f})"
        )
        return normalized, message

    def validate(self) -> None:
        """
        Raises:
            ValueError: If a weight is negative or the sum is not ~1.0
        """
        if self.tag_relevance < 0.0 or self.priority < 0.0:
            raise ValueError(
                f"Scoring weights cannot be negative "
                f"(tag_relevance: {self.tag_relevance:.2f}, priority: {self.priority:.2f})"
            )

        total = self.tag_relevance + self.priority
        if abs(total - 1.0) > VALIDATE_TOLERANCE:
            raise ValueError(
                f"Scoring weights must sum to ~1.0, got {total:.3f} "
                f"(tag_relevance: {self.tag_relevance:.2f}, priority: {self.priority:.2f})"
            )


@dataclass
class RoleProfile:
    """
    Selection criteria for one target job type.

    Attributes:
        id: Unique identifier (e.g., "platform-engineer")
        name: Display name
        tag_weights: Tag -> relevance 0.0-1.0, insertion ordered; absent tags contribute nothing
        scoring_weights: Component weights for the scorer
        description: Optional description of the role type
    """

    id: str
    name: str
    tag_weights: Dict[Tag, float]
    scoring_weights: ScoringWeights
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoleProfile":
        return cls(
            id=data["id"],
            name=data["name"],
            tag_weights={tag: float(w) for tag, w in (data.get("tagWeights") or {}).items()},
            scoring_weights=ScoringWeights.from_dict(data["scoringWeights"]),
            description=data.get("description"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "name": self.name,
                "description": self.description,
                "tagWeights": dict(self.tag_weights),
                "scoringWeights": self.scoring_weights.to_dict(),
            }
        )


@dataclass
class PersonalInfo:
    """Contact details shown in the resume header."""

    name: str
    nickname: Optional[str] = None
    tagline: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None
    twitter: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonalInfo":
        known = {f for f in cls.__dataclass_fields__}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(dict(self.__dict__))


@dataclass
class Education:
    """Degree entry."""

    degree: str
    degree_type: str
    institution: str
    location: str
    year: str
    coursework: Optional[List[str]] = None
    societies: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Education":
        return cls(
            degree=data["degree"],
            degree_type=data["degreeType"],
            institution=data["institution"],
            location=data["location"],
            year=str(data["year"]),
            coursework=data.get("coursework"),
            societies=data.get("societies"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "degree": self.degree,
                "degreeType": self.degree_type,
                "institution": self.institution,
                "location": self.location,
                "year": self.year,
                "coursework": self.coursework,
                "societies": self.societies,
            }
        )


@dataclass
class ResumeData:
    """
    Complete resume document: the root object of resume-data.json.
    """

    personal: PersonalInfo
    experience: List[Company] = field(default_factory=list)
    summary: Optional[str] = None
    education: Optional[List[Education]] = None
    skills: Optional[Dict[str, List[str]]] = None
    role_profiles: Optional[List[RoleProfile]] = None
    meta_footer: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeData":
        education = data.get("education")
        role_profiles = data.get("roleProfiles")
        skills = data.get("skills")
        return cls(
            personal=PersonalInfo.from_dict(data["personal"]),
            experience=[Company.from_dict(c) for c in data.get("experience") or []],
            summary=data.get("summary"),
            education=[Education.from_dict(e) for e in education] if education is not None else None,
            skills={k: list(v) for k, v in skills.items()} if skills is not None else None,
            role_profiles=(
                [RoleProfile.from_dict(r) for r in role_profiles] if role_profiles is not None else None
            ),
            meta_footer=data.get("metaFooter"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "personal": self.personal.to_dict(),
                "summary": self.summary,
                "experience": [c.to_dict() for c in self.experience],
                "education": [e.to_dict() for e in self.education] if self.education is not None else None,
                "skills": self.skills,
                "roleProfiles": (
                    [r.to_dict() for r in self.role_profiles] if self.role_profiles is not None else None
                ),
                "metaFooter": self.meta_footer,
            }
        )


@dataclass
class ScoredBullet:
    """
    A scored candidate with denormalized context from its position and company.

    Produced by the selector; the wrapped bullet is either a real bullet from the
    tree or the virtual bullet synthesized from a position description.
    """

    bullet: Bullet
    score: float
    company_id: str
    company_name: Optional[str]
    company_date_start: str
    position_id: str
    position_name: str
    position_date_start: str
    company_description: Optional[str] = None
    company_link: Optional[str] = None
    company_date_end: Optional[str] = None
    company_location: Optional[str] = None
    position_description: Optional[str] = None
    position_date_end: Optional[str] = None

    @classmethod
    def from_context(
        cls, bullet: Bullet, score: float, position: Position, company: Company
    ) -> "ScoredBullet":
        return cls(
            bullet=bullet,
            score=score,
            company_id=company.id,
            company_name=company.name,
            company_date_start=company.date_start,
            position_id=position.id,
            position_name=position.name,
            position_date_start=position.date_start,
            company_description=company.description,
            company_link=company.link,
            company_date_end=company.date_end,
            company_location=company.location,
            position_description=position.description,
            position_date_end=position.date_end,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoredBullet":
        return cls(
            bullet=Bullet.from_dict(data["bullet"]),
            score=float(data["score"]),
            company_id=data["companyId"],
            company_name=data.get("companyName"),
            company_date_start=data["companyDateStart"],
            position_id=data["positionId"],
            position_name=data["positionName"],
            position_date_start=data["positionDateStart"],
            company_description=data.get("companyDescription"),
            company_link=data.get("companyLink"),
            company_date_end=data.get("companyDateEnd"),
            company_location=data.get("companyLocation"),
            position_description=data.get("positionDescription"),
            position_date_end=data.get("positionDateEnd"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(
            {
                "bullet": self.bullet.to_dict(),
                "score": self.score,
                "companyId": self.company_id,
                "companyName": self.company_name,
                "companyDescription": self.company_description,
                "companyLink": self.company_link,
                "companyDateStart": self.company_date_start,
                "companyDateEnd": self.company_date_end,
                "companyLocation": self.company_location,
                "positionId": self.position_id,
                "positionName": self.position_name,
                "positionDescription": self.position_description,
                "positionDateStart": self.position_date_start,
                "positionDateEnd": self.position_date_end,
            }
        )
