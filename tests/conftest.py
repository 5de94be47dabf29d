"""Shared fixtures: a small in-memory career tree and role profile."""

import pytest

from resumate.contexts.intake.resume_data_structure import (
    Bullet,
    Company,
    PersonalInfo,
    Position,
    ResumeData,
    RoleProfile,
    ScoringWeights,
)


def make_resume(experience) -> ResumeData:
    return ResumeData(personal=PersonalInfo(name="Test"), experience=experience, summary="Test")


@pytest.fixture
def role_profile() -> RoleProfile:
    return RoleProfile(
        id="test",
        name="Test Role",
        description="Test",
        tag_weights={"engineering": 1.0, "leadership": 0.9},
        scoring_weights=ScoringWeights(tag_relevance=0.6, priority=0.4),
    )


@pytest.fixture
def resume() -> ResumeData:
    """
    Two companies, five candidates.

    Expected ranking for the default profile:
    b1, pos1-description, b2, pos2-description, b3
    """
    return make_resume(
        [
            Company(
                id="company1",
                name="Company 1",
                date_start="2020",
                date_end="2021",
                priority=10,
                children=[
                    Position(
                        id="pos1",
                        name="Senior Engineer",
                        date_start="2020",
                        date_end="2021",
                        description="Led engineering team",
                        tags=["engineering", "leadership"],
                        priority=10,
                        children=[
                            Bullet(id="b1", description="Built scalable system", tags=["engineering"], priority=10),
                            Bullet(id="b2", description="Mentored team", tags=["leadership"], priority=9),
                        ],
                    )
                ],
            ),
            Company(
                id="company2",
                name="Company 2",
                date_start="2019",
                date_end="2020",
                priority=5,
                children=[
                    Position(
                        id="pos2",
                        name="Junior Dev",
                        date_start="2019",
                        date_end="2020",
                        description="Wrote code",
                        tags=[],
                        priority=5,
                        children=[Bullet(id="b3", description="Fixed bugs", tags=[], priority=3)],
                    )
                ],
            ),
        ]
    )
