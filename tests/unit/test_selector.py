"""
Unit tests for bullet selection.

Covers candidate generation, ranking, and the greedy quota pass.
"""

import copy

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
from resumate.contexts.targeting.selection_config import SelectionConfig
from resumate.contexts.targeting.selector import (
    apply_diversity_constraints,
    collect_candidates,
    count_selectable_items,
    description_as_bullet,
    is_description_bullet,
    rank_candidates,
    select_bullets,
)

UNBOUNDED = SelectionConfig()


def ids(selected):
    return [item.bullet.id for item in selected]


def single_position_resume(bullets, description=None) -> ResumeData:
    position = Position(
        id="pos", name="Engineer", date_start="2020", priority=5, description=description, children=bullets
    )
    company = Company(id="co", name="Co", date_start="2020", priority=5, children=[position])
    return ResumeData(personal=PersonalInfo(name="Test"), experience=[company])


@pytest.mark.unit
def test_candidates_in_tree_order(resume, role_profile):
    """Description comes before its position's bullets."""
    candidates = collect_candidates(resume, role_profile)
    assert ids(candidates) == ["pos1-description", "b1", "b2", "pos2-description", "b3"]


@pytest.mark.unit
def test_full_ranking_without_caps(resume, role_profile):
    selected = select_bullets(resume, role_profile, UNBOUNDED)

    assert ids(selected) == ["b1", "pos1-description", "b2", "pos2-description", "b3"]
    scores = [item.score for item in selected]
    assert scores == sorted(scores, reverse=True)


@pytest.mark.unit
def test_default_config_applies_when_omitted(resume, role_profile):
    assert select_bullets(resume, role_profile) == select_bullets(resume, role_profile, SelectionConfig.default())


@pytest.mark.unit
def test_max_bullets_limits_total(resume, role_profile):
    selected = select_bullets(resume, role_profile, SelectionConfig(max_bullets=3))
    assert ids(selected) == ["b1", "pos1-description", "b2"]


@pytest.mark.unit
def test_max_bullets_zero_selects_nothing(resume, role_profile):
    assert select_bullets(resume, role_profile, SelectionConfig(max_bullets=0)) == []


@pytest.mark.unit
def test_max_bullets_larger_than_pool(resume, role_profile):
    selected = select_bullets(resume, role_profile, SelectionConfig(max_bullets=100))
    assert len(selected) == 5


@pytest.mark.unit
def test_company_cap_skips_and_continues(resume, role_profile):
    """A capped company's remaining bullets are skipped, lower scorers still get in."""
    selected = select_bullets(resume, role_profile, SelectionConfig(max_per_company=2))

    assert ids(selected) == ["b1", "pos1-description", "pos2-description", "b3"]
    assert sum(1 for item in selected if item.company_id == "company1") == 2


@pytest.mark.unit
def test_position_cap(resume, role_profile):
    selected = select_bullets(resume, role_profile, SelectionConfig(max_per_position=1))
    assert ids(selected) == ["b1", "pos2-description"]


@pytest.mark.unit
def test_caps_combine(resume, role_profile):
    config = SelectionConfig(max_bullets=2, max_per_company=1, max_per_position=1)
    selected = select_bullets(resume, role_profile, config)
    assert ids(selected) == ["b1", "pos2-description"]


@pytest.mark.unit
def test_max_bullets_stops_before_caps_checked(resume, role_profile):
    """Once full, nothing else is admitted even if caps would allow it."""
    config = SelectionConfig(max_bullets=1, max_per_company=10)
    assert ids(select_bullets(resume, role_profile, config)) == ["b1"]


@pytest.mark.unit
def test_min_per_company_has_no_effect(resume, role_profile):
    capped = SelectionConfig(max_bullets=3, max_per_company=3)
    with_minimum = SelectionConfig(max_bullets=3, max_per_company=3, min_per_company=2)

    selected = select_bullets(resume, role_profile, with_minimum)

    assert ids(selected) == ids(select_bullets(resume, role_profile, capped))
    assert all(item.company_id == "company1" for item in selected)


@pytest.mark.unit
def test_max_bullets_five_of_seven():
    """Seven distinct-score candidates, cap of five keeps the five best."""
    bullets = [
        Bullet(id=f"b{priority}", description=f"Bullet {priority}", tags=["engineering"], priority=priority)
        for priority in range(1, 8)
    ]
    profile = RoleProfile(
        id="eng",
        name="Engineer",
        tag_weights={"engineering": 1.0},
        scoring_weights=ScoringWeights(tag_relevance=0.5, priority=0.5),
    )
    selected = select_bullets(single_position_resume(bullets), profile, SelectionConfig(max_bullets=5))

    assert ids(selected) == ["b7", "b6", "b5", "b4", "b3"]


@pytest.mark.unit
def test_equal_scores_keep_generation_order(role_profile):
    bullets = [Bullet(id=f"t{i}", description="Same", tags=["engineering"], priority=7) for i in range(4)]
    selected = select_bullets(single_position_resume(bullets), role_profile, UNBOUNDED)

    assert ids(selected) == ["t0", "t1", "t2", "t3"]
    assert len({item.score for item in selected}) == 1


@pytest.mark.unit
def test_rank_candidates_is_stable(resume, role_profile):
    ranked = rank_candidates(collect_candidates(resume, role_profile))
    assert ids(rank_candidates(ranked)) == ids(ranked)


@pytest.mark.unit
def test_description_bullet_inherits_position(resume, role_profile):
    selected = select_bullets(resume, role_profile, UNBOUNDED)
    description = next(item for item in selected if item.bullet.id == "pos1-description")

    assert is_description_bullet(description)
    assert description.bullet.description == "Led engineering team"
    assert description.bullet.tags == ["engineering", "leadership"]
    assert description.bullet.priority == 10
    assert description.position_id == "pos1"


@pytest.mark.unit
def test_description_bullet_tags_are_copied():
    position = Position(id="p", name="P", date_start="2020", tags=["a"], description="Did things")
    virtual = description_as_bullet(position)
    virtual.tags.append("b")

    assert position.tags == ["a"]


@pytest.mark.unit
def test_empty_description_is_not_a_candidate(role_profile):
    bullets = [Bullet(id="only", description="Real bullet", priority=5)]
    for description in (None, ""):
        candidates = collect_candidates(single_position_resume(bullets, description), role_profile)
        assert ids(candidates) == ["only"]


@pytest.mark.unit
def test_real_bullets_are_not_description_bullets(resume, role_profile):
    selected = select_bullets(resume, role_profile, UNBOUNDED)
    assert [is_description_bullet(item) for item in selected] == [False, True, False, True, False]


@pytest.mark.unit
def test_scored_bullet_carries_context(resume, role_profile):
    selected = select_bullets(resume, role_profile, UNBOUNDED)
    b3 = next(item for item in selected if item.bullet.id == "b3")

    assert b3.company_id == "company2"
    assert b3.company_name == "Company 2"
    assert b3.company_date_start == "2019"
    assert b3.company_date_end == "2020"
    assert b3.position_id == "pos2"
    assert b3.position_name == "Junior Dev"
    assert b3.position_description == "Wrote code"


@pytest.mark.unit
def test_empty_experience(role_profile):
    empty = ResumeData(personal=PersonalInfo(name="Test"), experience=[])
    assert select_bullets(empty, role_profile, UNBOUNDED) == []
    assert count_selectable_items(empty) == (0, 0, 0)


@pytest.mark.unit
def test_empty_tag_weights_rank_by_priority(resume):
    profile = RoleProfile(
        id="none",
        name="No Tags",
        tag_weights={},
        scoring_weights=ScoringWeights(tag_relevance=0.6, priority=0.4),
    )
    selected = select_bullets(resume, profile, UNBOUNDED)

    assert len(selected) == 5
    assert all(item.score >= 0.0 for item in selected)


@pytest.mark.unit
def test_selection_does_not_mutate_input(resume, role_profile):
    resume_before = copy.deepcopy(resume)
    profile_before = copy.deepcopy(role_profile)

    select_bullets(resume, role_profile, SelectionConfig(max_bullets=2, max_per_company=1))

    assert resume == resume_before
    assert role_profile == profile_before


@pytest.mark.unit
def test_apply_constraints_preserves_order(resume, role_profile):
    ranked = rank_candidates(collect_candidates(resume, role_profile))
    admitted = apply_diversity_constraints(ranked, SelectionConfig(max_per_company=1))

    assert ids(admitted) == ["b1", "pos2-description"]


@pytest.mark.unit
def test_count_selectable_items(resume):
    assert count_selectable_items(resume) == (3, 2, 5)


@pytest.mark.unit
def test_real_bullet_with_description_style_id(role_profile):
    """Without a position description, a '-description' ID is an ordinary bullet."""
    bullets = [Bullet(id="pos-description", description="Real bullet", tags=["engineering"], priority=5)]
    selected = select_bullets(single_position_resume(bullets), role_profile, UNBOUNDED)

    assert ids(selected) == ["pos-description"]
    assert not is_description_bullet(selected[0])
