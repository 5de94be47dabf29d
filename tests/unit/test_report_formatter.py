"""Unit tests for text table formatting and the selection report."""

import pytest

from resumate.contexts.intake.resume_data_structure import (
    Bullet,
    Company,
    PersonalInfo,
    Position,
    ResumeData,
)
from resumate.contexts.targeting.report import format_selection_report
from resumate.contexts.targeting.selection_config import SelectionConfig
from resumate.contexts.targeting.selector import select_bullets
from resumate.utils.report_formatter import Column, TableFormatter, format_percentage


@pytest.mark.unit
def test_column_truncates_long_values():
    column = Column("Name", 8)
    assert column.format_value("abcdefghijkl") == "abcde..."
    assert column.format_value(42) == "42      "


@pytest.mark.unit
def test_column_alignment():
    assert Column("#", 4, ">").format_value(7) == "   7"
    assert Column("#", 4, ">").format_header() == "   #"


@pytest.mark.unit
def test_table_render():
    table = TableFormatter([Column("A", 3), Column("B", 3)], total_width=7)
    table.add_section_header("Title").add_table_header().add_row(["x", "y"]).add_text("end")

    assert table.render().splitlines() == [
        "=======",
        "Title",
        "=======",
        "A   B  ",
        "-------",
        "x   y  ",
        "end",
    ]


@pytest.mark.unit
def test_row_length_mismatch():
    table = TableFormatter([Column("A", 3)])
    with pytest.raises(ValueError, match="Expected 1 values, got 2"):
        table.add_row(["x", "y"])


@pytest.mark.unit
@pytest.mark.parametrize(
    "count,total,expected",
    [(3, 4, "75.0%"), (0, 0, "0.0%"), (1, 3, "33.3%"), (18, 18, "100.0%")],
)
def test_format_percentage(count, total, expected):
    assert format_percentage(count, total) == expected


@pytest.mark.unit
def test_selection_report(resume, role_profile):
    selected = select_bullets(resume, role_profile, SelectionConfig(max_bullets=4))
    report = format_selection_report("Test Role", selected, 5)

    assert "Test Role: 4 of 5 accomplishments (80.0%)" in report
    assert "[role] Led engineering team" in report
    assert "Built scalable system" in report
    assert report.splitlines()[-1] == "By company: company1: 3, company2: 1"


@pytest.mark.unit
def test_selection_report_empty():
    report = format_selection_report("Nobody", [], 0)

    assert "Nobody: 0 of 0 accomplishments (0.0%)" in report
    assert "By company" not in report


@pytest.mark.unit
def test_selection_report_marks_only_synthesized_descriptions(role_profile):
    position = Position(
        id="pos",
        name="Engineer",
        date_start="2020",
        children=[Bullet(id="pos-description", description="Real bullet", priority=5)],
    )
    resume = ResumeData(
        personal=PersonalInfo(name="Test"),
        experience=[Company(id="co", date_start="2020", children=[position])],
    )
    report = format_selection_report("Test Role", select_bullets(resume, role_profile, SelectionConfig()), 1)

    assert "Real bullet" in report
    assert "[role]" not in report
