"""
Text report for a selection run.
"""

from typing import List

from resumate.contexts.intake.resume_data_structure import ScoredBullet
from resumate.contexts.targeting.payload import summarize_selection
from resumate.contexts.targeting.selector import is_description_bullet
from resumate.utils.report_formatter import Column, TableFormatter, format_percentage

REPORT_WIDTH = 110

BULLET_COLUMNS = [
    Column("#", 3, ">"),
    Column("Score", 6, ">"),
    Column("Company", 18),
    Column("Position", 22),
    Column("Bullet", 56),
]


def format_selection_report(role_profile_name: str, selected: List[ScoredBullet], total_selectable: int) -> str:
    """
    Render the selection as a ranked table with per-company totals.

    Args:
        role_profile_name: Display name of the profile
        selected: Output of select_bullets()
        total_selectable: Denominator from count_selectable_items()

    Returns:
        Multi-line report string
    """
    table = TableFormatter(BULLET_COLUMNS, total_width=REPORT_WIDTH)
    table.add_section_header(
        f"{role_profile_name}: {len(selected)} of {total_selectable} accomplishments "
        f"({format_percentage(len(selected), total_selectable)})"
    )
    table.add_table_header()

    for rank, item in enumerate(selected, start=1):
        text = item.bullet.description
        if is_description_bullet(item):
            text = f"[role] {text}"
        table.add_row(
            [rank, f"{item.score:.3f}", item.company_name or item.company_id, item.position_name, text]
        )

    counts = summarize_selection(selected)["by_company"]
    if counts:
        table.add_separator()
        breakdown = ", ".join(f"{company}: {count}" for company, count in counts.items())
        table.add_text(f"By company: {breakdown}")

    return table.render()
