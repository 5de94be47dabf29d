"""
Targeting Context

Responsibilities:
- Scores every bullet (and position description) against a role profile
- Selects a bounded, diverse subset under per-company and per-position caps
- Resolves selection presets
- Assembles the generation payload handed to document renderers

Owns: Relevance scoring, content selection logic, selection configuration
Never: Loads raw documents, typesets, or mutates the career tree
"""

from resumate.contexts.targeting.payload import (
    GenerationMetadata,
    GenerationPayload,
    build_generation_payload,
    render_meta_footer,
    summarize_selection,
)
from resumate.contexts.targeting.report import format_selection_report
from resumate.contexts.targeting.scoring import (
    calculate_company_multiplier,
    calculate_position_multiplier,
    calculate_tag_relevance,
    score_bullet,
)
from resumate.contexts.targeting.selection_config import (
    SelectionConfig,
    load_selection_presets,
    resolve_selection_config,
)
from resumate.contexts.targeting.selector import (
    apply_diversity_constraints,
    collect_candidates,
    count_selectable_items,
    select_bullets,
)

__all__ = [
    # Scoring
    "score_bullet",
    "calculate_tag_relevance",
    "calculate_company_multiplier",
    "calculate_position_multiplier",
    # Selection
    "select_bullets",
    "collect_candidates",
    "apply_diversity_constraints",
    "count_selectable_items",
    # Configuration
    "SelectionConfig",
    "load_selection_presets",
    "resolve_selection_config",
    # Payload and reporting
    "GenerationPayload",
    "GenerationMetadata",
    "build_generation_payload",
    "render_meta_footer",
    "summarize_selection",
    "format_selection_report",
]
