"""
Selection configuration and preset resolution.

SelectionConfig carries the caps applied by the selector. Named presets live in
a YAML file and are composable: later presets override earlier ones, and
explicit overrides win over every preset.

Examples:
    >>> resolve_selection_config(["length_compact", "diversity_strict"])
    SelectionConfig(max_bullets=12, max_per_company=4, min_per_company=None, max_per_position=2)

    >>> resolve_selection_config(["diversity_relaxed"], overrides={"max_bullets": 10})
    SelectionConfig(max_bullets=10, max_per_company=None, min_per_company=None, max_per_position=None)
"""

import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
DEFAULT_PRESETS_PATH = Path(__file__).parent / "presets" / "selection_presets.yaml"
SELECTION_PRESETS_PATH = Path(os.getenv("SELECTION_PRESETS_PATH", str(DEFAULT_PRESETS_PATH)))

# Default caps: 18 bullets total, at most 6 per company and 4 per position
DEFAULT_SELECTION = {
    "max_bullets": 18,
    "max_per_company": 6,
    "min_per_company": None,
    "max_per_position": 4,
}


@dataclass(frozen=True)
class SelectionConfig:
    """
    Caller-supplied limits for bullet selection.

    Attributes:
        max_bullets: Cap on total selected (None = unbounded)
        max_per_company: Cap per company ID (None = no cap)
        min_per_company: Accepted for compatibility but NOT enforced; the
            single greedy pass has no way to backfill a company after the fact
        max_per_position: Cap per position ID (None = no cap)
    """

    max_bullets: Optional[int] = None
    max_per_company: Optional[int] = None
    min_per_company: Optional[int] = None
    max_per_position: Optional[int] = None

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
                raise ValueError(f"{f.name} must be a non-negative integer or None, got {value!r}")

    @classmethod
    def default(cls) -> "SelectionConfig":
        return cls(**DEFAULT_SELECTION)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SelectionConfig":
        """
        Raises:
            ValueError: If data contains keys that are not config fields
        """
        _check_keys(data, source="selection config")
        return cls(**data)

    def to_dict(self) -> Dict[str, Optional[int]]:
        return asdict(self)


def _check_keys(data: Dict[str, Any], source: str) -> None:
    known = {f.name for f in fields(SelectionConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown {source} keys: {unknown}. Valid keys: {sorted(known)}")


def load_selection_presets(config_path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load the presets file and flatten to a single-level dict.

    Collapses nested structure: length.compact -> length_compact

    Args:
        config_path: Optional path to presets file (defaults to SELECTION_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to configs
        Example: {"length_compact": {"max_bullets": 12}, ...}
    """
    if config_path is None:
        config_path = SELECTION_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for category, presets in nested.items():
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = config or {}

    return flattened


def resolve_selection_config(
    preset_names: Iterable[str] = (),
    overrides: Optional[Dict[str, Any]] = None,
    config_path: Optional[Path] = None,
    base: Optional[SelectionConfig] = None,
) -> SelectionConfig:
    """
    Build a SelectionConfig from the defaults, named presets, and overrides.

    Args:
        preset_names: Presets to apply in order (e.g., ["length_compact", "diversity_strict"])
        overrides: Explicit field values; entries set to None are ignored
        config_path: Optional path to presets file
        base: Starting config (defaults to SelectionConfig.default())

    Returns:
        Resolved SelectionConfig

    Raises:
        ValueError: If a preset is not found or a key is not a config field
    """
    config = base if base is not None else SelectionConfig.default()
    preset_names = list(preset_names)

    if preset_names:
        presets = load_selection_presets(config_path)
        for preset_name in preset_names:
            if preset_name not in presets:
                raise ValueError(
                    f"Preset '{preset_name}' not found. Available presets: {list(presets.keys())}"
                )
            preset = presets[preset_name]
            _check_keys(preset, source=f"preset '{preset_name}'")
            config = replace(config, **preset)

    if overrides:
        explicit = {key: value for key, value in overrides.items() if value is not None}
        _check_keys(explicit, source="override")
        config = replace(config, **explicit)

    return config
