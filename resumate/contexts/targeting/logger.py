"""
Targeting context logger.

Provides logging interface for targeting context with automatic [target] prefix.
All targeting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from resumate.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[target]"


def setup_targeting_logger(log_dir: Path, role_profile_id: str, config: dict) -> Path:
    """
    Setup logger for targeting context.

    Args:
        log_dir: Directory for this selection session
        role_profile_id: Profile being targeted (recorded in provenance)
        config: Selection config as a dict (recorded in provenance)

    Returns:
        Path to log file

    Example:
        from resumate.contexts.targeting.logger import setup_targeting_logger, _log_info

        log_file = setup_targeting_logger(log_dir, "platform-engineer", config.to_dict())
        _log_info("Starting selection...")
    """
    return _setup_logger(
        context_name="target",
        log_dir=log_dir,
        extra_provenance={"Role profile": role_profile_id, "Selection config": config},
    )


def _log_info(message: str) -> None:
    """Log info message with [target] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [target] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [target] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [target] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_selection_result(role_profile_name: str, selected: list, total_candidates: int, elapsed_ms: float) -> None:
    """Log the outcome of one selection run."""
    if not selected:
        _log_warning(f"{role_profile_name}: no bullets selected from {total_candidates} candidates")
        return

    _log_success(
        f"{role_profile_name}: selected {len(selected)} of {total_candidates} candidates ({elapsed_ms:.2f}ms)"
    )
    _log_info(f"  Top score: {selected[0].score:.3f}, lowest score: {selected[-1].score:.3f}")
