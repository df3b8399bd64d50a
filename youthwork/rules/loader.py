"""YAML ruleset loader with integrity hashing."""

import hashlib
from pathlib import Path
from typing import Any

import yaml

# Rulesets ship inside the package
RULESETS_DIR = Path(__file__).parent.parent / "rulesets"

DEFAULT_RULESET = "no-youth-labor-v1.0.0.yaml"


class RulesetError(Exception):
    """Raised when a ruleset file is missing or malformed."""


def compute_ruleset_hash(content: str) -> str:
    """Compute SHA256 hash of ruleset content.

    Recorded alongside every verdict so a decision can be traced back to
    the exact rule text that produced it.

    Args:
        content: Raw YAML content string

    Returns:
        SHA256 hex digest
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def load_ruleset(
    filename: str = DEFAULT_RULESET,
    rulesets_dir: Path | None = None,
) -> tuple[dict[str, Any], str]:
    """Load a ruleset YAML file and compute its hash.

    Args:
        filename: Name of the ruleset file
        rulesets_dir: Directory containing rulesets (defaults to the packaged one)

    Returns:
        Tuple of (parsed ruleset dict, SHA256 hash)

    Raises:
        RulesetError: If the file doesn't exist or isn't a YAML mapping
    """
    if rulesets_dir is None:
        rulesets_dir = RULESETS_DIR

    filepath = rulesets_dir / filename

    if not filepath.exists():
        raise RulesetError(f"Ruleset not found: {filepath}")

    content = filepath.read_text(encoding="utf-8")
    ruleset_hash = compute_ruleset_hash(content)

    try:
        ruleset = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise RulesetError(f"Invalid YAML in ruleset {filename}: {exc}") from exc

    if not isinstance(ruleset, dict):
        raise RulesetError(f"Ruleset {filename} must be a mapping at top level")

    return ruleset, ruleset_hash
