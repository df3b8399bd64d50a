"""Versioned youth labour rule tables.

The numeric limits, wage floors, category allow-lists and hazard deny-lists
live in a YAML ruleset shipped with the package. They are loaded once,
hashed for traceability and exposed as immutable tables.
"""

from youthwork.rules.loader import (
    DEFAULT_RULESET,
    RulesetError,
    compute_ruleset_hash,
    load_ruleset,
)
from youthwork.rules.models import (
    AgeGroup,
    CategoryRule,
    HazardRule,
    JobCategory,
    RiskLevel,
    RuleTables,
    TermLimits,
    WorkLimits,
)
from youthwork.rules.tables import (
    allowed_categories,
    build_rule_tables,
    get_rule_tables,
    limits,
    reload_rule_tables,
    restrictions,
    term_limits,
)

__all__ = [
    "DEFAULT_RULESET",
    "RulesetError",
    "compute_ruleset_hash",
    "load_ruleset",
    "AgeGroup",
    "CategoryRule",
    "HazardRule",
    "JobCategory",
    "RiskLevel",
    "RuleTables",
    "TermLimits",
    "WorkLimits",
    "allowed_categories",
    "build_rule_tables",
    "get_rule_tables",
    "limits",
    "reload_rule_tables",
    "restrictions",
    "term_limits",
]
