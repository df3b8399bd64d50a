"""Wage, hours and category eligibility tables.

The tables are parsed once from the packaged ruleset and cached for the
process lifetime. ``reload_rule_tables`` builds a fresh ``RuleTables`` and
replaces the cached reference; readers holding the old object keep a
complete, consistent table.
"""

import logging
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Any, Optional

from youthwork.rules.loader import DEFAULT_RULESET, RulesetError, load_ruleset
from youthwork.rules.models import (
    AgeGroup,
    CategoryRule,
    DailyWeeklyCap,
    HazardRule,
    HoursRule,
    JobCategory,
    RiskLevel,
    RuleTables,
    SchoolContext,
    TermLimits,
    WorkLimits,
)

logger = logging.getLogger(__name__)


def _decimal(value: Any, name: str) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise RulesetError(f"{name} must be a number, got {value!r}") from exc


def _require(data: dict[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise RulesetError(f"Missing '{key}' in {where}")
    return data[key]


def _parse_cap(data: dict[str, Any], where: str) -> DailyWeeklyCap:
    return DailyWeeklyCap(
        max_daily_hours=int(_require(data, "max_daily_hours", where)),
        max_weekly_hours=int(_require(data, "max_weekly_hours", where)),
    )


def _parse_hours(age_group: AgeGroup, data: dict[str, Any]) -> HoursRule:
    where = f"working_hours.{age_group.value}"
    earliest = int(_require(data, "earliest_hour", where))
    latest = int(_require(data, "latest_hour", where))
    if not 0 <= earliest < latest <= 24:
        raise RulesetError(f"{where}: working window {earliest}-{latest} is invalid")

    return HoursRule(
        age_group=age_group,
        school_day=_parse_cap(_require(data, "school_day", where), f"{where}.school_day"),
        school_holiday=_parse_cap(
            _require(data, "school_holiday", where), f"{where}.school_holiday"
        ),
        default_context=SchoolContext(data.get("default_context", "school_holiday")),
        earliest_hour=earliest,
        latest_hour=latest,
        rest_hours_between_shifts=int(_require(data, "rest_hours_between_shifts", where)),
        school_restrictions=bool(data.get("school_restrictions", False)),
    )


def _parse_category(
    category: JobCategory,
    data: dict[str, Any],
    risk_min_ages: dict[RiskLevel, int],
) -> CategoryRule:
    risk = RiskLevel(_require(data, "risk", f"categories.{category.value}"))
    return CategoryRule(
        category=category,
        risk_level=risk,
        baseline_min_age=risk_min_ages[risk],
        minors_allowed=bool(data.get("minors_allowed", False)),
        requires_adult_present=bool(data.get("requires_adult_present", False)),
        conditions=tuple(data.get("conditions", [])),
        prohibited_keywords=tuple(str(k) for k in data.get("prohibited_keywords", [])),
        notes=data.get("notes", ""),
    )


def _parse_hazard(data: dict[str, Any]) -> HazardRule:
    code = _require(data, "code", "hazards")
    window = data.get("night_window")
    if window is not None:
        if len(window) != 2:
            raise RulesetError(f"hazard {code}: night_window needs [start, end]")
        window = (int(window[0]), int(window[1]))

    return HazardRule(
        code=code,
        description=_require(data, "description", f"hazard {code}"),
        age_groups=frozenset(AgeGroup(g) for g in _require(data, "age_groups", f"hazard {code}")),
        categories=frozenset(JobCategory(c) for c in data.get("categories", [])),
        keywords=tuple(str(k) for k in data.get("keywords", [])),
        only_when_working_alone=bool(data.get("only_when_working_alone", False)),
        night_window=window,
    )


def build_rule_tables(ruleset: dict[str, Any], content_hash: str = "") -> RuleTables:
    """Parse a loaded ruleset dict into immutable tables.

    Args:
        ruleset: Ruleset as returned by ``load_ruleset``
        content_hash: SHA256 of the ruleset source

    Returns:
        RuleTables

    Raises:
        RulesetError: If the ruleset is incomplete or inconsistent
    """
    try:
        wages = _require(ruleset, "wages", "ruleset")
        hours_data = _require(ruleset, "working_hours", "ruleset")
        risk_data = _require(ruleset, "risk_levels", "ruleset")

        hours = {group: _parse_hours(group, hours_data[group.value]) for group in AgeGroup}

        risk_min_ages = {
            level: int(risk_data[level.value]["baseline_min_age"]) for level in RiskLevel
        }
        risk_descriptions = {
            level: risk_data[level.value].get("description", "") for level in RiskLevel
        }

        categories_data = _require(ruleset, "categories", "ruleset")
        categories = {
            category: _parse_category(category, categories_data[category.value], risk_min_ages)
            for category in JobCategory
        }

        hazards = tuple(_parse_hazard(h) for h in ruleset.get("hazards", []))
        unlock_ages = tuple(sorted(int(a) for a in ruleset.get("unlock_ages", [])))
    except KeyError as exc:
        raise RulesetError(f"Ruleset is missing an entry for {exc}") from exc
    except ValueError as exc:
        raise RulesetError(f"Ruleset contains an invalid value: {exc}") from exc

    return RuleTables(
        id=str(ruleset.get("id", "unknown")),
        name=str(ruleset.get("name", "")),
        version=str(ruleset.get("version", "unknown")),
        content_hash=content_hash,
        currency=str(ruleset.get("currency", "")),
        minor_hourly_wage=_decimal(wages.get("minor_hourly_minimum"), "minor_hourly_minimum"),
        young_adult_hourly_wage=_decimal(
            wages.get("young_adult_hourly_minimum"), "young_adult_hourly_minimum"
        ),
        low_wage_margin=_decimal(wages.get("low_wage_margin", "0"), "low_wage_margin"),
        hours=hours,
        risk_min_ages=risk_min_ages,
        risk_descriptions=risk_descriptions,
        categories=categories,
        hazards=hazards,
        unlock_ages=unlock_ages,
    )


@lru_cache
def get_rule_tables() -> RuleTables:
    """Get the process-wide rule tables, loading them on first use."""
    ruleset, ruleset_hash = load_ruleset(DEFAULT_RULESET)
    tables = build_rule_tables(ruleset, ruleset_hash)
    logger.info(
        f"Loaded ruleset {tables.id} v{tables.version} (hash={tables.content_hash[:12]})"
    )
    return tables


def _publish_wage_constants(tables: RuleTables) -> None:
    global MINIMUM_HOURLY_WAGE_YOUTH, MINIMUM_HOURLY_WAGE_ADULT
    MINIMUM_HOURLY_WAGE_YOUTH = tables.minor_hourly_wage
    MINIMUM_HOURLY_WAGE_ADULT = tables.young_adult_hourly_wage


def reload_rule_tables() -> RuleTables:
    """Rebuild the rule tables from disk and swap the cached reference.

    Tables obtained before the reload are left untouched. The module-level
    wage constants are rebound to the new tables; names imported with
    ``from ... import`` elsewhere keep the value they were imported with.
    """
    get_rule_tables.cache_clear()
    tables = get_rule_tables()
    _publish_wage_constants(tables)
    return tables


def limits(
    age_group: AgeGroup,
    is_school_day: bool = False,
    is_school_holiday: bool = False,
) -> WorkLimits:
    """Resolve working limits from the process-wide tables."""
    return get_rule_tables().limits(age_group, is_school_day, is_school_holiday)


def term_limits(age_group: AgeGroup) -> Optional[TermLimits]:
    return get_rule_tables().term_limits(age_group)


def allowed_categories(age_group: AgeGroup) -> frozenset[JobCategory]:
    return get_rule_tables().allowed_categories(age_group)


def restrictions(age_group: AgeGroup) -> tuple[str, ...]:
    return get_rule_tables().restrictions(age_group)


# Wage floors of the current tables, rebound on reload
MINIMUM_HOURLY_WAGE_YOUTH: Decimal = get_rule_tables().minor_hourly_wage
MINIMUM_HOURLY_WAGE_ADULT: Decimal = get_rule_tables().young_adult_hourly_wage
