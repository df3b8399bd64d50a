"""Job compliance evaluation.

Validates a job listing against the youth labour rule tables for one
worker age group. Every check runs on every call, so a single evaluation
surfaces every problem with the listing at once.

SAFETY CRITICAL: a violation means the job must not be shown to workers
in that age group until it is fixed. Violations are returned as data and
never raised.
"""

from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal
from typing import Optional

from youthwork.policy.age import classify_age, representative_age
from youthwork.policy.models import (
    ComplianceResult,
    ComplianceWarning,
    JobInput,
    JobValidation,
    PayType,
    Severity,
    ValidationSummary,
    Violation,
    WorkerAgeInfo,
)
from youthwork.rules.models import AgeGroup, JobCategory, RuleTables, SchoolContext, WorkLimits
from youthwork.rules.tables import get_rule_tables
from youthwork.utils.time import (
    clock_minutes,
    format_clock,
    format_hour,
    shift_overlaps_window,
    time_in_window,
)

AGE_GROUP_LABELS = {
    AgeGroup.MINOR_15_17: "15-17",
    AgeGroup.YOUNG_ADULT_18_20: "18-20",
}

# Babysitting that ends at or after this hour needs a reachable adult
LATE_BABYSITTING_HOUR = 20

HOURS_REFERENCE = {
    AgeGroup.MINOR_15_17: "Arbeidsmiljøloven § 11-2",
    AgeGroup.YOUNG_ADULT_18_20: "Arbeidsmiljøloven § 10-4",
}
TIME_WINDOW_REFERENCE = {
    AgeGroup.MINOR_15_17: "Arbeidsmiljøloven § 11-3",
    AgeGroup.YOUNG_ADULT_18_20: "Arbeidsmiljøloven § 10-11",
}
CATEGORY_REFERENCE = "Arbeidsmiljøloven § 11-1"
HAZARD_REFERENCE = "Forskrift om arbeid av barn og ungdom"
UNPAID_REFERENCE = "Arbeidsmiljøloven § 14-1"


def _group_label(age_group: AgeGroup) -> str:
    return f"workers aged {AGE_GROUP_LABELS[age_group]}"


def _format_hours(minutes: int) -> str:
    return f"{minutes / 60:g}"


def _format_money(amount: Decimal) -> str:
    return f"{amount.quantize(Decimal('1'), rounding=ROUND_HALF_UP)}"


def _quoted(keywords: tuple[str, ...]) -> str:
    return ", ".join(f'"{k}"' for k in keywords)


def _check_category(
    job: JobInput,
    worker: WorkerAgeInfo,
    tables: RuleTables,
    violations: list[Violation],
    warnings: list[ComplianceWarning],
) -> None:
    if job.category not in tables.allowed_categories(worker.age_group):
        violations.append(Violation(
            code="CATEGORY_NOT_ALLOWED",
            severity=Severity.CRITICAL,
            message=(
                f"The category {job.category.value} is not allowed for "
                f"{_group_label(worker.age_group)}"
            ),
            rule="Only approved job categories may be offered to this age group",
            legal_reference=CATEGORY_REFERENCE,
        ))
        return

    # Category restrictions and conditions only bind minors
    if not worker.is_minor:
        return

    rule = tables.category_rule(job.category)
    matched = rule.matched_keywords(job.text)
    if matched:
        violations.append(Violation(
            code="CATEGORY_RESTRICTION",
            severity=Severity.HIGH,
            message=f"This {job.category.value} job contains restricted content: {_quoted(matched)}",
            rule=f"{job.category.value} jobs for minors have restrictions",
        ))

    for condition in rule.conditions:
        warnings.append(ComplianceWarning(
            code="CATEGORY_CONDITION",
            message=f"Condition for {job.category.value}: {condition}",
            recommendation="Ensure this job meets the stated condition",
        ))


def _check_hazards(
    job: JobInput,
    worker: WorkerAgeInfo,
    tables: RuleTables,
    violations: list[Violation],
    warnings: list[ComplianceWarning],
) -> None:
    alone_in_private_home = job.requires_working_alone and job.involves_private_home
    schedule_known = job.start_time is not None and job.end_time is not None
    text = job.text

    for hazard in tables.hazards_for(worker.age_group):
        if hazard.only_when_working_alone and not job.requires_working_alone:
            continue

        reasons = []
        if job.category in hazard.categories:
            reasons.append(f"is posted as {job.category.value}")

        matched = hazard.matched_keywords(text)
        if matched:
            reasons.append(f"mentions {_quoted(matched)}")

        if hazard.night_window is not None and alone_in_private_home:
            window_start, window_end = hazard.night_window
            if schedule_known:
                at_night = shift_overlaps_window(job.start_time, job.end_time, window_start, window_end)
            else:
                # A lone start or end time inside the window is enough
                known_times = [t for t in (job.start_time, job.end_time) if t is not None]
                at_night = any(time_in_window(t, window_start, window_end) for t in known_times)

            if at_night:
                reasons.append(
                    "is alone in a private home between "
                    f"{format_hour(window_start)} and {format_hour(window_end)}"
                )
            elif not schedule_known:
                warnings.append(ComplianceWarning(
                    code="PRIVATE_HOME_ALONE",
                    message=(
                        "Working alone in a private home requires extra caution; "
                        f"no work is allowed between {format_hour(window_start)} "
                        f"and {format_hour(window_end)}"
                    ),
                    recommendation=(
                        "Add start and end times and make sure an adult is "
                        "reachable by phone"
                    ),
                ))

        if reasons:
            violations.append(Violation(
                code="HAZARD_DISALLOWED",
                severity=Severity.CRITICAL,
                message=(
                    f"{hazard.description}: the job {' and '.join(reasons)}, "
                    f"which is not allowed for {_group_label(worker.age_group)}"
                ),
                rule=hazard.code,
                legal_reference=HAZARD_REFERENCE,
            ))


def _check_hours(
    job: JobInput,
    worker: WorkerAgeInfo,
    tables: RuleTables,
    limits: WorkLimits,
    violations: list[Violation],
    warnings: list[ComplianceWarning],
) -> None:
    minutes = job.shift_minutes
    if minutes is not None and minutes > limits.max_daily_hours * 60:
        violations.append(Violation(
            code="EXCEEDS_DAILY_HOURS",
            severity=Severity.HIGH if worker.is_minor else Severity.MEDIUM,
            message=(
                f"Job duration ({_format_hours(minutes)}h) exceeds the "
                f"{limits.max_daily_hours}h daily limit for {_context_label(job, worker, tables)}"
            ),
            rule=(
                f"{_group_label(worker.age_group).capitalize()} can work at most "
                f"{limits.max_daily_hours} hours per day"
            ),
            legal_reference=HOURS_REFERENCE[worker.age_group],
        ))

    # Weekly totals span several jobs and are enforced by the caller
    if not worker.is_minor or job.is_school_holiday or minutes is None:
        return
    school_day_cap = tables.hours[worker.age_group].school_day.max_daily_hours
    if minutes > school_day_cap * 60:
        period = (
            "during school term"
            if _school_context(job, worker, tables) == SchoolContext.SCHOOL_DAY
            else "during school holidays"
        )
        warnings.append(ComplianceWarning(
            code="WEEKLY_HOURS_REMINDER",
            message=(
                f"Remember: {_group_label(worker.age_group)} can only work "
                f"{limits.max_weekly_hours} hours/week {period}"
            ),
            recommendation="Ensure total weekly hours don't exceed the limit",
        ))


def _check_time_window(
    job: JobInput,
    worker: WorkerAgeInfo,
    limits: WorkLimits,
    violations: list[Violation],
    warnings: list[ComplianceWarning],
) -> None:
    earliest = format_hour(limits.earliest_hour)
    latest = format_hour(limits.latest_hour)
    rule = (
        f"{_group_label(worker.age_group).capitalize()} can only work "
        f"between {earliest} and {latest}"
    )

    window_open = limits.earliest_hour * 60
    window_close = limits.latest_hour * 60

    # A start must fall in [open, close), an end in (open, close] on the same day
    if job.start_time is not None:
        start = clock_minutes(job.start_time)
        message = None
        if start < window_open:
            message = f"Job starts at {format_clock(job.start_time)}, before the allowed time ({earliest})"
        elif start >= window_close:
            message = f"Job starts at {format_clock(job.start_time)}, after the allowed time ({latest})"
        if message:
            violations.append(Violation(
                code="OUTSIDE_ALLOWED_HOURS",
                severity=Severity.HIGH,
                message=message,
                rule=rule,
                legal_reference=TIME_WINDOW_REFERENCE[worker.age_group],
            ))

    if job.end_time is not None:
        next_day = job.start_time is not None and job.end_time.date() > job.start_time.date()
        end = clock_minutes(job.end_time)
        message = None
        if next_day or end > window_close:
            message = (
                f"Job ends at {format_clock(job.end_time)}"
                f"{' the next day' if next_day else ''}, after the allowed time ({latest})"
            )
        elif end <= window_open:
            message = f"Job ends at {format_clock(job.end_time)}, before the allowed time ({earliest})"
        if message:
            violations.append(Violation(
                code="OUTSIDE_ALLOWED_HOURS",
                severity=Severity.HIGH,
                message=message,
                rule=rule,
                legal_reference=TIME_WINDOW_REFERENCE[worker.age_group],
            ))

        if (
            worker.is_minor
            and job.category == JobCategory.BABYSITTING
            and (next_day or job.end_time.hour >= LATE_BABYSITTING_HOUR)
        ):
            warnings.append(ComplianceWarning(
                code="LATE_BABYSITTING",
                message=f"Babysitting ending after {format_hour(LATE_BABYSITTING_HOUR)} - ensure adult is reachable",
                recommendation="Parent/guardian should be available by phone during late evening",
            ))


def _check_wage(
    job: JobInput,
    tables: RuleTables,
    limits: WorkLimits,
    violations: list[Violation],
    warnings: list[ComplianceWarning],
) -> None:
    floor = limits.min_hourly_wage
    currency = tables.currency

    if job.pay_type == PayType.HOURLY:
        if job.pay_amount < floor:
            violations.append(Violation(
                code="BELOW_MINIMUM_WAGE",
                severity=Severity.CRITICAL,
                message=(
                    f"Hourly rate ({job.pay_amount} {currency}) is below the "
                    f"recommended minimum ({floor} {currency}/hour)"
                ),
                rule="Pay must meet minimum wage standards",
            ))
        elif job.pay_amount < floor * (1 + tables.low_wage_margin):
            warnings.append(ComplianceWarning(
                code="LOW_WAGE",
                message=f"Hourly rate ({job.pay_amount} {currency}) is close to minimum wage",
                recommendation="Consider offering competitive wages to attract qualified workers",
            ))
    else:
        # Fixed-price jobs are not hourly contracts, so a low implied rate only warns
        minutes = job.shift_minutes
        if minutes:
            implied_rate = job.pay_amount * 60 / Decimal(minutes)
            if implied_rate < floor:
                suggested_total = (floor * minutes / 60).to_integral_value(rounding=ROUND_CEILING)
                warnings.append(ComplianceWarning(
                    code="POSSIBLE_BELOW_MINIMUM_WAGE",
                    message=(
                        f"Effective hourly rate ({_format_money(implied_rate)} {currency}/h) "
                        f"is below minimum ({floor} {currency}/h)"
                    ),
                    recommendation=(
                        f"Increase the fixed payment to at least {suggested_total} {currency} "
                        "to meet the minimum wage equivalent"
                    ),
                ))

    if job.pay_amount == 0:
        violations.append(Violation(
            code="UNPAID_WORK",
            severity=Severity.CRITICAL,
            message="Unpaid work or trial work is not allowed",
            rule="All work must be compensated",
            legal_reference=UNPAID_REFERENCE,
        ))


def _school_context(job: JobInput, worker: WorkerAgeInfo, tables: RuleTables) -> SchoolContext:
    """School context whose limits apply to the job."""
    if job.is_school_day:
        return SchoolContext.SCHOOL_DAY
    if job.is_school_holiday:
        return SchoolContext.SCHOOL_HOLIDAY
    return tables.hours[worker.age_group].default_context


def _context_label(job: JobInput, worker: WorkerAgeInfo, tables: RuleTables) -> str:
    """Describe the listing context, e.g. "school-day minor listings"."""
    if not worker.is_minor:
        return "young adult listings"
    context = _school_context(job, worker, tables)
    return f"{context.value.replace('_', '-')} minor listings"


def _suggestions(
    job: JobInput,
    worker: WorkerAgeInfo,
    tables: RuleTables,
    limits: WorkLimits,
    violations: list[Violation],
) -> tuple[str, ...]:
    """One corrective sentence per distinct violation code, in violation order."""
    suggestions: list[str] = []
    seen: set[str] = set()

    for violation in violations:
        if violation.code in seen:
            continue
        seen.add(violation.code)

        if violation.code == "CATEGORY_NOT_ALLOWED":
            suggestions.append(
                "Select a category from the approved minor list."
                if worker.is_minor
                else "Select a category from the approved list."
            )
        elif violation.code == "CATEGORY_RESTRICTION":
            suggestions.append(
                f"Remove restricted activities from this {job.category.value} listing."
            )
        elif violation.code == "HAZARD_DISALLOWED":
            suggestions.append(
                "Remove the hazardous tasks or post the job for "
                f"{_group_label(AgeGroup.YOUNG_ADULT_18_20)} only."
                if worker.is_minor
                else "Arrange supervision for the hazardous tasks."
            )
        elif violation.code == "EXCEEDS_DAILY_HOURS":
            suggestions.append(
                f"Reduce duration to ≤{limits.max_daily_hours} hours for "
                f"{_context_label(job, worker, tables)}."
            )
        elif violation.code == "OUTSIDE_ALLOWED_HOURS":
            suggestions.append(
                f"Schedule the job between {format_hour(limits.earliest_hour)} "
                f"and {format_hour(limits.latest_hour)} on the same day."
            )
        elif violation.code == "BELOW_MINIMUM_WAGE":
            suggestions.append(
                f"Increase the hourly rate to at least {limits.min_hourly_wage} {tables.currency}."
            )
        elif violation.code == "UNPAID_WORK":
            suggestions.append("Offer payment for the work; unpaid and trial work cannot be posted.")

    return tuple(suggestions)


def _summary(worker: WorkerAgeInfo, violations: list, warnings: list) -> str:
    if violations:
        return f"Job has {len(violations)} violation(s) that must be fixed before posting."
    if warnings:
        return f"Job is compliant but has {len(warnings)} warning(s) to review."
    return (
        "Job is compliant with Norwegian labor laws for "
        f"{AGE_GROUP_LABELS[worker.age_group]} year olds."
    )


def validate_job_compliance(
    job: JobInput,
    worker: WorkerAgeInfo,
    tables: Optional[RuleTables] = None,
) -> ComplianceResult:
    """Validate a job listing for one worker age group.

    Checks run in a fixed order (category, hazards, hours, time window,
    wage) and all of them run, so identical inputs always give identical
    results.

    Args:
        job: Validated job listing
        worker: Classified worker age
        tables: Rule tables (defaults to the process-wide tables)

    Returns:
        ComplianceResult with violations, warnings and suggestions

    Raises:
        ValueError: If the job sets both is_school_day and is_school_holiday
    """
    if tables is None:
        tables = get_rule_tables()

    limits = tables.limits(worker.age_group, job.is_school_day, job.is_school_holiday)

    violations: list[Violation] = []
    warnings: list[ComplianceWarning] = []

    _check_category(job, worker, tables, violations, warnings)
    _check_hazards(job, worker, tables, violations, warnings)
    _check_hours(job, worker, tables, limits, violations, warnings)
    _check_time_window(job, worker, limits, violations, warnings)
    _check_wage(job, tables, limits, violations, warnings)

    return ComplianceResult(
        age_group=worker.age_group,
        violations=tuple(violations),
        warnings=tuple(warnings),
        suggestions=_suggestions(job, worker, tables, limits, violations),
        summary=_summary(worker, violations, warnings),
    )


def evaluate_for_all_age_groups(
    job: JobInput,
    tables: Optional[RuleTables] = None,
) -> JobValidation:
    """Evaluate a job once per age group to decide who may see it.

    Each group is evaluated at its lowest age.
    """
    if tables is None:
        tables = get_rule_tables()

    results = {
        group: validate_job_compliance(job, classify_age(representative_age(group)), tables)
        for group in AgeGroup
    }
    eligible = [group for group, result in results.items() if result.compliant]

    summary = ValidationSummary(
        can_be_posted=bool(eligible),
        visible_to=(
            ", ".join(AGE_GROUP_LABELS[g] for g in eligible)
            or "No age groups (fix violations)"
        ),
        total_violations=sum(len(r.violations) for r in results.values()),
        total_warnings=sum(len(r.warnings) for r in results.values()),
    )

    return JobValidation(results=results, eligible_age_groups=eligible, summary=summary)


def classify_eligible_age_groups(
    job: JobInput,
    tables: Optional[RuleTables] = None,
) -> list[AgeGroup]:
    """Age groups for which the job is compliant, youngest first."""
    return evaluate_for_all_age_groups(job, tables).eligible_age_groups


def format_compliance_report(result: ComplianceResult) -> str:
    """Render a compliance result as multi-line display text."""
    lines: list[str] = []

    if result.compliant:
        lines.append("This job is compliant with Norwegian labor laws.")
    else:
        lines.append("This job has compliance issues that must be addressed:")
        for i, violation in enumerate(result.violations, 1):
            lines.append(f"  {i}. [{violation.code}] {violation.message}")

    if result.warnings:
        lines.append("")
        lines.append("Warnings:")
        for i, warning in enumerate(result.warnings, 1):
            lines.append(f"  {i}. {warning.message}")
            lines.append(f"     Recommendation: {warning.recommendation}")

    if result.suggestions:
        lines.append("")
        lines.append("Suggestions:")
        for i, suggestion in enumerate(result.suggestions, 1):
            lines.append(f"  {i}. {suggestion}")

    return "\n".join(lines)
