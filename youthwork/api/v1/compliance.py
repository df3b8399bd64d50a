"""Compliance validation endpoints.

Job listings are validated here before they may be posted, and client UIs
read the resolved rules to pre-validate forms.
"""

from fastapi import APIRouter, Query, status

from youthwork.api.deps import Tables, invalid_input
from youthwork.core.logging import decision_logger
from youthwork.policy.age import OutOfRangeError, classify_age
from youthwork.policy.compliance import evaluate_for_all_age_groups, validate_job_compliance
from youthwork.schemas.compliance import (
    ComplianceResultRead,
    RulesResponse,
    SchoolHolidayLimits,
    SchoolTermLimits,
    ValidateJobRequest,
    ValidateJobResponse,
    ValidationSummaryRead,
    WorkingHoursWindow,
    WorkingRules,
)
from youthwork.utils.time import format_hour

router = APIRouter()


def _result_read(result) -> ComplianceResultRead:
    return ComplianceResultRead.model_validate(result, from_attributes=True)


@router.post(
    "/validate",
    response_model=ValidateJobResponse,
    status_code=status.HTTP_200_OK,
    summary="Validate a job listing",
    description="Evaluates a job for every age group, and for one worker age if given",
)
async def validate_job(body: ValidateJobRequest, tables: Tables) -> ValidateJobResponse:
    """Validate a job listing against the youth labour rules.

    Returns:
        Verdicts per age group and a posting summary

    Raises:
        HTTPException: 400 if the worker age is outside 15-20
    """
    job = body.to_job_input()

    worker = None
    if body.worker_age is not None:
        try:
            worker = classify_age(body.worker_age)
        except OutOfRangeError as exc:
            raise invalid_input(exc, "worker_age")

    try:
        validation = evaluate_for_all_age_groups(job, tables)
        worker_result = validate_job_compliance(job, worker, tables) if worker else None
    except ValueError as exc:
        raise invalid_input(exc)

    decision_logger.log_validation(
        job,
        list(validation.results.values()),
        tables.version,
        worker_age=body.worker_age,
    )

    return ValidateJobResponse(
        valid=validation.valid,
        eligible_age_groups=validation.eligible_age_groups,
        results_for_minors=_result_read(validation.results_for_minors),
        results_for_young_adults=_result_read(validation.results_for_young_adults),
        summary=ValidationSummaryRead.model_validate(validation.summary, from_attributes=True),
        result_for_worker=_result_read(worker_result) if worker_result else None,
        ruleset_version=tables.version,
    )


@router.get(
    "/rules",
    response_model=RulesResponse,
    status_code=status.HTTP_200_OK,
    summary="Get resolved rules",
    description="Read-only dump of the rules for an age and school context",
)
async def get_rules(
    tables: Tables,
    age: int = Query(..., description="Worker age (15-20)"),
    school_day: bool = Query(False, description="Shift falls on a school day"),
    holiday: bool = Query(False, description="Shift falls in a school holiday"),
) -> RulesResponse:
    """Resolve the rules for an age and school context.

    Raises:
        HTTPException: 400 if the age is outside 15-20 or both flags are set
    """
    try:
        worker = classify_age(age)
    except OutOfRangeError as exc:
        raise invalid_input(exc)

    try:
        limits = tables.limits(worker.age_group, school_day, holiday)
    except ValueError as exc:
        raise invalid_input(exc, "school_day")

    term = tables.term_limits(worker.age_group)
    allowed = tables.allowed_categories(worker.age_group)

    return RulesResponse(
        age=worker.age,
        age_group=worker.age_group,
        is_minor=worker.is_minor,
        ruleset_version=tables.version,
        rules=WorkingRules(
            allowed_categories=[c for c in tables.categories if c in allowed],
            max_daily_hours=limits.max_daily_hours,
            max_weekly_hours=limits.max_weekly_hours,
            working_hours=WorkingHoursWindow(
                earliest=format_hour(limits.earliest_hour),
                latest=format_hour(limits.latest_hour),
            ),
            min_hourly_wage=float(limits.min_hourly_wage),
            rest_between_shifts=limits.rest_hours_between_shifts,
        ),
        restrictions=list(tables.restrictions(worker.age_group)),
        school_term_limits=SchoolTermLimits(
            max_weekly_hours=term.school_term_max_weekly_hours,
            max_daily_hours_school_day=term.school_term_max_daily_hours_school_day,
            max_daily_hours_non_school_day=term.school_term_max_daily_hours_non_school_day,
        ) if term else None,
        school_holiday_limits=SchoolHolidayLimits(
            max_weekly_hours=term.school_holiday_max_weekly_hours,
            max_daily_hours=term.school_holiday_max_daily_hours,
        ) if term else None,
    )
