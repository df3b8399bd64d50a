"""Age eligibility endpoints."""

from fastapi import APIRouter, Query, status

from youthwork.api.deps import Tables, invalid_input
from youthwork.policy.age import OutOfRangeError, classify_age, classify_birth_date
from youthwork.policy.eligibility import (
    apply_age_policy_to_job,
    build_age_eligibility_filter,
    get_age_restriction_display,
    get_next_age_unlock,
    get_preparation_tips,
    get_unlock_message,
)
from youthwork.policy.models import AgeEligibilityFilter
from youthwork.schemas.eligibility import (
    ClassifyAgeRequest,
    EligibilityFilterRead,
    EligibilityResponse,
    JobPolicyRequest,
    JobPolicyResponse,
    WorkerAgeRead,
)

router = APIRouter()


def _filter_read(age_filter: AgeEligibilityFilter) -> EligibilityFilterRead:
    return EligibilityFilterRead(
        minimum_age_lte=age_filter.minimum_age_lte,
        minimum_age_equals=age_filter.minimum_age_equals,
        excluded_categories=list(age_filter.excluded_categories),
        query=age_filter.as_query(),
    )


@router.get(
    "",
    response_model=EligibilityResponse,
    status_code=status.HTTP_200_OK,
    summary="Get listing filters for an age",
    description="Predicates for jobs visible now and jobs unlocking at the next threshold",
)
async def get_eligibility(
    tables: Tables,
    age: int = Query(..., description="Worker age (15-20)"),
) -> EligibilityResponse:
    """Build the current and next-threshold listing filters.

    Raises:
        HTTPException: 400 if the age is outside 15-20
    """
    try:
        worker = classify_age(age)
    except OutOfRangeError as exc:
        raise invalid_input(exc)

    current = build_age_eligibility_filter(age, tables=tables)
    upcoming = build_age_eligibility_filter(age, for_next_threshold=True, tables=tables)
    next_age = get_next_age_unlock(age, tables)

    return EligibilityResponse(
        age=worker.age,
        age_group=worker.age_group,
        is_minor=worker.is_minor,
        current_filter=_filter_read(current),
        next_threshold_filter=_filter_read(upcoming) if upcoming else None,
        next_unlock_age=next_age,
        unlock_message=get_unlock_message(next_age, age) if next_age else "",
        preparation_tips=get_preparation_tips(age),
    )


@router.post(
    "/classify",
    response_model=WorkerAgeRead,
    status_code=status.HTTP_200_OK,
    summary="Classify a worker age",
)
async def classify_worker(body: ClassifyAgeRequest) -> WorkerAgeRead:
    """Classify a worker from an age or a birth date.

    Raises:
        HTTPException: 400 if the age is outside 15-20
    """
    try:
        if body.birth_date is not None:
            worker = classify_birth_date(body.birth_date)
        else:
            worker = classify_age(body.age)
    except OutOfRangeError as exc:
        raise invalid_input(exc)

    return WorkerAgeRead.model_validate(worker, from_attributes=True)


@router.post(
    "/job-policy",
    response_model=JobPolicyResponse,
    status_code=status.HTTP_200_OK,
    summary="Derive a job's age policy",
    description="Minimum age and adult-present setting a job is published with",
)
async def get_job_policy(body: JobPolicyRequest, tables: Tables) -> JobPolicyResponse:
    """Apply the category baseline to an employer's requested settings.

    Raises:
        HTTPException: 400 if the requested minimum age is outside 15-20
    """
    try:
        policy = apply_age_policy_to_job(
            body.category,
            requested_minimum_age=body.requested_minimum_age,
            requested_requires_adult=body.requested_requires_adult,
            tables=tables,
        )
    except OutOfRangeError as exc:
        raise invalid_input(exc)

    return JobPolicyResponse(
        risk_category=policy.risk_category,
        minimum_age=policy.minimum_age,
        requires_adult_present=policy.requires_adult_present,
        policy_version=policy.policy_version,
        was_minimum_age_adjusted=policy.was_minimum_age_adjusted,
        age_restriction_display=get_age_restriction_display(policy.minimum_age),
    )
