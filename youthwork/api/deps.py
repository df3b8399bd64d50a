"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from youthwork.policy.age import OutOfRangeError
from youthwork.rules.models import RuleTables
from youthwork.rules.tables import get_rule_tables


def get_tables() -> RuleTables:
    """Get the rule tables in effect for this request.

    Each request resolves the reference once, so a concurrent reload never
    changes the tables halfway through an evaluation.
    """
    return get_rule_tables()


Tables = Annotated[RuleTables, Depends(get_tables)]


def invalid_input(exc: ValueError, field: str | None = None) -> HTTPException:
    """Translate an engine input error into a 400 with a field-level message.

    Args:
        exc: Error raised by the policy engine
        field: Request field to report (defaults to the error's own field)
    """
    if field is None:
        field = exc.field if isinstance(exc, OutOfRangeError) else "body"
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"field": field, "message": str(exc)},
    )
