"""
Exception classes for pydistcalc.

Custom exception hierarchy for better error handling and debugging.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    ValidationError,
    ValidationInfo,
    WrapValidator,
)
from pydantic_core import ErrorDetails, InitErrorDetails, PydanticCustomError


class DistCalcException(Exception):
    """
    Base exception class for all pydistcalc-related errors.

    This serves as the root exception that all other pydistcalc exceptions inherit
    from, allowing users to catch all pydistcalc-specific errors with a single
    except clause.
    """


class InvalidParameterError(DistCalcException):
    """
    Exception raised when a distribution parameter is outside its domain.

    This typically occurs when:
    - A scale parameter (sigma, theta) or a rate is not strictly positive
    - The bounds of a uniform distribution are not ordered (a >= b)
    - A parameter or a sample is not finite
    - A special function is evaluated at one of its poles

    Note:
        This deliberately does not derive from ``ValueError`` so that pydantic
        validators let it propagate unchanged instead of wrapping it in a
        ``ValidationError``.
    """


class UnknownDistributionError(DistCalcException, KeyError):
    """
    Raised when a distribution variant is looked up by a name that is not registered.
    """


def custom_error_msg(custom_messages: dict[str, str]) -> Any:
    r"""
    Customize an error message for pydantic validation errors.

    See https://github.com/pydantic/pydantic/discussions/8468.

    Example:

    >>> from typing import Annotated
    >>> from pydantic import BaseModel
    >>> PositiveInt = Annotated[
    ...     int,
    ...     custom_error_msg({"int_parsing": "The field expects a whole number, got {input}."}),
    ... ]
    >>> class Model(BaseModel):
    ...     bins: PositiveInt
    >>> Model(bins="many")  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    pydantic_core._pydantic_core.ValidationError: 1 validation error for Model
    bins
      The field expects a whole number, got many. ...
    """

    def _validator(v: Any, next_: Any, ctx: ValidationInfo) -> Any:
        try:
            return next_(v, ctx)
        except ValidationError as exc:
            new_errors: list[InitErrorDetails | ErrorDetails] = []
            for error in exc.errors():
                error["loc"] = error["loc"][1:]  # to skip current location
                custom_message = custom_messages.get(error["type"])

                if custom_message:
                    err_ctx = error.get("ctx", {}).copy()

                    # Add input and ValidationInfo data to context
                    err_ctx["input"] = error["input"]
                    if ctx.data:
                        err_ctx.update(ctx.data)

                    new_error = InitErrorDetails(
                        type=PydanticCustomError(
                            error["type"], custom_message, err_ctx
                        ),
                        loc=error["loc"],
                        input=error["input"],
                    )

                    new_errors.append(new_error)
                else:
                    new_errors.append(error)

            raise ValidationError.from_exception_data(
                title=exc.title,
                line_errors=new_errors,  # type: ignore[arg-type]
            ) from None

    return WrapValidator(_validator)
