"""Base model for all data models in the payroll engine.

This module provides a base Pydantic model with common configuration
shared by the input records fed to the aggregators and calculators.
"""

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Lenient type coercion (strings and floats become Decimal)
    - Validation on assignment
    - Ignoring extra columns coming from remote query rows

    Example:
        >>> class Worker(BaseDataModel):
        ...     name: str
        ...     rate: Decimal
        >>> worker = Worker(name="Alice", rate="25.50", title="Foreman")
        >>> worker.rate
        Decimal('25.50')
    """

    model_config = ConfigDict(
        # Allow arbitrary types like Decimal, date
        arbitrary_types_allowed=True,
        # Validate on assignment to catch errors early
        validate_assignment=True,
        # Coerce "45" / 45.0 into Decimal
        strict=False,
        # Query rows carry joined columns we do not model
        extra="ignore",
        # Non-finite decimals are passed through untouched
        allow_inf_nan=True,
    )
