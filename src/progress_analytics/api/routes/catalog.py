"""Measurement catalog API routes."""

from typing import List, Optional

from fastapi import APIRouter, Query

from ...exceptions import NotFoundError
from ...measurements.catalog import (
    MEASUREMENT_TYPES,
    MeasurementCategory,
    MeasurementTypeInfo,
    SuggestedFrequency,
    get_measurement_type,
    get_measurement_types_by_category,
    get_suggested_frequency,
    validate_measurement_value,
)
from ...models.report import MeasurementValueCheck, MeasurementValueCheckResult


router = APIRouter()


@router.get("", response_model=List[MeasurementTypeInfo])
async def list_measurement_types(
    category: Optional[MeasurementCategory] = Query(None),
):
    """All known measurement types, optionally filtered by category."""
    if category is None:
        return MEASUREMENT_TYPES
    return get_measurement_types_by_category(category)


@router.get("/{type_id}", response_model=MeasurementTypeInfo)
async def get_measurement_type_info(type_id: str):
    info = get_measurement_type(type_id)
    if info is None:
        raise NotFoundError("Measurement type", type_id)
    return info


@router.get("/{type_id}/frequency", response_model=SuggestedFrequency)
async def get_measurement_frequency(type_id: str):
    """How often the type is worth logging."""
    return get_suggested_frequency(type_id)


@router.post("/validate", response_model=MeasurementValueCheckResult)
async def validate_measurement(check: MeasurementValueCheck):
    """Check a value against the type's plausible range without storing it."""
    is_valid, error = validate_measurement_value(check.type, check.value)
    return MeasurementValueCheckResult(is_valid=is_valid, error=error)
