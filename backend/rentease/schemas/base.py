"""Base schema utilities."""

from datetime import datetime, timezone
from typing import Annotated, ClassVar, Optional
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, model_validator


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class UpdateSchema(BaseSchema):
    """Partial update. Fields may be omitted; null is accepted only for nullable columns."""

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_nulls(self):
        for name in sorted(self.model_fields_set - self.nullable_fields):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class TimestampMixin(BaseModel):
    """Mixin for created_at/updated_at timestamps."""

    created_at: datetime
    updated_at: Optional[datetime] = None


class IDMixin(BaseModel):
    """Mixin for UUID id field."""

    id: UUID


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert aware datetimes to naive UTC, the storage convention of all models."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


NaiveUTCDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]


class PropertySummary(BaseSchema):
    """Property fields embedded in tenant, payment and maintenance responses."""

    id: UUID
    name: str
    full_address: str


class TenantSummary(BaseSchema):
    """Tenant fields embedded in property, payment and maintenance responses."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str
