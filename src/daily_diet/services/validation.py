"""Request payload validation for users and meals.

Payloads are parsed into pydantic models whose field declaration order is
the order used when reporting violated fields.
"""

from collections.abc import Mapping
from datetime import UTC, date, datetime, time
from uuid import UUID

from dateutil import parser
from pydantic import BaseModel, ConfigDict, EmailStr, StrictBool, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator

from daily_diet.domain.meals import MealChanges, NewMeal
from daily_diet.domain.users import NewUser, UserChanges
from daily_diet.errors import ValidationError, invalid_id_error

UPDATABLE_MEAL_FIELDS = ("name", "description", "is_on_diet")
NOTHING_TO_UPDATE = "body must have at least one property to update"

_EMAIL_ADAPTER: TypeAdapter[str] = TypeAdapter(EmailStr)


class MealPayload(BaseModel):
    """Meal fields as sent by clients."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    description: str | None = None
    is_on_diet: StrictBool | None = None
    created_at: datetime | None = None

    @field_validator("created_at", mode="before")
    @classmethod
    def coerce_created_at(cls, value: object) -> datetime | None:
        return coerce_timestamp(value)


class UserPayload(BaseModel):
    """User fields as sent by clients."""

    model_config = ConfigDict(extra="ignore")

    username: str | None = None
    email: str | None = None


def coerce_timestamp(value: object) -> datetime | None:
    """Coerce a date-like value into an aware UTC datetime.

    Accepts any string ``dateutil`` can parse, dates, datetimes and epoch
    milliseconds. Naive values are taken as UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    if isinstance(value, bool):
        raise ValueError("created_at must be a date")
    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError("created_at must be a date") from exc
    if isinstance(value, str):
        try:
            return _as_utc(parser.parse(value))
        except (ValueError, OverflowError) as exc:
            raise ValueError("created_at must be a date") from exc
    raise ValueError("created_at must be a date")


def validate_new_meal(payload: Mapping[str, object] | None) -> NewMeal:
    """Validate a meal creation body.

    Every missing or malformed field is reported in a single error.
    """
    data = _present_fields(payload)
    parsed, invalid = _parse(MealPayload, data)
    violated = [
        name for name in MealPayload.model_fields if name not in data or name in invalid
    ]
    if violated or parsed is None:
        raise ValidationError(_required_properties_message(violated))
    _ensure_not_blank(parsed.name, "name")
    _ensure_not_blank(parsed.description, "description")
    return NewMeal(
        name=parsed.name,
        description=parsed.description,
        is_on_diet=parsed.is_on_diet,
        created_at=parsed.created_at,
    )


def validate_meal_changes(payload: Mapping[str, object] | None) -> MealChanges:
    """Validate a partial meal update body."""
    data = _present_fields(payload)
    if not any(name in data for name in UPDATABLE_MEAL_FIELDS):
        raise ValidationError(NOTHING_TO_UPDATE)
    parsed, invalid = _parse(MealPayload, data)
    if invalid or parsed is None:
        violated = [name for name in MealPayload.model_fields if name in invalid]
        raise ValidationError(_required_properties_message(violated))
    if "name" in data:
        _ensure_not_blank(parsed.name, "name")
    if "description" in data:
        _ensure_not_blank(parsed.description, "description")
    return MealChanges(
        name=parsed.name,
        description=parsed.description,
        is_on_diet=parsed.is_on_diet,
        created_at=parsed.created_at,
    )


def validate_new_user(payload: Mapping[str, object] | None) -> NewUser:
    """Validate a user registration body."""
    data = _present_fields(payload)
    parsed, invalid = _parse(UserPayload, data)
    violated = [
        name for name in UserPayload.model_fields if name not in data or name in invalid
    ]
    if len(violated) == 1:
        raise ValidationError(f"body must have required property '{violated[0]}'")
    if violated or parsed is None:
        raise ValidationError(_required_properties_message(violated))
    _ensure_not_blank(parsed.username, "username")
    return NewUser(username=parsed.username, email=_validate_email(parsed.email))


def validate_user_changes(payload: Mapping[str, object] | None) -> UserChanges:
    """Validate a partial user update body; an empty body changes nothing."""
    data = _present_fields(payload)
    parsed, invalid = _parse(UserPayload, data)
    if invalid or parsed is None:
        violated = [name for name in UserPayload.model_fields if name in invalid]
        raise ValidationError(_required_properties_message(violated))
    if parsed.username is not None:
        _ensure_not_blank(parsed.username, "username")
    email = _validate_email(parsed.email) if parsed.email is not None else None
    return UserChanges(username=parsed.username, email=email)


def parse_id(raw: str) -> UUID:
    """Parse a path id, rejecting anything that is not a UUID."""
    try:
        return parse_canonical_uuid(raw)
    except (TypeError, ValueError) as exc:
        raise invalid_id_error() from exc


def parse_canonical_uuid(raw: str) -> UUID:
    """Parse the hyphenated 8-4-4-4-12 form only.

    ``UUID()`` also accepts bare hex, braces and ``urn:uuid:`` prefixes.
    Those are rejected with ``ValueError``.
    """
    parsed = UUID(raw)
    if str(parsed) != raw.lower():
        raise ValueError(f"not a canonical UUID: {raw!r}")
    return parsed


def _present_fields(payload: Mapping[str, object] | None) -> dict[str, object]:
    """Drop keys sent as null; they count as absent."""
    if not payload:
        return {}
    return {key: value for key, value in payload.items() if value is not None}


def _parse(
    model: type[BaseModel], data: dict[str, object]
) -> tuple[BaseModel | None, set[str]]:
    try:
        return model.model_validate(data), set()
    except PydanticValidationError as exc:
        return None, {str(error["loc"][0]) for error in exc.errors() if error["loc"]}


def _required_properties_message(fields: list[str]) -> str:
    return f"body must have required properties: {', '.join(fields)}"


def _ensure_not_blank(value: str | None, field: str) -> None:
    if value is None or not value.strip():
        raise ValidationError(f"{field} cannot be empty")


def _validate_email(value: str | None) -> str:
    try:
        return _EMAIL_ADAPTER.validate_python(value)
    except PydanticValidationError as exc:
        raise ValidationError("body must send a valid email address") from exc


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
