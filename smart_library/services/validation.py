from decimal import Decimal, InvalidOperation

from smart_library.errors import ValidationError


def require_text(data: dict, key: str, label: str | None = None) -> str:
    value = data.get(key)
    value = str(value).strip() if value is not None else ""
    if not value:
        raise ValidationError(f"{label or key} is required")
    return value


def optional_text(data: dict, key: str):
    value = data.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_price(value) -> Decimal:
    try:
        price = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("price must be a number")
    if not price.is_finite() or price <= 0:
        raise ValidationError("price must be greater than 0")
    return price.quantize(Decimal("0.01"))


def parse_int(value, label: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be an integer")
    # 2.9 must not truncate to 2
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{label} must be an integer")
    if isinstance(value, Decimal) and (not value.is_finite() or value != value.to_integral_value()):
        raise ValidationError(f"{label} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{label} must be an integer")


def parse_enum(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{label} must be one of: {allowed}")
