from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENTS = Decimal("0.01")

# largest value a DECIMAL(12,2) column holds
MAX_STORED_AMOUNT = Decimal("9999999999.99")


def parse_money(value: str) -> Decimal:
    if value is None:
        raise ValueError("missing money value")

    normalized = value.strip()
    if not normalized:
        raise ValueError("empty money value")

    is_negative = normalized.startswith("(") and normalized.endswith(")")
    normalized = normalized.replace("R$", "").replace("$", "").replace(",", "")

    if is_negative:
        normalized = normalized[1:-1]

    try:
        amount = Decimal(normalized.strip()).quantize(
            CENTS,
            rounding=ROUND_HALF_UP
        )
    except InvalidOperation as exc:
        raise ValueError("invalid money value") from exc

    return -amount if is_negative else amount


def to_money(value) -> Decimal:
    """Coerce str/int/float/Decimal to a Decimal rounded to cents."""
    if isinstance(value, str):
        return parse_money(value)
    if value is None:
        raise ValueError("missing money value")
    try:
        # str() keeps floats like 0.1 from dragging binary noise along
        return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError("invalid money value") from exc
