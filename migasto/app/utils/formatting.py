import math


def format_currency(value) -> str:
    """
    Format an amount the es-CL way, with "." as the thousands separator and "," as the decimal separator,
    e.g. 1234.5 -> "1.234,50". missing and non-numeric values are formatted as 0.
    """
    try:
        amount = float(value)
    except (TypeError, ValueError):
        amount = 0.0
    if not math.isfinite(amount):
        amount = 0.0
    formatted = f"{amount:,.2f}"
    return formatted.replace(',', '_').replace('.', ',').replace('_', '.')
