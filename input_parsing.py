"""
Numeric input parsing for every editable field.

Invalid input never propagates: blanks, non-numeric text, NaN and infinities
all collapse to the default (0 unless told otherwise).
"""

import logging
import math
from typing import Any

logger = logging.getLogger(__name__)


def parse_number(value: Any, default: float = 0.0) -> float:
    """
    Parse a user-entered number.

    Accepts ints, floats and strings such as "50,000,000", " 2.5 ", "$1,000"
    or "40%". Booleans are not numbers here and fall back to the default.

    Args:
        value: Raw input value (str, int, float or None)
        default: Value returned when parsing fails

    Returns:
        Finite float
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            logger.debug(f"Numeric input too large for a float, using {default}")
            return default
    else:
        text = str(value).strip().replace(",", "").replace("_", "")
        text = text.lstrip("$").rstrip("%").strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            logger.debug(f"Could not parse numeric input {value!r}, using {default}")
            return default

    if math.isnan(number) or math.isinf(number):
        logger.debug(f"Non-finite numeric input {value!r}, using {default}")
        return default

    return number
