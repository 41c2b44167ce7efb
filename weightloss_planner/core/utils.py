import re
from typing import Any, Optional

__all__ = ["parse_number", "parse_int"]

_NUMBER_RE = re.compile(r"[-+]?[0-9]+(?:[\s,.][0-9]+)?")


def parse_number(value: Any) -> Optional[float]:
    """Return ``value`` as ``float`` if possible.

    Strings may contain optional units like ``"70.5 kg"`` or ``"170cm"``.
    A comma is accepted as decimal separator and a space inside the number
    is ignored.  If conversion fails, ``None`` is returned.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        m = _NUMBER_RE.search(value)
        if m:
            num_str = m.group(0).replace(" ", "").replace(",", ".")
            try:
                return float(num_str)
            except ValueError:
                return None
    return None


def parse_int(value: Any) -> Optional[int]:
    """Return ``value`` as ``int``, rounding fractional input."""
    number = parse_number(value)
    if number is None:
        return None
    return int(round(number))
