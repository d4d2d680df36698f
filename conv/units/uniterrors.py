"""Typed failures raised by the unit registry and conversion engine.

All of them derive from ConversionError (itself a ValueError), so callers
that only care about "bad input" can catch a single type. The CLI is the
only place these are caught.
"""

from typing import List, Optional


class ConversionError(ValueError):
    """Base conversion error"""

    def __init__(self, error_code: str, message: str):
        self.error_code = error_code
        self.message = message
        super().__init__(self.message)


class InvalidUnitError(ConversionError):
    """Unit symbol not found in the registry"""

    def __init__(self, unit: str, suggestions: Optional[List[str]] = None):
        self.unit = unit
        self.suggestions = list(suggestions or [])
        message = f"Invalid unit '{unit}'"
        if self.suggestions:
            message += f" (did you mean: {', '.join(self.suggestions)}?)"
        super().__init__("INVALID_UNIT", message)


class IncompatibleUnitsError(ConversionError):
    """Units belong to different categories"""

    def __init__(self, from_category: str, to_category: str):
        self.from_category = from_category
        self.to_category = to_category
        super().__init__(
            "INCOMPATIBLE_UNITS",
            f"Incompatible units: cannot convert {from_category} to {to_category}",
        )


class MalformedValueError(ConversionError):
    """Value token is not a finite number"""

    def __init__(self, token: str):
        self.token = token
        super().__init__(
            "MALFORMED_VALUE",
            f"Malformed value '{token}': expected a finite number",
        )


__all__ = [
    "ConversionError",
    "InvalidUnitError",
    "IncompatibleUnitsError",
    "MalformedValueError",
]
