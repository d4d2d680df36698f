"""Conversion engine.

Every conversion pivots through the category's base unit:

    result = to_unit.from_base(from_unit.to_base(value))

so each unit only needs its own pair of functions and all units within a
category agree with each other. Converting a unit to itself goes through
the same path; there is no shortcut.
"""

from conv.units.unitregistry import Unit


def convert(value: float, from_unit: Unit, to_unit: Unit) -> float:
    """Convert ``value`` from ``from_unit`` to ``to_unit``.

    Args:
        value: Numeric value expressed in ``from_unit``
        from_unit: Source unit
        to_unit: Target unit

    Returns:
        The value expressed in ``to_unit``

    Raises:
        IncompatibleUnitsError: If the units belong to different categories

    Examples:
        >>> from conv.units.unitregistry import find_unit
        >>> convert(1.0, find_unit("km"), find_unit("m"))
        1000.0

        >>> convert(0.0, find_unit("c"), find_unit("f"))
        32.0
    """
    return from_unit.convert_to(value, to_unit)


__all__ = ["convert"]
