"""
Validation of the names used to identify flags.

Units, sections, names and tags all share one grammar: ASCII letters, digits
and dashes, starting with a letter, without a trailing dash and without two
dashes in a row. The underscore is excluded because it separates the unit,
section and name in the flag filename, which keeps that filename unambiguous.
"""

from ..exceptions import InvalidName


def valid_name(name: str) -> str:
    """
    Validate a name and return it normalized to lowercase.

    Args:
        name: The unit, section, name or tag to check

    Returns:
        The name with ``A-Z`` folded to ``a-z``

    Raises:
        InvalidName: If the name is empty, includes a character other than
            letters, digits and dashes, starts with a digit or a dash,
            includes ``--`` or ends with a dash
    """
    if not isinstance(name, str) or not name:
        raise InvalidName("unit, section, name, tags cannot be empty")

    normalized = []
    last_char = ""
    for c in name:
        if c == "-":
            if not last_char:
                raise InvalidName(f"unit, section, name, tags cannot start with a dash (-): {name!r}")
            if last_char == "-":
                raise InvalidName(
                    f"unit, section, name, tags cannot have two dashes (--) in a row: {name!r}"
                )
        elif "0" <= c <= "9":
            if not last_char:
                raise InvalidName(f"unit, section, name, tags cannot start with a digit: {name!r}")
        elif "A" <= c <= "Z":
            c = c.lower()
        elif not "a" <= c <= "z":
            raise InvalidName(
                f"name cannot include characters other than a-z, 0-9, and dashes (-): {name!r}"
            )
        normalized.append(c)
        last_char = c

    if last_char == "-":
        raise InvalidName(f"unit, section, name, tags cannot end with a dash (-): {name!r}")

    return "".join(normalized)


def is_valid_name(name: str) -> bool:
    """Check a name without raising."""
    try:
        valid_name(name)
    except InvalidName:
        return False
    return True
