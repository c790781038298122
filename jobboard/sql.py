"""
SQL helpers shared by the repositories.
"""

from typing import Any, List, Mapping, Tuple

from .errors import InvalidUpdateError


def quote_identifier(name: str) -> str:
    """Quote a column name, doubling any embedded double quotes."""
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def build_set_clause(
    fields: Mapping[str, Any],
    column_names: Mapping[str, str],
) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of a partial UPDATE.

    Args:
        fields: External field name -> new value, only the fields to change
        column_names: External field name -> column name; missing names are
            used as-is

    Returns:
        Tuple of (clause_text, values), e.g.
        ('"num_employees"=$1, "logo_url"=$2', [5, "awesome"])

    Raises:
        InvalidUpdateError: if fields is empty
    """
    keys = list(fields.keys())
    if not keys:
        raise InvalidUpdateError("No data")

    cols = [
        f"{quote_identifier(column_names.get(key, key))}=${idx}"
        for idx, key in enumerate(keys, start=1)
    ]
    return ", ".join(cols), [fields[key] for key in keys]
