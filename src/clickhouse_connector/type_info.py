"""Corrections applied to the driver's SQLGetTypeInfo result."""

import logging

from .odbc_constants import SqlType
from .table import Table

LOG = logging.getLogger(__name__)

# Column order of the SQLGetTypeInfo result set (ODBC 3.x)
TYPE_INFO_COLUMNS = (
    "TYPE_NAME",
    "DATA_TYPE",
    "COLUMN_SIZE",
    "LITERAL_PREFIX",
    "LITERAL_SUFFIX",
    "CREATE_PARAMS",
    "NULLABLE",
    "CASE_SENSITIVE",
    "SEARCHABLE",
    "UNSIGNED_ATTRIBUTE",
    "FIXED_PREC_SCALE",
    "AUTO_UNIQUE_VALUE",
    "LOCAL_TYPE_NAME",
    "MINIMUM_SCALE",
    "MAXIMUM_SCALE",
    "SQL_DATA_TYPE",
    "SQL_DATETIME_SUB",
    "NUM_PREC_RADIX",
    "INTERVAL_PRECISION",
)

TYPE_INFO_CATALOG_VERSION = 1

# Wide character entries let the host keep Unicode text intact; the two
# BIGINT entries describe UInt64 and Int64 so large integers are not
# narrowed to a lossy numeric type.
EXTRA_TYPE_INFO_ROWS = (
    ("SQL_WCHAR", SqlType.WCHAR, 2000, "'", "'", "max length", 1, 1, 3, None, 0, None,
     "SQL_WCHAR", None, None, SqlType.WCHAR, None, None, None),
    ("SQL_WVARCHAR", SqlType.WVARCHAR, 2000000, "'", "'", "max length", 1, 1, 3, None, 0, None,
     "SQL_WVARCHAR", None, None, SqlType.WVARCHAR, None, None, None),
    ("SQL_BIGINT", SqlType.BIGINT, 20, "", "", "", 0, 1, 3, 1, 0, 0,
     "UInt64", 0, 0, SqlType.BIGINT, 0, 10, 0),
    ("SQL_BIGINT", SqlType.BIGINT, 20, "", "", "", 0, 1, 3, 0, 0, 0,
     "Int64", 0, 0, SqlType.BIGINT, 0, 10, 0),
)


def extra_type_info() -> Table:
    """The static type-info rows appended to every driver result."""
    return Table(TYPE_INFO_COLUMNS, EXTRA_TYPE_INFO_ROWS)


def correct_type_info(types: Table) -> Table:
    """
    Append the static type-info rows to the driver's own table.

    Driver rows are kept unmodified and in order; nothing is removed or
    deduplicated, so applying this twice appends the rows twice.

    Args:
        types: Table reported by SQLGetTypeInfo

    Returns:
        New Table with the driver rows followed by EXTRA_TYPE_INFO_ROWS
    """
    LOG.debug(
        "Appending %d type-info rows (catalog version %d) to %d driver rows",
        len(EXTRA_TYPE_INFO_ROWS), TYPE_INFO_CATALOG_VERSION, len(types),
    )
    return types.combine(extra_type_info())
