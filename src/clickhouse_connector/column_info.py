"""Corrections applied to the driver's SQLColumns result."""

import logging
from typing import Any, Optional

from .odbc_constants import ClickHouseSqlType, SqlType
from .table import Table

LOG = logging.getLogger(__name__)

COLUMN_INFO_CATALOG_VERSION = 1

# Driver type codes that the reporting host does not understand natively.
DATA_TYPE_REMAP = {
    ClickHouseSqlType.DATETIME: SqlType.TYPE_TIMESTAMP,
    ClickHouseSqlType.TIME: SqlType.TYPE_TIME,
    ClickHouseSqlType.TIMESTAMP: SqlType.TYPE_TIMESTAMP,
    ClickHouseSqlType.TINYINT: SqlType.TINYINT,
    ClickHouseSqlType.BIGINT: SqlType.BIGINT,
    ClickHouseSqlType.TEXT: SqlType.WVARCHAR,
    ClickHouseSqlType.GUID: SqlType.GUID,
}

TYPE_NAME_REMAP = {
    "TEXT": "WVARCHAR",
    "CHAR": "WCHAR",
}

NULLABLE_YES = "YES"
NULLABLE_NO = "NO"


def fix_data_type(data_type: Any) -> Any:
    return DATA_TYPE_REMAP.get(data_type, data_type)


def fix_type_name(type_name: Any) -> Any:
    return TYPE_NAME_REMAP.get(type_name, type_name)


def fix_nullable(nullable: Any) -> str:
    """
    Normalize the driver's nullability value to "YES" or "NO".

    The driver reports "0" for nullable columns. The value is read as a
    number first, so 0, "0" and "0.0" are all "YES"; every other value,
    including null and non-numeric text, is "NO". Already normalized
    values are returned as they are.
    """
    if nullable in (NULLABLE_YES, NULLABLE_NO):
        return nullable
    if nullable is None or isinstance(nullable, bool):
        return NULLABLE_NO

    try:
        number = float(str(nullable).strip())
    except ValueError:
        return NULLABLE_NO
    return NULLABLE_YES if number == 0 else NULLABLE_NO


def correct_column_info(
    catalog_name: Optional[str],
    schema_name: Optional[str],
    table_name: Optional[str],
    column_name: Optional[str],
    source: Table,
    trace: Optional[logging.Logger] = None,
) -> Table:
    """
    Rewrite DATA_TYPE, TYPE_NAME and IS_NULLABLE of a SQLColumns result.

    The filter arguments identify the request and are only used for
    tracing. Columns and row count are unchanged.

    Args:
        catalog_name: Catalog filter of the SQLColumns call
        schema_name: Schema filter
        table_name: Table filter
        column_name: Column filter
        source: Result set reported by the driver
        trace: Logger receiving the corrected type codes and nullability values

    Returns:
        Corrected Table
    """
    LOG.debug(
        "Correcting %d columns of %s.%s.%s (remap version %d)",
        len(source), catalog_name, schema_name, table_name, COLUMN_INFO_CATALOG_VERSION,
    )
    corrected = source.transform_columns({
        "DATA_TYPE": fix_data_type,
        "TYPE_NAME": fix_type_name,
        "IS_NULLABLE": fix_nullable,
    })

    if trace is not None:
        trace.info(
            "%s.%s.%s DATA_TYPE: %s",
            catalog_name, schema_name, table_name,
            "|".join(str(value) for value in corrected.column("DATA_TYPE")),
        )
        trace.info(
            "%s.%s.%s IS_NULLABLE: %s",
            catalog_name, schema_name, table_name,
            "|".join(corrected.column("IS_NULLABLE")),
        )

    return corrected
