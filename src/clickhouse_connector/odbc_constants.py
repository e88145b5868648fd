"""Numeric constants from the ODBC headers used by the connector."""


class SqlType:
    """Standard ODBC SQL data type codes (sql.h / sqlext.h)."""
    CHAR = 1
    NUMERIC = 2
    DECIMAL = 3
    INTEGER = 4
    SMALLINT = 5
    FLOAT = 6
    REAL = 7
    DOUBLE = 8
    DATETIME = 9
    TIME = 10
    TIMESTAMP = 11
    VARCHAR = 12
    TYPE_DATE = 91
    TYPE_TIME = 92
    TYPE_TIMESTAMP = 93
    LONGVARCHAR = -1
    BINARY = -2
    VARBINARY = -3
    LONGVARBINARY = -4
    BIGINT = -5
    TINYINT = -6
    BIT = -7
    WCHAR = -8
    WVARCHAR = -9
    WLONGVARCHAR = -10
    GUID = -11


class ClickHouseSqlType:
    """
    Type codes the ClickHouse ODBC driver reports in SQLColumns.

    Several of them collide with, or sit outside of, the standard ODBC
    range and have to be remapped before a reporting host sees them.
    """
    DATETIME = 9
    TIME = 10
    TIMESTAMP = 11
    TEXT = 12
    GUID = 245
    TINYINT = 250
    BIGINT = 251


# SQL_GROUP_BY
SQL_GB_NOT_SUPPORTED = 0x0000
SQL_GB_GROUP_BY_EQUALS_SELECT = 0x0001
SQL_GB_GROUP_BY_CONTAINS_SELECT = 0x0002
SQL_GB_NO_RELATION = 0x0003
SQL_GB_COLLATE = 0x0004

# SQL_SQL_CONFORMANCE
SQL_SC_SQL92_ENTRY = 0x00000001
SQL_SC_FIPS127_2_TRANSITIONAL = 0x00000002
SQL_SC_SQL92_INTERMEDIATE = 0x00000004
SQL_SC_SQL92_FULL = 0x00000008

# SQLGetInfo info types
SQL_DRIVER_NAME = 6
SQL_DRIVER_VER = 7
SQL_SERVER_NAME = 13
SQL_DBMS_NAME = 17
SQL_DBMS_VER = 18
SQL_IDENTIFIER_QUOTE_CHAR = 29
SQL_CONVERT_CHAR = 56
SQL_CONVERT_VARCHAR = 70
SQL_CONVERT_FUNCTIONS = 48
SQL_AGGREGATE_FUNCTIONS = 169
SQL_SQL92_PREDICATES = 160
SQL_CONVERT_WCHAR = 122
SQL_CONVERT_WVARCHAR = 126

SQL_INFO_NAMES = {
    SQL_DRIVER_NAME: "SQL_DRIVER_NAME",
    SQL_DRIVER_VER: "SQL_DRIVER_VER",
    SQL_SERVER_NAME: "SQL_SERVER_NAME",
    SQL_DBMS_NAME: "SQL_DBMS_NAME",
    SQL_DBMS_VER: "SQL_DBMS_VER",
    SQL_IDENTIFIER_QUOTE_CHAR: "SQL_IDENTIFIER_QUOTE_CHAR",
    SQL_CONVERT_CHAR: "SQL_CONVERT_CHAR",
    SQL_CONVERT_VARCHAR: "SQL_CONVERT_VARCHAR",
    SQL_CONVERT_FUNCTIONS: "SQL_CONVERT_FUNCTIONS",
    SQL_AGGREGATE_FUNCTIONS: "SQL_AGGREGATE_FUNCTIONS",
    SQL_SQL92_PREDICATES: "SQL_SQL92_PREDICATES",
    SQL_CONVERT_WCHAR: "SQL_CONVERT_WCHAR",
    SQL_CONVERT_WVARCHAR: "SQL_CONVERT_WVARCHAR",
}
