"""Static capability declarations handed to the driver host at open time."""

from types import MappingProxyType

from . import odbc_constants as odbc

SQL_CONFORMANCE = odbc.SQL_SC_SQL92_FULL

LIMIT_CLAUSE_KIND_TOP = "Top"

# Capabilities the driver does not report through ODBC 3.8, or reports wrongly.
SQL_CAPABILITIES = MappingProxyType({
    "Sql92Conformance": SQL_CONFORMANCE,
    "GroupByCapabilities": odbc.SQL_GB_GROUP_BY_CONTAINS_SELECT,
    "FractionalSecondsScale": 3,
    "SupportsNumericLiterals": True,
    "SupportsStringLiterals": True,
    "SupportsOdbcDateLiterals": True,
    "SupportsOdbcTimeLiterals": True,
    "SupportsOdbcTimestampLiterals": True,
    "LimitClauseKind": LIMIT_CLAUSE_KIND_TOP,
})

# SQLGetInfo values returned instead of the driver's. The CONVERT bitmasks
# add SQL_CVT_WCHAR/SQL_CVT_WVARCHAR so casts to Unicode types are allowed;
# SQL_CONVERT_FUNCTIONS restricts conversions to CAST.
SQL_GET_INFO_OVERRIDES = MappingProxyType({
    odbc.SQL_SQL92_PREDICATES: 0x0000FFFF,
    odbc.SQL_AGGREGATE_FUNCTIONS: 0xFF,
    odbc.SQL_CONVERT_FUNCTIONS: 0x00000002,
    odbc.SQL_CONVERT_VARCHAR: 0x0082F1FF,
    odbc.SQL_CONVERT_CHAR: 0x0022F1FF,
    odbc.SQL_CONVERT_WVARCHAR: 0x0082F1FF,
    odbc.SQL_CONVERT_WCHAR: 0x0022F1FF,
})

SQL_GET_FUNCTIONS_OVERRIDES = MappingProxyType({})

# (Type1, Type2, ResultType)
IMPLICIT_TYPE_CONVERSIONS = (
    ("Int64", "BIGINT", "BIGINT"),
    ("UInt32", "BIGINT", "BIGINT"),
    ("UInt16", "BIGINT", "BIGINT"),
    ("UInt8", "BIGINT", "BIGINT"),
)
