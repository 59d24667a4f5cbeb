"""SQLPrep: SQL statement assembly with a typed placeholder template engine."""

from sqlprep import adapters, builder, exceptions, parameters, typing, utils
from sqlprep.__metadata__ import __version__
from sqlprep._sql import SqlFactory
from sqlprep.adapters import DBAPIConnection, SqliteConnection
from sqlprep.builder import DEFAULT_KEYWORDS, Keywords, Sql
from sqlprep.config import EngineConfig, get_default_config, set_connection, set_default_config
from sqlprep.escaping import DialectEscaper, MySQLEscaper, StandardEscaper, escape_like, get_escaper
from sqlprep.exceptions import (
    ArityError,
    ImproperConfigurationError,
    NullabilityError,
    ParameterError,
    ParameterRangeError,
    ParameterTypeError,
    PlaceholderSyntaxError,
    QueryError,
    SerializationError,
    SQLBuilderError,
    SQLPrepError,
    UnknownKeyError,
)
from sqlprep.parameters import (
    PreparedStatement,
    PrepareEngine,
    TypeRegistry,
    prepare,
    prepare_statement,
    register_modifier,
    register_type,
    type_registry,
    unregister_modifier,
    unregister_type,
)

sql = SqlFactory()

__all__ = (
    "DEFAULT_KEYWORDS",
    "ArityError",
    "DBAPIConnection",
    "DialectEscaper",
    "EngineConfig",
    "ImproperConfigurationError",
    "Keywords",
    "MySQLEscaper",
    "NullabilityError",
    "ParameterError",
    "ParameterRangeError",
    "ParameterTypeError",
    "PlaceholderSyntaxError",
    "PrepareEngine",
    "PreparedStatement",
    "QueryError",
    "SQLBuilderError",
    "SQLPrepError",
    "SerializationError",
    "Sql",
    "SqlFactory",
    "SqliteConnection",
    "StandardEscaper",
    "TypeRegistry",
    "UnknownKeyError",
    "__version__",
    "adapters",
    "builder",
    "escape_like",
    "exceptions",
    "get_default_config",
    "get_escaper",
    "parameters",
    "prepare",
    "prepare_statement",
    "register_modifier",
    "register_type",
    "set_connection",
    "set_default_config",
    "sql",
    "type_registry",
    "typing",
    "unregister_modifier",
    "unregister_type",
    "utils",
)
