"""Engine configuration.

An :class:`EngineConfig` bundles everything :func:`~sqlprep.prepare` needs
besides the template and its parameters: the type/modifier registry, the
escaper and, optionally, a connection for statement execution. Independent
configurations can coexist in one process; the process default is used when
no configuration is passed explicitly.
"""

import logging
import threading
from typing import TYPE_CHECKING, Any, Final, Optional

from sqlprep.escaping import MySQLEscaper
from sqlprep.exceptions import ImproperConfigurationError
from sqlprep.parameters.registry import TypeRegistry, type_registry
from sqlprep.utils.type_guards import is_connection, is_dbapi_connection

if TYPE_CHECKING:
    from sqlprep.builder._keywords import Keywords
    from sqlprep.protocols import ConnectionProtocol, EscaperProtocol

__all__ = (
    "EngineConfig",
    "get_default_config",
    "set_connection",
    "set_default_config",
)

logger = logging.getLogger("sqlprep.config")

ENGINE_CONFIG_SLOTS: Final = ("connection", "escaper", "keywords", "registry")


class EngineConfig:
    """Configuration shared by the prepare engine and the statement buffer.

    Args:
        registry: Custom type and modifier handlers. Defaults to the process registry.
        escaper: String escaper. Defaults to the connection's escaper, or
            :class:`~sqlprep.escaping.MySQLEscaper` without a connection.
        connection: Connection used by ``Sql.exec`` and the fetch helpers.
        keywords: Keyword table used by the builder methods.
    """

    __slots__ = ENGINE_CONFIG_SLOTS

    def __init__(
        self,
        registry: Optional[TypeRegistry] = None,
        escaper: "Optional[EscaperProtocol]" = None,
        connection: "Optional[ConnectionProtocol]" = None,
        keywords: "Optional[Keywords]" = None,
    ) -> None:
        self.registry = registry if registry is not None else type_registry
        if escaper is None:
            escaper = connection.escaper if connection is not None else MySQLEscaper()
        self.escaper = escaper
        self.connection = connection
        self.keywords = keywords

    def replace(self, **kwargs: Any) -> "EngineConfig":
        """Return a copy with the given attributes changed.

        Raises:
            TypeError: If a keyword is not an :class:`EngineConfig` attribute.
        """
        for key in kwargs:
            if key not in ENGINE_CONFIG_SLOTS:
                msg = f"{key!r} is not a field in {type(self).__name__}"
                raise TypeError(msg)
        current_kwargs = {slot: getattr(self, slot) for slot in ENGINE_CONFIG_SLOTS}
        current_kwargs.update(kwargs)
        return type(self)(**current_kwargs)

    def require_connection(self) -> "ConnectionProtocol":
        """Return the configured connection.

        Raises:
            ImproperConfigurationError: If no connection has been configured.
        """
        if self.connection is None:
            msg = "No database connection configured. Call sqlprep.set_connection() or pass EngineConfig(connection=...)"
            raise ImproperConfigurationError(msg)
        return self.connection

    def hash(self) -> int:
        """Identity hash of the collaborators, usable as a cache key."""
        return hash((id(self.registry), id(self.escaper), id(self.connection), id(self.keywords)))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(registry={self.registry!r}, escaper={self.escaper!r}, "
            f"connection={self.connection!r}, keywords={self.keywords!r})"
        )


_default_config = EngineConfig()
_default_lock = threading.Lock()


def get_default_config() -> EngineConfig:
    """Return the process default configuration."""
    return _default_config


def set_default_config(config: EngineConfig) -> EngineConfig:
    """Replace the process default configuration and return the previous one."""
    global _default_config  # noqa: PLW0603
    with _default_lock:
        previous, _default_config = _default_config, config
    return previous


def _wrap_connection(connection: Any) -> "ConnectionProtocol":
    import sqlite3

    from sqlprep.adapters.dbapi import DBAPIConnection
    from sqlprep.adapters.sqlite import SqliteConnection

    if is_connection(connection):
        return connection
    if isinstance(connection, sqlite3.Connection):
        return SqliteConnection(connection)
    if is_dbapi_connection(connection):
        return DBAPIConnection(connection)
    msg = f"Unsupported connection type {type(connection).__name__}; expected a DB-API 2.0 connection"
    raise ImproperConfigurationError(msg)


def set_connection(connection: Any = None, config: Optional[EngineConfig] = None) -> EngineConfig:
    """Bind a database connection and derive the escaper from it.

    Raw DB-API connections are wrapped in the matching adapter. Passing
    ``None`` unbinds the connection and restores the default escaper.

    Args:
        connection: A DB-API 2.0 connection, an adapter, or ``None``.
        config: Configuration to update instead of the process default. It
            is updated by copy, the returned object is the new configuration.

    Returns:
        The configuration with the connection bound. When ``config`` is not
        given it also becomes the new process default.
    """
    base = config if config is not None else get_default_config()
    if connection is None:
        updated = base.replace(connection=None, escaper=MySQLEscaper())
    else:
        adapter = _wrap_connection(connection)
        updated = base.replace(connection=adapter, escaper=adapter.escaper)
        logger.debug("Bound connection %r with escaper %r", adapter, adapter.escaper)
    if config is None:
        set_default_config(updated)
    return updated
