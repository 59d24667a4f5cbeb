"""Factory for statement buffers.

Exposed as ``sqlprep.sql``. Every call starts a fresh :class:`~sqlprep.builder.Sql`.
"""

from typing import TYPE_CHECKING, Any, Optional

from sqlprep.builder import Sql
from sqlprep.parameters.engine import PrepareEngine

if TYPE_CHECKING:
    from sqlprep.config import EngineConfig

__all__ = ("SqlFactory",)


class SqlFactory:
    """Entry point for building statements.

    Example:
        ```python
        from sqlprep import sql

        query = sql.select("id", "name").from_("users").where("id = ?", 5)
        update = sql.update("users").set({"name": "Bob"}).where("id = ?", 5)
        raw = sql("SELECT * FROM users WHERE name = ?", "O'Brien")
        ```

    Args:
        config: Configuration handed to every buffer. Defaults to the
            process default configuration.
    """

    __slots__ = ("config",)

    def __init__(self, config: "Optional[EngineConfig]" = None) -> None:
        self.config = config

    def __call__(self, statement: Optional[str] = None, *parameters: Any) -> Sql:
        return Sql(statement, *parameters, config=self.config)

    def prepare(self, template: str, *parameters: Any) -> str:
        """Prepare ``template`` without creating a buffer."""
        return PrepareEngine(self.config).prepare(template, *parameters).sql

    def select(self, *columns: str) -> Sql:
        return Sql(config=self.config).select(*columns)

    def select_distinct(self, *columns: str) -> Sql:
        return Sql(config=self.config).select_distinct(*columns)

    def insert_into(self, statement: str, *parameters: Any) -> Sql:
        return Sql(config=self.config).insert_into(statement, *parameters)

    def update(self, statement: Optional[str] = None, *parameters: Any) -> Sql:
        return Sql(config=self.config).update(statement, *parameters)

    def delete_from(self, statement: Optional[str] = None, *parameters: Any) -> Sql:
        return Sql(config=self.config).delete_from(statement, *parameters)

    def call(self, procedure: str, *parameters: Any) -> Sql:
        return Sql(config=self.config).call(procedure, *parameters)

    def explain(self, statement: Optional[str] = None, *parameters: Any) -> Sql:
        return Sql(config=self.config).explain(statement, *parameters)
