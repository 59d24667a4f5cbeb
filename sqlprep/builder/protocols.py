from typing import TYPE_CHECKING, Any, Optional, Protocol

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlprep.builder._keywords import Keywords
    from sqlprep.config import EngineConfig

__all__ = ("StatementBufferProtocol",)


class StatementBufferProtocol(Protocol):
    _sql: str

    @property
    def config(self) -> "EngineConfig": ...

    @property
    def keywords(self) -> "Keywords": ...

    def prepare(self, template: str, *parameters: Any) -> "Self": ...

    def _append(self, text: str) -> "Self": ...

    def _clause(self, keyword: str, statement: Optional[str], parameters: "tuple[Any, ...]") -> "Self": ...

    def _render_value(self, value: Any, context: str) -> str: ...
