"""Tests for the statement buffer and its SELECT side clause methods."""

import pytest

from sqlprep.builder import DEFAULT_KEYWORDS, Sql
from sqlprep.config import EngineConfig
from sqlprep.exceptions import ArityError, ImproperConfigurationError, SQLBuilderError


@pytest.fixture
def single_line(config: EngineConfig) -> EngineConfig:
    return config.replace(keywords=DEFAULT_KEYWORDS.single_line())


def test_initial_statement(config: EngineConfig) -> None:
    assert str(Sql(config=config)) == ""
    assert str(Sql("SELECT 1", config=config)) == "SELECT 1"
    assert str(Sql("SELECT ?", 5, config=config)) == "SELECT 5"


def test_call_appends(config: EngineConfig) -> None:
    sql = Sql("x = ", config=config)()
    assert str(sql) == "x = NULL"
    assert str(Sql(config=config)("id = ?", 5)(" AND 1")) == "id = 5 AND 1"


def test_reset(config: EngineConfig) -> None:
    sql = Sql("SELECT 1", config=config)
    assert sql.reset() is sql
    assert sql.sql == ""


def test_equality_and_len(config: EngineConfig) -> None:
    sql = Sql("SELECT 1", config=config)
    assert sql == "SELECT 1"
    assert sql == Sql("SELECT 1", config=config)
    assert len(sql) == 8
    assert repr(sql) == "Sql('SELECT 1')"


def test_prepare_errors_propagate(config: EngineConfig) -> None:
    with pytest.raises(ArityError):
        Sql(config=config).where("a = ? AND b = ?", 1)


def test_multi_line_layout(config: EngineConfig) -> None:
    sql = Sql(config=config).select("id", "name").from_("users").where("id = ?", 5)
    assert str(sql) == "SELECT id, name\nFROM\n\tusers\nWHERE\n\tid = 5"


def test_select_from_where(single_line: EngineConfig) -> None:
    sql = Sql(config=single_line).select("id", "name").from_("users").where("status = ? AND age >= ?", "active", 18)
    assert str(sql) == 'SELECT id, name FROM users WHERE status = "active" AND age >= 18'


def test_lower_case_keywords(config: EngineConfig) -> None:
    lower = config.replace(keywords=DEFAULT_KEYWORDS.single_line().lower_case())
    assert str(Sql(config=lower).select("id").from_("users")) == "select id from users"


def test_select_variants(single_line: EngineConfig) -> None:
    assert str(Sql(config=single_line).select_distinct("age")) == "SELECT DISTINCT age"
    assert (
        str(Sql(config=single_line).select_with_modifier("SQL_CALC_FOUND_ROWS", "id", "name"))
        == "SELECT SQL_CALC_FOUND_ROWS id, name"
    )


def test_from_with_parameters(single_line: EngineConfig) -> None:
    sql = Sql(config=single_line).select("*").from_("users WHERE id = ?", 3)
    assert str(sql) == "SELECT * FROM users WHERE id = 3"


class TestJoins:
    @pytest.mark.parametrize(
        ("method", "keyword"),
        [
            ("join", "JOIN"),
            ("left_join", "LEFT JOIN"),
            ("left_outer_join", "LEFT OUTER JOIN"),
            ("right_join", "RIGHT JOIN"),
            ("right_outer_join", "RIGHT OUTER JOIN"),
            ("inner_join", "INNER JOIN"),
            ("outer_join", "OUTER JOIN"),
            ("cross_join", "CROSS JOIN"),
            ("straight_join", "STRAIGHT_JOIN"),
            ("natural_join", "NATURAL JOIN"),
        ],
    )
    def test_join_keywords(self, method: str, keyword: str, single_line: EngineConfig) -> None:
        sql = getattr(Sql("SELECT * FROM users u", config=single_line), method)("posts p")
        assert str(sql) == f"SELECT * FROM users u {keyword} posts p"

    def test_join_with_on(self, single_line: EngineConfig) -> None:
        sql = Sql(config=single_line).select("*").from_("users u").left_join("posts p").on("p.user_id = u.id")
        assert str(sql) == "SELECT * FROM users u LEFT JOIN posts p ON p.user_id = u.id"

    def test_join_on(self, single_line: EngineConfig) -> None:
        sql = Sql(config=single_line).join_on("posts p", "p.user_id = u.id AND p.status = ?", "live")
        assert str(sql) == ' JOIN posts p ON p.user_id = u.id AND p.status = "live"'

    def test_join_on_without_parameters(self, single_line: EngineConfig) -> None:
        assert str(Sql(config=single_line).join_on("posts p", "p.user_id = u.id")) == " JOIN posts p ON p.user_id = u.id"

    def test_using(self, single_line: EngineConfig) -> None:
        assert str(Sql(config=single_line).join("posts").using("id", "org_id")) == " JOIN posts USING (id, org_id)"


class TestWhere:
    def test_in_values(self, single_line: EngineConfig) -> None:
        sql = Sql(config=single_line).select("*").where("id").in_(1, 2, "x")
        assert str(sql) == 'SELECT * WHERE id IN (1, 2, "x")'

    def test_in_sequence(self, single_line: EngineConfig) -> None:
        assert str(Sql(config=single_line)("id").in_([1, 2, 3])) == "id IN (1, 2, 3)"

    def test_in_rejects_non_scalars(self, single_line: EngineConfig) -> None:
        with pytest.raises(SQLBuilderError):
            Sql(config=single_line)("id").in_(1, object())

    def test_like_escapes_wildcards_in_value(self, single_line: EngineConfig) -> None:
        sql = Sql(config=single_line)("name").like("%?%", "50%_off")
        assert str(sql) == 'name LIKE "%50\\%\\_off%"'

    def test_like_escapes_quotes(self, single_line: EngineConfig) -> None:
        assert str(Sql(config=single_line)("name").like("?%", "O'Br")) == 'name LIKE "O\\\'Br%"'

    def test_not_like(self, single_line: EngineConfig) -> None:
        assert str(Sql(config=single_line)("name").not_like("?%", "a")) == 'name NOT LIKE "a%"'

    def test_having(self, single_line: EngineConfig) -> None:
        sql = Sql(config=single_line).group_by("age").having("COUNT(*) > ?", 1)
        assert str(sql) == " GROUP BY age HAVING COUNT(*) > 1"


class TestOrderAndLimit:
    def test_full_tail(self, single_line: EngineConfig) -> None:
        sql = Sql(config=single_line).order_by("age", "DESC", "name").limit(10).offset(20)
        assert str(sql) == " ORDER BY age DESC, name LIMIT 10 OFFSET 20"

    def test_direction_is_case_insensitive(self, single_line: EngineConfig) -> None:
        assert str(Sql(config=single_line).order_by("age", "asc")) == " ORDER BY age asc"

    def test_limit_with_count(self, single_line: EngineConfig) -> None:
        assert str(Sql(config=single_line).limit(10, "5")) == " LIMIT 10, 5"

    @pytest.mark.parametrize("value", ["abc", 1.5, None, "1e3"])
    def test_limit_requires_integer(self, value: object, single_line: EngineConfig) -> None:
        with pytest.raises(SQLBuilderError):
            Sql(config=single_line).limit(value)

    def test_offset_requires_integer(self, single_line: EngineConfig) -> None:
        with pytest.raises(SQLBuilderError, match="OFFSET"):
            Sql(config=single_line).offset("x")


def test_union(single_line: EngineConfig) -> None:
    assert str(Sql(config=single_line).select("1").union().select("2")) == "SELECT 1 UNION SELECT 2"
    assert str(Sql(config=single_line).select("1").union_all("SELECT ?", 2)) == "SELECT 1 UNION ALL SELECT 2"


def test_explain(single_line: EngineConfig) -> None:
    assert str(Sql(config=single_line).select("1").explain()) == "EXPLAIN SELECT 1"
    assert str(Sql(config=single_line).explain("SELECT ?", 1)) == "EXPLAIN SELECT 1"


def test_clamp(config: EngineConfig) -> None:
    assert str(Sql("SELECT ", config=config).clamp("score", 0, 100)) == "SELECT MIN(MAX(score, 0), 100)"
    assert str(Sql(config=config).clamp("score", 0, 100, "s")) == "MIN(MAX(score, 0), 100) AS s"


def test_sprintf(config: EngineConfig) -> None:
    assert str(Sql(config=config).sprintf("LIMIT %d, %s", 5, "x")) == "LIMIT 5, x"
    assert str(Sql(config=config).sprintf("100%%")) == "100%%"


def test_execute_without_connection(config: EngineConfig) -> None:
    sql = Sql("SELECT 1", config=config)
    with pytest.raises(ImproperConfigurationError):
        sql.exec()
    with pytest.raises(ImproperConfigurationError):
        sql.fetch_all()


def test_process_default_config_is_used() -> None:
    assert str(Sql().select("?").where("name = ?", "x")) == 'SELECT ?\nWHERE\n\tname = "x"'
