import pytest

from ddlbridge.services.sql_conversion.errors import UnsupportedDialect
from ddlbridge.services.sql_conversion.utils.dialect_utils import (
    MYSQL, PGSQL, SQLITE, resolve_dialect, supported_dialects,
)


class TestResolveDialect:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("sqlite", SQLITE), ("SQLite3", SQLITE),
            ("mysql", MYSQL), ("MariaDB", MYSQL),
            ("pgsql", PGSQL), ("postgresql", PGSQL), (" postgres ", PGSQL),
        ],
    )
    def test_aliases(self, name: str, expected: str) -> None:
        assert resolve_dialect(name) == expected

    @pytest.mark.parametrize("name", ["oracle", "", None])
    def test_unknown(self, name) -> None:
        with pytest.raises(UnsupportedDialect) as exc:
            resolve_dialect(name)
        assert exc.value.dialect == name

    def test_supported_list_is_sorted(self) -> None:
        names = supported_dialects()
        assert names == sorted(names)
        assert len(names) == 7

