"""Tests for the script-level preprocessing rules."""

import pytest

from ddlbridge.services.sql_conversion.utils.regex_utils import re_flags
from ddlbridge.services.sql_conversion.utils.sql_preprocessing import PREPROCESSING_RULES, preprocess_script


class TestPreprocessScript:
    def test_strips_backticks(self) -> None:
        assert preprocess_script("CREATE TABLE `t` (`id` int)") == "CREATE TABLE t (id int)"

    def test_collapses_timestamp_with_time_zone(self) -> None:
        assert preprocess_script("ts TIMESTAMP WITH TIME ZONE NOT NULL") == "ts timestamptz NOT NULL"

    def test_collapses_timestamp_without_time_zone(self) -> None:
        assert preprocess_script("ts timestamp without time zone") == "ts timestamp"

    def test_collapses_character_varying(self) -> None:
        assert preprocess_script("name character varying(20)") == "name varchar(20)"

    def test_strips_pg_catalog_collation(self) -> None:
        sql = 'name text COLLATE pg_catalog."default" NOT NULL'
        assert preprocess_script(sql) == "name text NOT NULL"

    def test_empty_input(self) -> None:
        assert preprocess_script("") == ""

    def test_rules_are_named_and_ordered(self) -> None:
        names = [rule["name"] for rule in PREPROCESSING_RULES]
        assert names[0] == "strip_backtick_quoting"
        assert len(names) == len(set(names))


class TestReFlags:
    def test_combines_flags(self) -> None:
        import re

        assert re_flags("IGNORECASE|DOTALL") == re.IGNORECASE | re.DOTALL

    def test_empty(self) -> None:
        assert re_flags("") == 0

    def test_unknown_flag(self) -> None:
        with pytest.raises(ValueError):
            re_flags("VERBOSE_ISH")
