"""Tests for the line-oriented statement splitter."""

from ddlbridge.services.sql_conversion.utils.statement_splitter import (
    DEFAULT_TERMINATOR,
    Statement,
    split_statements,
)


class TestBasicSplitting:
    def test_two_statements(self) -> None:
        result = split_statements("CREATE TABLE a (x INT);\nCREATE TABLE b (y INT);")
        assert result == [
            Statement("CREATE TABLE a (x INT)", ";"),
            Statement("CREATE TABLE b (y INT)", ";"),
        ]

    def test_empty_script(self) -> None:
        assert split_statements("") == []
        assert split_statements("\n\n   \n") == []

    def test_multiline_statement_keeps_line_breaks(self) -> None:
        result = split_statements("CREATE TABLE a (\n  x INT\n);")
        assert result == [Statement("CREATE TABLE a (\n  x INT\n)", ";")]

    def test_two_statements_on_one_line(self) -> None:
        result = split_statements("SELECT 1; SELECT 2;")
        assert [s.text for s in result] == ["SELECT 1", "SELECT 2"]

    def test_trailing_statement_without_terminator(self) -> None:
        result = split_statements("CREATE TABLE a (x INT);\nCREATE TABLE b (y INT)")
        assert result[-1] == Statement("CREATE TABLE b (y INT)", "")

    def test_crlf_line_endings(self) -> None:
        result = split_statements("CREATE TABLE a (x INT);\r\nCREATE TABLE b (y INT);\r\n")
        assert [s.text for s in result] == ["CREATE TABLE a (x INT)", "CREATE TABLE b (y INT)"]

    def test_byte_order_mark_is_dropped(self) -> None:
        result = split_statements("\ufeffCREATE TABLE a (x INT);")
        assert result[0].text == "CREATE TABLE a (x INT)"


class TestCommentsAndBlankLines:
    def test_comment_lines_are_dropped(self) -> None:
        script = "-- dump header\nCREATE TABLE a (\n-- the key\n  x INT\n);"
        result = split_statements(script)
        assert result == [Statement("CREATE TABLE a (\n  x INT\n)", ";")]

    def test_blank_line_inside_statement_is_preserved(self) -> None:
        result = split_statements("\n\nCREATE TABLE a (\n\n  x INT\n);")
        assert result[0].text == "CREATE TABLE a (\n\n  x INT\n)"

    def test_terminator_after_trailing_comment_is_ignored(self) -> None:
        result = split_statements("CREATE TABLE a ( -- note;\n  x INT\n);")
        assert len(result) == 1
        assert result[0].text.endswith("x INT\n)")

    def test_apostrophe_in_block_comment(self) -> None:
        result = split_statements("/* Author's schema */\nCREATE TABLE a (x INT);\nCREATE TABLE b (y INT);")
        assert result == [
            Statement("CREATE TABLE a (x INT)", ";"),
            Statement("CREATE TABLE b (y INT)", ";"),
        ]

    def test_block_comment_across_lines(self) -> None:
        script = "/* line one\n it's two;\n*/\nCREATE TABLE a (x INT);"
        assert split_statements(script) == [Statement("CREATE TABLE a (x INT)", ";")]

    def test_inline_block_comment_is_removed(self) -> None:
        script = "CREATE TABLE a (\n id INT /* user's id */\n);\nCREATE TABLE b (y INT);"
        result = split_statements(script)
        assert len(result) == 2
        assert "user" not in result[0].text
        assert result[1].text == "CREATE TABLE b (y INT)"

    def test_hash_comments(self) -> None:
        script = "# it's a dump\nCREATE TABLE a (x INT); # don't\nCREATE TABLE b (y INT);"
        result = split_statements(script)
        assert [s.text for s in result] == ["CREATE TABLE a (x INT)", "CREATE TABLE b (y INT)"]

    def test_terminator_inside_block_comment(self) -> None:
        result = split_statements("CREATE TABLE a (x INT /* ; */);")
        assert len(result) == 1
        assert result[0].terminator == ";"

    def test_comment_markers_inside_literals_are_kept(self) -> None:
        result = split_statements("CREATE TABLE a (x VARCHAR(5) DEFAULT '/*#--');")
        assert result[0].text == "CREATE TABLE a (x VARCHAR(5) DEFAULT '/*#--')"


class TestDelimiterDirective:
    def test_delimiter_block_and_table(self) -> None:
        script = (
            "DELIMITER $$\n"
            "CREATE PROCEDURE p()\n"
            "BEGIN\n"
            "  SELECT 1;\n"
            "END$$\n"
            "DELIMITER ;\n"
            "CREATE TABLE t (id INT PRIMARY KEY);\n"
        )
        result = split_statements(script)
        assert result == [
            Statement("CREATE PROCEDURE p()\nBEGIN\n  SELECT 1;\nEND", "$$"),
            Statement("CREATE TABLE t (id INT PRIMARY KEY)", DEFAULT_TERMINATOR),
        ]

    def test_directive_is_case_insensitive_and_not_emitted(self) -> None:
        result = split_statements("delimiter //\nSELECT 1//\ndelimiter ;\nSELECT 2;")
        assert [s.text for s in result] == ["SELECT 1", "SELECT 2"]
        assert all("delimiter" not in s.text.lower() for s in result)

    def test_directive_flushes_open_statement(self) -> None:
        result = split_statements("SELECT 1\nDELIMITER $$\nSELECT 2$$")
        assert result == [Statement("SELECT 1", ""), Statement("SELECT 2", "$$")]


class TestQuotedTerminators:
    def test_semicolon_inside_single_quotes(self) -> None:
        result = split_statements("CREATE TABLE a (x VARCHAR(5) DEFAULT 'a;b');")
        assert result == [Statement("CREATE TABLE a (x VARCHAR(5) DEFAULT 'a;b')", ";")]

    def test_literal_spanning_lines(self) -> None:
        script = "CREATE TABLE a (x TEXT COMMENT 'first;\nsecond');\nSELECT 1;"
        result = split_statements(script)
        assert len(result) == 2
        assert "first;\nsecond" in result[0].text

    def test_doubled_quote_does_not_close_literal(self) -> None:
        result = split_statements("SELECT 'it''s;here';")
        assert result == [Statement("SELECT 'it''s;here'", ";")]
