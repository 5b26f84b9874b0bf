from ddlbridge.utils.timing import DURATION_KEY, timed


class TestTimed:
    def test_dict_result_gets_duration(self) -> None:
        result = timed(lambda sql: {"output": sql}, "CREATE TABLE a (x INT);")
        assert result["output"] == "CREATE TABLE a (x INT);"
        assert result[DURATION_KEY] >= 0

    def test_other_results_untouched(self) -> None:
        assert timed(str.upper, "ddl") == "DDL"
