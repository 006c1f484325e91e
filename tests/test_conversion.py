from unittest.mock import MagicMock

from credativ_tsql_converter import convert
from credativ_tsql_converter.pipeline import ConversionPipeline
from credativ_tsql_converter.rules import RuleTable


def pipeline(**kwargs):
    logger = kwargs.pop('logger', MagicMock())
    return ConversionPipeline(rule_table=RuleTable.default(logger=logger), logger=logger, **kwargs)


def test_bracket_identifiers_are_normalized():
    assert convert("[dbo].[Users]") == '"dbo"."users"'


def test_top_becomes_limit():
    converted = convert("SELECT TOP 10 * FROM Foo")
    assert "SELECT * FROM foo" in converted
    assert converted.endswith("LIMIT 10")


def test_null_coalescing():
    assert convert("ISNULL(a, b)") == "COALESCE(a, b)"


def test_date_arithmetic():
    assert "(OrderDate::timestamp + INTERVAL '5 DAYS')" in convert("DATEADD(day, 5, OrderDate)")


def test_date_difference_with_nested_getdate():
    assert convert("SELECT DATEDIFF(day, StartDate, GETDATE()) FROM t") == \
        "SELECT DATE_PART('day', CURRENT_DATE::timestamp - StartDate::timestamp) FROM t"


def test_nested_subquery_converts_like_standalone_query():
    inner = "SELECT TOP 1 Id FROM [dbo].[Orders]"
    outer = f"SELECT Name FROM Customers WHERE Id IN ({inner})"
    standalone = convert(inner)
    assert standalone == 'SELECT Id FROM "dbo"."orders" LIMIT 1'
    assert f"({standalone})" in convert(outer)


def test_subquery_in_from_clause():
    converted = convert("SELECT t.a FROM (SELECT TOP 5 a FROM [T1] ORDER BY a) t")
    assert converted == 'SELECT t.a FROM (SELECT a FROM "t1" ORDER BY a LIMIT 5) t'


def test_converted_constructs_are_stable():
    once = convert("SELECT GETDATE()")
    assert once == "SELECT CURRENT_DATE"
    assert convert(once) == once

    interval = convert("DATEADD(day, 5, d)")
    assert convert(interval) == interval


def test_concatenation_fed_back_is_unchanged():
    assert convert("a || b") == "a || b"
    assert convert(convert("a + b")) == "a || b"


def test_numeric_addition_is_rewritten():
    # known hazard: '+' between two plain operands is always taken as concatenation
    assert convert("1 + 2") == "1 || 2"


def test_go_line_becomes_semicolon():
    assert convert("SELECT 1\nGO\nSELECT 2") == "SELECT 1\n;\nSELECT 2"


def test_top_with_go_separated_batches():
    assert convert("SELECT TOP 5 name FROM T\nGO\n") == "SELECT name FROM t LIMIT 5\n;\n"


def test_empty_input():
    assert convert("") == ""
    assert convert(None) is None


def test_deep_nesting_converts_innermost_group():
    depth = 50
    converted = convert("(" * depth + "GETDATE()" + ")" * depth)
    assert converted == "(" * depth + "CURRENT_DATE" + ")" * depth


def test_too_deep_nesting_is_returned_unchanged():
    logger = MagicMock()
    text = "(" * 3000 + "1" + ")" * 3000
    assert pipeline(logger=logger).convert(text) == text
    logger.warning.assert_called_once()
    assert 'whole query' in logger.warning.call_args[0][0]


def test_unbalanced_parentheses_never_raise():
    assert convert("SELECT ISNULL(a, b") == "SELECT COALESCE(a, b"
    assert convert("SELECT a) FROM t") == "SELECT a) FROM t"


def test_literals_are_not_normalized():
    assert convert("SELECT 'Dbo.Users' FROM T") == "SELECT 'Dbo.Users' FROM t"


def test_national_string_in_where_clause():
    assert convert("SELECT Id FROM [Users] WHERE Name = N'Ann'") == \
        "SELECT Id FROM \"users\" WHERE Name = 'Ann'"


def test_names_case_handling():
    assert pipeline(names_case_handling='upper').convert("[dbo].[Users]") == '"DBO"."USERS"'
    assert pipeline(names_case_handling='keep').convert("SELECT * FROM [dbo].[Users]") == 'SELECT * FROM "dbo"."Users"'


def test_fix_limit_appends_missing_limit():
    fixer = pipeline()
    assert fixer.fix_limit("SELECT TOP 3 a", "SELECT a;") == "SELECT a LIMIT 3;"
    assert fixer.fix_limit("SELECT TOP (3) a", "SELECT a\n") == "SELECT a LIMIT 3\n"
    assert fixer.fix_limit("SELECT a", "SELECT a") == "SELECT a"
    assert fixer.fix_limit("SELECT TOP 3 a", "SELECT a LIMIT 3") == "SELECT a LIMIT 3"


def test_rule_callback_is_called():
    applied = []
    converter = pipeline(on_rule_applied=lambda rule, before, after: applied.append(rule.name))
    converter.convert("SELECT LEN(Name) FROM t")
    assert applied == ['string_length']


def test_same_input_same_output():
    query = "SELECT TOP 3 [Name] + ' ' + [Surname], ISNULL(Age, 0) FROM [dbo].[People]"
    assert convert(query) == convert(query)
    assert convert(query) == 'SELECT "Name" || \' \' || "Surname", COALESCE(Age, 0) FROM "dbo"."people" LIMIT 3'


def test_calls_with_deeply_nested_arguments():
    assert convert("SELECT CONVERT(varchar, COALESCE(SUM(a), 0)) FROM t") == \
        "SELECT CAST(COALESCE(SUM(a), 0) AS varchar) FROM t"
    assert convert("SELECT DATEADD(day, 1, MAX(ISNULL(d, e))) FROM t") == \
        "SELECT (MAX(COALESCE(d, e))::timestamp + INTERVAL '1 DAYS') FROM t"


def test_top_inside_literal_adds_no_limit():
    assert convert("SELECT 'TOP 5 items' AS label FROM t") == "SELECT 'TOP 5 items' AS label FROM t"
    assert convert("SELECT [TOP 5] FROM t") == 'SELECT "TOP 5" FROM t'


def test_like_character_class_is_kept():
    assert convert("SELECT Name FROM t WHERE Name LIKE '[A-C]%'") == "SELECT Name FROM t WHERE Name LIKE '[A-C]%'"


def test_each_statement_keeps_its_own_limit():
    assert convert("SELECT TOP 1 a FROM t\nSELECT TOP 2 b FROM u") == "SELECT a FROM t LIMIT 1\nSELECT b FROM u LIMIT 2"


def test_invalid_custom_template_does_not_break_conversion():
    logger = MagicMock()
    table = RuleTable.default(custom_substitutions=[['NEWID', '\\2']], logger=logger)
    converter = ConversionPipeline(rule_table=table, logger=logger)
    assert converter.convert("SELECT NEWID()") == "SELECT NEWID()"
    logger.warning.assert_called_once()
