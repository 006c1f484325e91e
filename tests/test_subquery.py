from credativ_tsql_converter.subquery import find_statement_end, recurse, split_arguments, split_parenthesized


def test_split_top_level_groups():
    assert split_parenthesized("a (b (c)) d") == [(False, "a "), (True, "(b (c))"), (False, " d")]
    assert split_parenthesized("(x)(y)") == [(True, "(x)"), (True, "(y)")]
    assert split_parenthesized("no groups") == [(False, "no groups")]
    assert split_parenthesized("") == []


def test_parentheses_in_quotes_do_not_count():
    assert split_parenthesized("x = ')' AND (y)") == [(False, "x = ')' AND "), (True, "(y)")]
    assert split_parenthesized('"a(b" (c)') == [(False, '"a(b" '), (True, "(c)")]
    assert split_parenthesized("[a(b] (c)") == [(False, "[a(b] "), (True, "(c)")]
    assert split_parenthesized("(')')") == [(True, "(')')")]


def test_unbalanced_open_parenthesis_stays_plain():
    assert split_parenthesized("a (b") == [(False, "a (b")]
    assert split_parenthesized("((a)") == [(False, "("), (True, "(a)")]
    assert split_parenthesized("f(x (y)") == [(False, "f(x "), (True, "(y)")]


def test_unbalanced_close_parenthesis_stays_plain():
    assert split_parenthesized("a) (b)") == [(False, "a) "), (True, "(b)")]
    assert split_parenthesized("(a))") == [(True, "(a)"), (False, ")")]


def test_segments_join_back_to_input():
    for text in ["SELECT (a, (b)) FROM (SELECT 1) t", "((( x", "a ')(' (b) [c(] )"]:
        assert "".join(segment for _, segment in split_parenthesized(text)) == text


def test_recurse_converts_group_interiors():
    assert recurse("f(x) + (y)", str.upper) == "f(X) + (Y)"
    # only the top level interior is handed over, nested groups are the callback's job
    assert recurse("(a (b))", lambda inner: f"<{inner}>") == "(<a (b)>)"
    assert recurse("plain", str.upper) == "plain"


def test_recurse_handles_any_depth():
    depth = 50
    text = "(" * depth + "x" + ")" * depth

    def convert(inner):
        return recurse(inner, convert).replace("x", "y")

    assert recurse(text, convert) == "(" * depth + "y" + ")" * depth


def test_split_arguments_of_nested_call():
    assert split_arguments("f(a, g(b, c), 'x,y')", 1) == (["a", " g(b, c)", " 'x,y'"], 20)
    assert split_arguments("f(x) + 1", 1) == (["x"], 4)


def test_split_arguments_of_unclosed_call():
    assert split_arguments("f(a, g(b)", 1) is None
    assert split_arguments("f(a, ')'", 1) is None


def test_statement_ends_at_semicolon_or_enclosing_parenthesis():
    assert find_statement_end("a FROM t; SELECT 1", 0) == 8
    assert find_statement_end("a FROM t) x", 0) == 8
    assert find_statement_end("a FROM t WHERE f(b;c)", 0) == 21


def test_statement_ends_before_next_statement_line():
    assert find_statement_end("a FROM t\nSELECT b", 0) == 8
    assert find_statement_end("a FROM t\nGO\n", 0) == 8
    assert find_statement_end("a\nFROM t\nWHERE a IN (\nSELECT b)", 0) == 31


def test_statement_continues_after_set_operator():
    text = "a FROM t\nUNION ALL\nSELECT b FROM u"
    assert find_statement_end(text, 0) == len(text)
