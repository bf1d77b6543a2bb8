from docsearch.index.analysis import tokenize
from docsearch.search.query import (
    EXACT_MATCH_BOOST,
    ExactBoosted,
    StructuredQuery,
    TrailingWildcard,
    build_query,
    parse_query,
)


def test_tokenize_splits_on_hyphens_slashes_and_lowercases() -> None:
    assert tokenize("Hyphen-ated path/to/File v2.0") == ["hyphen", "ated", "path", "to", "file", "v2.0"]
    assert tokenize("") == []


def test_parse_phrase_and_term() -> None:
    parsed = parse_query('"red pepper" spicy')
    assert parsed.phrases == ("red pepper",)
    assert parsed.terms == ("spicy",)


def test_parse_multiple_phrases_keep_order_and_terms_between() -> None:
    parsed = parse_query("install \"Web Server\" --port 'max size' now")
    assert parsed.phrases == ("Web Server", "max size")
    assert parsed.terms == ("install", "port", "now")
    assert parsed.required_phrases == ("web server", "max size")


def test_phrase_tokens_do_not_leak_into_terms() -> None:
    parsed = parse_query('alpha "beta gamma" delta')
    assert "beta" not in parsed.terms
    assert "gamma" not in parsed.terms
    assert parsed.terms == ("alpha", "delta")


def test_no_quotes_means_full_tokenization() -> None:
    text = "Configure the index-path/location"
    parsed = parse_query(text)
    assert parsed.phrases == ()
    assert parsed.terms == tuple(tokenize(text))


def test_unterminated_quote_degrades_to_terms() -> None:
    parsed = parse_query('red "pepper sauce')
    assert parsed.phrases == ()
    assert parsed.terms == ("red", "pepper", "sauce")


def test_mismatched_quote_characters_are_not_a_phrase() -> None:
    parsed = parse_query("'red pepper\"")
    assert parsed.phrases == ()
    assert parsed.terms == ("red", "pepper")


def test_escaped_quote_inside_phrase() -> None:
    parsed = parse_query(r'"say \"hi\" now" later')
    assert parsed.phrases == (r"say \"hi\" now",)
    assert parsed.terms == ("later",)


def test_empty_and_whitespace_input() -> None:
    assert parse_query("").phrases == ()
    assert parse_query("").terms == ()
    assert parse_query("   ").terms == ()


def test_build_query_combines_phrase_tokens_then_terms() -> None:
    query = build_query(["Red Pepper"], ["spicy"])
    tokens = ("red", "pepper", "spicy")
    assert query.clauses == (ExactBoosted(tokens, EXACT_MATCH_BOOST), TrailingWildcard(tokens))
    assert query.clauses[0].weight == 10.0
    assert not query.matches_nothing


def test_build_query_without_tokens_matches_nothing() -> None:
    query = build_query([], [])
    assert query == StructuredQuery()
    assert query.matches_nothing
    assert build_query(["  "], []).matches_nothing
