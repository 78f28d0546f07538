## lox — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import types

from lox.scanner import Token, scan, significant, KEYWORDS


def kinds(source: str) -> list[str]:
    return [t.kind for t in significant(scan(source))]


def test_single_character_punctuation():
    assert kinds("(){},.-+;:?*/") == [
        'LEFT_PAREN', 'RIGHT_PAREN', 'LEFT_BRACE', 'RIGHT_BRACE', 'COMMA', 'DOT',
        'MINUS', 'PLUS', 'SEMICOLON', 'COLON', 'QUESTION', 'STAR', 'SLASH',
    ]


def test_one_or_two_character_operators():
    assert kinds("! != = == < <= > >=") == [
        'BANG', 'BANG_EQUAL', 'EQUAL', 'EQUAL_EQUAL', 'LESS', 'LESS_EQUAL', 'GREATER', 'GREATER_EQUAL',
    ]
    assert kinds("!==") == ['BANG_EQUAL', 'EQUAL']


def test_offsets_and_lengths_cover_each_lexeme():
    source = "var x = 10;"
    tokens = list(significant(scan(source)))
    assert [(t.kind, t.offset, t.length) for t in tokens] == [
        ('VAR', 0, 3), ('IDENTIFIER', 4, 1), ('EQUAL', 6, 1), ('NUMBER', 8, 2), ('SEMICOLON', 10, 1),
    ]
    assert [source[t.offset:t.end] for t in tokens] == ['var', 'x', '=', '10', ';']


def test_line_comment_stops_before_newline():
    tokens = list(scan("1 // hi\n2"))
    assert [t.kind for t in tokens] == ['NUMBER', 'WHITESPACE', 'COMMENT', 'WHITESPACE', 'NUMBER']
    comment = tokens[2]
    assert (comment.offset, comment.length) == (2, 5)


def test_slash_without_second_slash_is_division():
    assert kinds("4 / 2") == ['NUMBER', 'SLASH', 'NUMBER']


def test_numbers_are_parsed_to_floats():
    [token] = significant(scan("3.5"))
    assert token == Token('NUMBER', 0, 3, 3.5)
    [token] = significant(scan("42"))
    assert token.value == 42.0 and isinstance(token.value, float)


def test_trailing_dot_is_not_part_of_number():
    tokens = list(scan("12."))
    assert [(t.kind, t.length) for t in tokens] == [('NUMBER', 2), ('DOT', 1)]
    assert tokens[0].value == 12.0
    assert kinds("1.x") == ['NUMBER', 'DOT', 'IDENTIFIER']


def test_string_literals_keep_raw_text():
    [token] = scan('"hi \\n there"')
    assert token.kind == 'STRING'
    assert token.value == 'hi \\n there'
    assert token.terminated is True
    assert token.length == 13


def test_string_literal_may_span_lines():
    [token] = scan('"a\nb"')
    assert token.value == 'a\nb'
    assert token.terminated


def test_unterminated_string_runs_to_end_of_input():
    [token] = scan('"abc')
    assert token.kind == 'STRING'
    assert token.terminated is False
    assert token.value == 'abc'
    assert token.length == 4

    [token] = scan('"')
    assert token.terminated is False and token.value == ''


def test_empty_string_is_terminated():
    [token] = scan('""')
    assert token.terminated and token.value == ''


def test_all_reserved_words_are_keywords():
    source = ' '.join(KEYWORDS)
    assert kinds(source) == list(KEYWORDS.values())
    assert len(KEYWORDS) == 16


def test_keywords_are_case_sensitive_and_whole_words():
    assert kinds("printer Print print_ _print print") == ['IDENTIFIER'] * 4 + ['PRINT']


def test_identifiers_carry_their_text():
    tokens = list(significant(scan("_foo1 caf\u00e9")))
    assert [(t.kind, t.value) for t in tokens] == [('IDENTIFIER', '_foo1'), ('IDENTIFIER', 'caf\u00e9')]


def test_pattern_whitespace_is_grouped_into_one_token():
    tokens = list(scan(" \t\n\u2028\u200ex"))
    assert [(t.kind, t.length) for t in tokens] == [('WHITESPACE', 9), ('IDENTIFIER', 1)]


def test_offsets_and_lengths_count_utf8_bytes():
    source = '"é"é+'
    tokens = list(scan(source))
    assert [(t.kind, t.offset, t.length) for t in tokens] == [('STRING', 0, 4), ('IDENTIFIER', 4, 2), ('PLUS', 6, 1)]
    encoded = source.encode('utf-8')
    assert [encoded[t.offset:t.end].decode('utf-8') for t in tokens] == ['"é"', 'é', '+']


def test_unknown_characters_do_not_stop_scanning():
    assert kinds("1 @ 2 #\u00a0") == ['NUMBER', 'UNKNOWN', 'NUMBER', 'UNKNOWN', 'UNKNOWN']


def test_scan_is_lazy_and_ends_without_eof_token():
    tokens = scan("1 + 2")
    assert isinstance(tokens, types.GeneratorType)
    assert next(tokens).kind == 'NUMBER'
    assert [t.kind for t in tokens] == ['WHITESPACE', 'PLUS', 'WHITESPACE', 'NUMBER']
    assert list(scan("")) == []


def test_significant_drops_trivia_only():
    tokens = list(scan("print 1; // trailing\n"))
    assert [t.kind for t in significant(tokens)] == ['PRINT', 'NUMBER', 'SEMICOLON']
