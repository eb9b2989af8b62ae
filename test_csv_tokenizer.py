"""Tests for the CSV tokenizer."""

import pytest

from csv_tokenizer import CsvTokenizer, tokenize


def test_simple_rows():
    assert tokenize("a,b,c\nd,e,f") == [["a", "b", "c"], ["d", "e", "f"]]


def test_quoted_field_with_delimiter():
    rows = tokenize('Name,Description\n"Test Sword","A sword, sharp and deadly"')
    assert rows[1] == ["Test Sword", "A sword, sharp and deadly"]


def test_escaped_quotes():
    rows = tokenize('Name,Quote\n"Test","He said ""hello"""')
    assert rows[1][1] == 'He said "hello"'


def test_quoted_field_with_newline():
    rows = tokenize('a,"line one\nline two",c\nd,e,f')
    assert rows == [["a", "line one\nline two", "c"], ["d", "e", "f"]]


def test_mixed_line_endings():
    rows = tokenize("a,b\r\nc,d\re,f\ng,h")
    assert rows == [["a", "b"], ["c", "d"], ["e", "f"], ["g", "h"]]


def test_empty_input_gives_one_empty_row():
    assert tokenize("") == [[""]]


def test_trailing_newline_gives_blank_row():
    assert tokenize("a,b\n") == [["a", "b"], [""]]


def test_empty_fields_kept():
    assert tokenize(",,x,") == [["", "", "x", ""]]


def test_whitespace_preserved():
    assert tokenize(" a , b ") == [[" a ", " b "]]


@pytest.mark.parametrize("delimiter", [";", "\t", "|"])
def test_other_delimiters(delimiter):
    text = delimiter.join(["x", '"y' + delimiter + 'z"', "w"])
    assert tokenize(text, delimiter) == [["x", "y" + delimiter + "z", "w"]]


def test_comma_is_literal_with_other_delimiter():
    assert tokenize("a,b;c", ";") == [["a,b", "c"]]


def test_unclosed_quote_does_not_crash():
    rows = tokenize('a,"bc\nd')
    assert rows == [["a", "bc\nd"]]


def test_text_after_closing_quote_is_kept():
    assert tokenize('"ab"cd,e') == [["abcd", "e"]]


def test_quote_inside_unquoted_field_is_literal():
    assert tokenize('ab"cd,e') == [['ab"cd', "e"]]


@pytest.mark.parametrize("delimiter", ["", ",,", '"', "\n"])
def test_invalid_delimiter(delimiter):
    with pytest.raises(ValueError):
        CsvTokenizer(delimiter)


def test_large_input():
    columns = 60
    line = ",".join(f'"cell, {i}"' if i % 7 == 0 else f"cell{i}" for i in range(columns))
    text = "\r\n".join([line] * 800)

    rows = CsvTokenizer().tokenize(text)

    assert len(rows) == 800
    assert all(len(row) == columns for row in rows)
    assert rows[-1][0] == "cell, 0"
    assert rows[-1][1] == "cell1"
