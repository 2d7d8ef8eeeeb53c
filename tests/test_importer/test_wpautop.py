"""Tests for cfimport.importer.wpautop."""

from cfimport.importer.wpautop import wpautop


def test_empty():
    assert wpautop("") == ""
    assert wpautop("   \n  ") == ""


def test_single_paragraph():
    assert wpautop("Hello world") == "<p>Hello world</p>\n"


def test_two_paragraphs():
    assert wpautop("First\n\nSecond") == "<p>First</p>\n<p>Second</p>\n"


def test_line_break():
    assert wpautop("Line one\nLine two") == "<p>Line one<br />\nLine two</p>\n"


def test_line_break_disabled():
    assert wpautop("Line one\nLine two", br=False) == "<p>Line one\nLine two</p>\n"


def test_block_element_not_wrapped():
    assert wpautop("<div>Hello</div>") == "<div>Hello</div>\n"


def test_pre_preserved():
    assert wpautop("<pre>a\n\nb</pre>") == "<pre>a\n\nb</pre>\n"


def test_windows_newlines():
    assert wpautop("First\r\n\r\nSecond") == "<p>First</p>\n<p>Second</p>\n"
