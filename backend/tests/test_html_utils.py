import logging

import pytest

from edux.services.template_engine import render_template
from edux.utils.html import sanitize_embedded_html, wrap_document, wrap_section_html
from edux.utils.log_utils import REDACTED, RedactingFilter, redact_value


@pytest.mark.parametrize(
    "source,expected",
    [
        ('<a href="/courses">x</a>', '<a href="#">x</a>'),
        ('<a href="/courses/123">x</a>', '<a href="/courses/123">x</a>'),
        ('<a href="https://example.com/courses">x</a>', '<a href="https://example.com/courses">x</a>'),
        ('<a href="/courses?x=1">x</a>', '<a href="#">x</a>'),
        ('<a href="/random">x</a>', '<a href="/random">x</a>'),
        ("<a href='/my-documents#top'>x</a>", "<a href='#'>x</a>"),
        ('<a href="/">home</a>', '<a href="#">home</a>'),
        ('<a href="#section-1">x</a>', '<a href="#section-1">x</a>'),
    ],
)
def test_sanitize_embedded_html(source, expected):
    assert sanitize_embedded_html(source) == expected


def test_sanitize_rewrites_every_matching_link():
    html = '<a href="/templates">t</a><a href="/instructors/9">i</a><a href="/documents">d</a>'
    assert sanitize_embedded_html(html) == '<a href="#">t</a><a href="/instructors/9">i</a><a href="#">d</a>'


def test_wrap_section_html_prepends_style():
    wrapped = wrap_section_html(".a{b:c}", '<a href="/courses">x</a>')
    assert wrapped == '<style>.a{b:c}</style><a href="#">x</a>'


def test_wrap_document_concatenates_stylesheets():
    html = wrap_document("<p>본문</p>", "h1{}", None, "p{}")
    assert html.startswith("<!doctype html><html><head><meta charset=\"utf-8\">")
    assert "<style>h1{}</style><style></style><style>p{}</style></head>" in html
    assert html.endswith("<body><p>본문</p></body></html>")


def test_render_template_plus1_helper():
    html = render_template("{{#each items}}{{plus1 @index}}:{{this}} {{/each}}", {"items": ["a", "b"]})
    assert html == "1:a 2:b "


def test_render_template_escapes_unless_triple_stash():
    context = {"body": "<b>굵게</b>"}
    assert render_template("{{body}}", context) == "&lt;b&gt;굵게&lt;/b&gt;"
    assert render_template("{{{body}}}", context) == "<b>굵게</b>"


def test_render_template_helpers_are_per_call():
    def shout(this, value):
        return str(value).upper()

    assert render_template("{{shout name}}", {"name": "edux"}, helpers={"shout": shout}) == "EDUX"
    # 이전 호출의 헬퍼가 남아 있지 않아야 한다.
    assert render_template("{{shout}}", {"shout": "plain"}) == "plain"


def test_redact_value_masks_tokens():
    assert redact_value({"token": "abc", "nested": {"password": "pw", "id": 1}}) == {
        "token": REDACTED,
        "nested": {"password": REDACTED, "id": 1},
    }
    assert redact_value("call token=abc123 page=1") == f"call token={REDACTED} page=1"


def test_redacting_filter_rewrites_record_args():
    record = logging.LogRecord("edux", logging.INFO, __file__, 1, "args %s", ({"accessToken": "x"},), None)
    assert RedactingFilter().filter(record)
    assert record.getMessage() == f"args {{'accessToken': '{REDACTED}'}}"
