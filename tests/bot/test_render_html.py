from qachat.bot.handlers import render_telegram_html
from qachat.core.formatting import render_answer
from qachat.core.resolver import normalize_payload


def test_render_converts_links_and_bold() -> None:
    text = "answer\n\n📎 **File liên quan:**\n- [a b.pdf](http://h/a%20b.pdf)"
    rendered = render_telegram_html(text)
    assert "<b>File liên quan:</b>" in rendered
    assert '<a href="http://h/a%20b.pdf">a b.pdf</a>' in rendered


def test_render_escapes_html_and_ignores_non_http_links() -> None:
    rendered = render_telegram_html("<script> [x](javascript:alert)")
    assert "&lt;script&gt;" in rendered
    assert "<a " not in rendered


def test_render_escapes_query_string_ampersand() -> None:
    rendered = render_telegram_html("- [r](http://h/f?a=1&b=2)")
    assert '<a href="http://h/f?a=1&amp;b=2">r</a>' in rendered


def test_render_keeps_parentheses_inside_attachment_url() -> None:
    payload = {"data": ["see", [{"url": "http://h/report (1).pdf", "orig_name": "report (1).pdf"}]]}
    rendered = render_telegram_html(render_answer(normalize_payload(payload), lang="en"))
    assert '<a href="http://h/report%20(1).pdf">report (1).pdf</a>' in rendered
    assert not rendered.endswith(".pdf)")
