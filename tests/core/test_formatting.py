from qachat.core.formatting import error_text, render_answer
from qachat.core.resolver import SubmissionFailed
from qachat.models.chat import Attachment, ResolvedAnswer


def test_render_answer_without_attachments_is_plain_text() -> None:
    assert render_answer(ResolvedAnswer(answer_text="just text")) == "just text"


def test_render_answer_appends_header_and_bullets_in_order() -> None:
    answer = ResolvedAnswer(
        answer_text="see files",
        attachments=[
            Attachment(display_name="b.pdf", resource_url="http://h/b.pdf"),
            Attachment(display_name="a.pdf", resource_url="http://h/a.pdf"),
        ],
    )
    text = render_answer(answer, lang="vi")
    assert text == (
        "see files\n\n"
        "📎 **File liên quan:**\n"
        "- [b.pdf](http://h/b.pdf)\n"
        "- [a.pdf](http://h/a.pdf)"
    )


def test_render_answer_english_header() -> None:
    answer = ResolvedAnswer(
        answer_text="x",
        attachments=[Attachment(display_name="a", resource_url="http://h/a")],
    )
    assert "📎 **Related files:**" in render_answer(answer, lang="en")


def test_error_text_is_plain_assistant_message() -> None:
    exc = SubmissionFailed(status=500, body="boom")
    assert error_text(exc, lang="en") == "Error: QA submit failed (HTTP 500): boom"
    assert error_text(exc, lang="vi").startswith("Lỗi: ")
