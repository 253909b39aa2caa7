from exam_app.core.markdown_renderer import MarkdownRenderer
from exam_app.core.models import SanitizedQuestion


def test_question_is_numbered_and_rendered():
    html = MarkdownRenderer().render_question(1, SanitizedQuestion(2, "What is `len`?", ["a", "b", "c", "d"]))

    assert "<strong>2.</strong>" in html
    assert "<code>len</code>" in html


def test_raw_html_is_escaped():
    html = MarkdownRenderer().render_fragment("Which tag is <script>?")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_blank_text_has_placeholder():
    assert "No question text." in MarkdownRenderer().render_fragment("   ")
