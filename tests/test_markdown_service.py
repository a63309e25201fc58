from devblog.services.markdown_service import MarkdownService


def test_render_fenced_code_and_tables():
    service = MarkdownService()
    html = service.to_html("```yaml\nservices: {}\n```\n\n| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert '<code class="language-yaml">' in html
    assert "<table>" in html
    assert "<td>1</td>" in html


def test_sanitize_strips_unsafe_markup():
    service = MarkdownService()
    html = service.sanitize(
        '<p onclick="x()">hi</p><iframe src="x"></iframe><a href="/a" style="c">l</a>'
    )
    assert html == '<p>hi</p><a href="/a">l</a>'


def test_images_are_allowed_by_default_but_configurable():
    html = MarkdownService().to_html("![x](/x.png)")
    assert "<img" in html and 'alt="x"' in html

    strict = MarkdownService(allowed_tags=frozenset({"p"}))
    assert strict.to_html("![x](/x.png)") == "<p></p>"
