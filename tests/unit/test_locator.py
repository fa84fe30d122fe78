import pytest

from jsxbuild.errors import ClosingMarkerNotFound, MarkerNotFound
from jsxbuild.pipeline.locator import (
    CLOSING_BOUNDARIES,
    OPENING_MARKERS,
    find_opening_marker,
    locate_script_block,
)


def test_double_and_single_quoted_markers_locate_identically():
    double = '<body><script type="text/babel">const a = 1;</script>\n</body>'
    single = "<body><script type='text/babel'>const a = 1;</script>\n</body>"

    first = locate_script_block(double)
    second = locate_script_block(single)

    assert (first.start, first.content_start, first.end) == (second.start, second.content_start, second.end)
    assert first.opening.name == "double-quoted"
    assert second.opening.name == "single-quoted"
    assert double[first.content_start:first.end] == "const a = 1;"


def test_missing_opening_marker_raises():
    with pytest.raises(MarkerNotFound):
        locate_script_block("<html><body><script>plain()</script></body></html>")


def test_double_quoted_spelling_is_tried_first():
    text = "<script type='text/babel'>a</script>\n<script type=\"text/babel\">b</script>\n</body>"
    pos, marker = find_opening_marker(text)
    assert marker is OPENING_MARKERS[0]
    assert text[pos:].startswith('<script type="text/babel">')


@pytest.mark.parametrize("boundary", CLOSING_BOUNDARIES, ids=lambda b: b.name)
def test_closing_boundary_variants(boundary):
    text = '<script type="text/babel">x()' + boundary.text + "\n</html>"
    block = locate_script_block(text)
    assert block.closing.name == boundary.name
    assert text[block.content_start:block.end] == "x()"


def test_falls_back_to_last_closing_tag():
    text = (
        '<body>\n<script type="text/babel">\nrender();\n</script>\n'
        "    <!-- footer -->\n  </body>\n</html>\n"
    )
    block = locate_script_block(text)

    assert block.closing.name == "last-closing-tag"
    after = text[block.end:]
    assert after.startswith("</script>")
    assert "</body>" in after
    assert text[block.content_start:block.end] == "\nrender();\n"


def test_missing_closing_tag_raises():
    with pytest.raises(ClosingMarkerNotFound):
        locate_script_block('<body><script type="text/babel">const a = 1;</body>')


def test_closing_tag_before_opening_marker_raises():
    with pytest.raises(ClosingMarkerNotFound):
        locate_script_block('<script>x()</script>\n<script type="text/babel">const a = 1;')


def test_empty_payload_is_rejected():
    with pytest.raises(ClosingMarkerNotFound):
        locate_script_block('<body><script type="text/babel"></script></body>')
