from jsxbuild.pipeline.extractor import extract_fragments
from jsxbuild.pipeline.locator import locate_script_block


def test_fragments_reconstruct_the_original(page):
    text = page.read_text(encoding="utf-8")
    fragments = extract_fragments(text, locate_script_block(text))

    assert fragments.before + fragments.payload + fragments.after == text
    assert fragments.before.endswith('<script type="text/babel">')
    assert fragments.after.startswith("</script>")
    assert "ReactDOM.render" in fragments.payload


def test_prefix_and_suffix_drop_the_markers():
    text = "before><script type='text/babel'>const x = <div/>;</script></body>after"
    fragments = extract_fragments(text, locate_script_block(text))

    assert fragments.prefix == "before>"
    assert fragments.payload == "const x = <div/>;"
    assert fragments.suffix == "</body>after"


def test_reports_payload_length(capsys):
    text = '<script type="text/babel">abc</script></body>'
    extract_fragments(text, locate_script_block(text))
    assert "Found JSX: 3 characters" in capsys.readouterr().out
