# tests/conftest.py
import os

import pytest

from jsxbuild.errors import CompilationError

SAMPLE_PAGE = """<!DOCTYPE html>
<html>
<head>
    <script>
        // Load in sequence - using jsdelivr instead of unpkg (faster + better caching)
        loadScript('react.production.min.js')
            .then(() => loadScript('react-dom.production.min.js'))
            .then(() => loadScript('babel.min.js'))
            .then(() => {
            if (window.Babel) {
                Babel.transformScriptTags();
            }
            });
    </script>
</head>
<body>
    <div id="root"></div>
<script type="text/babel">
const App = () => <div/>;
ReactDOM.render(<App/>, document.getElementById('root'));
</script>
</body>
</html>
"""


def fake_babel(source: str) -> str:
    """Stand-in for the JSX transform used by the tests."""
    if "<<" in source:
        raise CompilationError(
            "Babel compilation failed! (exit code 1)",
            diagnostics="SyntaxError: app.jsx: Unexpected token (1:10)",
        )
    return (
        source.replace("<div/>", 'React.createElement("div")')
        .replace("<App/>", "React.createElement(App)")
    )


class FakeToolchain:
    def __init__(self):
        self.installs = 0
        self.messages = []

    def check_runtime(self):
        return {"node": "v20.11.1", "npm": "10.2.4"}

    def ensure_installed(self):
        return False

    def install(self, message=None):
        self.installs += 1
        self.messages.append(message)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep JSXBUILD_* variables and any jsxbuild.yaml in the cwd out of tests."""
    for name in list(os.environ):
        if name.startswith("JSXBUILD_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_toolchain():
    return FakeToolchain()


@pytest.fixture
def fake_compile():
    calls = []

    def compile_fn(payload, toolchain, timeout):
        calls.append(payload)
        return fake_babel(payload)

    compile_fn.calls = calls
    return compile_fn


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "web" / "index.html"
    path.parent.mkdir()
    path.write_bytes(SAMPLE_PAGE.encode("utf-8"))
    return path
