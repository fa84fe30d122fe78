import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from jsxbuild.errors import CompilationError, CompilerToolchainMissing, CompilerUnavailable
from jsxbuild.pipeline.compiler import compile_payload
from jsxbuild.pipeline.toolchain import Toolchain


@pytest.fixture
def toolchain(tmp_path):
    chain = Toolchain(tmp_path / ".build")
    chain.compiler_path.parent.mkdir(parents=True)
    chain.compiler_path.write_text("#!/bin/sh\n", encoding="utf-8")
    return chain


def work_dirs(toolchain):
    return [p for p in toolchain.directory.iterdir() if p.name.startswith("work-")]


def test_compiles_through_babel_files(toolchain):
    seen = {}

    def fake_babel(cmd, **kwargs):
        source, target = Path(cmd[1]), Path(cmd[3])
        seen["cmd"] = cmd
        seen["kwargs"] = kwargs
        jsx = source.read_text(encoding="utf-8")
        target.write_text(jsx.replace("<div/>", 'React.createElement("div")'), encoding="utf-8")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    with patch("jsxbuild.pipeline.compiler.subprocess.run", side_effect=fake_babel):
        compiled = compile_payload("const x = <div/>;", toolchain, timeout=30)

    assert compiled == 'const x = React.createElement("div");'
    assert seen["cmd"][0] == str(toolchain.compiler_path)
    assert seen["cmd"][2] == "-o"
    assert seen["cmd"][4] == "--presets=@babel/preset-react"
    assert seen["kwargs"]["timeout"] == 30
    assert seen["kwargs"]["cwd"] == toolchain.directory
    assert work_dirs(toolchain) == []


def test_compiler_failure_keeps_stderr_verbatim(toolchain):
    stderr = "SyntaxError: /x/app.jsx: Unexpected token (1:11)\n> 1 | const x = <<div/>;\n"
    with patch("jsxbuild.pipeline.compiler.subprocess.run",
               return_value=subprocess.CompletedProcess([], 1, stdout="", stderr=stderr)):
        with pytest.raises(CompilationError) as excinfo:
            compile_payload("const x = <<div/>;", toolchain)

    assert excinfo.value.diagnostics == stderr
    assert work_dirs(toolchain) == []


def test_missing_preset_is_reported_as_toolchain_missing(toolchain):
    stderr = "Error: Cannot find package '@babel/preset-react' imported from /x/babel-virtual-resolve-base.js"
    with patch("jsxbuild.pipeline.compiler.subprocess.run",
               return_value=subprocess.CompletedProcess([], 1, stdout="", stderr=stderr)):
        with pytest.raises(CompilerToolchainMissing):
            compile_payload("x", toolchain)


def test_missing_compiler_executable(tmp_path):
    with pytest.raises(CompilerUnavailable):
        compile_payload("x", Toolchain(tmp_path))


def test_compiler_that_cannot_start(toolchain):
    with patch("jsxbuild.pipeline.compiler.subprocess.run", side_effect=FileNotFoundError("babel")):
        with pytest.raises(CompilerUnavailable):
            compile_payload("x", toolchain)
    assert work_dirs(toolchain) == []


def test_compiler_timeout(toolchain):
    with patch("jsxbuild.pipeline.compiler.subprocess.run",
               side_effect=subprocess.TimeoutExpired(["babel"], 1, stderr=b"still going")):
        with pytest.raises(CompilationError, match="did not finish") as excinfo:
            compile_payload("x", toolchain, timeout=1)
    assert excinfo.value.diagnostics == "still going"
    assert work_dirs(toolchain) == []


def test_no_output_file_is_an_error(toolchain):
    with patch("jsxbuild.pipeline.compiler.subprocess.run",
               return_value=subprocess.CompletedProcess([], 0, stdout="", stderr="")):
        with pytest.raises(CompilationError, match="no output"):
            compile_payload("x", toolchain)
