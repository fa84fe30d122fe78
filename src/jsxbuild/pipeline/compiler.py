# src/jsxbuild/pipeline/compiler.py
# Hands the JSX payload to Babel and reads the compiled JavaScript back.

import logging
import re
import subprocess
import tempfile
from pathlib import Path

from jsxbuild.cli.controller import canvas
from jsxbuild.errors import CompilationError, CompilerToolchainMissing, CompilerUnavailable
from jsxbuild.pipeline.toolchain import PRESET_NAME, Toolchain

logger = logging.getLogger(__name__)

# Babel reports an absent preset as an unresolvable package or module
MISSING_PRESET_RE = re.compile(
    r"Cannot find (?:package|module) ['\"]?" + re.escape(PRESET_NAME)
)


def build_command(compiler: Path, source: Path, target: Path) -> list:
    return [str(compiler), str(source), "-o", str(target), f"--presets={PRESET_NAME}"]


def compile_payload(payload: str, toolchain: Toolchain, timeout: int = 120) -> str:
    """
    Compile ``payload`` with the toolchain's Babel and return the output.

    The input/output files live in a scratch directory under the toolchain
    directory that is removed on every exit path.

    Raises:
        CompilerUnavailable: the Babel executable cannot be started.
        CompilerToolchainMissing: Babel runs but the preset is not installed.
        CompilationError: Babel exited non-zero or timed out.
    """
    compiler = toolchain.compiler_path
    if not compiler.exists():
        raise CompilerUnavailable(f"Babel executable not found at {compiler}")

    canvas.info("Compiling with Babel...")
    toolchain.directory.mkdir(parents=True, exist_ok=True)
    with tempfile.TemporaryDirectory(prefix="work-", dir=toolchain.directory) as work_dir:
        source = Path(work_dir) / "app.jsx"
        target = Path(work_dir) / "app.js"
        with open(source, "w", encoding="utf-8", newline="") as f:
            f.write(payload)

        cmd = build_command(compiler, source, target)
        logger.info("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=toolchain.directory,
                timeout=timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise CompilerUnavailable(f"Could not start Babel: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise CompilationError(
                f"Babel did not finish within {timeout} seconds",
                diagnostics=_as_text(e.stderr),
            ) from None

        if result.returncode != 0:
            if MISSING_PRESET_RE.search(result.stderr or ""):
                raise CompilerToolchainMissing(
                    f"{PRESET_NAME} is not installed in {toolchain.directory}"
                )
            raise CompilationError(
                f"Babel compilation failed! (exit code {result.returncode})",
                diagnostics=result.stderr,
            )

        if not target.exists():
            raise CompilationError("Babel exited cleanly but wrote no output file", diagnostics=result.stderr)
        with open(target, "r", encoding="utf-8", newline="") as f:
            compiled = f.read()

    canvas.info(f"Compiled JS: {len(compiled):,} characters")
    return compiled


def _as_text(output) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output
