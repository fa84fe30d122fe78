# src/jsxbuild/pipeline/toolchain.py
# Provisions the pinned Babel toolchain into an isolated, versioned directory.

import json
import logging
import os
import re
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from jsxbuild.cli.controller import canvas
from jsxbuild.errors import CompilerToolchainMissing, CompilerUnavailable

logger = logging.getLogger(__name__)

BABEL_CORE_VERSION = "7.23.9"
BABEL_CLI_VERSION = "7.23.9"
PRESET_REACT_VERSION = "7.23.3"
PRESET_NAME = "@babel/preset-react"

TOOLCHAIN_MANIFEST = {
    "name": "jsxbuild-toolchain",
    "private": True,
    "devDependencies": {
        "@babel/core": BABEL_CORE_VERSION,
        "@babel/cli": BABEL_CLI_VERSION,
        PRESET_NAME: PRESET_REACT_VERSION,
    },
}

# Packages whose presence marks the toolchain directory as populated
REQUIRED_PACKAGES = tuple(TOOLCHAIN_MANIFEST["devDependencies"])


def parse_node_major(version_output: str) -> Optional[int]:
    """``"v20.11.1"`` -> ``20``; ``None`` when the output is not a version."""
    match = re.match(r"\s*v?(\d+)\.", version_output or "")
    return int(match.group(1)) if match else None


class Toolchain:
    """A Babel install living in ``<root>/babel-<core version>``.

    Installation runs once; later runs find the directory populated and
    reuse it. Concurrent runs against the same directory are not supported.
    """

    def __init__(self, root: Path, install_timeout: int = 600, node_min_major: int = 16):
        self.root = Path(root)
        self.directory = self.root / f"babel-{BABEL_CORE_VERSION}"
        self.install_timeout = install_timeout
        self.node_min_major = node_min_major

    @property
    def manifest_path(self) -> Path:
        return self.directory / "package.json"

    @property
    def compiler_path(self) -> Path:
        name = "babel.cmd" if os.name == "nt" else "babel"
        return self.directory / "node_modules" / ".bin" / name

    def is_installed(self) -> bool:
        modules = self.directory / "node_modules"
        return all((modules / package).is_dir() for package in REQUIRED_PACKAGES)

    def check_runtime(self) -> dict:
        """Verify node (>= the configured major) and npm are on PATH.

        Returns the detected versions for display.
        """
        node = shutil.which("node")
        if node is None:
            raise CompilerUnavailable("Node.js not found! We need Node.js to run Babel.")
        node_version = self._version_of([node, "-v"])
        major = parse_node_major(node_version)
        if major is None or major < self.node_min_major:
            raise CompilerUnavailable(
                f"Node.js {self.node_min_major}+ required (you have {node_version or 'an unknown version'})"
            )

        npm = shutil.which("npm")
        if npm is None:
            raise CompilerUnavailable("npm not found! Should come with Node.js...")
        npm_version = self._version_of([npm, "-v"])
        logger.debug("node %s at %s, npm %s at %s", node_version, node, npm_version, npm)
        return {"node": node_version, "npm": npm_version}

    def _version_of(self, cmd) -> str:
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=30, check=False)
        except (OSError, subprocess.TimeoutExpired) as e:
            raise CompilerUnavailable(f"Could not run {' '.join(cmd)}: {e}") from e
        return result.stdout.strip()

    def write_manifest(self):
        self.directory.mkdir(parents=True, exist_ok=True)
        self.manifest_path.write_text(json.dumps(TOOLCHAIN_MANIFEST, indent=2) + "\n", encoding="utf-8")

    def install(self, message: str = "First run - installing Babel (one-time setup)..."):
        """Write the manifest and run ``npm install`` in the toolchain directory."""
        canvas.warning(message)
        self.write_manifest()
        npm = shutil.which("npm")
        if npm is None:
            raise CompilerUnavailable("npm not found! Should come with Node.js...")

        cmd = [npm, "install", "--silent", "--no-audit", "--no-fund"]
        logger.info("Running %s in %s", " ".join(cmd), self.directory)
        try:
            result = subprocess.run(
                cmd,
                cwd=self.directory,
                capture_output=True,
                text=True,
                timeout=self.install_timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            raise CompilerToolchainMissing(
                f"npm install timed out after {self.install_timeout} seconds"
            ) from None

        if result.returncode != 0:
            raise CompilerToolchainMissing(
                f"npm install failed (exit code {result.returncode}):\n{result.stderr.strip()}"
            )
        if not self.is_installed():
            raise CompilerToolchainMissing(
                f"npm install finished but {', '.join(REQUIRED_PACKAGES)} are not all present in {self.directory}"
            )
        canvas.success("Babel installed")

    def ensure_installed(self) -> bool:
        """Install the toolchain unless it is already populated.

        Returns True when an install was performed.
        """
        if self.is_installed():
            logger.debug("Toolchain already present in %s", self.directory)
            return False
        self.install()
        return True
