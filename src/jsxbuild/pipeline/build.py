# src/jsxbuild/pipeline/build.py
# Locate -> extract -> compile -> reassemble, plus the restore path.

import logging

from jsxbuild.cli.controller import canvas
from jsxbuild.config.config import BuildSettings
from jsxbuild.errors import CompilerToolchainMissing, CompilerUnavailable, HostDocumentMissing
from jsxbuild.pipeline.compiler import compile_payload
from jsxbuild.pipeline.documents import ensure_backup, read_source, restore_backup, write_atomic
from jsxbuild.pipeline.extractor import extract_fragments
from jsxbuild.pipeline.locator import locate_script_block
from jsxbuild.pipeline.models import BuildResult
from jsxbuild.pipeline.reassembler import check_not_guarded, reassemble
from jsxbuild.pipeline.toolchain import Toolchain

logger = logging.getLogger(__name__)


class BuildPipeline:
    """One build run over the host document named by ``settings``.

    Every run recompiles from the backup when it exists, so repeated runs
    produce the same output. Nothing is written to the input path until the
    compiled payload is fully in memory.
    """

    def __init__(self, settings: BuildSettings, toolchain: Toolchain = None, compile_fn=compile_payload):
        self.settings = settings
        self.toolchain = toolchain or Toolchain(
            settings.toolchain_root,
            install_timeout=settings.install_timeout,
            node_min_major=settings.node_min_major,
        )
        self.compile_fn = compile_fn

    def prepare_toolchain(self) -> bool:
        versions = self.toolchain.check_runtime()
        canvas.success(f"Node.js {versions.get('node', '?')}")
        canvas.success(f"npm {versions.get('npm', '?')}")
        return self.toolchain.ensure_installed()

    def compile(self, payload: str) -> str:
        timeout = self.settings.compiler_timeout
        try:
            return self.compile_fn(payload, self.toolchain, timeout)
        except (CompilerUnavailable, CompilerToolchainMissing) as e:
            # One self-healing reinstall; a second failure propagates
            canvas.warning(str(e))
            self.toolchain.install("Reinstalling Babel toolchain, then retrying once...")
            return self.compile_fn(payload, self.toolchain, timeout)

    def run(self) -> BuildResult:
        input_path = self.settings.input_path
        backup_path = self.settings.backup_path
        if not input_path.exists():
            raise HostDocumentMissing(f"{input_path} not found!")

        installed = self.prepare_toolchain()

        canvas.step("Extracting and compiling JSX...")
        source = read_source(input_path, backup_path)
        block = locate_script_block(source.text)
        fragments = extract_fragments(source.text, block)
        check_not_guarded(fragments.payload)

        compiled = self.compile(fragments.payload)

        html, patches = reassemble(
            fragments,
            compiled,
            backup_name=backup_path.name,
            runtime_globals=self.settings.runtime_globals,
            interval_ms=self.settings.poll_interval_ms,
        )

        backup_created = ensure_backup(input_path, backup_path)
        write_atomic(input_path, html)
        logger.info("Wrote compiled document to %s", input_path)

        return BuildResult(
            input_path=input_path,
            backup_path=backup_path,
            backup_created=backup_created,
            original_size=len(source),
            output_size=len(html),
            payload_size=len(fragments.payload),
            compiled_size=len(compiled),
            patches_applied=patches,
            toolchain_installed=installed,
            opening_marker=block.opening.name,
            closing_boundary=block.closing.name,
        )


def restore(settings: BuildSettings):
    """Put the pristine backup back over the input document."""
    restore_backup(settings.input_path, settings.backup_path)
    canvas.success(f"Restored original {settings.input_path.name}")
    canvas.info(f"Make edits in {settings.backup_path.name}; builds always compile from it")
    canvas.info("Run jsxbuild again when done to compile")
