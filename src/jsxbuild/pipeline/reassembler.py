# src/jsxbuild/pipeline/reassembler.py
# Wraps compiled output in the runtime guard and patches the page's loader.

import logging
from typing import List, Sequence, Tuple

from jsxbuild.cli.controller import canvas
from jsxbuild.errors import AlreadyCompiledPayload
from jsxbuild.pipeline.models import Fragments, NamedPattern

logger = logging.getLogger(__name__)

GUARD_FUNCTION = "waitForRuntime"
GUARD_SIGNATURE = f"(function {GUARD_FUNCTION}() {{"

# The in-browser transform call; disabled rather than removed so the
# loader's promise chain stays intact
SKIP_TRANSFORM_VARIANTS = (
    NamedPattern(
        "multiline-lf",
        "if (window.Babel) {\n                Babel.transformScriptTags();\n            }",
    ),
    NamedPattern(
        "multiline-crlf",
        "if (window.Babel) {\r\n                Babel.transformScriptTags();\r\n            }",
    ),
    NamedPattern("single-line", "if (window.Babel) { Babel.transformScriptTags(); }"),
)
SKIP_TRANSFORM_REPLACEMENT = "// Babel loaded but skipped - JSX pre-compiled by jsxbuild"

LOADING_COMMENT = "// Load in sequence - using jsdelivr instead of unpkg (faster + better caching)"


def loading_comment_replacement(backup_name: str) -> str:
    return (
        "// Load in sequence - JSX pre-compiled, Babel loads but skips\n"
        f"        // Edit {backup_name}, then run jsxbuild"
    )


def check_not_guarded(payload: str):
    if GUARD_SIGNATURE in payload:
        raise AlreadyCompiledPayload(
            "The embedded script is already wrapped in a runtime guard; refusing to wrap it again"
        )


def wrap_in_guard(compiled: str, runtime_globals: Sequence[str] = ("React", "ReactDOM"),
                  interval_ms: int = 10) -> str:
    """Defer ``compiled`` until every name in ``runtime_globals`` is defined.

    The emitted loop polls every ``interval_ms`` with no retry limit, so the
    page waits forever if the runtime never loads.
    """
    condition = " || ".join(f"typeof {name} === 'undefined'" for name in runtime_globals)
    return (
        f"{GUARD_SIGNATURE}\n"
        f"    if ({condition}) {{\n"
        f"        setTimeout({GUARD_FUNCTION}, {interval_ms});\n"
        f"        return;\n"
        f"    }}\n"
        f"    // Runtime is ready, run the app\n"
        f"{compiled}\n"
        f"}})();"
    )


def assemble(prefix: str, guarded: str, suffix: str) -> str:
    """Swap the text/babel element for a plain ``<script>`` holding ``guarded``."""
    return prefix + "<script>\n" + guarded + "\n</script>" + suffix


def disable_transform_step(html: str, variants: Sequence[NamedPattern] = SKIP_TRANSFORM_VARIANTS) -> Tuple[str, str]:
    """Replace the first matching variant. Returns ``(html, variant name or "")``."""
    for variant in variants:
        if variant.text in html:
            logger.debug("Disabling Babel.transformScriptTags() (%s)", variant.name)
            return html.replace(variant.text, SKIP_TRANSFORM_REPLACEMENT), variant.name
    return html, ""


def update_loading_comment(html: str, backup_name: str) -> Tuple[str, bool]:
    if LOADING_COMMENT not in html:
        return html, False
    return html.replace(LOADING_COMMENT, loading_comment_replacement(backup_name)), True


def patch_surroundings(prefix: str, suffix: str, backup_name: str) -> Tuple[str, str, List[str]]:
    """Apply the loader patches to the markup around the script element only.

    The compiled payload is never rewritten, even if it contains a matching
    snippet.
    """
    patches = []
    for variant in SKIP_TRANSFORM_VARIANTS:
        if variant.text in prefix or variant.text in suffix:
            prefix, _ = disable_transform_step(prefix, (variant,))
            suffix, _ = disable_transform_step(suffix, (variant,))
            canvas.info("Disabled Babel.transformScriptTags()")
            patches.append(f"skip-transform:{variant.name}")
            break

    prefix, in_prefix = update_loading_comment(prefix, backup_name)
    suffix, in_suffix = update_loading_comment(suffix, backup_name)
    if in_prefix or in_suffix:
        patches.append("loading-comment")

    return prefix, suffix, patches


def reassemble(fragments: Fragments, compiled: str, backup_name: str,
               runtime_globals: Sequence[str] = ("React", "ReactDOM"),
               interval_ms: int = 10) -> Tuple[str, List[str]]:
    """Build the output document; returns it with the names of applied patches."""
    prefix, suffix, patches = patch_surroundings(fragments.prefix, fragments.suffix, backup_name)
    html = assemble(prefix, wrap_in_guard(compiled, runtime_globals, interval_ms), suffix)
    return html, patches
