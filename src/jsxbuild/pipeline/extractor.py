# src/jsxbuild/pipeline/extractor.py
import logging

from jsxbuild.cli.controller import canvas
from jsxbuild.pipeline.locator import CLOSING_TAG
from jsxbuild.pipeline.models import Fragments, ScriptBlock

logger = logging.getLogger(__name__)


def extract_fragments(text: str, block: ScriptBlock) -> Fragments:
    """Slice the document into ``before`` / ``payload`` / ``after``.

    ``before`` keeps the opening marker and ``after`` starts at the closing
    ``</script>``, so the three concatenated give back ``text`` unchanged.
    """
    fragments = Fragments(
        before=text[:block.content_start],
        payload=text[block.content_start:block.end],
        after=text[block.end:],
        opening_marker=block.opening.text,
        closing_marker=CLOSING_TAG,
    )
    canvas.info(f"Found JSX: {len(fragments.payload):,} characters")
    logger.debug(
        "Split document: before=%d payload=%d after=%d",
        len(fragments.before), len(fragments.payload), len(fragments.after),
    )
    return fragments
