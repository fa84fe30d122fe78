# src/jsxbuild/pipeline/locator.py
# Finds the boundaries of the <script type="text/babel"> block in a host document.

import logging
from typing import Sequence

from jsxbuild.errors import ClosingMarkerNotFound, MarkerNotFound
from jsxbuild.pipeline.models import NamedPattern, ScriptBlock

logger = logging.getLogger(__name__)

CLOSING_TAG = "</script>"

# First occurrence of the first spelling that is present wins
OPENING_MARKERS = (
    NamedPattern("double-quoted", '<script type="text/babel">'),
    NamedPattern("single-quoted", "<script type='text/babel'>"),
)

# The app block is the last script before </body>; tried in order
CLOSING_BOUNDARIES = (
    NamedPattern("lf-before-body", "</script>\n</body>"),
    NamedPattern("crlf-before-body", "</script>\r\n</body>"),
    NamedPattern("adjacent-body", "</script></body>"),
)

LAST_CLOSING_TAG = NamedPattern("last-closing-tag", CLOSING_TAG)


def find_opening_marker(text: str, markers: Sequence[NamedPattern] = OPENING_MARKERS):
    """Return ``(offset, marker)`` of the first opening marker spelling found."""
    for marker in markers:
        pos = text.find(marker.text)
        if pos != -1:
            logger.debug("Opening marker %s found at %d", marker.name, pos)
            return pos, marker
    raise MarkerNotFound(
        'Could not find <script type="text/babel"> block! Is this the right document?'
    )


def find_closing_boundary(text: str, content_start: int,
                          boundaries: Sequence[NamedPattern] = CLOSING_BOUNDARIES):
    """Return ``(offset, pattern)`` of the ``</script>`` that closes the block.

    Falls back to the last ``</script>`` anywhere in the document when no
    ``</script>``/``</body>`` pairing is recognised.
    """
    for boundary in boundaries:
        pos = text.rfind(boundary.text)
        if pos > content_start:
            logger.debug("Closing boundary %s found at %d", boundary.name, pos)
            return pos, boundary

    pos = text.rfind(CLOSING_TAG)
    if pos <= content_start:
        raise ClosingMarkerNotFound("Could not find closing </script> tag!")
    logger.debug("No </body> pairing matched, using last </script> at %d", pos)
    return pos, LAST_CLOSING_TAG


def locate_script_block(text: str) -> ScriptBlock:
    start, opening = find_opening_marker(text)
    content_start = start + len(opening.text)
    end, closing = find_closing_boundary(text, content_start)
    return ScriptBlock(
        start=start,
        content_start=content_start,
        end=end,
        opening=opening,
        closing=closing,
    )
