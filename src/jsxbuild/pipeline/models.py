# src/jsxbuild/pipeline/models.py
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class NamedPattern:
    """A literal text variant searched for in the document, named for diagnostics."""
    name: str
    text: str


@dataclass(frozen=True)
class HostDocument:
    path: Path
    text: str

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class ScriptBlock:
    """Span of the embedded script inside a HostDocument's text.

    ``start`` is the offset of the opening marker, ``content_start`` the first
    payload character and ``end`` the offset of the closing ``</script>``.
    """
    start: int
    content_start: int
    end: int
    opening: NamedPattern
    closing: NamedPattern


@dataclass(frozen=True)
class Fragments:
    """Lossless three-way split of a host document.

    ``before`` ends with the opening marker and ``after`` starts with the
    closing marker, so ``before + payload + after`` is the original text.
    """
    before: str
    payload: str
    after: str
    opening_marker: str
    closing_marker: str

    @property
    def prefix(self) -> str:
        return self.before[: len(self.before) - len(self.opening_marker)]

    @property
    def suffix(self) -> str:
        return self.after[len(self.closing_marker):]


@dataclass
class BuildResult:
    input_path: Path
    backup_path: Path
    backup_created: bool
    original_size: int
    output_size: int
    payload_size: int
    compiled_size: int
    patches_applied: List[str] = field(default_factory=list)
    toolchain_installed: bool = False
    opening_marker: Optional[str] = None
    closing_boundary: Optional[str] = None
