"""Type aliases shared across CIFTree."""

from pathlib import Path
from typing import TypeAlias


FileLike: TypeAlias = str | bytes | Path
"""CIF input accepted by `ciftree.read`.

A `pathlib.Path` names a file on disk;
`str` and `bytes` hold the document content itself.
"""

PathLike: TypeAlias = str | Path
"""Location of a CIF file on disk."""


BlockCode: TypeAlias = str
"""Name of the data block, i.e. the part after `data_`."""

FrameCode: TypeAlias = str | None
"""Name of the enclosing save frame, or `None` for items directly under the data block."""

LoopCode: TypeAlias = int
"""Loop number of a data name: `0` for single items, `1, 2, ...` per loop in document order."""
