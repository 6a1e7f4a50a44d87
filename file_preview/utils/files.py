"""
Filesystem helpers shared by the renderers
"""

import os
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union


@contextmanager
def atomic_destination(dest: Union[str, Path]) -> Iterator[Path]:
    """
    Yield a temporary sibling of dest to write into.

    On normal exit the temporary file replaces dest in one rename, so readers
    never see a half written file. On error it is removed.
    """
    dest = Path(dest)
    tmp = dest.with_name(f".{dest.name}.{uuid.uuid4().hex}.tmp")
    try:
        yield tmp
        os.replace(tmp, dest)
    finally:
        if tmp.exists():
            tmp.unlink()
