from __future__ import annotations

import fnmatch
import os
from pathlib import Path

from docsgen.repo.ignore import should_ignore_dir


def scan_source_files(root: Path, pattern: str = "*.py", max_files: int | None = None) -> list[str]:
    """
    Return absolute paths (as strings) of files under root whose base name
    matches the glob pattern. Walk order is sorted, so results are stable.
    """
    out: list[str] = []
    for dirpath, dirs, files in os.walk(root):
        root_p = Path(dirpath)

        # prune ignored dirs; sort in place so os.walk descends in order
        dirs[:] = sorted(d for d in dirs if not should_ignore_dir(root_p / d))

        for f in sorted(files):
            if fnmatch.fnmatchcase(f, pattern):
                out.append(str((root_p / f).resolve()))
                if max_files is not None and len(out) >= max_files:
                    return out
    return out
