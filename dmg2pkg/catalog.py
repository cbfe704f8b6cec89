from __future__ import annotations

import csv
import io
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import NotFoundError

logger = logging.getLogger(__name__)

HEADER = ("name", "url")


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    url: str
    # Columns after the URL; carried through rewrites, ignored for matching.
    extra: Tuple[str, ...] = field(default=(), compare=False)


class CatalogStore:
    """CSV list of known ``name,url`` pairs.

    The first line of the file is always the header, whatever it says, and
    is never treated as an entry: listing, dedup and batch runs all skip it.
    Rewrites keep it as the first line; a new catalog gets ``name,url``.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    def _read(self) -> Tuple[Optional[List[str]], List[CatalogEntry]]:
        if not self.path.exists():
            raise NotFoundError(f"Catalog not found: {self.path}")

        rows = list(csv.reader(io.StringIO(self.path.read_text(encoding="utf-8"))))
        header: Optional[List[str]] = rows.pop(0) if rows else None

        entries: List[CatalogEntry] = []
        for row in rows:
            if not any(c.strip() for c in row):
                continue
            if len(row) < 2:
                logger.warning("Skipping malformed catalog row: %s", ",".join(row))
                continue
            entries.append(CatalogEntry(name=row[0], url=row[1], extra=tuple(row[2:])))
        return header, entries

    def list(self) -> List[CatalogEntry]:
        return self._read()[1]

    def urls(self) -> List[str]:
        return [e.url for e in self.list()]

    def exists(self, name: str, url: str) -> bool:
        try:
            entries = self.list()
        except NotFoundError:
            return False
        return any(e.name == name and e.url == url for e in entries)

    def append(self, name: str, url: str) -> None:
        """Add an entry, re-sort by name and atomically replace the file.

        Appending an entry that is already present leaves the file untouched.
        """

        try:
            header, entries = self._read()
        except NotFoundError:
            header, entries = None, []

        new = CatalogEntry(name=name, url=url)
        if new in entries:
            logger.info("%s is already in %s", name, self.path)
            return

        entries.append(new)
        entries.sort(key=lambda e: e.name)

        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(header if header is not None else HEADER)
        for e in entries:
            writer.writerow([e.name, e.url, *e.extra])

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, scratch = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(buf.getvalue())
            os.replace(scratch, self.path)
        except BaseException:
            Path(scratch).unlink(missing_ok=True)
            raise

        logger.info("Added %s to %s", name, self.path)
