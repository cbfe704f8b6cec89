from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Sequence

from .errors import EntryError

logger = logging.getLogger(__name__)


class EntryState(str, enum.Enum):
    START = "start"
    PREPARED = "prepared"
    DOWNLOADED = "downloaded"
    VERIFIED = "verified"
    MOUNTED = "mounted"
    PACKAGED = "packaged"
    CATALOGED = "cataloged"
    DETACHED = "detached"
    ABORTED = "aborted"
    CLEANED_UP = "cleaned_up"
    DONE = "done"


@dataclass
class WorkItem:
    """Per-entry state, owned by a single pipeline run."""

    name: str
    url: str
    image_path: Optional[str] = None
    converted_path: Optional[str] = None
    volumes: List[str] = field(default_factory=list)
    package_path: Optional[str] = None
    build_log: str = ""
    downloaded: bool = False
    used_fallback: bool = False
    cataloged: bool = False
    error: Optional[str] = None
    state: EntryState = EntryState.START
    states: List[EntryState] = field(default_factory=lambda: [EntryState.START])

    def advance(self, state: EntryState) -> None:
        logger.debug("[%s] %s -> %s", self.name, self.state.value, state.value)
        self.state = state
        self.states.append(state)


class Step(Protocol):
    """A single forward step of the per-entry pipeline."""

    step_id: str
    reaches: EntryState

    def run(self, item: WorkItem) -> WorkItem:
        ...


@dataclass(frozen=True)
class EntryResult:
    name: str
    url: str
    states: List[EntryState]
    package_path: Optional[str]
    used_fallback: bool
    cataloged: bool
    downloaded: bool
    error: Optional[str]

    @property
    def ok(self) -> bool:
        return EntryState.ABORTED not in self.states

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "url": self.url,
            "state": "done" if self.ok else "aborted",
            "states": [s.value for s in self.states],
            "package": self.package_path if self.ok else None,
            "fallback": self.used_fallback,
            "downloaded": self.downloaded,
            "cataloged": self.cataloged,
            "error": self.error,
        }


def run_entry(
    item: WorkItem,
    steps: Sequence[Step],
    *,
    cleanup: Callable[[WorkItem], None],
) -> EntryResult:
    """Run ``steps`` for one entry.

    An ``EntryError`` (or any unexpected exception) moves the entry to
    ABORTED and skips the remaining steps. ``cleanup`` runs on every path.
    """

    logger.info("Processing %s...", item.name)
    try:
        for step in steps:
            logger.debug("[%s] running step %s", item.name, step.step_id)
            item = step.run(item)
            item.advance(step.reaches)
    except EntryError as e:
        logger.error("%s", e)
        item.error = str(e)
        item.advance(EntryState.ABORTED)
    except Exception as e:
        logger.exception("Unexpected failure while processing %s", item.name)
        item.error = f"{type(e).__name__}: {e}"
        item.advance(EntryState.ABORTED)
    finally:
        try:
            cleanup(item)
        except Exception:
            logger.exception("Cleanup failed for %s", item.name)
        item.advance(EntryState.CLEANED_UP)

    item.advance(EntryState.DONE)
    logger.info("--------------------------------------")
    return EntryResult(
        name=item.name,
        url=item.url,
        states=list(item.states),
        package_path=item.package_path,
        used_fallback=item.used_fallback,
        cataloged=item.cataloged,
        downloaded=item.downloaded,
        error=item.error,
    )


def run_batch(
    entries: Iterable[WorkItem],
    steps: Sequence[Step],
    *,
    cleanup: Callable[[WorkItem], None],
) -> List[EntryResult]:
    """Process entries one at a time; a failed entry never stops the batch."""

    return [run_entry(item, steps, cleanup=cleanup) for item in entries]
