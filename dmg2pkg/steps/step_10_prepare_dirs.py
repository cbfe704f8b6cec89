from __future__ import annotations

import logging

from ..lib.env import Environment
from ..pipeline import EntryState, WorkItem

logger = logging.getLogger(__name__)


class PrepareDirsStep:
    step_id = "10_prepare_dirs"
    reaches = EntryState.PREPARED

    def __init__(self, env: Environment):
        self.env = env

    def run(self, item: WorkItem) -> WorkItem:
        self.env.prepare_dirs()
        return item
