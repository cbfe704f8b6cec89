from __future__ import annotations

import logging

from ..config import Config
from ..packager import Packager
from ..pipeline import EntryState, WorkItem

logger = logging.getLogger(__name__)


class BuildPackageStep:
    step_id = "50_build_package"
    reaches = EntryState.PACKAGED

    def __init__(self, packager: Packager, config: Config):
        self.packager = packager
        self.config = config

    def run(self, item: WorkItem) -> WorkItem:
        result = self.packager.package(item)
        if self.config.debug:
            logger.debug("Conversion details:\n%s", result.log.rstrip() or "(no output)")
        return item
