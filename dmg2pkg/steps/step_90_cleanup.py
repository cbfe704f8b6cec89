from __future__ import annotations

import logging

from ..image import ImageHandler
from ..lib.env import Environment
from ..pipeline import WorkItem

logger = logging.getLogger(__name__)


class CleanupStep:
    """Runs after every entry, aborted or not."""

    step_id = "90_cleanup"

    def __init__(self, images: ImageHandler, env: Environment):
        self.images = images
        self.env = env

    def run(self, item: WorkItem) -> WorkItem:
        while item.volumes:
            volume = item.volumes.pop()
            logger.debug("Detaching leftover volume %s", volume)
            self.images.detach(volume)
        self.env.cleanup()
        return item
