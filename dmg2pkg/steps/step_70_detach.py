from __future__ import annotations

import logging

from ..image import ImageHandler
from ..pipeline import EntryState, WorkItem

logger = logging.getLogger(__name__)


class DetachStep:
    step_id = "70_detach"
    reaches = EntryState.DETACHED

    def __init__(self, images: ImageHandler):
        self.images = images

    def run(self, item: WorkItem) -> WorkItem:
        # Most recent mount first (converted image, then the original).
        while item.volumes:
            self.images.detach(item.volumes.pop())
        return item
