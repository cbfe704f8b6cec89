from __future__ import annotations

import logging

from ..image import ImageHandler
from ..pipeline import EntryState, WorkItem

logger = logging.getLogger(__name__)


class MountStep:
    step_id = "40_mount"
    reaches = EntryState.MOUNTED

    def __init__(self, images: ImageHandler):
        self.images = images

    def run(self, item: WorkItem) -> WorkItem:
        item.volumes.append(self.images.mount(str(item.image_path)))
        return item
