from __future__ import annotations

import logging

from ..errors import VerifyFailedError
from ..image import ImageHandler
from ..pipeline import EntryState, WorkItem

logger = logging.getLogger(__name__)


class VerifyStep:
    step_id = "30_verify"
    reaches = EntryState.VERIFIED

    def __init__(self, images: ImageHandler):
        self.images = images

    def run(self, item: WorkItem) -> WorkItem:
        if not item.image_path or not self.images.verify(item.image_path):
            raise VerifyFailedError(
                f"The downloaded .dmg file for {item.name} is either damaged or not valid."
            )
        return item
