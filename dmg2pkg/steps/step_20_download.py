from __future__ import annotations

import logging

from ..config import Config
from ..fetcher import Fetcher
from ..pipeline import EntryState, WorkItem

logger = logging.getLogger(__name__)


class DownloadStep:
    step_id = "20_download"
    reaches = EntryState.DOWNLOADED

    def __init__(self, fetcher: Fetcher, config: Config):
        self.fetcher = fetcher
        self.config = config

    def run(self, item: WorkItem) -> WorkItem:
        item.image_path = str(self.config.image_path(item.name))
        result = self.fetcher.download(item.url, item.image_path)
        # A failed download is not an abort: verification rejects the file.
        item.downloaded = result.ok
        return item
