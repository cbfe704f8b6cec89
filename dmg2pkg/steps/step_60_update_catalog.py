from __future__ import annotations

import logging

from ..catalog import CatalogStore
from ..pipeline import EntryState, WorkItem
from ..prompt import Confirm

logger = logging.getLogger(__name__)


class UpdateCatalogStep:
    step_id = "60_update_catalog"
    reaches = EntryState.CATALOGED

    def __init__(self, catalog: CatalogStore, confirm: Confirm):
        self.catalog = catalog
        self.confirm = confirm

    def run(self, item: WorkItem) -> WorkItem:
        if self.catalog.exists(item.name, item.url):
            logger.warning("The software already exists in the CSV file.")
            return item

        if self.confirm("Do you want to add it to the CSV file?"):
            self.catalog.append(item.name, item.url)
            item.cataloged = True
            logger.info("The software has been added to the CSV file.")
        else:
            logger.info("Catalog left unchanged for %s", item.name)
        return item
