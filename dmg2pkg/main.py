from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from . import __version__
from .catalog import CatalogStore
from .config import Config, load_config
from .errors import ConfigError, NotFoundError, ToolMissingError
from .fetcher import Fetcher
from .image import ImageHandler
from .lib.curl import CurlFetchService, FetchService
from .lib.env import Environment
from .lib.hdiutil import HdiutilService, MountService
from .lib.pkgbuild import BuildService, PkgbuildService
from .logging_utils import configure_logging
from .packager import Packager
from .pipeline import EntryResult, Step, WorkItem, run_batch
from .prompt import Confirm, fixed_answer, prompt_yes_no
from .report import save_report
from .steps import (
    BuildPackageStep,
    CleanupStep,
    DetachStep,
    DownloadStep,
    MountStep,
    PrepareDirsStep,
    UpdateCatalogStep,
    VerifyStep,
)

logger = logging.getLogger(__name__)


def build_steps(
    config: Config,
    *,
    confirm: Confirm,
    fetch_service: Optional[FetchService] = None,
    mount_service: Optional[MountService] = None,
    build_service: Optional[BuildService] = None,
) -> Tuple[List[Step], CleanupStep]:
    env = Environment(config)
    catalog = CatalogStore(config.catalog_path)
    fetcher = Fetcher(fetch_service or CurlFetchService(), attempts=config.download_attempts)
    images = ImageHandler(mount_service or HdiutilService(), config)
    packager = Packager(build_service or PkgbuildService(), images, config)

    steps: List[Step] = [
        PrepareDirsStep(env),
        DownloadStep(fetcher, config),
        VerifyStep(images),
        MountStep(images),
        BuildPackageStep(packager, config),
        UpdateCatalogStep(catalog, confirm),
        DetachStep(images),
    ]
    return steps, CleanupStep(images, env)


def run(
    config: Config,
    entries: Sequence[Tuple[str, str]],
    *,
    confirm: Confirm,
    fetch_service: Optional[FetchService] = None,
    mount_service: Optional[MountService] = None,
    build_service: Optional[BuildService] = None,
) -> List[EntryResult]:
    """Process ``(name, url)`` entries sequentially."""

    steps, cleanup = build_steps(
        config,
        confirm=confirm,
        fetch_service=fetch_service,
        mount_service=mount_service,
        build_service=build_service,
    )
    items = (WorkItem(name=name, url=url) for name, url in entries)
    results = run_batch(items, steps, cleanup=cleanup.run)

    ok = sum(1 for r in results if r.ok)
    logger.info("Processed %d entries: %d succeeded, %d failed", len(results), ok, len(results) - ok)
    for r in results:
        if not r.ok:
            logger.debug("Failed entry %s: %s", r.name, r.error)
    return results


def _fatal(message: str) -> int:
    sys.stderr.write(f"Error: {message}\n")
    return 1


def list_catalog(config: Config) -> int:
    try:
        urls = CatalogStore(config.catalog_path).urls()
    except NotFoundError:
        return _fatal("URL and software name must be provided as arguments.")

    # stdout carries URLs only so the listing can be piped.
    logger.info("Available software list:")
    for url in urls:
        print(url)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="dmg2pkg",
        description="Download .dmg installers and convert them to .pkg packages.",
    )
    p.add_argument("--debug", action="store_true", help="Verbose step tracing")
    p.add_argument("--all", action="store_true", help="Process every entry in the catalog")
    p.add_argument("--config", default=None, help="Path to a YAML config file")
    p.add_argument("--log", default=None, help="Also write the log to this file")
    p.add_argument("--report", default=None, help="Write a run summary (json|yaml)")
    answer = p.add_mutually_exclusive_group()
    answer.add_argument("--yes", action="store_true", help="Add new entries to the catalog without asking")
    answer.add_argument("--no", action="store_true", help="Never add entries to the catalog")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("entry", nargs="*", metavar="NAME URL", help="Software name and download URL")

    args = p.parse_args(argv)
    if len(args.entry) not in (0, 2):
        p.error("expected a software name and a download URL")

    configure_logging(
        level=logging.DEBUG if args.debug else logging.INFO,
        log_path=args.log,
    )

    try:
        config = load_config(args.config) if args.config else Config()
    except ConfigError as e:
        return _fatal(str(e))
    if args.debug:
        config = dataclasses.replace(config, debug=True)
    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.entry and not args.all:
        return list_catalog(config)

    try:
        Environment(config).check_tools()
    except ToolMissingError as e:
        return _fatal(str(e))

    if args.entry:
        entries = [(args.entry[0], args.entry[1])]
    else:
        try:
            entries = [(e.name, e.url) for e in CatalogStore(config.catalog_path).list()]
        except NotFoundError as e:
            return _fatal(str(e))

    if args.yes:
        confirm = fixed_answer(True)
    elif args.no:
        confirm = fixed_answer(False)
    else:
        confirm = prompt_yes_no

    results = run(config, entries, confirm=confirm)

    if args.report:
        save_report(args.report, results)
    return 0
