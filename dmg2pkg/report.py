from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Sequence

import yaml

from .pipeline import EntryResult

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def build_report(results: Sequence[EntryResult]) -> Dict[str, Any]:
    entries = [r.as_dict() for r in results]
    succeeded = sum(1 for r in results if r.ok)
    return {
        "entries": entries,
        "summary": {
            "total": len(results),
            "succeeded": succeeded,
            "failed": len(results) - succeeded,
            "fallback": sum(1 for r in results if r.ok and r.used_fallback),
        },
    }


def save_report(path: str, results: Sequence[EntryResult]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    report = build_report(results)
    if _detect_format(p) in {"yaml", "yml"}:
        p.write_text(yaml.safe_dump(report, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(report, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    logger.info("Run report written to %s", p)
