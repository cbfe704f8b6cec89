"""Error kinds raised by the pipeline components.

Only ``ToolMissingError``, ``NotFoundError`` (when listing) and
``ConfigError`` end the process. Everything deriving from ``EntryError``
aborts the current entry and the batch moves on.
"""

from __future__ import annotations


class Dmg2PkgError(Exception):
    """Base class for all dmg2pkg errors."""


class ToolMissingError(Dmg2PkgError):
    def __init__(self, tool: str):
        super().__init__(f"The required tool {tool} is not installed.")
        self.tool = tool


class ConfigError(Dmg2PkgError):
    pass


class NotFoundError(Dmg2PkgError):
    pass


class DirCreateError(Dmg2PkgError):
    pass


class EntryError(Dmg2PkgError):
    """Failure confined to a single catalog entry."""


class DownloadFailedError(EntryError):
    pass


class VerifyFailedError(EntryError):
    pass


class MountError(EntryError):
    pass


class BuildFailedError(EntryError):
    pass


class ConvertError(EntryError):
    pass


class FallbackFailedError(EntryError):
    pass
