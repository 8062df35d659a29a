"""Store loading result object.

This module defines a standard result object for hydrating a persisted store.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ConfigResult:
    """Result of loading a persisted store record.

    Attributes:
        success: Whether the record was loaded (a missing record counts as success)
        data: Migrated state mapping (if one was stored)
        version: Version the record was stored with
        migrated: Whether migration steps were applied
        error: Error message (if unsuccessful)
        exception: Original exception (if an error occurred)
        path: Location of the record (if applicable)
    """

    success: bool
    data: Optional[Dict[str, Any]] = None
    version: int = 0
    migrated: bool = False
    error: Optional[str] = None
    exception: Optional[Exception] = None
    path: Optional[str] = None
