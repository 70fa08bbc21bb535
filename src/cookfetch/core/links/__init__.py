"""Combined overlay tree of roles, nodes, handlers and data bags."""

from cookfetch.core.links.linker import (
    LINKED_SUBDIRS,
    LINKED_SUFFIXES,
    LinkReport,
    OverlayLinker,
)

__all__ = ["LINKED_SUBDIRS", "LINKED_SUFFIXES", "LinkReport", "OverlayLinker"]
