from __future__ import annotations
import logging
from collections import Counter
from typing import Optional, TextIO

from core.models import Node
from formatters.formatters import get_formatter
from storage.loader import TreeLoader
from visitor.traverser import traverse
from visitor.visitors import EmptyPruner, NodeCounter, Sorter, StatusFilter

log = logging.getLogger(__name__)

MODES = ("projects", "contexts")


class ExportController:
    """Coordina la carga desde PocketBase, los visitors y el formatter."""
    def __init__(self, client):
        self.client = client
        self.loader = TreeLoader(client)

    # ---- load ----
    def load(self, mode: str) -> Node:
        if mode == "projects":
            return self.loader.load_projects()
        if mode == "contexts":
            return self.loader.load_contexts()
        raise ValueError(f"Unknown mode {mode!r}, expected one of: {', '.join(MODES)}")

    # ---- pipeline ----
    def process(self, root: Node, *, include_done: bool = False, prune: bool = False,
                sort: bool = True) -> Counter:
        """Aplica los visitors sobre el árbol y devuelve cuántos nodos quedan por tipo."""
        if not include_done:
            traverse(StatusFilter(), root)
        if sort:
            traverse(Sorter(), root)
        if prune:
            traverse(EmptyPruner(), root)
        counter = NodeCounter()
        traverse(counter, root)
        return counter.counts

    def export(self, mode: str, fmt: str, out: TextIO, *, include_done: bool = False,
               prune: bool = False, sort: bool = True, max_depth: Optional[int] = None) -> Counter:
        formatter = get_formatter(fmt, max_depth=max_depth)
        root = self.load(mode)
        counts = self.process(root, include_done=include_done, prune=prune, sort=sort)
        formatter.format(root, out)
        log.info("Exported %s as %s: %s", mode, fmt,
                 ", ".join(f"{n} {t}(s)" for t, n in sorted(counts.items())) or "nothing")
        return counts
