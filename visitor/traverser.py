"""
Recorrido en profundidad del árbol de nodos aplicando un Visitor.

En cada nodo: enter, filtros de bajada, hijos, filtros de subida, exit.
El descriptor del visitor decide qué tipos se visitan y qué listas se filtran.

Un hook que lanza NodeTraversalAbort se traduce aquí en Outcome.ABORT_SUBTREE:
el nodo se da por terminado y su padre sigue con normalidad. Cualquier otra
excepción sube hasta traverse(), que la envuelve en TraversalException.
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Callable

from core.exceptions import NodeTraversalAbort, TraversalException
from core.models import Context, Folder, Node, Project, Task
from visitor.descriptor import VisitorDescriptor
from visitor.visitor import Visitor

LOGGER = logging.getLogger(__name__)


class Outcome(Enum):
    CONTINUE = "continue"
    ABORT_SUBTREE = "abort_subtree"


def traverse(visitor: Visitor, node: Node) -> None:
    try:
        _dispatch(visitor, visitor.get_what(), node)
    except Exception as e:
        raise TraversalException(e) from e


def _dispatch(visitor: Visitor, what: VisitorDescriptor, node: Node) -> Outcome:
    LOGGER.debug("Traversing node: %s", node)
    if node.type == Folder.TYPE:
        return _traverse_folder(visitor, what, node)
    if node.type == Project.TYPE:
        return _traverse_project(visitor, what, node)
    if node.type == Context.TYPE:
        return _traverse_context(visitor, what, node)
    if node.type == Task.TYPE:
        return _traverse_task(visitor, what, node, True)
    raise ValueError(f"Unknown node type: {node.type!r}")


# ---------- hook calls ----------
def _call(hook: Callable[[Node], None], node: Node) -> Outcome:
    try:
        hook(node)
    except NodeTraversalAbort:
        return Outcome.ABORT_SUBTREE
    return Outcome.CONTINUE


def _filter(hook: Callable[[list], list], node: Node, attr: str) -> Outcome:
    try:
        result = hook(list(getattr(node, attr)))
    except NodeTraversalAbort:
        return Outcome.ABORT_SUBTREE
    setattr(node, attr, list(result))
    return Outcome.CONTINUE


def _aborted(node: Node) -> Outcome:
    LOGGER.debug("Traversal aborted: %s", node)
    return Outcome.ABORT_SUBTREE


# ---------- per type ----------
# Los resultados ABORT_SUBTREE de los hijos se descartan: sólo afectan a su subárbol.

def _traverse_folder(visitor: Visitor, what: VisitorDescriptor, node: Folder) -> Outcome:
    if not what.visit_folders:
        return Outcome.CONTINUE

    LOGGER.debug("Traversing folder: %s", node)

    if _call(visitor.enter, node) is Outcome.ABORT_SUBTREE:
        return _aborted(node)

    if what.filter_folders and _filter(visitor.filter_folders_down, node, "folders") is Outcome.ABORT_SUBTREE:
        return _aborted(node)
    if what.filter_projects and _filter(visitor.filter_projects_down, node, "projects") is Outcome.ABORT_SUBTREE:
        return _aborted(node)

    # las subcarpetas se comprueban en su propia entrada, los proyectos aquí
    for child in list(node.folders):
        _traverse_folder(visitor, what, child)
    if what.visit_projects:
        for child in list(node.projects):
            _traverse_project(visitor, what, child)

    if what.filter_folders and _filter(visitor.filter_folders_up, node, "folders") is Outcome.ABORT_SUBTREE:
        return _aborted(node)
    if what.filter_projects and _filter(visitor.filter_projects_up, node, "projects") is Outcome.ABORT_SUBTREE:
        return _aborted(node)

    if _call(visitor.exit, node) is Outcome.ABORT_SUBTREE:
        return _aborted(node)
    return Outcome.CONTINUE


def _traverse_project(visitor: Visitor, what: VisitorDescriptor, node: Project) -> Outcome:
    if not what.visit_projects:
        return Outcome.CONTINUE

    LOGGER.debug("Traversing project: %s", node)

    if _call(visitor.enter, node) is Outcome.ABORT_SUBTREE:
        return _aborted(node)

    if what.filter_tasks and _filter(visitor.filter_tasks_down, node, "tasks") is Outcome.ABORT_SUBTREE:
        return _aborted(node)

    if what.visit_tasks:
        for child in list(node.tasks):
            _traverse_task(visitor, what, child, True)

    if what.filter_tasks and _filter(visitor.filter_tasks_up, node, "tasks") is Outcome.ABORT_SUBTREE:
        return _aborted(node)

    if _call(visitor.exit, node) is Outcome.ABORT_SUBTREE:
        return _aborted(node)
    return Outcome.CONTINUE


def _traverse_context(visitor: Visitor, what: VisitorDescriptor, node: Context) -> Outcome:
    if not what.visit_contexts:
        return Outcome.CONTINUE

    LOGGER.debug("Traversing context: %s", node)

    if _call(visitor.enter, node) is Outcome.ABORT_SUBTREE:
        return _aborted(node)

    if what.filter_tasks and _filter(visitor.filter_tasks_down, node, "tasks") is Outcome.ABORT_SUBTREE:
        return _aborted(node)
    if what.filter_contexts and _filter(visitor.filter_contexts_down, node, "contexts") is Outcome.ABORT_SUBTREE:
        return _aborted(node)

    if what.visit_tasks:
        for child in list(node.tasks):
            _traverse_task(visitor, what, child, False)
    for child in list(node.contexts):
        _traverse_context(visitor, what, child)

    if what.filter_tasks and _filter(visitor.filter_tasks_up, node, "tasks") is Outcome.ABORT_SUBTREE:
        return _aborted(node)
    if what.filter_contexts and _filter(visitor.filter_contexts_up, node, "contexts") is Outcome.ABORT_SUBTREE:
        return _aborted(node)

    if _call(visitor.exit, node) is Outcome.ABORT_SUBTREE:
        return _aborted(node)
    return Outcome.CONTINUE


def _traverse_task(visitor: Visitor, what: VisitorDescriptor, node: Task, from_project: bool) -> Outcome:
    if not what.visit_tasks:
        return Outcome.CONTINUE

    LOGGER.debug("Traversing task: %s", node)

    if _call(visitor.enter, node) is Outcome.ABORT_SUBTREE:
        return _aborted(node)

    if what.filter_tasks and _filter(visitor.filter_tasks_down, node, "tasks") is Outcome.ABORT_SUBTREE:
        return _aborted(node)

    # desde un contexto las tareas son planas
    if from_project:
        for child in list(node.tasks):
            _traverse_task(visitor, what, child, from_project)

    if what.filter_tasks and _filter(visitor.filter_tasks_up, node, "tasks") is Outcome.ABORT_SUBTREE:
        return _aborted(node)

    if _call(visitor.exit, node) is Outcome.ABORT_SUBTREE:
        return _aborted(node)
    return Outcome.CONTINUE
