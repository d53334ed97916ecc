"""Construye los árboles de proyectos y de contextos a partir de registros de PocketBase."""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from core.models import Context, Folder, Project, Task

log = logging.getLogger(__name__)

ROOT_FOLDER_ID = "__root_folder__"
ROOT_CONTEXT_ID = "__root_context__"


def _ref(record: Dict[str, Any], key: str) -> Optional[str]:
    # las relaciones vacías llegan como "" en PocketBase
    return record.get(key) or None


def folder_from_record(rec: Dict[str, Any]) -> Folder:
    return Folder(id=rec["id"], name=rec.get("name", ""), parent=_ref(rec, "parent"))


def project_from_record(rec: Dict[str, Any]) -> Project:
    return Project(
        id=rec["id"],
        name=rec.get("name", ""),
        folder=_ref(rec, "folder"),
        status=rec.get("status") or "active",
        notes=rec.get("notes") or None,
    )


def context_from_record(rec: Dict[str, Any]) -> Context:
    return Context(id=rec["id"], name=rec.get("name", ""), parent=_ref(rec, "parent"),
                   color=rec.get("color") or None)


def task_from_record(rec: Dict[str, Any]) -> Task:
    return Task(
        id=rec["id"],
        title=rec.get("title", ""),
        status=rec.get("status") or "open",
        project=_ref(rec, "project"),
        context=_ref(rec, "context"),
        parent_task=_ref(rec, "parent_task"),
        kind=rec.get("kind") or "todo",
        priority=rec.get("priority") or 0,
        # 0 es una posición válida
        position=rec["position"] if rec.get("position") is not None else 1.0,
        journal_date=rec.get("journal_date") or None,
        due_date=rec.get("due_date") or None,
        notes=rec.get("notes") or None,
        created=rec.get("created") or None,
    )


def link_subtasks(tasks: List[Task]) -> List[Task]:
    """Cuelga cada tarea de su parent_task; devuelve las que no tienen padre."""
    by_id = {t.id: t for t in tasks}
    top: List[Task] = []
    for t in tasks:
        parent = by_id.get(t.parent_task) if t.parent_task else None
        if t.parent_task and parent is None:
            log.warning("Task %s refers to missing parent task %s", t.id, t.parent_task)
        if parent is not None and parent is not t:
            parent.tasks.append(t)
        else:
            top.append(t)
    return top


def build_project_tree(folders: List[Folder], projects: List[Project], tasks: List[Task]) -> Folder:
    """
    Árbol de proyectos bajo una carpeta raíz sintética.

    Las tareas deben venir ya enlazadas con link_subtasks; sólo se cuelgan
    de los proyectos las de primer nivel.
    """
    root = Folder(id=ROOT_FOLDER_ID, name="Projects")
    folder_by_id = {f.id: f for f in folders}
    for f in folders:
        parent = folder_by_id.get(f.parent) if f.parent else None
        if f.parent and parent is None:
            log.warning("Folder %s refers to missing parent %s, attached to root", f.id, f.parent)
        (parent if parent is not None and parent is not f else root).folders.append(f)

    project_by_id = {p.id: p for p in projects}
    for p in projects:
        folder = folder_by_id.get(p.folder) if p.folder else None
        if p.folder and folder is None:
            log.warning("Project %s refers to missing folder %s, attached to root", p.id, p.folder)
        (folder or root).projects.append(p)

    task_ids = {t.id for t in tasks}
    for t in tasks:
        if t.parent_task in task_ids:
            continue
        project = project_by_id.get(t.project) if t.project else None
        if project is None:
            log.warning("Task %s has no project, left out of the project tree", t.id)
            continue
        project.tasks.append(t)
    return root


def build_context_tree(contexts: List[Context], tasks: List[Task]) -> Context:
    """
    Árbol de contextos bajo un contexto raíz sintético.

    Cada tarea (subtareas incluidas) aparece plana en su propio contexto; las
    tareas sin contexto quedan en la raíz.
    """
    root = Context(id=ROOT_CONTEXT_ID, name="Contexts")
    context_by_id = {c.id: c for c in contexts}
    for c in contexts:
        parent = context_by_id.get(c.parent) if c.parent else None
        if c.parent and parent is None:
            log.warning("Context %s refers to missing parent %s, attached to root", c.id, c.parent)
        (parent if parent is not None and parent is not c else root).contexts.append(c)

    for t in tasks:
        context = context_by_id.get(t.context) if t.context else None
        if t.context and context is None:
            log.warning("Task %s refers to missing context %s", t.id, t.context)
        (context or root).tasks.append(t)
    return root


class TreeLoader:
    """Descarga los registros del usuario y arma los árboles."""

    def __init__(self, client):
        self.client = client

    def _tasks(self) -> List[Task]:
        tasks = [task_from_record(r) for r in self.client.list_tasks()]
        link_subtasks(tasks)
        return tasks

    def load_projects(self) -> Folder:
        folders = [folder_from_record(r) for r in self.client.list_folders()]
        projects = [project_from_record(r) for r in self.client.list_projects()]
        root = build_project_tree(folders, projects, self._tasks())
        log.info("Loaded %d folder(s) and %d project(s)", len(folders), len(projects))
        return root

    def load_contexts(self) -> Context:
        contexts = [context_from_record(r) for r in self.client.list_contexts()]
        tasks = self._tasks()
        root = build_context_tree(contexts, tasks)
        log.info("Loaded %d context(s) and %d task(s)", len(contexts), len(tasks))
        return root
