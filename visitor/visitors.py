from __future__ import annotations
from collections import Counter
from typing import Iterable, List

from core.models import Context, Folder, Node, Project, Task
from visitor.descriptor import VisitorDescriptor
from visitor.visitor import Visitor


class StatusFilter(Visitor):
    """Quita tareas y proyectos según su estado (quitar una tarea quita su subárbol)."""

    def __init__(self, hidden_task_statuses: Iterable[str] = Task.CLOSED_STATUSES,
                 hidden_project_statuses: Iterable[str] = ("done", "dropped")):
        super().__init__(VisitorDescriptor.visit_all().with_flags(filter_projects=True, filter_tasks=True))
        self.hidden_task_statuses = frozenset(hidden_task_statuses)
        self.hidden_project_statuses = frozenset(hidden_project_statuses)

    def filter_projects_down(self, projects: List[Project]) -> List[Project]:
        return [p for p in projects if p.status not in self.hidden_project_statuses]

    def filter_tasks_down(self, tasks: List[Task]) -> List[Task]:
        return [t for t in tasks if t.status not in self.hidden_task_statuses]


class Sorter(Visitor):
    """Ordena tareas por posición y prioridad, y el resto por nombre."""

    def __init__(self):
        super().__init__(VisitorDescriptor.everything())

    @staticmethod
    def _by_name(node: Node):
        return node.name.lower()

    @staticmethod
    def _task_key(task: Task):
        # mismo orden que la consulta a PocketBase: position,-priority,created
        return (task.position, -task.priority, task.created or "")

    def filter_folders_down(self, folders: List[Folder]) -> List[Folder]:
        return sorted(folders, key=self._by_name)

    def filter_projects_down(self, projects: List[Project]) -> List[Project]:
        return sorted(projects, key=self._by_name)

    def filter_contexts_down(self, contexts: List[Context]) -> List[Context]:
        return sorted(contexts, key=self._by_name)

    def filter_tasks_down(self, tasks: List[Task]) -> List[Task]:
        return sorted(tasks, key=self._task_key)


class EmptyPruner(Visitor):
    """
    Quita en la subida los nodos que se han quedado vacíos.

    Como los filtros de subida corren después de los hijos, una carpeta cuyos
    proyectos se han podado también acaba podada.
    """

    def __init__(self):
        super().__init__(VisitorDescriptor.everything())

    def filter_folders_up(self, folders: List[Folder]) -> List[Folder]:
        return [f for f in folders if f.children()]

    def filter_projects_up(self, projects: List[Project]) -> List[Project]:
        return [p for p in projects if p.children()]

    def filter_contexts_up(self, contexts: List[Context]) -> List[Context]:
        return [c for c in contexts if c.children()]


class NodeCounter(Visitor):
    def __init__(self, what: VisitorDescriptor = None):
        super().__init__(what)
        self.counts: Counter = Counter()

    def enter(self, node: Node) -> None:
        self.counts[node.type] += 1
