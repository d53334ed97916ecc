from __future__ import annotations
from typing import List

from core.models import Context, Folder, Node, Project, Task
from visitor.descriptor import VisitorDescriptor


class Visitor:
    """
    Hooks que invoca el traverser.

    enter/exit se llaman alrededor de cada nodo visitado; por defecto delegan
    en enter_<tipo>/exit_<tipo> si la subclase los define. Los filtros reciben
    una copia de la lista de hijos y devuelven la lista que queda en el nodo.
    Cualquier hook puede lanzar NodeTraversalAbort para abandonar el subárbol.
    """

    def __init__(self, what: VisitorDescriptor = None):
        self.what = what if what is not None else VisitorDescriptor.visit_all()

    def get_what(self) -> VisitorDescriptor:
        return self.what

    # ---------- lifecycle ----------
    def enter(self, node: Node) -> None:
        hook = getattr(self, f"enter_{node.type}", None)
        if hook is not None:
            hook(node)

    def exit(self, node: Node) -> None:
        hook = getattr(self, f"exit_{node.type}", None)
        if hook is not None:
            hook(node)

    # ---------- filters ----------
    def filter_folders_down(self, folders: List[Folder]) -> List[Folder]:
        return folders

    def filter_folders_up(self, folders: List[Folder]) -> List[Folder]:
        return folders

    def filter_projects_down(self, projects: List[Project]) -> List[Project]:
        return projects

    def filter_projects_up(self, projects: List[Project]) -> List[Project]:
        return projects

    def filter_contexts_down(self, contexts: List[Context]) -> List[Context]:
        return contexts

    def filter_contexts_up(self, contexts: List[Context]) -> List[Context]:
        return contexts

    def filter_tasks_down(self, tasks: List[Task]) -> List[Task]:
        return tasks

    def filter_tasks_up(self, tasks: List[Task]) -> List[Task]:
        return tasks
