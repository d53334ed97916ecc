from __future__ import annotations
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class VisitorDescriptor:
    """Qué tipos de nodo visita un Visitor y qué listas de hijos filtra.

    visit_X a False salta el nodo y todo su subárbol; filter_X activa los
    hooks filter_X_down/filter_X_up sobre las listas de ese tipo.
    """
    visit_folders: bool = False
    filter_folders: bool = False
    visit_projects: bool = False
    filter_projects: bool = False
    visit_contexts: bool = False
    filter_contexts: bool = False
    visit_tasks: bool = False
    filter_tasks: bool = False

    @classmethod
    def visit_all(cls) -> VisitorDescriptor:
        return cls(visit_folders=True, visit_projects=True, visit_contexts=True, visit_tasks=True)

    @classmethod
    def everything(cls) -> VisitorDescriptor:
        return cls(True, True, True, True, True, True, True, True)

    def with_flags(self, **flags: bool) -> VisitorDescriptor:
        return replace(self, **flags)
