from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Optional


class Node:
    """Base de los cuatro tipos de nodo: folder, project, context y task."""
    TYPE: ClassVar[str] = "node"
    # nombres de las listas de hijos, en el orden en que se recorren
    CHILD_LISTS: ClassVar[tuple] = ()

    # cada subclase aporta `name` (campo o propiedad)
    name: str

    @property
    def type(self) -> str:
        return self.TYPE

    def children(self) -> List[Node]:
        out: List[Node] = []
        for attr in self.CHILD_LISTS:
            out.extend(getattr(self, attr))
        return out

    def to_dict(self) -> Dict[str, Any]:
        """Campos propios del nodo, sin las listas de hijos."""
        data: Dict[str, Any] = {"type": self.TYPE}
        for f in fields(self):
            if f.name in self.CHILD_LISTS:
                continue
            data[f.name] = getattr(self, f.name)
        return data

    def __repr__(self) -> str:
        return f"{self.TYPE}({getattr(self, 'id', '?')}: {self.name!r})"


@dataclass(eq=False, repr=False)
class Folder(Node):
    TYPE: ClassVar[str] = "folder"
    CHILD_LISTS: ClassVar[tuple] = ("folders", "projects")

    id: str
    name: str
    parent: Optional[str] = None  # folder id
    folders: List[Folder] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)


@dataclass(eq=False, repr=False)
class Project(Node):
    TYPE: ClassVar[str] = "project"
    CHILD_LISTS: ClassVar[tuple] = ("tasks",)

    id: str
    name: str
    folder: Optional[str] = None  # folder id
    status: str = "active"        # active | on_hold | done | dropped
    notes: Optional[str] = None
    tasks: List[Task] = field(default_factory=list)


@dataclass(eq=False, repr=False)
class Context(Node):
    TYPE: ClassVar[str] = "context"
    CHILD_LISTS: ClassVar[tuple] = ("tasks", "contexts")

    id: str
    name: str
    parent: Optional[str] = None  # context id
    color: Optional[str] = None
    # tareas "planas": no se baja a sus subtareas desde un contexto
    tasks: List[Task] = field(default_factory=list)
    contexts: List[Context] = field(default_factory=list)


@dataclass(eq=False, repr=False)
class Task(Node):
    TYPE: ClassVar[str] = "task"
    CHILD_LISTS: ClassVar[tuple] = ("tasks",)
    CLOSED_STATUSES: ClassVar[frozenset] = frozenset({"done", "cancelled", "archived"})

    id: str
    title: str
    status: str = "open"               # open | done | cancelled | archived
    project: Optional[str] = None      # project id
    context: Optional[str] = None      # context id
    parent_task: Optional[str] = None  # task id
    kind: str = "todo"                 # todo | event | routine
    priority: int = 0
    position: float = 1.0
    journal_date: Optional[str] = None  # YYYY-MM-DD
    due_date: Optional[str] = None
    notes: Optional[str] = None
    created: Optional[str] = None       # timestamp de PocketBase
    tasks: List[Task] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.title

    @property
    def is_done(self) -> bool:
        return self.status == "done"
