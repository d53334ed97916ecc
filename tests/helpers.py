from __future__ import annotations

from core.exceptions import NodeTraversalAbort
from core.models import Context, Folder, Project, Task
from visitor.descriptor import VisitorDescriptor
from visitor.visitor import Visitor


class RecordingVisitor(Visitor):
    """Records every hook call as (hook, node-or-names)."""

    def __init__(self, what=None, abort_on=None, fail_on=None, down=None):
        super().__init__(what if what is not None else VisitorDescriptor.everything())
        self.events = []
        # (hook, name) pairs where the hook raises
        self.abort_on = set(abort_on or ())
        self.fail_on = set(fail_on or ())
        # replacement for filter_*_down results, keyed by collection type
        self.down = down or {}

    def _check(self, hook, name):
        if (hook, name) in self.abort_on:
            raise NodeTraversalAbort()
        if (hook, name) in self.fail_on:
            raise RuntimeError(f"boom in {hook} {name}")

    def enter(self, node):
        self.events.append(("enter", node.name))
        self._check("enter", node.name)

    def exit(self, node):
        self.events.append(("exit", node.name))
        self._check("exit", node.name)

    def _filter(self, hook, kind, items):
        names = [n.name for n in items]
        self.events.append((hook, names))
        self._check(hook, tuple(names))
        if hook.endswith("down") and kind in self.down:
            return self.down[kind](items)
        return items

    def filter_folders_down(self, folders):
        return self._filter("filter_folders_down", "folders", folders)

    def filter_folders_up(self, folders):
        return self._filter("filter_folders_up", "folders", folders)

    def filter_projects_down(self, projects):
        return self._filter("filter_projects_down", "projects", projects)

    def filter_projects_up(self, projects):
        return self._filter("filter_projects_up", "projects", projects)

    def filter_contexts_down(self, contexts):
        return self._filter("filter_contexts_down", "contexts", contexts)

    def filter_contexts_up(self, contexts):
        return self._filter("filter_contexts_up", "contexts", contexts)

    def filter_tasks_down(self, tasks):
        return self._filter("filter_tasks_down", "tasks", tasks)

    def filter_tasks_up(self, tasks):
        return self._filter("filter_tasks_up", "tasks", tasks)

    def entered(self):
        return [name for hook, name in self.events if hook == "enter"]

    def exited(self):
        return [name for hook, name in self.events if hook == "exit"]


def task(name, *subtasks, **kwargs):
    return Task(id=name, title=name, tasks=list(subtasks), **kwargs)


def project(name, *tasks, **kwargs):
    return Project(id=name, name=name, tasks=list(tasks), **kwargs)


def folder(name, folders=(), projects=()):
    return Folder(id=name, name=name, folders=list(folders), projects=list(projects))


def context(name, tasks=(), contexts=()):
    return Context(id=name, name=name, tasks=list(tasks), contexts=list(contexts))


def task_tree():
    """Three top-level tasks with sub-tasks: 8 tasks in total."""
    return [
        task("t1", task("t1.1"), task("t1.2", task("t1.2.1"))),
        task("t2"),
        task("t3", task("t3.1"), task("t3.2")),
    ]
