import pytest

from storage.loader import (
    ROOT_CONTEXT_ID,
    ROOT_FOLDER_ID,
    TreeLoader,
    build_context_tree,
    build_project_tree,
    context_from_record,
    folder_from_record,
    link_subtasks,
    project_from_record,
    task_from_record,
)


FOLDERS = [
    {"id": "f1", "name": "Work", "parent": ""},
    {"id": "f2", "name": "Clients", "parent": "f1"},
    {"id": "f3", "name": "Lost", "parent": "nope"},
]
PROJECTS = [
    {"id": "p1", "name": "Acme", "folder": "f2", "status": "active"},
    {"id": "p2", "name": "Loose", "folder": ""},
]
CONTEXTS = [
    {"id": "c1", "name": "Office", "parent": "", "color": "#2E86DE"},
    {"id": "c2", "name": "Phone", "parent": "c1"},
]
TASKS = [
    {"id": "t1", "title": "Call", "status": "open", "project": "p1", "context": "c2", "parent_task": ""},
    {"id": "t2", "title": "Prepare", "status": "open", "project": "p1", "context": "c1", "parent_task": "t1",
     "priority": 3, "position": 2.5},
    {"id": "t3", "title": "Inbox item", "status": "open", "project": "", "context": ""},
    {"id": "t4", "title": "Orphan", "status": "open", "project": "p2", "parent_task": "missing"},
]


def records_to_tasks():
    tasks = [task_from_record(r) for r in TASKS]
    link_subtasks(tasks)
    return tasks


def test_records_to_nodes():
    t = task_from_record(TASKS[1])
    assert (t.title, t.parent_task, t.priority, t.position, t.kind) == ("Prepare", "t1", 3, 2.5, "todo")
    assert task_from_record(TASKS[2]).project is None
    assert folder_from_record(FOLDERS[0]).parent is None
    assert project_from_record(PROJECTS[1]).status == "active"
    assert context_from_record(CONTEXTS[0]).color == "#2E86DE"


def test_position_zero_is_kept():
    t = task_from_record({"id": "b", "title": "b", "position": 0, "created": "2024-01-01 10:00:00.000Z"})
    assert t.position == 0
    assert t.created == "2024-01-01 10:00:00.000Z"
    assert task_from_record({"id": "a", "title": "a"}).position == 1.0


def test_link_subtasks():
    tasks = [task_from_record(r) for r in TASKS]
    top = link_subtasks(tasks)
    assert [t.id for t in top] == ["t1", "t3", "t4"]
    assert [t.id for t in tasks[0].tasks] == ["t2"]


def test_project_tree():
    folders = [folder_from_record(r) for r in FOLDERS]
    projects = [project_from_record(r) for r in PROJECTS]
    root = build_project_tree(folders, projects, records_to_tasks())

    assert root.id == ROOT_FOLDER_ID
    assert [f.name for f in root.folders] == ["Work", "Lost"]
    clients = root.folders[0].folders[0]
    acme = clients.projects[0]
    assert acme.name == "Acme"
    # sub-tasks hang from their parent, not from the project
    assert [t.title for t in acme.tasks] == ["Call"]
    assert [t.title for t in acme.tasks[0].tasks] == ["Prepare"]
    # project without folder at the root; task with missing parent kept at project level
    assert [p.name for p in root.projects] == ["Loose"]
    assert [t.title for t in root.projects[0].tasks] == ["Orphan"]


def test_context_tree_is_flat():
    contexts = [context_from_record(r) for r in CONTEXTS]
    tasks = records_to_tasks()
    root = build_context_tree(contexts, tasks)

    assert root.id == ROOT_CONTEXT_ID
    office = root.contexts[0]
    assert [c.name for c in root.contexts] == ["Office"]
    assert [t.title for t in office.tasks] == ["Prepare"]
    assert [t.title for t in office.contexts[0].tasks] == ["Call"]
    assert [t.title for t in root.tasks] == ["Inbox item", "Orphan"]


def test_trees_share_tasks():
    tasks = records_to_tasks()
    projects = build_project_tree([], [project_from_record(r) for r in PROJECTS], tasks)
    contexts = build_context_tree([context_from_record(r) for r in CONTEXTS], tasks)
    call = projects.projects[0].tasks[0]
    assert contexts.contexts[0].contexts[0].tasks[0] is call


class FakeClient:
    def list_folders(self):
        return FOLDERS

    def list_projects(self):
        return PROJECTS

    def list_contexts(self):
        return CONTEXTS

    def list_tasks(self, status="all"):
        return TASKS


@pytest.mark.parametrize("method, root_id", [("load_projects", ROOT_FOLDER_ID), ("load_contexts", ROOT_CONTEXT_ID)])
def test_tree_loader(method, root_id):
    root = getattr(TreeLoader(FakeClient()), method)()
    assert root.id == root_id
