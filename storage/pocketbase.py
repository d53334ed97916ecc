from __future__ import annotations
import logging
import requests
from typing import List, Dict, Any, Optional
from core import config
from core.exceptions import PBError

log = logging.getLogger(__name__)


class PocketBaseClient:
    def __init__(self, base_url: str, timeout: float = None, page_size: int = None):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.page_size = page_size or config.PAGE_SIZE
        self.token: Optional[str] = ""
        self.user_id: Optional[str] = ""

    # ---------- auth ----------
    def login(self, identity: str, password: str) -> bool:
        url = f"{self.base_url}/api/collections/users/auth-with-password"
        r = self.session.post(url, json={"identity": identity, "password": password}, timeout=self.timeout)
        if not r.ok:
            raise PBError(f"Login failed: {r.status_code} {r.text}")
        data = r.json()
        self.token = data.get("token")
        self.user_id = data.get("record", {}).get("id")
        if not self.token or not self.user_id:
            raise PBError("Missing token or user id in login response")
        self.session.headers.update({"Authorization": f"Bearer {self.token}"})
        log.info("Logged in to %s as %s", self.base_url, self.user_id)
        return True

    # ---------- records ----------
    def list_records(self, collection: str, filter: Optional[str] = None,
                     sort: Optional[str] = None) -> List[Dict[str, Any]]:
        """Todos los registros de la colección, recorriendo las páginas."""
        url = f"{self.base_url}/api/collections/{collection}/records"
        items: List[Dict[str, Any]] = []
        page = 1
        while True:
            params: Dict[str, Any] = {"page": page, "perPage": self.page_size}
            if filter:
                params["filter"] = filter
            if sort:
                params["sort"] = sort
            r = self.session.get(url, params=params, timeout=self.timeout)
            if not r.ok:
                raise PBError(f"List {collection} failed: {r.status_code} {r.text}")
            data = r.json()
            items.extend(data.get("items", []))
            total_pages = data.get("totalPages") or 1
            if page >= total_pages:
                break
            page += 1
        log.debug("Fetched %d %s record(s) in %d page(s)", len(items), collection, page)
        return items

    def _owner_filter(self) -> str:
        return f'owner = "{self.user_id}"'

    # ---------- folders / projects ----------
    def list_folders(self) -> List[Dict[str, Any]]:
        return self.list_records("folders", filter=self._owner_filter(), sort="name")

    def list_projects(self) -> List[Dict[str, Any]]:
        return self.list_records("projects", filter=self._owner_filter(), sort="name")

    # ---------- contexts ----------
    def list_contexts(self) -> List[Dict[str, Any]]:
        return self.list_records("contexts", filter=self._owner_filter(), sort="name")

    # ---------- tasks ----------
    def list_tasks(self, status: str = "all") -> List[Dict[str, Any]]:
        filt = self._owner_filter()
        if status and status != "all":
            filt += f' && status = "{status}"'
        return self.list_records("tasks", filter=filt, sort="position,-priority,created")
