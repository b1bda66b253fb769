from typing import Dict, Optional
import requests

from repoforge.clients.errors import raise_for_api_error


class GitLabClient:
    """Minimal GitLab REST v4 client: current user and project creation."""

    def __init__(
        self,
        base_url: str,
        token: str,
        verify: bool = True,
        ca_cert: Optional[str] = None,
        timeout: float = 30,
    ) -> None:
        self.base = base_url.rstrip("/")
        self.api = f"{self.base}/api/v4"
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        })
        self.verify = ca_cert or verify
        self.timeout = timeout

    def _get(self, path: str) -> Dict:
        r = self.session.get(f"{self.api}{path}", timeout=self.timeout, verify=self.verify)
        raise_for_api_error(r, "GitLab")
        return r.json()

    def _post(self, path: str, payload: Dict) -> Dict:
        r = self.session.post(f"{self.api}{path}", json=payload, timeout=self.timeout, verify=self.verify)
        raise_for_api_error(r, "GitLab")
        return r.json()

    def current_user(self) -> Dict:
        """GET /user -> the authenticated user"""
        return self._get("/user")

    def create_project(self, payload: Dict) -> Dict:
        """POST /projects -> the created project"""
        return self._post("/projects", payload)

    def create_project_for_user(self, user_id: int, payload: Dict) -> Dict:
        """POST /projects/user/:user_id -> the created project (admin only)"""
        return self._post(f"/projects/user/{user_id}", payload)
