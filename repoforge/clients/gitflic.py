from typing import Dict, Optional
import requests

from repoforge.clients.errors import raise_for_api_error


class GitFlicClient:
    def __init__(
        self,
        base_url: str,
        api_token: str,
        verify: bool = True,
        ca_cert: Optional[str] = None,
        timeout: float = 60,
    ) -> None:
        self.base = base_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"token {api_token}",
            "Content-Type": "application/json",
        })
        self.verify = ca_cert or verify
        self.timeout = timeout

    def create_project(self, payload: Dict) -> Dict:
        """POST /project -> the created project"""
        url = f"{self.base}/project"
        r = self.session.post(url, json=payload, timeout=self.timeout, verify=self.verify)
        raise_for_api_error(r, "GitFlic")
        return r.json()
