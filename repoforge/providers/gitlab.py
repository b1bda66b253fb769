from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol

from repoforge.clients.errors import APIError
from repoforge.clients.gitlab import GitLabClient
from repoforge.core.provider import (
    AuthenticationFailedError,
    CreateRepoOptions,
    OwnerNotFoundError,
    Provider,
    ProviderError,
    ProviderOptions,
)

DEFAULT_HOST = "https://gitlab.com"


class GitLabAPI(Protocol):
    def current_user(self) -> Dict: ...
    def create_project(self, payload: Dict) -> Dict: ...
    def create_project_for_user(self, user_id: int, payload: Dict) -> Dict: ...


@dataclass
class ProjectOwner:
    username: str = ""
    organization: str = ""


@dataclass
class Project:
    id: Optional[int] = None
    name: str = ""
    web_url: str = ""
    owner: ProjectOwner = field(default_factory=ProjectOwner)

    @classmethod
    def from_json(cls, data: Dict) -> "Project":
        owner = data.get("owner") or {}
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            web_url=data.get("web_url") or "",
            owner=ProjectOwner(username=owner.get("username") or ""),
        )


class GitLabProvider(Provider):
    def __init__(self, opts: ProviderOptions, client: Optional[GitLabAPI] = None) -> None:
        super().__init__(opts)
        self.client = client or GitLabClient(
            base_url=opts.host or DEFAULT_HOST,
            token=opts.auth.password,
            verify=opts.verify,
            ca_cert=opts.ca_cert,
            timeout=opts.timeout,
        )

    def create_project(self, opts: CreateRepoOptions) -> Project:
        """Create the project in the token owner's namespace.

        opts.owner is not sent to GitLab; it is only recorded as the
        project's owner organization when it differs from the token user.
        """
        try:
            auth_user = self.client.current_user()
        except APIError as e:
            if e.status_code == 401:
                raise AuthenticationFailedError(e) from e
            raise

        payload = {
            "name": opts.name,
            "visibility": "private" if opts.private else "public",
        }
        if opts.description:
            payload["description"] = opts.description

        try:
            project = Project.from_json(self.client.create_project(payload))
        except APIError as e:
            if e.status_code == 404:
                raise OwnerNotFoundError(opts.owner, e) from e
            raise

        if auth_user.get("username") != opts.owner:
            project.owner.organization = opts.owner

        return project

    def create_repository(self, opts: CreateRepoOptions) -> str:
        project = self.create_project(opts)
        if not project.web_url:
            raise ProviderError("project url is empty")
        return project.web_url
