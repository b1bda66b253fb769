from typing import Dict, Optional, Protocol

from repoforge.clients.errors import APIError
from repoforge.clients.gitflic import GitFlicClient
from repoforge.core.provider import (
    AuthenticationFailedError,
    CreateRepoOptions,
    OwnerNotFoundError,
    Provider,
    ProviderError,
    ProviderOptions,
)
from repoforge.core.utils import make_alias

DEFAULT_HOST = "http://localhost:8080/rest-api"
OWNER_TYPES = ("TEAM", "COMPANY")


class GitFlicAPI(Protocol):
    def create_project(self, payload: Dict) -> Dict: ...


class GitFlicProvider(Provider):
    def __init__(
        self,
        opts: ProviderOptions,
        client: Optional[GitFlicAPI] = None,
    ) -> None:
        super().__init__(opts)
        self.owner_type = (opts.owner_type or "TEAM").upper()
        if self.owner_type not in OWNER_TYPES:
            raise ValueError("GitFlic owner type must be TEAM or COMPANY")
        self.client = client or GitFlicClient(
            base_url=opts.host or DEFAULT_HOST,
            api_token=opts.auth.password,
            verify=opts.verify,
            ca_cert=opts.ca_cert,
            timeout=opts.timeout,
        )

    def build_payload(self, opts: CreateRepoOptions) -> Dict:
        owner = opts.owner.strip().lower()
        is_user = bool(self.opts.auth.username) and owner == self.opts.auth.username.strip().lower()
        return {
            "title": opts.name,
            "isPrivate": opts.private,
            "alias": make_alias(opts.name, self.opts.naming or {}),
            "ownerAlias": owner,
            "ownerAliasType": "USER" if is_user else self.owner_type,
            "description": (opts.description or "")[:500],
        }

    def create_repository(self, opts: CreateRepoOptions) -> str:
        try:
            data = self.client.create_project(self.build_payload(opts))
        except APIError as e:
            if e.status_code == 401:
                raise AuthenticationFailedError(e) from e
            if e.status_code == 404:
                raise OwnerNotFoundError(opts.owner, e) from e
            raise

        url = (data.get("httpTransportUrl") or "").removesuffix(".git")
        if not url:
            raise ProviderError("project url is empty")
        return url
