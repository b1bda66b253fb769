from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class AuthOptions:
    username: str = ""
    password: str = ""  # API token, sent as the bearer credential


@dataclass
class ProviderOptions:
    type: str = "gitlab"
    host: str = ""  # empty -> provider default
    auth: AuthOptions = field(default_factory=AuthOptions)
    verify: bool = True
    ca_cert: Optional[str] = None
    timeout: float = 30
    owner_type: str = "TEAM"  # GitFlic only: TEAM or COMPANY
    naming: Dict = field(default_factory=dict)  # GitFlic alias rules, see make_alias


@dataclass
class CreateRepoOptions:
    name: str
    owner: str
    private: bool = True
    description: str = ""


class ProviderError(Exception):
    pass


class AuthenticationFailedError(ProviderError):
    def __init__(self, cause: Exception) -> None:
        super().__init__(f"authentication failed: {cause}")


class OwnerNotFoundError(ProviderError):
    def __init__(self, owner: str, cause: Exception) -> None:
        super().__init__(f"owner {owner} not found: {cause}")
        self.owner = owner


class Provider(ABC):
    """A Git hosting backend able to create remote repositories."""

    def __init__(self, opts: ProviderOptions) -> None:
        self.opts = opts

    @abstractmethod
    def create_repository(self, opts: CreateRepoOptions) -> str:
        """Create the repository and return its web URL.

        Raises AuthenticationFailedError, OwnerNotFoundError or ProviderError;
        any other client error propagates unchanged.
        """
