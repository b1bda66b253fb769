from typing import Callable, Dict

from repoforge.core.provider import Provider, ProviderOptions
from repoforge.providers.gitflic import GitFlicProvider
from repoforge.providers.gitlab import GitLabProvider

PROVIDERS: Dict[str, Callable[[ProviderOptions], Provider]] = {
    "gitlab": GitLabProvider,
    "gitflic": GitFlicProvider,
}


def new_provider(opts: ProviderOptions) -> Provider:
    kind = (opts.type or "").strip().lower()
    if kind not in PROVIDERS:
        raise ValueError(f"Unsupported provider {opts.type!r}; use one of: {', '.join(sorted(PROVIDERS))}")
    return PROVIDERS[kind](opts)
