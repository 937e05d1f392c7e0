"""
Repository layer - abstracts the registry backend.

Usage:
    from repositories import get_repository

    repo = get_repository(token)  # Bound to the caller's credential
    page = repo.aidois.list(page=0, limit=10)
    repo.users.update(UserUpdate(id=user_id, banned=True))

Backends are swappable via configure_backend().
"""

from typing import Callable, Optional

import requests

from .base import Repository, BackendError, NotAuthenticated
from .rest_backend import RestRepository, ApiClient

# Default backend - can be changed via configure_backend
_backend: str = "rest"
_options: dict = {}
_factory: Optional[Callable[[Optional[str]], Repository]] = None
# One connection pool for every REST repository; credentials travel per call
_session: Optional[requests.Session] = None


def shared_session() -> requests.Session:
    """The process-wide HTTP session, created on first use."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


def close_session() -> None:
    global _session
    if _session is not None:
        _session.close()
        _session = None


def get_repository(token: Optional[str] = None) -> Repository:
    """
    Get a repository for this credential.

    Not cached: the credential is per request, so the repository is too.
    The HTTP session underneath is shared.
    """
    if _factory is not None:
        return _factory(token)

    if _backend == "rest":
        from config import load_config

        cfg = load_config()
        return RestRepository(
            base_url=_options.get("base_url", cfg.api_base_url),
            token=token,
            timeout=_options.get("timeout", cfg.request_timeout),
            session=shared_session(),
        )
    raise ValueError(f"Unknown backend: {_backend}")


def configure_backend(backend: str, factory: Callable = None, **kwargs) -> None:
    """
    Configure the repository backend.

    backend="rest" takes base_url/timeout overrides; backend="custom" takes a
    factory(token) -> Repository.
    """
    global _backend, _options, _factory
    if backend == "custom" and factory is None:
        raise ValueError("custom backend needs a factory")
    _backend = backend
    _options = kwargs
    _factory = factory if backend == "custom" else None


__all__ = [
    "get_repository",
    "configure_backend",
    "shared_session",
    "close_session",
    "Repository",
    "RestRepository",
    "ApiClient",
    "BackendError",
    "NotAuthenticated",
]
