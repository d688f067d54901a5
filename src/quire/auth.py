"""Request authentication and project/environment routing context."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from .config import Config
from .consts import PROJECT_ROUTE_PATTERN
from .errors import AuthorizationError, ContextError
from .models import User
from .utils import sanitize

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """Who is calling, and which project environment the call is about.

    Passed explicitly to everything that acts on behalf of a request.
    """

    user: User
    project: Optional[str] = None
    environment: Optional[str] = None

    @property
    def username(self) -> str:
        return self.user.username


def parse_project_context(path: str, config: Config) -> tuple[str | None, str | None]:
    """Derive project and environment from a ``/<root>/<project>/<environment>/...`` path.

    The environment defaults to the project's first environment. Paths
    without a project segment yield ``(None, None)``.

    Raises:
        ContextError: If the project or environment is not configured
    """
    match = re.match(PROJECT_ROUTE_PATTERN, path)
    if not match:
        return None, None

    project_name = match.group("project")
    environment = match.group("environment")

    project = config.get_project(project_name)
    if project is None:
        raise ContextError(f"Project \"{project_name}\" not found")

    if environment is None:
        return project.name, project.default_environment

    if environment not in project.environments:
        raise ContextError(
            f"Environment \"{environment}\" not found in project \"{project.name}\""
        )

    return project.name, environment


def authenticate(token: str | None, scope: str | None = None, project: str | None = None) -> User:
    """Find the user owning a token and check it has ``scope`` in ``project``.

    Admins pass every scope check.

    Raises:
        AuthorizationError: If the token is missing or unknown, or the scope is lacking
    """
    if not token:
        raise AuthorizationError("No token was provided")

    user = User.get_or_none(User.token == token)
    if user is None:
        raise AuthorizationError(f"Found no user with token \"{sanitize(token)}\"")

    if scope and not user.has_scope(project, scope):
        raise AuthorizationError(
            f"User \"{user.username}\" doesn't have scope \"{scope}\""
            + (f" in project \"{project}\"" if project else "")
        )

    return user
