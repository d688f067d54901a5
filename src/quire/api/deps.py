import logging
from typing import Callable

from fastapi import Depends, HTTPException, Request

from ..auth import RequestContext, authenticate, parse_project_context
from ..client import LocalContentApi
from ..config import Config
from ..editors.registry import FieldEditorRegistry
from ..enums import Scope
from ..errors import AuthorizationError, ContextError

logger = logging.getLogger(__name__)


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_registry(request: Request) -> FieldEditorRegistry:
    return request.app.state.registry


def get_token(request: Request, cookie_name: str) -> str | None:
    token = request.cookies.get(cookie_name)
    if token:
        return token

    authorization = request.headers.get("Authorization", "")
    if authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return None


def require_scope(scope: Scope) -> Callable[[Request], RequestContext]:
    """Dependency resolving the request context and checking ``scope``."""

    def dependency(request: Request) -> RequestContext:
        config = get_config(request)

        try:
            project, environment = parse_project_context(request.url.path, config)
        except ContextError as e:
            logger.info(str(e))
            raise HTTPException(status_code=400, detail=str(e))

        try:
            user = authenticate(get_token(request, config.web.token_cookie), scope.value, project)
        except AuthorizationError as e:
            logger.info(str(e))
            raise HTTPException(status_code=403, detail=str(e))

        return RequestContext(user=user, project=project, environment=environment)

    return dependency


def content_api(scope: Scope) -> Callable[..., LocalContentApi]:
    def dependency(
        request: Request,
        context: RequestContext = Depends(require_scope(scope)),
    ) -> LocalContentApi:
        return LocalContentApi(
            context.project,
            context.environment,
            language=get_config(request).language,
            username=context.username,
        )

    return dependency
