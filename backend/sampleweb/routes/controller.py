"""
SampleWeb Backend - Declarative Controller
==========================================

What:  Registers plain handler functions as FastAPI routes.
How:   Each decorator call stores a HandlerMethod and adds one endpoint to
       an APIRouter. The endpoint builds a WebRequest, lets the
       HandlerMethod bind/invoke/resolve, and asks the resolver to render.
Who:   Used by routes/sample.py; the router is mounted in main.create_app().
When:  All routes are registered at import time; the table is read-only
       once the application starts serving.

Usage:
    controller = Controller(tags=["Sample"])

    @controller.post_mapping("doE", params=[request_param("price", int)])
    def do_e(price):
        return "result"

    @controller.get_mapping("doB", view_from_path=True)
    def do_b():
        ...                     # renders views/doB.html
"""

import logging
from typing import Callable, List, Optional, Sequence

from fastapi import APIRouter
from starlette.requests import Request
from starlette.responses import Response

from sampleweb.schemas.view import RedirectInstruction, ViewInstruction
from sampleweb.services.binder import HandlerParam
from sampleweb.services.dispatcher import HandlerMethod
from sampleweb.services.request_context import WebRequest
from sampleweb.services.view_resolver import ViewResolver, view_resolver

logger = logging.getLogger(__name__)

ANY_METHOD = ("GET", "POST")


def describe_outcome(instruction: ViewInstruction) -> str:
    """Short access-log form of a resolved instruction: view name or redirect target."""
    if isinstance(instruction, RedirectInstruction):
        return f"-> {instruction.location}"
    return f"view={instruction.view_name}"


class Controller:
    """
    Collects HandlerMethods and exposes them through `router`.

    Args:
        resolver: ViewResolver used for every handler of this controller;
                  the module-level singleton when omitted.
        tags:     OpenAPI tags for the generated routes.
    """

    def __init__(self, resolver: Optional[ViewResolver] = None, tags: Optional[List[str]] = None):
        self.resolver = resolver or view_resolver
        self.router = APIRouter(tags=tags or [])
        self.handlers: List[HandlerMethod] = []

    def request_mapping(
        self,
        path: str,
        methods: Sequence[str] = ANY_METHOD,
        params: Sequence[HandlerParam] = (),
        view_from_path: bool = False,
    ) -> Callable[[Callable], Callable]:
        """
        Register the decorated function for `path` and `methods`.

        Args:
            path:           Route path, with or without leading slash
            methods:        Accepted HTTP methods (GET and POST by default)
            params:         Declared handler parameters
            view_from_path: When the handler returns None, render the view
                            named after `path`
        """

        def decorator(func: Callable) -> Callable:
            handler = HandlerMethod(
                func=func,
                path=path,
                methods=methods,
                params=params,
                default_view=path.lstrip("/") if view_from_path else None,
            )
            self.handlers.append(handler)
            self.router.add_api_route(
                f"/{handler.path}",
                self._endpoint_for(handler),
                methods=list(handler.methods),
                name=f"{handler.name}_{'_'.join(handler.methods).lower()}",
                include_in_schema=False,
            )
            return func

        return decorator

    def get_mapping(self, path: str, **kwargs) -> Callable[[Callable], Callable]:
        return self.request_mapping(path, methods=("GET",), **kwargs)

    def post_mapping(self, path: str, **kwargs) -> Callable[[Callable], Callable]:
        return self.request_mapping(path, methods=("POST",), **kwargs)

    def find_handler(self, path: str, method: str) -> Optional[HandlerMethod]:
        for handler in self.handlers:
            if handler.matches(path, method):
                return handler
        return None

    def _endpoint_for(self, handler: HandlerMethod) -> Callable:
        resolver = self.resolver

        async def endpoint(request: Request) -> Response:
            # Read back by RequestLoggingMiddleware for the access line
            request.state.handler = handler.name
            web_request = await WebRequest.from_request(request)
            instruction = await handler.invoke(web_request, resolver)
            request.state.outcome = describe_outcome(instruction)
            return resolver.render(request, instruction)

        endpoint.__name__ = handler.name
        return endpoint
