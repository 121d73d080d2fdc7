"""
SampleWeb Backend - Handler Dispatch
====================================

What:  Runs one declared handler against one request: bind → invoke → resolve.
How:   A HandlerMethod pairs a plain Python function with its route data
       (path, methods, declared parameters, optional default view).
       invoke() has no HTTP dependencies, so handlers can be exercised
       directly in tests with a hand-built WebRequest.

Flow:
    WebRequest ──▶ bind_arguments() ──▶ handler(**kwargs) ──▶ ViewResolver.resolve()
                                                                  │
                                 RenderInstruction / RedirectInstruction ◀┘
"""

import inspect
import logging
from typing import Any, Callable, Optional, Sequence, Tuple

from sampleweb.schemas.view import Model, ViewInstruction
from sampleweb.services.binder import HandlerParam, bind_arguments
from sampleweb.services.request_context import WebRequest
from sampleweb.services.view_resolver import ViewResolver

logger = logging.getLogger(__name__)


class HandlerMethod:
    """
    A handler function plus its routing and binding declarations.

    Attributes:
        func:         The handler; called with keyword arguments only
        path:         Route path without leading slash ("doE")
        methods:      HTTP methods the handler accepts
        params:       Declared HandlerParam list
        default_view: View name used when the handler returns None
    """

    def __init__(
        self,
        func: Callable[..., Any],
        path: str,
        methods: Sequence[str],
        params: Sequence[HandlerParam] = (),
        default_view: Optional[str] = None,
    ):
        self.func = func
        self.path = path.lstrip("/")
        self.methods: Tuple[str, ...] = tuple(m.upper() for m in methods)
        self.params: Tuple[HandlerParam, ...] = tuple(params)
        self.default_view = default_view

    @property
    def name(self) -> str:
        return self.func.__name__

    def matches(self, path: str, method: str) -> bool:
        return self.path == path.lstrip("/") and method.upper() in self.methods

    async def invoke(self, web_request: WebRequest, resolver: ViewResolver) -> ViewInstruction:
        """
        Bind, call, and resolve.

        Raises:
            BindingError subclasses from the binder,
            TemplateNotFoundError / ViewResolutionError from the resolver,
            and anything the handler itself raises.
        """
        model = Model()
        kwargs = bind_arguments(self.params, web_request, model)

        result = self.func(**kwargs)
        if inspect.isawaitable(result):
            result = await result

        instruction = resolver.resolve(
            result,
            model=model,
            attributes=web_request.attributes,
            default_view=self.default_view,
        )
        logger.debug("%s %s → %s", web_request.method, self.path, instruction)
        return instruction

    def __repr__(self) -> str:
        return f"HandlerMethod({self.name}, path={self.path!r}, methods={self.methods})"
