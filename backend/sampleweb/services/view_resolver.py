"""
SampleWeb Backend - View Resolver
=================================

What:  Maps a handler's result to a render or redirect instruction, and
       turns that instruction into a Starlette response.
How:   Logical names become template paths by concatenation
       (prefix + name + suffix); Jinja2 is asked for the template so a
       missing file fails here rather than mid-render.
Who:   Called by the dispatcher after every handler invocation, and by the
       controller glue to produce the HTTP response.

Resolution:
    "redirect:/main.home"             → RedirectInstruction("/main.home")
    "result"                          → RenderInstruction("views/result.html")
    ModelAndView("product", {...})    → RenderInstruction("views/product.html")
    None on a route with default_view → RenderInstruction(default_view)

Render context, later sources win on a name collision:
    request attributes → handler Model → ModelAndView model

The resolver holds only read-only configuration; resolve() and render()
keep no state between calls.
"""

import logging
from typing import Any, Mapping, Optional

from fastapi.templating import Jinja2Templates
from jinja2 import TemplateNotFound
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from sampleweb.config import settings
from sampleweb.exceptions import TemplateNotFoundError, ViewResolutionError
from sampleweb.schemas.view import (
    ModelAndView,
    RedirectInstruction,
    RenderInstruction,
    ViewInstruction,
)

logger = logging.getLogger(__name__)

# Reserved marker for view names that redirect instead of rendering
REDIRECT_PREFIX = "redirect:"


class ViewResolver:
    """
    Resolves logical view names against a template prefix/suffix pair.

    Args:
        prefix:    Template-root part of the path ("views/")
        suffix:    File suffix (".html")
        templates: Jinja2Templates used for lookup and rendering; may be
                   None when only template_path() is needed.
        redirect_status_code: Status used for redirect instructions.
    """

    def __init__(
        self,
        prefix: str = "",
        suffix: str = "",
        templates: Optional[Jinja2Templates] = None,
        redirect_status_code: int = 302,
    ):
        self.prefix = prefix
        self.suffix = suffix
        self.templates = templates
        self.redirect_status_code = redirect_status_code

    @classmethod
    def from_settings(cls) -> "ViewResolver":
        return cls(
            prefix=settings.view_prefix,
            suffix=settings.view_suffix,
            templates=Jinja2Templates(directory=settings.templates_dir),
            redirect_status_code=settings.redirect_status_code,
        )

    def template_path(self, view_name: str) -> str:
        return f"{self.prefix}{view_name}{self.suffix}"

    @staticmethod
    def is_redirect(view_name: str) -> bool:
        return view_name.startswith(REDIRECT_PREFIX)

    def resolve(
        self,
        result: Any,
        model: Optional[Mapping[str, Any]] = None,
        attributes: Optional[Mapping[str, Any]] = None,
        default_view: Optional[str] = None,
    ) -> ViewInstruction:
        """
        Turn a handler result into a render or redirect instruction.

        Args:
            result:       str, ModelAndView, or None
            model:        The Model the handler filled through model_arg
            attributes:   The request attribute bag
            default_view: View name for a None result (route opt-in)

        Raises:
            TemplateNotFoundError: the resolved template does not exist
            ViewResolutionError:   no view name could be determined
        """
        extra_model: Mapping[str, Any] = {}
        if isinstance(result, ModelAndView):
            view_name = result.view_name
            extra_model = result.model
        elif result is None or isinstance(result, str):
            view_name = result
        else:
            raise ViewResolutionError(
                message=f"Unsupported handler result type '{type(result).__name__}'",
                context={"result_type": type(result).__name__},
            )

        if view_name is None:
            if default_view is None:
                raise ViewResolutionError(
                    message="Handler returned no view name and its route has no default view",
                )
            view_name = default_view

        if self.is_redirect(view_name):
            location = view_name[len(REDIRECT_PREFIX):]
            logger.debug("Redirecting to %s", location)
            return RedirectInstruction(location=location, status_code=self.redirect_status_code)

        template_path = self.template_path(view_name)
        self._check_template(template_path, view_name)

        context = {}
        context.update(attributes or {})
        context.update(model or {})
        context.update(extra_model)
        return RenderInstruction(view_name=view_name, template_path=template_path, context=context)

    def _check_template(self, template_path: str, view_name: str) -> None:
        if self.templates is None:
            raise TemplateNotFoundError(template_path=template_path, view_name=view_name)
        try:
            self.templates.get_template(template_path)
        except TemplateNotFound:
            logger.warning("Template not found for view '%s': %s", view_name, template_path)
            raise TemplateNotFoundError(template_path=template_path, view_name=view_name)

    def render(self, request: Request, instruction: ViewInstruction) -> Response:
        """Produce the HTTP response for a resolved instruction."""
        if isinstance(instruction, RedirectInstruction):
            return RedirectResponse(url=instruction.location, status_code=instruction.status_code)
        return self.templates.TemplateResponse(
            request,
            instruction.template_path,
            dict(instruction.context),
        )


# ── Singleton Instance ────────────────────────────────────────────────────
view_resolver = ViewResolver.from_settings()
