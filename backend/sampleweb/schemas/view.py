"""
SampleWeb Backend - Model and View Result Types
===============================================

What:  The data a handler hands to the view layer and what the view layer
       hands back to the HTTP layer.

Handler side (what handlers produce):
    - Model:         ordered name → value bag filled by the handler
    - ModelAndView:  a view name together with its own Model
    - str:           a logical view name, or "redirect:<path>"
    - None:          no view name (only valid on routes that opted in)

Resolver side (what the HTTP layer consumes):
    - RenderInstruction:   template path + merged render context
    - RedirectInstruction: redirect target + status code
"""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field

from sampleweb.exceptions import UnregisteredShapeError
from sampleweb.models.shape import shape_for


def default_attribute_name(value: Any) -> str:
    """
    Name a model entry after the registered shape of `value`.

    Raises:
        UnregisteredShapeError: `value`'s class has no registered shape.
    """
    shape = shape_for(type(value))
    if shape is None:
        raise UnregisteredShapeError(type_name=type(value).__name__)
    return shape.default_attribute_name


class Model(dict):
    """
    Request-scoped, ordered bag of named values for the render step.

    Usage:
        model.add_attribute("msg", "hello")
        model.add_object(product)          # stored as "productVO"
    """

    def add_attribute(self, name: str, value: Any) -> "Model":
        self[name] = value
        return self

    def add_object(self, value: Any) -> "Model":
        self[default_attribute_name(value)] = value
        return self


class ModelAndView:
    """A logical view name together with the model to render it with."""

    def __init__(self, view_name: Optional[str] = None, model: Optional[Mapping[str, Any]] = None):
        self.view_name = view_name
        self.model = Model(model or {})

    def set_view_name(self, view_name: str) -> None:
        self.view_name = view_name

    def add_object(self, value: Any, name: Optional[str] = None) -> "ModelAndView":
        if name is None:
            self.model.add_object(value)
        else:
            self.model.add_attribute(name, value)
        return self

    def __repr__(self) -> str:
        return f"ModelAndView(view_name={self.view_name!r}, model={dict(self.model)!r})"


# ══════════════════════════════════════════════════════════════════════════
# View Instructions - output of the view resolver
# ══════════════════════════════════════════════════════════════════════════


class RenderInstruction(BaseModel):
    """
    What:  Render `template_path` with `context`.
    Who:   Produced by ViewResolver.resolve(), consumed by ViewResolver.render().
    """
    view_name: str = Field(description="Logical view name returned by the handler")
    template_path: str = Field(description="prefix + view name + suffix")
    context: Dict[str, Any] = Field(
        default_factory=dict,
        description="Request attributes merged with model values (model wins)",
    )


class RedirectInstruction(BaseModel):
    """
    What:  Send the client to `location` instead of rendering anything.
    Who:   Produced for "redirect:" view names; never touches templates.
    """
    location: str = Field(description="Redirect target path")
    status_code: int = Field(default=302, description="HTTP redirect status")


ViewInstruction = Union[RenderInstruction, RedirectInstruction]
