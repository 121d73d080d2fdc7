"""
SampleWeb Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for binding and view resolution failures.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   Raised by the binder, the view resolver, and route handlers.
When:  During request processing; every one of them is per-request.

Exception Hierarchy:
    SampleWebError (base)                 → 500 Internal Server Error
    ├── BindingError
    │   ├── MissingRequiredParameterError → 400 Bad Request
    │   └── TypeCoercionError             → 400 Bad Request
    ├── TemplateNotFoundError             → 404 Not Found
    ├── ViewResolutionError               → 500 Internal Server Error
    └── UnregisteredShapeError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class SampleWebError(Exception):
    """
    Base exception for all SampleWeb application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged, returned only as `details`
                  for client-side errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class BindingError(SampleWebError):
    """
    Raised when a request parameter cannot be bound to a handler argument.

    What:    Common parent of the two client-side binding failures, so the
             exception handlers and tests can catch either.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Request parameter binding failed",
        parameter: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if parameter:
            ctx["parameter"] = parameter
        super().__init__(message=message, context=ctx)
        self.parameter = parameter


class MissingRequiredParameterError(BindingError):
    """
    Raised when a required primitive argument has no matching request
    parameter and no declared default.

    Example response:
        {
            "error": "missing_parameter",
            "message": "Required int parameter 'price' is not present",
            "details": {"parameter": "price", "expected_type": "int"}
        }
    """

    def __init__(
        self,
        parameter: str,
        expected_type: str = "str",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["expected_type"] = expected_type
        super().__init__(
            message=f"Required {expected_type} parameter '{parameter}' is not present",
            parameter=parameter,
            context=ctx,
        )
        self.expected_type = expected_type


class TypeCoercionError(BindingError):
    """
    Raised when a parameter value cannot be parsed into the declared type.

    When:    "abc" for an int argument, "maybe" for a bool argument.
    """

    def __init__(
        self,
        parameter: str,
        value: Optional[str],
        target_type: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["value"] = value
        ctx["target_type"] = target_type
        super().__init__(
            message=(
                f"Failed to convert value '{value}' of parameter '{parameter}' "
                f"to required type '{target_type}'"
            ),
            parameter=parameter,
            context=ctx,
        )
        self.value = value
        self.target_type = target_type


class TemplateNotFoundError(SampleWebError):
    """
    Raised when the resolved template path does not exist.

    What:    The handler named a view, but there is no template for it.
    HTTP:    404 Not Found, with the missing path in the details.
    """

    def __init__(
        self,
        template_path: str,
        view_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["template_path"] = template_path
        if view_name:
            ctx["view_name"] = view_name
        super().__init__(
            message=f"Template '{template_path}' could not be found",
            context=ctx,
        )
        self.template_path = template_path
        self.view_name = view_name


class ViewResolutionError(SampleWebError):
    """
    Raised when a handler result cannot be turned into a view.

    When:    The handler returned nothing and its route did not opt in to
             using the request path as the view name, or it returned a type
             the resolver does not understand.
    """

    def __init__(
        self,
        message: str = "Handler did not produce a view",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnregisteredShapeError(SampleWebError):
    """
    Raised when a model entry is added without a name and the value's class
    has no registered record shape to supply a default name.
    """

    def __init__(
        self,
        type_name: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["type"] = type_name
        super().__init__(
            message=f"No record shape is registered for '{type_name}'; pass an explicit name",
            context=ctx,
        )
        self.type_name = type_name
