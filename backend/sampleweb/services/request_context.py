"""
SampleWeb Backend - Request Context
===================================

What:  WebRequest, the per-request object handlers and the binder work with.
How:   Wraps an immutable multi-valued parameter set (query string merged
       with a form body) and a mutable attribute bag that is merged into the
       render context.
Who:   Built by the controller glue for every request; passed to handlers
       that declare `request_arg(...)`.

Parameter lookup:
    ?name=Pen&name=Cup  →  get_parameter("name")        == "Pen"
                           get_parameter_values("name") == ["Pen", "Cup"]
    Query values come before body values for the same name.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from starlette.datastructures import ImmutableMultiDict, UploadFile
from starlette.requests import Request

# Body content types that carry form parameters
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

ParameterSource = Union[
    ImmutableMultiDict,
    Mapping[str, Any],
    Iterable[Tuple[str, str]],
]


class WebRequest:
    """
    Immutable request parameters plus request-scoped attributes.

    Attributes:
        method:      HTTP method ("GET", "POST", ...)
        path:        Request path without the leading slash ("doA")
        attributes:  Mutable attribute bag, merged into the render context
    """

    def __init__(
        self,
        parameters: Optional[ParameterSource] = None,
        method: str = "GET",
        path: str = "",
        attributes: Optional[Dict[str, Any]] = None,
    ):
        if isinstance(parameters, ImmutableMultiDict):
            self._parameters = parameters
        elif isinstance(parameters, Mapping):
            items: List[Tuple[str, str]] = []
            for key, value in parameters.items():
                if isinstance(value, (list, tuple)):
                    items.extend((key, v) for v in value)
                else:
                    items.append((key, value))
            self._parameters = ImmutableMultiDict(items)
        else:
            self._parameters = ImmutableMultiDict(list(parameters or []))
        self.method = method.upper()
        self.path = path.lstrip("/")
        self.attributes: Dict[str, Any] = attributes if attributes is not None else {}

    @classmethod
    async def from_request(cls, request: Request) -> "WebRequest":
        """
        Build a WebRequest from a Starlette request.

        Form bodies are only read for form content types; uploaded files
        are not request parameters and are skipped.
        """
        items = list(request.query_params.multi_items())
        media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
        if media_type in FORM_CONTENT_TYPES:
            form = await request.form()
            items.extend(
                (key, value)
                for key, value in form.multi_items()
                if not isinstance(value, UploadFile)
            )
        return cls(
            parameters=ImmutableMultiDict(items),
            method=request.method,
            path=request.url.path,
        )

    # ── Parameters (read-only) ────────────────────────────────────────────

    @property
    def parameters(self) -> ImmutableMultiDict:
        return self._parameters

    def get_parameter(self, name: str) -> Optional[str]:
        """First value of parameter `name`, or None when it is absent."""
        values = self._parameters.getlist(name)
        return values[0] if values else None

    def get_parameter_values(self, name: str) -> List[str]:
        return self._parameters.getlist(name)

    def has_parameter(self, name: str) -> bool:
        return name in self._parameters

    # ── Attributes (request-scoped, mutable) ──────────────────────────────

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    def __repr__(self) -> str:
        return (
            f"WebRequest(method={self.method!r}, path={self.path!r}, "
            f"parameters={list(self._parameters.multi_items())!r})"
        )
