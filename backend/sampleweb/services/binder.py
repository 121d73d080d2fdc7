"""
SampleWeb Backend - Request Binder
==================================

What:  Turns a request's parameters into the keyword arguments a handler
       declared it needs.
How:   Each handler carries an ordered list of HandlerParam declarations.
       bind_arguments() walks that list and produces {argument: value}.
Who:   Called by the dispatcher before every handler invocation.

Binding rules, in order:
    1. Context kinds (request, attributes, model) are handed over as-is.
    2. Value kinds look up the parameter named after the argument (or the
       declared override) and coerce it to str / int / float / bool:
         absent + default      → the default, coerced like a present value
         absent + required     → MissingRequiredParameterError
         absent + optional     → None
         present, unparseable  → TypeCoercionError
       An empty string counts as absent when a default is declared or the
       target type is not str.
    3. Record kinds build an empty record from its shape, then apply rule 2
       to each declared field. Missing or unparseable fields keep their
       zero value: record binding never fails.

Example declaration:
    params = [
        request_param("product_name", name="name", default="RADIO"),
        request_param("product_price", int, name="price"),
        model_arg("model"),
    ]
"""

import logging
import re
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence, Type

from pydantic import BaseModel, ConfigDict, model_validator

from sampleweb.exceptions import MissingRequiredParameterError, TypeCoercionError
from sampleweb.models.shape import PRIMITIVE_TYPES, RecordShape
from sampleweb.schemas.view import Model
from sampleweb.services.request_context import WebRequest

logger = logging.getLogger(__name__)

# Whole-string base-10 integer, optional sign, no whitespace or underscores
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

_TRUE_VALUES = {"true", "on", "yes", "1"}
_FALSE_VALUES = {"false", "off", "no", "0"}


class ParamKind(str, Enum):
    """Where a handler argument's value comes from."""
    REQUEST = "request"
    ATTRIBUTES = "attributes"
    MODEL = "model"
    VALUE = "value"
    RECORD = "record"


class HandlerParam(BaseModel):
    """
    Declaration of one handler argument.

    Attributes:
        arg:        Keyword the handler receives the value under
        kind:       ParamKind of the value source
        name:       Request parameter name (VALUE kind); defaults to `arg`
        value_type: Target primitive type (VALUE kind)
        required:   Whether an absent parameter without default fails
        default:    Default as a string, coerced like a request value
        shape:      Record shape (RECORD kind)
    """

    model_config = ConfigDict(frozen=True)

    arg: str
    kind: ParamKind
    name: Optional[str] = None
    value_type: Type[Any] = str
    required: bool = True
    default: Optional[str] = None
    shape: Optional[RecordShape] = None

    @model_validator(mode="after")
    def check_declaration(self) -> "HandlerParam":
        if self.kind is ParamKind.VALUE and self.value_type not in PRIMITIVE_TYPES:
            raise ValueError(
                f"Unsupported parameter type '{self.value_type.__name__}' for '{self.arg}'. "
                f"Must be one of: {[t.__name__ for t in PRIMITIVE_TYPES]}"
            )
        if self.kind is ParamKind.RECORD and self.shape is None:
            raise ValueError(f"Record parameter '{self.arg}' needs a shape")
        return self

    @property
    def parameter_name(self) -> str:
        return self.name or self.arg


# ── Declaration helpers ───────────────────────────────────────────────────

def request_arg(arg: str) -> HandlerParam:
    """The handler receives the WebRequest itself."""
    return HandlerParam(arg=arg, kind=ParamKind.REQUEST)


def attributes_arg(arg: str) -> HandlerParam:
    """The handler receives the request attribute bag."""
    return HandlerParam(arg=arg, kind=ParamKind.ATTRIBUTES)


def model_arg(arg: str) -> HandlerParam:
    """The handler receives the request's Model."""
    return HandlerParam(arg=arg, kind=ParamKind.MODEL)


def request_param(
    arg: str,
    value_type: Type[Any] = str,
    name: Optional[str] = None,
    required: bool = True,
    default: Optional[str] = None,
) -> HandlerParam:
    """The handler receives one coerced request parameter."""
    return HandlerParam(
        arg=arg,
        kind=ParamKind.VALUE,
        name=name,
        value_type=value_type,
        required=required,
        default=default,
    )


def record_param(arg: str, shape: RecordShape) -> HandlerParam:
    """The handler receives a record populated from matching parameters."""
    return HandlerParam(arg=arg, kind=ParamKind.RECORD, shape=shape)


# ══════════════════════════════════════════════════════════════════════════
# Coercion
# ══════════════════════════════════════════════════════════════════════════

def _to_int(raw: str) -> int:
    if not _INT_PATTERN.fullmatch(raw):
        raise ValueError(raw)
    return int(raw)


def _to_float(raw: str) -> float:
    if raw != raw.strip() or "_" in raw:
        raise ValueError(raw)
    return float(raw)


def _to_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(raw)


_COERCERS: Dict[type, Callable[[str], Any]] = {
    str: str,
    int: _to_int,
    float: _to_float,
    bool: _to_bool,
}


def coerce_value(raw: Optional[str], value_type: Type[Any], parameter: str) -> Any:
    """
    Convert a raw parameter string into `value_type`.

    Raises:
        TypeCoercionError: the string is not a valid `value_type` literal
            (None is never valid for a non-str type).
    """
    if raw is None:
        raise TypeCoercionError(parameter=parameter, value=None, target_type=value_type.__name__)
    try:
        return _COERCERS[value_type](raw)
    except ValueError:
        raise TypeCoercionError(parameter=parameter, value=raw, target_type=value_type.__name__)


def _is_absent(raw: Optional[str], value_type: Type[Any], has_default: bool) -> bool:
    if raw is None:
        return True
    return raw == "" and (has_default or value_type is not str)


# ══════════════════════════════════════════════════════════════════════════
# Binding
# ══════════════════════════════════════════════════════════════════════════

def bind_value(param: HandlerParam, web_request: WebRequest) -> Any:
    """Bind a single VALUE-kind parameter (rule 2)."""
    name = param.parameter_name
    raw = web_request.get_parameter(name)
    has_default = param.default is not None

    if _is_absent(raw, param.value_type, has_default):
        if has_default:
            return coerce_value(param.default, param.value_type, name)
        if param.required:
            raise MissingRequiredParameterError(
                parameter=name, expected_type=param.value_type.__name__
            )
        return None

    return coerce_value(raw, param.value_type, name)


def bind_record(shape: RecordShape, web_request: WebRequest) -> Any:
    """
    Build a record and populate it field by field (rule 3).

    Never raises a binding error: a field whose parameter is missing or
    cannot be coerced keeps the value the empty record was built with.
    """
    record = shape.new_instance()
    for field in shape.field_specs:
        raw = web_request.get_parameter(field.name)
        if _is_absent(raw, field.value_type, has_default=False):
            continue
        try:
            value = coerce_value(raw, field.value_type, field.name)
        except TypeCoercionError as e:
            logger.debug("Skipping field %s.%s: %s", shape.name, field.name, e.message)
            continue
        setattr(record, field.name, value)
    return record


def bind_arguments(
    params: Sequence[HandlerParam],
    web_request: WebRequest,
    model: Model,
) -> Dict[str, Any]:
    """
    Produce the keyword arguments for a handler call.

    Args:
        params:       The handler's declared parameter list
        web_request:  The current request (never mutated)
        model:        The request's Model, handed to MODEL-kind arguments

    Returns:
        {argument name: bound value}, in declaration order

    Raises:
        MissingRequiredParameterError, TypeCoercionError
    """
    bound: Dict[str, Any] = {}
    for param in params:
        if param.kind is ParamKind.REQUEST:
            bound[param.arg] = web_request
        elif param.kind is ParamKind.ATTRIBUTES:
            bound[param.arg] = web_request.attributes
        elif param.kind is ParamKind.MODEL:
            bound[param.arg] = model
        elif param.kind is ParamKind.RECORD:
            bound[param.arg] = bind_record(param.shape, web_request)
        else:
            bound[param.arg] = bind_value(param, web_request)
    return bound
