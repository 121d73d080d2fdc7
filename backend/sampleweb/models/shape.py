"""
SampleWeb Backend - Record Shapes
=================================

What:  Declared description of a structured record that request parameters
       can be bound onto, plus a process-wide registry of those shapes.
How:   A RecordShape lists the record's fields as (name, type) pairs and how
       to build an empty instance. The binder walks the list; the Model uses
       the shape name to derive a default attribute name.
When:  Shapes are registered at import time and only read afterwards.

Default attribute names:
    "ProductVO" → "productVO"
    "Item"      → "item"
    "URLInfo"   → "URLInfo"   (two leading capitals are left untouched)
"""

from typing import Any, Callable, Dict, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, field_validator

# Types the binder knows how to coerce a request parameter into
PRIMITIVE_TYPES: Tuple[type, ...] = (str, int, float, bool)


def decapitalize(name: str) -> str:
    """Lower-case the first letter unless the first two are both upper case."""
    if not name:
        return name
    if len(name) > 1 and name[0].isupper() and name[1].isupper():
        return name
    return name[0].lower() + name[1:]


class FieldSpec(BaseModel):
    """One bindable field of a record: parameter name and primitive type."""

    model_config = ConfigDict(frozen=True)

    name: str
    value_type: Type[Any] = str

    @field_validator("value_type")
    @classmethod
    def validate_value_type(cls, v: Type[Any]) -> Type[Any]:
        if v not in PRIMITIVE_TYPES:
            raise ValueError(
                f"Unsupported field type '{v.__name__}'. "
                f"Must be one of: {[t.__name__ for t in PRIMITIVE_TYPES]}"
            )
        return v


class RecordShape(BaseModel):
    """
    Declared shape of a structured record.

    Attributes:
        name:         Shape name; its decapitalized form is the default
                      model attribute name.
        record_type:  Class of the instances this shape describes.
        field_specs:  Fields populated from same-named request parameters.
        factory:      Zero-argument constructor; defaults to `record_type`.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    record_type: Type[Any]
    field_specs: Tuple[FieldSpec, ...] = ()
    factory: Optional[Callable[[], Any]] = None

    @property
    def default_attribute_name(self) -> str:
        return decapitalize(self.name)

    def new_instance(self) -> Any:
        """Build an instance with every field at its zero value."""
        if self.factory is not None:
            return self.factory()
        return self.record_type()


# ── Registry ──────────────────────────────────────────────────────────────
_shapes: Dict[type, RecordShape] = {}


def register_shape(shape: RecordShape) -> RecordShape:
    """Register `shape` for its record type and return it."""
    _shapes[shape.record_type] = shape
    return shape


def shape_for(record_type: type) -> Optional[RecordShape]:
    """Look up the shape registered for `record_type` or one of its bases."""
    for klass in record_type.__mro__:
        shape = _shapes.get(klass)
        if shape is not None:
            return shape
    return None
