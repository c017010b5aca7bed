"""Runtime values produced by the evaluator."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field


class Number(BaseModel):
    type: Literal["NUMBER"] = "NUMBER"
    value: float


class Array(BaseModel):
    type: Literal["ARRAY"] = "ARRAY"
    elements: list["Object"] = []


class Dictionary(BaseModel):
    type: Literal["DICTIONARY"] = "DICTIONARY"
    properties: dict[str, "Object"] = {}


class Entity(BaseModel):
    """A declared value tagged with the keyword it was declared under."""

    type: Literal["ENTITY"] = "ENTITY"
    class_name: str  # NUMBER, COLOR, SPHERE, ...
    value: "Object"


class Error(BaseModel):
    """An evaluation failure, returned rather than raised."""

    type: Literal["ERROR"] = "ERROR"
    message: str


Object = Annotated[
    Number | Array | Dictionary | Entity | Error,
    Field(discriminator="type"),
]


def is_error(obj: Any) -> bool:
    return isinstance(obj, Error)


def to_python(obj: Any) -> Any:
    """Unwrap a runtime object into plain floats, lists and dicts."""
    match obj:
        case Number(value=v):
            return v
        case Array(elements=elements):
            return [to_python(e) for e in elements]
        case Dictionary(properties=properties):
            return {k: to_python(v) for k, v in properties.items()}
        case Entity(value=value):
            return to_python(value)
        case Error(message=message):
            raise ValueError(f"cannot convert error object: {message}")
        case _:
            raise TypeError(f"unknown object type: {type(obj)}")


# Rebuild models for forward references
Array.model_rebuild()
Dictionary.model_rebuild()
Entity.model_rebuild()
