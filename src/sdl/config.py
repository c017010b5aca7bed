"""Settings shared by the parser and evaluator."""

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Tunable limits and the table of built-in entities."""

    # Deepest nesting of grouped, prefix, array or properties expressions
    max_nesting_depth: int = Field(default=128, gt=0)
    # Names MODIFY may target, mapped to the class they are exported under
    builtins: dict[str, str] = {"CAMERA": "CAMERA"}


DEFAULT_SETTINGS = Settings()
