from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError, field_validator

from .errors import InvalidInputError


# ---------- Stored Model ----------
class Task(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: Annotated[int, Field(gt=0)]
    title: StrictStr
    completed: StrictBool = False

    def __repr__(self) -> str:
        return f"Task(id: {self.id}, title: '{self.title}', completed: {self.completed})"


# ---------- Input Models ----------
def _trimmed_title(value: str) -> str:
    title = value.strip()
    if not title:
        raise ValueError("title must not be blank")
    return title


class TaskCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: StrictStr

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        return _trimmed_title(value)


class TaskPatch(BaseModel):
    """Partial update. Only fields present in the request body are applied."""

    model_config = ConfigDict(extra="ignore")

    title: StrictStr | None = None
    completed: StrictBool | None = None

    # Defaults are not validated, so this only sees values the client sent.
    @field_validator("title", "completed", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("value must not be null")
        return value

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        return _trimmed_title(value)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


# ---------- Boundary Parsing ----------
TITLE_REQUIRED = "title is required"
PATCH_MESSAGES = {
    "title": "title must be a non-empty string",
    "completed": "completed must be a boolean",
}


def parse_create(payload: Any) -> TaskCreate:
    if isinstance(payload, TaskCreate):
        return payload
    if not isinstance(payload, dict):
        raise InvalidInputError(TITLE_REQUIRED)
    try:
        return TaskCreate.model_validate(payload)
    except ValidationError:
        raise InvalidInputError(TITLE_REQUIRED)


def parse_patch(payload: Any) -> TaskPatch:
    if isinstance(payload, TaskPatch):
        return payload
    if not isinstance(payload, dict):
        raise InvalidInputError("Request body must be a JSON object")
    try:
        return TaskPatch.model_validate(payload)
    except ValidationError as e:
        # Report the first failing field, title before completed.
        failed = {err["loc"][0] for err in e.errors() if err["loc"]}
        field = "title" if "title" in failed else "completed"
        raise InvalidInputError(PATCH_MESSAGES[field])
