"""Category selection variant used by the post creation form.

The category dropdown mixes two intents: "use this existing category" and
"let me create a new one".  Rather than overloading the id space with a
magic string, the selection is a tagged union.  The reserved sentinel only
exists at the form boundary, where ``CategoryResolver.parse_selection``
translates it into :class:`CreateNewCategory`.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Form value of the "+ Add new category" option.  Never a real category id.
CREATE_NEW_CATEGORY_SENTINEL = "__create_new_category__"


class ExistingCategory(BaseModel):
    """The user picked a category that already exists."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["existing"] = "existing"
    category_id: str = Field(min_length=1)

    @field_validator("category_id")
    @classmethod
    def _reject_sentinel(cls, value: str) -> str:
        if value == CREATE_NEW_CATEGORY_SENTINEL:
            raise ValueError("the create-new sentinel is not a category id")
        return value


class CreateNewCategory(BaseModel):
    """The user wants to create a new category inline."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["create_new"] = "create_new"


CategorySelection = Annotated[
    Union[ExistingCategory, CreateNewCategory],  # noqa: UP007
    Field(discriminator="kind"),
]
