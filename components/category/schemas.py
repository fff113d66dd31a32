"""Pydantic schemas for the category editor state and actions."""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from components.plan.schemas import BudgetPlanCategory
from components.reservation.schemas import ErrorCode

FormField = Literal["label", "owner", "allocated", "utilized", "notes"]


class AddForm(BaseModel):
    """Raw text of the add-category form."""
    label: str = ""
    owner: str = ""
    allocated: str = ""
    utilized: str = ""
    notes: str = ""


class EditingDraft(AddForm):
    """Raw text of the category being edited."""
    id: str


class Feedback(BaseModel):
    type: Literal["success", "error"]
    message: str
    error: Optional[ErrorCode] = None  # Set on rejected actions


class EditorState(BaseModel):
    plan_id: str = ""
    categories: List[BudgetPlanCategory] = []
    editing_draft: Optional[EditingDraft] = None
    show_add_form: bool = False
    add_form: AddForm = AddForm()
    feedback: Optional[Feedback] = None


class Hydrate(BaseModel):
    type: Literal["hydrate"] = "hydrate"
    plan_id: str
    categories: List[BudgetPlanCategory]


class ToggleAddForm(BaseModel):
    type: Literal["toggle_add_form"] = "toggle_add_form"
    open: Optional[bool] = None


class UpdateAddForm(BaseModel):
    type: Literal["update_add_form"] = "update_add_form"
    field: FormField
    value: str


class AddCategory(BaseModel):
    type: Literal["add_category"] = "add_category"
    category_id: Optional[str] = None  # Generated when omitted


class StartEdit(BaseModel):
    type: Literal["start_edit"] = "start_edit"
    category_id: str


class CancelEdit(BaseModel):
    type: Literal["cancel_edit"] = "cancel_edit"


class UpdateEditingField(BaseModel):
    type: Literal["update_editing_field"] = "update_editing_field"
    field: FormField
    value: str


class SaveEdit(BaseModel):
    type: Literal["save_edit"] = "save_edit"


class DeleteCategory(BaseModel):
    type: Literal["delete_category"] = "delete_category"
    category_id: str


class ClearFeedback(BaseModel):
    type: Literal["clear_feedback"] = "clear_feedback"


EditorAction = Annotated[
    Union[
        Hydrate,
        ToggleAddForm,
        UpdateAddForm,
        AddCategory,
        StartEdit,
        CancelEdit,
        UpdateEditingField,
        SaveEdit,
        DeleteCategory,
        ClearFeedback,
    ],
    Field(discriminator="type"),
]


class EditorRequest(BaseModel):
    """Schema for applying one action to a submitted editor state."""
    state: EditorState
    action: EditorAction
