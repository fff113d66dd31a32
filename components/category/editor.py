"""
Category editor for draft plans.

The editor is a pure reducer: ``reduce(state, action)`` returns a new
``EditorState`` and never touches its input or the plan store. Categories in
the state are a detached working copy of the plan's categories.
"""

import math
import uuid
from typing import List, Optional

from components.category.schemas import (
    AddCategory,
    AddForm,
    CancelEdit,
    ClearFeedback,
    DeleteCategory,
    EditingDraft,
    EditorAction,
    EditorState,
    Feedback,
    Hydrate,
    SaveEdit,
    StartEdit,
    ToggleAddForm,
    UpdateAddForm,
    UpdateEditingField,
)
from components.core.utils import parse_amount
from components.plan.repository import PlanRepository
from components.plan.schemas import BudgetPlanCategory
from components.reservation.schemas import ErrorCode


def validate_category(label: str, owner: str, allocated: float, utilized: float) -> List[str]:
    """Return the rule violations of a category payload, empty when valid."""
    errors = []
    if not label.strip():
        errors.append("Le nom de la catégorie est requis.")
    if not owner.strip():
        errors.append("Merci d'indiquer un responsable.")
    if not math.isfinite(allocated) or allocated <= 0:
        errors.append("Le montant alloué doit être supérieur à 0.")
    if not math.isfinite(utilized) or utilized < 0:
        errors.append("Le montant utilisé doit être positif.")
    if math.isfinite(allocated) and math.isfinite(utilized) and utilized > allocated:
        errors.append("Le montant utilisé ne peut pas dépasser l'allocation.")
    return errors


def _utilized_amount(text: str) -> float:
    # An empty utilized field means nothing spent yet
    return 0.0 if text.strip() == "" else parse_amount(text)


def _sanitize_notes(text: str) -> Optional[str]:
    return text.strip() or None


def _to_draft(category: BudgetPlanCategory) -> EditingDraft:
    return EditingDraft(
        id=category.id,
        label=category.label,
        owner=category.owner,
        allocated=_plain_number(category.allocated),
        utilized=_plain_number(category.utilized),
        notes=category.notes or "",
    )


def _plain_number(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else str(amount)


def _error(state: EditorState, errors: List[str]) -> EditorState:
    feedback = Feedback(type="error", message=" ".join(errors), error=ErrorCode.VALIDATION_FAILED)
    return state.model_copy(update={"feedback": feedback})


def _add_category(state: EditorState, action: AddCategory) -> EditorState:
    form = state.add_form
    allocated = parse_amount(form.allocated)
    utilized = _utilized_amount(form.utilized)
    errors = validate_category(form.label, form.owner, allocated, utilized)
    if errors:
        return _error(state, errors)

    category = BudgetPlanCategory(
        id=action.category_id or f"cat-{uuid.uuid4().hex[:12]}",
        label=form.label.strip(),
        owner=form.owner.strip(),
        allocated=allocated,
        utilized=utilized,
        reserved=0,
        notes=_sanitize_notes(form.notes),
    )
    return state.model_copy(
        update={
            "categories": state.categories + [category],
            "add_form": AddForm(),
            "show_add_form": False,
            "feedback": Feedback(type="success", message="Ligne budgétaire ajoutée."),
        }
    )


def _save_edit(state: EditorState) -> EditorState:
    draft = state.editing_draft
    if draft is None:
        return state

    allocated = parse_amount(draft.allocated)
    utilized = _utilized_amount(draft.utilized)
    errors = validate_category(draft.label, draft.owner, allocated, utilized)
    if errors:
        return _error(state, errors)

    categories = []
    for category in state.categories:
        if category.id == draft.id:
            category = BudgetPlanCategory(
                id=draft.id,
                label=draft.label.strip(),
                owner=draft.owner.strip(),
                allocated=allocated,
                utilized=utilized,
                reserved=category.reserved,
                notes=_sanitize_notes(draft.notes),
            )
        categories.append(category)

    return state.model_copy(
        update={
            "categories": categories,
            "editing_draft": None,
            "feedback": Feedback(type="success", message="Ligne mise à jour."),
        }
    )


def reduce(state: EditorState, action: EditorAction) -> EditorState:
    """Apply one editor action and return the next state."""
    if isinstance(action, Hydrate):
        return EditorState(
            plan_id=action.plan_id,
            categories=[category.model_copy(deep=True) for category in action.categories],
        )

    if isinstance(action, ToggleAddForm):
        show = not state.show_add_form if action.open is None else action.open
        return state.model_copy(
            update={
                "show_add_form": show,
                "add_form": AddForm() if action.open is False else state.add_form,
                "feedback": None,
            }
        )

    if isinstance(action, UpdateAddForm):
        add_form = state.add_form.model_copy(update={action.field: action.value})
        return state.model_copy(update={"add_form": add_form})

    if isinstance(action, AddCategory):
        return _add_category(state, action)

    if isinstance(action, StartEdit):
        target = next((c for c in state.categories if c.id == action.category_id), None)
        if target is None:
            return state
        return state.model_copy(update={"editing_draft": _to_draft(target), "feedback": None})

    if isinstance(action, CancelEdit):
        return state.model_copy(update={"editing_draft": None})

    if isinstance(action, UpdateEditingField):
        if state.editing_draft is None:
            return state
        draft = state.editing_draft.model_copy(update={action.field: action.value})
        return state.model_copy(update={"editing_draft": draft})

    if isinstance(action, SaveEdit):
        return _save_edit(state)

    if isinstance(action, DeleteCategory):
        # Linked reservations are neither checked nor removed
        draft = state.editing_draft
        if draft is not None and draft.id == action.category_id:
            draft = None
        return state.model_copy(
            update={
                "categories": [c for c in state.categories if c.id != action.category_id],
                "editing_draft": draft,
                "feedback": Feedback(type="success", message="Ligne supprimée."),
            }
        )

    if isinstance(action, ClearFeedback):
        return state.model_copy(update={"feedback": None})

    return state


def initial_state(plan_id: str, plans: PlanRepository) -> EditorState:
    """Editor state hydrated with a working copy of the plan's categories."""
    return reduce(
        EditorState(),
        Hydrate(plan_id=plan_id, categories=plans.editable_categories(plan_id)),
    )
