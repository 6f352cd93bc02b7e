# admin/views/dialog_state.py
"""
Dialog state machine shared by the measure and product dialogs.

    Closed --open_create/open_edit--> Open --begin_submit--> Submitting
    Submitting --finish_success--> Closed
    Submitting --finish_failure--> Open(error)
    Open --close--> Closed
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

logger = logging.getLogger(__name__)

SAVE_ERROR = "Something went wrong while saving. Please try again."


class DialogMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class InvalidTransition(Exception):
    """Raised when a transition is not allowed from the current state."""
    pass


class SaveFailed(Exception):
    """Raised by a save callback when the mutation did not succeed."""
    pass


@dataclass(frozen=True)
class Closed:
    pass


@dataclass(frozen=True)
class Open:
    mode: DialogMode
    entity: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class Submitting:
    mode: DialogMode
    entity: Optional[Dict[str, Any]] = None


DialogState = Union[Closed, Open, Submitting]

CLOSED = Closed()


def _require(state: DialogState, *allowed: type, action: str) -> None:
    if not isinstance(state, allowed):
        raise InvalidTransition(f"Cannot {action} from {type(state).__name__}")


def open_create(state: DialogState) -> Open:
    _require(state, Closed, Open, action="open dialog")
    return Open(DialogMode.CREATE)


def open_edit(state: DialogState, entity: Dict[str, Any]) -> Open:
    _require(state, Closed, Open, action="open dialog")
    return Open(DialogMode.EDIT, entity=entity)


def begin_submit(state: DialogState) -> Submitting:
    _require(state, Open, action="submit")
    return Submitting(state.mode, state.entity)


def finish_success(state: DialogState) -> Closed:
    _require(state, Submitting, action="finish submission")
    return CLOSED


def finish_failure(state: DialogState, error: str) -> Open:
    _require(state, Submitting, action="finish submission")
    return Open(state.mode, state.entity, error=error)


def close(state: DialogState) -> Closed:
    _require(state, Closed, Open, action="close dialog")
    return CLOSED


def is_open(state: DialogState) -> bool:
    return isinstance(state, (Open, Submitting))


def run_submission(
    state: DialogState,
    save: Callable[[], Any],
    publish: Optional[Callable[[DialogState], None]] = None,
) -> DialogState:
    """
    Drive one submission through the state machine.

    Args:
        state: Current state, must be Open
        save: Callback performing the mutation; raises SaveFailed on failure
        publish: Optional callback receiving the Submitting state before
            save runs (e.g. to store it in session state)

    Returns:
        Closed on success, Open carrying the error message on failure.
        Unexpected errors from save are logged and reported as SAVE_ERROR.
    """
    submitting = begin_submit(state)
    if publish is not None:
        publish(submitting)
    try:
        save()
    except SaveFailed as e:
        return finish_failure(submitting, str(e))
    except Exception:
        logger.exception("Dialog save failed")
        return finish_failure(submitting, SAVE_ERROR)
    return finish_success(submitting)
