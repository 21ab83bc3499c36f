from enum import Enum
from typing import List, Optional, Union

from .assembly import assemble
from .logger import get_logger
from .models import Decomposition, Part
from .reconcile import reconcile
from .schema import PartKey, is_part_key, ordered_keys

log = get_logger(__name__)


class SessionState(str, Enum):
    EMPTY = "empty"
    SEEDED = "seeded"
    EDITED = "edited"
    CONFIRMED = "confirmed"


class SessionStateError(RuntimeError):
    def __init__(self, operation: str, state: SessionState):
        super().__init__(f"cannot {operation} while session is {state.value}")
        self.operation = operation
        self.state = state


class EditSession:
    """User edits layered over the last accepted decomposition.

    A new decomposition always wipes pending edits. Analyses are tagged with
    ids from ``begin_analysis`` so that a response for an older request
    cannot overwrite the result of a newer one.
    """

    def __init__(self) -> None:
        self.state = SessionState.EMPTY
        self.parts: List[Part] = []
        self.decomposition: Optional[Decomposition] = None
        self.confirmed: Optional[str] = None
        self.picker_for: Optional[PartKey] = None
        self._latest_request_id = 0

    @property
    def hint(self) -> Optional[str]:
        if self.decomposition is None:
            return None
        return self.decomposition.assembled_prompt_hint

    def begin_analysis(self) -> int:
        self._latest_request_id += 1
        return self._latest_request_id

    def on_new_decomposition(self, decomposition: Decomposition, request_id: Optional[int] = None) -> bool:
        if request_id is not None and request_id != self._latest_request_id:
            log.debug("Discarding stale decomposition %s (latest %s)", request_id, self._latest_request_id)
            return False
        self.decomposition = decomposition
        self._seed()
        return True

    def reset(self) -> None:
        if self.decomposition is None:
            raise SessionStateError("reset", self.state)
        self._seed()

    def set_part_text(self, key: str, text: str) -> None:
        part = self._part(key, "edit a part")
        part.text = text
        self.state = SessionState.EDITED

    def pick_suggestion(self, key: str, choice: Union[int, str]) -> str:
        part = self._part(key, "pick a suggestion")
        if isinstance(choice, int):
            if not 0 <= choice < len(part.suggestions):
                raise ValueError(f"no suggestion #{choice} for {key!r}")
            choice = part.suggestions[choice]
        self.set_part_text(key, choice)
        self.picker_for = None
        return choice

    def toggle_suggestions(self, key: str) -> Optional[PartKey]:
        part = self._part(key, "open suggestions")
        self.picker_for = None if self.picker_for == part.key else part.key
        return self.picker_for

    def confirm(self) -> str:
        if self.state is SessionState.EMPTY:
            raise SessionStateError("assemble", self.state)
        self.confirmed = assemble(self.parts)
        self.state = SessionState.CONFIRMED
        return self.confirmed

    def _seed(self) -> None:
        self.parts = [part.model_copy(deep=True) for part in reconcile(self.decomposition)]
        self.confirmed = None
        self.picker_for = None
        self.state = SessionState.SEEDED
        log.debug("Session seeded from %s decomposition", self.decomposition.source)

    def _part(self, key: str, operation: str) -> Part:
        if self.state is SessionState.EMPTY:
            raise SessionStateError(operation, self.state)
        if not is_part_key(key):
            raise ValueError(f"unknown part key {key!r}; expected one of {', '.join(ordered_keys())}")
        return next(part for part in self.parts if part.key == key)
