"""Local mirror of the remote medications collection.

`MedicationStore` is the single place where the client-side collection lives.
Presentation code (the CLI, tests, any future UI) reads `store.records` and
triggers operations; the store calls the repository, reconciles the local
collection with the server's answer and turns every failure into a `Notice`.

The collection is an immutable tuple that is replaced on every change, so a
reader never observes a half-applied update. Ids are unique in the collection:
a server list that repeats an id keeps its first occurrence. Operations are
not serialized against each other: responses are applied in arrival order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable

from core.domain.errors import ApiError, describe_failure
from core.domain.models import Medication, MedicationDraft
from core.interfaces.repository import MedicationRepository

logger = logging.getLogger(__name__)


def _unique_by_id(records: Iterable[Medication]) -> tuple[Medication, ...]:
    """Keep the first record for each id; later duplicates are dropped."""

    seen: set[str] = set()
    unique: list[Medication] = []
    for record in records:
        if record.id in seen:
            logger.warning("server list repeats id=%s; keeping the first occurrence", record.id)
            continue
        seen.add(record.id)
        unique.append(record)
    return tuple(unique)


class StoreState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A transient user-facing notification (toast)."""

    level: NoticeLevel
    title: str
    message: str = ""


@dataclass
class StoreHooks:
    """Optional callbacks for UI layers."""

    notify: Callable[[Notice], None] | None = None


@dataclass
class MedicationStore:
    repository: MedicationRepository
    hooks: StoreHooks = field(default_factory=StoreHooks)
    records: tuple[Medication, ...] = ()
    state: StoreState = StoreState.IDLE
    loading: bool = False
    notices: list[Notice] = field(default_factory=list)
    _announced_load: bool = field(default=False, repr=False)

    def _emit(self, notice: Notice) -> None:
        self.notices.append(notice)
        if self.hooks.notify:
            self.hooks.notify(notice)

    def _fail(self, action: str, exc: ApiError) -> None:
        logger.warning("%s failed (%s): %s", action, exc.kind.value, exc)
        self._emit(Notice(NoticeLevel.ERROR, "Error", describe_failure(action, exc)))

    def get(self, medication_id: str) -> Medication | None:
        return next((m for m in self.records if m.id == medication_id), None)

    async def load(self) -> bool:
        """Replace the collection with the server's list.

        The "loaded" notice fires only the first time a load succeeds.
        """

        self.loading = True
        if self.state is not StoreState.READY:
            self.state = StoreState.LOADING
        try:
            records = await self.repository.list()
        except ApiError as exc:
            if self.state is StoreState.LOADING:
                self.state = StoreState.ERROR
            self._fail("load medications", exc)
            return False
        finally:
            self.loading = False

        self.records = _unique_by_id(records)
        self.state = StoreState.READY
        logger.debug("loaded %d medications", len(self.records))
        if not self._announced_load:
            self._announced_load = True
            self._emit(Notice(NoticeLevel.SUCCESS, "Success", "Medications loaded successfully"))
        return True

    refresh = load

    async def add(self, draft: MedicationDraft) -> Medication | None:
        try:
            created = await self.repository.create(draft)
        except ApiError as exc:
            self._fail("add medication", exc)
            return None

        if self.get(created.id) is not None:
            logger.warning("server returned an existing id=%s on create; replacing", created.id)
            self.records = tuple(created if m.id == created.id else m for m in self.records)
        else:
            self.records = (*self.records, created)
        self._emit(Notice(NoticeLevel.SUCCESS, "Success", "Medication added successfully"))
        return created

    async def edit(self, medication_id: str, medication: Medication) -> Medication | None:
        if medication.id != medication_id:
            medication = medication.model_copy(update={"id": medication_id})
        try:
            updated = await self.repository.update(medication_id, medication)
        except ApiError as exc:
            self._fail("update medication", exc)
            return None

        if updated.id != medication_id:
            logger.warning("server changed id %s -> %s on update; keeping %s", medication_id, updated.id, medication_id)
            updated = updated.model_copy(update={"id": medication_id})
        if self.get(medication_id) is None:
            logger.debug("updated id=%s is not in the local collection", medication_id)
        self.records = tuple(updated if m.id == medication_id else m for m in self.records)
        self._emit(Notice(NoticeLevel.SUCCESS, "Success", "Medication updated successfully"))
        return updated

    async def remove(self, medication_id: str) -> bool:
        try:
            await self.repository.delete(medication_id)
        except ApiError as exc:
            self._fail("delete medication", exc)
            return False

        self.records = tuple(m for m in self.records if m.id != medication_id)
        self._emit(Notice(NoticeLevel.SUCCESS, "Success", "Medication deleted successfully"))
        return True
