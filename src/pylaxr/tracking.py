"""Reporting of tracked-entity changes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from pylaxr.models.tracking import ChangeKind, TrackedEntity, TrackingChange

_logger = logging.getLogger(__name__)

ChangeSink = Callable[[TrackingChange], None]


class ChangeReporter:
    """Emit one :class:`TrackingChange` per added, updated and removed entity.

    Each change is logged at INFO and handed to *sink* when one is given.
    The reporter keeps nothing between calls.
    """

    def __init__(
        self,
        *,
        sink: ChangeSink | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._sink = sink
        self._logger = logger or _logger

    def report(
        self,
        added: Iterable[TrackedEntity] = (),
        updated: Iterable[TrackedEntity] = (),
        removed: Iterable[TrackedEntity] = (),
    ) -> list[TrackingChange]:
        changes: list[TrackingChange] = []
        for entity in added:
            changes.append(self._emit(ChangeKind.ADDED, entity))
        for entity in updated:
            changes.append(self._emit(ChangeKind.UPDATED, entity))
        for entity in removed:
            changes.append(self._emit(ChangeKind.REMOVED, entity))
        return changes

    # Tracking subsystem callback.
    on_tracking_changed = report

    def _emit(self, kind: ChangeKind, entity: TrackedEntity) -> TrackingChange:
        change = TrackingChange(
            kind=kind,
            entity_id=entity.entity_id,
            name=entity.display_name,
            tracking_state=None if kind == ChangeKind.REMOVED else entity.tracking_state,
        )
        self._logger.info("%s", change.message)
        if self._sink is not None:
            try:
                self._sink(change)
            except Exception:
                self._logger.warning("Tracking change sink failed for %s", change.entity_id, exc_info=True)
        return change
