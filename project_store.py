from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Tuple

from timeline_models import Project

logger = logging.getLogger(__name__)

Snapshot = Tuple[Project, ...]
Subscriber = Callable[[Snapshot], None]


class ProjectStore:
    """
    Ordered, in-memory project collection.

    Order is insertion order; it drives both the list view and the timeline
    row index. Every structural change is pushed synchronously to subscribers
    as a fresh snapshot, in the order they subscribed.
    """

    def __init__(self, projects: Iterable[Project] = ()) -> None:
        self._projects: List[Project] = []
        self._subscribers: List[Subscriber] = []
        for p in projects:
            self._check_unique(p)
            self._projects.append(p)

    @property
    def projects(self) -> Snapshot:
        return tuple(self._projects)

    def __len__(self) -> int:
        return len(self._projects)

    def __iter__(self) -> Iterator[Project]:
        return iter(self.projects)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback``; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass  # already unsubscribed

        return unsubscribe

    def add(self, project: Project) -> None:
        self._check_unique(project)
        self._projects.append(project)
        logger.debug("Added project %s (%r)", project.id, project.description)
        self._notify()

    def extend(self, projects: Iterable[Project]) -> None:
        incoming = list(projects)
        seen = {p.id for p in self._projects}
        for p in incoming:
            if p.id in seen:
                raise ValueError(f"Duplicate project id: {p.id}")
            seen.add(p.id)
        self._projects.extend(incoming)
        logger.debug("Added %d project(s)", len(incoming))
        self._notify()

    def replace(self, projects: Iterable[Project]) -> None:
        """Swap the whole collection; the old contents are dropped."""
        incoming = list(projects)
        ids = [p.id for p in incoming]
        if len(set(ids)) != len(ids):
            raise ValueError("Duplicate project id in replacement collection.")
        self._projects = incoming
        logger.debug("Replaced collection with %d project(s)", len(incoming))
        self._notify()

    def _check_unique(self, project: Project) -> None:
        if any(p.id == project.id for p in self._projects):
            raise ValueError(f"Duplicate project id: {project.id}")

    def _notify(self) -> None:
        snapshot = self.projects
        # Copy so a subscriber may unsubscribe while being notified.
        for callback in list(self._subscribers):
            callback(snapshot)
