"""
Table-level change notification for live queries.

Repositories expose ``observe_*`` methods that yield a fresh snapshot every
time a committed write touches one of the tables the query reads. Writes are
tracked through session events on the bound session factory, so ORM unit of
work flushes, bulk UPDATE/DELETE statements and rows removed by
``ON DELETE CASCADE`` are all seen.
"""
from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from functools import cached_property
from typing import AsyncIterator, Callable, Iterable, TypeVar

from sqlalchemy import MetaData, event, inspect
from sqlalchemy.orm import ORMExecuteState, Session, sessionmaker

log = logging.getLogger(__name__)

T = TypeVar("T")

OBSERVER_KEY = "table_observer"
_PENDING_KEY = "changed_tables"


class Subscription:
    """Interest of one live query in a set of tables."""

    def __init__(self, tables: frozenset[str], loop: asyncio.AbstractEventLoop):
        self.tables = tables
        self.loop = loop
        self._dirty = asyncio.Event()

    def invalidate(self) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self.loop:
            self._dirty.set()
        elif not self.loop.is_closed():
            # write committed from another thread (e.g. a sync HTTP handler)
            self.loop.call_soon_threadsafe(self._dirty.set)

    async def wait(self) -> None:
        await self._dirty.wait()
        self._dirty.clear()


class TableObserver:
    def __init__(self, metadata: MetaData):
        self.metadata = metadata
        self._subscriptions: set[Subscription] = set()

    @cached_property
    def _cascades(self) -> dict[str, set[str]]:
        # parent table -> child tables removed with it
        children: dict[str, set[str]] = defaultdict(set)
        for table in self.metadata.tables.values():
            for fk in table.foreign_keys:
                if (fk.ondelete or "").upper() == "CASCADE":
                    children[fk.column.table.name].add(table.name)
        return children

    def bind(self, factory: sessionmaker) -> None:
        event.listen(factory, "after_flush", self._after_flush)
        event.listen(factory, "do_orm_execute", self._do_orm_execute)
        event.listen(factory, "after_commit", self._after_commit)
        event.listen(factory, "after_rollback", self._after_rollback)

    # SESSION HOOKS
    def _after_flush(self, session: Session, flush_context) -> None:
        touched = session.info.setdefault(_PENDING_KEY, set())
        for obj in (*session.new, *session.dirty, *session.deleted):
            touched.add(inspect(obj).mapper.local_table.name)

    def _do_orm_execute(self, state: ORMExecuteState) -> None:
        if state.is_select or state.bind_mapper is None:
            return
        touched = state.session.info.setdefault(_PENDING_KEY, set())
        touched.add(state.bind_mapper.local_table.name)

    def _after_commit(self, session: Session) -> None:
        tables = session.info.pop(_PENDING_KEY, None)
        if tables:
            self.notify(tables)

    def _after_rollback(self, session: Session) -> None:
        session.info.pop(_PENDING_KEY, None)

    # NOTIFY / SUBSCRIBE
    def expand(self, tables: Iterable[str]) -> set[str]:
        """Add every table reachable through cascading foreign keys."""
        seen = set(tables)
        stack = list(seen)
        while stack:
            for child in self._cascades.get(stack.pop(), ()):
                if child not in seen:
                    seen.add(child)
                    stack.append(child)
        return seen

    def notify(self, tables: Iterable[str]) -> None:
        changed = self.expand(tables)
        log.debug("tables changed: %s", ", ".join(sorted(changed)))
        for sub in list(self._subscriptions):
            if sub.tables & changed:
                sub.invalidate()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    async def observe(self, query: Callable[[], T], *tables: str) -> AsyncIterator[T]:
        """Yield ``query()`` now and again after each relevant commit.

        Wakeups are conflated: several commits between two reads produce a
        single fresh snapshot.
        """
        sub = Subscription(frozenset(tables), asyncio.get_running_loop())
        self._subscriptions.add(sub)
        try:
            while True:
                yield query()
                await sub.wait()
        finally:
            self._subscriptions.discard(sub)


def observer_for(session: Session) -> TableObserver:
    try:
        return session.info[OBSERVER_KEY]
    except KeyError:
        raise RuntimeError("session was not created by a live-query session factory") from None
