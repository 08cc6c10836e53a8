"""
Optimistic state: apply a speculative transition, then commit or roll back.

``Optimistic`` keeps the pre-transition snapshot until the authoritative write
settles. ``CommentFeed`` builds the comment list behaviour on top of it.

Nothing server-side imports this module. It is the client-side model of the
comment feed: a front end (or any API consumer) drives ``CommentFeed`` with
writers that call ``POST /api/species/{id}/comments`` and
``DELETE /api/comments/{id}``, whose responses are the authoritative state the
optimistic entries are reconciled against.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

from db.sqltypes import new_uuid, utcnow

T = TypeVar("T")


class Optimistic(Generic[T]):
    def __init__(self, state: T):
        self.state = state
        self._snapshot: Optional[T] = None
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def apply(self, transition: Callable[[T], T]) -> T:
        if self._pending:
            raise RuntimeError("a transition is already pending")
        self._snapshot = self.state
        self.state = transition(self.state)
        self._pending = True
        return self.state

    def commit(self, transition: Optional[Callable[[T], T]] = None) -> T:
        if not self._pending:
            raise RuntimeError("nothing to commit")
        if transition is not None:
            self.state = transition(self.state)
        self._snapshot = None
        self._pending = False
        return self.state

    def rollback(self) -> T:
        if not self._pending:
            raise RuntimeError("nothing to roll back")
        self.state = self._snapshot
        self._snapshot = None
        self._pending = False
        return self.state


@dataclass
class FeedComment:
    id: str
    species_id: int
    author: str
    content: str
    created_at: datetime = field(default_factory=utcnow)
    author_name: Optional[str] = None


class CommentFeed:
    """Newest-first comment list for one species as the poster sees it."""

    def __init__(self, species_id: int, current_user: str, items: Iterable[FeedComment] = ()):
        self.species_id = species_id
        self.current_user = current_user
        self.error: Optional[str] = None
        self._state: Optimistic[List[FeedComment]] = Optimistic(list(items))

    @property
    def items(self) -> List[FeedComment]:
        return list(self._state.state)

    @property
    def busy(self) -> bool:
        return self._state.pending

    def post(self, content: str, writer: Callable[[str], FeedComment]) -> Optional[FeedComment]:
        """Show the comment at once, then persist it through ``writer``.

        On failure the temporary entry disappears and ``error`` says why.
        """
        text = (content or "").strip()
        if not text or self.busy:
            return None

        temp = FeedComment(
            id=new_uuid(),
            species_id=self.species_id,
            author=self.current_user,
            content=text,
            author_name="You",
        )
        self.error = None
        self._state.apply(lambda items: [temp] + items)

        try:
            saved = writer(text)
        except Exception as e:
            self._state.rollback()
            self.error = f"Failed to post comment: {e}"
            return None

        self._state.commit(lambda items: [saved] + [c for c in items if c.id != temp.id])
        return saved

    def remove(self, comment_id: str, deleter: Callable[[str], None]) -> bool:
        if self.busy:
            return False
        self.error = None
        self._state.apply(lambda items: [c for c in items if c.id != comment_id])
        try:
            deleter(comment_id)
        except Exception as e:
            self._state.rollback()
            self.error = f"Failed to delete: {e}"
            return False
        self._state.commit()
        return True
