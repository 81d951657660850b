"""
StackIt Backend: Question Query Layer
======================================

What:  Filters and sorts a question sequence by search text, selected tags
       and sort mode.
Why:   The home page list is a pure function of four inputs. Keeping it pure
       makes every ordering property testable without HTTP or storage.

Filter Semantics:
    text:  the lowercased query must be a substring of the title, the
           description or any tag. A blank (or whitespace-only) query keeps
           every question. The query itself is not trimmed.
    tags:  with a non-empty selection, keep questions that carry at least one
           selected tag (OR).
    Both filters apply (AND).

Sort Semantics:
    newest → created_at desc, votes → votes desc, activity → updated_at desc.
    Python's sort is stable, and `reverse=True` keeps ties in input order.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from stackit.schemas.entities import Question, SortMode, Tag

logger = logging.getLogger(__name__)

_SORT_KEYS: Dict[SortMode, Callable[[Question], object]] = {
    SortMode.NEWEST: lambda q: q.created_at,
    SortMode.VOTES: lambda q: q.votes,
    SortMode.ACTIVITY: lambda q: q.updated_at,
}


def matches_text(question: Question, query: str) -> bool:
    if not query.strip():
        return True
    needle = query.lower()
    return (
        needle in question.title.lower()
        or needle in question.description.lower()
        or any(needle in tag.lower() for tag in question.tags)
    )


def matches_tags(question: Question, selected_tags: Iterable[str]) -> bool:
    selected = set(selected_tags)
    if not selected:
        return True
    return any(tag in selected for tag in question.tags)


def filter_and_sort(
    questions: Sequence[Question],
    query: str = "",
    selected_tags: Iterable[str] = (),
    sort: SortMode = SortMode.NEWEST,
) -> List[Question]:
    """
    Return a new list of the questions that pass both filters, sorted by `sort`.

    The input sequence is never mutated.
    """
    selected = list(selected_tags)
    kept = [q for q in questions if matches_text(q, query) and matches_tags(q, selected)]
    return sorted(kept, key=_SORT_KEYS[sort], reverse=True)


class QuestionListView:
    """
    Reactive list view over the four filter inputs.

    Assigning an input marks the view stale only when the value actually
    changes. Reading `results` recomputes once per change and otherwise
    returns the cached list. `recomputations` counts the recomputations.
    """

    def __init__(
        self,
        questions: Sequence[Question] = (),
        query: str = "",
        selected_tags: Iterable[str] = (),
        sort: SortMode = SortMode.NEWEST,
    ):
        self._questions: List[Question] = list(questions)
        self._query = query
        self._selected_tags: List[str] = list(dict.fromkeys(selected_tags))
        self._sort = sort
        self._results: List[Question] = []
        self._stale = True
        self.recomputations = 0

    # ── Inputs ────────────────────────────────────────────────────────────

    @property
    def questions(self) -> List[Question]:
        return list(self._questions)

    @questions.setter
    def questions(self, value: Sequence[Question]) -> None:
        value = list(value)
        if value != self._questions:
            self._questions = value
            self._stale = True

    @property
    def query(self) -> str:
        return self._query

    @query.setter
    def query(self, value: str) -> None:
        if value != self._query:
            self._query = value
            self._stale = True

    @property
    def selected_tags(self) -> List[str]:
        return list(self._selected_tags)

    @selected_tags.setter
    def selected_tags(self, value: Iterable[str]) -> None:
        value = list(dict.fromkeys(value))
        if value != self._selected_tags:
            self._selected_tags = value
            self._stale = True

    @property
    def sort(self) -> SortMode:
        return self._sort

    @sort.setter
    def sort(self, value: SortMode) -> None:
        value = SortMode(value)
        if value != self._sort:
            self._sort = value
            self._stale = True

    def toggle_tag(self, name: str) -> None:
        """Select the tag if it is not selected, otherwise deselect it."""
        if name in self._selected_tags:
            self.selected_tags = [t for t in self._selected_tags if t != name]
        else:
            self.selected_tags = self._selected_tags + [name]

    def clear_tags(self) -> None:
        self.selected_tags = []

    # ── Output ────────────────────────────────────────────────────────────

    @property
    def results(self) -> List[Question]:
        if self._stale:
            self._results = filter_and_sort(
                self._questions, self._query, self._selected_tags, self._sort
            )
            self._stale = False
            self.recomputations += 1
            logger.debug(
                "Question list recomputed: %d of %d (query=%r tags=%s sort=%s)",
                len(self._results), len(self._questions),
                self._query, self._selected_tags, self._sort.value,
            )
        return list(self._results)


def popular_tags(tags: Iterable[Tag], limit: Optional[int] = None) -> List[Tag]:
    """Tags by questions_count desc, then name."""
    ordered = sorted(tags, key=lambda t: (-t.questions_count, t.name))
    return ordered if limit is None else ordered[:limit]
