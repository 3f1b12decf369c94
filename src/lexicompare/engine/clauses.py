"""Clause-granularity comparison of two contract versions."""

from __future__ import annotations

from collections.abc import Sequence

from lexicompare.constants import (
    DEFAULT_CONTEXT_RADIUS,
    MAX_SIMILARITY,
    ClauseChangeKind,
)
from lexicompare.engine.differ import diff_words
from lexicompare.engine.severity import clause_risk
from lexicompare.engine.similarity import percent, similarity
from lexicompare.engine.value_objects import (
    Clause,
    ClauseChange,
    ClauseComparison,
)


def _risk_reason(
    clause: Clause, kind: ClauseChangeKind, score: int | None = None
) -> str:
    label = clause.section_name or clause.id
    if kind == ClauseChangeKind.MODIFIED and score is not None:
        return (
            f'Clause "{label}" was modified '
            f"({MAX_SIMILARITY - score}% change)"
        )
    return f'Clause "{label}" was {kind.value}'


def diff_clause_sets(
    before: Sequence[Clause],
    after: Sequence[Clause],
    *,
    context_radius: int = DEFAULT_CONTEXT_RADIUS,
) -> ClauseComparison:
    """Added, removed and modified clauses between two clause sets.

    Clauses are matched by id. Removals and modifications are listed
    in ``before`` order, followed by additions in ``after`` order.
    """
    before_by_id = {c.id: c for c in before}
    after_by_id = {c.id: c for c in after}
    changes: list[ClauseChange] = []

    for old in before:
        new = after_by_id.get(old.id)
        if new is None:
            changes.append(
                ClauseChange(
                    kind=ClauseChangeKind.REMOVED,
                    clause_id=old.id,
                    section_name=old.section_name,
                    category=old.category,
                    order=old.order,
                    old_text=old.text,
                    risk_level=clause_risk(
                        old.category,
                        ClauseChangeKind.REMOVED,
                        section_name=old.section_name,
                    ),
                    risk_reason=_risk_reason(old, ClauseChangeKind.REMOVED),
                )
            )
            continue
        if old.text == new.text:
            continue
        score = similarity(old.text, new.text)
        changes.append(
            ClauseChange(
                kind=ClauseChangeKind.MODIFIED,
                clause_id=old.id,
                section_name=old.section_name,
                category=old.category,
                order=new.order,
                old_text=old.text,
                new_text=new.text,
                similarity=score,
                diff=tuple(
                    diff_words(
                        old.text, new.text, context_radius=context_radius
                    )
                ),
                risk_level=clause_risk(
                    old.category,
                    ClauseChangeKind.MODIFIED,
                    score,
                    section_name=old.section_name,
                ),
                risk_reason=_risk_reason(
                    old, ClauseChangeKind.MODIFIED, score
                ),
            )
        )

    for new in after:
        if new.id in before_by_id:
            continue
        changes.append(
            ClauseChange(
                kind=ClauseChangeKind.ADDED,
                clause_id=new.id,
                section_name=new.section_name,
                category=new.category,
                order=new.order,
                new_text=new.text,
                risk_level=clause_risk(
                    new.category,
                    ClauseChangeKind.ADDED,
                    section_name=new.section_name,
                ),
                risk_reason=_risk_reason(new, ClauseChangeKind.ADDED),
            )
        )

    total = max(len(before), len(after))
    if total == 0:
        score = MAX_SIMILARITY
    else:
        # Goes negative when the changes outnumber the larger set.
        unchanged = total - len(changes)
        score = percent(unchanged, total)
    return ClauseComparison(similarity_score=score, changes=tuple(changes))
