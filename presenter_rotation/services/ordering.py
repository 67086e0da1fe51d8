# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Presentation order maintenance — pure computation, no side effects.

Every function takes a sequence of frozen ``Member`` models and returns a
NEW list sorted by position. ``remove``, ``swap`` and ``move`` keep
positions a dense 0..N-1 sequence; ``bulk_reposition`` is the primitive
they share and leaves global contiguity to its caller.
"""

import uuid
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Sequence, Union

from presenter_rotation.core.errors import (
    MinimumMembersError,
    NotFoundError,
    ValidationError,
)
from presenter_rotation.models.domain import Member

MIN_MEMBERS = 2
MAX_NAME_LENGTH = 255

Assignments = Union[Mapping[str, int], Iterable[Any]]


def sort_by_position(members: Iterable[Member]) -> list[Member]:
    return sorted(members, key=lambda m: m.position)


def is_contiguous(members: Sequence[Member]) -> bool:
    """True when positions are exactly 0..N-1 with no gaps or duplicates."""
    return sorted(m.position for m in members) == list(range(len(members)))


def renumber(members: Iterable[Member]) -> list[Member]:
    """Re-derive dense positions from the current order."""
    return [
        m if m.position == index else m.model_copy(update={"position": index})
        for index, m in enumerate(sort_by_position(members))
    ]


def _find(members: Sequence[Member], member_id: str) -> Member:
    for member in members:
        if member.id == member_id:
            return member
    raise NotFoundError(f"Member '{member_id}' not found")


def _check_position(position: Any) -> int:
    if isinstance(position, bool) or not isinstance(position, int) or position < 0:
        raise ValidationError(
            f"position must be a non-negative integer, got {position!r}"
        )
    return position


def _pairs(assignments: Assignments) -> list[tuple[str, Any]]:
    if isinstance(assignments, Mapping):
        return list(assignments.items())
    pairs: list[tuple[str, Any]] = []
    for item in assignments:
        if isinstance(item, Mapping):
            if "id" not in item or "position" not in item:
                raise ValidationError("Each assignment needs an 'id' and a 'position'")
            pairs.append((item["id"], item["position"]))
        else:
            member_id, position = item
            pairs.append((member_id, position))
    return pairs


def bulk_reposition(members: Sequence[Member], assignments: Assignments) -> list[Member]:
    """
    Apply a batch of (id, new_position) pairs, all-or-nothing: every pair is
    checked before any member is copied, so a bad pair yields an error and
    no partial result.
    """
    known = {m.id for m in members}
    updates: dict[str, int] = {}
    for member_id, position in _pairs(assignments):
        if member_id not in known:
            raise NotFoundError(f"Member '{member_id}' not found")
        updates[member_id] = _check_position(position)

    return sort_by_position(
        m.model_copy(update={"position": updates[m.id]})
        if m.id in updates and updates[m.id] != m.position
        else m
        for m in members
    )


def append(
    members: Sequence[Member],
    name: str,
    member_id: Optional[str] = None,
    team_id: Optional[str] = None,
) -> list[Member]:
    """Add ``name`` at the end of the rotation (max position + 1)."""
    name = name.strip() if isinstance(name, str) else ""
    if not name:
        raise ValidationError("Member name must not be blank")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Member name exceeds {MAX_NAME_LENGTH} characters")

    if team_id is None and members:
        team_id = members[0].team_id
    position = max((m.position for m in members), default=-1) + 1
    new_member = Member(
        id=member_id or str(uuid.uuid4()),
        name=name,
        position=position,
        team_id=team_id,
    )
    return sort_by_position([*members, new_member])


def remove(members: Sequence[Member], target_id: str) -> list[Member]:
    """Drop ``target_id`` and compact later positions down by one."""
    _find(members, target_id)
    if len(members) - 1 < MIN_MEMBERS:
        raise MinimumMembersError(
            f"Cannot remove member: a team needs at least {MIN_MEMBERS} members"
        )
    survivors = [m for m in sort_by_position(members) if m.id != target_id]
    return bulk_reposition(
        survivors, [(m.id, index) for index, m in enumerate(survivors)]
    )


def swap(members: Sequence[Member], id_a: str, id_b: str) -> list[Member]:
    """Exchange the positions of two members; everyone else stays put."""
    first = _find(members, id_a)
    second = _find(members, id_b)
    return bulk_reposition(
        members, [(first.id, second.position), (second.id, first.position)]
    )


def move(members: Sequence[Member], member_id: str, new_position: int) -> list[Member]:
    """Move one member to ``new_position``, shifting the members in between."""
    ordered = sort_by_position(members)
    target = _find(ordered, member_id)
    _check_position(new_position)
    if new_position >= len(ordered):
        raise ValidationError(
            f"position {new_position} is out of range 0-{len(ordered) - 1}"
        )
    reordered = [m for m in ordered if m.id != member_id]
    reordered.insert(new_position, target)
    return bulk_reposition(
        members, [(m.id, index) for index, m in enumerate(reordered)]
    )


def position_changes(
    before: Sequence[Member], after: Sequence[Member]
) -> list[dict[str, Any]]:
    """The explicit id+position batch needed to turn ``before`` into ``after``."""
    previous = {m.id: m.position for m in before}
    return [
        {"id": m.id, "position": m.position}
        for m in after
        if previous.get(m.id) != m.position
    ]
