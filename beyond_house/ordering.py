"""Drag-and-drop ordering for display_order lists."""
from sqlalchemy.exc import SQLAlchemyError

from .models import db


def move_item(items, old_index, new_index):
    moved = list(items)
    if not moved:
        return moved
    item = moved.pop(old_index)
    moved.insert(new_index, item)
    return moved


def reorder_by_drop(items, source_id, target_id):
    """Return the list after dropping the row ``source_id`` onto ``target_id``.

    Dropping a row on itself, or referencing an id that is not in the list,
    leaves the order untouched.
    """
    ids = [item.id for item in items]
    if source_id == target_id or source_id not in ids or target_id not in ids:
        return list(items)
    return move_item(items, ids.index(source_id), ids.index(target_id))


def reorder_by_ids(items, ordered_ids):
    """Apply a complete client-side order; ids must match the list exactly."""
    by_id = {item.id: item for item in items}
    if len(ordered_ids) != len(by_id) or set(ordered_ids) != set(by_id):
        raise ValueError('Order must list every item exactly once.')
    return [by_id[item_id] for item_id in ordered_ids]


def changed_positions(items):
    return [(item, index) for index, item in enumerate(items) if item.display_order != index]


def persist_order(items):
    """Write sequential display_order values for rows whose position changed.

    All writes share one transaction so a failure leaves the stored order as
    it was. Returns the number of rows updated.
    """
    changes = changed_positions(items)
    if not changes:
        return 0
    for item, index in changes:
        item.display_order = index
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise
    return len(changes)
