from types import SimpleNamespace

import pytest
from sqlalchemy.exc import SQLAlchemyError

from beyond_house import ordering
from beyond_house.models import PortfolioItem, Service, db


def rows(*ids):
    return [SimpleNamespace(id=item_id, display_order=index) for index, item_id in enumerate(ids)]


def ordered_ids(model):
    return [row.id for row in model.query.order_by(model.display_order.asc(), model.id.asc()).all()]


def test_move_item_returns_new_list():
    items = ["a", "b", "c", "d"]
    assert ordering.move_item(items, 0, 2) == ["b", "c", "a", "d"]
    assert ordering.move_item(items, 3, 0) == ["d", "a", "b", "c"]
    assert items == ["a", "b", "c", "d"]
    assert ordering.move_item([], 0, 0) == []


def test_reorder_by_drop_is_a_permutation():
    items = rows(10, 11, 12, 13)
    moved = ordering.reorder_by_drop(items, 10, 12)
    assert [item.id for item in moved] == [11, 12, 10, 13]
    assert sorted(item.id for item in moved) == [10, 11, 12, 13]


def test_reorder_by_drop_on_itself_or_unknown_id_is_noop():
    items = rows(1, 2, 3)
    assert [item.id for item in ordering.reorder_by_drop(items, 2, 2)] == [1, 2, 3]
    assert [item.id for item in ordering.reorder_by_drop(items, 2, 99)] == [1, 2, 3]


def test_reorder_by_ids_requires_exact_id_set():
    items = rows(1, 2, 3)
    assert [item.id for item in ordering.reorder_by_ids(items, [3, 1, 2])] == [3, 1, 2]
    with pytest.raises(ValueError):
        ordering.reorder_by_ids(items, [3, 1])
    with pytest.raises(ValueError):
        ordering.reorder_by_ids(items, [3, 1, 1])


def test_changed_positions_only_reports_moved_rows():
    moved = ordering.reorder_by_drop(rows(1, 2, 3, 4), 2, 3)
    assert [(item.id, index) for item, index in ordering.changed_positions(moved)] == [(3, 1), (2, 2)]


def test_reorder_endpoint_persists_minimal_diff(admin_client, admin_csrf, app):
    with app.app_context():
        before = ordered_ids(Service)
    assert len(before) == 4

    response = admin_client.post(
        "/admin/services/reorder",
        json={"source_id": before[0], "target_id": before[2]},
        headers={"X-CSRF-Token": admin_csrf},
    )
    assert response.status_code == 200
    payload = response.get_json()
    expected = [before[1], before[2], before[0], before[3]]
    assert payload == {"status": "ok", "order": expected, "changed": 3}

    with app.app_context():
        assert ordered_ids(Service) == expected
        orders = [row.display_order for row in Service.query.order_by(Service.display_order).all()]
        assert orders == [0, 1, 2, 3]

    public = admin_client.get("/services").get_data(as_text=True)
    positions = [public.index(f'id="{slug}"') for slug in ("cabinetry", "walls", "ceiling", "floors")]
    assert positions == sorted(positions)


def test_reorder_endpoint_same_position_is_noop(admin_client, admin_csrf, app):
    with app.app_context():
        before = ordered_ids(PortfolioItem)

    response = admin_client.post(
        "/admin/portfolio/reorder",
        json={"source_id": before[1], "target_id": before[1]},
        headers={"X-CSRF-Token": admin_csrf},
    )
    assert response.status_code == 200
    assert response.get_json()["changed"] == 0
    with app.app_context():
        assert ordered_ids(PortfolioItem) == before


def test_reorder_endpoint_accepts_full_order(admin_client, admin_csrf, app):
    with app.app_context():
        before = ordered_ids(PortfolioItem)

    response = admin_client.post(
        "/admin/portfolio/reorder",
        json={"order": list(reversed(before))},
        headers={"X-CSRF-Token": admin_csrf},
    )
    assert response.status_code == 200
    with app.app_context():
        assert ordered_ids(PortfolioItem) == list(reversed(before))


def test_reorder_endpoint_rejects_bad_requests(admin_client, admin_csrf, app):
    with app.app_context():
        before = ordered_ids(Service)

    headers = {"X-CSRF-Token": admin_csrf}
    assert admin_client.post("/admin/services/reorder", json={}, headers=headers).status_code == 400
    assert admin_client.post("/admin/services/reorder", json={"order": [before[0]]}, headers=headers).status_code == 400
    unknown = admin_client.post(
        "/admin/services/reorder", json={"source_id": before[0], "target_id": 9999}, headers=headers
    )
    assert unknown.status_code == 404
    with app.app_context():
        assert ordered_ids(Service) == before


def test_reorder_failure_keeps_previous_order(admin_client, admin_csrf, app, monkeypatch):
    with app.app_context():
        before = ordered_ids(Service)

    class FailingSession:
        def commit(self):
            raise SQLAlchemyError("database is locked")

        def rollback(self):
            db.session.rollback()

    monkeypatch.setattr(ordering, "db", SimpleNamespace(session=FailingSession()))
    response = admin_client.post(
        "/admin/services/reorder",
        json={"source_id": before[0], "target_id": before[3]},
        headers={"X-CSRF-Token": admin_csrf},
    )
    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to save the new order."}
    with app.app_context():
        assert ordered_ids(Service) == before
