import pytest

from inkstamp.core.annotations import (
    CircleOverlay,
    OverlayStore,
    RectOverlay,
    TextOverlay,
)


def test_add_assigns_fresh_unique_ids(store):
    first = store.add(0, RectOverlay(x=10, y=10, width=50, height=50))
    second = store.add(0, RectOverlay(x=10, y=10, width=50, height=50, id=first))

    assert first != second
    assert second > first
    assert [o.id for o in store.get(0)] == [first, second]


def test_add_rejects_negative_page(store):
    with pytest.raises(ValueError):
        store.add(-1, RectOverlay())


def test_add_enforces_minimum_size(store):
    overlay_id = store.add(0, RectOverlay(x=0, y=0, width=5, height=1))
    overlay = store.find(0, overlay_id)

    assert overlay.width == 20
    assert overlay.height == 20


def test_update_merges_fields(store):
    overlay_id = store.add(0, TextOverlay(x=5, y=5, content="a"))

    assert store.update(0, overlay_id, content="b", x=40)
    overlay = store.find(0, overlay_id)
    assert overlay.content == "b"
    assert overlay.x == 40
    assert overlay.y == 5


def test_update_missing_overlay_is_a_no_op(store):
    store.add(0, RectOverlay())
    before = store.snapshot()

    assert store.update(0, 9999, x=1) is False
    assert store.update(3, 9999, x=1) is False
    assert store.snapshot() == before


def test_update_rejects_unknown_fields_and_id(store):
    overlay_id = store.add(0, RectOverlay())

    with pytest.raises(AttributeError):
        store.update(0, overlay_id, radius=4)
    with pytest.raises(AttributeError):
        store.update(0, overlay_id, id=42)


def test_update_clamps_circle_radius(store):
    overlay_id = store.add(0, CircleOverlay(x=50, y=50, radius=30))
    store.update(0, overlay_id, radius=2)

    assert store.find(0, overlay_id).radius == 10


def test_remove(store):
    keep = store.add(0, RectOverlay())
    drop = store.add(0, RectOverlay())

    assert store.remove(0, drop)
    assert not store.remove(0, drop)
    assert [o.id for o in store.get(0)] == [keep]


def test_get_returns_a_copy_of_the_list(store):
    store.add(0, RectOverlay())
    overlays = store.get(0)
    overlays.clear()

    assert store.count(0) == 1
    assert store.get(7) == []


def test_index_of_reports_z_position(store):
    ids = [store.add(0, RectOverlay()) for _ in range(3)]

    assert [store.index_of(0, i) for i in ids] == [0, 1, 2]
    assert store.index_of(0, 12345) == -1


def test_clear_page_and_pages(store):
    store.add(2, RectOverlay())
    store.add(0, RectOverlay())
    store.add(0, RectOverlay())

    assert store.pages() == [0, 2]
    assert store.count() == 3
    assert store.clear_page(0)
    assert not store.clear_page(0)
    assert store.pages() == [2]

    store.clear()
    assert store.count() == 0


def test_snapshot_is_independent_of_later_edits(store):
    overlay_id = store.add(0, RectOverlay(x=1, y=1, width=30, height=30))
    state = store.snapshot()

    store.update(0, overlay_id, x=99)
    assert state[0][0].x == 1


def test_restore_copies_the_given_state(store):
    overlay_id = store.add(0, RectOverlay(x=1, y=1, width=30, height=30))
    state = store.snapshot()

    other = OverlayStore()
    other.restore(state)
    other.update(0, overlay_id, x=50)

    assert state[0][0].x == 1
    assert other.find(0, overlay_id).x == 50
