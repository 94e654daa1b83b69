import pytest

from inkstamp.core.annotations import HistoryLog, OverlayStore, RectOverlay


def _state(*xs):
    store = OverlayStore()
    for x in xs:
        store.add(0, RectOverlay(x=x, y=0, width=30, height=30))
    return store.snapshot()


def _xs(state):
    return [o.x for o in state.get(0, [])]


def test_reset_starts_with_nothing_to_undo():
    log = HistoryLog()
    log.reset(_state())

    assert len(log) == 1
    assert log.position == 0
    assert not log.can_undo()
    assert not log.can_redo()
    assert log.undo() is None
    assert log.redo() is None


def test_undo_and_redo_walk_the_log():
    log = HistoryLog()
    log.reset(_state())
    log.push(_state(1))
    log.push(_state(1, 2))

    assert _xs(log.undo()) == [1]
    assert _xs(log.undo()) == []
    assert log.undo() is None
    assert _xs(log.redo()) == [1]
    assert _xs(log.redo()) == [1, 2]
    assert log.redo() is None


def test_push_after_undo_drops_redo_entries():
    log = HistoryLog()
    log.reset(_state())
    log.push(_state(1))
    log.push(_state(1, 2))
    log.undo()

    log.push(_state(1, 3))

    assert not log.can_redo()
    assert len(log) == 3
    assert _xs(log.undo()) == [1]


def test_log_is_capped_and_drops_oldest():
    log = HistoryLog(max_size=3)
    log.reset(_state())
    for x in range(1, 6):
        log.push(_state(x))

    assert len(log) == 3
    assert log.position == 2
    assert _xs(log.undo()) == [4]
    assert _xs(log.undo()) == [3]
    assert log.undo() is None


def test_returned_states_are_copies():
    log = HistoryLog()
    log.reset(_state())
    log.push(_state(1))

    undone = log.undo()
    undone[0] = []
    assert _xs(log.redo()) == [1]
    assert _xs(log.undo()) == []


def test_too_small_history_is_rejected():
    with pytest.raises(ValueError):
        HistoryLog(max_size=1)


def test_clear():
    log = HistoryLog()
    log.reset(_state())
    log.push(_state(1))
    log.clear()

    assert len(log) == 0
    assert not log.can_undo()
