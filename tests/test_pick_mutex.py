import pytest

from gradedraft.exceptions import PickInProgress
from gradedraft.services.pick_mutex import PickMutex


def test_hold_and_release():
    mutex = PickMutex()
    with mutex.hold("A"):
        assert mutex.is_held("A")
    assert not mutex.is_held("A")


def test_second_hold_fails_fast():
    mutex = PickMutex()
    with mutex.hold("A"):
        with pytest.raises(PickInProgress):
            with mutex.hold("A"):
                pass
        assert mutex.is_held("A")


def test_different_users_do_not_block():
    mutex = PickMutex()
    with mutex.hold("A"), mutex.hold("B"):
        assert mutex.is_held("A") and mutex.is_held("B")


def test_released_after_error():
    mutex = PickMutex()
    with pytest.raises(RuntimeError):
        with mutex.hold("A"):
            raise RuntimeError("boom")
    assert not mutex.is_held("A")


def test_instances_are_isolated():
    first, second = PickMutex(), PickMutex()
    with first.hold("A"):
        with second.hold("A"):
            assert second.is_held("A")


def test_ids_are_normalised():
    mutex = PickMutex()
    with mutex.hold(7):
        assert mutex.is_held("7")
