import pytest

from cobrac.stack import Stack


def test_push_then_pop_is_last_in_first_out():
    st = Stack()
    for value in ["a", "b", "c"]:
        st.push(value)
    assert [st.pop(), st.pop(), st.pop()] == ["c", "b", "a"]
    assert st.is_empty()


def test_peek_does_not_remove():
    st = Stack()
    st.push("(")
    st.push("+")
    assert st.peek() == "+"
    assert st.peek() == "+"
    assert len(st) == 2


def test_new_stack_is_empty():
    st = Stack()
    assert st.is_empty()
    assert len(st) == 0
    assert not st


def test_push_makes_stack_non_empty():
    st = Stack()
    st.push("x")
    assert st.is_empty() is False
    assert bool(st) is True


def test_pop_empty_raises():
    with pytest.raises(IndexError):
        Stack().pop()


def test_peek_empty_raises():
    with pytest.raises(IndexError):
        Stack().peek()


def test_pop_after_drain_raises():
    st = Stack()
    st.push("x")
    assert st.pop() == "x"
    with pytest.raises(IndexError):
        st.pop()


def test_iteration_runs_top_to_bottom():
    st = Stack()
    for value in ["1", "2", "3"]:
        st.push(value)
    assert list(st) == ["3", "2", "1"]