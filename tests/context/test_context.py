import time

import pytest

from mgm import ContextCancelled, DeadlineExceeded, background
from mgm.context import Context


def test_background_has_no_deadline():
    ctx = background()
    assert ctx.deadline is None
    assert ctx.remaining() is None
    assert ctx.err() is None
    assert ctx.session is None


def test_child_deadline_never_exceeds_parent():
    parent = Context(timeout=0.5)
    child = parent.with_timeout(30)
    assert child.deadline == parent.deadline

    tighter = parent.with_timeout(0.1)
    assert tighter.deadline < parent.deadline


def test_cancellation_flows_from_parent_to_child_only():
    parent = background()
    child = parent.with_timeout(10)

    child.cancel()
    assert child.cancelled
    assert not parent.cancelled

    other_child = parent.with_timeout(10)
    parent.cancel()
    assert other_child.cancelled
    with pytest.raises(ContextCancelled):
        other_child.raise_if_done()


def test_expired_deadline_raises_before_work():
    ctx = Context(timeout=0.001)
    time.sleep(0.01)
    assert ctx.remaining() == 0.0
    with pytest.raises(DeadlineExceeded):
        with ctx.bounded():
            pass


def test_session_context_exposes_session_and_parent():
    parent = background()
    session = object()
    sc = parent.with_session(session)
    assert sc.session is session
    assert sc.parent is parent
    assert sc.with_timeout(5).session is session
