import uuid

from social_signin.utils import _state
from social_signin.utils._state import generate_state


def test_generates_a_uuid():
    state = generate_state()

    assert str(uuid.UUID(state)) == state


def test_states_are_unique():
    assert len({generate_state() for _ in range(100)}) == 100


def test_falls_back_without_secure_random(monkeypatch):
    def no_urandom():
        raise NotImplementedError

    monkeypatch.setattr(_state.uuid, "uuid4", no_urandom)

    first = generate_state()
    second = generate_state()

    assert first
    assert first != second
    assert "-" in first
