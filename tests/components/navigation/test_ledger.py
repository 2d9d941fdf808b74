import pytest

from burrow.components.navigation.energy import EnergyState
from burrow.components.navigation.ledger import Mark, Move, MoveLedger
from burrow.exceptions import InternalInconsistencyError
from burrow.interfaces.types import Side, Turn


class RecordingActuator:
    """Actuator that only records what the ledger asks of it."""

    def __init__(self, ledger: MoveLedger, fail_on=None):
        self.ledger = ledger
        self.reversed = []
        self.performed = []
        self.fail_on = fail_on
        ledger.attach(self)

    def perform(self, action, forced=False):
        if action is self.fail_on:
            return False
        self.performed.append((action, forced))
        self.ledger.push(action)
        return True

    def reverse(self, action):
        self.reversed.append(action)


@pytest.fixture
def ledger() -> MoveLedger:
    return MoveLedger(EnergyState())


@pytest.fixture
def actuator(ledger) -> RecordingActuator:
    return RecordingActuator(ledger)


def runs(ledger):
    return [(move.action, move.count) for move in ledger]


def test_consecutive_pushes_merge_into_one_run(ledger):
    for n in range(1, 6):
        ledger.push_translation(Side.FORWARD)
        assert runs(ledger) == [(Side.FORWARD, n)]
    ledger.push_rotation(Turn.LEFT)
    ledger.push_rotation(Turn.LEFT)
    ledger.push_translation(Side.FORWARD)
    assert runs(ledger) == [(Side.FORWARD, 5), (Turn.LEFT, 2), (Side.FORWARD, 1)]


def test_distance_counts_translation_units_only(ledger):
    ledger.push_translation(Side.FORWARD)
    ledger.push_translation(Side.UP)
    ledger.push_rotation(Turn.RIGHT)
    ledger.push_translation(Side.BACK)
    assert ledger.distance_from_base == 3
    assert ledger.translation_units() == 3


def test_sideways_translation_is_rejected(ledger):
    with pytest.raises(ValueError):
        ledger.push_translation(Side.LEFT)
    with pytest.raises(ValueError):
        Move(side=Side.RIGHT)


def test_move_needs_exactly_one_action():
    with pytest.raises(ValueError):
        Move()
    with pytest.raises(ValueError):
        Move(side=Side.UP, turn=Turn.LEFT)
    with pytest.raises(ValueError):
        Move(side=Side.UP, count=-1)


def test_push_then_pop_restores_length_and_distance(ledger, actuator):
    ledger.push_translation(Side.DOWN)
    length, distance = len(ledger), ledger.distance_from_base

    pushed = [Side.FORWARD, Turn.LEFT, Side.UP, Turn.RIGHT]
    for action in pushed:
        ledger.push(action)
    for _ in pushed:
        ledger.pop_last_run()

    assert len(ledger) == length
    assert ledger.distance_from_base == distance
    assert actuator.reversed == list(reversed(pushed))


def test_pop_undoes_a_whole_run(ledger, actuator):
    for _ in range(3):
        ledger.push_translation(Side.FORWARD)
    for _ in range(2):
        ledger.push_translation(Side.FORWARD)
    assert runs(ledger) == [(Side.FORWARD, 5)]

    removed = ledger.pop_last_run()

    assert (removed.action, removed.count) == (Side.FORWARD, 5)
    assert len(ledger) == 0
    assert ledger.distance_from_base == 0
    assert actuator.reversed == [Side.FORWARD] * 5


def test_pop_on_empty_ledger_returns_none(ledger, actuator):
    assert ledger.pop_last_run() is None
    assert actuator.reversed == []


def test_physical_undo_without_actuator_fails(ledger):
    ledger.push_translation(Side.FORWARD)
    with pytest.raises(RuntimeError):
        ledger.pop_last_run()


def test_mark_of_empty_ledger():
    assert MoveLedger().mark() == Mark(0, 0)


def test_restore_undoes_partial_run(ledger, actuator):
    ledger.push_translation(Side.FORWARD)
    ledger.push_translation(Side.FORWARD)
    mark = ledger.mark()
    ledger.push_translation(Side.FORWARD)
    ledger.push_rotation(Turn.RIGHT)
    ledger.push_translation(Side.FORWARD)

    ledger.restore(mark)

    assert ledger.mark() == mark
    assert runs(ledger) == [(Side.FORWARD, 2)]
    assert ledger.distance_from_base == 2
    assert actuator.reversed == [Side.FORWARD, Turn.RIGHT, Side.FORWARD]


def test_restore_to_empty_mark(ledger, actuator):
    mark = ledger.mark()
    ledger.push_translation(Side.UP)
    ledger.push_rotation(Turn.LEFT)
    ledger.restore(mark)
    assert len(ledger) == 0
    assert ledger.distance_from_base == 0


def test_restore_bookkeeping_only_does_not_move(ledger, actuator):
    ledger.push_translation(Side.FORWARD)
    mark = ledger.mark()
    ledger.push_translation(Side.FORWARD)
    ledger.push_translation(Side.UP)

    ledger.restore(mark, physically_move=False)

    assert actuator.reversed == []
    assert ledger.mark() == mark
    assert ledger.distance_from_base == 1


@pytest.mark.parametrize("mark", [Mark(-1, 0), Mark(5, 1), Mark(0, 3), Mark(1, 9)])
def test_restore_rejects_invalid_marks(ledger, actuator, mark):
    ledger.push_translation(Side.FORWARD)
    with pytest.raises(InternalInconsistencyError):
        ledger.restore(mark)


def test_restore_detects_replaced_run(ledger, actuator):
    for _ in range(3):
        ledger.push_translation(Side.FORWARD)
    mark = ledger.mark()
    ledger.pop_last_run()
    ledger.push_translation(Side.UP)
    with pytest.raises(InternalInconsistencyError):
        ledger.restore(mark)


def test_drain_returns_runs_oldest_first(ledger, actuator):
    ledger.push_translation(Side.FORWARD)
    ledger.push_rotation(Turn.RIGHT)
    ledger.push_translation(Side.FORWARD)
    ledger.push_translation(Side.FORWARD)

    drained = ledger.drain_all()

    assert [(m.action, m.count) for m in drained] == [(Side.FORWARD, 1), (Turn.RIGHT, 1), (Side.FORWARD, 2)]
    assert len(ledger) == 0
    assert ledger.distance_from_base == 0


def test_replay_of_drain_reproduces_mark(ledger, actuator):
    for action in [Side.DOWN, Side.DOWN, Turn.LEFT, Side.FORWARD, Turn.RIGHT, Turn.RIGHT, Side.UP]:
        ledger.push(action)
    mark, distance = ledger.mark(), ledger.distance_from_base

    ledger.replay(ledger.drain_all())

    assert ledger.mark() == mark
    assert ledger.distance_from_base == distance
    assert all(forced for _, forced in actuator.performed)


def test_replay_failure_is_fatal(ledger):
    RecordingActuator(ledger, fail_on=Turn.LEFT)
    with pytest.raises(InternalInconsistencyError):
        ledger.replay([Move.of(Side.FORWARD, 2), Move.of(Turn.LEFT)])
    assert runs(ledger) == [(Side.FORWARD, 2)]


def test_iteration_yields_copies(ledger):
    ledger.push_translation(Side.FORWARD)
    for move in ledger:
        move.count = 42
    assert runs(ledger) == [(Side.FORWARD, 1)]
