import math
from datetime import timedelta

import pytest

from earlystop.criteria import (
    GL,
    Disjunction,
    PQ,
    UP,
    Never,
    NotANumber,
    NumberLimit,
    NumberSinceBest,
    OutOfBounds,
    Patience,
    Threshold,
    TimeLimit,
    generalization_loss,
    training_progress,
)
from earlystop.errors import ConfigurationError, ProtocolError
from earlystop.simulation import simulate, stopping_time

NAN = float("nan")


def fake_clock(*times):
    return iter(times).__next__


def test_never_never_stops():
    assert stopping_time(Never(), [1.0, 2.0, NAN, 4.0]) == 0
    assert Never().needs_loss is False


def test_not_a_number_stops_at_first_nan():
    assert stopping_time(NotANumber(), [1.0, 2.0, NAN, 3.0, NAN]) == 3
    assert stopping_time(NotANumber(), [NAN]) == 1
    assert stopping_time(NotANumber(), [1.0, 2.0]) == 0


def test_out_of_bounds_is_sticky():
    c = OutOfBounds()
    state = c.update(1.0, c.initialize(float("inf")))
    assert c.done(state)
    assert stopping_time(c, [1.0, -float("inf"), 1.0]) == 2


def test_number_limit_counts_updates():
    assert stopping_time(NumberLimit(n=3), [5.0, 5.0, 5.0, 5.0]) == 3
    assert stopping_time(NumberLimit(n=5), [5.0, 5.0]) == 0


def test_threshold():
    assert stopping_time(Threshold(value=1.0), [3.0, 1.0, 0.5]) == 3
    assert stopping_time(Threshold(), [3.0, 0.0, NAN]) == 0


def test_number_since_best_equal_loss_is_not_improvement():
    c = NumberSinceBest(n=2)
    assert stopping_time(c, [5.0, 4.0, 4.0, 4.5]) == 4
    state = c.update(4.0, c.initialize(4.0))
    assert state.number_since_best == 1


def test_patience_stops_at_nth_increase():
    c = Patience(n=3)
    assert stopping_time(c, [5.0, 6.0, 7.0, 8.0, 7.0]) == 4
    assert stopping_time(c, [5.0, 6.0, 7.0]) == 0


def test_patience_resets_on_non_increase():
    c = Patience(n=3)
    assert stopping_time(c, [5.0, 6.0, 7.0, 6.0, 7.0, 8.0, 9.0]) == 7
    # an equal loss is not an increase
    assert stopping_time(c, [1.0, 2.0, 2.0, 3.0, 4.0, 5.0]) == 6


def test_up_with_unit_strips_matches_patience():
    losses = [3.0, 4.0, 3.5, 4.0, 5.0, 6.0]
    assert stopping_time(UP(s=2), losses) == stopping_time(Patience(n=2), losses) == 5


def test_up_compares_strip_ends():
    # strip ends (k=2) at updates 2, 4, 6, 8: 9.0, 9.5, 10.0, 11.0
    losses = [10.0, 9.0, 9.0, 9.5, 9.0, 10.0, 9.0, 11.0]
    assert stopping_time(UP(s=2, k=2), losses) == 6
    assert stopping_time(UP(s=3, k=2), losses) == 8


def test_generalization_loss():
    assert generalization_loss(11.0, 10.0) == pytest.approx(10.0)
    assert generalization_loss(0.0, 0.0) == 0.0
    assert generalization_loss(1.0, 0.0) == math.inf


def test_gl_stops_when_generalization_loss_exceeds_alpha():
    assert stopping_time(GL(alpha=2.0), [10.0, 10.1, 10.3]) == 3
    assert stopping_time(GL(alpha=2.0), [10.0, 9.0, 9.1, 9.15]) == 0


def test_gl_ignores_nan_for_best_loss():
    c = GL(alpha=2.0)
    state = c.update(NAN, c.initialize(10.0))
    assert state.min_loss == 10.0
    assert not c.done(state)


def test_training_progress():
    assert training_progress([8.3, 8.4]) == pytest.approx(1000 * (8.35 / 8.3 - 1))
    assert training_progress([1.0, 1.0]) == 0.0
    assert training_progress([0.0, 1.0]) == 0.0
    assert training_progress([]) == 0.0


def test_pq_reference_fixture():
    losses = [9.5, 9.3, 10.0, 9.3, 9.1, 8.9, 8.0, 8.3, 8.4, 9.0]
    is_training = [True, True, False, True, True, True, False, True, True, False]
    assert stopping_time(PQ(alpha=2.0, k=2), losses, is_training) == 3


def test_pq_flat_training_strip_never_stops():
    is_training = [True, True, False, False]
    assert stopping_time(PQ(alpha=0.1, k=2), [1.0, 1.0, 10.0, 20.0], is_training) == 0
    assert stopping_time(PQ(alpha=0.1, k=2), [1.0, 2.0, 10.0, 20.0], is_training) == 2


def test_pq_waits_for_k_training_losses():
    is_training = [True, True, False, False]
    assert stopping_time(PQ(alpha=0.1, k=3), [1.0, 2.0, 10.0, 20.0], is_training) == 0


def test_pq_keeps_last_k_training_losses():
    c = PQ(k=2)
    state = c.initialize_training(3.0)
    for loss in (2.0, 1.0):
        state = c.update_training(loss, state)
    assert state.training_losses == (2.0, 1.0)
    assert state.loss is None
    assert not c.done(state)


@pytest.mark.parametrize("make", [
    lambda: Patience(n=0),
    lambda: Patience(n=-1),
    lambda: NumberSinceBest(n=2.5),
    lambda: NumberLimit(n=0),
    lambda: UP(s=0),
    lambda: TimeLimit(t=0),
    lambda: TimeLimit(t=timedelta(0)),
    lambda: GL(alpha=-1.0),
    lambda: PQ(k=1),
    lambda: PQ(alpha=0.0),
])
def test_bad_parameters_fail_at_construction(make):
    with pytest.raises(ConfigurationError):
        make()


def test_time_limit_uses_clock_at_fold_time():
    c = TimeLimit(t=1.0, clock=fake_clock(0.0, 1800.0, 3600.0))
    assert stopping_time(c, [None, None, None]) == 3


def test_time_limit_accepts_timedelta():
    assert TimeLimit(t=timedelta(minutes=30)).seconds == 1800.0
    assert TimeLimit().seconds == 1800.0


def test_loss_free_criteria_ignore_loss_values():
    a = [1.0, 2.0, 3.0, 4.0]
    b = [9.0, NAN, 0.0, -1.0]
    for make in (Never, lambda: NumberLimit(n=3),
                 lambda: TimeLimit(t=1.0, clock=fake_clock(0.0, 0.0, 3600.0, 7200.0))):
        assert make().needs_loss is False
        assert stopping_time(make(), a) == stopping_time(make(), b)


@pytest.mark.parametrize("criterion", [
    Never(), NotANumber(), OutOfBounds(), TimeLimit(t=100.0), NumberLimit(n=5), Threshold(),
    NumberSinceBest(), Patience(), UP(), GL(), PQ(),
])
def test_exhausted_sequence_returns_zero(criterion):
    assert stopping_time(criterion, [1.0]) == 0


@pytest.mark.parametrize("criterion, losses", [
    (NotANumber(), [1.0, NAN]),
    (Threshold(value=1.0), [2.0, 0.5]),
    (Patience(n=1), [1.0, 2.0]),
    (NumberSinceBest(n=1), [1.0, 2.0]),
    (GL(alpha=2.0), [1.0, 2.0]),
    (NumberLimit(n=2), [1.0, 2.0]),
])
def test_done_is_idempotent(criterion, losses):
    state = criterion.initialize(losses[0])
    for loss in losses[1:]:
        state = criterion.update(loss, state)
    assert criterion.done(state) is True
    assert criterion.done(state) is True


def test_done_is_idempotent_on_replayed_states():
    losses = [9.5, 9.3, 10.0, 9.3, 9.1, 8.9, 8.0, 8.3, 8.4, 9.0]
    is_training = [True, True, False, True, True, True, False, True, True, False]
    cases = [
        (PQ(alpha=2.0, k=2), losses, is_training),
        (UP(s=1), [1.0, 2.0], None),
        (UP(s=1, k=2), [3.0, 1.0, 0.5, 2.0], None),
        (OutOfBounds(), [1.0, float("nan"), 1.0], None),
        (Disjunction(Threshold(), Patience(n=1)), [1.0, 2.0], None),
        (Disjunction(Patience(n=9), PQ(alpha=2.0, k=2)), losses, is_training),
    ]
    for criterion, seq, flags in cases:
        res = simulate(criterion, seq, flags)
        assert res.stopped, criterion
        assert criterion.done(res.state) is True
        assert criterion.done(res.state) is True


def test_time_limit_done_does_not_read_clock():
    c = TimeLimit(t=1.0, clock=fake_clock(0.0, 3600.0))
    state = c.update(None, c.initialize(None))
    assert c.done(state) and c.done(state)


def test_training_losses_rejected_by_default():
    with pytest.raises(ProtocolError):
        Patience().initialize_training(1.0)
    with pytest.raises(ProtocolError):
        GL().update_training(1.0, GL().initialize(1.0))


def test_default_message_names_criterion():
    assert Never().message(None) == "Early stop triggered by Never() stopping criterion."
    assert "Patience(n=5)" in repr(Patience())
