from chronoscope.timing.sequence import DelaySequence, SequencePhase


def _drain(seq, limit=100):
    out = []
    for _ in range(limit):
        delay = seq.next_delay()
        if delay is None:
            break
        out.append(delay)
        seq.charge(delay)
    return out


def test_ascending_run_stops_when_budget_is_spent():
    seq = DelaySequence(15)

    assert _drain(seq) == [1.0, 2.0, 3.0, 4.0, 5.0]
    assert seq.remaining == 0
    assert seq.phase is SequencePhase.ASCENDING


def test_ascending_run_does_not_wrap_on_its_own():
    seq = DelaySequence(12)

    assert _drain(seq) == [1.0, 2.0, 3.0, 4.0]
    assert seq.remaining == 2
    assert seq.next_delay() is None


def test_confirmation_restarts_and_wraps_to_one():
    seq = DelaySequence(20)
    _drain(seq)

    seq.start_confirmation()

    assert seq.phase is SequencePhase.CONFIRMING
    assert _drain(seq) == [1.0, 2.0, 1.0, 1.0]
    assert seq.next_delay() is None


def test_confirmation_with_room_ascends_again():
    seq = DelaySequence(100)
    for _ in range(3):
        seq.charge(seq.next_delay())

    seq.start_confirmation()

    assert [seq.next_delay() for _ in range(3)] == [1.0, 2.0, 3.0]


def test_budget_is_charged_with_observed_time_not_delay():
    seq = DelaySequence(10)
    assert seq.next_delay() == 1.0

    seq.charge(8.5)

    assert seq.fits(1.0)
    assert not seq.fits(2.0)
    assert seq.next_delay() is None


def test_sequence_is_deterministic():
    assert _drain(DelaySequence(37)) == _drain(DelaySequence(37))
