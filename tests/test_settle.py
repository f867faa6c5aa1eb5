from block_blast.game import SettleScheduler


def test_callback_fires_once_delay_elapses(clock):
    scheduler = SettleScheduler(clock=clock)
    fired = []
    scheduler.schedule(600, lambda: fired.append("a"))
    assert scheduler.poll() == 0
    clock.advance(599)
    assert scheduler.poll() == 0
    clock.advance(1)
    assert scheduler.poll() == 1
    assert fired == ["a"]
    assert scheduler.pending == 0
    clock.advance(1000)
    assert scheduler.poll() == 0


def test_callbacks_fire_in_due_order(clock):
    scheduler = SettleScheduler(clock=clock)
    fired = []
    scheduler.schedule(300, lambda: fired.append("late"))
    scheduler.schedule(100, lambda: fired.append("early"))
    clock.advance(500)
    assert scheduler.poll() == 2
    assert fired == ["early", "late"]


def test_cancel_prevents_callback(clock):
    scheduler = SettleScheduler(clock=clock)
    fired = []
    handle = scheduler.schedule(10, lambda: fired.append(1))
    assert scheduler.cancel(handle)
    assert not scheduler.cancel(handle)
    clock.advance(20)
    assert scheduler.poll() == 0
    assert fired == []


def test_cancel_all(clock, caplog):
    scheduler = SettleScheduler(clock=clock)
    fired = []
    scheduler.schedule(10, lambda: fired.append(1))
    scheduler.schedule(20, lambda: fired.append(2))
    with caplog.at_level("DEBUG", logger="block_blast.game.settle"):
        assert scheduler.cancel_all() == 2
    assert "Cancelled 2" in caplog.text
    clock.advance(100)
    assert scheduler.poll() == 0
    assert fired == []


def test_negative_delay_is_due_immediately(clock):
    scheduler = SettleScheduler(clock=clock)
    fired = []
    scheduler.schedule(-5, lambda: fired.append(1))
    assert scheduler.poll() == 1
