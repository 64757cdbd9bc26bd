"""Tests for the bounded event log."""

from statecraft.utils.event_log import EventLog, SimEvent


class TestEventLog:

    def test_oldest_events_fall_off(self):
        log = EventLog(max_events=3)
        log.append_many([SimEvent(tick=i, category="tick", message=str(i)) for i in range(5)])
        assert len(log) == 3
        assert [e.tick for e in log.latest()] == [2, 3, 4]

    def test_since_tick(self):
        log = EventLog()
        for i in range(4):
            log.append(SimEvent(tick=i, category="tick", message=""))
        assert [e.tick for e in log.since_tick(2)] == [2, 3]

    def test_latest_by_category(self):
        log = EventLog()
        log.append(SimEvent(tick=0, category="fault", message="a"))
        log.append(SimEvent(tick=1, category="breakthrough", message="b"))
        log.append(SimEvent(tick=2, category="fault", message="c"))
        assert [e.message for e in log.latest(count=1, category="fault")] == ["c"]

    def test_clear(self):
        log = EventLog()
        log.append(SimEvent(tick=0, category="fault", message="a"))
        log.clear()
        assert len(log) == 0
