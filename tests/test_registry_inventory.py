from __future__ import annotations

from datetime import datetime, timedelta, timezone

from apps.registry.registry import (
    MSG_INVENTORY_TAKEN,
    MSG_NO_ASSET_INVENTORY,
    MSG_NO_COMPANY,
    Outcome,
    Registry,
)
from common_core.clock import format_date_taken


def _kylastroke(clock) -> Registry:
    r = Registry(clock=clock)
    r.register_company("clyde.testnet", "Kylastroke", "kisumu")
    r.register_asset("laptop", "1234", "Kylastroke")
    r.events.clear()
    return r


def test_inventory_scenario(fixed_clock):
    r = _kylastroke(fixed_clock)
    r.take_inventory("Kylastroke", "1234", "good")
    assert r.count_inventories("Kylastroke") == 1
    assert r.companies[0].assets[0].status == "good"


def test_inventory_records_and_updates_status(fixed_clock):
    r = _kylastroke(fixed_clock)
    out = r.take_inventory("Kylastroke", "1234", "damaged")
    assert out == Outcome(matched=1, affected=1)

    inv = r.companies[0].inventories[0]
    assert inv.serial == "1234"
    assert inv.status == "damaged"
    assert inv.date_taken == "Mon Jan  5 14:03:22 2026"
    assert r.companies[0].assets[0].status == "damaged"
    assert r.events.messages == [MSG_INVENTORY_TAKEN]


def test_inventory_history_is_append_only():
    ticks = iter(datetime(2026, 3, 1, tzinfo=timezone.utc) + timedelta(days=i) for i in range(10))
    r = _kylastroke(lambda: next(ticks))
    for i, status in enumerate(["good", "worn", "damaged"], start=1):
        r.take_inventory("Kylastroke", "1234", status)
        assert r.count_inventories("Kylastroke") == i

    history = r.companies[0].inventories
    assert [h.status for h in history] == ["good", "worn", "damaged"]
    assert history[0].date_taken == "Sun Mar  1 00:00:00 2026"
    assert history[2].date_taken == "Tue Mar  3 00:00:00 2026"
    assert r.companies[0].assets[0].status == "damaged"


def test_inventory_for_duplicate_serials_records_each(fixed_clock):
    r = _kylastroke(fixed_clock)
    r.register_asset("laptop-2", "1234", "Kylastroke")
    r.events.clear()
    out = r.take_inventory("Kylastroke", "1234", "lost")
    assert out.affected == 2
    assert r.count_inventories("Kylastroke") == 2
    assert r.events.messages == [MSG_INVENTORY_TAKEN, MSG_INVENTORY_TAKEN]
    assert {a.status for a in r.companies[0].assets} == {"lost"}


def test_inventory_misses_are_noops(fixed_clock):
    r = _kylastroke(fixed_clock)

    out = r.take_inventory("Kylastroke", "0000", "damaged")
    assert out == Outcome(matched=1, affected=0)
    assert r.events.messages == [MSG_NO_ASSET_INVENTORY]

    r.events.clear()
    out = r.take_inventory("Nope", "1234", "damaged")
    assert out == Outcome(matched=0, affected=0)
    assert r.events.messages == [MSG_NO_COMPANY]

    assert r.count_inventories("Kylastroke") == 0
    assert r.companies[0].assets[0].status == "good"


def test_count_inventories_last_match_and_sum(fixed_clock):
    for mode, expected in (("last", 1), ("sum", 3)):
        r = Registry(clock=fixed_clock, count_mode=mode)
        r.register_company("o", "Acme", "x")
        r.register_company("o", "Acme", "y")
        r.register_asset("a", "1", "Acme")
        r.register_asset("b", "2", "Acme")
        r.companies[1].assets.pop()
        r.take_inventory("Acme", "2", "good")
        r.take_inventory("Acme", "1", "good")
        # first Acme: 2 checks, second Acme: 1 check
        assert r.count_inventories("Acme") == expected
    assert r.count_inventories("Nobody") == 0


def test_date_taken_format():
    assert format_date_taken(datetime(2024, 1, 15, 9, 5, 1, tzinfo=timezone.utc)) == "Mon Jan 15 09:05:01 2024"
    naive = datetime(2024, 12, 1, 23, 59, 59)
    assert format_date_taken(naive) == "Sun Dec  1 23:59:59 2024"
    east = timezone(timedelta(hours=3))
    assert format_date_taken(datetime(2024, 1, 6, 1, 0, 0, tzinfo=east)) == "Fri Jan  5 22:00:00 2024"
