# -*- coding: utf-8 -*-
"""Pruebas de agrupación en calendarios y de la guardia vigente."""

import sys
from datetime import date, datetime
from pathlib import Path

# Raíz del proyecto
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from guardias.entities import (
    DutyDate, DutyFact, Pharmacy, PharmacySchedule,
    CAPITAL_DAY, CAPITAL_NIGHT, FULL_DAY, RURAL_DAYTIME,
)
from guardias.locations import location_from_region, SEGOVIA_CAPITAL
from guardias.relations import assemble, find_current_schedule

CAPITAL = location_from_region(SEGOVIA_CAPITAL)
ALFA = Pharmacy("FARMACIA ALFA", "C/ Real, 12", "921 111111")
BETA = Pharmacy("FARMACIA BETA", "Plaza Mayor S/N", "921 222222")


def _day(y, m, d):
    return DutyDate.from_date(date(y, m, d))


def test_assemble_merges_shifts_and_skips_duplicates():
    d = _day(2025, 3, 1)
    facts = [
        DutyFact(d, CAPITAL, CAPITAL_DAY, ALFA),
        DutyFact(d, CAPITAL, CAPITAL_NIGHT, BETA),
        DutyFact(d, CAPITAL, CAPITAL_DAY, ALFA),
        DutyFact(_day(2025, 3, 2), CAPITAL, CAPITAL_DAY, BETA),
    ]
    result = assemble(facts)
    first, second = result[CAPITAL]
    assert list(first.shifts) == [CAPITAL_DAY, CAPITAL_NIGHT]
    assert first.shifts[CAPITAL_DAY] == [ALFA]
    assert second.date.day == 2


def test_schedule_rejects_empty_shift():
    try:
        PharmacySchedule(_day(2025, 3, 1), {CAPITAL_DAY: []})
    except ValueError:
        pass
    else:
        raise AssertionError("se esperaba ValueError")


def test_schedule_keeps_its_own_copy_of_shifts():
    shifts = {CAPITAL_DAY: [ALFA]}
    schedule = PharmacySchedule(_day(2025, 3, 1), shifts)
    shifts[CAPITAL_DAY].append(BETA)
    shifts[CAPITAL_NIGHT] = [BETA]
    assert schedule.shifts == {CAPITAL_DAY: [ALFA]}


def test_current_schedule_day_and_night():
    schedules = [
        PharmacySchedule(_day(2025, 3, 1), {CAPITAL_DAY: [ALFA], CAPITAL_NIGHT: [BETA]}),
        PharmacySchedule(_day(2025, 3, 2), {CAPITAL_DAY: [BETA], CAPITAL_NIGHT: [ALFA]}),
    ]
    schedule, span = find_current_schedule(schedules, datetime(2025, 3, 1, 12, 0))
    assert (schedule.date.day, span) == (1, CAPITAL_DAY)

    # la nocturna del día 1 cubre la madrugada del día 2
    schedule, span = find_current_schedule(schedules, datetime(2025, 3, 2, 3, 0))
    assert (schedule.date.day, span) == (1, CAPITAL_NIGHT)

    schedule, span = find_current_schedule(schedules, datetime(2025, 3, 2, 10, 30))
    assert (schedule.date.day, span) == (2, CAPITAL_DAY)

    assert find_current_schedule(schedules, datetime(2025, 4, 10, 12, 0)) is None


def test_current_schedule_full_day_and_same_day_fallback():
    full = [PharmacySchedule(_day(2025, 3, 1), {FULL_DAY: [ALFA]})]
    schedule, span = find_current_schedule(full, datetime(2025, 3, 1, 23, 59, 30))
    assert span == FULL_DAY

    rural = [PharmacySchedule(_day(2025, 3, 1), {RURAL_DAYTIME: [ALFA]})]
    schedule, span = find_current_schedule(rural, datetime(2025, 3, 1, 21, 0))
    assert span == RURAL_DAYTIME
    assert find_current_schedule(rural, datetime(2025, 3, 2, 12, 0)) is None


if __name__ == "__main__":
    test_assemble_merges_shifts_and_skips_duplicates()
    test_schedule_rejects_empty_shift()
    test_schedule_keeps_its_own_copy_of_shifts()
    test_current_schedule_day_and_night()
    test_current_schedule_full_day_and_same_day_fallback()
    print("Tests OK")
