# -*- coding: utf-8 -*-
"""Pruebas de ordenación y de la salida JSON / CSV."""

import sys
from pathlib import Path

# Raíz del proyecto
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from guardias.entities import DutyDate, DutyTimeSpan, Pharmacy, PharmacySchedule, CAPITAL_DAY, CAPITAL_NIGHT
from guardias.locations import location_from_region, SEGOVIA_CAPITAL
from guardias.normalize import CSV_HEADER, schedule_from_json, schedule_to_json, sort_schedules, to_rows

ALFA = Pharmacy("FARMACIA ALFA", "C/ Real, 12", "921 111111", "Abierta 24h")


def test_json_keeps_shift_identity():
    schedule = PharmacySchedule(DutyDate("Lunes", 6, "enero", 2025), {CAPITAL_NIGHT: [ALFA]})
    data = schedule_to_json(schedule)
    assert list(data["shifts"]) == ["22:00-10:15"]
    assert data["shifts"]["22:00-10:15"][0]["additional_info"] == "Abierta 24h"

    restored = schedule_from_json(data)
    assert restored == schedule
    assert next(iter(restored.shifts)).name == "capital_night"


def test_unknown_shift_key_builds_custom_span():
    span = DutyTimeSpan.from_key("09:00-14:00")
    assert (span.start.hour, span.end.hour) == (9, 14)
    assert not span.crosses_midnight
    assert DutyTimeSpan.from_key("10:15-22:00") == CAPITAL_DAY


def test_sort_uses_current_year_when_missing():
    a = PharmacySchedule(DutyDate(None, 3, "enero", None), {CAPITAL_DAY: [ALFA]})
    b = PharmacySchedule(DutyDate("Martes", 31, "diciembre", 2024), {CAPITAL_DAY: [ALFA]})
    c = PharmacySchedule(DutyDate("Jueves", 2, "enero", 2025), {CAPITAL_DAY: [ALFA]})
    assert sort_schedules([a, c, b], current_year=2025) == [b, c, a]


def test_csv_rows():
    location = location_from_region(SEGOVIA_CAPITAL)
    schedule = PharmacySchedule(DutyDate("Lunes", 6, "enero", 2025), {CAPITAL_DAY: [ALFA], CAPITAL_NIGHT: [ALFA]})
    rows = to_rows({location: [schedule]})
    assert len(rows) == 2
    assert len(rows[0]) == len(CSV_HEADER)
    assert rows[0][:5] == ["segovia-capital", "2025-01-06", "Lunes", "Diurno", "10:15 - 22:00"]
    assert rows[1][3] == "Nocturno"


if __name__ == "__main__":
    test_json_keeps_shift_identity()
    test_unknown_shift_key_builds_custom_span()
    test_sort_uses_current_year_when_missing()
    test_csv_rows()
    print("Tests OK")
