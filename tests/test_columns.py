# -*- coding: utf-8 -*-
"""Pruebas de Segovia Capital: columnas con maquetación y plegado de texto."""

import sys
from pathlib import Path

# Raíz del proyecto
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from guardias.columns import descriptive_lines, group_pharmacies, is_date_string, parse_capital_date
from guardias.entities import BulletinDocument, Pharmacy, CAPITAL_DAY, CAPITAL_NIGHT
from guardias.locations import location_from_region, SEGOVIA_CAPITAL
from guardias.strategies import parse_bulletin


class FakeLayout:
    """Página A4 de mentira: textos sueltos en (x, y) del centro de cada línea."""

    def __init__(self, items, width=595.0, height=260.0):
        self.width = width
        self.height = height
        self.items = items

    def text_in(self, x0, top, x1, bottom):
        inside = sorted((y, text) for x, y, text in self.items if x0 <= x < x1 and top <= y < bottom)
        return "\n".join(text for _, text in inside)


def _row(y, date_text, day, night):
    items = [(60, y, date_text)]
    items += [(200, y + 10 * i, line) for i, line in enumerate(day)]
    items += [(400, y + 10 * i, line) for i, line in enumerate(night)]
    return items


CAPITAL_LAYOUT = FakeLayout(
    _row(105, "miércoles, 1 de enero",
         ["FARMACIA ALFA", "C/ Real, 12", "Tfno: 921 111111"],
         ["FARMACIA BETA", "Plaza Mayor S/N", "(Zona centro) Tfno: 921 222222"])
    + _row(153, "jueves, 2 de enero",
           ["FARMACIA GAMMA", "Av. Fernández Ladreda, 3", "Tfno: 921 333333"],
           ["FARMACIA DELTA", "C/ Cervantes, 7", "Tfno: 921 444444"])
    # fila incompleta: la columna nocturna solo trae dos líneas
    + _row(201, "viernes, 3 de enero",
           ["FARMACIA EPSILON", "C/ Mayor, 1", "Tfno: 921 555555"],
           ["FARMACIA ZETA", "C/ Menor, 2"])
)


def test_layout_rows_paired_by_position():
    doc = BulletinDocument(["texto"], layouts=[CAPITAL_LAYOUT])
    result = parse_bulletin("segovia-capital", doc, seed_year=2024, current_year=2025)
    schedules = result[location_from_region(SEGOVIA_CAPITAL)]
    assert [(s.date.day, s.date.month, s.date.year) for s in schedules] == [(1, "enero", 2025), (2, "enero", 2025)]
    assert schedules[0].date.day_of_week == "Miércoles"

    first = schedules[0]
    assert first.shifts[CAPITAL_DAY] == [Pharmacy("FARMACIA ALFA", "C/ Real, 12", "921 111111")]
    night = first.shifts[CAPITAL_NIGHT][0]
    assert night.name == "FARMACIA BETA"
    assert night.phone == "921 222222"
    assert night.additional_info == "(Zona centro)"
    assert schedules[1].shifts[CAPITAL_NIGHT][0].name == "FARMACIA DELTA"


def test_text_fold_without_layout():
    page = "\n".join([
        "FARMACIA UNO FARMACIA DOS",
        "lunes, 6 de enero C/ Real, 12 Plaza Mayor S/N",
        "Tfno: 921 111111 (Abierta 24h) Tfno: 921 222222",
    ])
    result = parse_bulletin("segovia-capital", BulletinDocument([page]), seed_year=2025, current_year=2025)
    (schedule,) = result[location_from_region(SEGOVIA_CAPITAL)]
    assert (schedule.date.day, schedule.date.year) == (6, 2025)
    assert schedule.shifts[CAPITAL_DAY] == [Pharmacy("FARMACIA UNO", "C/ Real, 12", "921 111111", None)]
    assert schedule.shifts[CAPITAL_NIGHT] == [Pharmacy("FARMACIA DOS", "Plaza Mayor S/N", "921 222222", "Abierta 24h")]


def test_date_filters_and_explicit_year():
    assert is_date_string("domingo, 5 de enero")
    assert not is_date_string("5 de enero")
    duty_date, year = parse_capital_date("martes, 31 de diciembre 2024", 2030)
    assert (duty_date.year, year) == (2024, 2024)
    duty_date, year = parse_capital_date("miércoles, 1 de enero", 2024)
    assert (duty_date.year, year) == (2025, 2025)


def test_descriptive_lines_and_grouping():
    lines = descriptive_lines("FARMACIA UNO\n-----\n12 34\nC/ Real, 12\nTfno: 921 111111\nFARMACIA SUELTA")
    assert lines == ["FARMACIA UNO", "C/ Real, 12", "Tfno: 921 111111", "FARMACIA SUELTA"]
    pharmacies = group_pharmacies(lines)
    assert [p.name for p in pharmacies] == ["FARMACIA UNO"]


if __name__ == "__main__":
    test_layout_rows_paired_by_position()
    test_text_fold_without_layout()
    test_date_filters_and_explicit_year()
    test_descriptive_lines_and_grouping()
    print("Tests OK")
