# -*- coding: utf-8 -*-
"""Pruebas de fechas: tokens 'dd-mmm', contador de año y años de dos cifras."""

import sys
from pathlib import Path

# Raíz del proyecto
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from guardias.dates import parse_token, resolve_tokens, expand_two_digit_year, resolve_rural_date
from guardias.directory import CUELLAR_DIRECTORY, EL_ESPINAR_DIRECTORY
from guardias.segment import MONTH_ABBREVIATIONS, LineKind, classify_line, find_regular_dates, normalize_whitespace


def test_token_round_trip():
    for abbr in MONTH_ABBREVIATIONS:
        for day in ("01", "09", "15", "28"):
            token = f"{day}-{abbr}"
            assert parse_token(token, 2025).token() == token


def test_parse_token_accepts_unicode_hyphen_and_rejects_unknown_month():
    d = parse_token("30\u2010dic", 2024)
    assert (d.day, d.month, d.year) == (30, "diciembre", 2024)
    assert d.day_of_week == "Lunes"
    assert parse_token("12-xyz", 2024) is None


def test_new_year_increments_counter_once():
    dates, year = resolve_tokens(["30-dic", "31-dic", "01-ene", "02-ene"], 2024)
    assert year == 2025
    assert [d.year for d in dates] == [2024, 2024, 2025, 2025]


def test_new_year_twice_increments_twice():
    _, year = resolve_tokens(["01-ene"], 2024)
    _, year = resolve_tokens(["01-ene"], year)
    assert year == 2026


def test_unresolvable_token_is_dropped_but_siblings_kept():
    dates, year = resolve_tokens(["05-ene", "06-xyz", "07-ene"], 2025)
    assert [d.day for d in dates] == [5, 7]
    assert year == 2025


def test_expand_two_digit_year():
    assert expand_two_digit_year(25, 2025) == 2025
    assert expand_two_digit_year(24, 2025) == 2024
    assert expand_two_digit_year(26, 2025) == 2026


def test_rural_date_out_of_range_is_discarded():
    assert resolve_rural_date(2, "dic", 24, 2025).year == 2024
    assert resolve_rural_date(2, "dic", 10, 2025) is None


def test_whitespace_variants_collapse():
    line = "30-dic  31-dic\t Av C.J. CELA "
    assert normalize_whitespace(line) == "30-dic 31-dic Av C.J. CELA"
    assert find_regular_dates(line) == ["30-dic", "31-dic"]


def test_classify_line_kinds():
    assert classify_line("30-dic 31-dic Av C.J. CELA", CUELLAR_DIRECTORY).kind is LineKind.BOTH
    assert classify_line("30-dic 31-dic", CUELLAR_DIRECTORY).kind is LineKind.DATES
    assert classify_line("sta. marina", CUELLAR_DIRECTORY).label == "STA. MARINA"
    assert classify_line("GUARDIAS 2025", CUELLAR_DIRECTORY).kind is LineKind.SKIP
    # San Rafael solo cuenta al final de la línea
    assert classify_line("GUARDIAS SAN RAFAEL 2025", EL_ESPINAR_DIRECTORY).kind is LineKind.SKIP
    assert classify_line("09-ene SAN RAFAEL", EL_ESPINAR_DIRECTORY).kind is LineKind.BOTH
    assert len(CUELLAR_DIRECTORY) == 4


if __name__ == "__main__":
    test_token_round_trip()
    test_parse_token_accepts_unicode_hyphen_and_rejects_unknown_month()
    test_new_year_increments_counter_once()
    test_new_year_twice_increments_twice()
    test_unresolvable_token_is_dropped_but_siblings_kept()
    test_expand_two_digit_year()
    test_rural_date_out_of_range_is_discarded()
    test_whitespace_variants_collapse()
    test_classify_line_kinds()
    print("Tests OK")
