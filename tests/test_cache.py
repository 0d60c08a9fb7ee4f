# -*- coding: utf-8 -*-
"""Pruebas de la caché en disco de calendarios."""

import sys
from datetime import date
from pathlib import Path

# Raíz del proyecto
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from guardias.cache import CacheState, ScheduleCache
from guardias.entities import BulletinDocument, DutyDate, Pharmacy, PharmacySchedule, FULL_DAY
from guardias.locations import location_from_region, CUELLAR, SEGOVIA_RURAL

LOCATION = location_from_region(CUELLAR)
SCHEDULE = PharmacySchedule(
    DutyDate.from_date(date(2025, 1, 2)),
    {FULL_DAY: [Pharmacy("Farmacia San Andrés", "Ctra. Bahabón, 9", "921144794")]},
)


def test_state_transitions(tmp_path):
    cache = ScheduleCache(tmp_path)
    assert cache.state(LOCATION, 100.0) is CacheState.MISSING

    cache.save(LOCATION, [SCHEDULE], 100.0)
    assert cache.state(LOCATION, 100.0) is CacheState.VALID
    assert cache.state(LOCATION, 50.0) is CacheState.VALID
    assert cache.state(LOCATION, 200.0) is CacheState.STALE_TIMESTAMP
    assert ScheduleCache(tmp_path, version=3).state(LOCATION, 100.0) is CacheState.STALE_VERSION
    assert cache.load(LOCATION) == [SCHEDULE]


def test_corrupt_meta_is_treated_as_missing(tmp_path):
    cache = ScheduleCache(tmp_path)
    cache.save(LOCATION, [SCHEDULE], 100.0)
    (tmp_path / "cuellar.meta.json").write_text("{no es json", encoding="utf-8")
    assert cache.state(LOCATION, 100.0) is CacheState.MISSING
    assert not (tmp_path / "cuellar.json").exists()


def test_invalidate_rural_region_clears_all_zones(tmp_path):
    cache = ScheduleCache(tmp_path)
    for location in SEGOVIA_RURAL.locations():
        cache.save(location, [SCHEDULE], 100.0)
    assert len(list(tmp_path.glob("*.meta.json"))) == 8

    cache.invalidate_region(SEGOVIA_RURAL)
    states = cache.region_state(SEGOVIA_RURAL, 100.0)
    assert all(s is CacheState.MISSING for s in states.values())


def test_load_or_parse_reuses_valid_entries(tmp_path):
    cache = ScheduleCache(tmp_path)
    calls = []

    def parse(region_id, document):
        calls.append(region_id)
        return {LOCATION: [SCHEDULE]}

    doc = BulletinDocument(["02-ene Ctra. BAHABON"], last_modified=100.0)
    assert cache.load_or_parse(CUELLAR, doc, parse) == {LOCATION: [SCHEDULE]}
    assert cache.load_or_parse(CUELLAR, doc, parse) == {LOCATION: [SCHEDULE]}
    assert calls == ["cuellar"]

    newer = BulletinDocument(doc.pages, last_modified=300.0)
    cache.load_or_parse(CUELLAR, newer, parse)
    assert calls == ["cuellar", "cuellar"]


def test_clear_removes_every_entry(tmp_path):
    cache = ScheduleCache(tmp_path)
    cache.save(LOCATION, [SCHEDULE], 100.0)
    cache.clear()
    assert list(tmp_path.iterdir()) == []
    assert cache.load(LOCATION) is None


def test_empty_reparse_keeps_previous_entries(tmp_path):
    cache = ScheduleCache(tmp_path)
    cache.save(LOCATION, [SCHEDULE], 100.0)

    garbled = BulletinDocument(["???"], last_modified=200.0)
    assert cache.load_or_parse(CUELLAR, garbled, lambda region_id, document: {}) == {}
    assert cache.load(LOCATION) == [SCHEDULE]
    assert cache.state(LOCATION, 200.0) is CacheState.STALE_TIMESTAMP
