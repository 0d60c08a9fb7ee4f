# -*- coding: utf-8 -*-
"""Guardias Segovia: texto de los boletines PDF -> calendarios de farmacias de guardia."""

from .entities import BulletinDocument, DutyDate, DutyLocation, DutyTimeSpan, Pharmacy, PharmacySchedule
from .years import detect_year, YearDetectionResult, YearSource
from .relations import assemble, find_current_schedule
from .strategies import parse_bulletin, STRATEGIES, UnknownRegionError
from .cache import ScheduleCache, CacheState

__all__ = [
    "BulletinDocument",
    "DutyDate",
    "DutyLocation",
    "DutyTimeSpan",
    "Pharmacy",
    "PharmacySchedule",
    "detect_year",
    "YearDetectionResult",
    "YearSource",
    "assemble",
    "find_current_schedule",
    "parse_bulletin",
    "STRATEGIES",
    "UnknownRegionError",
    "ScheduleCache",
    "CacheState",
]
