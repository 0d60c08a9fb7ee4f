# -*- coding: utf-8 -*-
"""
Relaciones: agrupar hechos (fecha, ubicación, franja, farmacia) en calendarios
diarios, completar las ZBS derivadas de Segovia Rural y buscar la guardia vigente.

La Granja: el boletín no dice qué farmacia está de guardia cada día, solo cuál
de las dos candidatas aparece antes. Se toman las fechas de Navas de la Asunción
como andamiaje y se alterna por semanas (semanas impares = la que aparece antes).
Cantalejo: las dos farmacias todos los días del andamiaje.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from .directory import DirectoryEntry, CANTALEJO_PHARMACIES
from .entities import DutyFact, DutyLocation, DutyTimeSpan, Pharmacy, PharmacySchedule, RURAL_DAYTIME
from .locations import location_from_zbs, NAVAS_ASUNCION, LA_GRANJA, CANTALEJO

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


def _date_key(fact: DutyFact) -> tuple:
    return (fact.date.day, fact.date.month_number, fact.date.year)


def assemble(facts: Iterable[DutyFact]) -> Dict[DutyLocation, List[PharmacySchedule]]:
    """
    Agrupa hechos por ubicación y día, fusionando las franjas de varias líneas.
    Una farmacia igual a otra ya presente en la misma franja no se repite.
    El orden de salida es el de primera aparición de cada día.
    """
    grouped: Dict[DutyLocation, Dict[tuple, Tuple]] = {}
    for fact in facts:
        days = grouped.setdefault(fact.location, {})
        key = _date_key(fact)
        if key not in days:
            days[key] = (fact.date, {})
        _, shifts = days[key]
        pharmacies = shifts.setdefault(fact.shift, [])
        if fact.pharmacy in pharmacies:
            logger.debug("Farmacia repetida en %s %s: %s", fact.location.id, fact.date, fact.pharmacy.name)
            continue
        pharmacies.append(fact.pharmacy)

    result: Dict[DutyLocation, List[PharmacySchedule]] = {}
    for location, days in grouped.items():
        result[location] = [PharmacySchedule(d, shifts) for d, shifts in days.values()]
    return result


def _alternating_schedules(
    scaffold: List[PharmacySchedule], first: DirectoryEntry, second: DirectoryEntry
) -> List[PharmacySchedule]:
    """Semana = índice // 7 + 1; semanas impares -> first, pares -> second."""
    schedules = []
    for index, schedule in enumerate(scaffold):
        week_number = index // DAYS_PER_WEEK + 1
        entry = first if week_number % 2 == 1 else second
        schedules.append(PharmacySchedule(schedule.date, {entry.shift: [entry.pharmacy]}))
    return schedules


def derive_la_granja(
    schedules: Dict[DutyLocation, List[PharmacySchedule]],
    first: Optional[DirectoryEntry],
    second: Optional[DirectoryEntry],
) -> Dict[DutyLocation, List[PharmacySchedule]]:
    """Añade La Granja si hay andamiaje y se sabe qué candidata aparece antes."""
    if first is None or second is None:
        logger.warning("La Granja omitida: ninguna de sus farmacias aparece en el boletín")
        return schedules
    scaffold = schedules.get(location_from_zbs(NAVAS_ASUNCION))
    if not scaffold:
        logger.warning("La Granja omitida: Navas de la Asunción no tiene calendarios")
        return schedules
    result = dict(schedules)
    result[location_from_zbs(LA_GRANJA)] = _alternating_schedules(scaffold, first, second)
    return result


def derive_cantalejo(
    schedules: Dict[DutyLocation, List[PharmacySchedule]],
    pharmacies: Tuple[Pharmacy, ...] = CANTALEJO_PHARMACIES,
    shift: DutyTimeSpan = RURAL_DAYTIME,
) -> Dict[DutyLocation, List[PharmacySchedule]]:
    """Añade Cantalejo: la pareja fija en todas las fechas de Navas de la Asunción."""
    scaffold = schedules.get(location_from_zbs(NAVAS_ASUNCION))
    if not scaffold:
        logger.warning("Cantalejo omitida: Navas de la Asunción no tiene calendarios")
        return schedules
    result = dict(schedules)
    result[location_from_zbs(CANTALEJO)] = [
        PharmacySchedule(s.date, {shift: list(pharmacies)}) for s in scaffold
    ]
    return result


def find_current_schedule(
    schedules: List[PharmacySchedule], now: Optional[datetime] = None
) -> Optional[Tuple[PharmacySchedule, DutyTimeSpan]]:
    """
    Calendario y franja de guardia en `now`. Si ninguna franja lo contiene,
    el primer calendario de ese mismo día (con su primera franja); si no, None.
    """
    if now is None:
        now = datetime.now()
    for schedule in schedules:
        for span in schedule.shifts:
            if span.contains(schedule.date, now):
                return schedule, span
    today = now.date()
    for schedule in schedules:
        if schedule.date.to_date() == today:
            logger.debug("Sin franja activa a las %s; se usa el calendario del día", now.strftime("%H:%M"))
            return schedule, next(iter(schedule.shifts))
    return None
