# -*- coding: utf-8 -*-
"""
Segovia Rural: una línea por día con fecha 'dd-mmm-yy' y las farmacias de varias ZBS.

La fecha de la línea se aplica a todas las zonas cuyas etiquetas aparecen en ella.
Además se anota cuál de las dos farmacias de La Granja aparece primero en el
documento, que es lo único que el boletín revela de su rotación.
"""

import logging
from typing import List, Optional, Tuple

from .dates import resolve_rural_date
from .directory import DirectoryEntry, RURAL_DIRECTORY, LA_GRANJA_CANDIDATES
from .entities import DutyFact
from .locations import location_from_id
from .segment import find_rural_dates, split_lines

logger = logging.getLogger(__name__)


def first_la_granja_candidate(line: str) -> Optional[DirectoryEntry]:
    """Candidata de La Granja que aparece antes en la línea, o None si no aparece ninguna."""
    lowered = line.lower()
    found = []
    for entry in LA_GRANJA_CANDIDATES:
        index = lowered.find(entry.label.lower())
        if index >= 0:
            found.append((index, entry))
    if not found:
        return None
    return min(found, key=lambda pair: pair[0])[1]


def other_la_granja_candidate(entry: DirectoryEntry) -> DirectoryEntry:
    return next(c for c in LA_GRANJA_CANDIDATES if c is not entry)


def rural_line_facts(line: str, base_year: int) -> List[DutyFact]:
    """Hechos de una línea: primera fecha de la línea x farmacias de cada zona presentes."""
    dates = find_rural_dates(line)
    if not dates:
        logger.debug("Línea ignorada: %s", line)
        return []
    day, abbr, yy = dates[0]
    duty_date = resolve_rural_date(day, abbr, yy, base_year)
    if duty_date is None:
        return []
    facts: List[DutyFact] = []
    for zbs_id, directory in RURAL_DIRECTORY.items():
        entries = directory.find_all(line)
        if not entries:
            continue
        location = location_from_id(zbs_id)
        for entry in entries:
            facts.append(DutyFact(duty_date, location, entry.shift, entry.pharmacy))
    if not facts:
        logger.debug("Fecha %s sin farmacias reconocidas: %s", duty_date.token(), line)
    return facts


def rural_facts(pages: List[str], base_year: int) -> Tuple[List[DutyFact], Optional[DirectoryEntry]]:
    """
    Recorre el boletín en orden. Devuelve los hechos y la candidata de La Granja
    que aparece primero en el documento (None si no aparece ninguna).
    """
    facts: List[DutyFact] = []
    first_la_granja: Optional[DirectoryEntry] = None
    for page_number, page_text in enumerate(pages, start=1):
        for line in split_lines(page_text):
            try:
                if first_la_granja is None:
                    first_la_granja = first_la_granja_candidate(line)
                facts.extend(rural_line_facts(line, base_year))
            except Exception:
                logger.exception("Error en la página %d, línea: %s", page_number, line)
    if first_la_granja is not None:
        logger.debug("La Granja: aparece primero %s", first_la_granja.label)
    return facts, first_la_granja
