# -*- coding: utf-8 -*-
"""
Estrategias por región: tabla estática id de región -> función de análisis.

Todas devuelven {DutyLocation: [PharmacySchedule]} ordenado por fecha. Un
boletín vacío da un diccionario vacío; una línea o página que falla se registra
y se salta sin abortar el resto.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from . import config
from .columns import capital_facts
from .entities import BulletinDocument, DutyLocation, PharmacySchedule
from .locations import location_from_region, SEGOVIA_CAPITAL, CUELLAR, EL_ESPINAR, SEGOVIA_RURAL
from .normalize import sort_by_location
from .relations import assemble, derive_la_granja, derive_cantalejo
from .rural import rural_facts, other_la_granja_candidate
from .segment import CAPITAL_DATE, find_regular_dates, split_lines, _month_spanish_to_num
from .tables import cuellar_facts, el_espinar_facts
from .years import detect_year, starts_in_december

logger = logging.getLogger(__name__)

Schedules = Dict[DutyLocation, List[PharmacySchedule]]


class GuardiasError(Exception):
    """Error base del paquete."""


class UnknownRegionError(GuardiasError):
    def __init__(self, region_id: str):
        super().__init__(f"No hay estrategia para la región '{region_id}'")
        self.region_id = region_id


def _first_regular_date(pages: List[str]) -> Optional[Tuple[int, int]]:
    for page in pages:
        for line in split_lines(page):
            tokens = find_regular_dates(line)
            if tokens:
                day, abbr = tokens[0].split("-", 1)
                return int(day), _month_spanish_to_num(abbr)
    return None


def _first_capital_date(pages: List[str]) -> Optional[Tuple[int, int]]:
    for page in pages:
        m = CAPITAL_DATE.search(page)
        if m:
            return int(m.group(2)), _month_spanish_to_num(m.group(3))
    return None


def _first_page_text(document: BulletinDocument) -> str:
    """Texto de la primera página: el año del boletín se busca solo ahí."""
    return document.pages[0] if document.pages else ""


def counter_seed(
    document: BulletinDocument, first_date: Optional[Tuple[int, int]], current_year: Optional[int] = None
) -> int:
    """
    Año de partida del contador: el año detectado del boletín, menos uno si la
    primera fecha es el 1 de enero (el contador avanzará al leerla) o si es de
    diciembre y la detección no lo ha corregido ya.
    """
    first_page = _first_page_text(document)
    detection = detect_year(first_page, document.source_url, current_year)
    seed = detection.year
    if first_date == (1, 1):
        seed -= 1
    elif first_date is not None and first_date[1] == 12 and not starts_in_december(first_page):
        seed -= 1
    logger.debug("Año de partida %d (detectado %d, %s)", seed, detection.year, detection.source.value)
    return seed


def parse_segovia_capital(
    document: BulletinDocument, seed_year: Optional[int] = None, current_year: Optional[int] = None
) -> Schedules:
    if seed_year is None:
        seed_year = counter_seed(document, _first_capital_date(document.pages), current_year)
    location = location_from_region(SEGOVIA_CAPITAL)
    facts = capital_facts(document.pages, seed_year, location, document.layouts)
    return assemble(facts)


def parse_cuellar(
    document: BulletinDocument, seed_year: Optional[int] = None, current_year: Optional[int] = None
) -> Schedules:
    if seed_year is None:
        seed_year = counter_seed(document, _first_regular_date(document.pages), current_year)
    return assemble(cuellar_facts(document.pages, seed_year, location_from_region(CUELLAR)))


def parse_el_espinar(
    document: BulletinDocument, seed_year: Optional[int] = None, current_year: Optional[int] = None
) -> Schedules:
    if seed_year is None:
        seed_year = (current_year or config.current_year()) - 1
    return assemble(el_espinar_facts(document.pages, seed_year, location_from_region(EL_ESPINAR)))


def parse_segovia_rural(
    document: BulletinDocument, seed_year: Optional[int] = None, current_year: Optional[int] = None
) -> Schedules:
    """Ocho ZBS: las leídas directamente más La Granja y Cantalejo derivadas."""
    if seed_year is None:
        detection = detect_year(_first_page_text(document), document.source_url, current_year)
        if detection.warning:
            logger.warning("Segovia Rural: %s", detection.warning)
        seed_year = detection.year
    facts, first_la_granja = rural_facts(document.pages, seed_year)
    schedules = assemble(facts)
    second = other_la_granja_candidate(first_la_granja) if first_la_granja else None
    schedules = derive_la_granja(schedules, first_la_granja, second)
    return derive_cantalejo(schedules)


RegionParser = Callable[..., Schedules]

STRATEGIES: Dict[str, RegionParser] = {
    SEGOVIA_CAPITAL.id: parse_segovia_capital,
    CUELLAR.id: parse_cuellar,
    EL_ESPINAR.id: parse_el_espinar,
    SEGOVIA_RURAL.id: parse_segovia_rural,
}


def parse_bulletin(
    region_id: str,
    document: BulletinDocument,
    seed_year: Optional[int] = None,
    current_year: Optional[int] = None,
) -> Schedules:
    """
    Analiza el boletín de una región. Lanza UnknownRegionError si la región no
    tiene estrategia; un documento sin texto devuelve {}.
    """
    strategy = STRATEGIES.get(region_id)
    if strategy is None:
        raise UnknownRegionError(region_id)
    if document.is_empty:
        logger.warning("Boletín de %s sin texto: no hay calendarios", region_id)
        return {}
    schedules = strategy(document, seed_year=seed_year, current_year=current_year)
    for location, items in schedules.items():
        logger.info("%s: %d calendarios", location.name, len(items))
    return sort_by_location(schedules, current_year)
