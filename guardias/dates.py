# -*- coding: utf-8 -*-
"""
Fechas: convertir tokens 'dd-mmm' / 'dd-mmm-yy' en DutyDate con año absoluto.

Las estrategias de tabla llevan un contador de año que avanza en cada '01-ene'
encontrado en orden de lectura; el boletín rural trae años de dos cifras que se
expanden contra el año base del documento.
"""

import logging
import re
from datetime import date
from typing import List, Optional, Tuple

from . import config
from .entities import DutyDate
from .segment import month_name_from_abbreviation, is_new_year_token, weekday_name, MONTH_NAMES

logger = logging.getLogger(__name__)

RE_TOKEN = re.compile(r"^\s*(\d{1,2})[\u2010-]([a-záéíóúñ]{3})\s*$", re.IGNORECASE)


def _weekday_or_none(year: Optional[int], month: str, day: int) -> Optional[str]:
    if year is None:
        return None
    try:
        return weekday_name(date(year, MONTH_NAMES.index(month) + 1, day))
    except ValueError:
        return None


def build_date(day: int, month_name: str, year: Optional[int]) -> Optional[DutyDate]:
    """DutyDate con día de la semana calculado si la fecha existe; None si el día no es 1..31."""
    if not 1 <= day <= 31:
        return None
    return DutyDate(_weekday_or_none(year, month_name, day), day, month_name, year)


def parse_token(token: str, year: Optional[int] = None) -> Optional[DutyDate]:
    """'30-dic' -> DutyDate(30, 'diciembre', year); None si el mes no es una abreviatura conocida."""
    m = RE_TOKEN.match(token)
    if not m:
        return None
    month_name = month_name_from_abbreviation(m.group(2))
    if month_name is None:
        return None
    return build_date(int(m.group(1)), month_name, year)


def advance_year(token: str, year: int) -> int:
    """Paso del contador de año: +1 si el token es el 1 de enero."""
    if is_new_year_token(token):
        logger.debug("Año nuevo en '%s': %d -> %d", token, year, year + 1)
        return year + 1
    return year


def resolve_tokens(tokens: List[str], year: int) -> Tuple[List[DutyDate], int]:
    """
    Resuelve en orden una lista de tokens 'dd-mmm' con el contador de año.
    Devuelve (fechas, año final). Los tokens irresolubles se descartan uno a uno.
    """
    dates: List[DutyDate] = []
    for token in tokens:
        year = advance_year(token, year)
        duty_date = parse_token(token, year)
        if duty_date is None:
            logger.warning("Fecha irreconocible descartada: '%s'", token)
            continue
        dates.append(duty_date)
    return dates, year


def expand_two_digit_year(yy: int, base_year: int) -> int:
    """
    Expande un año de dos cifras contra el año base:
    igual -> base; menor -> base - diferencia; mayor -> base + diferencia.
    """
    base_last_two = base_year % 100
    if yy == base_last_two:
        return base_year
    if yy < base_last_two:
        return base_year - (base_last_two - yy)
    return base_year + (yy - base_last_two)


def resolve_rural_date(day: int, abbr: str, yy: int, base_year: int) -> Optional[DutyDate]:
    """Fecha 'dd-mmm-yy' del boletín rural; None si el mes o el año expandido no son válidos."""
    month_name = month_name_from_abbreviation(abbr)
    if month_name is None:
        logger.warning("Mes desconocido en fecha rural: %s-%s-%02d", day, abbr, yy)
        return None
    year = expand_two_digit_year(yy, base_year)
    if abs(year - base_year) > config.YEAR_VALID_SPAN:
        logger.warning("Año fuera de rango en fecha rural %s-%s-%02d (base %d)", day, abbr, yy, base_year)
        return None
    return build_date(day, month_name, year)
