# -*- coding: utf-8 -*-
"""
Detección del año base de un boletín, por capas (la primera que acierta gana):

1. URL del PDF, de derecha a izquierda (el año del nombre de fichero manda sobre el de la ruta).
2. Texto, patrón estricto "2025" o "2024-2025" (se toma el primero).
3. Texto, patrón flexible que tolera separadores ("2 0 2 5", "2.025").
4. Año en curso.

Después se aplica el ajuste de diciembre: si hay una fecha "dd-dic" en los
primeros caracteres del texto, el boletín empieza en la cola del año anterior.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import config

logger = logging.getLogger(__name__)

RE_URL_YEAR = re.compile(r"(\d{4})")
RE_TEXT_YEAR = re.compile(r"\b(20[2-3]\d)(?:\s*-\s*20[2-3]\d)?\b")
RE_FLEXIBLE_YEAR = re.compile(r"2\D?0\D?([2-3])\D?(\d)")
RE_DECEMBER_DATE = re.compile(r"\b\d{1,2}[\u2010-]dic\b", re.IGNORECASE)


class YearSource(Enum):
    URL = "url"
    PDF = "pdf"
    FLEXIBLE = "flexible"
    FALLBACK_DECEMBER = "fallback_december"
    FALLBACK_CURRENT = "fallback_current"
    INVALID = "invalid"


@dataclass(frozen=True)
class YearDetectionResult:
    year: int
    source: YearSource
    is_valid: bool
    warning: Optional[str] = None
    original: Optional[str] = None


def validate_year(year: int, current_year: int) -> tuple[bool, Optional[str]]:
    """(válido, aviso): válido si |año - actual| <= 2; aviso justo en el borde."""
    difference = abs(year - current_year)
    if difference > config.YEAR_VALID_SPAN:
        return False, (
            f"El año {year} está fuera del rango válido (±{config.YEAR_VALID_SPAN} respecto a {current_year}); "
            "el PDF puede estar desactualizado"
        )
    if difference == config.YEAR_VALID_SPAN:
        return True, f"El año {year} está en el límite del rango válido (±{config.YEAR_VALID_SPAN} respecto a {current_year})"
    return True, None


def year_from_url(url: str, current_year: int) -> Optional[int]:
    """Año más a la derecha de la URL que sea plausible (actual ± 20)."""
    for candidate in reversed(RE_URL_YEAR.findall(url)):
        year = int(candidate)
        if abs(year - current_year) <= config.YEAR_URL_PLAUSIBLE_SPAN:
            return year
    return None


def year_from_text(text: str) -> Optional[int]:
    m = RE_TEXT_YEAR.search(text)
    return int(m.group(1)) if m else None


def year_from_text_flexible(text: str) -> Optional[int]:
    m = RE_FLEXIBLE_YEAR.search(text)
    if not m:
        return None
    year = int(f"20{m.group(1)}{m.group(2)}")
    if config.YEAR_TEXT_MIN <= year <= config.YEAR_TEXT_MAX:
        return year
    return None


def starts_in_december(text: str) -> bool:
    """Heurística: una fecha de diciembre en los primeros caracteres indica inicio en diciembre."""
    return bool(RE_DECEMBER_DATE.search(text[:config.DECEMBER_SCAN_CHARS]))


def _detect_from_sources(text: str, source_url: Optional[str], current_year: int) -> tuple[int, YearSource, Optional[str]]:
    layers = []
    if source_url:
        layers.append((YearSource.URL, lambda: year_from_url(source_url, current_year)))
    layers.append((YearSource.PDF, lambda: year_from_text(text)))
    layers.append((YearSource.FLEXIBLE, lambda: year_from_text_flexible(text)))

    for source, extract in layers:
        year = extract()
        if year is None:
            logger.debug("Capa %s: sin año", source.value)
            continue
        ok, warning = validate_year(year, current_year)
        if ok:
            logger.debug("Capa %s: año %d", source.value, year)
            return year, source, warning
        logger.debug("Capa %s: año %d descartado (%s)", source.value, year, warning)

    logger.debug("Sin año en URL ni texto; se usa el año en curso %d", current_year)
    return current_year, YearSource.FALLBACK_CURRENT, None


def detect_year(text: str, source_url: Optional[str] = None, current_year: Optional[int] = None) -> YearDetectionResult:
    """
    Año base del documento. Siempre devuelve un resultado; is_valid=False solo
    cuando no hay ni texto ni URL de los que sacar nada.
    """
    if current_year is None:
        current_year = config.current_year()
    if not text.strip() and not source_url:
        reason = "No se pudo detectar el año: documento sin texto y sin URL"
        logger.warning(reason)
        return YearDetectionResult(current_year, YearSource.INVALID, False, reason)

    year, source, warning = _detect_from_sources(text, source_url, current_year)

    if starts_in_december(text):
        adjusted = year - 1
        if source is YearSource.FALLBACK_CURRENT:
            source = YearSource.FALLBACK_DECEMBER
        warning = f"Año {year} ajustado a {adjusted} por empezar el calendario en diciembre"
        logger.info(warning)
        return YearDetectionResult(adjusted, source, True, warning, str(year))

    if warning:
        logger.warning(warning)
    return YearDetectionResult(year, source, True, warning, str(year))
