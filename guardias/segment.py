# -*- coding: utf-8 -*-
"""Segmentación: normalizar líneas y reconocer fechas y etiquetas de farmacia."""

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple

# NBSP, espacios Unicode (U+2000–U+200A), separadores de línea/párrafo, tabuladores...
WHITESPACE = re.compile(r"[\s\u00A0\u2000-\u200A\u2028\u2029\u202F\u205F\u3000]+")

MONTH_ABBREVIATIONS = ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sep", "oct", "nov", "dic")
MONTH_NAMES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)
WEEKDAY_NAMES = ("Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo")

# "30-dic", "01-ene"; algunos PDF emiten el guion U+2010 en lugar del ASCII
REGULAR_DATE = re.compile(r"\b(\d{1,2})[\u2010-]([a-záéíóúñ]{3})\b", re.IGNORECASE)

# "02-dic-24" (solo boletín rural)
RURAL_DATE = re.compile(
    r"\b(\d{1,2})-(ene|feb|mar|abr|may|jun|jul|ago|sep|oct|nov|dic)-(\d{2})\b",
    re.IGNORECASE,
)

# "DOMINGO 31 DE AGOSTO Y LUNES 1 DE SEPTIEMBRE" (Cuéllar, cambio agosto/septiembre)
TRANSITION_DATE = re.compile(r"(\w+)\s+(\d{1,2})\s+DE\s+(AGOSTO|SEPTIEMBRE)\b", re.IGNORECASE)

# "lunes, 6 de enero 2025" (Segovia Capital; el año es opcional)
CAPITAL_DATE = re.compile(
    r"(lunes|martes|mi[ée]rcoles|jueves|viernes|s[áa]bado|domingo),\s*(\d{1,2})\s*de\s*"
    r"(enero|febrero|marzo|abril|mayo|junio|julio|agosto|septiembre|octubre|noviembre|diciembre)"
    r"(?:\s+(\d{4}))?",
    re.IGNORECASE,
)

# Primer día del año: incrementa el contador de año
NEW_YEAR_TOKEN = re.compile(r"^0?1[\u2010-]ene$", re.IGNORECASE)


def normalize_whitespace(text: str) -> str:
    """Colapsa cualquier variante de espacio a un único espacio ASCII."""
    return WHITESPACE.sub(" ", text).strip()


def split_lines(page_text: str) -> List[str]:
    """Líneas normalizadas y no vacías de una página."""
    lines = []
    for raw in page_text.splitlines():
        line = normalize_whitespace(raw)
        if line:
            lines.append(line)
    return lines


def month_name_from_abbreviation(abbr: str) -> Optional[str]:
    """'dic' -> 'diciembre'; None si no es una abreviatura conocida."""
    try:
        return MONTH_NAMES[MONTH_ABBREVIATIONS.index(abbr.lower().strip())]
    except ValueError:
        return None


def month_abbreviation(name: str) -> Optional[str]:
    """'diciembre' -> 'dic'."""
    try:
        return MONTH_ABBREVIATIONS[MONTH_NAMES.index(name.lower().strip())]
    except ValueError:
        return None


def _month_spanish_to_num(name: str) -> int:
    n = name.lower().strip()
    if n in MONTH_NAMES:
        return MONTH_NAMES.index(n) + 1
    if n in MONTH_ABBREVIATIONS:
        return MONTH_ABBREVIATIONS.index(n) + 1
    return 0


def weekday_name(d: date) -> str:
    """Nombre del día de la semana en castellano."""
    return WEEKDAY_NAMES[d.weekday()]


def find_regular_dates(line: str) -> List[str]:
    """Fechas 'dd-mmm' de la línea, con guion ASCII y mes en minúsculas."""
    return [f"{m.group(1)}-{m.group(2).lower()}" for m in REGULAR_DATE.finditer(line)]


def find_transition_dates(line: str) -> List[str]:
    """Fechas del formato frase de agosto/septiembre convertidas a 'dd-ago' / 'dd-sep'."""
    tokens = []
    for m in TRANSITION_DATE.finditer(line):
        abbr = "ago" if m.group(3).upper() == "AGOSTO" else "sep"
        tokens.append(f"{int(m.group(2)):02d}-{abbr}")
    return tokens


def find_rural_dates(line: str) -> List[Tuple[int, str, int]]:
    """Fechas 'dd-mmm-yy' como (día, abreviatura, año de dos cifras)."""
    return [(int(m.group(1)), m.group(2).lower(), int(m.group(3))) for m in RURAL_DATE.finditer(line)]


def is_new_year_token(token: str) -> bool:
    return bool(NEW_YEAR_TOKEN.match(token.strip()))


class LineKind(Enum):
    DATES = "dates"
    PHARMACY = "pharmacy"
    BOTH = "both"
    SKIP = "skip"


@dataclass
class ClassifiedLine:
    """Línea normalizada con sus fechas y la etiqueta de farmacia reconocida."""
    text: str
    dates: List[str] = field(default_factory=list)
    label: Optional[str] = None

    @property
    def kind(self) -> LineKind:
        if self.dates and self.label:
            return LineKind.BOTH
        if self.dates:
            return LineKind.DATES
        if self.label:
            return LineKind.PHARMACY
        return LineKind.SKIP


def classify_line(line: str, directory, with_transitions: bool = False) -> ClassifiedLine:
    """
    Clasifica una línea: fechas, etiqueta de farmacia, ambas o ninguna.
    `directory` es un PharmacyDirectory (ver directory.py). Con with_transitions
    se reconocen también las fechas en formato frase ("31 DE AGOSTO").
    """
    text = normalize_whitespace(line)
    dates = find_regular_dates(text)
    if with_transitions:
        dates += find_transition_dates(text)
    entry = directory.find(text)
    return ClassifiedLine(text=text, dates=dates, label=entry.label if entry else None)
