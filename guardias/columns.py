# -*- coding: utf-8 -*-
"""
Segovia Capital: tres columnas (fecha | farmacia diurna | farmacia nocturna).

Con maquetación (páginas de pdfplumber) se recorre cada página en franjas
verticales; una franja es fila si la columna de fecha trae una fecha con día de
la semana y las dos columnas de farmacia traen al menos 3 líneas descriptivas.
Si no, la franja es ruido y se avanza un paso menor. Las filas aceptadas dan
tres secuencias paralelas que se emparejan por posición.

Sin maquetación (solo texto) se pliegan las líneas: "FARMACIA ... FARMACIA ..."
da los nombres, la línea de fecha da fecha y direcciones, la de "Tfno:" los
teléfonos; cuando todo está completo se emiten las dos guardias del día.
"""

import logging
import re
from dataclasses import dataclass, replace
from typing import List, Optional, Protocol, Tuple

from . import config
from .dates import build_date
from .entities import DutyDate, DutyFact, DutyLocation, Pharmacy, CAPITAL_DAY, CAPITAL_NIGHT
from .segment import CAPITAL_DATE, split_lines, normalize_whitespace

logger = logging.getLogger(__name__)

PHARMACY_DELIMITER = "FARMACIA"
RE_PHARMACY_NAMES = re.compile(r"^(FARMACIA.*)(FARMACIA.*)$")
RE_SEPARATOR_LINE = re.compile(r"^[\s\-_=]+$")
RE_NUMERIC_LINE = re.compile(r"^[\d\s\-]+$")
RE_PHONE_AND_INFO = re.compile(r"(?:(\([^)]+\)) *)?Tfno: *(\d{3} *\d{6})", re.IGNORECASE)
RE_ADDRESSES = re.compile(
    r"^(?:lunes|martes|mi[ée]rcoles|jueves|viernes|s[áa]bado|domingo),\s*\d{1,2}\s*de\s*"
    r"(?:enero|febrero|marzo|abril|mayo|junio|julio|agosto|septiembre|octubre|noviembre|diciembre)"
    r"\s+(.+?)(?:,\s*)?(\d+|S/N)\s+(.+?)(?:,\s*)?(\d+|S/N)$",
    re.IGNORECASE,
)
WEEKDAYS = ("lunes", "martes", "miércoles", "miercoles", "jueves", "viernes", "sábado", "sabado", "domingo")


class PageLayout(Protocol):
    """Página con geometría: ancho, alto y texto dentro de un rectángulo (coordenadas desde arriba)."""
    width: float
    height: float

    def text_in(self, x0: float, top: float, x1: float, bottom: float) -> str:
        ...


# --- Fechas y bloques -------------------------------------------------------

def is_date_string(text: str) -> bool:
    """Filtro rápido de la columna de fecha: longitud, 'de' y un día de la semana."""
    if len(text) < 15 or "de" not in text:
        return False
    lowered = text.lower()
    return any(day in lowered for day in WEEKDAYS)


def parse_capital_date(text: str, year: int) -> Optional[Tuple[DutyDate, int]]:
    """
    'lunes, 6 de enero' -> (DutyDate, año en curso actualizado).
    Un año explícito en la fecha manda; si no, el contador avanza en el 1 de enero.
    """
    m = CAPITAL_DATE.search(text)
    if not m:
        return None
    day = int(m.group(2))
    month = m.group(3).lower()
    if m.group(4):
        year = int(m.group(4))
    elif day == 1 and month == "enero":
        year += 1
        logger.debug("1 de enero: el año pasa a %d", year)
    duty_date = build_date(day, month, year)
    if duty_date is None:
        return None
    return replace(duty_date, day_of_week=m.group(1).capitalize()), year


def descriptive_lines(text: str) -> List[str]:
    """Líneas útiles de una columna de farmacia (sin separadores ni números sueltos)."""
    lines = []
    for raw in text.splitlines():
        line = normalize_whitespace(raw)
        if len(line) <= 3 or RE_SEPARATOR_LINE.match(line) or RE_NUMERIC_LINE.match(line):
            continue
        lines.append(line)
    return lines


def group_pharmacies(lines: List[str]) -> List[Pharmacy]:
    """
    Agrupa las líneas de una columna en farmacias de tres líneas (nombre, dirección, info).
    Una línea con FARMACIA abre grupo; un grupo incompleto se descarta.
    """
    pharmacies: List[Pharmacy] = []
    group: List[str] = []
    for line in lines:
        if PHARMACY_DELIMITER in line.upper():
            if group:
                logger.debug("Grupo de farmacia incompleto descartado: %s", group)
            group = [line]
            continue
        group.append(line)
        if len(group) == 3:
            pharmacies.append(Pharmacy.parse(*group))
            group = []
    if group:
        logger.debug("Grupo de farmacia incompleto al final de la columna: %s", group)
    return pharmacies


# --- Recorrido por franjas --------------------------------------------------

@dataclass(frozen=True)
class ColumnGeometry:
    date_x0: float
    date_x1: float
    day_x0: float
    day_x1: float
    night_x0: float
    night_x1: float

    @classmethod
    def for_width(cls, width: float) -> "ColumnGeometry":
        margin = config.CAPITAL_PAGE_MARGIN
        gap = config.CAPITAL_COLUMN_GAP
        content = width - 2 * margin
        date_w = content * config.CAPITAL_DATE_COLUMN_RATIO
        pharmacy_w = (content - date_w - 2 * gap) / 2
        day_x0 = margin + date_w + gap
        night_x0 = day_x0 + pharmacy_w + gap
        return cls(margin, margin + date_w, day_x0, day_x0 + pharmacy_w, night_x0, night_x0 + pharmacy_w)


@dataclass
class ColumnRow:
    date_text: str
    day_lines: List[str]
    night_lines: List[str]


def scan_rows(layout: PageLayout) -> List[ColumnRow]:
    """Franjas aceptadas de una página, de arriba abajo."""
    geometry = ColumnGeometry.for_width(layout.width)
    band = config.CAPITAL_BAND_HEIGHT
    step = config.CAPITAL_RETRY_STEP
    min_lines = config.CAPITAL_MIN_BLOCK_LINES
    rows: List[ColumnRow] = []
    y = config.CAPITAL_CONTENT_TOP
    while y + step <= layout.height:
        bottom = min(y + band, layout.height)
        date_lines = [
            normalize_whitespace(l)
            for l in layout.text_in(geometry.date_x0, y, geometry.date_x1, bottom).splitlines()
        ]
        date_text = next((l for l in date_lines if is_date_string(l) and CAPITAL_DATE.search(l)), None)
        day_lines = descriptive_lines(layout.text_in(geometry.day_x0, y, geometry.day_x1, bottom))
        night_lines = descriptive_lines(layout.text_in(geometry.night_x0, y, geometry.night_x1, bottom))
        if date_text and len(day_lines) >= min_lines and len(night_lines) >= min_lines:
            rows.append(ColumnRow(date_text, day_lines, night_lines))
            y += band
        else:
            y += step
    return rows


def layout_page_facts(
    layout: PageLayout, year: int, location: DutyLocation
) -> Tuple[List[DutyFact], int]:
    """Hechos de una página con maquetación; devuelve también el año en curso."""
    dates: List[DutyDate] = []
    day_lines: List[str] = []
    night_lines: List[str] = []
    seen = set()
    for row in scan_rows(layout):
        key = row.date_text.lower()
        if key in seen:
            continue
        seen.add(key)
        parsed = parse_capital_date(row.date_text, year)
        if parsed is None:
            logger.warning("Fecha de Segovia Capital irreconocible: %s", row.date_text)
            continue
        duty_date, year = parsed
        dates.append(duty_date)
        day_lines.extend(row.day_lines)
        night_lines.extend(row.night_lines)

    day_pharmacies = group_pharmacies(day_lines)
    night_pharmacies = group_pharmacies(night_lines)
    if not (len(dates) == len(day_pharmacies) == len(night_pharmacies)):
        logger.warning(
            "Columnas descompensadas: %d fechas, %d diurnas, %d nocturnas",
            len(dates), len(day_pharmacies), len(night_pharmacies),
        )
    facts: List[DutyFact] = []
    for duty_date, day_pharmacy, night_pharmacy in zip(dates, day_pharmacies, night_pharmacies):
        facts.append(DutyFact(duty_date, location, CAPITAL_DAY, day_pharmacy))
        facts.append(DutyFact(duty_date, location, CAPITAL_NIGHT, night_pharmacy))
    return facts, year


# --- Plegado de texto -------------------------------------------------------

@dataclass(frozen=True)
class ShiftBuilder:
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    info: Optional[str] = None

    @property
    def complete(self) -> bool:
        return bool(self.name and self.address and self.phone)

    def build(self) -> Pharmacy:
        return Pharmacy(self.name.strip(), self.address.strip(), self.phone, self.info or None)


@dataclass(frozen=True)
class CapitalState:
    year: int
    date: Optional[DutyDate] = None
    day: ShiftBuilder = ShiftBuilder()
    night: ShiftBuilder = ShiftBuilder()


def _format_address(street: str, number: str) -> str:
    street = street.strip().rstrip(",")
    if number.upper() == "S/N":
        return f"{street} S/N"
    return f"{street}, {int(number)}"


def capital_text_step(state: CapitalState, line: str, location: DutyLocation) -> Tuple[CapitalState, List[DutyFact]]:
    """Una línea del texto plano de Segovia Capital."""
    if PHARMACY_DELIMITER in line:
        m = RE_PHARMACY_NAMES.match(line)
        if m:
            state = replace(
                state,
                day=replace(state.day, name=m.group(1).strip()),
                night=replace(state.night, name=m.group(2).strip()),
            )
    elif CAPITAL_DATE.search(line):
        parsed = parse_capital_date(line, state.year)
        if parsed is not None:
            state = replace(state, date=parsed[0], year=parsed[1])
        m = RE_ADDRESSES.match(line)
        if m:
            state = replace(
                state,
                day=replace(state.day, address=_format_address(m.group(1), m.group(2))),
                night=replace(state.night, address=_format_address(m.group(3), m.group(4))),
            )
    elif "Tfno:" in line or "tfno:" in line.lower():
        matches = RE_PHONE_AND_INFO.findall(line)
        if len(matches) >= 2:
            (day_info, day_phone), (night_info, night_phone) = matches[0], matches[1]
            state = replace(
                state,
                day=replace(state.day, phone=day_phone, info=day_info.strip("() ") or None),
                night=replace(state.night, phone=night_phone, info=night_info.strip("() ") or None),
            )
        else:
            logger.debug("Línea de teléfonos incompleta: %s", line)
    else:
        logger.debug("Línea ignorada: %s", line)
        return state, []

    if state.date is not None and state.day.complete and state.night.complete:
        facts = [
            DutyFact(state.date, location, CAPITAL_DAY, state.day.build()),
            DutyFact(state.date, location, CAPITAL_NIGHT, state.night.build()),
        ]
        return CapitalState(year=state.year), facts
    return state, []


def text_page_facts(page_text: str, year: int, location: DutyLocation) -> Tuple[List[DutyFact], int]:
    state = CapitalState(year=year)
    facts: List[DutyFact] = []
    for line in split_lines(page_text):
        try:
            state, new_facts = capital_text_step(state, line, location)
        except Exception:
            logger.exception("Error procesando la línea: %s", line)
            continue
        facts.extend(new_facts)
    if state.date is not None or state.day.name or state.night.name:
        logger.warning("Segovia Capital: guardia incompleta descartada al final de la página (%s)", state.date)
    return facts, state.year


def capital_facts(
    pages: List[str], seed_year: int, location: DutyLocation, layouts: Optional[List[PageLayout]] = None
) -> List[DutyFact]:
    """Hechos de todo el boletín; por maquetación si la hay, si no por texto."""
    facts: List[DutyFact] = []
    year = seed_year
    if layouts:
        for page_number, layout in enumerate(layouts, start=1):
            try:
                page_facts, year = layout_page_facts(layout, year, location)
            except Exception:
                logger.exception("Error en la página %d de Segovia Capital", page_number)
                continue
            facts.extend(page_facts)
        return facts
    for page_text in pages:
        page_facts, year = text_page_facts(page_text, year, location)
        facts.extend(page_facts)
    return facts
