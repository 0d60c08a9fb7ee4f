# -*- coding: utf-8 -*-
"""
Entidades: fechas de guardia, franjas horarias, farmacias y calendarios.

Todas son dataclasses congeladas y cada calendario guarda su propia copia de
franjas y farmacias: un nuevo análisis del boletín sustituye la colección
completa de calendarios de una ubicación, nunca se modifican en sitio.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional

from . import config
from .segment import _month_spanish_to_num, month_abbreviation, weekday_name, MONTH_NAMES


@dataclass(frozen=True)
class DutyDate:
    """Fecha tal como aparece en el boletín; el año puede faltar hasta resolverlo."""
    day_of_week: Optional[str]
    day: int
    month: str              # nombre completo en castellano: "enero", "diciembre"...
    year: Optional[int] = None

    @classmethod
    def from_date(cls, d: date) -> "DutyDate":
        return cls(weekday_name(d), d.day, MONTH_NAMES[d.month - 1], d.year)

    @property
    def month_number(self) -> int:
        """1..12, o 0 si el mes no se reconoce."""
        return _month_spanish_to_num(self.month)

    def to_date(self) -> Optional[date]:
        """Fecha del calendario, o None si falta el año o la fecha no existe (erratas del PDF)."""
        if self.year is None or not self.month_number:
            return None
        try:
            return date(self.year, self.month_number, self.day)
        except ValueError:
            return None

    def token(self) -> str:
        """Formato 'dd-mmm' ("02-dic")."""
        return f"{self.day:02d}-{month_abbreviation(self.month) or self.month[:3].lower()}"

    def sort_key(self, current_year: int) -> tuple:
        return (self.year if self.year is not None else current_year, self.month_number, self.day)

    def __str__(self) -> str:
        prefix = f"{self.day_of_week}, " if self.day_of_week else ""
        suffix = f" {self.year}" if self.year is not None else ""
        return f"{prefix}{self.day} de {self.month}{suffix}"


@dataclass(frozen=True)
class DutyTimeSpan:
    """
    Franja horaria de guardia. La identidad es el par (inicio, fin): dos franjas
    con las mismas horas son intercambiables aunque tengan distinto nombre.
    """
    name: str = field(compare=False)
    start: time
    end: time

    @property
    def crosses_midnight(self) -> bool:
        return self.end < self.start

    @property
    def label(self) -> str:
        return config.SHIFT_LABELS.get(self.name, self.name)

    @property
    def key(self) -> str:
        """'HH:MM-HH:MM', clave estable para serializar."""
        return f"{self.start:%H:%M}-{self.end:%H:%M}"

    @classmethod
    def from_key(cls, key: str, name: str = "") -> "DutyTimeSpan":
        start_s, end_s = key.split("-", 1)
        start = config._parse_time(start_s)
        end = config._parse_time(end_s)
        for span in CATALOG:
            if span.start == start and span.end == end:
                return span
        return cls(name or key, start, end)

    def bounds(self, duty_date: DutyDate) -> tuple[datetime, datetime] | None:
        """Inicio y fin absolutos de la guardia del día `duty_date` (la nocturna acaba al día siguiente)."""
        anchor = duty_date.to_date()
        if anchor is None:
            return None
        start = datetime.combine(anchor, self.start)
        end = datetime.combine(anchor, self.end)
        if self.crosses_midnight:
            end += timedelta(days=1)
        return start, end

    def contains(self, duty_date: DutyDate, moment: datetime) -> bool:
        """True si `moment` cae dentro de la guardia de ese día (resolución de minutos)."""
        bounds = self.bounds(duty_date)
        if bounds is None:
            return False
        start, end = bounds
        moment = moment.replace(second=0, microsecond=0, tzinfo=None)
        return start <= moment <= end

    def __str__(self) -> str:
        return f"{self.start:%H:%M} - {self.end:%H:%M}"


def _span(name: str) -> DutyTimeSpan:
    start, end = config.SHIFT_WINDOWS[name]
    return DutyTimeSpan(name, start, end)


FULL_DAY = _span("full_day")
CAPITAL_DAY = _span("capital_day")
CAPITAL_NIGHT = _span("capital_night")
RURAL_DAYTIME = _span("rural_daytime")
RURAL_EXTENDED_DAYTIME = _span("rural_extended_daytime")

CATALOG = (FULL_DAY, CAPITAL_DAY, CAPITAL_NIGHT, RURAL_DAYTIME, RURAL_EXTENDED_DAYTIME)

RE_PHONE = re.compile(r"Tfno:\s*(\d{3}\s*\d{6})")


@dataclass(frozen=True)
class Pharmacy:
    """Farmacia: valor inmutable, sin identidad compartida entre calendarios."""
    name: str
    address: str
    phone: str
    additional_info: Optional[str] = None

    @classmethod
    def parse(cls, name: str, address: str, info_raw: str) -> "Pharmacy":
        """Construye la farmacia a partir de la tercera línea del bloque ("(info) Tfno: 921 123456")."""
        m = RE_PHONE.search(info_raw)
        phone = m.group(1) if m else ""
        rest = info_raw.replace(m.group(0), "") if m else info_raw
        rest = rest.strip()
        return cls(name=name.strip(), address=address.strip(), phone=phone, additional_info=rest or None)


@dataclass(frozen=True)
class PharmacySchedule:
    """Un día de una ubicación: franja -> farmacias de guardia, en orden."""
    date: DutyDate
    shifts: Dict[DutyTimeSpan, List[Pharmacy]]

    def __post_init__(self):
        if not self.shifts:
            raise ValueError(f"Calendario sin franjas para {self.date}")
        for span, pharmacies in self.shifts.items():
            if not pharmacies:
                raise ValueError(f"Franja {span} sin farmacias para {self.date}")
        object.__setattr__(self, "shifts", {span: list(pharmacies) for span, pharmacies in self.shifts.items()})

    def pharmacies_for(self, span: DutyTimeSpan) -> List[Pharmacy]:
        return list(self.shifts.get(span, []))


@dataclass(frozen=True)
class DutyLocation:
    """Lugar con calendario propio: una región simple o una ZBS de Segovia Rural."""
    id: str
    name: str = field(compare=False)
    icon: str = field(default="", compare=False)
    notes: Optional[str] = field(default=None, compare=False)
    region_id: Optional[str] = field(default=None, compare=False)


@dataclass
class BulletinDocument:
    """
    Boletín ya extraído: texto por página, URL de origen (solo como pista de año),
    páginas con maquetación para la estrategia por columnas y fecha de modificación del PDF.
    """
    pages: List[str]
    source_url: Optional[str] = None
    layouts: Optional[list] = None
    last_modified: Optional[float] = None

    @property
    def text(self) -> str:
        return "\n".join(self.pages)

    @property
    def is_empty(self) -> bool:
        return not any(page.strip() for page in self.pages)


@dataclass(frozen=True)
class DutyFact:
    """Hecho elemental extraído de una línea: (fecha, ubicación, franja, farmacia)."""
    date: DutyDate
    location: DutyLocation
    shift: DutyTimeSpan
    pharmacy: Pharmacy
