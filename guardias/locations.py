# -*- coding: utf-8 -*-
"""Catálogo fijo de regiones y de las ocho ZBS (Zonas Básicas de Salud) de Segovia Rural."""

from dataclasses import dataclass
from typing import List, Optional

from . import config
from .entities import DutyLocation


@dataclass(frozen=True)
class ZBS:
    """Zona Básica de Salud de la región rural."""
    id: str
    name: str
    icon: str
    notes: str = ""


@dataclass(frozen=True)
class Region:
    """Región con boletín PDF propio."""
    id: str
    name: str
    icon: str
    pdf_url: str
    notes: Optional[str] = None

    @property
    def is_rural(self) -> bool:
        return self.id == SEGOVIA_RURAL.id

    def locations(self) -> List[DutyLocation]:
        """Una ubicación para las regiones simples; las ocho ZBS para la rural."""
        if self.is_rural:
            return [location_from_zbs(z) for z in ZBS_LIST]
        return [location_from_region(self)]


RIAZA_SEPULVEDA = ZBS("riaza-sepulveda", "Riaza / Sepúlveda", "🏔️", "Zona de alta montaña")
LA_GRANJA = ZBS("la-granja", "La Granja", "🏰", "Real Sitio con palacio histórico")
LA_SIERRA = ZBS("la-sierra", "La Sierra", "⛰️", "Zona de sierra")
FUENTIDUENA = ZBS("fuentiduena", "Fuentidueña", "🏞️", "Valle y campiña")
CARBONERO = ZBS("carbonero", "Carbonero", "🌲", "Zona de pinares")
NAVAS_ASUNCION = ZBS("navas-asuncion", "Navas de la Asunción", "🏘️", "Zona de pueblos pequeños")
VILLACASTIN = ZBS("villacastin", "Villacastín", "🚂", "Nudo ferroviario")
CANTALEJO = ZBS("cantalejo", "Cantalejo", "🏘️", "Zona rural")

ZBS_LIST = (
    RIAZA_SEPULVEDA, LA_GRANJA, LA_SIERRA, FUENTIDUENA,
    CARBONERO, NAVAS_ASUNCION, VILLACASTIN, CANTALEJO,
)

SEGOVIA_CAPITAL = Region("segovia-capital", "Segovia Capital", "🏙", config.REGION_PDF_URLS["segovia-capital"])
CUELLAR = Region(
    "cuellar", "Cuéllar", "🌳", config.REGION_PDF_URLS["cuellar"],
    notes="Servicios semanales excepto primera semana de septiembre",
)
EL_ESPINAR = Region("el-espinar", "El Espinar / San Rafael", "🏔️", config.REGION_PDF_URLS["el-espinar"])
SEGOVIA_RURAL = Region("segovia-rural", "Segovia Rural", "🚜", config.REGION_PDF_URLS["segovia-rural"])

REGIONS = (SEGOVIA_CAPITAL, CUELLAR, EL_ESPINAR, SEGOVIA_RURAL)


def location_from_region(region: Region) -> DutyLocation:
    return DutyLocation(region.id, region.name, region.icon, region.notes, region.id)


def location_from_zbs(zbs: ZBS) -> DutyLocation:
    return DutyLocation(zbs.id, zbs.name, zbs.icon, zbs.notes, SEGOVIA_RURAL.id)


def region_by_id(region_id: str) -> Optional[Region]:
    for region in REGIONS:
        if region.id == region_id:
            return region
    return None


def location_from_id(location_id: str) -> Optional[DutyLocation]:
    """Ubicación a partir de su id (región simple o ZBS)."""
    for zbs in ZBS_LIST:
        if zbs.id == location_id:
            return location_from_zbs(zbs)
    region = region_by_id(location_id)
    if region is not None and not region.is_rural:
        return location_from_region(region)
    return None
