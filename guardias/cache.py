# -*- coding: utf-8 -*-
"""
Caché en disco de calendarios ya analizados, por ubicación.

Por cada ubicación hay dos ficheros: <id>.json (calendarios) y <id>.meta.json
(versión del formato, fecha de modificación del PDF de origen, nº de calendarios
y momento de guardado). Una entrada es válida si la versión coincide y el PDF
no es más reciente que el que se analizó.
"""

import json
import logging
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from . import config
from .entities import BulletinDocument, DutyLocation, PharmacySchedule
from .locations import Region
from .normalize import schedules_to_json, schedules_from_json

logger = logging.getLogger(__name__)


class CacheState(Enum):
    VALID = "valid"
    STALE_VERSION = "stale_version"
    STALE_TIMESTAMP = "stale_timestamp"
    MISSING = "missing"


class ScheduleCache:
    """Caché de calendarios por ubicación en un directorio."""

    def __init__(self, directory: str | Path | None = None, version: int = config.CACHE_VERSION):
        self.directory = Path(directory) if directory is not None else config.CACHE_DIR
        self.version = version
        self.directory.mkdir(parents=True, exist_ok=True)

    def _data_path(self, location: DutyLocation) -> Path:
        return self.directory / f"{location.id}.json"

    def _meta_path(self, location: DutyLocation) -> Path:
        return self.directory / f"{location.id}.meta.json"

    def _read_meta(self, location: DutyLocation) -> Optional[dict]:
        meta_path = self._meta_path(location)
        if not meta_path.exists() or not self._data_path(location).exists():
            return None
        try:
            with open(meta_path, encoding="utf-8") as f:
                meta = json.load(f)
            int(meta["cache_version"])
            float(meta["pdf_last_modified"])
        except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError) as e:
            logger.warning("Metadatos de caché corruptos para %s (%s); se borra la entrada", location.id, e)
            self.invalidate(location)
            return None
        return meta

    def state(self, location: DutyLocation, pdf_last_modified: float) -> CacheState:
        """Estado de la entrada frente a la fecha de modificación actual del PDF."""
        meta = self._read_meta(location)
        if meta is None:
            return CacheState.MISSING
        if int(meta["cache_version"]) != self.version:
            return CacheState.STALE_VERSION
        if float(meta["pdf_last_modified"]) < pdf_last_modified:
            return CacheState.STALE_TIMESTAMP
        return CacheState.VALID

    def load(self, location: DutyLocation) -> Optional[List[PharmacySchedule]]:
        """Calendarios guardados, sin comprobar validez; None si no hay o están corruptos."""
        data_path = self._data_path(location)
        if not data_path.exists():
            return None
        try:
            with open(data_path, encoding="utf-8") as f:
                return schedules_from_json(json.load(f))
        except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError) as e:
            logger.warning("Caché corrupta para %s (%s); se borra la entrada", location.id, e)
            self.invalidate(location)
            return None

    def save(self, location: DutyLocation, schedules: List[PharmacySchedule], pdf_last_modified: float) -> None:
        with open(self._data_path(location), "w", encoding="utf-8") as f:
            json.dump(schedules_to_json(schedules), f, ensure_ascii=False, indent=2)
        meta = {
            "location_id": location.id,
            "schedule_count": len(schedules),
            "cached_at": time.time(),
            "pdf_last_modified": pdf_last_modified,
            "cache_version": self.version,
        }
        with open(self._meta_path(location), "w", encoding="utf-8") as f:
            json.dump(meta, f, ensure_ascii=False, indent=2)
        logger.debug("Caché guardada: %s (%d calendarios)", location.id, len(schedules))

    def invalidate(self, location: DutyLocation) -> None:
        for path in (self._data_path(location), self._meta_path(location)):
            path.unlink(missing_ok=True)

    def invalidate_region(self, region: Region) -> None:
        """Invalida todas las ubicaciones de la región (las ocho ZBS en la rural)."""
        for location in region.locations():
            self.invalidate(location)

    def clear(self) -> None:
        for path in self.directory.glob("*.json"):
            path.unlink(missing_ok=True)

    def region_state(self, region: Region, pdf_last_modified: float) -> Dict[DutyLocation, CacheState]:
        return {loc: self.state(loc, pdf_last_modified) for loc in region.locations()}

    def load_or_parse(
        self,
        region: Region,
        document: BulletinDocument,
        parse: Callable[[str, BulletinDocument], Dict[DutyLocation, List[PharmacySchedule]]],
    ) -> Dict[DutyLocation, List[PharmacySchedule]]:
        """
        Devuelve los calendarios de la región desde caché si todas sus ubicaciones
        son válidas; si no, analiza y sustituye la región entera en la caché.
        Un resultado vacío se devuelve sin tocar las entradas guardadas.
        """
        last_modified = document.last_modified if document.last_modified is not None else time.time()
        states = self.region_state(region, last_modified)
        if all(s is CacheState.VALID for s in states.values()):
            cached = {loc: self.load(loc) for loc in states}
            if all(v is not None for v in cached.values()):
                logger.info("%s: calendarios desde caché", region.name)
                return cached
        else:
            logger.info(
                "%s: caché no válida (%s)", region.name,
                ", ".join(f"{loc.id}={s.value}" for loc, s in states.items()),
            )
        schedules = parse(region.id, document)
        if not schedules:
            logger.warning("%s: el análisis no dio calendarios; se conserva la caché anterior", region.name)
            return schedules
        self.invalidate_region(region)
        for location, items in schedules.items():
            self.save(location, items, last_modified)
        return schedules
