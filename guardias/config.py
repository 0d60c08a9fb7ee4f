# -*- coding: utf-8 -*-
"""Configuración central: ventanas de guardia, URLs de boletines, umbrales de año y caché."""

import json
import os
from datetime import date, time
from pathlib import Path

# Ventanas de guardia por defecto
# Día completo: 00:00–23:59
# Capital diurno: 10:15–22:00
# Capital nocturno: 22:00–10:15 día siguiente
# Rural diurno: 10:00–20:00
# Rural diurno extendido: 10:00–22:00
_DEFAULT_SHIFT_WINDOWS = {
    "full_day": (time(0, 0), time(23, 59)),
    "capital_day": (time(10, 15), time(22, 0)),
    "capital_night": (time(22, 0), time(10, 15)),   # 10:15 = día siguiente
    "rural_daytime": (time(10, 0), time(20, 0)),
    "rural_extended_daytime": (time(10, 0), time(22, 0)),
}

# Nombres de guardia en la salida
SHIFT_LABELS = {
    "full_day": "24 horas",
    "capital_day": "Diurno",
    "capital_night": "Nocturno",
    "rural_daytime": "Diurno",
    "rural_extended_daytime": "Diurno extendido",
}

_DEFAULT_REGION_URLS = {
    "segovia-capital": "https://cofsegovia.com/wp-content/uploads/2025/05/CALENDARIO-GUARDIAS-SEGOVIA-CAPITAL-DIA-2025.pdf",
    "cuellar": "https://cofsegovia.com/wp-content/uploads/2025/01/GUARDIAS-CUELLAR_2025.pdf",
    "el-espinar": "https://cofsegovia.com/wp-content/uploads/2025/01/Guardias-EL-ESPINAR_2025.pdf",
    "segovia-rural": "https://cofsegovia.com/wp-content/uploads/2025/06/SERVICIOS-DE-URGENCIA-RURALES-2025.pdf",
}


def _parse_time(s: str) -> time:
    """Convierte 'HH:MM' o 'H:MM' en time."""
    s = s.strip()
    if ":" in s:
        parts = s.split(":", 1)
        h = int(parts[0].strip())
        m = int(parts[1].strip()) if len(parts) > 1 else 0
        return time(h, m)
    return time(0, 0)


def _read_json_override(filename: str) -> dict | None:
    """Lee un JSON junto a este módulo; None si no existe o está mal formado."""
    json_path = Path(__file__).resolve().parent / filename
    if not json_path.exists():
        return None
    try:
        with open(json_path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError):
        return None
    return data if isinstance(data, dict) else None


def _load_shift_windows() -> dict:
    """Carga SHIFT_WINDOWS desde shift_windows.json si existe; si no, usa valores por defecto."""
    data = _read_json_override("shift_windows.json")
    if data is None:
        return _DEFAULT_SHIFT_WINDOWS.copy()
    result = {}
    for name in _DEFAULT_SHIFT_WINDOWS:
        if name not in data or not isinstance(data[name], (list, tuple)) or len(data[name]) < 2:
            result[name] = _DEFAULT_SHIFT_WINDOWS[name]
        else:
            try:
                t0 = _parse_time(str(data[name][0]))
                t1 = _parse_time(str(data[name][1]))
            except ValueError:
                result[name] = _DEFAULT_SHIFT_WINDOWS[name]
                continue
            result[name] = (t0, t1)
    return result


def _load_region_urls() -> dict:
    """Carga REGION_PDF_URLS desde region_urls.json si existe (solo claves conocidas)."""
    result = _DEFAULT_REGION_URLS.copy()
    data = _read_json_override("region_urls.json")
    if data is None:
        return result
    for region_id, url in data.items():
        if region_id in result and isinstance(url, str) and url.strip():
            result[region_id] = url.strip()
    return result


SHIFT_WINDOWS = _load_shift_windows()
REGION_PDF_URLS = _load_region_urls()

# Detección de año
YEAR_URL_PLAUSIBLE_SPAN = 20     # años aceptados en la URL: actual ± 20
YEAR_VALID_SPAN = 2              # validación final: actual ± 2 (aviso justo en 2)
YEAR_TEXT_MIN = 2020
YEAR_TEXT_MAX = 2039
DECEMBER_SCAN_CHARS = 500        # "dd-dic" en los primeros 500 caracteres => año - 1

# Maquetación del PDF de Segovia Capital (puntos PDF)
CAPITAL_PAGE_MARGIN = 40.0
CAPITAL_DATE_COLUMN_RATIO = 0.22
CAPITAL_COLUMN_GAP = 5.0
CAPITAL_CONTENT_TOP = 100.0
CAPITAL_BAND_HEIGHT = 48.0       # alto de una fila (fecha + 3 líneas por farmacia)
CAPITAL_RETRY_STEP = 6.0         # avance cuando la franja es ruido
CAPITAL_MIN_BLOCK_LINES = 3

# Caché de calendarios
CACHE_VERSION = 2
CACHE_DIR = Path(os.environ.get("GUARDIAS_CACHE_DIR", Path.home() / ".cache" / "guardias-segovia"))

LOG_LEVEL = os.environ.get("GUARDIAS_LOG_LEVEL", "WARNING").upper()


def current_year() -> int:
    """Año natural en curso."""
    return date.today().year
