# -*- coding: utf-8 -*-
"""
Normalización: ordenar calendarios y convertirlos a/desde JSON y filas CSV.

Formato JSON de un calendario:
    {"date": {"day_of_week": "Lunes", "day": 30, "month": "diciembre", "year": 2024},
     "shifts": {"00:00-23:59": [{"name": ..., "address": ..., "phone": ..., "additional_info": null}]}}
"""

from typing import Any, Dict, List, Optional

from . import config
from .entities import DutyDate, DutyLocation, DutyTimeSpan, Pharmacy, PharmacySchedule


def sort_schedules(schedules: List[PharmacySchedule], current_year: Optional[int] = None) -> List[PharmacySchedule]:
    """Orden ascendente por (año, mes, día); sin año se usa el año en curso."""
    if current_year is None:
        current_year = config.current_year()
    return sorted(schedules, key=lambda s: s.date.sort_key(current_year))


def sort_by_location(
    by_location: Dict[DutyLocation, List[PharmacySchedule]], current_year: Optional[int] = None
) -> Dict[DutyLocation, List[PharmacySchedule]]:
    return {loc: sort_schedules(schedules, current_year) for loc, schedules in by_location.items()}


def _pharmacy_to_json(p: Pharmacy) -> dict:
    return {"name": p.name, "address": p.address, "phone": p.phone, "additional_info": p.additional_info}


def _date_to_json(d: DutyDate) -> dict:
    return {"day_of_week": d.day_of_week, "day": d.day, "month": d.month, "year": d.year}


def schedule_to_json(schedule: PharmacySchedule) -> dict:
    return {
        "date": _date_to_json(schedule.date),
        "shifts": {
            span.key: [_pharmacy_to_json(p) for p in pharmacies]
            for span, pharmacies in schedule.shifts.items()
        },
    }


def schedules_to_json(schedules: List[PharmacySchedule]) -> List[dict]:
    return [schedule_to_json(s) for s in schedules]


def schedule_from_json(data: Dict[str, Any]) -> PharmacySchedule:
    """Inverso de schedule_to_json. Lanza KeyError/ValueError si el JSON no es válido."""
    d = data["date"]
    duty_date = DutyDate(d.get("day_of_week"), int(d["day"]), d["month"], d.get("year"))
    shifts = {}
    for key, pharmacies in data["shifts"].items():
        span = DutyTimeSpan.from_key(key)
        shifts[span] = [
            Pharmacy(p["name"], p["address"], p["phone"], p.get("additional_info"))
            for p in pharmacies
        ]
    return PharmacySchedule(duty_date, shifts)


def schedules_from_json(data: List[Dict[str, Any]]) -> List[PharmacySchedule]:
    return [schedule_from_json(item) for item in data]


def location_to_json(location: DutyLocation, schedules: List[PharmacySchedule]) -> dict:
    return {
        "id": location.id,
        "name": location.name,
        "icon": location.icon,
        "notes": location.notes,
        "schedules": schedules_to_json(schedules),
    }


CSV_HEADER = ["location", "date", "weekday", "shift", "hours", "pharmacy", "address", "phone"]


def to_rows(by_location: Dict[DutyLocation, List[PharmacySchedule]]) -> List[list]:
    """Una fila por (ubicación, día, franja, farmacia) para el resumen CSV."""
    rows = []
    for location, schedules in by_location.items():
        for schedule in schedules:
            d = schedule.date.to_date()
            date_str = d.isoformat() if d else schedule.date.token()
            for span, pharmacies in schedule.shifts.items():
                for p in pharmacies:
                    rows.append([
                        location.id,
                        date_str,
                        schedule.date.day_of_week or "",
                        span.label,
                        str(span),
                        p.name,
                        p.address,
                        p.phone,
                    ])
    return rows
