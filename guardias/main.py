# -*- coding: utf-8 -*-
"""
Punto de entrada: convierte el PDF de guardias de una región en JSON (y CSV).
Uso: guardias-segovia RUTA_PDF --region ID [--url URL] [--output-dir DIR] [--csv] [--cache] [--now ISO]
"""

import argparse
import csv
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from . import config
from .cache import ScheduleCache
from .ingest import load_document
from .locations import REGIONS, SEGOVIA_CAPITAL, region_by_id
from .normalize import CSV_HEADER, location_to_json, to_rows
from .relations import find_current_schedule
from .strategies import parse_bulletin


def _print_current_duty(schedules_by_location, now: datetime) -> None:
    for location, schedules in schedules_by_location.items():
        current = find_current_schedule(schedules, now)
        if current is None:
            print(f"{location.name}: sin guardia para {now:%d/%m/%Y %H:%M}")
            continue
        schedule, span = current
        names = ", ".join(p.name for p in schedule.shifts[span])
        print(f"{location.name} ({span.label}, {span}): {names}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Convierte el PDF de farmacias de guardia de Segovia a JSON")
    parser.add_argument("pdf_path", help="Ruta al PDF del boletín")
    parser.add_argument(
        "--region",
        "-r",
        required=True,
        choices=[r.id for r in REGIONS],
        help="Región del boletín",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="URL de origen del PDF (pista para detectar el año); por defecto la configurada para la región",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        default="output",
        help="Carpeta de salida para JSON (y CSV si --csv)",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Generar además un CSV resumen",
    )
    parser.add_argument(
        "--cache",
        action="store_true",
        help=f"Usar la caché de calendarios ({config.CACHE_DIR})",
    )
    parser.add_argument(
        "--now",
        default=None,
        help="Momento para mostrar la guardia vigente (ISO, ej. 2025-03-01T23:30); por defecto ahora",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Registro detallado")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    region = region_by_id(args.region)
    pdf_path = Path(args.pdf_path)
    if not pdf_path.exists():
        print(f"Error: no se encuentra el PDF: {pdf_path}", file=sys.stderr)
        return 1

    try:
        now = datetime.fromisoformat(args.now) if args.now else datetime.now()
    except ValueError:
        print(f"Error: fecha --now no válida: {args.now}", file=sys.stderr)
        return 1

    try:
        document = load_document(
            pdf_path,
            source_url=args.url or region.pdf_url,
            with_layouts=region.id == SEGOVIA_CAPITAL.id,
        )
    except Exception as e:
        print(f"Error extrayendo PDF: {e}", file=sys.stderr)
        return 1

    if args.cache:
        schedules = ScheduleCache().load_or_parse(region, document, parse_bulletin)
    else:
        schedules = parse_bulletin(region.id, document)
    if not schedules:
        print("No se detectaron guardias en el PDF.", file=sys.stderr)
        return 1

    out_dir = Path(args.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_json = out_dir / f"{region.id}.json"
    data = {
        "region": region.id,
        "source_url": document.source_url,
        "locations": [location_to_json(loc, items) for loc, items in schedules.items()],
    }
    with open(out_json, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    print(f"JSON guardado: {out_json}")

    if args.csv:
        out_csv = out_dir / f"{region.id}.csv"
        with open(out_csv, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(CSV_HEADER)
            w.writerows(to_rows(schedules))
        print(f"CSV guardado: {out_csv}")

    _print_current_duty(schedules, now)
    return 0


if __name__ == "__main__":
    sys.exit(main())
