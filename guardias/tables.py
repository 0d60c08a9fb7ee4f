# -*- coding: utf-8 -*-
"""
Tablas de Cuéllar y El Espinar: fechas 'dd-mmm' y etiqueta de farmacia por línea.

Cada estrategia es un pliegue (estado, línea) -> (estado, hechos) sobre las
líneas en orden de lectura. El estado guarda la farmacia y las fechas pendientes
y el contador de año, que avanza en cada '01-ene' y se arrastra entre páginas.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple

from .dates import resolve_tokens
from .directory import PharmacyDirectory, CUELLAR_DIRECTORY, EL_ESPINAR_DIRECTORY
from .entities import DutyDate, DutyFact, DutyLocation
from .segment import classify_line, split_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableState:
    """Acumulador del pliegue: farmacia pendiente, fechas pendientes y año en curso."""
    year: int
    pharmacy_label: Optional[str] = None
    dates: Tuple[DutyDate, ...] = ()

    @property
    def has_pending(self) -> bool:
        return self.pharmacy_label is not None or bool(self.dates)

    def cleared(self) -> "TableState":
        return TableState(year=self.year)


Step = Callable[[TableState, str, DutyLocation], Tuple[TableState, List[DutyFact]]]


def _unique(dates: Tuple[DutyDate, ...]) -> List[DutyDate]:
    seen = set()
    result = []
    for d in dates:
        if d not in seen:
            seen.add(d)
            result.append(d)
    return result


def _emit_if_complete(
    state: TableState, directory: PharmacyDirectory, location: DutyLocation
) -> Tuple[TableState, List[DutyFact]]:
    """Si hay farmacia y fechas, genera los hechos y limpia lo pendiente (conserva el año)."""
    if state.pharmacy_label is None or not state.dates:
        return state, []
    entry = directory.get(state.pharmacy_label)
    facts = [DutyFact(d, location, entry.shift, entry.pharmacy) for d in _unique(state.dates)]
    logger.debug("%d fechas para %s", len(facts), entry.label)
    return state.cleared(), facts


def cuellar_step(state: TableState, line: str, location: DutyLocation) -> Tuple[TableState, List[DutyFact]]:
    """
    Línea de Cuéllar: varias fechas (también en formato frase de agosto/septiembre)
    y la farmacia en la misma línea, o la farmacia en la línea siguiente.
    Una línea con fechas sustituye a lo pendiente: solo vale su propia etiqueta.
    """
    info = classify_line(line, CUELLAR_DIRECTORY, with_transitions=True)
    if info.dates:
        if state.dates:
            logger.warning(
                "Cuéllar: se descartan %d fechas sin farmacia (%s)",
                len(state.dates), ", ".join(d.token() for d in state.dates),
            )
        elif state.pharmacy_label is not None:
            logger.debug("Cuéllar: se descarta la farmacia pendiente %s", state.pharmacy_label)
        dates, year = resolve_tokens(info.dates, state.year)
        state = TableState(year=year, pharmacy_label=info.label, dates=tuple(dates))
        if info.label is None:
            logger.debug("Línea con fechas sin farmacia; se espera en la siguiente: %s", info.text)
    elif info.label:
        state = replace(state, pharmacy_label=info.label)
    else:
        logger.debug("Línea ignorada: %s", info.text)
        return state, []
    return _emit_if_complete(state, CUELLAR_DIRECTORY, location)


def el_espinar_step(state: TableState, line: str, location: DutyLocation) -> Tuple[TableState, List[DutyFact]]:
    """
    Línea de El Espinar: las fechas de la farmacia pueden ocupar varias líneas
    antes o después de la etiqueta; se acumulan hasta que hay farmacia.
    """
    info = classify_line(line, EL_ESPINAR_DIRECTORY)
    if not info.dates and not info.label:
        logger.debug("Línea ignorada: %s", info.text)
        return state, []
    if info.dates:
        dates, year = resolve_tokens(info.dates, state.year)
        state = replace(state, dates=state.dates + tuple(dates), year=year)
    if info.label:
        state = replace(state, pharmacy_label=info.label)
    return _emit_if_complete(state, EL_ESPINAR_DIRECTORY, location)


def fold_lines(step: Step, state: TableState, lines: List[str], location: DutyLocation) -> Tuple[TableState, List[DutyFact]]:
    """Pliegue de una página; una línea que falla se registra y se salta."""
    facts: List[DutyFact] = []
    for line in lines:
        try:
            state, new_facts = step(state, line, location)
        except Exception:
            logger.exception("Error procesando la línea: %s", line)
            continue
        facts.extend(new_facts)
    return state, facts


def fold_pages(step: Step, pages: List[str], seed_year: int, location: DutyLocation) -> List[DutyFact]:
    """
    Recorre las páginas en orden. Lo pendiente al final de cada página se
    descarta con aviso; el año sigue a la página siguiente.
    """
    state = TableState(year=seed_year)
    facts: List[DutyFact] = []
    for page_number, page_text in enumerate(pages, start=1):
        state, page_facts = fold_lines(step, state, split_lines(page_text), location)
        facts.extend(page_facts)
        if state.has_pending:
            logger.warning(
                "%s, página %d: se descarta lo pendiente (farmacia=%s, %d fechas)",
                location.name, page_number, state.pharmacy_label, len(state.dates),
            )
            state = state.cleared()
    return facts


def cuellar_facts(pages: List[str], seed_year: int, location: DutyLocation) -> List[DutyFact]:
    return fold_pages(cuellar_step, pages, seed_year, location)


def el_espinar_facts(pages: List[str], seed_year: int, location: DutyLocation) -> List[DutyFact]:
    return fold_pages(el_espinar_step, pages, seed_year, location)
