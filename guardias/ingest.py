# -*- coding: utf-8 -*-
"""Ingesta: leer el PDF del boletín y extraer texto (y maquetación) por página."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pdfplumber

from .entities import BulletinDocument

logger = logging.getLogger(__name__)

# Dos palabras cuyo "top" difiere menos que esto están en la misma línea
LINE_TOLERANCE = 3.0

Word = Tuple[float, float, float, float, str]


class PdfPlumberLayout:
    """
    Palabras de una página de pdfplumber con sus coordenadas (origen arriba a la
    izquierda), para poder pedir el texto de cualquier rectángulo con el PDF ya cerrado.
    """

    def __init__(self, width: float, height: float, words: List[Word]):
        self.width = width
        self.height = height
        self._words = words

    @classmethod
    def from_page(cls, page) -> "PdfPlumberLayout":
        words = [
            (float(w["x0"]), float(w["top"]), float(w["x1"]), float(w["bottom"]), w["text"])
            for w in page.extract_words()
        ]
        return cls(float(page.width), float(page.height), words)

    def text_in(self, x0: float, top: float, x1: float, bottom: float) -> str:
        """Texto cuyas palabras tienen el centro dentro del rectángulo, línea a línea."""
        inside = [
            w for w in self._words
            if x0 <= (w[0] + w[2]) / 2 < x1 and top <= (w[1] + w[3]) / 2 < bottom
        ]
        lines: List[Tuple[float, List[str]]] = []
        for w in sorted(inside, key=lambda w: (w[1], w[0])):
            if lines and abs(lines[-1][0] - w[1]) < LINE_TOLERANCE:
                lines[-1][1].append(w[4])
            else:
                lines.append((w[1], [w[4]]))
        return "\n".join(" ".join(parts) for _, parts in lines)


def extract_pages_from_pdf(pdf_path: str | Path, with_layouts: bool = False) -> Tuple[List[str], List[PdfPlumberLayout]]:
    """
    Extrae el texto de cada página del PDF (cadena vacía si la página no tiene texto)
    y, si se pide, la maquetación de cada página.
    """
    path = Path(pdf_path)
    if not path.exists():
        raise FileNotFoundError(f"PDF no encontrado: {path}")

    pages: List[str] = []
    layouts: List[PdfPlumberLayout] = []
    with pdfplumber.open(path) as pdf:
        for page in pdf.pages:
            pages.append(page.extract_text() or "")
            if with_layouts:
                layouts.append(PdfPlumberLayout.from_page(page))
    logger.debug("%s: %d páginas", path.name, len(pages))
    return pages, layouts


def load_document(
    pdf_path: str | Path, source_url: Optional[str] = None, with_layouts: bool = False
) -> BulletinDocument:
    """Boletín listo para analizar, con la fecha de modificación del fichero."""
    pages, layouts = extract_pages_from_pdf(pdf_path, with_layouts)
    last_modified = Path(pdf_path).stat().st_mtime
    return BulletinDocument(pages, source_url, layouts or None, last_modified)
