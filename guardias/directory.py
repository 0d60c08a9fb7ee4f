# -*- coding: utf-8 -*-
"""
Directorio de farmacias: etiqueta corta del boletín -> farmacia completa y franja.

Las etiquetas se comparan sin distinguir mayúsculas contra la línea ya
normalizada. Las tablas están elegidas para no solaparse dentro de una región.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .entities import Pharmacy, DutyTimeSpan, FULL_DAY, RURAL_DAYTIME, RURAL_EXTENDED_DAYTIME
from .segment import normalize_whitespace


@dataclass(frozen=True)
class DirectoryEntry:
    """Etiqueta del PDF y farmacia a la que corresponde."""
    label: str
    pharmacy: Pharmacy
    shift: DutyTimeSpan = FULL_DAY
    pattern: Optional[str] = None    # texto a buscar si difiere de la etiqueta
    anchored_end: bool = False       # la línea debe terminar en el patrón

    def matches(self, line: str) -> bool:
        text = normalize_whitespace(line).upper()
        key = normalize_whitespace(self.pattern or self.label).upper()
        if self.anchored_end:
            return text.endswith(key)
        return key in text


class PharmacyDirectory:
    """Tabla de solo lectura de una región o zona."""

    def __init__(self, entries: List[DirectoryEntry]):
        self._entries = tuple(entries)

    def get(self, label: str) -> Optional[DirectoryEntry]:
        for entry in self._entries:
            if entry.label == label:
                return entry
        return None

    def find(self, line: str) -> Optional[DirectoryEntry]:
        """Entrada reconocida en la línea; si hubiera varias, la de patrón más largo."""
        matches = self.find_all(line)
        if not matches:
            return None
        return max(matches, key=lambda e: len(e.pattern or e.label))

    def find_all(self, line: str) -> List[DirectoryEntry]:
        return [e for e in self._entries if e.matches(line)]

    def __len__(self) -> int:
        return len(self._entries)


def _entry(label: str, name: str, address: str, phone: str, shift: DutyTimeSpan = FULL_DAY, **kwargs) -> DirectoryEntry:
    return DirectoryEntry(label, Pharmacy(name, address, phone), shift, **kwargs)


NO_PHONE = "No disponible"

CUELLAR_DIRECTORY = PharmacyDirectory([
    _entry("Av C.J. CELA", "Farmacia Fernando Redondo",
           "Av. Camilo Jose Cela, 46, 40200 Cuéllar, Segovia", NO_PHONE),
    _entry("Ctra. BAHABON", "Farmacia San Andrés",
           "Ctra. Bahabón, 9, 40200 Cuéllar, Segovia", "921144794"),
    _entry("C/ RESINA", "Farmacia Ldo. Fco. Javier Alcaraz García de la Barrera",
           "C. Resina, 14, 40200 Cuéllar, Segovia", "921144812"),
    _entry("STA. MARINA", "Farmacia Ldo. César Cabrerizo Izquierdo",
           "Calle Sta. Marina, 5, 40200 Cuéllar, Segovia", "921140606"),
])

EL_ESPINAR_DIRECTORY = PharmacyDirectory([
    _entry("AV. HONTANILLA 18", "FARMACIA ANA MARÍA APARICIO HERNAN",
           "Av. Hontanilla, 18, 40400 El Espinar, Segovia", "921 181 011", pattern="HONTANILLA"),
    _entry("C/ MARQUES PERALES", "Farmacia Lda M J. Bartolomé Sánchez",
           "Calle del, C. Marqués de Perales, 2, 40400, Segovia", "921 181 171", pattern="MARQUES PERALES"),
    # "SAN RAFAEL" aparece también en cabeceras: solo cuenta al final de la línea
    _entry("SAN RAFAEL", "Farmacia San Rafael",
           "Tr.ª Alto del León, 19, 40410 San Rafael, Segovia", "921 171 105", anchored_end=True),
])

_TORRECILLA = ("Farmacia Lcdo Gallego Esteban Fernando", "C. Povedas, 6, 40359 Torrecilla del Pinar, Segovia", NO_PHONE)

# ZBS id -> directorio de la zona (Segovia Rural)
RURAL_DIRECTORY: Dict[str, PharmacyDirectory] = {
    "riaza-sepulveda": PharmacyDirectory([
        _entry("RIAZA", "Farmacia César Fernando Gutiérrez Miguel",
               "C. Ricardo Provencio, 16, 40500 Riaza, Segovia", "921550131"),
        _entry("SEPÚLVEDA", "Farmacia Francisco Ruiz Carrasco",
               "Pl. España, 16, 40300 Sepúlveda, Segovia", "921540018"),
        _entry("S.E. GORMAZ (SORIA)", "Farmacia Irigoyen",
               "C. Escuelas, 5, 42330 San Esteban de Gormaz, Soria", "975350208"),
        _entry("CEREZO ABAJO", "Farmacia Mario Caballero Serrano",
               "C. Real, 2, 40591 Cerezo de Abajo, Segovia", "921557110", RURAL_EXTENDED_DAYTIME),
        _entry("BOCEGUILLAS", "Farmacia Lcda Mª del Pilar Villas Miguel",
               "C. Bayona, 21, 40560 Boceguillas, Segovia", "921543849", RURAL_EXTENDED_DAYTIME),
        _entry("AYLLÓN", "Farmacia Luis de la Peña Buquerin",
               "Plaza Mayor, 12, 40520 Ayllón, Segovia", "921553003", RURAL_EXTENDED_DAYTIME),
    ]),
    "la-sierra": PharmacyDirectory([
        _entry("PRÁDENA", "Farmacia Ana Belén Tomero Díez",
               "Calle Pl., 18, 40165 Prádena, Segovia", "921507050", RURAL_DAYTIME),
        _entry("ARCONES", "Farmacia Teresa Laporta Sánchez",
               "Pl. Mayor, 3, 40164 Arcones, Segovia", "921504134", RURAL_DAYTIME),
        _entry("NAVAFRÍA", "Farmacia Martín Cuesta",
               "C. la Reina, 0, 40161 Navafría, Segovia", "921506113", RURAL_DAYTIME),
        _entry("TORREVAL", "Farmacia Lda. Mónica Carrasco Herrero",
               "Travesia la Fragua, 16, 40171 Torre Val de San Pedro, Segovia", "921506028", RURAL_DAYTIME),
    ]),
    "fuentiduena": PharmacyDirectory([
        _entry("HONTALBILLA", "Farmacia Lcdo Burgos Burgos Isabel",
               "Plaza Mayor, 1, 40353 Hontalbilla, Segovia", "921148190", RURAL_DAYTIME),
        _entry("TORRECILLA", *_TORRECILLA, RURAL_DAYTIME),
        # errata frecuente en el boletín
        _entry("TORRECELLA", *_TORRECILLA, RURAL_DAYTIME),
        _entry("OLOMBRADA", "Dr. Jesús Santos del Cura",
               "C. Real, 3, 40220 Olombrada, Segovia", "921164327", RURAL_DAYTIME),
        _entry("FUENTIDUEÑA", "Farmacia Fuentidueña",
               "C. Real, 40, 40357 Fuentidueña, Segovia", "921533630", RURAL_DAYTIME),
        _entry("SACRAMENIA", "Farmacia Gloria Hernando Bayón",
               "C. Manuel Sanz Burgoa, 14, 40237 Sacramenia, Segovia", "921527501", RURAL_DAYTIME),
        _entry("FUENTESAUCO", "Farmacia Paloma María Prieto Pérez",
               "S N, Plaza Mercado, 0, 40355 Fuentesaúco de Fuentidueña, Segovia", NO_PHONE, RURAL_DAYTIME),
    ]),
    "carbonero": PharmacyDirectory([
        _entry("NAVALMANZANO", "Farmacia Carmen I. Tomero Díez",
               "Pl. Mayor, 2, 40280 Navalmanzano, Segovia", "921575109", RURAL_DAYTIME),
        _entry("CARBONERO M", "Farmacia Carbonero",
               "Pl. Pósito Real, 1, 40270 Carbonero el Mayor, Segovia", "921560427", RURAL_DAYTIME),
        _entry("ZARZUELA PINAR", "Farmacia Maria Sol Benito Sanz",
               "C/ Caño, 7, 40293 Zarzuela del Pinar (Segovia)", "921574621", RURAL_DAYTIME),
        _entry("ESCARABAJOSA", "Farmacia GILSANZ",
               "Pl. Mayor, 40291 Escarabajosa de Cabezas, Segovia", "921562159", RURAL_DAYTIME),
        _entry("LASTRAS DE CUÉLLAR", "Farmacia Mª Antonia Sacristán Rodríguez",
               "C. Rincón, 3, 40352 Lastras de Cuéllar, Segovia", "921169250", RURAL_DAYTIME),
        _entry("FUENTEPELAYO", "Farmacia Lda. Patricia Avellón Senovilla",
               "C. Santillana, 3, 40260 Fuentepelayo, Segovia", "921574392", RURAL_DAYTIME),
        _entry("CANTIMPALOS", "Farmacia Enrique Covisa Nager",
               "Pl. Mayor, 17, 40360 Cantimpalos, Segovia", "921496025", RURAL_DAYTIME),
        _entry("AGUILAFUENTE", "Farmacia Miriam Chamorro García",
               "Av. del Escultor D. Florentino Trapero, 5, 40340 Aguilafuente, Segovia", "921572445", RURAL_DAYTIME),
        _entry("MOZONCILLO", "Farmacia Isabel Frías López",
               "C. Real, 16-18, 40250 Mozoncillo, Segovia", "921577273", RURAL_DAYTIME),
        _entry("ESCALONA", "Farmacia Matilde García García",
               "C. de la Cruz, 6, 40350 Escalona del Prado, Segovia", "921570026", RURAL_DAYTIME),
    ]),
    "navas-asuncion": PharmacyDirectory([
        _entry("COCA", "Farmacia Ana Isabel Maroto Arenas",
               "Pl. Arco, 2, 40480 Coca, Segovia", "921586677", RURAL_DAYTIME),
        _entry("STA. Mª REAL", "Farmacia Pilar Tribiño Mendiola",
               "Pl. Mayor, 11, 40440 Santa María la Real de Nieva, Segovia", "921594013", RURAL_DAYTIME),
        _entry("NIEVA", "Farmacia María Dolores Gómez Roán",
               "Calle Ayuntamiento, 12, 40447 Nieva, Segovia", "921594727", RURAL_DAYTIME),
        _entry("SANTIUSTE", "Farmacia Lda Amparo Maroto Gomez",
               "Pl. Iglesia, 5, 40460 Santiuste de San Juan Bautista, Segovia", "921596259", RURAL_DAYTIME),
        _entry("NAVAS DE ORO", "Farmacia Cubero. Gdo. Sergio Cubero de Blas",
               "C. Libertad, 1, 40470 Navas de Oro, Segovia", "921591585", RURAL_DAYTIME),
        _entry("NAVA DE LA A", "Farmacia Ldo. Vicente Rebollo Antolín Javier",
               "C. de Elías Vírseda, 3, 40450 Nava de la Asunción, Segovia", "921580533", RURAL_DAYTIME),
        _entry("BERNARDOS", "Farmacia Lcdo Casado Rata Coral",
               "Pl. Mayor, 8, 40430 Bernardos, Segovia", "921566012", RURAL_DAYTIME),
    ]),
    "villacastin": PharmacyDirectory([
        _entry("VILLACASTÍN", "Farmacia Cristina Herradón Gil-Gallardo",
               "Calle Iglesia, 18, 40150 Villacastín, Segovia", "921198173", RURAL_DAYTIME),
        _entry("ZARZUELA M.", "Farmacia María A. Reviriego Morcuende",
               "Av. San Antonio, 2, 40152 Zarzuela del Monte, Segovia", "921198297", RURAL_DAYTIME),
        _entry("NAVAS DE SA", "Farmacia María José Martín Barguilla",
               "C. Diana, 21, 40408 Navas de San Antonio, Segovia", "921193128", RURAL_DAYTIME),
        _entry("MAELLO (ÁVILA)", "Farmacia Noelia Guerra García",
               "Calle Vilorio, 8, 05291 Maello, Ávila", "921192126", RURAL_DAYTIME),
    ]),
}

# La Granja: el boletín solo revela cuál de las dos aparece primero
LA_GRANJA_VALENCIANA = _entry(
    "C/ Valenciana", "Farmacia Cristina Mínguez Del Pozo",
    "C. Valenciana, 3, BAJO, 40100 Real Sitio de San Ildefonso, Segovia", "921470038",
    RURAL_EXTENDED_DAYTIME,
)
LA_GRANJA_DOLORES = _entry(
    "Plaza los Dolores", "Farmacia Almudena Martínez Pardo del Valle",
    "Plaza los de Dolores, 7, 40100 Real Sitio de San Ildefonso, Segovia", "921472391",
    RURAL_EXTENDED_DAYTIME,
)
LA_GRANJA_CANDIDATES = (LA_GRANJA_VALENCIANA, LA_GRANJA_DOLORES)

# Cantalejo: las dos farmacias de guardia todos los días
CANTALEJO_PHARMACIES = (
    Pharmacy("Farmacia en Cantalejo", "C. Frontón, 15, 40320 Cantalejo, Segovia", "921520053"),
    Pharmacy("Farmacia Carmen Bautista", "C. Inge Martín Gil, 10, 40320 Cantalejo, Segovia", "921520005"),
)
