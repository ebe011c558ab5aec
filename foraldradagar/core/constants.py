# foraldradagar/core/constants.py
from typing import Final

# ==========================
# Familj / scenarier
# ==========================

#: Maximalt antal sparade planer (scenarier) per familj.
MAX_SCENARIOS_PER_FAMILY: Final[int] = 3

#: Maximalt antal föräldrar i en familj.
MAX_PARENTS_PER_FAMILY: Final[int] = 2


# ==========================
# Ersättning
# ==========================

#: Antal dagar i ett år vid omräkning från årsinkomst till dagbelopp.
DAYS_PER_YEAR: Final[int] = 365

#: Antal månader per år vid omräkning från månadslön till årsinkomst.
MONTHS_PER_YEAR: Final[int] = 12

#: Fast approximation av en kalendermånad vid månadsbelopp på ledighet.
#: Värdet 30 används överallt i stället för antal dagar i den faktiska månaden.
DAYS_PER_MONTH_ON_LEAVE: Final[int] = 30


# ==========================
# Planering / projektion
# ==========================

#: Standardhorisont i månader för månadsprojektion av en plan.
DEFAULT_PROJECTION_MONTHS: Final[int] = 48

#: Högsta tillåtna horisont i månader.
MAX_PROJECTION_MONTHS: Final[int] = 48

#: Index för lördag och söndag i datetime.weekday() (0 = måndag).
WEEKEND_WEEKDAYS: Final[tuple[int, ...]] = (5, 6)


# ==========================
# Deadlines / brådska
# ==========================

#: Under så här många dagar räknas en förestående födsel som brådskande.
URGENT_DAYS_BIRTH: Final[int] = 30

#: Under så här många dagar räknas 4-årsgränsen som brådskande.
URGENT_DAYS_SAVE_LIMIT: Final[int] = 180

#: Under så här många dagar räknas 12-årsgränsen som brådskande.
URGENT_DAYS_ALL_EXPIRY: Final[int] = 365

#: Varning om sparade dagar visas när 4-årsgränsen är närmare än så här.
SAVE_LIMIT_WARNING_WINDOW_DAYS: Final[int] = 365


# ==========================
# Visning (svenska etiketter)
# ==========================

#: Standardnamn när en förälder saknar namn.
DEFAULT_PARENT1_NAME: Final[str] = "Förälder 1"
DEFAULT_PARENT2_NAME: Final[str] = "Förälder 2"

#: Svenska månadsnamn, indexerade som date.month - 1.
MONTH_NAMES: Final[tuple[str, ...]] = (
    "januari",
    "februari",
    "mars",
    "april",
    "maj",
    "juni",
    "juli",
    "augusti",
    "september",
    "oktober",
    "november",
    "december",
)

#: Standardtext som avslutar varje rådgivningssvar.
ADVISOR_DISCLAIMER: Final[str] = (
    "💡 Tips: Verifiera alltid med Försäkringskassan (forsakringskassan.se) innan du ansöker."
)
