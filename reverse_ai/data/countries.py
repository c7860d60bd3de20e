# reverse_ai/data/countries.py
COUNTRIES: tuple[str, ...] = (
    "Argentina", "Australia", "Austria", "Belgium", "Brazil", "Canada", "Chile", "China",
    "Colombia", "Denmark", "Egypt", "Finland", "France", "Germany", "Greece", "India",
    "Indonesia", "Ireland", "Italy", "Japan", "Kenya", "Malaysia", "Mexico", "Morocco",
    "Netherlands", "New Zealand", "Nigeria", "Norway", "Pakistan", "Peru", "Philippines",
    "Poland", "Portugal", "Russia", "Saudi Arabia", "Singapore", "South Africa",
    "South Korea", "Spain", "Sweden", "Switzerland", "Thailand", "Turkey",
    "United Arab Emirates", "United Kingdom", "United States", "Vietnam",
)


def search_countries(term: str) -> list[str]:
    """Case-insensitive substring filter used by the country picker."""
    needle = term.strip().lower()
    return [c for c in COUNTRIES if needle in c.lower()]
