"""Currency catalog constants.

Static lookup data shared by the display conversion core and the backend.
Kept as plain dicts/sets so placement and symbol rules stay table-driven.
"""

from typing import Dict, FrozenSet, List, Tuple

BASE_CURRENCY = "INR"

CURRENCY_SYMBOLS: Dict[str, str] = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "AUD": "A$",
    "CAD": "C$",
    "CHF": "CHF",
    "CNY": "¥",
    "AED": "د.إ",
    "SAR": "﷼",
    "SGD": "S$",
    "MYR": "RM",
    "THB": "฿",
    "IDR": "Rp",
    "PHP": "₱",
    "KRW": "₩",
    "NZD": "NZ$",
    "HKD": "HK$",
    "SEK": "kr",
    "NOK": "kr",
    "DKK": "kr",
    "PLN": "zł",
    "CZK": "Kč",
    "HUF": "Ft",
    "RON": "lei",
    "BGN": "лв",
    "HRK": "kn",
    "RUB": "₽",
    "TRY": "₺",
    "ZAR": "R",
    "BRL": "R$",
    "MXN": "$",
    "ARS": "$",
    "CLP": "$",
    "COP": "$",
    "PEN": "S/",
    "ILS": "₪",
    "EGP": "£",
    "NGN": "₦",
    "KES": "KSh",
    "GHS": "₵",
    "PKR": "₨",
    "BDT": "৳",
    "LKR": "Rs",
    "NPR": "Rs",
    "MMK": "K",
    "VND": "₫",
}

CURRENCY_NAMES: Dict[str, str] = {
    "INR": "Indian Rupee",
    "USD": "US Dollar",
    "EUR": "Euro",
    "GBP": "British Pound",
    "JPY": "Japanese Yen",
    "AUD": "Australian Dollar",
    "CAD": "Canadian Dollar",
    "CHF": "Swiss Franc",
    "CNY": "Chinese Yuan",
    "AED": "UAE Dirham",
    "SAR": "Saudi Riyal",
    "SGD": "Singapore Dollar",
    "MYR": "Malaysian Ringgit",
    "THB": "Thai Baht",
    "IDR": "Indonesian Rupiah",
    "PHP": "Philippine Peso",
    "KRW": "South Korean Won",
    "NZD": "New Zealand Dollar",
    "HKD": "Hong Kong Dollar",
    "SEK": "Swedish Krona",
    "NOK": "Norwegian Krone",
    "DKK": "Danish Krone",
    "PLN": "Polish Zloty",
    "CZK": "Czech Koruna",
    "HUF": "Hungarian Forint",
    "RON": "Romanian Leu",
    "BGN": "Bulgarian Lev",
    "HRK": "Croatian Kuna",
    "RUB": "Russian Ruble",
    "TRY": "Turkish Lira",
    "ZAR": "South African Rand",
    "BRL": "Brazilian Real",
    "MXN": "Mexican Peso",
    "ARS": "Argentine Peso",
    "CLP": "Chilean Peso",
    "COP": "Colombian Peso",
    "PEN": "Peruvian Sol",
    "ILS": "Israeli Shekel",
    "EGP": "Egyptian Pound",
    "NGN": "Nigerian Naira",
    "KES": "Kenyan Shilling",
    "GHS": "Ghanaian Cedi",
    "PKR": "Pakistani Rupee",
    "BDT": "Bangladeshi Taka",
    "LKR": "Sri Lankan Rupee",
    "NPR": "Nepalese Rupee",
    "MMK": "Myanmar Kyat",
    "VND": "Vietnamese Dong",
}

# Currencies rendered as "<amount> <symbol>"; everything else is "<symbol><amount>".
SUFFIX_SYMBOL_CURRENCIES: FrozenSet[str] = frozenset({BASE_CURRENCY, "EUR"})

# Selector fallback shown before any rate table has been fetched.
DEFAULT_SELECTOR_CURRENCIES: List[Tuple[str, float]] = [
    ("INR", 1.0),
    ("USD", 0.012),
    ("EUR", 0.011),
    ("GBP", 0.0095),
]

PREFERENCE_KEY = "selected_currency"
