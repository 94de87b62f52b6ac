# terminalscreener/services/coins.py
"""
Static coin metadata: display names, DexScreener listing flag and the
categories shown by /api/coins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class CoinInfo:
    symbol: str
    name: str
    dex_listed: bool
    category: str = "other"

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "dexListed": self.dex_listed,
            "category": self.category,
        }


COIN_NAMES: Dict[str, str] = {
    "BTC": "Bitcoin",
    "ETH": "Ethereum",
    "PEPE": "Pepe",
    "SHIB": "Shiba Inu",
    "DOGE": "Dogecoin",
    "SOL": "Solana",
    "ADA": "Cardano",
    "LINK": "Chainlink",
    "UNI": "Uniswap",
    "MATIC": "Polygon",
    "AAVE": "Aave",
    "CRV": "Curve",
}

DEX_LISTED = frozenset({
    "BTC", "ETH", "PEPE", "SHIB", "UNI", "LINK", "AAVE",
    "CRV", "SUSHI", "COMP", "MKR", "SOL", "MATIC",
})

CATEGORIES: Dict[str, List[str]] = {
    "major": ["BTC", "ETH", "SOL", "ADA"],
    "meme": ["DOGE", "SHIB", "PEPE"],
    "defi": ["UNI", "AAVE", "CRV", "SUSHI", "COMP", "MKR"],
    "infrastructure": ["LINK", "MATIC"],
}

_CATEGORY_BY_SYMBOL = {sym: cat for cat, syms in CATEGORIES.items() for sym in syms}


def lookup_name(symbol: str) -> str:
    """Known display name, or the input symbol unchanged."""
    return COIN_NAMES.get((symbol or "").upper(), symbol)


def is_dex_listed(symbol: str) -> bool:
    return (symbol or "").upper() in DEX_LISTED


def coin_info(symbol: str) -> CoinInfo:
    sym = (symbol or "").upper()
    return CoinInfo(
        symbol=sym,
        name=lookup_name(sym),
        dex_listed=is_dex_listed(sym),
        category=_CATEGORY_BY_SYMBOL.get(sym, "other"),
    )


def catalog() -> dict:
    """Known symbols grouped by category, with per-coin metadata."""
    categories = {cat: list(syms) for cat, syms in CATEGORIES.items()}
    coins = [coin_info(sym).to_dict() for syms in CATEGORIES.values() for sym in syms]
    return {"categories": categories, "coins": coins}
