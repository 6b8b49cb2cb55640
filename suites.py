# suites.py
from __future__ import annotations

from typing import Dict

from errors import ConfigurationError

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
Alpha38 = Alpha26 + "0123456789#/"
# no "(", ")" or "*": those belong to the cycle / config notation
Alpha60 = Alpha38 + "+-.=:;[]{}<>!?@&^%$£€_"

SUITES: Dict[str, str] = {
    "Legacy":  Alpha26,
    "INOP-38": Alpha38,
    "INOP-60": Alpha60,
}


def suite_alphabet(name: str) -> str:
    """Look up a suite by name, ignoring case."""
    for suite, symbols in SUITES.items():
        if suite.upper() == name.strip().upper():
            return symbols
    raise ConfigurationError(
        f"Unknown suite {name!r}. Expected one of {list(SUITES)}"
    )
