from __future__ import annotations

from typing import Any

IMEI_LENGTH = 15


def is_valid_imei(imei: Any) -> bool:
    # 15 ASCII digits, no surrounding whitespace
    if not isinstance(imei, str) or len(imei) != IMEI_LENGTH:
        return False
    if not (imei.isascii() and imei.isdigit()):
        return False

    # Luhn, doubling odd positions counted from the left
    total = 0
    for i, ch in enumerate(imei):
        digit = int(ch)
        if i % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def normalize_imei(imei: Any) -> str:
    if not isinstance(imei, str):
        return ""
    return imei.strip()


def mask_imei(imei: str) -> str:
    # never log a full IMEI
    return imei[:8] + "*" * max(len(imei) - 8, 0)
