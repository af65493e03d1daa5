import asyncio
import math
import random
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional


async def backoff_retry(fn: Callable[[], Awaitable], max_tries: int = 3, base_delay: float = 0.5, jitter: float = 0.25):
    last_exc = None
    for i in range(max(1, max_tries)):
        try:
            return await fn()
        except Exception as e:
            last_exc = e
            if i >= max_tries - 1:
                break
            await asyncio.sleep(base_delay * (2 ** i) + random.random() * jitter)
    raise last_exc


def first_value(item: Optional[Dict[str, Any]], *keys: str) -> Any:
    if not item:
        return None
    for key in keys:
        if key in item and item[key] not in (None, ""):
            return item[key]
    return None


def as_number(item: Dict[str, Any], *keys: str, default: Optional[float] = None) -> Optional[float]:
    value = first_value(item, *keys)
    if value is None:
        if default is None:
            raise ValueError(f"{keys[0]} requerido")
        return default
    if isinstance(value, bool):
        raise ValueError(f"{keys[0]} debe ser numérico")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{keys[0]} debe ser numérico") from exc
    if not math.isfinite(number):
        raise ValueError(f"{keys[0]} debe ser finito")
    return number


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return min(high, max(low, value))


def round_half_up(value: float) -> int:
    """Redondeo con .5 hacia arriba (Python usa redondeo bancario en round()).

    Tolera ruido de punto flotante: 46.49999999999999 se trata como 46.5.
    """
    return int(math.floor(value + 0.5 + 1e-9))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_instant(value) -> Optional[datetime]:
    """Convierte un ISO-8601 (o epoch en ms) a datetime con zona UTC.

    Los valores sin zona horaria se interpretan como UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)):
        dt = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise ValueError(f"fecha inválida: {value!r}") from exc
    else:
        raise ValueError(f"fecha inválida: {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_instant(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()
