#!/usr/bin/env python3
"""
General utilities for the Orbital simulator.
"""
import os
from typing import Optional, Tuple


def try_float(val) -> Optional[float]:
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def parse_window_size(text: Optional[str], default: Tuple[int, int]) -> Tuple[int, int]:
    """Parse 'WxH' (e.g. '1280x720'); malformed values fall back to default."""
    if not text:
        return default
    parts = text.lower().split("x")
    if len(parts) != 2:
        return default
    w, h = try_float(parts[0]), try_float(parts[1])
    if w is None or h is None or w <= 0 or h <= 0:
        return default
    return (int(w), int(h))


def window_size_from_env(default: Tuple[int, int]) -> Tuple[int, int]:
    return parse_window_size(os.getenv("ORBITAL_WINDOW_SIZE"), default)
