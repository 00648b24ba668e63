import math
import os
import subprocess
import time
from email.utils import formatdate
from wgstatus.common.logger import get_logger


logger = get_logger("utils")

BYTE_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]


def ns_wrap(namespace: str, args: list[str]):
    if namespace:
        return ["ip", "netns", "exec", namespace] + args
    return args


def sudo_wrap(args: list[str]):
    if os.geteuid() != 0:
        logger.warning('sudo: {}'.format(args))
        return ["sudo"] + args
    return args


def sudo_call_output(args: list[str]):
    return subprocess.check_output(sudo_wrap(args), encoding='utf-8')


def byte_size(value) -> str:
    "1536 -> '1.5 KiB'. anything that is not a finite number >= 1 is '0 B'"

    try:
        b = float(value)
    except (TypeError, ValueError):
        return "0 B"

    if not math.isfinite(b) or b < 1:
        return "0 B"

    # largest unit that keeps the value >= 1, clamped to the unit table
    unit = 0
    while unit < len(BYTE_UNITS) - 1 and b >= 1024 ** (unit + 1):
        unit += 1

    amount = round(b / 1024 ** unit, 2)
    if amount.is_integer():
        return "{} {}".format(int(amount), BYTE_UNITS[unit])
    return "{} {}".format(amount, BYTE_UNITS[unit])


def relative_time(timestamp: int, now: float | None = None) -> str:
    "unix timestamp -> 'Mon, 19 Oct 2026 12:00:00 GMT (30s ago)'"

    if timestamp < 1:
        return "Never"

    if now is None:
        now = time.time()

    seconds = max(now - timestamp, 0)
    if seconds < 60:
        ago = "{}s ago".format(int(seconds))
    elif seconds < 60 * 60:
        ago = "{}m ago".format(int(seconds / 60))
    elif seconds < 24 * 60 * 60 + 1:
        ago = "{}h ago".format(int(seconds / 3600))
    else:
        ago = "over a day ago"

    try:
        absolute = formatdate(timestamp, usegmt=True)
    except (OverflowError, ValueError, OSError):
        # beyond what the platform calendar can represent
        logger.warning(f"handshake timestamp {timestamp} out of range")
        return ago

    return "{} ({})".format(absolute, ago)
