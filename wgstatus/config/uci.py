import shlex
from typing import Any
from wgstatus.common.logger import get_logger


logger = get_logger("uci")


def parse_uci_config(text: str) -> list[dict[str, Any]]:
    """
    Parse a uci config file (e.g. /etc/config/network) into a list of sections.

    Each section is a dict with the uci meta keys `.name`, `.type` and `.index`
    plus its options. `option` values are strings, `list` values are lists of
    strings. Anonymous sections are named `@<type>[<n>]`, as `uci show` does.
    """
    sections: list[dict[str, Any]] = []
    type_counts: dict[str, int] = {}
    current: dict[str, Any] | None = None

    for lineno, line in enumerate(text.splitlines(), 1):
        try:
            tokens = shlex.split(line, comments=True)
        except ValueError as e:
            raise ValueError(f"uci line {lineno}: {e}: {line!r}")

        if not tokens:
            continue

        keyword = tokens[0]
        if keyword == "package":
            continue

        if keyword == "config":
            if len(tokens) not in (2, 3):
                raise ValueError(f"uci line {lineno}: expected 'config <type> [<name>]': {line!r}")

            section_type = tokens[1]
            count = type_counts.get(section_type, 0)
            type_counts[section_type] = count + 1

            current = {
                ".name": tokens[2] if len(tokens) == 3 else f"@{section_type}[{count}]",
                ".type": section_type,
                ".index": len(sections),
            }
            sections.append(current)
            continue

        if keyword in ("option", "list"):
            if current is None:
                raise ValueError(f"uci line {lineno}: {keyword} outside of a config section: {line!r}")
            if len(tokens) != 3:
                raise ValueError(f"uci line {lineno}: expected '{keyword} <key> <value>': {line!r}")

            key, value = tokens[1], tokens[2]
            if keyword == "option":
                current[key] = value
            else:
                values = current.get(key)
                if not isinstance(values, list):
                    values = []
                    current[key] = values
                values.append(value)
            continue

        raise ValueError(f"uci line {lineno}: unknown keyword '{keyword}': {line!r}")

    return sections


def load_uci_config(path: str) -> list[dict[str, Any]]:
    logger.debug(f"loading uci config {path}")
    with open(path, "r", encoding="utf-8") as f:
        return parse_uci_config(f.read())
