def parse_off_expression(expr: str):
    "'off' -> None, '0xca6c' -> '0xca6c'"

    if expr == 'off':
        return None
    return expr


def parse_none_expression(expr: str):
    "'(none)' -> None, '1.2.3.4:51820' -> '1.2.3.4:51820'"

    if expr == '(none)':
        return None
    return expr


def parse_keepalive_expression(expr: str):
    "'off' -> None, '25' -> 25"

    if expr == 'off':
        return None
    return int(expr)


def keepalive_to_expression(keepalive: int | None):
    "25 -> '25s', None -> None"

    if keepalive is None:
        return None
    return '{}s'.format(keepalive)


def parse_list_expression(value: str | list[str] | None):
    "'10.0.0.1/24 fd00::1/64' -> ['10.0.0.1/24', 'fd00::1/64']"

    if value is None:
        return []
    if isinstance(value, str):
        # uci allows a list to be given as a single whitespace separated option
        return value.split()
    return [str(v) for v in value]
