class MalformedRecordError(ValueError):
    """A line of the `wg show all dump` feed does not match its expected shape."""

    def __init__(self, line_index: int, line: str, reason: str):
        self.line_index = line_index
        self.line = line
        self.reason = reason
        super().__init__(f"malformed status line {line_index}: {reason}: {line!r}")


class StatusSourceError(RuntimeError):
    """Fetching the status feed or the config sections failed."""
