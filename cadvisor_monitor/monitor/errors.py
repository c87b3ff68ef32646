FETCH_ERROR = "FETCH_ERROR"
DECODE_ERROR = "DECODE_ERROR"
TIME_PARSE_ERROR = "TIME_PARSE_ERROR"
UNKNOWN_ERROR = "UNKNOWN_ERROR"


class MonitorError(Exception):
    kind = UNKNOWN_ERROR


class FetchError(MonitorError):
    """The sample source could not be reached or answered with a failure status."""
    kind = FETCH_ERROR


class DecodeError(MonitorError):
    """The sample source answered with a body which does not have the expected shape."""
    kind = DECODE_ERROR


class TimeParseError(MonitorError):
    """A sample timestamp could not be parsed."""
    kind = TIME_PARSE_ERROR
