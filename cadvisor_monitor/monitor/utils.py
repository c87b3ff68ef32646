import math
import re
from datetime import datetime, timedelta, timezone
from typing import Dict, List

from cadvisor_monitor import log
from cadvisor_monitor.model.sample import Sample
from cadvisor_monitor.monitor.errors import TimeParseError

NANOS_PER_SECOND = 1000000000
NANOS_PER_MICROSECOND = 1000
SECONDS_PER_DAY = 24 * 60 * 60

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# e.g. 2024-01-01T12:00:00.123456789Z
TIMESTAMP_PATTERN = re.compile(
    r'^([0-9]{4}-[0-9]{2}-[0-9]{2})[Tt ]([0-9]{2}:[0-9]{2}):([0-9]{2})(?:\.([0-9]{1,9}))?([Zz]|[+-][0-9]{2}:[0-9]{2})?$')

LEAP_SECOND = '60'


def __parse_zone(zone: str) -> timezone:
    if zone is None or zone in ('Z', 'z'):
        return timezone.utc

    sign = -1 if zone[0] == '-' else 1
    hours, minutes = zone[1:].split(':')
    if int(minutes) >= 60:
        raise ValueError("Invalid zone offset minutes: '{}'".format(zone))
    return timezone(sign * timedelta(hours=int(hours), minutes=int(minutes)))


def __to_epoch_seconds(dt: datetime) -> int:
    delta = dt - EPOCH
    return delta.days * SECONDS_PER_DAY + delta.seconds


def __str_to_epoch_nanos(timestamp: str) -> int:
    match = TIMESTAMP_PATTERN.match(timestamp.strip())
    if match is None:
        raise TimeParseError("Invalid timestamp: '{}'".format(timestamp))

    date, hours_minutes, seconds, fraction, zone = match.groups()

    # A leap second is read as the last second of its minute
    if seconds == LEAP_SECOND:
        seconds = '59'

    try:
        dt = datetime.strptime("{}T{}:{}".format(date, hours_minutes, seconds), '%Y-%m-%dT%H:%M:%S')
        dt = dt.replace(tzinfo=__parse_zone(zone))
    except ValueError as e:
        raise TimeParseError("Invalid timestamp: '{}'".format(timestamp)) from e

    nanos = 0 if fraction is None else int(fraction.ljust(9, '0'))
    return __to_epoch_seconds(dt) * NANOS_PER_SECOND + nanos


def __datetime_to_epoch_nanos(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return __to_epoch_seconds(dt) * NANOS_PER_SECOND + dt.microsecond * NANOS_PER_MICROSECOND


def to_epoch_nanos(timestamp) -> int:
    """
    Converts an ISO-8601 timestamp string or a datetime into nanoseconds since the epoch.

    Strings keep their full nanosecond fraction, datetimes are limited to microseconds.  Timestamps without a zone
    designator are read as UTC.
    """
    if isinstance(timestamp, datetime):
        return __datetime_to_epoch_nanos(timestamp)

    if isinstance(timestamp, str):
        return __str_to_epoch_nanos(timestamp)

    raise TimeParseError("Unsupported timestamp type: '{}'".format(type(timestamp).__name__))


def round_half_up(value: float, digits: int = 2) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def get_container_cpu_percent(prev: Sample, current: Sample, clamp_counter_resets: bool = True) -> float:
    usage_delta = current.get_cumulative_cpu_usage_nanos() - prev.get_cumulative_cpu_usage_nanos()
    time_delta = to_epoch_nanos(current.get_timestamp()) - to_epoch_nanos(prev.get_timestamp())

    if time_delta <= 0:
        return 0.0

    if usage_delta < 0 and clamp_counter_resets:
        return 0.0

    # Not normalized by core count, two fully busy cores report ~200%
    return (usage_delta / time_delta) * 100.0


def get_total_cpu_percent(container_samples: Dict[str, List[Sample]], clamp_counter_resets: bool = True) -> float:
    total = 0.0
    for container_id, samples in container_samples.items():
        if samples is None or len(samples) < 2:
            continue

        cpu_percent = get_container_cpu_percent(samples[-2], samples[-1], clamp_counter_resets)
        log.debug("container: %s, cpu percent: %s", container_id, cpu_percent)
        total += cpu_percent

    return round_half_up(total, 2)
