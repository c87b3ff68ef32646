import logging
from typing import Dict, List

from cadvisor_monitor.config.config_manager import ConfigManager
from cadvisor_monitor.config.constants import LOG_FMT_STRING
from cadvisor_monitor.model.sample import Sample
from cadvisor_monitor.utils import set_config_manager
from tests.config.test_property_provider import TestPropertyProvider

# 2023-11-14T22:13:20Z
DEFAULT_TEST_EPOCH_SEC = 1700000000
DEFAULT_TEST_CADVISOR_URL = 'http://localhost:8080/api/v1.3/docker/'

set_config_manager(ConfigManager(TestPropertyProvider({})))


def config_logs(level):
    logging.basicConfig(
        format=LOG_FMT_STRING,
        datefmt='%d-%m-%Y:%H:%M:%S',
        level=level)


def get_test_timestamp(seconds: int, nanos: int = 0) -> str:
    """
    Builds a cAdvisor style timestamp `seconds` after the default test epoch, e.g. 2023-11-14T22:13:21.000000000Z
    """
    total_sec = DEFAULT_TEST_EPOCH_SEC + seconds
    day_sec = total_sec % 86400
    hours, rem = divmod(day_sec, 3600)
    minutes, secs = divmod(rem, 60)
    return "2023-11-14T{:02d}:{:02d}:{:02d}.{:09d}Z".format(hours, minutes, secs, nanos)


def get_test_samples(usages: List[int], interval_sec: int = 1) -> List[Sample]:
    return [Sample(get_test_timestamp(i * interval_sec), u) for i, u in enumerate(usages)]


def get_test_stats(usages: List[int], interval_sec: int = 1) -> List[Dict]:
    return [
        {
            "timestamp": get_test_timestamp(i * interval_sec),
            "cpu": {
                "usage": {
                    "total": u,
                    "user": u // 2,
                    "system": u - u // 2
                }
            },
            "memory": {
                "usage": 1048576
            }
        } for i, u in enumerate(usages)]
