from typing import Dict, List

import requests

from cadvisor_monitor import log
from cadvisor_monitor.config.constants import CADVISOR_URL, DEFAULT_CADVISOR_URL, CADVISOR_TIMEOUT_SEC, \
    DEFAULT_CADVISOR_TIMEOUT_SEC
from cadvisor_monitor.model.sample import Sample
from cadvisor_monitor.monitor.errors import FetchError, DecodeError
from cadvisor_monitor.monitor.sample_provider import SampleProvider
from cadvisor_monitor.utils import get_config_manager

STATS_KEY = 'stats'
TIMESTAMP_KEY = 'timestamp'
CPU_KEY = 'cpu'
USAGE_KEY = 'usage'
TOTAL_KEY = 'total'


class CAdvisorSampleProvider(SampleProvider):

    def __init__(self, url: str = None, timeout: float = None):
        cm = get_config_manager()
        if url is None:
            url = cm.get_cached_str(CADVISOR_URL, DEFAULT_CADVISOR_URL)
        if timeout is None:
            timeout = cm.get_cached_float(CADVISOR_TIMEOUT_SEC, DEFAULT_CADVISOR_TIMEOUT_SEC)

        self.__url = url
        self.__timeout = timeout

    def get_url(self) -> str:
        return self.__url

    def get_timeout(self) -> float:
        return self.__timeout

    def get_samples(self) -> Dict[str, List[Sample]]:
        log.debug("Querying cAdvisor: %s", self.__url)
        try:
            resp = requests.get(self.__url, timeout=self.__timeout, headers={"accept": "application/json"})
        except requests.RequestException as e:
            raise FetchError("Failed to query cAdvisor at '{}': {}".format(self.__url, e)) from e

        if resp.status_code != requests.codes.ok:
            raise FetchError("Failed to query cAdvisor at '{}', status: {}, text: {}".format(
                self.__url, resp.status_code, resp.text))

        try:
            body = resp.json()
        except ValueError as e:
            raise DecodeError("cAdvisor response is not valid JSON: {}".format(e)) from e

        return self.parse_response(body)

    @staticmethod
    def parse_response(body) -> Dict[str, List[Sample]]:
        # {
        #     "/docker/3d5fba95...": {
        #         "name": "/docker/3d5fba95...",
        #         "stats": [
        #             {
        #                 "timestamp": "2024-01-01T12:00:00.123456789Z",
        #                 "cpu": {
        #                     "usage": {
        #                         "total": 1000000000,
        #                         "user": 600000000,
        #                         "system": 400000000
        #                     }
        #                 },
        #                 ...
        #             },
        #             ...
        #         ]
        #     },
        #     ...
        # }
        if not isinstance(body, dict):
            raise DecodeError("Unexpected cAdvisor response.  Expected an object keyed by container id")

        container_samples = {}
        for container_id, info in body.items():
            if not isinstance(info, dict):
                raise DecodeError("Unexpected container info for container: '{}'".format(container_id))

            stats = info.get(STATS_KEY, None)
            if stats is None:
                log.debug("No stats reported for container: '%s'", container_id)
                container_samples[container_id] = []
                continue

            if not isinstance(stats, list):
                raise DecodeError("'{}' is not a list for container: '{}'".format(STATS_KEY, container_id))

            container_samples[container_id] = [CAdvisorSampleProvider.__parse_stat(container_id, s) for s in stats]

        return container_samples

    @staticmethod
    def __parse_stat(container_id: str, stat) -> Sample:
        try:
            timestamp = stat[TIMESTAMP_KEY]
            total = stat[CPU_KEY][USAGE_KEY][TOTAL_KEY]
        except (KeyError, TypeError) as e:
            raise DecodeError("Malformed stat for container: '{}', missing: {}".format(container_id, e)) from e

        if not isinstance(timestamp, str):
            raise DecodeError("Timestamp is not a string for container: '{}'".format(container_id))

        if isinstance(total, bool) or not isinstance(total, int):
            raise DecodeError("Total CPU usage is not an integer for container: '{}'".format(container_id))

        return Sample(timestamp, total)
