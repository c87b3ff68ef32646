import os
from typing import List

from prometheus_client import CollectorRegistry, generate_latest

from cadvisor_monitor import log
from cadvisor_monitor.metrics.constants import NODE_TAG
from cadvisor_monitor.metrics.metrics_reporter import MetricsReporter


class MetricsManager:

    def __init__(self, reporters: List[MetricsReporter], reg: CollectorRegistry = None):
        self.__reporters = reporters
        self.__reg = CollectorRegistry() if reg is None else reg

        for reporter in self.__reporters:
            reporter.set_registry(self.__reg, self.get_tags())

    def get_registry(self) -> CollectorRegistry:
        return self.__reg

    def report_metrics(self):
        try:
            tags = self.get_tags()

            for reporter in self.__reporters:
                reporter.report_metrics(tags)
        except Exception:
            log.exception("Failed to report metrics.")

    def exposition(self) -> bytes:
        self.report_metrics()
        return generate_latest(self.__reg)

    @staticmethod
    def get_tags():
        tags = {}
        if 'HOSTNAME' in os.environ:
            tags[NODE_TAG] = os.environ['HOSTNAME']

        return tags
