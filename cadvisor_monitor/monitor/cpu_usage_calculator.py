from threading import Lock

from prometheus_client import Gauge

from cadvisor_monitor import log
from cadvisor_monitor.metrics.constants import TOTAL_CPU_USAGE_PERCENT_KEY, MEASUREMENT_SUCCEEDED_KEY, \
    MEASUREMENT_COUNT_KEY, MEASUREMENT_FAILED_COUNT_KEY
from cadvisor_monitor.metrics.metrics_reporter import MetricsReporter
from cadvisor_monitor.model.usage_result import UsageResult
from cadvisor_monitor.monitor.errors import MonitorError, UNKNOWN_ERROR
from cadvisor_monitor.monitor.sample_provider import SampleProvider
from cadvisor_monitor.monitor.utils import get_total_cpu_percent


class CpuUsageCalculator(MetricsReporter):

    def __init__(self, sample_provider: SampleProvider, clamp_counter_resets: bool = True):
        self.__sample_provider = sample_provider
        self.__clamp_counter_resets = clamp_counter_resets

        self.__metric_lock = Lock()
        self.__measurement_count = 0
        self.__failure_count = 0
        self.__last_result = None

        self.__gauges = {}

    def get_name(self) -> str:
        return self.__class__.__name__

    def get_sample_provider(self) -> SampleProvider:
        return self.__sample_provider

    def get_failure_count(self) -> int:
        with self.__metric_lock:
            return self.__failure_count

    def get_total_cpu_usage(self) -> UsageResult:
        """
        Sums the CPU usage percent of every container, each derived from its two most recent samples.

        Never raises, a failed measurement is reported as a failed result.
        """
        result = self.__measure()
        with self.__metric_lock:
            self.__measurement_count += 1
            if not result.is_success():
                self.__failure_count += 1
            self.__last_result = result

        return result

    def get_total_cpu_usage_percent(self) -> float:
        return self.get_total_cpu_usage().get_value()

    def __measure(self) -> UsageResult:
        try:
            log.debug("Getting samples from sample provider: %s", self.__sample_provider.get_name())
            container_samples = self.__sample_provider.get_samples()
            total = get_total_cpu_percent(container_samples, self.__clamp_counter_resets)
            log.debug("Total CPU usage of %d containers: %s%%", len(container_samples), total)
            return UsageResult.success(total)
        except MonitorError as e:
            log.error("Failed to compute total CPU usage: %s", e)
            return UsageResult.failure(e.kind, str(e))
        except Exception as e:
            log.exception("Failed to compute total CPU usage")
            return UsageResult.failure(UNKNOWN_ERROR, str(e))

    def set_registry(self, registry, tags):
        label_names = sorted(tags.keys())
        self.__gauges = {
            TOTAL_CPU_USAGE_PERCENT_KEY: Gauge(
                TOTAL_CPU_USAGE_PERCENT_KEY, 'Total CPU usage percent of the last measurement',
                label_names, registry=registry),
            MEASUREMENT_SUCCEEDED_KEY: Gauge(
                MEASUREMENT_SUCCEEDED_KEY, 'Whether the last measurement succeeded',
                label_names, registry=registry),
            MEASUREMENT_COUNT_KEY: Gauge(
                MEASUREMENT_COUNT_KEY, 'Number of CPU usage measurements',
                label_names, registry=registry),
            MEASUREMENT_FAILED_COUNT_KEY: Gauge(
                MEASUREMENT_FAILED_COUNT_KEY, 'Number of failed CPU usage measurements',
                label_names, registry=registry),
        }

    def report_metrics(self, tags):
        if len(self.__gauges) == 0:
            log.debug("No registry set, not reporting metrics")
            return

        with self.__metric_lock:
            values = {
                TOTAL_CPU_USAGE_PERCENT_KEY: 0.0 if self.__last_result is None else self.__last_result.get_value(),
                MEASUREMENT_SUCCEEDED_KEY: int(self.__last_result is not None and self.__last_result.is_success()),
                MEASUREMENT_COUNT_KEY: self.__measurement_count,
                MEASUREMENT_FAILED_COUNT_KEY: self.__failure_count
            }

        for key, value in values.items():
            gauge = self.__gauges[key]
            if len(tags) > 0:
                gauge = gauge.labels(**tags)
            gauge.set(value)
