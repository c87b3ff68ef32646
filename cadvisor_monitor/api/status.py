import json
import logging

from flask import Flask
from prometheus_client import CONTENT_TYPE_LATEST

from cadvisor_monitor import log
from cadvisor_monitor.config.constants import CLAMP_COUNTER_RESETS, DEFAULT_CLAMP_COUNTER_RESETS
from cadvisor_monitor.metrics.metrics_manager import MetricsManager
from cadvisor_monitor.monitor.cadvisor_sample_provider import CAdvisorSampleProvider
from cadvisor_monitor.monitor.cpu_usage_calculator import CpuUsageCalculator
from cadvisor_monitor.utils import get_config_manager, get_cpu_usage_calculator, set_cpu_usage_calculator

app = Flask(__name__)

metrics_manager = None

JSON_HEADERS = {'Content-Type': 'application/json'}


@app.route('/cpu_usage')
def get_cpu_usage():
    return json.dumps({
        "total_cpu_usage_percent": get_cpu_usage_calculator().get_total_cpu_usage_percent()
    }), 200, JSON_HEADERS


@app.route('/cpu_usage/result')
def get_cpu_usage_result():
    result = get_cpu_usage_calculator().get_total_cpu_usage()
    if result.is_success():
        return json.dumps(result.to_dict()), 200, JSON_HEADERS

    return json.dumps(result.to_dict()), 503, JSON_HEADERS


@app.route('/status')
def get_status():
    calculator = get_cpu_usage_calculator()
    return json.dumps({
        "cpu_usage_calculator": {
            "sample_provider": calculator.get_sample_provider().get_name(),
            "failure_count": calculator.get_failure_count()
        }
    }), 200, JSON_HEADERS


@app.route('/metrics')
def get_metrics():
    return metrics_manager.exposition(), 200, {'Content-Type': CONTENT_TYPE_LATEST}


def init(cpu_usage_calculator: CpuUsageCalculator = None):
    global metrics_manager

    if cpu_usage_calculator is None:
        log.info("Setting up the cAdvisor sample provider...")
        sample_provider = CAdvisorSampleProvider()
        log.info("Querying cAdvisor at: '%s' with timeout: %s seconds",
                 sample_provider.get_url(), sample_provider.get_timeout())

        clamp = get_config_manager().get_cached_bool(CLAMP_COUNTER_RESETS, DEFAULT_CLAMP_COUNTER_RESETS)
        cpu_usage_calculator = CpuUsageCalculator(sample_provider, clamp_counter_resets=clamp)

    set_cpu_usage_calculator(cpu_usage_calculator)

    log.info("Setting up metrics reporting...")
    metrics_manager = MetricsManager([cpu_usage_calculator])


def create_app():
    log.info("Configuring logging...")
    gunicorn_logger = logging.getLogger('gunicorn.error')
    app.logger.handlers = gunicorn_logger.handlers
    app.logger.setLevel(gunicorn_logger.level)

    init()
    return app
