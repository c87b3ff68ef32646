import logging
import sys

import click

from cadvisor_monitor import log
from cadvisor_monitor.api.status import app, init
from cadvisor_monitor.config.constants import ADMIN_PORT, DEFAULT_ADMIN_PORT, CLAMP_COUNTER_RESETS, \
    DEFAULT_CLAMP_COUNTER_RESETS
from cadvisor_monitor.monitor.cadvisor_sample_provider import CAdvisorSampleProvider
from cadvisor_monitor.monitor.cpu_usage_calculator import CpuUsageCalculator
from cadvisor_monitor.utils import config_logs, get_config_manager


@click.command()
@click.option('--cadvisor-url', default=None, help="The cAdvisor containers endpoint (default: $CADVISOR_URL)")
@click.option('--timeout', default=None, type=float, help="The cAdvisor request timeout in seconds")
@click.option('--admin-port', default=None, type=int, help="The port for the HTTP server to listen on (default: 5000)")
@click.option('--once', is_flag=True, help="Print the total CPU usage percent and exit")
@click.option('--debug', is_flag=True, help="Enable debug logging")
def main(cadvisor_url, timeout, admin_port, once, debug):
    if debug:
        log.setLevel(logging.DEBUG)

    cm = get_config_manager()
    if admin_port is None:
        admin_port = cm.get_cached_int(ADMIN_PORT, DEFAULT_ADMIN_PORT)

    log.info("Setting up the CPU usage calculator...")
    sample_provider = CAdvisorSampleProvider(url=cadvisor_url, timeout=timeout)
    clamp = cm.get_cached_bool(CLAMP_COUNTER_RESETS, DEFAULT_CLAMP_COUNTER_RESETS)
    calculator = CpuUsageCalculator(sample_provider, clamp_counter_resets=clamp)

    if once:
        result = calculator.get_total_cpu_usage()
        click.echo(result.get_value())
        if not result.is_success():
            sys.exit(1)
        return

    init(calculator)

    log.info("Startup complete, serving CPU usage from: '%s'", sample_provider.get_url())
    # Starting the HTTP server blocks exit forever
    app.run(host="0.0.0.0", debug=False, port=admin_port)


if __name__ == "__main__":
    config_logs()
    main()
