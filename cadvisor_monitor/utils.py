import logging
from threading import Lock

from cadvisor_monitor.config.config_manager import ConfigManager
from cadvisor_monitor.config.constants import LOG_FMT_STRING
from cadvisor_monitor.config.env_property_provider import EnvPropertyProvider

config_manager_lock = Lock()
__config_manager = None

cpu_usage_calculator_lock = Lock()
__cpu_usage_calculator = None


def config_logs(level=logging.INFO):
    logging.basicConfig(
        format=LOG_FMT_STRING,
        datefmt='%d-%m-%Y:%H:%M:%S',
        level=level)


def get_config_manager(property_provider=EnvPropertyProvider()):
    global __config_manager

    with config_manager_lock:
        if __config_manager is None:
            __config_manager = ConfigManager(property_provider)

        return __config_manager


def set_config_manager(config_manager):
    global __config_manager

    with config_manager_lock:
        __config_manager = config_manager


def get_cpu_usage_calculator():
    global __cpu_usage_calculator

    with cpu_usage_calculator_lock:
        return __cpu_usage_calculator


def set_cpu_usage_calculator(cpu_usage_calculator):
    global __cpu_usage_calculator

    with cpu_usage_calculator_lock:
        __cpu_usage_calculator = cpu_usage_calculator
