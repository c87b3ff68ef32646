#!/usr/bin/env python3
import os

from setuptools import setup


install_requires = [
    'click',
    'flask',
    'prometheus_client',
    'requests'
]

extras_require = {
    'journald': ['systemd'],
    'test': ['pytest']
}

setup(name='cadvisor-monitor',
      description='Aggregate container CPU usage from cAdvisor',
      version=os.getenv("CADVISOR_MONITOR_VERSION", "0.dev0"),
      install_requires=install_requires,
      extras_require=extras_require,
      packages=[
          "cadvisor_monitor",
          "cadvisor_monitor.api",
          "cadvisor_monitor.config",
          "cadvisor_monitor.metrics",
          "cadvisor_monitor.model",
          "cadvisor_monitor.monitor"],
      py_modules=["run"])
