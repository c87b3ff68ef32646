TOTAL_CPU_USAGE_PERCENT_KEY = 'cadvisor_monitor_total_cpu_usage_percent'
MEASUREMENT_SUCCEEDED_KEY = 'cadvisor_monitor_measurement_succeeded'
MEASUREMENT_COUNT_KEY = 'cadvisor_monitor_measurement_count'
MEASUREMENT_FAILED_COUNT_KEY = 'cadvisor_monitor_measurement_failed_count'

NODE_TAG = 'node'
