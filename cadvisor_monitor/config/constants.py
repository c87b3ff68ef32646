LOG_FMT_STRING = '%(asctime)s,%(msecs)d %(levelname)s [%(filename)s:%(lineno)d] %(message)s'

# cAdvisor
CADVISOR_URL = 'CADVISOR_URL'
DEFAULT_CADVISOR_URL = 'http://cadvisor:8080/api/v1.3/docker/'

CADVISOR_TIMEOUT_SEC = 'CADVISOR_TIMEOUT_SEC'
DEFAULT_CADVISOR_TIMEOUT_SEC = 5.0

# Counter resets (e.g. a container restart) make the cumulative usage go backwards
CLAMP_COUNTER_RESETS = 'CLAMP_COUNTER_RESETS'
DEFAULT_CLAMP_COUNTER_RESETS = True

# Admin API
ADMIN_PORT = 'ADMIN_PORT'
DEFAULT_ADMIN_PORT = 5000
