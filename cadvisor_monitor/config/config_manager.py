from functools import lru_cache

from cadvisor_monitor.config.env_property_provider import EnvPropertyProvider

TRUE_VALUES = ['true', 't', 'yes', 'y', '1']


class ConfigManager:

    def __init__(self, property_provider=EnvPropertyProvider()):
        self.__property_provider = property_provider

    def get_str(self, key, default=None) -> str:
        value = self.__property_provider.get(key)

        if value is None:
            return default
        else:
            return value

    def get_float(self, key, default=None) -> float:
        value = self.get_str(key, default)
        if value is None:
            return None
        return float(value)

    def get_int(self, key, default=None) -> int:
        value = self.get_str(key, default)
        if value is None:
            return None
        return int(value)

    def get_bool(self, key, default=None) -> bool:
        value = self.get_str(key, default)
        if value is None or isinstance(value, bool):
            return value
        return str(value).strip().lower() in TRUE_VALUES

    @lru_cache(maxsize=None)
    def get_cached_str(self, key, default=None) -> str:
        return self.get_str(key, default)

    @lru_cache(maxsize=None)
    def get_cached_float(self, key, default=None) -> float:
        return self.get_float(key, default)

    @lru_cache(maxsize=None)
    def get_cached_int(self, key, default=None) -> int:
        return self.get_int(key, default)

    @lru_cache(maxsize=None)
    def get_cached_bool(self, key, default=None) -> bool:
        return self.get_bool(key, default)
