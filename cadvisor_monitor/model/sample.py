class Sample:

    def __init__(self, timestamp, cumulative_cpu_usage_nanos: int):
        self.__timestamp = timestamp
        self.__cumulative_cpu_usage_nanos = cumulative_cpu_usage_nanos

    def get_timestamp(self):
        return self.__timestamp

    def get_cumulative_cpu_usage_nanos(self) -> int:
        return self.__cumulative_cpu_usage_nanos
