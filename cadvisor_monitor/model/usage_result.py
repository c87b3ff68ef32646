from typing import Optional

SUCCEEDED_KEY = "succeeded"
VALUE_KEY = "value"
ERROR_KIND_KEY = "error_kind"
MESSAGE_KEY = "message"


class UsageResult:
    """
    The outcome of one CPU usage measurement.

    A failed measurement carries a value of 0.0 along with the kind of error which caused it, so callers can tell
    "0% utilization" apart from "measurement failed".
    """

    def __init__(self, succeeded: bool, value: float, error_kind: Optional[str] = None, message: Optional[str] = None):
        self.__succeeded = succeeded
        self.__value = value
        self.__error_kind = error_kind
        self.__message = message

    @staticmethod
    def success(value: float):
        return UsageResult(True, value)

    @staticmethod
    def failure(error_kind: str, message: str = None):
        return UsageResult(False, 0.0, error_kind, message)

    def is_success(self) -> bool:
        return self.__succeeded

    def get_value(self) -> float:
        return self.__value

    def get_error_kind(self) -> Optional[str]:
        return self.__error_kind

    def get_message(self) -> Optional[str]:
        return self.__message

    def to_dict(self):
        return {
            SUCCEEDED_KEY: self.is_success(),
            VALUE_KEY: self.get_value(),
            ERROR_KIND_KEY: self.get_error_kind(),
            MESSAGE_KEY: self.get_message()
        }

    def __str__(self):
        return str(self.to_dict())
