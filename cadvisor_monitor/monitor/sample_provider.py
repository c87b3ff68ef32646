from abc import abstractmethod
from typing import Dict, List

from cadvisor_monitor.model.sample import Sample


class SampleProvider:

    @abstractmethod
    def get_samples(self) -> Dict[str, List[Sample]]:
        """
        Returns the CPU usage samples of every observed container, keyed by container id and ordered oldest first.

        Raises a FetchError if the sample source can not be reached and a DecodeError if its answer is malformed.
        """
        pass

    def get_name(self) -> str:
        return self.__class__.__name__
