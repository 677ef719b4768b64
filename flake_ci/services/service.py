from abc import ABC, abstractmethod
from typing import Any


class Service(ABC):
    @abstractmethod
    def run(self, *args: Any, **kwargs: Any) -> Any:
        pass
