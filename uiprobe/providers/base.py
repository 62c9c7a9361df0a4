from abc import ABC, abstractmethod
from typing import List

from pydantic import ValidationError

from uiprobe.errors import ScenarioFileError
from uiprobe.models.scenario import Scenario, ScenarioCatalog


class ScenarioProvider(ABC):
    target_url = None

    @abstractmethod
    def get_scenarios(self) -> List[Scenario]:
        """
        Returns the scenarios in declaration order.
        Providers may also set `target_url` when the catalogue names one.
        """
        pass

    def _parse_catalog(self, data, origin: str) -> List[Scenario]:
        if not isinstance(data, dict):
            raise ScenarioFileError(f"{origin}: expected a mapping with a 'groups' list")
        try:
            catalog = ScenarioCatalog(**data)
            scenarios = catalog.scenarios()
        except ValidationError as e:
            raise ScenarioFileError(f"{origin}: {e}") from e

        ids = [s.id for s in scenarios]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ScenarioFileError(f"{origin}: duplicate scenario ids {', '.join(duplicates)}")

        self.target_url = catalog.target_url
        return scenarios
