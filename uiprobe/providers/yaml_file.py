import logging
import os
from typing import List

import yaml

from uiprobe.errors import ScenarioFileError
from uiprobe.models.scenario import Scenario
from uiprobe.providers.base import ScenarioProvider

LOGGER = logging.getLogger(__name__)


class YamlScenarioProvider(ScenarioProvider):
    def __init__(self, path: str):
        self.path = path

    def get_scenarios(self) -> List[Scenario]:
        if not os.path.exists(self.path):
            raise ScenarioFileError(f"Scenario file '{self.path}' not found")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ScenarioFileError(f"{self.path}: invalid YAML: {e}") from e

        scenarios = self._parse_catalog(data, self.path)
        LOGGER.info("Loaded %d scenarios from %s", len(scenarios), self.path)
        return scenarios
