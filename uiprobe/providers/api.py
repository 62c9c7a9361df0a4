import json
import logging
import socket
import urllib.error
import urllib.request
from typing import List

from uiprobe.errors import ScenarioFileError
from uiprobe.models.scenario import Scenario
from uiprobe.providers.base import ScenarioProvider

LOGGER = logging.getLogger(__name__)


class APIProvider(ScenarioProvider):
    """Fetches the same catalogue document as the YAML file, served as JSON."""

    def __init__(self, api_url: str, timeout: float = 30.0):
        self.api_url = api_url
        self.timeout = timeout

    def get_scenarios(self) -> List[Scenario]:
        LOGGER.info("Fetching scenarios from %s", self.api_url)
        try:
            with urllib.request.urlopen(self.api_url, timeout=self.timeout) as response:
                if response.status != 200:
                    raise ScenarioFileError(f"{self.api_url}: HTTP Error {response.status}")
                data = json.loads(response.read().decode("utf-8"))
        except (urllib.error.URLError, socket.timeout, TimeoutError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ScenarioFileError(f"{self.api_url}: {e}") from e

        return self._parse_catalog(data, self.api_url)
