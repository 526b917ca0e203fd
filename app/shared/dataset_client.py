import requests
import logging

from app.shared.exceptions import FetchError

logger = logging.getLogger(__name__)


class DatasetClient:
    def __init__(self, url, timeout=30.0):
        """Client for the remote product transaction dataset"""
        self.url = url
        self.timeout = timeout

    def fetch_transactions(self):
        """Download the dataset and return it as a list of dicts"""
        logger.info(f"Fetching dataset from {self.url}")
        try:
            response = requests.get(self.url, headers={"Accept": "application/json"}, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise FetchError(f"Could not fetch dataset: {e}") from e
        except ValueError as e:
            raise FetchError("Dataset response is not valid JSON") from e

        if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
            raise FetchError("Dataset is not a JSON array of objects")

        logger.info(f"Fetched {len(payload)} transactions")
        return payload
