"""Weather provider abstraction - allows swapping different weather APIs."""
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import requests

from weather_data import Data

LAT_LON_PATTERN = re.compile(r"^(-?[0-9]*(?:\.[0-9]+)?),(-?[0-9]*(?:\.[0-9]+)?)$")


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def fetch(self, location: str, num_days: int) -> Data:
        """
        Fetch current conditions and a forecast of ``num_days`` days.

        Returns:
            Data: Weather information in the canonical model

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class HttpJsonProvider(WeatherProviderBase):
    """Base for providers that answer a single HTTP GET with a JSON document."""

    name = "provider"

    def __init__(self, api_key: Optional[str] = None, lang: str = "en", timeout: int = 10):
        """
        Args:
            api_key: Provider API key (if the provider needs one)
            lang: Language code for descriptions (e.g., "en", "de")
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.lang = lang
        self.timeout = timeout

    def _require_api_key(self, signup_hint: str = "") -> str:
        if not self.api_key:
            message = f"No {self.name} API key specified"
            if signup_hint:
                message += f". {signup_hint}"
            raise WeatherProviderError(message)
        return self.api_key

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET ``url`` and decode the JSON body.

        Raises:
            WeatherProviderError: On connection errors, non-2xx status or an
                undecodable body. Nothing is retried.
        """
        try:
            logging.info(f"Making {self.name} API request: {url}")
            logging.debug(f"Request parameters: {_redact(params)}")
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}") from e

        logging.info(f"API response status: {response.status_code}")
        if not response.ok:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response)

        try:
            data = response.json()
        except ValueError as e:
            logging.error(f"Failed to decode API response: {e}")
            raise WeatherProviderError(
                f"Failed to decode {self.name} response: {e}: {response.text[:200]}"
            ) from e
        logging.debug(f"API response (truncated): {str(data)[:500]}...")
        return data

    def _handle_error_response(self, response: requests.Response) -> None:
        """Raise a WeatherProviderError describing a failed response."""
        try:
            error_data = response.json()
        except ValueError:
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise WeatherProviderError(f"HTTP {response.status_code}: {response.text[:200]}")

        message = None
        if isinstance(error_data, dict):
            message = error_data.get("message") or error_data.get("error") or error_data.get("reason")
        logging.error(f"{self.name} API error response: {error_data}")
        raise WeatherProviderError(f"{self.name} API error {response.status_code}: {message or 'Unknown error'}")


def parse_lat_lon(location: str) -> Optional[Tuple[str, str]]:
    """Split a ``"lat,lon"`` location into its two parts, or None if it is a name."""
    match = LAT_LON_PATTERN.match(location.strip())
    if not match or not match.group(1) or not match.group(2):
        return None
    return match.group(1), match.group(2)


def _redact(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not params:
        return params
    return {k: ("***" if k in ("key", "appid", "apikey") else v) for k, v in params.items()}
