"""Provider that replays a weather report previously dumped as JSON."""
import json
import logging

from weather_data import Data
from weather_provider import WeatherProviderBase, WeatherProviderError


class JsonFileProvider(WeatherProviderBase):
    """
    Reads the output of the json renderer back in.

    ``location`` is the path of the file. ``num_days`` can only shorten the
    forecast stored in the file.
    """

    def fetch(self, location: str, num_days: int) -> Data:
        logging.info(f"Reading weather data from {location}")
        try:
            with open(location, encoding="utf-8") as fh:
                raw = json.load(fh)
        except OSError as e:
            raise WeatherProviderError(f"Unable to read {location}: {e}") from e
        except ValueError as e:
            raise WeatherProviderError(f"Unable to decode {location}: {e}") from e

        try:
            data = Data.from_dict(raw)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise WeatherProviderError(f"{location} is not a weather report dump: {e}") from e

        if len(data.forecast) > num_days:
            data = Data(
                current=data.current,
                forecast=data.forecast[:max(num_days, 0)],
                location=data.location,
                geo_loc=data.geo_loc,
            )
        return data
