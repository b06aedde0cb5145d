import json
import time
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd
import requests

from planner_config.api_config import OPENCHARGEMAP_CONFIG, get_openchargemap_api_key
from planner_config.planner_config import PRICING_CONFIG
from trip_planner.models.entities import ChargingStationCandidate
from trip_planner.utils.geo import cumulative_distances_miles, distance_miles, sample_points
from trip_planner.utils.logger import get_logger
from trip_planner.utils.tariff import get_price_per_kwh, parse_usage_cost

logger = get_logger('openchargemap_api')

LatLng = Tuple[float, float]


class OpenChargeMapAPI:
    def __init__(self, api_key: Optional[str] = None, session: Optional[requests.Session] = None,
                 config: Optional[Dict] = None):
        self.config = config or OPENCHARGEMAP_CONFIG
        self.api_key = api_key if api_key is not None else get_openchargemap_api_key()
        self.base_url = self.config['base_url']
        self.session = session or requests.Session()

        # Rate limiting to be respectful to the API
        self.last_request_time = 0.0
        self.min_request_interval = self.config['min_request_interval']

        self.session.headers.update({
            'User-Agent': 'EV-Trip-Planner/1.0',
            'Accept': 'application/json'
        })

    def _rate_limit(self):
        """Implement rate limiting"""
        current_time = time.time()
        time_since_last = current_time - self.last_request_time
        if time_since_last < self.min_request_interval:
            time.sleep(self.min_request_interval - time_since_last)
        self.last_request_time = time.time()

    def find_nearby_stations(self, latitude: float, longitude: float,
                             distance_miles: float = None, max_results: int = None) -> List[Dict]:
        """
        Find charging stations near a location

        Args:
            latitude: Latitude coordinate
            longitude: Longitude coordinate
            distance_miles: Search radius in miles
            max_results: Maximum number of results

        Returns:
            List of raw station dictionaries (empty on any failure)
        """
        self._rate_limit()

        params = {
            'output': 'json',
            'latitude': latitude,
            'longitude': longitude,
            'distance': distance_miles or self.config['default_radius_miles'],
            'distanceunit': 'Miles',
            'maxresults': max_results or self.config['max_results'],
            'compact': 'false',
            'verbose': 'false',
        }
        if self.api_key:
            params['key'] = self.api_key

        try:
            url = f"{self.base_url}/poi/"
            response = self.session.get(url, params=params, timeout=self.config['timeout_seconds'])

            if response.status_code == 200:
                stations = response.json()
                logger.info(f"Found {len(stations)} stations near ({latitude:.4f}, {longitude:.4f})")
                return stations
            logger.error(f"API Error {response.status_code}: {response.text}")
            return []

        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {e}")
            return []
        except json.JSONDecodeError as e:
            logger.error(f"JSON decode error: {e}")
            return []

    def extract_station_data(self, raw_station: Dict) -> Dict:
        """
        Extract the fields the planner needs from a raw OpenChargeMap record
        """
        address_info = raw_station.get('AddressInfo') or {}
        operator_info = raw_station.get('OperatorInfo') or {}
        status_type = raw_station.get('StatusType') or {}
        charging_info = self._process_connections(raw_station.get('Connections') or [])

        return {
            'ocm_id': raw_station.get('ID'),
            'title': address_info.get('Title') or 'Charging Station',
            'latitude': address_info.get('Latitude'),
            'longitude': address_info.get('Longitude'),
            'town': address_info.get('Town', ''),
            'operator': operator_info.get('Title', 'Unknown'),
            'is_operational': status_type.get('IsOperational', True),
            'max_power_kw': charging_info['max_power_kw'],
            'has_fast_charging': charging_info['has_fast_charging'],
            'num_points': charging_info['num_points'],
            'estimated_cost_per_kwh': parse_usage_cost(raw_station.get('UsageCost')),
        }

    def _process_connections(self, connections: List[Dict]) -> Dict:
        """Process connection data to extract charging capabilities"""
        power_ratings = [c.get('PowerKW') for c in connections if c.get('PowerKW')]
        max_power = max(power_ratings) if power_ratings else 0
        return {
            'max_power_kw': float(max_power),
            'has_fast_charging': max_power >= 50,  # Consider 50kW+ as fast charging
            'num_points': sum(c.get('Quantity') or 1 for c in connections),
        }

    def get_stations_along_route(self, route_points: Sequence[LatLng],
                                 radius_miles: float = None) -> pd.DataFrame:
        """
        Query stations around sample points of the route geometry.

        Returns a DataFrame of unique operational stations with a
        `distance_from_route_miles` column: route distance from the start to
        the closest route vertex plus the straight-line offset to the station.
        """
        if not route_points:
            return pd.DataFrame()

        samples = sample_points(route_points, self.config['route_sample_points'])
        logger.info(f"Fetching stations around {len(samples)} route sample points")

        all_stations = []
        seen_ids = set()
        for lat, lon in samples:
            for raw_station in self.find_nearby_stations(lat, lon, distance_miles=radius_miles):
                station_id = raw_station.get('ID')
                if station_id in seen_ids:
                    continue
                seen_ids.add(station_id)

                station_data = self.extract_station_data(raw_station)
                if station_data.get('latitude') is not None and station_data.get('longitude') is not None:
                    all_stations.append(station_data)

        if not all_stations:
            logger.warning("No stations found along route")
            return pd.DataFrame()

        df = pd.DataFrame(all_stations)
        df = df[df['is_operational'] == True].copy()  # noqa: E712
        if df.empty:
            return df

        cumulative = cumulative_distances_miles(route_points)

        def _along_route(row) -> float:
            location = (row['latitude'], row['longitude'])
            offsets = [distance_miles(location, point) for point in route_points]
            nearest = min(range(len(offsets)), key=offsets.__getitem__)
            return cumulative[nearest] + offsets[nearest]

        df['distance_from_route_miles'] = df.apply(_along_route, axis=1)
        df = df.sort_values('distance_from_route_miles').reset_index(drop=True)
        logger.info(f"Final dataset: {len(df)} operational stations along route")
        return df


def to_station_candidates(df: pd.DataFrame, when: Optional[datetime] = None,
                          pricing_config: Optional[Dict] = None) -> List[ChargingStationCandidate]:
    """Convert a station DataFrame into optimizer inputs, pricing each station for `when`."""
    if df is None or df.empty:
        return []
    when = when or datetime.now()
    pricing = pricing_config or PRICING_CONFIG

    candidates = []
    for row in df.to_dict(orient='records'):
        cost = row.get('estimated_cost_per_kwh')
        station = {'estimated_cost_per_kwh': None if pd.isna(cost) else cost}
        candidates.append(ChargingStationCandidate(
            power_kw=float(row.get('max_power_kw') or 0.0),
            cost_per_kwh=get_price_per_kwh(station, when, pricing),
            distance_from_route_miles=float(row['distance_from_route_miles']),
            name=str(row.get('title') or 'Charging Station'),
            station_id=str(row.get('ocm_id')),
            latitude=float(row['latitude']),
            longitude=float(row['longitude']),
        ))
    return candidates
