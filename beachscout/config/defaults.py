"""Default San Diego dog beaches with their nearest NOAA CO-OPS stations."""

from beachscout.config.schema import LocationConfig

DEFAULT_LOCATIONS: list[LocationConfig] = [
    LocationConfig(
        location_id="ocean-beach-dog-beach",
        display_name="Ocean Beach Dog Beach",
        latitude=32.7503,
        longitude=-117.2528,
        noaa_station_id="9410170",
    ),
    LocationConfig(
        location_id="del-mar-dog-beach",
        display_name="Del Mar North Beach",
        latitude=32.9712,
        longitude=-117.2689,
        noaa_station_id="9410230",  # La Jolla, nearest station to Del Mar
    ),
    LocationConfig(
        location_id="coronado-dog-beach",
        display_name="Coronado Dog Beach",
        latitude=32.6848,
        longitude=-117.1889,
        noaa_station_id="9410170",
    ),
    LocationConfig(
        location_id="fiesta-island",
        display_name="Fiesta Island Off-Leash Area",
        latitude=32.7781,
        longitude=-117.2223,
        noaa_station_id="9410170",
    ),
]
