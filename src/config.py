from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # API Keys
    census_api_key: str = ""
    cdc_app_token: str = ""

    # Geography (Milwaukee County, WI)
    state_fips: str = "55"
    county_fips: str = "079"

    # Census ACS 5-year
    acs_year: int = 2022

    # CDC PLACES tract-level dataset (Socrata)
    places_dataset: str = "cwsq-ngmh"
    places_page_size: int = 5000

    # Milwaukee MPROP parcels (ArcGIS)
    mprop_url: str = (
        "https://milwaukeemaps.milwaukee.gov/arcgis/rest/services/property/parcels_mprop/MapServer/2/query"
    )
    mprop_page_size: int = 2000  # ArcGIS max return per request

    # Crosswalk + zone inputs
    crosswalk_path: str = "data/census-holc-crosswalk.json"
    zones_path: str = "data/holc-zones.json"

    # HTTP
    http_timeout: float = 15.0

    # Map layer fill alpha
    color_alpha: int = 190

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
