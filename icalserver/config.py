"""Configuration for the calendar server."""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from icalserver.constants import DEFAULT_REALM

# Web interface page shipped with the package
DEFAULT_INDEX_FILE = Path(__file__).parent / "static" / "index.html"


class ServerConfig(BaseModel):
    """Server configuration with Pydantic validation."""

    # Storage paths
    data_dir: Path = Field(default=Path("calendars"))
    users_file: Path = Field(default=Path("users.json"))
    index_file: Path = Field(default=DEFAULT_INDEX_FILE)
    log_dir: Path = Field(default=Path("logs"))

    # File naming
    log_filename: str = Field(default="ical_server.log")

    # Network
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    # Authentication
    realm: str = Field(default=DEFAULT_REALM)

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables and .env file."""
        # .env is looked up from the working directory the server runs in
        load_dotenv(find_dotenv(usecwd=True))

        config_dict = {}

        # Storage paths
        if "ICAL_DATA_DIR" in os.environ:
            config_dict["data_dir"] = Path(os.environ["ICAL_DATA_DIR"])
        if "ICAL_USERS_FILE" in os.environ:
            config_dict["users_file"] = Path(os.environ["ICAL_USERS_FILE"])
        if "ICAL_INDEX_FILE" in os.environ:
            config_dict["index_file"] = Path(os.environ["ICAL_INDEX_FILE"])
        if "ICAL_LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["ICAL_LOG_DIR"])

        # File naming
        if "ICAL_LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["ICAL_LOG_FILENAME"]

        # Network
        if "ICAL_HOST" in os.environ:
            config_dict["host"] = os.environ["ICAL_HOST"]
        if "ICAL_PORT" in os.environ:
            try:
                config_dict["port"] = int(os.environ["ICAL_PORT"])
            except ValueError:
                pass  # Keep default if invalid

        # Authentication
        if "ICAL_REALM" in os.environ:
            config_dict["realm"] = os.environ["ICAL_REALM"]

        return cls(**config_dict)
