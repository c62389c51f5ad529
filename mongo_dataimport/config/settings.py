import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Property Keys (as supplied by the host pipeline) ---
DATABASE = "database"
HOST = "host"
PORT = "port"
USERNAME = "username"
PASSWORD = "password"
AUTH_SOURCE = "authSource"
COLLECTION = "collection"
SERVER_SELECTION_TIMEOUT_MS = "serverSelectionTimeoutMS"

# Property key -> environment variable used by the CLI runner
ENV_VARS = {
    DATABASE: "MONGO_DATABASE",
    HOST: "MONGO_HOST",
    PORT: "MONGO_PORT",
    USERNAME: "MONGO_USERNAME",
    PASSWORD: "MONGO_PASSWORD",
    AUTH_SOURCE: "MONGO_AUTH_SOURCE",
    COLLECTION: "MONGO_COLLECTION",
    SERVER_SELECTION_TIMEOUT_MS: "MONGO_SERVER_SELECTION_TIMEOUT_MS",
}


class MongoDataSourceConfig(BaseModel):
    """
    Validated data source properties.
    Built once at init time from the host's (string-valued) property set.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    database: str = Field(min_length=1)
    host: str = "localhost"
    port: int = Field(default=27017, ge=1, le=65535)
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
    auth_source: str = Field(default="admin", alias=AUTH_SOURCE)
    collection: Optional[str] = None
    server_selection_timeout_ms: Optional[int] = Field(
        default=None, ge=0, alias=SERVER_SELECTION_TIMEOUT_MS
    )

    @classmethod
    def from_properties(cls, props: Mapping[str, Any]) -> "MongoDataSourceConfig":
        return cls.model_validate(dict(props))

    @property
    def has_credentials(self) -> bool:
        # A credential is only attached when both halves are supplied
        return self.username is not None and self.password is not None

    @property
    def uri(self) -> str:
        return f"mongodb://{self.host}:{self.port}"


def properties_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Collects data source properties from environment variables (see ENV_VARS).
    Unset variables are left out so the config defaults apply.
    Loading a .env file into the environment is left to the caller (the CLI does it).
    """
    environ = os.environ if environ is None else environ
    props = {}
    for key, env_name in ENV_VARS.items():
        value = environ.get(env_name)
        if value:
            props[key] = value
    return props
