from os import environ as env
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ._utils.constants import ENV_BASE_URL, ENV_PROXY, ENV_TIMEOUT
from .models.exceptions import BaseUrlMissingError


class ProxyConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str
    port: int
    protocol: str = "http"
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def url(self) -> str:
        auth = ""
        if self.username is not None:
            auth = f"{self.username}:{self.password or ''}@"
        return f"{self.protocol}://{auth}{self.host}:{self.port}"


class ClientConfig(BaseModel):
    """Settings shared by every request a client sends.

    Set once when the client is constructed and never changed afterwards.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str
    headers: dict[str, Optional[str]] = Field(default_factory=dict)
    proxy: Union[ProxyConfig, str, None] = None
    timeout: Optional[float] = None
    follow_redirects: bool = True

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        assert value.strip(), "base_url must not be empty"
        return value

    @property
    def proxy_url(self) -> Optional[str]:
        if isinstance(self.proxy, ProxyConfig):
            return self.proxy.url
        return self.proxy

    @classmethod
    def from_env(
        cls,
        *,
        base_url: Optional[str] = None,
        headers: Optional[dict[str, Optional[str]]] = None,
        proxy: Union[ProxyConfig, str, None] = None,
        timeout: Optional[float] = None,
    ) -> "ClientConfig":
        """Build a config from arguments, falling back to environment variables.

        A ``.env`` file in the working directory is loaded first.

        Raises:
            BaseUrlMissingError: If no base URL is given or configured.
        """
        load_dotenv()

        base_url_value = base_url or env.get(ENV_BASE_URL)
        if not base_url_value:
            raise BaseUrlMissingError()

        timeout_value = timeout
        if timeout_value is None and env.get(ENV_TIMEOUT):
            timeout_value = float(env[ENV_TIMEOUT])

        return cls(
            base_url=base_url_value,
            headers=headers or {},
            proxy=proxy or env.get(ENV_PROXY) or None,
            timeout=timeout_value,
        )
