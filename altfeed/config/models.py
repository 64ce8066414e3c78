"""Configuration models."""

from pydantic import BaseModel, Field


class UpstreamConfig(BaseModel):
    """Upstream feed configuration."""

    url: str = Field("https://xkcd.com/atom.xml", description="Atom feed to republish")
    timeout_seconds: float = Field(30.0, description="Upstream request timeout", gt=0.0, le=300.0)
    user_agent: str = Field("altfeed/0.1 (+https://xkcd.com)", description="User-Agent header")


class CacheConfig(BaseModel):
    """Feed cache configuration."""

    key: str = Field("/xkcd.atom", description="Cache key for the feed snapshot")
    ttl_seconds: float = Field(300.0, description="Snapshot lifetime", gt=0.0, le=86400.0)


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field("127.0.0.1", description="Bind address")
    port: int = Field(8080, description="Bind port", ge=1, le=65535)


class ConfigModel(BaseModel):
    """Main configuration model."""

    upstream: UpstreamConfig = Field(default_factory=UpstreamConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
