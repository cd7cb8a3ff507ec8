"""
Atlassian MCP Server - Configuration

Pydantic Settings for all configuration via environment variables.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional, Literal


class ConfluenceSettings(BaseSettings):
    """Confluence Cloud API configuration."""
    domain: Optional[str] = Field(None, alias="CONFLUENCE_DOMAIN")
    user: Optional[str] = Field(None, alias="CONFLUENCE_USER")
    token: Optional[str] = Field(None, alias="CONFLUENCE_TOKEN")
    verify_ssl: bool = Field(True, alias="CONFLUENCE_VERIFY_SSL")

    model_config = {"env_prefix": "", "extra": "ignore"}

    @property
    def is_configured(self) -> bool:
        return bool(self.domain and self.user and self.token)


class JiraSettings(BaseSettings):
    """Jira Cloud API configuration."""
    domain: Optional[str] = Field(None, alias="JIRA_DOMAIN")
    user: Optional[str] = Field(None, alias="JIRA_USER")
    token: Optional[str] = Field(None, alias="JIRA_TOKEN")
    verify_ssl: bool = Field(True, alias="JIRA_VERIFY_SSL")

    model_config = {"env_prefix": "", "extra": "ignore"}

    @property
    def is_configured(self) -> bool:
        return bool(self.domain and self.user and self.token)


class HTTPSettings(BaseSettings):
    """Outbound HTTP configuration shared by both clients."""
    timeout_seconds: float = Field(30.0, alias="HTTP_TIMEOUT_SECONDS")

    model_config = {"env_prefix": "", "extra": "ignore"}


class MCPSettings(BaseSettings):
    """MCP server configuration."""
    transport: Literal["sse", "stdio"] = Field("stdio", alias="MCP_TRANSPORT")
    port: int = Field(8080, alias="MCP_PORT")
    host: str = Field("0.0.0.0", alias="MCP_HOST")

    model_config = {"env_prefix": "", "extra": "ignore"}


class LogSettings(BaseSettings):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", alias="LOG_LEVEL"
    )
    format: Literal["json", "text"] = Field("text", alias="LOG_FORMAT")

    model_config = {"env_prefix": "", "extra": "ignore"}


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""
    confluence: ConfluenceSettings = Field(default_factory=ConfluenceSettings)
    jira: JiraSettings = Field(default_factory=JiraSettings)
    http: HTTPSettings = Field(default_factory=HTTPSettings)
    mcp: MCPSettings = Field(default_factory=MCPSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = {"env_prefix": "", "extra": "ignore"}


def get_settings() -> Settings:
    """Load settings from environment variables."""
    from dotenv import load_dotenv
    load_dotenv()
    return Settings()
