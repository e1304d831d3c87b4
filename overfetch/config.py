"""
Configuration for the overfetch server
"""

from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server settings loaded from ``OVERFETCH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix='OVERFETCH_',
        env_file='.env',
        case_sensitive=False,
        extra='ignore',
        populate_by_name=True,
    )

    # Server
    host: str = '0.0.0.0'
    # Hosting platforms usually hand out the port as plain PORT
    port: int = Field(default=4000, validation_alias=AliasChoices('OVERFETCH_PORT', 'PORT'))

    # GraphQL endpoint
    graphql_path: str = '/graphql'
    playground: bool = True
    pretty: bool = False

    # CORS
    cors_origins: List[str] = ['*']

    # Environment
    debug: bool = False
    log_level: str = 'INFO'


settings = Settings()
