# ============================================================================
# MODULE CONTEXT - APPLICATION CONFIGURATION
# ============================================================================
# STATUS: Core Infrastructure - Configuration Management
# PURPOSE: Centralized configuration for the ArangoDB connection and data layout
# EXPORTS: AppConfig, get_app_config, get_arango_connection_args, validate_configuration
# DEPENDENCIES: pydantic-settings
# SOURCE: Environment variables, .env file
# PATTERNS: Singleton pattern for config
# ============================================================================

"""
Application Configuration Module

Provides centralized configuration management for geoservice including:
- ArangoDB connection settings (host, database, credentials)
- Support for both password and pre-issued JWT authentication
- Collection and view names for every API module

Authentication Modes:
    1. Password-based (local development):
       - Requires: ARANGO_USER, ARANGO_PASSWORD

    2. JWT token (deployed environments):
       - Requires: ARANGO_USER_TOKEN
       - Token is issued by the ArangoDB coordinator, the password is not stored

Usage:
    from config import get_app_config, get_arango_connection_args

    config = get_app_config()
    db = client.db(**get_arango_connection_args())
"""

import logging
from typing import Optional, Dict, Any, List
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, model_validator

logger = logging.getLogger(__name__)

# ============================================================================
# Application Configuration
# ============================================================================

class AppConfig(BaseSettings):
    """
    Application-wide configuration loaded from environment variables.

    Attributes:
        arango_host: ArangoDB coordinator URL
        arango_database: Database name
        arango_user: Database username
        arango_password: Database password (optional with a user token)
        arango_user_token: Pre-issued JWT used instead of the password
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # ArangoDB Connection
    arango_host: str = Field(default="http://localhost:8529", description="ArangoDB coordinator URL")
    arango_database: str = Field(default="GeoService", description="Database name")
    arango_user: str = Field(default="root", description="Database username")
    arango_password: Optional[str] = Field(default=None, description="Database password")
    arango_user_token: Optional[str] = Field(default=None, description="JWT user token")
    arango_verify_override: Optional[bool] = Field(
        default=None,
        description="Override TLS certificate verification (None keeps the driver default)"
    )
    arango_request_timeout: int = Field(default=60, ge=1, description="Request timeout in seconds")

    # Collections
    collection_chelsa: str = Field(default="Chelsa", description="CHELSA climate data")
    collection_chelsa_map: str = Field(default="ChelsaMap", description="CHELSA grid geometries")
    collection_worldclim: str = Field(default="WorldClim", description="WorldClim climate data")
    collection_drought_observatory: str = Field(default="DroughtObservatory", description="EDO measurements")
    collection_drought_observatory_map: str = Field(default="DroughtObservatoryMap", description="EDO observation areas")
    collection_shapes: str = Field(default="Shapes", description="Unit shapes")
    collection_shape_data: str = Field(default="ShapeData", description="Remote sensing data per shape")
    collection_unit_shapes: str = Field(default="UnitShapes", description="Genetic conservation unit records")

    # Views
    view_dataset: str = Field(default="VIEW_DATASET", description="ArangoSearch view over the dataset catalog")
    view_shape: str = Field(default="VIEW_SHAPE", description="ArangoSearch view over unit shapes")

    @model_validator(mode="after")
    def validate_credentials(self):
        """Ensure a password or a user token is provided."""
        if not self.arango_password and not self.arango_user_token:
            raise ValueError(
                "ARANGO_PASSWORD is required when ARANGO_USER_TOKEN is not set"
            )
        return self

    @property
    def auth_mode(self) -> str:
        return "token" if self.arango_user_token else "password"

    def required_collections(self) -> List[str]:
        """Collections queried by the API modules."""
        return [
            self.collection_chelsa,
            self.collection_chelsa_map,
            self.collection_worldclim,
            self.collection_drought_observatory,
            self.collection_drought_observatory_map,
            self.collection_shapes,
            self.collection_shape_data,
            self.collection_unit_shapes,
        ]

    def required_views(self) -> List[str]:
        return [self.view_dataset, self.view_shape]


@lru_cache(maxsize=1)
def get_app_config() -> AppConfig:
    """
    Get singleton application configuration instance.

    Returns:
        AppConfig: Validated configuration object

    Raises:
        ValidationError: If the credentials are missing
    """
    return AppConfig()


# ============================================================================
# ArangoDB Connection Arguments
# ============================================================================

def get_arango_connection_args(config: Optional[AppConfig] = None) -> Dict[str, Any]:
    """
    Build keyword arguments for ArangoClient.db() based on authentication mode.

    Args:
        config: Application configuration (uses singleton if not provided)

    Returns:
        Dict with name and either username/password or user_token.
        TLS verification and timeouts belong to ArangoClient, not db().

    Example:
        >>> client = ArangoClient(hosts=config.arango_host)
        >>> db = client.db(**get_arango_connection_args())
    """
    config = config or get_app_config()

    args: Dict[str, Any] = {"name": config.arango_database}

    if config.arango_user_token:
        logger.debug(f"Using token authentication for {config.arango_host}")
        args["user_token"] = config.arango_user_token
    else:
        logger.debug(f"Using password authentication for {config.arango_host}")
        args["username"] = config.arango_user
        args["password"] = config.arango_password

    return args


# ============================================================================
# Configuration Validation
# ============================================================================

def validate_configuration() -> bool:
    """
    Validate configuration on application startup.

    Returns:
        bool: True if configuration is valid

    Raises:
        Exception: If configuration validation fails
    """
    try:
        config = get_app_config()
        logger.info("Configuration validation:")
        logger.info(f"  ArangoDB Host: {config.arango_host}")
        logger.info(f"  Database: {config.arango_database}")
        logger.info(f"  User: {config.arango_user}")
        logger.info(f"  Auth Mode: {config.auth_mode}")
        logger.info(f"  Views: {', '.join(config.required_views())}")
        logger.info("✅ Configuration loaded successfully")

        return True

    except Exception as e:
        logger.error(f"❌ Configuration validation failed: {e}")
        raise


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    validate_configuration()
