#!/usr/bin/env python3
"""
Configuration module for OpenAI Responses Proxy.
Loads settings from a YAML file and initializes logging with Pydantic validation.
"""

import os
import sys
import logging
from typing import Dict, Any, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

CONFIG_FILE = os.environ.get("PROXY_CONFIG_FILE", "config.yml")


class ServerConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    host: str = "0.0.0.0"
    port: int = 5555
    log_level: str = "INFO"
    http_log_level: str = "INFO"
    cors_origins: List[str] = []


class OpenAIConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    # Name of the environment variable holding the key, never the key itself
    api_key_env: str = "OPENAI_API_KEY"
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-5"
    max_output_tokens: int = 4000
    timeout: float = 600.0


class RequestProxyConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    enabled: bool = False
    url: Optional[str] = None


def load_config(path: str = CONFIG_FILE) -> Dict[str, Any]:
    """Load and validate configuration with Pydantic models.

    A missing file is not an error: the proxy is meant to run on serverless
    hosts where everything comes from defaults and the environment.
    """
    try:
        with open(path, encoding="utf-8") as file:
            config_data = yaml.safe_load(file) or {}
    except FileNotFoundError:
        config_data = {}
    except yaml.YAMLError as e:
        print(f"Error in configuration: {e}")
        sys.exit(1)

    try:
        config_data["server"] = ServerConfig(**config_data.get("server", {})).model_dump()
        config_data["openai"] = OpenAIConfig(**config_data.get("openai", {})).model_dump()
        config_data["requestProxy"] = RequestProxyConfig(**config_data.get("requestProxy", {})).model_dump()
    except ValidationError as e:
        print(f"Error in configuration: {e}")
        sys.exit(1)

    return config_data


def setup_logging(config_: Dict[str, Any]) -> logging.Logger:
    """Configure logging based on validated configuration."""
    log_level = config_["server"]["log_level"]
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level_int,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger_ = logging.getLogger("openai-responses-proxy")
    logger_.info("Logging level set to %s", log_level)
    return logger_


# Load and validate configuration once at startup
config = load_config()
logger = setup_logging(config)
