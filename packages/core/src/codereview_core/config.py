import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "provider": "gemini",
    "model": None,  # None = provider default
    "language": "javascript",
    "timeout": 60,  # seconds, per request
    "report_filename": "code_review_report.txt",
    "guidelines": None,  # optional path to extra reviewer guidelines
}

# Environment variable holding the credential for each provider.
API_KEY_ENV = {
    "gemini": "GEMINI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def load_config(config_path: str = ".codereview.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .codereview.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Credentials only ever come from the environment, never from the file.
    for provider, env_var in API_KEY_ENV.items():
        config[f"{provider}_api_key"] = os.environ.get(env_var)

    return config


def api_key_for(config: dict) -> Optional[str]:
    return config.get(f"{config['provider']}_api_key")


def load_guidelines(config: dict) -> Optional[str]:
    """
    Load extra reviewer guidelines.

    Returns None when ``guidelines`` is not set. A configured path that does
    not exist is an error rather than a silent fallback.
    """
    custom_path = config.get("guidelines")
    if not custom_path:
        return None
    p = Path(custom_path)
    if not p.exists():
        raise FileNotFoundError(f"Guidelines file not found: {custom_path}")
    return p.read_text(encoding="utf-8")
