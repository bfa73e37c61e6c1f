"""
Configuration management for Cloudflare DynDNS
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
import yaml
from rich.prompt import Prompt

# Load environment variables from .env file
load_dotenv()

CONFIG_FILE_NAME = ".cloudflare-dyndns"
CONFIG_DIR = Path("~/.config/cloudflare-dyndns").expanduser()
CONFIG_FILE = CONFIG_DIR / CONFIG_FILE_NAME

DEFAULT_BASE_URL = "https://api.cloudflare.com/client/v4"
DEFAULT_USER_AGENT = "cloudflare-dyndns/1.0.0"
DEFAULT_IPIFY_URL = "https://api64.ipify.org"
DEFAULT_LOG_FILE_PATH = "./"

# Earlier releases wrote TOML config files
FORMAT_HINT = (
    "Config files use the sectioned YAML layout (main, cloudflare, ipify); "
    "convert TOML files or run 'cloudflare-dyndns init'."
)


def candidate_paths() -> List[Path]:
    """Config file locations, searched in order"""
    return [
        Path(".") / CONFIG_FILE_NAME,
        Path.home() / CONFIG_FILE_NAME,
        Path.home() / ".config" / "cloudflare-dyndns" / CONFIG_FILE_NAME,
    ]


@dataclass
class Config:
    """Configuration data"""
    # Cloudflare settings
    api_token: str = ""
    base_url: str = DEFAULT_BASE_URL
    zone_id: str = ""
    update_records: List[str] = field(default_factory=list)

    # General settings
    user_agent: str = DEFAULT_USER_AGENT
    log_file_path: str = DEFAULT_LOG_FILE_PATH
    home_gateway: str = ""

    # IP discovery
    ipify_url: str = DEFAULT_IPIFY_URL

    # Where the configuration was read from, if anywhere
    source: Optional[Path] = field(default=None, compare=False)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> 'Config':
        """
        Load and validate configuration

        Args:
            path: Explicit config file; when omitted the candidate paths are searched

        Returns:
            Validated Config object

        Raises:
            ConfigError: If no config file is found, it cannot be parsed, or
                required values are missing
        """
        if path is None:
            path = next((p for p in candidate_paths() if p.is_file()), None)
            if path is None:
                raise ConfigError(
                    f"Config file not found in paths: {[str(p) for p in candidate_paths()]}"
                )
        path = Path(path).expanduser()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"Config file cannot be loaded: {str(e)}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file {path} is not valid YAML: {str(e)}. {FORMAT_HINT}")

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a YAML mapping. {FORMAT_HINT}")

        config = cls.from_dict(data)
        config.source = path
        config.apply_env()
        config.validate()
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """
        Build configuration from the sectioned file layout

        Raises:
            ConfigError: If a section is not a mapping or update_records is
                neither a list nor a comma separated string
        """
        main = _section(data, 'main')
        cloudflare = _section(data, 'cloudflare')
        ipify = _section(data, 'ipify')

        records = cloudflare.get('update_records') or []
        if isinstance(records, str):
            records = _split_list(records)
        elif not isinstance(records, list):
            raise ConfigError(
                "cloudflare.update_records must be a list or a comma separated string, "
                f"got {type(records).__name__}"
            )

        return cls(
            api_token=str(cloudflare.get('api_token') or ""),
            base_url=str(cloudflare.get('base_url') or DEFAULT_BASE_URL),
            zone_id=str(cloudflare.get('zone_id') or ""),
            update_records=[str(r).strip() for r in records if str(r).strip()],
            user_agent=str(main.get('user_agent') or DEFAULT_USER_AGENT),
            log_file_path=str(main.get('log_file_path', DEFAULT_LOG_FILE_PATH) or ""),
            home_gateway=str(main.get('home_gateway') or ""),
            ipify_url=str(ipify.get('url') or DEFAULT_IPIFY_URL),
        )

    def apply_env(self) -> None:
        """Override values with environment variables if they exist"""
        # Environment variables take precedence over the config file
        env_token = os.getenv("CLOUDFLARE_API_TOKEN")
        env_base_url = os.getenv("CLOUDFLARE_BASE_URL")
        env_zone_id = os.getenv("CLOUDFLARE_ZONE_ID")
        env_records = os.getenv("CLOUDFLARE_UPDATE_RECORDS")
        env_user_agent = os.getenv("DYNDNS_USER_AGENT")
        env_log_file_path = os.getenv("DYNDNS_LOG_FILE_PATH")
        env_home_gateway = os.getenv("DYNDNS_HOME_GATEWAY")
        env_ipify_url = os.getenv("IPIFY_URL")

        if env_token:
            self.api_token = env_token
        if env_base_url:
            self.base_url = env_base_url
        if env_zone_id:
            self.zone_id = env_zone_id
        if env_records:
            self.update_records = _split_list(env_records)
        if env_user_agent:
            self.user_agent = env_user_agent
        if env_log_file_path is not None:
            self.log_file_path = env_log_file_path
        if env_home_gateway:
            self.home_gateway = env_home_gateway
        if env_ipify_url:
            self.ipify_url = env_ipify_url

    def validate(self) -> None:
        """
        Check required values

        Raises:
            ConfigError: If the API token, zone ID or record names are missing
        """
        missing = []
        if not self.api_token.strip():
            missing.append("cloudflare.api_token")
        if not self.zone_id.strip():
            missing.append("cloudflare.zone_id")
        if not self.update_records:
            missing.append("cloudflare.update_records")
        if missing:
            raise ConfigError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Please provide a valid config file at ~/.cloudflare-dyndns or use the --config option."
            )

    def to_dict(self) -> Dict[str, Any]:
        """Sectioned file layout"""
        return {
            'main': {
                'user_agent': self.user_agent,
                'log_file_path': self.log_file_path,
                'home_gateway': self.home_gateway,
            },
            'cloudflare': {
                'api_token': self.api_token,
                'base_url': self.base_url,
                'zone_id': self.zone_id,
                'update_records': list(self.update_records),
            },
            'ipify': {
                'url': self.ipify_url,
            },
        }

    def save(self, path: Optional[Path] = None) -> Path:
        """Save configuration to file"""
        path = Path(path or CONFIG_FILE).expanduser()
        # Ensure config directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
        # The file holds an API token
        path.chmod(0o600)
        self.source = path
        return path

    @classmethod
    def initialize_interactive(cls, path: Optional[Path] = None) -> 'Config':
        """Initialize configuration interactively"""
        print("Welcome to Cloudflare DynDNS setup!")
        print("\nPlease provide the following information:")

        # Get default values from environment
        env_token = os.getenv("CLOUDFLARE_API_TOKEN", "")
        env_zone_id = os.getenv("CLOUDFLARE_ZONE_ID", "")
        env_records = os.getenv("CLOUDFLARE_UPDATE_RECORDS", "")

        config = cls(
            api_token=Prompt.ask(
                "Cloudflare API Token (DNS:Edit permission)",
                default=env_token,
                password=True if not env_token else False
            ),
            zone_id=Prompt.ask("Cloudflare Zone ID", default=env_zone_id),
            update_records=_split_list(Prompt.ask(
                "Records to keep updated (comma separated, e.g. home.example.com)",
                default=env_records
            )),
            home_gateway=Prompt.ask(
                "Home gateway address (leave empty to always update)", default=""
            ),
            log_file_path=Prompt.ask("Log file directory", default=DEFAULT_LOG_FILE_PATH),
        )
        config.validate()
        config.save(path)
        return config


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping, got {type(section).__name__}")
    return section


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class ConfigError(Exception):
    """Configuration error"""
    pass
