"""Configuration file loading and management"""

import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from autostarter.common.settings import settings
from autostarter.common.types import Geometry, WorkspaceGrid


@dataclass(frozen=True)
class RunStep:
    """Launch an application and make its window current"""
    command_line: tuple[str, ...]


@dataclass(frozen=True)
class PositionStep:
    """Move and resize the current window"""
    geometry: Geometry


@dataclass(frozen=True)
class WorkspaceStep:
    """Switch the viewport to a workspace index"""
    index: int


Step = Union[RunStep, PositionStep, WorkspaceStep]


@dataclass
class BackendConfig:
    """Window manager control backend settings"""
    name: str
    display: Optional[str]


@dataclass
class CorrelationConfig:
    """Process to window correlation settings"""
    retry_budget: int
    poll_interval_seconds: float


@dataclass
class PlacementConfig:
    """Window placement settings"""
    settle_seconds: float


@dataclass
class NotificationConfig:
    """Desktop notification settings"""
    enabled: bool
    app_name: str


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str
    file: Optional[str]
    format: str


@dataclass
class Config:
    """Complete application configuration"""
    workspaces: WorkspaceGrid
    backend: BackendConfig
    correlation: CorrelationConfig
    placement: PlacementConfig
    notifications: NotificationConfig
    logging: LoggingConfig
    resolutions: Dict[str, List[Step]] = field(default_factory=dict)

    def steps_get(self, resolution_key: str) -> Optional[List[Step]]:
        """
        Look up the step sequence for a resolution

        Args:
            resolution_key: Resolution string such as '1920x1080'

        Returns:
            Steps for that resolution, or None if the section is missing
        """
        return self.resolutions.get(resolution_key)


class ConfigLoader:
    """Loads and parses configuration from YAML files"""

    DEFAULT_CONFIG_PATHS = [
        "~/.autostarter.yml",
        "~/.config/autostarter/config.yml",
    ]

    DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    @staticmethod
    def configFile_find() -> Optional[Path]:
        """
        Find configuration file in standard locations

        Returns:
            Path to config file, or None if not found
        """
        for config_path in ConfigLoader.DEFAULT_CONFIG_PATHS:
            path = Path(config_path).expanduser().resolve()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If file does not exist
            yaml.YAMLError: If file is not valid YAML
        """
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def commandLine_parse(value: Any) -> tuple[str, ...]:
        """
        Normalize a run step command into an argument tuple

        Args:
            value: Shell-style string or list of arguments

        Returns:
            Argument tuple

        Raises:
            ValueError: If the command is empty or of the wrong type
        """
        if isinstance(value, str):
            args = shlex.split(value)
        elif isinstance(value, list) and all(isinstance(a, (str, int, float)) for a in value):
            args = [str(a) for a in value]
        else:
            raise ValueError(f"run step needs a string or list of strings, got {value!r}")

        if not args:
            raise ValueError("run step has an empty command")
        return tuple(args)

    @staticmethod
    def geometry_parse(value: Any) -> Geometry:
        """
        Parse a position step value

        Args:
            value: [x, y, width, height] or mapping with those keys

        Returns:
            Parsed Geometry
        """
        if isinstance(value, dict):
            try:
                values = [value["x"], value["y"], value["width"], value["height"]]
            except KeyError as e:
                raise ValueError(f"position step is missing {e.args[0]!r}") from e
        elif isinstance(value, (list, tuple)) and len(value) == 4:
            values = list(value)
        else:
            raise ValueError(
                f"position step needs [x, y, width, height], got {value!r}"
            )

        if not all(isinstance(v, int) and not isinstance(v, bool) for v in values):
            raise ValueError(f"position values must be integers, got {values!r}")
        x, y, width, height = values
        return Geometry(x=x, y=y, width=width, height=height)

    @staticmethod
    def step_parse(data: Any) -> Step:
        """
        Parse a single step mapping

        Args:
            data: One-key mapping: run, position or workspace

        Returns:
            Parsed step

        Raises:
            ValueError: If the step is malformed or of unknown kind
        """
        if not isinstance(data, dict) or len(data) != 1:
            raise ValueError(f"Each step must be a single-key mapping, got {data!r}")

        kind, value = next(iter(data.items()))
        if kind == "run":
            return RunStep(command_line=ConfigLoader.commandLine_parse(value))
        if kind == "position":
            return PositionStep(geometry=ConfigLoader.geometry_parse(value))
        if kind == "workspace":
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"workspace step needs a non-negative integer, got {value!r}")
            return WorkspaceStep(index=value)

        raise ValueError(f"Unknown step '{kind}'. Supported: run, position, workspace.")

    @staticmethod
    def resolutions_parse(data: Any) -> Dict[str, List[Step]]:
        """
        Parse the per-resolution step sequences

        Args:
            data: Mapping of resolution string to list of steps

        Returns:
            Mapping of resolution string to parsed steps
        """
        if not isinstance(data, dict):
            raise ValueError("'resolutions' must map resolution strings to step lists")

        resolutions: Dict[str, List[Step]] = {}
        for key, steps_data in data.items():
            if steps_data is None:
                steps_data = []
            if not isinstance(steps_data, list):
                raise ValueError(f"Section '{key}' must be a list of steps")
            try:
                resolutions[str(key)] = [ConfigLoader.step_parse(s) for s in steps_data]
            except ValueError as e:
                raise ValueError(f"Section '{key}': {e}") from e
        return resolutions

    @staticmethod
    def section_get(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        """
        Get an optional top-level section as a mapping

        Args:
            data: Raw configuration dictionary
            name: Section name

        Returns:
            Section mapping, empty when the section is absent or blank

        Raises:
            ValueError: If the section is not a mapping
        """
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ValueError(f"Section '{name}' must be a mapping, got {section!r}")
        return section

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> Config:
        """
        Parse configuration dictionary into Config object

        Args:
            data: Raw configuration dictionary

        Returns:
            Parsed Config object

        Raises:
            KeyError: If the resolutions section is missing
            ValueError: If a value is malformed
        """
        workspaces_data = ConfigLoader.section_get(data, "workspaces")
        workspaces = WorkspaceGrid(
            columns=int(workspaces_data.get("horizontal", 1)),
            rows=int(workspaces_data.get("vertical", 1)),
        )

        backend_data = ConfigLoader.section_get(data, "backend")
        backend = BackendConfig(
            name=backend_data.get("name", "ewmh"),
            display=backend_data.get("display"),
        )

        correlation_data = ConfigLoader.section_get(data, "correlation")
        correlation = CorrelationConfig(
            retry_budget=int(
                correlation_data.get("retry_budget", settings.DEFAULT_RETRY_BUDGET)
            ),
            poll_interval_seconds=float(
                correlation_data.get(
                    "poll_interval_seconds", settings.DEFAULT_POLL_INTERVAL_SEC
                )
            ),
        )

        placement_data = ConfigLoader.section_get(data, "placement")
        placement = PlacementConfig(
            settle_seconds=float(
                placement_data.get("settle_seconds", settings.DEFAULT_SETTLE_SEC)
            ),
        )

        notifications_data = ConfigLoader.section_get(data, "notifications")
        notifications = NotificationConfig(
            enabled=bool(notifications_data.get("enabled", True)),
            app_name=notifications_data.get("app_name", settings.NOTIFICATION_APP_NAME),
        )

        logging_data = ConfigLoader.section_get(data, "logging")
        logging = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            file=logging_data.get("file"),
            format=logging_data.get("format", ConfigLoader.DEFAULT_LOG_FORMAT),
        )

        return Config(
            workspaces=workspaces,
            backend=backend,
            correlation=correlation,
            placement=placement,
            notifications=notifications,
            logging=logging,
            resolutions=ConfigLoader.resolutions_parse(data["resolutions"]),
        )

    @staticmethod
    def config_load(file_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file

        Args:
            file_path: Optional path to config file. If None, searches standard locations.

        Returns:
            Parsed Config object

        Raises:
            FileNotFoundError: If config file not found
            ValueError: If config file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find()
            if file_path is None:
                raise FileNotFoundError(
                    f"Config file not found in standard locations: "
                    f"{ConfigLoader.DEFAULT_CONFIG_PATHS}"
                )

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)

    @staticmethod
    def configWithOverrides_load(
        file_path: Optional[Path] = None,
        **overrides: Any
    ) -> Config:
        """
        Load configuration and apply command-line overrides

        Args:
            file_path: Optional path to config file
            **overrides: Key-value pairs to override config values

        Returns:
            Config object with overrides applied

        Example:
            config = ConfigLoader.configWithOverrides_load(
                path,
                backend="wmctrl",
                notifications_enabled=False,
            )
        """
        config = ConfigLoader.config_load(file_path)

        if overrides.get("backend") is not None:
            config.backend.name = overrides["backend"]
        if overrides.get("display") is not None:
            config.backend.display = overrides["display"]
        if overrides.get("notifications_enabled") is False:
            config.notifications.enabled = False

        return config
