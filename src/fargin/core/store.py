"""Persistence of the project configuration under a project root."""

import shutil
from pathlib import Path
from typing import List, Union

import yaml

from .project import ProjectConfig
from ..utils.exceptions import (
    AlreadyExistsError,
    CorruptConfigError,
    FileOperationError,
    NotFoundError,
)
from ..utils.helpers import ensure_dir, load_yaml, save_yaml
from ..utils.logger import get_logger

logger = get_logger(__name__)

CONFIG_DIR_NAME = '.fargin'
CONFIG_FILE_NAME = 'config.yaml'
SCAFFOLD_DIRS = ('prompts', 'history', 'templates')


class ConfigStore:
    """
    Loads and saves the ProjectConfig of one project root.

    Layout:
        <root>/.fargin/config.yaml
        <root>/.fargin/prompts/
        <root>/.fargin/history/
        <root>/.fargin/templates/
    """

    def __init__(self, project_root: Union[str, Path] = '.'):
        self.project_root = Path(project_root)
        self._config_dir = self.project_root / CONFIG_DIR_NAME
        self._config_path = self._config_dir / CONFIG_FILE_NAME

    @property
    def config_dir(self) -> Path:
        """Get scaffold directory path."""
        return self._config_dir

    @property
    def config_path(self) -> Path:
        """Get config file path."""
        return self._config_path

    @property
    def scaffold_paths(self) -> List[Path]:
        """Get the expected scaffold subdirectories, in fixed order."""
        return [self._config_dir / name for name in SCAFFOLD_DIRS]

    def exists(self) -> bool:
        """Check if the project has a configuration file."""
        return self._config_path.is_file()

    def missing_scaffold(self) -> List[Path]:
        """List scaffold subdirectories that do not exist."""
        return [path for path in self.scaffold_paths if not path.is_dir()]

    def load(self) -> ProjectConfig:
        """
        Load the project configuration.

        Raises:
            NotFoundError: no configuration file
            CorruptConfigError: malformed YAML or missing required fields
            FileOperationError: the file could not be read
        """
        if not self._config_path.exists():
            raise NotFoundError(f"Configuration not found: {self._config_path}")

        try:
            data = load_yaml(self._config_path)
        except yaml.YAMLError as e:
            raise CorruptConfigError(f"Malformed configuration {self._config_path}: {e}") from e
        except ValueError as e:
            # Undecodable bytes or out-of-range YAML timestamps
            raise CorruptConfigError(f"Unreadable configuration {self._config_path}: {e}") from e
        except OSError as e:
            raise FileOperationError(f"Cannot read {self._config_path}: {e}") from e

        try:
            config = ProjectConfig.from_dict(data)
        except CorruptConfigError as e:
            raise CorruptConfigError(f"Invalid configuration {self._config_path}: {e}") from e

        logger.debug(f"Project {config.name} loaded from {self._config_path}")
        return config

    def save(self, config: ProjectConfig) -> Path:
        """
        Save the configuration, refreshing updated_at first.

        The write replaces the file in one step; an interrupted save leaves
        the previous file in place.

        Raises:
            FileOperationError: the file could not be written
        """
        config.touch()
        try:
            ensure_dir(self._config_dir)
            save_yaml(config.to_dict(), self._config_path)
        except OSError as e:
            raise FileOperationError(f"Cannot write {self._config_path}: {e}") from e

        logger.info(f"Project {config.name} saved to {self._config_path}")
        return self._config_path

    def init(self, name: str, description: str = "") -> ProjectConfig:
        """
        Create the scaffold and a fresh configuration.

        Raises:
            AlreadyExistsError: a configuration file is already present
            InvalidInputError: name is empty
            FileOperationError: the scaffold could not be created
        """
        if self._config_path.exists():
            raise AlreadyExistsError(f"Project already initialized at {self._config_path}")

        config = ProjectConfig.new(name, description)

        try:
            for path in self.scaffold_paths:
                ensure_dir(path)
        except OSError as e:
            raise FileOperationError(f"Cannot create {self._config_dir}: {e}") from e

        self.save(config)
        logger.info(f"Project {config.name} initialized at {self.project_root}")
        return config

    def reset(self) -> bool:
        """
        Delete the whole scaffold directory.

        Returns False when there was nothing to delete.

        Raises:
            FileOperationError: the directory could not be removed
        """
        if not self._config_dir.exists():
            logger.debug(f"Nothing to reset at {self._config_dir}")
            return False

        try:
            shutil.rmtree(self._config_dir)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FileOperationError(f"Cannot remove {self._config_dir}: {e}") from e

        logger.info(f"Project scaffold removed from {self.project_root}")
        return True

    def __repr__(self) -> str:
        return f"ConfigStore({str(self.project_root)!r})"
