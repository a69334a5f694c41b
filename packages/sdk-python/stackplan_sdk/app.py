"""
Source Accessor
===============

Read-only queries over an application's source tree. Providers only
ever see the tree through an ``App``: file existence, glob matching,
regex content scans and structured manifest reads.

Nothing here writes to the tree.
"""

import json
import re
import tomllib
from pathlib import Path
from typing import Any, List, Optional, Pattern, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from stackplan_common import ManifestError, SourceNotFoundError, ValidationError
from stackplan_common.logger import get_logger

from .patterns import find_matching_files

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class App:
    """
    Application source tree.

    Example:
        >>> app = App("/project")
        >>> app.includes_file("package.json")
        True
        >>> app.read_json("package.json", PackageJson).scripts
        {'start': 'node server.js'}
    """

    def __init__(self, source: Union[str, Path]):
        """
        Args:
            source: Root directory of the application

        Raises:
            SourceNotFoundError: If ``source`` is not a directory
        """
        path = Path(source)
        if not path.is_dir():
            raise SourceNotFoundError(f"Source directory '{source}' not found")
        self.source = path.resolve()

    def __repr__(self) -> str:
        return f"App(source='{self.source}')"

    def includes_file(self, name: str) -> bool:
        """Check if a file exists at ``name`` relative to the source root."""
        return (self.source / name).is_file()

    def find_files(self, pattern: str) -> List[Path]:
        """Absolute paths of files matching ``pattern``, sorted."""
        return find_matching_files(pattern, self.source)

    def has_match(self, pattern: str) -> bool:
        return bool(self.find_files(pattern))

    def find_match(self, regex: Union[str, Pattern[str]], pattern: str) -> bool:
        """
        Check whether any file matching ``pattern`` has content matching ``regex``.

        Files that are not valid UTF-8 are skipped. Stops at the first hit.
        """
        compiled = re.compile(regex) if isinstance(regex, str) else regex
        for path in self.find_files(pattern):
            try:
                content = path.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                continue
            except OSError as e:
                raise ManifestError(f"Failed to read {path}: {e}", path=str(path)) from e
            if compiled.search(content):
                logger.debug("Content match", file=self.strip_source_path(path))
                return True
        return False

    def read_file(self, name: str) -> str:
        """
        Read a text file relative to the source root.

        Raises:
            ManifestError: If the file is missing or unreadable
        """
        path = self.source / name
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestError(f"Failed to read {name}: {e}", path=name) from e

    def read_json(self, name: str, model: Optional[Type[ModelT]] = None) -> Any:
        """
        Read and decode a JSON file, optionally validating it against ``model``.

        Raises:
            ManifestError: If the file is missing, not valid JSON or fails validation
        """
        content = self.read_file(name)
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Failed to parse {name}: {e}", path=name) from e
        return self._validate(name, data, model)

    def read_toml(self, name: str, model: Optional[Type[ModelT]] = None) -> Any:
        """
        Read and decode a TOML file, optionally validating it against ``model``.

        Raises:
            ManifestError: If the file is missing, not valid TOML or fails validation
        """
        content = self.read_file(name)
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ManifestError(f"Failed to parse {name}: {e}", path=name) from e
        return self._validate(name, data, model)

    def strip_source_path(self, path: Union[str, Path]) -> str:
        """
        Make ``path`` relative to the source root, with forward slashes.

        Absolute paths are stripped as given, so a symlink keeps its own
        name. Relative paths are resolved against the working directory.

        Raises:
            ValidationError: If ``path`` is outside the source root
        """
        path = Path(path)
        if not path.is_absolute():
            path = path.resolve()
        try:
            return path.relative_to(self.source).as_posix()
        except ValueError as e:
            raise ValidationError(f"Path '{path}' is not inside '{self.source}'") from e

    def _validate(self, name: str, data: Any, model: Optional[Type[ModelT]]) -> Any:
        if model is None:
            return data
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise ManifestError(f"Invalid {name}: {e}", path=name) from e
