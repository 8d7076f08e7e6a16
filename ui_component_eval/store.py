"""File-system access for instructions, datasets, and reports."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ui_component_eval.exceptions import DatasetError
from ui_component_eval.models import ScenarioSpec

logger = logging.getLogger(__name__)


class ArtifactStore:
    """Read run inputs and write run outputs.

    Parameters
    ----------
    root : str | Path | None
        Directory relative paths are resolved against.  ``None`` uses the
        current working directory.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        self._root = Path(root) if root is not None else None

    def resolve(self, path: str | Path) -> Path:
        path = Path(path)
        if self._root is not None and not path.is_absolute():
            return self._root / path
        return path

    def read_text(self, path: str | Path) -> str:
        """Return the UTF-8 contents of *path*.

        Raises
        ------
        FileNotFoundError
            If *path* does not exist.
        """
        resolved = self.resolve(path)
        content = resolved.read_text(encoding="utf-8")
        logger.debug("Read %s (%d chars)", resolved, len(content))
        return content

    def write_text(self, path: str | Path, content: str) -> Path:
        """Write *content* to *path* in one call, creating parent directories.

        Returns
        -------
        Path
            The resolved path written.
        """
        resolved = self.resolve(path)
        resolved.parent.mkdir(parents=True, exist_ok=True)
        resolved.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s (%d chars)", resolved, len(content))
        return resolved

    def load_dataset(self, path: str | Path) -> list[ScenarioSpec]:
        """Load scenario records from a JSON or YAML list.

        Parameters
        ----------
        path : str | Path
            ``.json``, ``.yaml`` or ``.yml`` file holding a list of records
            with ``scenarioId``, ``description`` and ``evaluationPrompt``.

        Returns
        -------
        list[ScenarioSpec]
            In file order.

        Raises
        ------
        FileNotFoundError
            If *path* does not exist.
        DatasetError
            If the payload is not a list, a record is invalid, or two
            records share a ``scenarioId``.
        """
        resolved = self.resolve(path)
        text = self.read_text(path)
        data = _parse_dataset(text, resolved)

        if not isinstance(data, list):
            msg = f"Dataset {resolved} must contain a list of scenarios"
            raise DatasetError(msg)

        scenarios: list[ScenarioSpec] = []
        seen: set[int] = set()
        for record in data:
            spec = ScenarioSpec.from_record(record)
            if spec.scenario_id in seen:
                msg = f"Duplicate scenarioId {spec.scenario_id} in {resolved}"
                raise DatasetError(msg)
            seen.add(spec.scenario_id)
            scenarios.append(spec)

        logger.info("Loaded %d scenarios from %s", len(scenarios), resolved)
        return scenarios


def component_kind(instruction_file: str | Path) -> str:
    """Return the component label implied by an instruction file name.

    ``instructions/select.md`` yields ``"select"``.
    """
    return Path(instruction_file).stem


def _parse_dataset(text: str, path: Path) -> Any:
    """Decode dataset text according to the file extension."""
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        msg = f"Dataset {path} could not be parsed: {exc}"
        raise DatasetError(msg) from exc
