"""JSON file storage with Result-based error handling.

Thin wrapper around reading, writing and removing small JSON documents,
returning Result types instead of raising.
"""

import json
from pathlib import Path
from typing import Any

from tasksync.domain.shared import EngineError, Err, Ok, Result


class JsonStorage:
    """Low-level JSON file I/O.

    Holds no domain logic. Errors are reported as ``EngineError`` with kind
    TRANSPORT, since for the engine a broken local file is as unusable as a
    broken connection.
    """

    def load_json(self, path: Path) -> Result[dict[str, Any], EngineError]:
        """Load a JSON object from ``path``.

        Returns:
            Ok(dict) if successful, Err with a readable message otherwise.
        """
        try:
            if not path.exists():
                return Err(EngineError.transport(f"File not found: {path}"))
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            return Err(EngineError.transport(f"Invalid JSON in {path}: {e}"))
        except OSError as e:
            return Err(EngineError.transport(f"Error reading {path}: {e}"))

        if not isinstance(data, dict):
            return Err(EngineError.transport(f"Expected a JSON object in {path}"))
        return Ok(data)

    def save_json(self, path: Path, data: dict[str, Any]) -> Result[None, EngineError]:
        """Write ``data`` to ``path``, creating parent directories."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            return Ok(None)
        except TypeError as e:
            return Err(EngineError.transport(f"Data not JSON serializable: {e}"))
        except OSError as e:
            return Err(EngineError.transport(f"Error writing {path}: {e}"))

    def remove(self, path: Path) -> Result[None, EngineError]:
        """Delete ``path``. A missing file is not an error."""
        try:
            path.unlink(missing_ok=True)
            return Ok(None)
        except OSError as e:
            return Err(EngineError.transport(f"Error removing {path}: {e}"))
