# src/gedex/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Union

# <project_root>/src/gedex/utils/pathing.py
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def project_root() -> Path:
    """
    Return the directory holding ``src/``, ``tests/``, ``config/`` and
    ``mock_files/``.
    """
    return _PROJECT_ROOT


def resolve_project_path(relative: Union[str, Path]) -> Path:
    return project_root() / Path(relative)


def mock_file_path(filename: Union[str, Path]) -> Path:
    """
    Absolute path of a sample GEDCOM file under ``mock_files/``.

        mock_file_path("family.ged")
    """
    return resolve_project_path(Path("mock_files") / filename)
