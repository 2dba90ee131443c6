# src/leversguard/utils/path_utils.py
from pathlib import Path


class PathUtils:
    """
    A central utility for reliably retrieving package and project paths.
    """

    POLICY_FILE_NAME = "leversguard.policy.json"

    @staticmethod
    def get_package_root() -> Path:
        """Returns the directory of the installed 'leversguard' package."""
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    @staticmethod
    def get_policy_file(project_root: Path) -> Path:
        """Returns the expected policy file location for a project root."""
        return Path(project_root) / PathUtils.POLICY_FILE_NAME
