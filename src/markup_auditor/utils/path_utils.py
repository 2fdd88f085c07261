# src/markup_auditor/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for retrieving package and user paths.
    """

    @staticmethod
    def get_package_root() -> Path:
        """Directory of the installed markup_auditor package (holds settings.json)."""
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_settings_path() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    @staticmethod
    def get_user_documents_dir() -> Path:
        """
        Returns the user's Documents folder, or the home directory when it
        does not exist. Used as the default export location.
        """
        documents = Path.home() / "Documents"
        if documents.is_dir():
            return documents
        logger.debug("No Documents folder found, falling back to %s", Path.home())
        return Path.home()

    @staticmethod
    def resolve_output_path(path_str: str) -> Path:
        """Absolute paths are kept, relative ones land in the Documents folder."""
        path = Path(path_str).expanduser()
        if path.is_absolute():
            return path
        return PathUtils.get_user_documents_dir() / path
