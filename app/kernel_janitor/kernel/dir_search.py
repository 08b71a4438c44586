"""Directory listing for kernel search paths.

Lists the immediate entries of a search directory. A directory that
cannot be listed is an error, never an empty result: a misconfigured
search path must not look like a system with no kernels installed.
"""

import logging
from pathlib import Path

from kernel_janitor.kernel.errors import ScanError

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Lists entries of kernel search directories.

    Example:
        >>> scanner = DirectoryScanner()
        >>> for path in scanner.list_entries_with_prefix(Path("/boot"), "vmlinuz-"):
        ...     print(path)
    """

    def list_entries(self, directory: Path) -> list[Path]:
        """List every immediate entry of a directory.

        Args:
            directory: Directory to list.

        Returns:
            Paths of the directory's entries, in no particular order.

        Raises:
            ScanError: If the directory is missing or cannot be read.
        """
        try:
            entries = list(directory.iterdir())
        except FileNotFoundError as e:
            raise ScanError(directory, "directory does not exist") from e
        except NotADirectoryError as e:
            raise ScanError(directory, "not a directory") from e
        except PermissionError as e:
            raise ScanError(directory, "permission denied") from e
        except OSError as e:
            raise ScanError(directory, str(e)) from e

        logger.debug("Found %d entries in %s", len(entries), directory)
        return entries

    def list_entries_with_prefix(self, directory: Path, prefix: str) -> list[Path]:
        """List the entries of a directory whose name starts with a prefix.

        Args:
            directory: Directory to list.
            prefix: Required file name prefix.

        Returns:
            Paths of matching entries, in no particular order.

        Raises:
            ScanError: If the directory is missing or cannot be read.
        """
        return [path for path in self.list_entries(directory) if path.name.startswith(prefix)]
