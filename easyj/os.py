"""
Filesystem tree walking and directory preparation utilities.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import os

from pathlib import Path
from typing import Callable, Iterable, Iterator

log = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

class MalformedResourceError(ValueError):
    """A file path could not be converted to a URL."""


class DirectoryCreationError(OSError):
    """A required directory could not be created or is not a directory."""


# Methods --------------------------------------------------------------------------------------------------------------

def file_extension(name: str | os.PathLike[str]) -> str:
    """
    Return the text after the last dot of a file name, without the dot.

    Returns an empty string when the name has no dot. Only the final path
    component is considered, and case is preserved.

    Examples:
        >>> file_extension("Main.java")
        'java'
        >>> file_extension("archive.tar.gz")
        'gz'
        >>> file_extension("README")
        ''
        >>> file_extension(".bashrc")
        'bashrc'
    """
    base = os.path.basename(os.fspath(name))
    _, dot, ext = base.rpartition(".")
    return ext if dot else ""


def iter_tree(
        root: str | os.PathLike[str],
        accept: Callable[[Path], bool] | None = None,
) -> Iterator[Path]:
    """
    Walk a directory tree depth-first in pre-order.

    Every node is yielded before its children. Directories are always yielded and
    descended into; other entries are yielded only if `accept` returns True for them.
    Sibling order follows the platform directory listing and is not sorted.

    Args:
        root: Directory (or single file) to start from. A missing root yields nothing.
        accept: Predicate for non-directory entries. None accepts everything.

    Yields:
        Path: Each visited node, starting with root.

    Note:
        Directories that cannot be listed are yielded but contribute no children.
        Symbolic links to directories are followed, so a link cycle never terminates.

    Examples:
        >>> [p.name for p in iter_tree("project")]
        ['project', 'src', 'Main.java', 'notes.txt']
    """
    root_path = Path(root)
    if not root_path.exists():
        log.debug("walk root does not exist: %s", root_path)
        return
    if not root_path.is_dir() and accept is not None and not accept(root_path):
        return

    stack = [root_path]
    while stack:
        node = stack.pop()
        yield node
        if not node.is_dir():
            continue
        try:
            with os.scandir(node) as entries:
                children = [
                    node / entry.name
                    for entry in entries
                    if entry.is_dir() or accept is None or accept(node / entry.name)
                ]
        except OSError as exc:
            log.debug("cannot list directory %s: %s", node, exc)
            continue
        # Reversed so that pop() visits siblings in listing order
        stack.extend(reversed(children))


def list_files(
        root: str | os.PathLike[str],
        extensions: str | Iterable[str],
) -> list[Path]:
    """
    Collect files under root whose extension is one of `extensions`.

    Extensions are given without the leading dot and matched case-sensitively.
    Files come in pre-order traversal order; sibling order is unspecified.

    Args:
        root: Directory to walk. A missing root returns an empty list.
        extensions: A single extension or an iterable of extensions, e.g. ["java", "txt"].

    Returns:
        list[Path]: Matching files, never directories.

    Examples:
        >>> list_files("src", ["java"])
        [PosixPath('src/Main.java'), PosixPath('src/util/Helper.java')]
    """
    wanted = {extensions} if isinstance(extensions, str) else set(extensions)

    def accept(path: Path) -> bool:
        return file_extension(path.name) in wanted

    return [path for path in iter_tree(root, accept) if not path.is_dir()]


def list_file_paths(
        root: str | os.PathLike[str],
        extensions: str | Iterable[str],
) -> list[str]:
    """
    Absolute path strings of the files list_files() finds.

    Paths are made absolute without resolving symbolic links.
    """
    return [os.path.abspath(path) for path in list_files(root, extensions)]


def list_file_urls(
        root: str | os.PathLike[str],
        extensions: str | Iterable[str],
) -> list[str]:
    """
    `file://` URLs of the files list_files() finds.

    Raises:
        MalformedResourceError: If a path cannot be expressed as a URL.

    Examples:
        >>> list_file_urls("/srv/app", "txt")
        ['file:///srv/app/notes.txt']
    """
    urls = []
    for path in list_files(root, extensions):
        try:
            urls.append(path.absolute().as_uri())
        except ValueError as exc:
            raise MalformedResourceError(f"Cannot convert path to URL: {path}") from exc
    return urls


def check_directory(path: str | os.PathLike[str], kind: str = "target") -> Path:
    """
    Ensure a directory exists, creating it and any missing parents.

    Args:
        path: Directory to prepare.
        kind: Role of the directory, used in error messages (e.g. "output", "cache").

    Returns:
        Path: The directory path.

    Raises:
        DirectoryCreationError: If the directory cannot be created, or the path exists
            but is not a directory.

    Examples:
        >>> check_directory("build/reports", kind="report")
        PosixPath('build/reports')
    """
    directory = Path(path)

    if not directory.exists():
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationError(
                f'Could not create {kind} directory: "{directory.absolute()}"'
            ) from exc
        log.debug("created %s directory: %s", kind, directory)

    if not directory.is_dir():
        raise DirectoryCreationError(
            f'Designated {kind} directory is not a directory: "{directory.absolute()}"'
        )

    return directory


def delete_dir(path: str | os.PathLike[str]) -> bool:
    """
    Delete a directory with all contained files and subdirectories.

    Returns:
        bool: True when the directory was deleted or did not exist. False when path is
            a symlink or not a directory, or when anything inside it (or the directory itself)
            could not be deleted.

    Examples:
        >>> delete_dir("/tmp/build")
        True
    """
    dir_path = Path(path)

    if not dir_path.exists():
        return True
    if not dir_path.is_dir() or dir_path.is_symlink():
        return False

    result = delete_dir_contents(dir_path)
    try:
        dir_path.rmdir()
    except OSError as exc:
        log.debug("cannot delete directory %s: %s", dir_path, exc)
        result = False
    return result


def delete_dir_contents(path: str | os.PathLike[str]) -> bool:
    """
    Remove all contents from a directory, leaving the directory itself in place.

    Subdirectories are deleted recursively; symlinks are unlinked, never followed.

    Returns:
        bool: True if everything was deleted. False when path is missing, is not a
            directory, cannot be listed, or when any entry could not be deleted.
            Deletion continues past failing entries.
    """
    dir_path = Path(path)

    if not dir_path.exists() or not dir_path.is_dir():
        return False

    try:
        items = list(dir_path.iterdir())
    except OSError as exc:
        log.debug("cannot list directory %s: %s", dir_path, exc)
        return False

    result = True
    for item in items:
        if item.is_dir() and not item.is_symlink():
            if not delete_dir(item):
                result = False
            continue
        try:
            item.unlink()
        except OSError as exc:
            log.debug("cannot delete %s: %s", item, exc)
            result = False
    return result
